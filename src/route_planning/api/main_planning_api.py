#src/route_planning/api/main_planning_api.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
import uvicorn

from route_planning.api.routes import router, get_settings
from route_planning.logs.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(get_settings().log_level)
    logger.info("🚀 Route Planning API iniciada.")
    yield
    logger.info("🛑 Route Planning API encerrada.")


app = FastAPI(
    title="Route Planning API",
    version="1.0.0",
    description="Previsão de recompra e planejamento de visitas",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/planning", tags=["Planejamento"])


if __name__ == "__main__":
    uvicorn.run(
        "route_planning.api.main_planning_api:app",
        host="0.0.0.0",
        port=8010,
        reload=True
    )
