# =====================================================
# ⚙️ src/route_planning/config/settings.py
# =====================================================

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    api_url: str
    api_token: Optional[str] = None
    http_timeout_s: float = 15.0
    raio_padrao_km: float = 20.0
    dias_padrao_sem_historico: float = 7.0
    log_level: str = "INFO"


def carregar_settings(env_file: Optional[str] = None) -> Settings:
    """
    Lê a configuração do ambiente (e do .env, se existir).
    Os valores são injetados nos clientes HTTP e serviços na construção.
    """
    load_dotenv(env_file)

    return Settings(
        api_url=os.getenv("API_URL", "http://localhost:3000").rstrip("/"),
        api_token=os.getenv("API_TOKEN") or None,
        http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", "15")),
        raio_padrao_km=float(os.getenv("RAIO_PADRAO_KM", "20")),
        dias_padrao_sem_historico=float(os.getenv("DIAS_PADRAO_SEM_HISTORICO", "7")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
