#src/route_planning/api/routes.py

# ============================================================
# 📦 route_planning/api/routes.py | Planejamento de visitas
# ============================================================

from datetime import datetime
from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from route_planning.application.candidate_set_builder import suggest_by_neighborhoods, suggest_by_radius
from route_planning.application.route_presenter import montar_resumo_rota
from route_planning.config.settings import Settings, carregar_settings
from route_planning.domain.entities import SugestaoVisita
from route_planning.domain.exceptions import (
    PolylineDecodingError,
    ResponseSchemaError,
    RouteOptimizationError,
)
from route_planning.domain.polyline_codec import decode_polyline
from route_planning.infrastructure.route_optimization_client import RouteOptimizationClient
from route_planning.infrastructure.schemas import ClienteSchema, VendaSchema, garantir_fuso

router = APIRouter()


@lru_cache
def get_settings() -> Settings:
    return carregar_settings()


def get_optimizer(request: Request, settings: Settings = Depends(get_settings)) -> RouteOptimizationClient:
    # repassa o token do chamador ao backend
    auth = request.headers.get("Authorization", "")
    token = auth.replace("Bearer ", "").strip() or settings.api_token
    return RouteOptimizationClient(settings.api_url, token=token, timeout=settings.http_timeout_s)


# ============================================================
# 📌 Dados enviados pelo frontend
# ============================================================
class _PlanningRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    clientes: List[ClienteSchema]
    vendas: List[VendaSchema] = Field(default_factory=list)
    agora: Optional[datetime] = None

    @field_validator("agora")
    @classmethod
    def _agora_com_fuso(cls, v):
        return garantir_fuso(v)


class SugestaoRaioRequest(_PlanningRequest):
    cliente_base_id: int = Field(alias="clienteBaseId")
    raio_km: Optional[float] = Field(default=None, alias="raioKm", gt=0)


class SugestaoBairrosRequest(_PlanningRequest):
    bairro_ids: List[int] = Field(alias="bairroIds")


class PolylineRequest(BaseModel):
    polyline: str


class OtimizarRotaRequest(BaseModel):
    origem: ClienteSchema
    destinos: List[ClienteSchema]


def _sugestao_para_dict(sugestao: SugestaoVisita) -> dict:
    analise = sugestao.analise
    return {
        "data_sugerida": analise.data_sugerida.isoformat(),
        "media_dias_ate_compra": round(analise.media_dias_ate_compra, 2),
        "total_clientes": analise.total_clientes,
        "total_analisados": analise.total_analisados,
        "cliente_base_id": sugestao.cliente_base.id if sugestao.cliente_base else None,
        "clientes": [
            {"id": c.id, "nome": c.nome, "lat": c.latitude, "lon": c.longitude, "bairro_id": c.bairro_id}
            for c in sugestao.clientes
        ],
        "projecoes": [
            {
                "cliente_id": p.cliente.id,
                "data_prevista": p.data_prevista.isoformat(),
                "dias_ate_compra": round(p.dias_ate_compra, 2),
            }
            for p in analise.projecoes
        ],
    }


# ============================================================
# 🧪 Health check
# ============================================================
@router.get("/health")
def health_check():
    return {"status": "ok", "service": "route_planning"}


# ============================================================
# 🎯 POST /planning/radius | sugestão por raio
# ============================================================
@router.post("/radius")
def sugerir_por_raio(body: SugestaoRaioRequest, settings: Settings = Depends(get_settings)):
    clientes = [c.to_entity() for c in body.clientes]
    base = next((c for c in clientes if c.id == body.cliente_base_id), None)
    if base is None:
        raise HTTPException(status_code=404, detail=f"Cliente base {body.cliente_base_id} não encontrado.")

    raio = body.raio_km if body.raio_km is not None else settings.raio_padrao_km
    sugestao = suggest_by_radius(
        base, clientes, [v.to_entity() for v in body.vendas], raio,
        agora=body.agora, dias_padrao=settings.dias_padrao_sem_historico,
    )
    resposta = _sugestao_para_dict(sugestao)
    resposta["raio_km"] = raio
    return resposta


# ============================================================
# 🗺️ POST /planning/neighborhoods | sugestão por bairros
# ============================================================
@router.post("/neighborhoods")
def sugerir_por_bairros(body: SugestaoBairrosRequest, settings: Settings = Depends(get_settings)):
    if not body.bairro_ids:
        raise HTTPException(status_code=400, detail="Esta rota não possui bairros cadastrados.")

    sugestao = suggest_by_neighborhoods(
        body.bairro_ids,
        [c.to_entity() for c in body.clientes],
        [v.to_entity() for v in body.vendas],
        agora=body.agora, dias_padrao=settings.dias_padrao_sem_historico,
    )
    return _sugestao_para_dict(sugestao)


# ============================================================
# 🧵 POST /planning/polyline/decode
# ============================================================
@router.post("/polyline/decode")
def decodificar_polyline(body: PolylineRequest):
    try:
        coords = decode_polyline(body.polyline)
    except PolylineDecodingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"rota_coord": [{"lat": c.latitude, "lon": c.longitude} for c in coords]}


# ============================================================
# 🚦 POST /planning/optimize | repassa ao backend
# ============================================================
@router.post("/optimize")
def otimizar_rota(body: OtimizarRotaRequest, optimizer: RouteOptimizationClient = Depends(get_optimizer)):
    try:
        rota = optimizer.optimize(body.origem.to_entity(), [d.to_entity() for d in body.destinos])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (RouteOptimizationError, ResponseSchemaError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    try:
        resumo = montar_resumo_rota(rota)
    except PolylineDecodingError as e:
        logger.error(f"❌ Polyline inválida recebida do backend: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    resumo["polyline"] = rota.polyline
    return resumo
