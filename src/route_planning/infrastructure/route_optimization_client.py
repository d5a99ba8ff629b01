# ============================================================
# 📦 src/route_planning/infrastructure/route_optimization_client.py
# ============================================================

from typing import Dict, Iterable, List, Optional

import requests
from loguru import logger

from route_planning.domain.entities import Cliente, RotaOtimizada
from route_planning.domain.exceptions import ResponseSchemaError, RouteOptimizationError
from route_planning.infrastructure.schemas import OtimizacaoRequest, parse_rota_otimizada

ENDPOINT_OTIMIZAR = "/rotas/otimizar"


class RouteOptimizationClient:
    """
    Cliente do endpoint de otimização de rotas do backend.

    Faz UMA chamada por otimização (sem retentativa) e devolve o resultado
    bruto: distância total (m), duração total (s), polyline codificada e a
    ordem de visita calculada pelo serviço. A decodificação da polyline
    fica a cargo da camada de apresentação.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("base_url do backend não informada.")
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    # ============================================================
    # Montagem do payload
    # ============================================================
    @staticmethod
    def montar_payload(origem: Cliente, destinos: Iterable[Cliente]) -> Dict[str, object]:
        if origem is None:
            raise ValueError("Defina um ponto de partida (origem) antes de calcular a rota.")

        cliente_ids: List[int] = []
        for d in destinos:
            if d.id == origem.id or d.id in cliente_ids:
                logger.warning(f"⚠️ Cliente {d.id} já adicionado ou é a origem, ignorado.")
                continue
            cliente_ids.append(d.id)

        if not cliente_ids:
            raise ValueError("A lista de clientes da rota está vazia.")

        return OtimizacaoRequest(origem_id=origem.id, cliente_ids=cliente_ids).model_dump(by_alias=True)

    # ============================================================
    # Chamada principal
    # ============================================================
    def optimize(self, origem: Cliente, destinos: Iterable[Cliente]) -> RotaOtimizada:
        payload = self.montar_payload(origem, destinos)
        url = f"{self.base_url}{ENDPOINT_OTIMIZAR}"

        logger.info(f"🚦 Otimizando rota | origem={payload['origemId']} | paradas={len(payload['clienteIds'])}")

        try:
            resp = self.session.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"❌ Falha de conexão ao otimizar rota: {e}")
            raise RouteOptimizationError(f"Falha ao otimizar rota: {e}") from e

        if not resp.ok:
            logger.error(f"❌ Backend recusou a otimização (HTTP {resp.status_code}).")
            raise RouteOptimizationError(
                f"Falha ao otimizar rota (HTTP {resp.status_code}).",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ResponseSchemaError(f"Resposta de otimização não é JSON válido: {e}") from e

        rota = parse_rota_otimizada(data)

        logger.success(
            f"✅ Rota otimizada | {rota.distancia_total_m / 1000:.1f} km | "
            f"{rota.duracao_total_s / 60:.0f} min | paradas={len(rota.clientes_ordenados)}"
        )
        return rota
