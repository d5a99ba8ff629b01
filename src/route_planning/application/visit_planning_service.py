# ============================================================
# 📦 src/route_planning/application/visit_planning_service.py
# ============================================================

from datetime import datetime
from typing import Iterable, Optional

from loguru import logger

from route_planning.application.candidate_set_builder import suggest_by_neighborhoods, suggest_by_radius
from route_planning.config.settings import Settings
from route_planning.domain.entities import Cliente, RotaCadastrada, RotaOtimizada, SugestaoVisita
from route_planning.infrastructure.route_optimization_client import RouteOptimizationClient
from route_planning.infrastructure.sales_api_client import SalesApiClient


class VisitPlanningService:
    """
    Fluxos da tela de planejamento de visitas:
      1️⃣ sugestão por raio a partir de um cliente base
      2️⃣ sugestão pelos bairros de uma rota cadastrada
      3️⃣ otimização da rota no backend
    """

    def __init__(
        self,
        settings: Settings,
        sales_api: Optional[SalesApiClient] = None,
        optimizer: Optional[RouteOptimizationClient] = None,
    ):
        self.settings = settings
        self.sales_api = sales_api or SalesApiClient(
            settings.api_url, token=settings.api_token, timeout=settings.http_timeout_s
        )
        self.optimizer = optimizer or RouteOptimizationClient(
            settings.api_url, token=settings.api_token, timeout=settings.http_timeout_s
        )

    # ============================================================
    # 1️⃣ Raio
    # ============================================================
    def sugerir_por_raio(
        self,
        cliente_base_id: int,
        raio_km: Optional[float] = None,
        agora: Optional[datetime] = None,
    ) -> SugestaoVisita:
        raio = raio_km if raio_km is not None else self.settings.raio_padrao_km

        clientes = self.sales_api.listar_clientes()
        vendas = self.sales_api.listar_vendas()

        base = next((c for c in clientes if c.id == cliente_base_id), None)
        if base is None:
            raise LookupError(f"Cliente base {cliente_base_id} não encontrado.")

        if not base.possui_coordenadas:
            logger.warning(f"⚠️ Cliente base {base.id} sem coordenadas: apenas ele entra no grupo.")

        sugestao = suggest_by_radius(
            base, clientes, vendas, raio,
            agora=agora, dias_padrao=self.settings.dias_padrao_sem_historico,
        )
        logger.info(
            f"📍 {len(sugestao.clientes) - 1} clientes encontrados num raio de {raio} km "
            f"| data sugerida {sugestao.analise.data_sugerida:%d/%m/%Y}"
        )
        return sugestao

    # ============================================================
    # 2️⃣ Rota cadastrada (bairros)
    # ============================================================
    def sugerir_por_rota(self, rota: RotaCadastrada, agora: Optional[datetime] = None) -> SugestaoVisita:
        if not rota.bairro_ids:
            raise ValueError(f"A rota '{rota.nome}' não possui bairros cadastrados.")

        clientes = self.sales_api.listar_clientes()
        vendas = self.sales_api.listar_vendas()

        sugestao = suggest_by_neighborhoods(
            rota.bairro_ids, clientes, vendas,
            agora=agora, dias_padrao=self.settings.dias_padrao_sem_historico,
        )
        if not sugestao.clientes:
            logger.warning(f"⚠️ Nenhum cliente encontrado nos bairros da rota '{rota.nome}'.")
        else:
            logger.info(
                f"🗺️ Rota '{rota.nome}': {len(sugestao.clientes)} clientes | "
                f"média de recompra {sugestao.analise.media_dias_ate_compra:.0f} dias"
            )
        return sugestao

    def buscar_rota(self, rota_id: int) -> RotaCadastrada:
        rota = next((r for r in self.sales_api.listar_rotas_usuario() if r.id == rota_id), None)
        if rota is None:
            raise LookupError(f"Rota {rota_id} não encontrada.")
        return rota

    # ============================================================
    # 3️⃣ Otimização
    # ============================================================
    def otimizar(self, origem: Cliente, destinos: Iterable[Cliente]) -> RotaOtimizada:
        return self.optimizer.optimize(origem, destinos)
