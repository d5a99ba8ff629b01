# ============================================================
# 📦 src/route_planning/application/candidate_set_builder.py
# ============================================================

from datetime import datetime
from typing import Iterable, List, Optional

from loguru import logger

from route_planning.application.group_analyzer import DIAS_PADRAO_SEM_HISTORICO, analyze_group
from route_planning.domain.entities import Cliente, SugestaoVisita, Venda
from route_planning.domain.haversine_utils import distance_km


def _sem_duplicados(clientes: Iterable[Cliente]) -> List[Cliente]:
    vistos = set()
    unicos = []
    for c in clientes:
        if c.id in vistos:
            continue
        vistos.add(c.id)
        unicos.append(c)
    return unicos


# ============================================================
# 1️⃣ Candidatos por raio (geolocalização)
# ============================================================
def by_radius(cliente_base: Cliente, clientes: Iterable[Cliente], raio_km: float) -> List[Cliente]:
    """
    Clientes a até `raio_km` do cliente base (distância haversine, limite inclusivo).
    O cliente base entra sempre; clientes sem coordenadas ficam de fora.
    """
    clientes = list(clientes)
    selecionados: List[Cliente] = []

    if not any(c.id == cliente_base.id for c in clientes):
        selecionados.append(cliente_base)

    sem_coordenadas = 0
    for c in clientes:
        if c.id == cliente_base.id:
            selecionados.append(cliente_base)
            continue

        if not (cliente_base.possui_coordenadas and c.possui_coordenadas):
            sem_coordenadas += 1
            continue

        dist = distance_km(cliente_base.latitude, cliente_base.longitude, c.latitude, c.longitude)
        if dist <= raio_km:
            selecionados.append(c)

    if sem_coordenadas:
        logger.debug(f"📍 {sem_coordenadas} cliente(s) sem coordenadas ignorados na busca por raio.")

    return _sem_duplicados(selecionados)


# ============================================================
# 2️⃣ Candidatos por bairros da rota cadastrada
# ============================================================
def by_neighborhoods(bairro_ids: Iterable[int], clientes: Iterable[Cliente]) -> List[Cliente]:
    bairros = set(bairro_ids)
    return _sem_duplicados(
        c for c in clientes if c.bairro_id is not None and c.bairro_id in bairros
    )


# ============================================================
# 🧠 Sugestões completas (candidatos + análise do grupo)
# ============================================================
def suggest_by_radius(
    cliente_base: Cliente,
    clientes: Iterable[Cliente],
    vendas: Iterable[Venda],
    raio_km: float,
    agora: Optional[datetime] = None,
    dias_padrao: float = DIAS_PADRAO_SEM_HISTORICO,
) -> SugestaoVisita:
    candidatos = by_radius(cliente_base, clientes, raio_km)
    analise = analyze_group(candidatos, vendas, agora=agora, dias_padrao=dias_padrao)

    logger.info(
        f"🎯 Sugestão por raio | base={cliente_base.id} | raio={raio_km} km | "
        f"candidatos={len(candidatos)} | data={analise.data_sugerida:%d/%m/%Y}"
    )
    return SugestaoVisita(analise=analise, clientes=candidatos, cliente_base=cliente_base)


def suggest_by_neighborhoods(
    bairro_ids: Iterable[int],
    clientes: Iterable[Cliente],
    vendas: Iterable[Venda],
    agora: Optional[datetime] = None,
    dias_padrao: float = DIAS_PADRAO_SEM_HISTORICO,
) -> SugestaoVisita:
    bairro_ids = list(bairro_ids)
    candidatos = by_neighborhoods(bairro_ids, clientes)
    analise = analyze_group(candidatos, vendas, agora=agora, dias_padrao=dias_padrao)

    logger.info(
        f"🗺️ Sugestão por bairros | bairros={bairro_ids} | candidatos={len(candidatos)} | "
        f"data={analise.data_sugerida:%d/%m/%Y}"
    )
    return SugestaoVisita(analise=analise, clientes=candidatos)
