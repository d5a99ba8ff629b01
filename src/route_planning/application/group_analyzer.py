# ============================================================
# 📦 src/route_planning/application/group_analyzer.py
# ============================================================

import math
from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from route_planning.application.purchase_cycle_estimator import (
    SEGUNDOS_POR_DIA,
    estimate_next_purchase,
)
from route_planning.domain.entities import AnaliseGrupo, Cliente, ProjecaoCompra, Venda

DIAS_PADRAO_SEM_HISTORICO = 7.0


def agrupar_vendas_por_cliente(vendas: Iterable[Venda]) -> Dict[int, List[Venda]]:
    por_cliente: Dict[int, List[Venda]] = defaultdict(list)
    for venda in vendas:
        por_cliente[venda.cliente_id].append(venda)
    return por_cliente


def alinhar_fusos(vendas: List[Venda], agora: Optional[datetime]) -> Tuple[List[Venda], datetime]:
    """
    Coloca vendas e `agora` na mesma referência de fuso.
    Datas sem fuso assumem o fuso da primeira venda que tiver um
    (ou o de `agora`, quando só ele tiver).
    """
    fuso = next((v.data.tzinfo for v in vendas if v.data.tzinfo), None)
    if fuso is None and agora is not None:
        fuso = agora.tzinfo

    if agora is None:
        agora = datetime.now(fuso)
    elif agora.tzinfo is None and fuso is not None:
        agora = agora.replace(tzinfo=fuso)

    if fuso is not None:
        vendas = [
            v if v.data.tzinfo else replace(v, data=v.data.replace(tzinfo=fuso))
            for v in vendas
        ]
    return vendas, agora


def analyze_group(
    clientes: Iterable[Cliente],
    vendas: Iterable[Venda],
    agora: Optional[datetime] = None,
    dias_padrao: float = DIAS_PADRAO_SEM_HISTORICO,
    ignorar_canceladas: bool = True,
) -> AnaliseGrupo:
    """
    Agrega as projeções de recompra de um grupo de clientes e sugere
    a melhor data de visita.

    - Clientes sem histórico suficiente contam em total_clientes, mas não
      entram na média.
    - Sem nenhum cliente analisado, a média cai para `dias_padrao` (7 dias).
    - A data sugerida nunca fica no passado: média negativa vira 0 dias.
    """
    clientes = list(clientes)
    vendas, agora = alinhar_fusos(list(vendas), agora)

    por_cliente = agrupar_vendas_por_cliente(vendas)
    projecoes: List[ProjecaoCompra] = []

    for cliente in clientes:
        data_prevista = estimate_next_purchase(
            por_cliente.get(cliente.id, []),
            ignorar_canceladas=ignorar_canceladas,
        )
        if data_prevista is None:
            continue

        dias = (data_prevista - agora).total_seconds() / SEGUNDOS_POR_DIA
        projecoes.append(ProjecaoCompra(cliente=cliente, data_prevista=data_prevista, dias_ate_compra=dias))

    if projecoes:
        media = sum(p.dias_ate_compra for p in projecoes) / len(projecoes)
    else:
        media = dias_padrao

    data_sugerida = agora + timedelta(days=max(0, math.ceil(media)))

    logger.debug(
        f"📊 Grupo analisado | clientes={len(clientes)} | com histórico={len(projecoes)} | "
        f"média={media:.1f} dias | sugerida={data_sugerida:%d/%m/%Y}"
    )

    return AnaliseGrupo(
        data_sugerida=data_sugerida,
        media_dias_ate_compra=media,
        total_clientes=len(clientes),
        total_analisados=len(projecoes),
        projecoes=projecoes,
    )
