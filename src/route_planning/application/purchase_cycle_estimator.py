# ============================================================
# 📦 src/route_planning/application/purchase_cycle_estimator.py
# ============================================================

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from route_planning.domain.entities import Venda

SEGUNDOS_POR_DIA = 86400.0
MIN_VENDAS_PARA_PROJECAO = 2


def diferenca_dias(inicio: datetime, fim: datetime, arredondar_para_cima: bool = True) -> float:
    """
    Diferença absoluta em dias entre duas datas.
    Com arredondar_para_cima, qualquer fração de dia conta como um dia inteiro.
    """
    dias = abs((fim - inicio).total_seconds()) / SEGUNDOS_POR_DIA
    return math.ceil(dias) if arredondar_para_cima else dias


def vendas_consideradas(vendas: Iterable[Venda], ignorar_canceladas: bool = True) -> List[Venda]:
    """Vendas que entram no ciclo de compra, em ordem cronológica."""
    validas = [v for v in vendas if not (ignorar_canceladas and v.cancelada)]
    return sorted(validas, key=lambda v: v.data)


def intervalo_medio_dias(
    vendas: Iterable[Venda],
    ignorar_canceladas: bool = True,
    arredondar_para_cima: bool = True,
) -> Optional[float]:
    """Média dos intervalos entre vendas consecutivas, ou None sem histórico suficiente."""
    ordenadas = vendas_consideradas(vendas, ignorar_canceladas)
    if len(ordenadas) < MIN_VENDAS_PARA_PROJECAO:
        return None

    intervalos = [
        diferenca_dias(anterior.data, atual.data, arredondar_para_cima)
        for anterior, atual in zip(ordenadas, ordenadas[1:])
    ]
    return sum(intervalos) / len(intervalos)


def estimate_next_purchase(
    vendas: Iterable[Venda],
    ignorar_canceladas: bool = True,
    arredondar_para_cima: bool = True,
) -> Optional[datetime]:
    """
    Projeta a data da próxima compra de UM cliente a partir do seu histórico.

    - Menos de 2 vendas consideradas → None (sem projeção).
    - Caso contrário: última venda + média dos intervalos entre vendas
      (deslocamento fracionário, sem novo arredondamento).
    """
    ordenadas = vendas_consideradas(vendas, ignorar_canceladas)
    media = intervalo_medio_dias(ordenadas, ignorar_canceladas=False, arredondar_para_cima=arredondar_para_cima)
    if media is None:
        return None

    return ordenadas[-1].data + timedelta(days=media)
