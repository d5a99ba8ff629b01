# ==========================================================
# 📦 src/route_planning/domain/entities.py
# ==========================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, NamedTuple, Optional


STATUS_CANCELADOS = {"CANCELADA", "CANCELADO"}


@dataclass(frozen=True)
class Cliente:
    """Cliente (PDV) visitado pelo vendedor."""
    id: int
    nome: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    bairro_id: Optional[int] = None
    status: str = "ATIVO"

    @property
    def possui_coordenadas(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class Venda:
    """Venda (pedido) realizada para um cliente."""
    id: int
    cliente_id: int
    data: datetime
    valor_total: float = 0.0
    status: str = "CONCLUIDA"

    @property
    def cancelada(self) -> bool:
        return (self.status or "").upper() in STATUS_CANCELADOS


class Coordenada(NamedTuple):
    latitude: float
    longitude: float


# ==========================================================
# 📈 Projeções e análise de grupo
# ==========================================================
@dataclass(frozen=True)
class ProjecaoCompra:
    cliente: Cliente
    data_prevista: datetime
    dias_ate_compra: float  # negativo = compra atrasada


@dataclass
class AnaliseGrupo:
    data_sugerida: datetime
    media_dias_ate_compra: float
    total_clientes: int
    total_analisados: int  # clientes com histórico suficiente
    projecoes: List[ProjecaoCompra] = field(default_factory=list)


@dataclass
class SugestaoVisita:
    """
    Resultado entregue à tela de planejamento:
    a análise do grupo junto com a lista de clientes candidatos.
    """
    analise: AnaliseGrupo
    clientes: List[Cliente]
    cliente_base: Optional[Cliente] = None


# ==========================================================
# 🗺️ Rotas
# ==========================================================
@dataclass(frozen=True)
class RotaCadastrada:
    """Rota salva pelo usuário: conjunto nomeado de bairros."""
    id: int
    nome: str
    bairro_ids: List[int] = field(default_factory=list)


@dataclass
class RotaOtimizada:
    distancia_total_m: float
    duracao_total_s: float
    polyline: str
    clientes_ordenados: List[Cliente] = field(default_factory=list)
