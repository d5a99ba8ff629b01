# ============================================================
# 📦 src/route_planning/infrastructure/schemas.py
# ============================================================
# Formato JSON servido pelo backend (camelCase). Toda resposta passa por
# UM passo de validação explícito antes de virar entidade de domínio.

from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from route_planning.domain.entities import Cliente, RotaCadastrada, RotaOtimizada, Venda
from route_planning.domain.exceptions import ResponseSchemaError

T = TypeVar("T")


def garantir_fuso(v: Optional[datetime]) -> Optional[datetime]:
    # datas sem fuso são tratadas como UTC (padrão do backend)
    if v is None or v.tzinfo:
        return v
    return v.replace(tzinfo=timezone.utc)


class _BackendModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ClienteSchema(_BackendModel):
    id: int
    nome: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    bairro_id: Optional[int] = Field(default=None, alias="bairroId")
    status: str = "ATIVO"

    def to_entity(self) -> Cliente:
        return Cliente(
            id=self.id,
            nome=self.nome,
            latitude=self.latitude,
            longitude=self.longitude,
            bairro_id=self.bairro_id,
            status=self.status,
        )


class VendaSchema(_BackendModel):
    id: int
    cliente_id: int = Field(alias="clienteId")
    data: datetime
    valor_total: float = Field(default=0.0, alias="valorTotal")
    status: str = "CONCLUIDA"

    @field_validator("data")
    @classmethod
    def _data_com_fuso(cls, v: datetime) -> datetime:
        return garantir_fuso(v)

    def to_entity(self) -> Venda:
        return Venda(
            id=self.id,
            cliente_id=self.cliente_id,
            data=self.data,
            valor_total=self.valor_total,
            status=self.status,
        )


class BairroSchema(_BackendModel):
    id: int
    nome: Optional[str] = None


class ItemRotaSchema(_BackendModel):
    id: Optional[int] = None
    bairro: BairroSchema


class RotaSchema(_BackendModel):
    id: int
    nome: str
    itens_rota: List[ItemRotaSchema] = Field(default_factory=list, alias="itensRota")

    def to_entity(self) -> RotaCadastrada:
        return RotaCadastrada(
            id=self.id,
            nome=self.nome,
            bairro_ids=[item.bairro.id for item in self.itens_rota],
        )


class RotaOtimizadaSchema(_BackendModel):
    distancia_total: float = Field(alias="distanciaTotal")
    duracao_total: float = Field(alias="duracaoTotal")
    polyline: str
    clientes_ordenados: List[ClienteSchema] = Field(alias="clientesOrdenados")

    def to_entity(self) -> RotaOtimizada:
        return RotaOtimizada(
            distancia_total_m=self.distancia_total,
            duracao_total_s=self.duracao_total,
            polyline=self.polyline,
            clientes_ordenados=[c.to_entity() for c in self.clientes_ordenados],
        )


class Envelope(BaseModel, Generic[T]):
    data: List[T]


class OtimizacaoRequest(_BackendModel):
    # nomes aceitos pelo backend em /rotas/otimizar (não originId/clientIds)
    origem_id: int = Field(serialization_alias="origemId")
    cliente_ids: List[int] = Field(serialization_alias="clienteIds")


# ============================================================
# 🔎 Validação explícita das respostas
# ============================================================
def parse_lista(payload, schema) -> list:
    """
    Aceita uma lista pura ou o envelope {"data": [...]}.
    Qualquer outro formato levanta ResponseSchemaError.
    """
    adapter = TypeAdapter(Union[List[schema], Envelope[schema]])
    try:
        resultado = adapter.validate_python(payload)
    except ValidationError as e:
        raise ResponseSchemaError(
            f"Resposta inválida para {schema.__name__}: {e.error_count()} erro(s): {e.errors()[0]['msg']}"
        ) from e

    itens = resultado.data if isinstance(resultado, Envelope) else resultado
    return [item.to_entity() for item in itens]


def parse_rota_otimizada(payload) -> RotaOtimizada:
    try:
        return RotaOtimizadaSchema.model_validate(payload).to_entity()
    except ValidationError as e:
        raise ResponseSchemaError(
            f"Resposta de otimização inválida: {e.error_count()} erro(s): {e.errors()[0]['msg']}"
        ) from e
