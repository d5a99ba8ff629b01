from route_planning.domain.entities import (
    AnaliseGrupo,
    Cliente,
    Coordenada,
    ProjecaoCompra,
    RotaCadastrada,
    RotaOtimizada,
    SugestaoVisita,
    Venda,
)
from route_planning.domain.exceptions import (
    PolylineDecodingError,
    ResponseSchemaError,
    RouteOptimizationError,
    RoutePlanningError,
    SalesApiError,
)
