# ==========================================================
# 📦 src/route_planning/domain/exceptions.py
# ==========================================================

from typing import Optional


class RoutePlanningError(Exception):
    """Erro base do planejamento de rotas."""


class PolylineDecodingError(RoutePlanningError, ValueError):
    """Polyline codificada malformada (truncada ou com caracteres inválidos)."""


class ResponseSchemaError(RoutePlanningError):
    """Resposta do backend não corresponde ao formato esperado."""


class RouteOptimizationError(RoutePlanningError):
    """Falha de rede ou status HTTP de erro ao otimizar a rota."""

    def __init__(self, mensagem: str, status_code: Optional[int] = None):
        super().__init__(mensagem)
        self.status_code = status_code


class SalesApiError(RoutePlanningError):
    """Falha ao buscar clientes, vendas ou rotas no backend."""

    def __init__(self, mensagem: str, status_code: Optional[int] = None):
        super().__init__(mensagem)
        self.status_code = status_code
