# ============================================================
# 📦 src/route_planning/infrastructure/sales_api_client.py
# ============================================================

from typing import List, Optional

import requests
from loguru import logger

from route_planning.domain.entities import Cliente, RotaCadastrada, Venda
from route_planning.domain.exceptions import ResponseSchemaError, SalesApiError
from route_planning.infrastructure.schemas import ClienteSchema, RotaSchema, VendaSchema, parse_lista


class SalesApiClient:
    """
    Leitura de clientes, vendas e rotas cadastradas no backend REST.
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

    def _get_json(self, path: str):
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}

        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"❌ Falha de conexão em GET {path}: {e}")
            raise SalesApiError(f"Falha ao consultar {path}: {e}") from e

        if not resp.ok:
            logger.error(f"❌ GET {path} retornou HTTP {resp.status_code}")
            raise SalesApiError(f"Falha ao consultar {path} (HTTP {resp.status_code}).", status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise ResponseSchemaError(f"Resposta de {path} não é JSON válido: {e}") from e

    def listar_clientes(self) -> List[Cliente]:
        clientes = parse_lista(self._get_json("/clientes"), ClienteSchema)
        logger.debug(f"👥 {len(clientes)} clientes carregados.")
        return clientes

    def listar_vendas(self) -> List[Venda]:
        vendas = parse_lista(self._get_json("/vendas"), VendaSchema)
        logger.debug(f"🧾 {len(vendas)} vendas carregadas.")
        return vendas

    def listar_rotas_usuario(self) -> List[RotaCadastrada]:
        rotas = parse_lista(self._get_json("/rotas/usuario"), RotaSchema)
        logger.debug(f"🗺️ {len(rotas)} rotas cadastradas carregadas.")
        return rotas
