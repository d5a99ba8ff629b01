# tests/conftest.py

from datetime import datetime

import pytest

from route_planning.domain.entities import Cliente, Venda

POLYLINE_GOOGLE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_invalido=False):
        self.status_code = status_code
        self._payload = payload
        self._json_invalido = json_invalido

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json_invalido:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Substitui requests.Session registrando as chamadas feitas."""

    def __init__(self, respostas=None, erro=None):
        self.respostas = respostas or {}
        self.erro = erro
        self.chamadas = []

    def _responder(self, metodo, url, **kwargs):
        self.chamadas.append({"metodo": metodo, "url": url, **kwargs})
        if self.erro:
            raise self.erro
        for sufixo, resposta in self.respostas.items():
            if url.endswith(sufixo):
                return resposta
        return FakeResponse(404, {"message": "not found"})

    def get(self, url, **kwargs):
        return self._responder("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._responder("POST", url, **kwargs)


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def polyline_google():
    return POLYLINE_GOOGLE


@pytest.fixture
def venda():
    """Fábrica de vendas: venda(cliente_id, datetime, status=...)."""
    contador = {"id": 0}

    def _venda(cliente_id: int, data: datetime, status: str = "CONCLUIDA") -> Venda:
        contador["id"] += 1
        return Venda(id=contador["id"], cliente_id=cliente_id, data=data, valor_total=100.0, status=status)

    return _venda


@pytest.fixture
def clientes_fortaleza():
    # base no centro de Fortaleza/CE e vizinhos a distâncias variadas
    return [
        Cliente(id=1, nome="Mercadinho Centro", latitude=-3.7319, longitude=-38.5267, bairro_id=10),
        Cliente(id=2, nome="Padaria Aldeota", latitude=-3.7380, longitude=-38.4990, bairro_id=11),
        Cliente(id=3, nome="Mercearia Messejana", latitude=-3.8330, longitude=-38.4930, bairro_id=12),
        Cliente(id=4, nome="Sem Geo", latitude=None, longitude=None, bairro_id=10),
        Cliente(id=5, nome="Caucaia", latitude=-3.7360, longitude=-38.6530, bairro_id=None),
    ]
