# tests/infrastructure/test_sales_api_client.py

from datetime import datetime, timezone

import pytest
import requests

from route_planning.domain.exceptions import ResponseSchemaError, SalesApiError
from route_planning.infrastructure.sales_api_client import SalesApiClient

CLIENTES = [
    {"id": 1, "nome": "Mercadinho", "latitude": -3.73, "longitude": -38.52, "bairroId": 10,
     "status": "ATIVO", "documento": None, "telefone": "85 9999-0000"},
    {"id": 2, "nome": "Sem Geo", "latitude": None, "longitude": None, "bairroId": 11, "status": "INATIVO"},
]

VENDAS = [
    {"id": 10, "data": "2024-05-01T12:00:00.000Z", "valorTotal": "150.00", "status": "CONCLUIDA", "clienteId": 1},
    {"id": 11, "data": "2024-05-20T08:30:00", "valorTotal": "80.50", "status": "CANCELADA", "clienteId": 1},
]

ROTAS = [
    {"id": 5, "nome": "Rota Norte", "status": "ATIVO",
     "itensRota": [{"id": 1, "bairro": {"id": 10, "nome": "Centro"}}, {"id": 2, "bairro": {"id": 11, "nome": "Aldeota"}}]},
    {"id": 6, "nome": "Rota Vazia", "status": "ATIVO"},
]


def _client(fake_session, respostas):
    session = fake_session(respostas)
    return SalesApiClient("http://api.test", token="tkn", session=session), session


def test_lista_pura_de_clientes(fake_session, fake_response):
    client, session = _client(fake_session, {"/clientes": fake_response(200, CLIENTES)})

    clientes = client.listar_clientes()

    assert [c.id for c in clientes] == [1, 2]
    assert clientes[0].bairro_id == 10
    assert clientes[0].possui_coordenadas
    assert not clientes[1].possui_coordenadas
    assert clientes[1].status == "INATIVO"
    assert session.chamadas[0]["headers"] == {"Authorization": "Bearer tkn"}


def test_envelope_data(fake_session, fake_response):
    client, _ = _client(fake_session, {"/clientes": fake_response(200, {"data": CLIENTES, "total": 2})})

    assert [c.id for c in client.listar_clientes()] == [1, 2]


def test_formato_desconhecido_e_erro_explicito(fake_session, fake_response):
    client, _ = _client(fake_session, {"/clientes": fake_response(200, {"items": CLIENTES})})

    with pytest.raises(ResponseSchemaError):
        client.listar_clientes()


def test_vendas_com_datas_e_valores(fake_session, fake_response):
    client, _ = _client(fake_session, {"/vendas": fake_response(200, VENDAS)})

    vendas = client.listar_vendas()

    assert vendas[0].data == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert vendas[0].valor_total == 150.0
    # sem fuso → UTC
    assert vendas[1].data.tzinfo is not None
    assert vendas[1].cancelada


def test_rotas_cadastradas_viram_lista_de_bairros(fake_session, fake_response):
    client, _ = _client(fake_session, {"/rotas/usuario": fake_response(200, {"data": ROTAS})})

    rotas = client.listar_rotas_usuario()

    assert rotas[0].bairro_ids == [10, 11]
    assert rotas[1].bairro_ids == []


def test_status_de_erro(fake_session, fake_response):
    client, _ = _client(fake_session, {"/vendas": fake_response(401, {"message": "Unauthorized"})})

    with pytest.raises(SalesApiError) as exc:
        client.listar_vendas()

    assert exc.value.status_code == 401


def test_falha_de_conexao(fake_session):
    session = fake_session(erro=requests.ConnectionError("dns"))
    client = SalesApiClient("http://api.test", session=session)

    with pytest.raises(SalesApiError):
        client.listar_clientes()
