# tests/domain/test_polyline_codec.py

import polyline
import pytest

from route_planning.domain.entities import Coordenada
from route_planning.domain.exceptions import PolylineDecodingError
from route_planning.domain.polyline_codec import decode_polyline


def test_exemplo_canonico_google(polyline_google):
    coords = decode_polyline(polyline_google)

    esperado = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
    assert len(coords) == len(esperado)
    for c, (lat, lon) in zip(coords, esperado):
        assert isinstance(c, Coordenada)
        assert c.latitude == pytest.approx(lat, abs=1e-5)
        assert c.longitude == pytest.approx(lon, abs=1e-5)


def test_ida_e_volta_com_codificador_de_referencia():
    # trajeto real (Fortaleza) com deltas positivos e negativos
    trajeto = [
        (-3.73190, -38.52670),
        (-3.73801, -38.49903),
        (-3.83302, -38.49299),
        (-3.73600, -38.65300),
        (0.0, 0.0),
        (-89.99999, 179.99999),
    ]
    encoded = polyline.encode(trajeto, 5)

    coords = decode_polyline(encoded)

    assert len(coords) == len(trajeto)
    for c, (lat, lon) in zip(coords, trajeto):
        assert c.latitude == pytest.approx(lat, abs=1e-5)
        assert c.longitude == pytest.approx(lon, abs=1e-5)

    # mesmo resultado do decodificador de referência
    referencia = polyline.decode(encoded, 5)
    assert len(referencia) == len(coords)
    for c, r in zip(coords, referencia):
        assert tuple(c) == pytest.approx(tuple(r), abs=1e-9)


def test_resultado_pode_ser_percorrido_mais_de_uma_vez(polyline_google):
    coords = decode_polyline(polyline_google)
    assert list(coords) == list(coords)


def test_string_vazia_gera_trajeto_vazio():
    assert decode_polyline("") == []


def test_polyline_truncada_falha(polyline_google):
    # remove o último caractere: a longitude final fica sem terminador
    with pytest.raises(PolylineDecodingError, match="truncada"):
        decode_polyline(polyline_google[:-1])


def test_latitude_sem_longitude_falha():
    # apenas a latitude do primeiro ponto
    with pytest.raises(PolylineDecodingError, match="par"):
        decode_polyline("_p~iF")


def test_caractere_fora_do_alfabeto_falha():
    with pytest.raises(PolylineDecodingError, match="inválido"):
        decode_polyline("_p~iF ~ps|U")


def test_erro_de_decodificacao_e_value_error():
    with pytest.raises(ValueError):
        decode_polyline("~")


def test_polyline_ausente_falha():
    with pytest.raises(PolylineDecodingError):
        decode_polyline(None)


def test_falha_da_biblioteca_vira_erro_tipado(monkeypatch, polyline_google):
    def _decode_quebrado(expression, precision=5, geojson=False):
        raise IndexError("string index out of range")

    monkeypatch.setattr(polyline, "decode", _decode_quebrado)

    with pytest.raises(PolylineDecodingError, match="Falha ao decodificar"):
        decode_polyline(polyline_google)


def test_decodificacao_usa_precisao_cinco(monkeypatch, polyline_google):
    chamadas = []
    original = polyline.decode

    def _decode_espiao(expression, precision=5, geojson=False):
        chamadas.append(precision)
        return original(expression, precision, geojson)

    monkeypatch.setattr(polyline, "decode", _decode_espiao)

    decode_polyline(polyline_google)

    assert chamadas == [5]
