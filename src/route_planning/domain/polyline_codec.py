# ============================================================
# 📦 src/route_planning/domain/polyline_codec.py
# ============================================================

from typing import List

import polyline

from route_planning.domain.entities import Coordenada
from route_planning.domain.exceptions import PolylineDecodingError

PRECISAO = 5
OFFSET_ASCII = 63
BIT_CONTINUACAO = 0x20


def _validar(encoded: str) -> None:
    """
    Valida a polyline antes de entregá-la à biblioteca:
      - todos os caracteres no alfabeto (63..126)
      - nenhum valor truncado no final
      - quantidade par de valores (cada latitude tem sua longitude)
    """
    valores = 0
    ultimo_chunk = 0

    for pos, char in enumerate(encoded):
        chunk = ord(char) - OFFSET_ASCII
        if chunk < 0 or chunk > 63:
            raise PolylineDecodingError(
                f"Caractere inválido {char!r} na posição {pos} da polyline."
            )
        if chunk < BIT_CONTINUACAO:
            valores += 1
        ultimo_chunk = chunk

    if ultimo_chunk >= BIT_CONTINUACAO:
        raise PolylineDecodingError(
            f"Polyline truncada: o último valor não termina (tamanho={len(encoded)})."
        )

    if valores % 2 != 0:
        raise PolylineDecodingError(
            f"Polyline incompleta: {valores} valores codificados, esperado número par (lat/lon)."
        )


def decode_polyline(encoded: str) -> List[Coordenada]:
    """
    Decodifica uma polyline no formato Google (precisão 5) em uma lista
    ordenada de coordenadas (lat, lon).

    Levanta PolylineDecodingError se a entrada estiver malformada.
    """
    if encoded is None:
        raise PolylineDecodingError("Polyline ausente.")

    _validar(encoded)

    try:
        pontos = polyline.decode(encoded, PRECISAO)
    except (IndexError, ValueError) as e:
        raise PolylineDecodingError(f"Falha ao decodificar polyline: {e}") from e

    return [Coordenada(lat, lon) for lat, lon in pontos]
