# ============================================================
# 📦 src/route_planning/application/route_presenter.py
# ============================================================

import math
from typing import Any, Dict

from route_planning.domain.entities import RotaOtimizada
from route_planning.domain.polyline_codec import decode_polyline


def montar_resumo_rota(rota: RotaOtimizada) -> Dict[str, Any]:
    """
    Converte o resultado bruto da otimização no formato usado pelo mapa:
    distância em km (1 casa), tempo em minutos, trajeto decodificado
    e a sequência de visita.
    """
    coords = decode_polyline(rota.polyline)

    return {
        "distancia_km": round(rota.distancia_total_m / 1000, 1),
        "tempo_min": int(math.floor(rota.duracao_total_s / 60 + 0.5)),
        "rota_coord": [{"lat": c.latitude, "lon": c.longitude} for c in coords],
        "sequencia": [
            {"ordem": i + 1, "cliente_id": c.id, "nome": c.nome, "lat": c.latitude, "lon": c.longitude}
            for i, c in enumerate(rota.clientes_ordenados)
        ],
    }
