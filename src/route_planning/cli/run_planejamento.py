#src/route_planning/cli/run_planejamento.py

# ============================================================
# 📦 src/route_planning/cli/run_planejamento.py
# ============================================================

import argparse
import json
import sys

from loguru import logger

from route_planning.application.route_presenter import montar_resumo_rota
from route_planning.application.visit_planning_service import VisitPlanningService
from route_planning.config.settings import carregar_settings
from route_planning.domain.entities import SugestaoVisita
from route_planning.domain.exceptions import RoutePlanningError
from route_planning.domain.polyline_codec import decode_polyline
from route_planning.logs.logging_config import setup_logging
from route_planning.reporting.exporters.csv_exporter import CSVExporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Planejamento de visitas: sugestão de data por recompra e otimização de rota."
    )
    parser.add_argument("--env", type=str, default=None, help="Arquivo .env alternativo")
    sub = parser.add_subparsers(dest="comando", required=True)

    # ======================================================
    # 🎯 Sugestão por raio
    # ======================================================
    p_raio = sub.add_parser("raio", help="Sugere visita aos clientes próximos de um cliente base")
    p_raio.add_argument("--cliente", type=int, required=True, help="ID do cliente base")
    p_raio.add_argument("--raio", type=float, default=None, help="Raio em km (padrão: RAIO_PADRAO_KM)")
    p_raio.add_argument("--csv", type=str, default=None, help="Arquivo ou diretório de saída CSV")

    # ======================================================
    # 🗺️ Sugestão por rota cadastrada
    # ======================================================
    p_rota = sub.add_parser("rota", help="Sugere visita aos clientes dos bairros de uma rota cadastrada")
    p_rota.add_argument("--rota", type=int, required=True, help="ID da rota cadastrada")
    p_rota.add_argument("--csv", type=str, default=None, help="Arquivo ou diretório de saída CSV")

    # ======================================================
    # 🚦 Otimização
    # ======================================================
    p_otim = sub.add_parser("otimizar", help="Otimiza a rota no backend")
    p_otim.add_argument("--origem", type=int, required=True, help="ID do cliente de origem")
    p_otim.add_argument("--destinos", type=int, nargs="+", required=True, help="IDs dos clientes a visitar")

    # ======================================================
    # 🧵 Decodificação
    # ======================================================
    p_dec = sub.add_parser("decodificar", help="Decodifica uma polyline em coordenadas")
    p_dec.add_argument("polyline", type=str)

    return parser


def _imprimir_sugestao(sugestao: SugestaoVisita) -> None:
    analise = sugestao.analise
    print(f"\n📅 Data sugerida: {analise.data_sugerida:%d/%m/%Y}")
    print(f"   Média de recompra: {analise.media_dias_ate_compra:.0f} dias")
    print(f"   Clientes: {analise.total_clientes} (com histórico: {analise.total_analisados})")
    for c in sugestao.clientes:
        print(f"   - [{c.id}] {c.nome}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = carregar_settings(args.env)
    setup_logging(settings.log_level)

    # ======================================================
    # Decodificação não depende do backend
    # ======================================================
    if args.comando == "decodificar":
        try:
            coords = decode_polyline(args.polyline)
        except RoutePlanningError as e:
            print(f"❌ {e}")
            return 1
        print(json.dumps([{"lat": c.latitude, "lon": c.longitude} for c in coords], indent=2))
        return 0

    service = VisitPlanningService(settings)
    logger.info(f"🚀 Planejamento ({args.comando}) | backend={settings.api_url}")

    try:
        if args.comando == "raio":
            sugestao = service.sugerir_por_raio(args.cliente, args.raio)
            _imprimir_sugestao(sugestao)
            if args.csv:
                CSVExporter.export_projecoes(sugestao, args.csv)

        elif args.comando == "rota":
            rota = service.buscar_rota(args.rota)
            sugestao = service.sugerir_por_rota(rota)
            _imprimir_sugestao(sugestao)
            if args.csv:
                CSVExporter.export_projecoes(sugestao, args.csv, nome_base=f"rota_{rota.id}")

        elif args.comando == "otimizar":
            clientes = {c.id: c for c in service.sales_api.listar_clientes()}
            faltantes = [i for i in [args.origem] + args.destinos if i not in clientes]
            if faltantes:
                print(f"❌ Clientes não encontrados: {faltantes}")
                return 1

            rota = service.otimizar(clientes[args.origem], [clientes[i] for i in args.destinos])
            resumo = montar_resumo_rota(rota)
            print(f"\n🧭 {resumo['distancia_km']} km | {resumo['tempo_min']} min | {len(resumo['rota_coord'])} pontos")
            for parada in resumo["sequencia"]:
                print(f"   {parada['ordem']:>2}. [{parada['cliente_id']}] {parada['nome']}")

    except (RoutePlanningError, LookupError, ValueError) as e:
        logger.error(f"❌ {e}")
        return 1

    print("\n🏁 Execução concluída.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
