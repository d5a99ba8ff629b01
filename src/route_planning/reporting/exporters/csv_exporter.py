#src/route_planning/reporting/exporters/csv_exporter.py

import os
from datetime import datetime
from typing import Optional

import pandas as pd
from loguru import logger

from route_planning.domain.entities import SugestaoVisita


class CSVExporter:
    """
    Exporta a sugestão de visita (um cliente por linha) em CSV compatível com Excel.
    """

    @staticmethod
    def to_dataframe(sugestao: SugestaoVisita) -> pd.DataFrame:
        projecoes = {p.cliente.id: p for p in sugestao.analise.projecoes}

        linhas = []
        for c in sugestao.clientes:
            p = projecoes.get(c.id)
            linhas.append({
                "cliente_id": c.id,
                "nome": c.nome,
                "bairro_id": c.bairro_id,
                "latitude": c.latitude,
                "longitude": c.longitude,
                "data_prevista": p.data_prevista.strftime("%d/%m/%Y") if p else None,
                "dias_ate_compra": p.dias_ate_compra if p else None,
            })

        return pd.DataFrame(
            linhas,
            columns=["cliente_id", "nome", "bairro_id", "latitude", "longitude", "data_prevista", "dias_ate_compra"],
        )

    @staticmethod
    def export_projecoes(
        sugestao: SugestaoVisita,
        output_dir: str = "output/reports",
        nome_base: str = "sugestao_visita",
    ) -> Optional[str]:
        df = CSVExporter.to_dataframe(sugestao)
        if df.empty:
            logger.warning("⚠️ Nenhum cliente candidato, nada a exportar.")
            return None

        # =========================================================
        # Arquivo explícito ou diretório com timestamp
        # =========================================================
        if output_dir.endswith(".csv"):
            output_path = output_dir
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        else:
            os.makedirs(output_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = os.path.join(output_dir, f"{nome_base}_{timestamp}.csv")

        df["dias_ate_compra"] = pd.to_numeric(df["dias_ate_compra"], errors="coerce").round(2)

        df.to_csv(
            output_path,
            index=False,
            sep=";",
            encoding="utf-8-sig",
        )

        logger.success(
            f"✅ Sugestão exportada em {output_path} "
            f"(data sugerida {sugestao.analise.data_sugerida:%d/%m/%Y})"
        )
        return output_path
