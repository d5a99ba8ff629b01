# ============================================================
# 📦 src/route_planning/logs/logging_config.py
# ============================================================

import sys
from typing import Optional

from loguru import logger

FORMATO_CONSOLE = "<green>{time:HH:mm:ss}</green> | <level>{message}</level>"
FORMATO_ARQUIVO = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Substitui o sink padrão do loguru por um sink colorido no stdout e,
    opcionalmente, um arquivo com rotação.
    """
    logger.remove()
    logger.add(sys.stdout, colorize=True, level=level, format=FORMATO_CONSOLE)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format=FORMATO_ARQUIVO,
            rotation="10 MB",
            retention="14 days",
            encoding="utf-8",
        )

    logger.debug(f"🔧 Logs configurados (nível={level}, arquivo={log_file or '-'})")
