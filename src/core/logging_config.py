"""Configuración de logging del proyecto.

Un único logger "geozonas" con salida a consola y, opcionalmente, a archivo.
Los módulos usan hijos ("geozonas.search", "geozonas.zone_loader", ...) que
propagan hasta acá.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "geozonas"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(level: str = "INFO", log_file: Path | None = None) -> logging.Logger:
    # Los módulos loguean en hijos "geozonas.<módulo>"; los handlers viven acá.
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    # Avoid duplicate handlers on re-import (tests, notebooks, restarts)
    if not logger.handlers:
        fmt = logging.Formatter(LOG_FORMAT)

        sh = logging.StreamHandler()
        sh.setFormatter(fmt)
        logger.addHandler(sh)

        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(fmt)
            logger.addHandler(fh)

    return logger
