"""
Configuración de logging del paquete.

Los módulos usan logging.getLogger(__name__); aquí solo se instala el
handler de Rich sobre el logger raíz del paquete.
"""

import logging
import os
from typing import Optional, Union

from rich.logging import RichHandler

from adminform.cli.theme import get_console

PACKAGE_LOGGER = "adminform"


def get_log_level_from_env(default: int = logging.WARNING) -> int:
    """Nivel de log desde ADMINFORM_LOG_LEVEL (nombre o número)."""
    raw = os.environ.get("ADMINFORM_LOG_LEVEL", "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Configura el logger del paquete con salida Rich.

    Es idempotente: llamadas repetidas solo ajustan el nivel.

    Args:
        level: Nivel explícito; si es None se usa el entorno

    Returns:
        Logger raíz del paquete
    """
    if level is None:
        resolved = get_log_level_from_env()
    elif isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Nivel de log inválido: {level}")
    else:
        resolved = level

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolved)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=get_console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
