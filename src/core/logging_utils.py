"""Logging de va (stdlib logging + Rich).

Todo va a stderr: stdout pertenece al programa lanzado.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMES = ("core", "adapters", "cli")


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Instala un `RichHandler` en stderr para los paquetes de va."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False
