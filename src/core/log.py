"""Configuración de logging.

Los módulos usan `logging.getLogger(__name__)`; aquí solo se instala un
`RichHandler` sobre stderr para que stdout quede libre para el progreso de
los clones.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> None:
    """Configura el logger raíz (idempotente)."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx loguea cada request en INFO; lo dejamos para --verbose.
    logging.getLogger("httpx").setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
