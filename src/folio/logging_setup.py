"""Centralized logging configuration for folio."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "FOLIO_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)


def _resolve_level(level: str | int | None) -> int:
    """Return the explicit level, else the one named by the environment."""
    if isinstance(level, int):
        return level
    level_name = (level or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: str | int | None = None) -> None:
    """Configure logging once with a Rich handler.

    Calling it again only adjusts the level of the handler installed the
    first time.
    """
    root_logger = logging.getLogger()

    managed_handler = next(
        (
            handler
            for handler in root_logger.handlers
            if isinstance(handler, RichHandler) and getattr(handler, "_folio_managed", False)
        ),
        None,
    )

    if managed_handler is None:
        root_logger.handlers.clear()
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._folio_managed = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    root_logger.setLevel(_resolve_level(level))

    # markdown-it logs parser internals at DEBUG.
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
    logging.captureWarnings(True)
