"""Logging utilities tailored for sudoku generation."""

from __future__ import annotations

import logging
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Map ``"debug"``/``"INFO"``/``logging.WARNING`` style values to an int level."""

    if isinstance(level, int):
        return level
    resolved = getattr(logging, level.strip().upper(), None)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Configure root logging with a sensible formatter.

    Masking runs many reversible removal trials, so individual trials are
    logged at DEBUG and only phase summaries at INFO. Logs go to stderr by
    default so that grids printed on stdout stay clean.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "sudoku")
