"""Logging helpers shared by every capcue module."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = logging.INFO

_LOGGING_CONFIGURED = False
_OWNED_HANDLERS: list[logging.Handler] = []


def _resolve_level(level: str | int | None) -> int:
    """Resolves an explicit level, then LOG_LEVEL, then the default."""
    candidate: str | int | None = level
    if candidate is None:
        candidate = os.getenv("LOG_LEVEL")
    if candidate is None:
        return DEFAULT_LOG_LEVEL
    if isinstance(candidate, int):
        return candidate
    resolved = logging.getLevelName(candidate.strip().upper())
    if isinstance(resolved, int):
        return resolved
    return DEFAULT_LOG_LEVEL


def configure_logging(level: str | int | None = None) -> int:
    """Configures the root logger and returns the applied level."""
    global _LOGGING_CONFIGURED

    resolved_level = _resolve_level(level)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT, level=resolved_level)
        _OWNED_HANDLERS[:] = root_logger.handlers
    root_logger.setLevel(resolved_level)
    # Handlers installed by the host (test runners, applications) keep their levels.
    for handler in _OWNED_HANDLERS:
        handler.setLevel(resolved_level)
    _LOGGING_CONFIGURED = True
    return resolved_level


def get_logger(name: str, level: str | int | None = None) -> logging.Logger:
    """Returns a named logger, configuring logging on first use."""
    if level is not None or not _LOGGING_CONFIGURED:
        configure_logging(level)
    return logging.getLogger(name)
