"""Centralised logging configuration built on loguru."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from loguru import logger

from ..config.settings import Settings, get_settings

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[command]}</cyan> | "
    "{message}"
)


def configure_logging(
    settings: Settings | None = None, level: str | None = None, *, command: str = "-"
) -> None:
    """Initialise loguru sinks according to the active settings."""

    cfg = settings or get_settings()
    effective_level = (level or cfg.logging.level).upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=effective_level,
        backtrace=False,
        diagnose=False,
        format=_LOG_FORMAT,
    )
    if cfg.logging.to_file:
        log_path = cfg.log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            rotation=cfg.logging.rotation,
            retention=cfg.logging.retention,
            format=_LOG_FORMAT,
            level=effective_level,
        )
    logger.configure(extra={"command": command})


def get_logger(**context: Any):
    """Return a contextualised logger instance."""

    return logger.bind(**context)


@contextmanager
def log_timing(step: str, *, logger_=logger):
    """Helper to log elapsed time for a block."""

    start = perf_counter()
    try:
        yield
    finally:
        logger_.debug("Step timing", step=step, seconds=round(perf_counter() - start, 6))


__all__ = ["configure_logging", "get_logger", "log_timing"]
