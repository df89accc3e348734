"""Utility helpers shared across unihub modules."""

from .logging import configure_logging, get_logger, log_timing

__all__ = [
    "configure_logging",
    "get_logger",
    "log_timing",
]
