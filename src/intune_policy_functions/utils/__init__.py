"""Shared utility helpers for the Intune policy functions."""

from .logging import LoggingOptions, configure_logging, get_logger
from .sanitize import sanitize_log_message

__all__ = [
    "LoggingOptions",
    "configure_logging",
    "get_logger",
    "sanitize_log_message",
]
