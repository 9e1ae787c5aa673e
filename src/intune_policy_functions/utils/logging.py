from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, cast

import structlog
from loguru import logger as loguru_logger
from structlog.exceptions import DropEvent
from structlog.stdlib import BoundLogger
from structlog.typing import EventDict, Processor, WrappedLogger

from intune_policy_functions.config.settings import Settings


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message} | {extra}"
_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})


@dataclass(slots=True)
class LoggingOptions:
    level: LogLevel = "INFO"
    debug: bool = False
    rotation: str = "10 MB"
    retention: str = "7 days"
    backtrace: bool = False
    diagnose: bool = False
    log_path: Optional[Path] = None

    @classmethod
    def from_settings(cls, settings: Settings, *, debug: bool = False) -> "LoggingOptions":
        level = settings.log_level.upper()
        return cls(
            level=cast(LogLevel, level if level in _LEVELS else "INFO"),
            debug=debug,
            log_path=settings.log_file,
        )


_configured = False


def configure_logging(options: LoggingOptions | None = None) -> Path | None:
    """Send structlog events to loguru.

    stderr is always a sink because the Functions host collects it. A
    rotating file sink is added when ``log_path`` is set.
    """

    global _configured

    opts = options or LoggingOptions()
    level = "DEBUG" if opts.debug else opts.level

    loguru_logger.remove()
    loguru_logger.add(
        sys.stderr,
        level=level,
        colorize=False,
        backtrace=opts.backtrace or opts.debug,
        diagnose=opts.diagnose or opts.debug,
        format=LOG_FORMAT,
    )
    if opts.log_path is not None:
        opts.log_path.parent.mkdir(parents=True, exist_ok=True)
        loguru_logger.add(
            opts.log_path,
            level="DEBUG",
            rotation=opts.rotation,
            retention=opts.retention,
            enqueue=True,
            encoding="utf-8",
            format=LOG_FORMAT,
        )

    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level, logging.INFO)
        ),
        cache_logger_on_first_use=True,
    )

    _configured = True
    return opts.log_path


def _processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _forward_to_loguru,
    ]


def _forward_to_loguru(
    _: WrappedLogger,
    __: str,
    event_dict: EventDict,
) -> EventDict:
    level = str(event_dict.pop("level", "INFO")).upper()
    message = event_dict.pop("event", "")
    event_dict.pop("stack", None)
    extras = {key: value for key, value in event_dict.items() if value is not None}
    loguru_logger.bind(**extras).opt(depth=6).log(level, message)
    raise DropEvent


def get_logger(*initial_values: object, **initial_kw: object) -> BoundLogger:
    log = structlog.get_logger(*initial_values, **initial_kw)
    if not _configured:
        configure_logging()
    return cast(BoundLogger, log)


__all__ = [
    "LogLevel",
    "LoggingOptions",
    "configure_logging",
    "get_logger",
]
