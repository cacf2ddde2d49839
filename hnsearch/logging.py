"""Structured logging helpers."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import Literal

import structlog

LogFormat = Literal["json", "console"]


def configure_logging(level: int = logging.INFO, *, log_format: LogFormat = "json") -> None:
    """Route structlog and stdlib logging to stdout.

    ``console`` renders human-readable lines for local runs; ``json`` is one
    object per event.
    """

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
    # aiogram logs every handled update at INFO.
    logging.getLogger("aiogram.event").setLevel(max(level, logging.WARNING))

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def chat_log_context(chat_id: int) -> AbstractContextManager:
    """Attach ``chat_id`` to every event logged while handling one update."""

    return structlog.contextvars.bound_contextvars(chat_id=chat_id)


logger = structlog.get_logger()

__all__ = ["LogFormat", "chat_log_context", "configure_logging", "logger"]
