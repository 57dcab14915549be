"""Structured logging (structlog).

Why a service around structlog:
- The client is a library: logging stays silent unless the caller opts in.
- Events are named by action (authorization, fetch, post, deserialize) so
  they can be filtered downstream.
- Logging must never change control flow; a broken sink is ignored.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Any

import structlog


class LogAction(str, Enum):
    AUTHORIZATION = "authorization"
    FETCH = "fetch"
    POST = "post"
    DESERIALIZE = "deserialize"
    GUEST_CREDENTIAL = "guest_credential"


def _normalize_log_level(level: str | None) -> int:
    normalized = (level or "INFO").strip().upper()
    return logging._nameToLevel.get(normalized, logging.INFO)


def configure_logging(level: str | None = "INFO", *, json_output: bool = False) -> None:
    """Configure structlog processors for the process.

    Console rendering by default; JSON lines when `json_output` is set.
    """

    resolved_level = _normalize_log_level(level)
    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


class LogService:
    """Emits action events through structlog when enabled."""

    def __init__(self, enabled: bool = False, logger: Any = None) -> None:
        self._enabled = enabled
        self._logger = logger or structlog.get_logger("xtract")

    @property
    def enabled(self) -> bool:
        return self._enabled

    def log(self, action: LogAction, **details: Any) -> None:
        if not self._enabled:
            return
        try:
            self._logger.info(action.value, **details)
        except Exception:  # pragma: no cover
            return
