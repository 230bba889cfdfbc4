"""Structured logging for Syllabus.

Two output modes:
- JSON lines for production, one object per record
- Plain text for local development

Request and correlation ids are carried in context variables set by
CorrelationMiddleware (or LogContext outside a request) and attached to
every record emitted while they are set.

Usage:
    from syllabus.observability.logging import configure_logging

    configure_logging(json_format=True, level="INFO")
    logger = logging.getLogger(__name__)
"""

from __future__ import annotations

import contextvars
import logging
import sys
from datetime import datetime, timezone
from typing import Any

import orjson

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

_CONTEXT_VARS: dict[str, contextvars.ContextVar[str]] = {
    "request_id": request_id_var,
    "correlation_id": correlation_id_var,
}

# Everything a bare LogRecord carries; anything else came in through ``extra=``
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "redis": logging.INFO,
}


def current_context() -> dict[str, str]:
    """Context ids that are set in the current task."""
    return {name: var.get() for name, var in _CONTEXT_VARS.items() if var.get()}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON object.

    Example:
        {"timestamp": "2026-03-02T09:15:04.112000+00:00", "level": "INFO",
         "logger": "syllabus.catalog.service", "message": "Deleted course 42",
         "module": "service", "function": "delete_course", "line": 151,
         "request_id": "5f0c..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        payload.update(current_context())

        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED and not key.startswith("_")
        }
        payload.update(extras)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        # default=str covers extras orjson has no native encoding for
        return orjson.dumps(payload, default=str).decode()


class ConsoleFormatter(logging.Formatter):
    """One readable line per record, with the request id appended when set."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        request_id = request_id_var.get()
        if request_id:
            line = f"{line} [req={request_id[:8]}]"
        return line


def configure_logging(json_format: bool = True, level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger.

    Replaces any handlers installed earlier, so it is safe to call again
    (uvicorn reload, tests).
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_format else ConsoleFormatter())
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    for name, logger_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(logger_level)


class LogContext:
    """Temporarily set request/correlation ids outside of an HTTP request.

    Usage:
        with LogContext(request_id="cli-invalidate"):
            logger.info("Dropping published courses snapshot")
    """

    def __init__(self, **ids: str) -> None:
        unknown = set(ids) - set(_CONTEXT_VARS)
        if unknown:
            raise TypeError(f"Unknown log context fields: {sorted(unknown)}")
        self.ids = ids
        self._tokens: list[tuple[contextvars.ContextVar[str], contextvars.Token[str]]] = []

    def __enter__(self) -> LogContext:
        for name, value in self.ids.items():
            var = _CONTEXT_VARS[name]
            self._tokens.append((var, var.set(value)))
        return self

    def __exit__(self, *exc: object) -> None:
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)
