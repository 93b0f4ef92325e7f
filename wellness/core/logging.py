"""Logging configuration for wellness-api.

Two output modes, picked by LOG_JSON:

  _ContainerFormatter - one human-readable line per record, tagged with
    the request id, for local development and `docker compose logs`.

  _JsonFormatter - one JSON object per line (JSON Lines) for the log
    aggregation pipeline.  Request context fields become top-level keys,
    so "every request user 42 made" is a filter rather than a regex.

The request context itself lives in two ContextVars defined here.
RequestContextMiddleware sets the request id, the identity dependency
sets the user id, and RequestContextFilter (attached to the handler, so
it sees records propagated from every module logger) copies both onto
each record.

Everything goes to stdout; the container runtime collects it.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar

# "-" outside a request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
user_id_var: ContextVar[str] = ContextVar("user_id", default="-")

_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpcore",
    "httpx",
    "sqlalchemy.engine",
)

_CONTEXT_FIELDS = (
    "request_id",
    "method",
    "path",
    "user_id",
    "status_code",
    "duration_ms",
)


class RequestContextFilter(logging.Filter):
    """Stamp request_id and user_id onto records that lack them.

    Explicit ``extra=`` values win over the ContextVars.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        if getattr(record, "user_id", None) is None:
            record.user_id = user_id_var.get()  # type: ignore[attr-defined]
        return True


class _ContainerFormatter(logging.Formatter):
    """``<time> <LEVEL> <logger> [<request id>]  <message>``.

    WARNING and above get a [filename:lineno] suffix.
    """

    _FMT = "%(asctime)s %(levelname)-8s %(name)s [%(request_id)s]  %(message)s"
    _WITH_LOCATION = _FMT + "  [%(filename)s:%(lineno)d]"

    def __init__(self) -> None:
        super().__init__(
            fmt=self._FMT,
            datefmt="%Y-%m-%dT%H:%M:%S%z",
            defaults={"request_id": "-"},
        )

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = super().formatTime(record, datefmt)
        # Milliseconds go before the +HHMM offset.
        return f"{base[:-5]}.{int(record.msecs):03d}{base[-5:]}"

    def format(self, record: logging.LogRecord) -> str:
        located = record.levelno >= logging.WARNING
        self._style._fmt = self._WITH_LOCATION if located else self._FMT
        return super().format(record)


class _JsonFormatter(logging.Formatter):
    """JSON Lines formatter.

    Context fields are only emitted when set, so startup lines (outside
    any request) stay small.
    """

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None and value != "-":
                entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Configure the root logger with a single stdout handler.

    Args:
        level_name: debug/info/warning/error (unknown values fall back to info)
        json_format: emit JSON Lines instead of the human-readable format
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
