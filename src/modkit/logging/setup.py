"""Structured logging configuration for modkit.

:func:`configure_logging` installs one stderr handler on the ``modkit``
logger, formatting records as JSON lines or as plain text.  Records
emitted while a Flask request is active carry the request id, client
address, method, path and the authenticated identity (``auth_id``).
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modkit.config.settings import LoggingSettings

# Request context attributes and their value outside a request.
_CONTEXT_DEFAULTS: dict[str, str | None] = {
    "request_id": "-",
    "client_ip": "-",
    "auth_id": None,
    "method": None,
    "path": None,
}

# Everything a bare LogRecord already carries is not an "extra".
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__,
).union({"message", "asctime", "taskName"}, _CONTEXT_DEFAULTS)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record.

    Context attributes set to ``None`` are left out; caller extras
    (``extra={...}``) are copied verbatim and stringified when they are
    not JSON serialisable.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        record.message = record.getMessage()
        data: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }
        for key in _CONTEXT_DEFAULTS:
            value = getattr(record, key, None)
            if value is not None:
                data[key] = value
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                data[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            data["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(data, default=str)


class TextFormatter(logging.Formatter):
    """Console format: time, level, request id, client, logger, message."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s [%(request_id)s] %(client_ip)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


class RequestContextFilter(logging.Filter):
    """Copy the active Flask request context onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        for key, default in _CONTEXT_DEFAULTS.items():
            if not hasattr(record, key):
                setattr(record, key, default)

        from flask import g, has_request_context, request  # noqa: PLC0415

        if not has_request_context():
            return True

        record.request_id = getattr(g, "request_id", record.request_id)  # type: ignore[attr-defined]
        record.client_ip = request.remote_addr or record.client_ip  # type: ignore[attr-defined]
        record.method = request.method  # type: ignore[attr-defined]
        record.path = request.path  # type: ignore[attr-defined]
        auth = getattr(g, "auth", None)
        if auth is not None:
            record.auth_id = f"{auth.collection}/{auth.id}"  # type: ignore[attr-defined]
        return True


def configure_logging(settings: LoggingSettings) -> logging.Logger:
    """Install the ``modkit`` handler described by *settings*.

    Previously installed handlers are dropped, so calling this twice is
    safe.  Returns the ``modkit`` logger.
    """
    root = logging.getLogger("modkit")
    root.setLevel(getattr(logging, settings.level.upper(), logging.INFO))
    root.handlers.clear()
    root.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        StructuredFormatter() if settings.format == "json" else TextFormatter(),
    )
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)

    # Access lines stay visible even when the package logs at WARNING.
    logging.getLogger("modkit.access").setLevel(logging.INFO)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    return root
