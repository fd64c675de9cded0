"""JSON log output for services built on api-commons.

One JSON object per line. Every entry has ``timestamp``, ``level``,
``logger``, ``message`` and ``request_id``; the request pipeline and the
exception handler attach ``method``/``path``/``status_code``,
``duration_ms``/``threshold_ms`` and ``error_code`` through ``extra``.

JWT secrets, bearer tokens and passwords are redacted from messages and
tracebacks before they are written.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, TextIO

# Set by RequestIdMiddleware for the duration of a request.
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

REDACTED = "[REDACTED]"

_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

_SECRET_ASSIGNMENT_RE = re.compile(
    r"(jwt.secret|secret|password|token|credential|authorization)\s*[=:]\s*\S+",
    re.IGNORECASE,
)
_BEARER_RE = re.compile(r"Bearer\s+[A-Za-z0-9\-_.=]+", re.IGNORECASE)

CONTEXT_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "threshold_ms",
    "error_code",
)


def redact(text: str) -> str:
    """Replace bearer tokens and ``key=value`` secrets with ``[REDACTED]``."""
    text = _BEARER_RE.sub(f"Bearer {REDACTED}", text)
    return _SECRET_ASSIGNMENT_RE.sub(REDACTED, text)


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    ``request_id`` is taken from the record when a caller passed it in
    ``extra``, otherwise from the current request context.
    """

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "request_id", None) or request_id_var.get()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact(record.getMessage()),
            "request_id": request_id,
        }
        entry.update(
            (name, getattr(record, name))
            for name in CONTEXT_FIELDS
            if hasattr(record, name)
        )
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = redact(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Send all records to *stream* (stdout by default) as JSON lines.

    Unknown level names fall back to INFO. Handlers already on the root
    logger are replaced.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    name = level.upper()
    root.setLevel(name if name in _LEVELS else "INFO")
