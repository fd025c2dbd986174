"""JSON logging for the planner with the user's context scrubbed out.

Every line carries an ``event`` name and a ``correlation_id`` tying the text
and image halves of one plan together. Fields that can reveal where the user
is or what their day looks like are masked before they reach a handler.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Optional

_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

SENSITIVE_FIELDS = frozenset(
    {
        "api_key",
        "custom_request",
        "description",
        "image_reference",
        "image_url",
        "location",
        "prompt",
        "schedule",
        "title",
    }
)
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")
_TEXT_LIMIT = 200


def _mask_text(text: str) -> str:
    lowered = text.lower()
    if lowered.startswith("data:"):
        return "[redacted-data-uri]"
    if lowered.startswith(("http://", "https://")):
        return "[redacted-url]"
    text = _EMAIL.sub("[redacted-email]", text)
    return text if len(text) <= _TEXT_LIMIT else text[:_TEXT_LIMIT] + "..."


def redact_for_log(value: Any) -> Any:
    """Mask sensitive keys at any depth, plus emails, URLs and image payloads."""

    if isinstance(value, dict):
        return {
            key: "[redacted]" if key in SENSITIVE_FIELDS else redact_for_log(item) for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item) for item in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return _mask_text(str(value))


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", None) or record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None) or _correlation_id.get(),
        }
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES and key not in entry
        }
        entry.update(redact_for_log(extras))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: int | str | None = None) -> None:
    """Send root logging to stderr as JSON, replacing existing handlers."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"), handlers=[handler], force=True)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id``, else keep the current one, else mint one."""

    current = correlation_id or _correlation_id.get() or uuid.uuid4().hex
    _correlation_id.set(current)
    return current


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id to the block, restoring the previous one after."""

    token = _correlation_id.set(correlation_id or _correlation_id.get() or uuid.uuid4().hex)
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    with correlation_context(correlation_id) as scoped_id:
        logging.getLogger(__name__).debug("operation %s", name, extra={"operation": name})
        yield scoped_id


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted ``fields`` attached as record attributes.

    ``correlation_id`` and ``exc_info`` are taken out of ``fields`` and
    handled by logging itself.
    """

    exc_info = fields.pop("exc_info", None)
    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
