"""
JSON log lines for the attendance API.

Every record leaves the process as one JSON object on stdout:

    {"timestamp": ..., "level": ..., "message": ..., "channel": ...,
     "context": {"request_id": ..., ...}, "extra": {...}}

Loggers live under the "slat." namespace, one per channel. The root level
comes from Settings.log_level; Settings.log_channel_levels can raise or
lower single channels (e.g. LOG_CHANNEL_LEVELS="db=DEBUG,mail=WARNING").
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

from slat.config import Settings

NAMESPACE = "slat"
CHANNELS = ("http", "db", "enrollment", "attendance", "access", "mail", "reports")

# Set by the request middleware, read by every record of that request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _level(name: Optional[str], fallback: int = logging.INFO) -> int:
    if not name:
        return fallback
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else fallback


def _channel_of(source) -> str:
    channel = getattr(source, "channel", None)
    if channel:
        return channel
    prefix = NAMESPACE + "."
    return source.name[len(prefix):] if source.name.startswith(prefix) else "app"


class StructuredJsonFormatter(logging.Formatter):
    """Renders a record as a single JSON line; tracebacks go under "exception"."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry = {
            "timestamp": stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "channel": _channel_of(record),
            "context": {"request_id": request_id_var.get(), **(getattr(record, "context", None) or {})},
            "extra": getattr(record, "extra_data", None) or {},
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Install the JSON handler on the root logger and level the channels.

    Channels without an override follow the root level.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJsonFormatter())

    root_level = _level(settings.log_level)
    root = logging.getLogger()
    root.setLevel(root_level)
    root.handlers = [handler]

    overrides = settings.log_channel_levels or {}
    for channel in CHANNELS:
        get_logger(channel).setLevel(_level(overrides.get(channel), root_level))

    return root


def get_logger(channel: str) -> logging.Logger:
    return logging.getLogger(f"{NAMESPACE}.{channel}")


def log_with_context(logger: logging.Logger, level: str, message: str,
                     context: dict = None, extra_data: dict = None,
                     exc_info: bool = False):
    """
    Log message on logger with business context (student_id, lecture_id, ...)
    and free-form extra data (duration_ms, ip, ...).
    """
    logger.log(
        _level(level),
        message,
        exc_info=exc_info,
        extra={
            "context": context or {},
            "extra_data": extra_data or {},
            "channel": _channel_of(logger),
        },
    )


def generate_request_id() -> str:
    return str(uuid.uuid4())
