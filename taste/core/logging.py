"""
Logging for the taste backend.

Everything goes through the "taste" logger. Records carry a request id
(from a ContextVar set by RequestIdMiddleware) and, where known, the user,
badge, event and error code they concern. Production emits one JSON object
per line; development emits a single readable line with those fields tagged.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Dict, Optional

LOGGER_NAME = "taste"

# Record attributes surfaced by both formatters, in output order
CONTEXT_FIELDS = ("user_id", "badge_id", "event_type", "error_code")
REQUEST_FIELDS = ("method", "path", "status", "latency_bucket")

_LATENCY_BUCKETS = ((10, "<10ms"), (100, "10-100ms"), (500, "100-500ms"), (1000, "500-1000ms"))

request_id_ctx_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id(default: Optional[str] = None) -> Optional[str]:
    rid = request_id_ctx_var.get()
    return rid if rid is not None else default


def latency_bucket_ms(latency_ms: Optional[float]) -> str:
    if latency_ms is None:
        return "unknown"
    for bound, label in _LATENCY_BUCKETS:
        if latency_ms < bound:
            return label
    return ">=1000ms"


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z")


def _present(record: logging.LogRecord, fields) -> Dict[str, object]:
    return {key: getattr(record, key) for key in fields if getattr(record, key, None) is not None}


class RequestIdFilter(logging.Filter):
    """Fill record.request_id from the current request when the caller did not."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = get_request_id()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(_present(record, CONTEXT_FIELDS + REQUEST_FIELDS))
        return json.dumps(payload, default=str)


class PrettyFormatter(logging.Formatter):
    """`<ts> LEVEL [taste] [rid=..] [uid=..] message badge_id=.. status=..`"""

    def format(self, record: logging.LogRecord) -> str:
        rid = getattr(record, "request_id", None)
        uid = getattr(record, "user_id", None)
        tags = "".join(f" [{tag}={value}]" for tag, value in (("rid", rid), ("uid", uid)) if value)
        fields = _present(record, CONTEXT_FIELDS[1:] + REQUEST_FIELDS)
        tail = "".join(f" {key}={value}" for key, value in fields.items())
        return f"{_timestamp(record)} {record.levelname} [{LOGGER_NAME}]{tags} {record.getMessage()}{tail}"


def configure_logging(env: str = "development") -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if env.lower() == "production" else PrettyFormatter())
    handler.addFilter(RequestIdFilter())

    logger.handlers = [handler]
    logger.propagate = True


def _truncate(value, limit: int = 500) -> str:
    try:
        text = str(value)
    except Exception:
        return "<unserializable>"
    return text if len(text) <= limit else text[:limit] + "...<truncated>"


def log_event(
    level: str,
    msg: str,
    *,
    request_id: Optional[str],
    user_id: Optional[str] = None,
    badge_id: Optional[str] = None,
    event_type: Optional[str] = None,
    error_code: Optional[str] = None,
    extra: Optional[Dict[str, object]] = None,
):
    """
    Log `msg` on the taste logger with the context fields attached.

    Unset fields are left off the record. Values in `extra` are stringified
    and cut at 500 characters.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        configure_logging(os.getenv("ENV", "development"))

    context = {
        "user_id": user_id,
        "badge_id": badge_id,
        "event_type": event_type,
        "error_code": error_code,
    }
    payload: Dict[str, object] = {"request_id": request_id or get_request_id()}
    payload.update({key: value for key, value in context.items() if value is not None})
    if extra:
        payload.update({key: _truncate(value) for key, value in extra.items()})

    getattr(logger, level, logger.info)(msg, extra=payload)
