"""Structured JSON logging configuration.

Provides centralized logging setup with request/owner correlation and JSON
formatting.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from .request_id import get_owner_id, get_request_id

# Extra attributes copied into the JSON payload when present on a record
_EXTRA_FIELDS = (
    "document_type",
    "storage_key",
    "vehicle_id",
    "status_code",
    "duration_ms",
    "method",
    "path",
)


class RequestContextFilter(logging.Filter):
    """Add request_id and owner_id to all log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        record.owner_id = get_owner_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "request_id": getattr(record, "request_id", "no-request-id"),
            "owner_id": getattr(record, "owner_id", "-"),
            "logger": record.name,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["error"] = str(record.exc_info[1])
            log_data["traceback"] = self.formatException(record.exc_info)

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                value = getattr(record, name)
                log_data[name] = value if isinstance(value, (int, float)) else str(value)

        return json.dumps(log_data, ensure_ascii=False)


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: If True, use JSON formatter; otherwise use simple format
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(request_id)s - %(owner_id)s - %(name)s - %(message)s"
        )

    handler.setFormatter(formatter)
    handler.addFilter(RequestContextFilter())
    root_logger.addHandler(handler)

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("s3transfer").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
