"""Observability module for AutoDoc.

Provides structured logging, metrics, request correlation and health checks.
The HTTP router lives in observability.router and is imported by main.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    document_uploads_total,
    document_upload_duration_seconds,
    vehicle_registrations_total,
)
from .request_id import (
    generate_request_id,
    get_owner_id,
    get_request_id,
    request_id_var,
    set_owner_id,
    set_request_id,
)
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "document_uploads_total",
    "document_upload_duration_seconds",
    "vehicle_registrations_total",
    # Request context
    "generate_request_id",
    "get_owner_id",
    "get_request_id",
    "request_id_var",
    "set_owner_id",
    "set_request_id",
    # Middleware
    "RequestIDMiddleware",
]
