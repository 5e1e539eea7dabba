"""Prometheus metrics for AutoDoc.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram

# Document upload metrics
document_uploads_total = Counter(
    "autodoc_document_uploads_total",
    "Total number of vehicle document uploads",
    ["document_type", "status"]  # status: success|timeout|transport_error|url_error
)

document_upload_duration_seconds = Histogram(
    "autodoc_document_upload_duration_seconds",
    "Time spent uploading one vehicle document in seconds",
    ["document_type"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

# Registration metrics
vehicle_registrations_total = Counter(
    "autodoc_vehicle_registrations_total",
    "Total vehicle registration attempts",
    ["status"]  # status: success|validation_error|upload_error|persistence_error
)
