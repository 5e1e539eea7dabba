"""Documents domain module - document types, picking, staging and storage ports"""

from .cancellation import CancellationToken, TransferCancelled
from .document_types import PDF_MIME_TYPE, DocumentRef, DocumentType, UploadedDocument
from .validation import (
    is_supported_mime_type,
    validate_file_size,
    validate_filename,
    sanitize_filename,
    SUPPORTED_MIME_TYPES,
    MAX_FILE_SIZE,
)

__all__ = [
    "CancellationToken",
    "TransferCancelled",
    "PDF_MIME_TYPE",
    "DocumentRef",
    "DocumentType",
    "UploadedDocument",
    "is_supported_mime_type",
    "validate_file_size",
    "validate_filename",
    "sanitize_filename",
    "SUPPORTED_MIME_TYPES",
    "MAX_FILE_SIZE",
]
