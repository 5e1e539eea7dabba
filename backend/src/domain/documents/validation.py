"""File validation utilities for picked vehicle documents"""

import os
import re
from typing import Optional, Tuple

from .document_types import PDF_MIME_TYPE


# Vehicle documents are PDF only
SUPPORTED_MIME_TYPES = {PDF_MIME_TYPE}

# File size limit (default 25MB, configurable via env)
MAX_FILE_SIZE = int(os.getenv("MAX_UPLOAD_SIZE_BYTES", 25 * 1024 * 1024))


def is_supported_mime_type(mime_type: Optional[str]) -> bool:
    """Check if MIME type is accepted by the document picker

    Example:
        >>> is_supported_mime_type('application/pdf')
        True
        >>> is_supported_mime_type('image/png')
        False
    """
    return mime_type in SUPPORTED_MIME_TYPES


def validate_file_size(size_bytes: int, max_size: Optional[int] = None) -> Tuple[bool, Optional[str]]:
    """Validate file size is within limits

    Args:
        size_bytes: File size in bytes
        max_size: Maximum allowed size (defaults to MAX_FILE_SIZE)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if max_size is None:
        max_size = MAX_FILE_SIZE

    if size_bytes == 0:
        return False, "File is empty (0 bytes)"

    if size_bytes > max_size:
        return False, f"File exceeds maximum size of {max_size} bytes (got {size_bytes} bytes)"

    return True, None


def validate_filename(filename: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a picked filename

    Validation rules:
    - Not empty
    - Max 255 characters
    - No path traversal or directory separators
    - No null bytes or control characters

    Example:
        >>> validate_filename('soap.pdf')
        (True, None)
        >>> validate_filename('')
        (False, 'Filename cannot be empty')
    """
    if not filename or len(filename.strip()) == 0:
        return False, "Filename cannot be empty"

    if len(filename) > 255:
        return False, f"Filename exceeds 255 characters (got {len(filename)})"

    if ".." in filename or "/" in filename or "\\" in filename:
        return False, "Filename contains path traversal or directory separators"

    if "\x00" in filename:
        return False, "Filename contains null bytes"

    if any(ord(c) < 32 for c in filename):
        return False, "Filename contains control characters"

    return True, None


def sanitize_filename(filename: str) -> str:
    """Sanitize a display name for use as the last segment of a storage path

    Example:
        >>> sanitize_filename('../../soap.pdf')
        'soap.pdf'
        >>> sanitize_filename('revisión técnica (2024).pdf')
        'revisión_técnica_2024_.pdf'
    """
    # Remove path components (both separators, display names come from any OS)
    filename = filename.replace("\\", "/").rsplit("/", 1)[-1]

    filename = re.sub(r"[^\w\s.-]", "_", filename)
    filename = re.sub(r"[\s_]+", "_", filename)

    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[:255 - len(ext)] + ext

    return filename or "document.pdf"
