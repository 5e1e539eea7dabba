"""Ports for picking, staging and storing vehicle documents"""

from .document_picker_port import DocumentPickerPort, PickerCancelled
from .file_staging_port import FileStagingPort, StagingError
from .object_storage_port import ObjectStoragePort, ProgressCallback, StoredObject

__all__ = [
    "DocumentPickerPort",
    "PickerCancelled",
    "FileStagingPort",
    "StagingError",
    "ObjectStoragePort",
    "ProgressCallback",
    "StoredObject",
]
