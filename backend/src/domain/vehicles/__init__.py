"""Vehicles domain module - registration form, workflow and errors"""

from .errors import (
    PersistenceError,
    RegistrationError,
    SelectionFailed,
    UploadError,
    UploadTimeout,
    UploadTransportError,
    UrlResolutionError,
    VehicleValidationError,
)
from .form import (
    MIN_VEHICLE_YEAR,
    VehicleCatalog,
    VehicleForm,
    validate_vehicle_form,
    year_choices,
)
from .registration import FOLLOW_UP_SCREEN, RegistrationResult, VehicleRegistrationService
from .selection import select_document
from .uploader import STORAGE_ROOT, UPLOAD_TIMEOUT_SECONDS, DocumentUploader

__all__ = [
    "PersistenceError",
    "RegistrationError",
    "SelectionFailed",
    "UploadError",
    "UploadTimeout",
    "UploadTransportError",
    "UrlResolutionError",
    "VehicleValidationError",
    "MIN_VEHICLE_YEAR",
    "VehicleCatalog",
    "VehicleForm",
    "validate_vehicle_form",
    "year_choices",
    "FOLLOW_UP_SCREEN",
    "RegistrationResult",
    "VehicleRegistrationService",
    "select_document",
    "STORAGE_ROOT",
    "UPLOAD_TIMEOUT_SECONDS",
    "DocumentUploader",
]
