"""Errors raised by the vehicle registration workflow.

Every error carries a stable code, an HTTP status for the API layer, and a
human-readable message naming the step that failed.
"""

from typing import Any, Dict, List, Optional

from domain.documents.document_types import DocumentType


class RegistrationError(Exception):
    """Base exception for the registration workflow."""
    code = "REGISTRATION_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class VehicleValidationError(RegistrationError):
    """A required form field is missing or invalid. Nothing was attempted."""
    code = "VALIDATION_ERROR"
    status_code = 422

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(
            "Please complete all required fields: " + ", ".join(self.fields)
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["fields"] = self.fields
        return data


class SelectionFailed(RegistrationError):
    """The document picker malfunctioned. The form is unchanged."""
    code = "SELECTION_FAILED"
    status_code = 400

    def __init__(self, document_type: DocumentType, reason: Optional[str] = None):
        self.document_type = document_type
        message = f"Could not select the document '{document_type.value}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["document_type"] = self.document_type.value
        return data


class UploadError(RegistrationError):
    """Base for failures while uploading one document. Aborts registration."""
    code = "UPLOAD_ERROR"
    status_code = 502
    reason = "the upload failed"

    def __init__(self, document_type: DocumentType, detail: Optional[str] = None):
        self.document_type = document_type
        self.detail = detail
        super().__init__(
            f"Could not upload the document '{document_type.value}' ({self.reason}). "
            "Please try again."
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["document_type"] = self.document_type.value
        return data


class UploadTimeout(UploadError):
    """The transfer did not finish within the upload timeout and was cancelled."""
    code = "UPLOAD_TIMEOUT"
    status_code = 504
    reason = "the upload took too long"


class UploadTransportError(UploadError):
    """The transfer itself failed (network, storage, unreadable file)."""
    code = "UPLOAD_TRANSPORT_ERROR"
    status_code = 502
    reason = "the transfer failed"


class UrlResolutionError(UploadError):
    """The transfer succeeded but no retrieval URL could be obtained."""
    code = "URL_RESOLUTION_ERROR"
    status_code = 502
    reason = "the download link could not be obtained"


class PersistenceError(RegistrationError):
    """Writing the vehicle record failed after all uploads succeeded."""
    code = "PERSISTENCE_ERROR"
    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Could not register the vehicle: {detail}")
