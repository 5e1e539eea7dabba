"""Vehicle registration orchestration.

Validate the form, upload the selected documents one by one in DocumentType
order, then write a single vehicle record. The first failing upload aborts
the whole registration: later documents are not attempted and no record is
written.

Objects already uploaded when the record write fails are left in storage.
Their keys are logged so they can be cleaned up out of band.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from domain.documents.document_types import DocumentType, UploadedDocument
from observability.metrics import vehicle_registrations_total

from .errors import PersistenceError, UploadError, VehicleValidationError
from .form import MIN_VEHICLE_YEAR, VehicleForm, validate_vehicle_form
from .ports.vehicle_repository_port import (
    SERVER_TIMESTAMP,
    VEHICLES_COLLECTION,
    VehicleRepositoryPort,
)
from .uploader import DocumentUploader

logger = logging.getLogger(__name__)

FOLLOW_UP_SCREEN = "ReadyUse"


@dataclass
class RegistrationResult:
    """What the caller needs to move on after a successful registration."""
    vehicle_id: str
    document_urls: Dict[str, str]
    next_screen: str = FOLLOW_UP_SCREEN
    params: Dict[str, bool] = field(default_factory=lambda: {"refreshVehicles": True})


class VehicleRegistrationService:
    """Registers vehicles for one owner at a time.

    Example:
        service = VehicleRegistrationService(uploader, SqlVehicleRepository(db))
        vehicle_id = await service.register_vehicle(form, owner_id="u1")
    """

    def __init__(
        self,
        uploader: DocumentUploader,
        repository: VehicleRepositoryPort,
        min_year: int = MIN_VEHICLE_YEAR,
        today: Callable[[], date] = date.today,
    ):
        self.uploader = uploader
        self.repository = repository
        self.min_year = min_year
        self._today = today

    async def register_vehicle(self, form: VehicleForm, owner_id: str) -> str:
        """Register the vehicle described by form and return the record id.

        Raises:
            VehicleValidationError: Required field missing; nothing attempted
            UploadError: A document upload failed; no record written
            PersistenceError: The record write failed; uploads are kept
        """
        result = await self.register(form, owner_id)
        return result.vehicle_id

    async def register(self, form: VehicleForm, owner_id: str) -> RegistrationResult:
        """Same workflow as register_vehicle, plus the follow-up navigation hints."""
        try:
            validate_vehicle_form(form, current_year=self._today().year, min_year=self.min_year)
        except VehicleValidationError as e:
            logger.warning(f"Vehicle form rejected: missing or invalid {e.fields}")
            vehicle_registrations_total.labels(status="validation_error").inc()
            raise

        try:
            uploaded = await self._upload_documents(form, owner_id)
        except UploadError:
            vehicle_registrations_total.labels(status="upload_error").inc()
            raise

        document_urls = {doc.type.value: doc.retrieval_url for doc in uploaded}
        document_paths = {doc.type.value: doc.storage_path for doc in uploaded}
        fields = {
            "brand": form.brand.strip(),
            "model": form.model.strip(),
            "year": int(form.year),
            "plate": form.plate.strip(),
            "document_urls": document_urls,
            "document_paths": document_paths,
            "owner_id": owner_id,
            "created_at": SERVER_TIMESTAMP,
        }

        try:
            vehicle_id = await self.repository.add_record(VEHICLES_COLLECTION, fields)
        except Exception as e:
            logger.error(f"Failed to persist vehicle record: {e}", exc_info=True)
            if uploaded:
                logger.warning(
                    "Uploaded documents left without a vehicle record: "
                    + ", ".join(doc.storage_path for doc in uploaded)
                )
            vehicle_registrations_total.labels(status="persistence_error").inc()
            raise PersistenceError(str(e)) from e

        logger.info(
            f"Vehicle registered with {len(document_urls)} document(s)",
            extra={"vehicle_id": vehicle_id},
        )
        vehicle_registrations_total.labels(status="success").inc()
        return RegistrationResult(vehicle_id=vehicle_id, document_urls=document_urls)

    async def get_vehicle(self, vehicle_id: str, owner_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one of owner_id's vehicles with freshly resolved document links.

        Links stored at registration time may be presigned and expire, so each
        one is resolved again from its storage key. If that fails the stored
        link is returned unchanged.
        """
        record = await self.repository.get_record(vehicle_id, owner_id)
        if record is None:
            return None

        document_urls = dict(record.get("document_urls") or {})
        for document_type, storage_path in (record.get("document_paths") or {}).items():
            try:
                document_urls[document_type] = await self.uploader.storage.get_retrieval_url(storage_path)
            except Exception as e:
                logger.warning(
                    f"Could not refresh retrieval URL for {document_type}: {e}",
                    extra={"vehicle_id": vehicle_id, "document_type": document_type},
                )
        record["document_urls"] = document_urls
        return record

    async def _upload_documents(self, form: VehicleForm, owner_id: str) -> List[UploadedDocument]:
        uploaded: List[UploadedDocument] = []
        for document_type in DocumentType:
            ref = form.documents.get(document_type)
            if ref is None:
                logger.debug(f"No document selected for {document_type.value}")
                continue
            result: Optional[UploadedDocument] = await self.uploader.upload_document(
                document_type, ref, owner_id
            )
            if result is not None:
                uploaded.append(result)
        return uploaded
