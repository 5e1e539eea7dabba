"""Document upload step: stage, encode, transfer and resolve one document.

Each upload races the storage transfer against a timer. Whichever finishes
first decides the outcome; a losing transfer is cancelled through its
CancellationToken and its task is cancelled.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from domain.documents.cancellation import CancellationToken
from domain.documents.document_types import (
    PDF_MIME_TYPE,
    DocumentRef,
    DocumentType,
    UploadedDocument,
)
from domain.documents.ports.file_staging_port import FileStagingPort
from domain.documents.ports.object_storage_port import ObjectStoragePort
from domain.documents.validation import sanitize_filename
from observability.metrics import document_upload_duration_seconds, document_uploads_total

from .errors import UploadTimeout, UploadTransportError, UrlResolutionError

logger = logging.getLogger(__name__)

UPLOAD_TIMEOUT_SECONDS = 60.0

STORAGE_ROOT = "vehicle_documents"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class DocumentUploader:
    """Uploads vehicle documents one at a time.

    Storage keys have the form
    ``vehicle_documents/{owner_id}/{timestamp_ms}_{display_name}``. The
    timestamp is forced to increase strictly per uploader, so repeated uploads
    of the same document always land on distinct keys.

    Example:
        uploader = DocumentUploader(storage=s3_adapter, staging=LocalFileStaging(cache_dir))
        uploaded = await uploader.upload_document(DocumentType.SOAP, ref, owner_id="u1")
        uploaded.retrieval_url
    """

    def __init__(
        self,
        storage: ObjectStoragePort,
        staging: FileStagingPort,
        timeout_seconds: float = UPLOAD_TIMEOUT_SECONDS,
        clock_ms: Callable[[], int] = _epoch_ms,
    ):
        self.storage = storage
        self.staging = staging
        self.timeout_seconds = timeout_seconds
        self._clock_ms = clock_ms
        self._last_timestamp_ms = 0

    def build_storage_key(self, owner_id: str, display_name: str) -> str:
        timestamp_ms = max(self._clock_ms(), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms
        return f"{STORAGE_ROOT}/{owner_id}/{timestamp_ms}_{sanitize_filename(display_name)}"

    async def upload_document(
        self,
        document_type: DocumentType,
        ref: Optional[DocumentRef],
        owner_id: str,
    ) -> Optional[UploadedDocument]:
        """Upload one picked document and return its retrieval URL.

        Args:
            document_type: Slot being uploaded (used in errors and metrics)
            ref: Picked document, or None when the slot is empty
            owner_id: Owning user, namespaces the storage key

        Returns:
            UploadedDocument, or None if there was nothing to upload

        Raises:
            UploadTimeout: Transfer exceeded timeout_seconds and was cancelled
            UploadTransportError: Staging, reading or the transfer failed
            UrlResolutionError: Transfer succeeded but no URL could be obtained
        """
        if ref is None:
            logger.debug(f"No document selected for {document_type.value}")
            return None

        storage_key = self.build_storage_key(owner_id, ref.display_name)
        log_extra = {"document_type": document_type.value, "storage_key": storage_key}
        logger.info(f"Starting upload of {document_type.value}", extra=log_extra)

        started = time.perf_counter()
        try:
            url = await self._upload(document_type, ref, storage_key, log_extra)
        finally:
            document_upload_duration_seconds.labels(
                document_type=document_type.value
            ).observe(time.perf_counter() - started)

        document_uploads_total.labels(document_type=document_type.value, status="success").inc()
        logger.info(f"Upload of {document_type.value} complete", extra=log_extra)
        return UploadedDocument(type=document_type, retrieval_url=url, storage_path=storage_key)

    async def _upload(self, document_type, ref, storage_key, log_extra) -> str:
        try:
            local_path = await asyncio.to_thread(self.staging.stage, ref.location, ref.display_name)
            data_b64 = await asyncio.to_thread(self.staging.read_encoded, local_path)
        except Exception as e:
            logger.error(f"Could not read {ref.location}: {e}", extra=log_extra, exc_info=True)
            document_uploads_total.labels(document_type=document_type.value, status="transport_error").inc()
            raise UploadTransportError(document_type, str(e)) from e

        def on_progress(transferred: int, total: int) -> None:
            percent = (transferred / total) * 100 if total else 100.0
            logger.debug(f"Upload progress {document_type.value}: {percent:.2f}%", extra=log_extra)

        token = CancellationToken()
        transfer = asyncio.create_task(
            self.storage.put_encoded(
                storage_key=storage_key,
                data_b64=data_b64,
                content_type=PDF_MIME_TYPE,
                cancel_token=token,
                on_progress=on_progress,
            )
        )

        done, _ = await asyncio.wait({transfer}, timeout=self.timeout_seconds)
        if transfer not in done:
            token.cancel()
            transfer.cancel()
            # Let the cancelled transfer settle; its outcome no longer matters
            await asyncio.gather(transfer, return_exceptions=True)
            logger.error(
                f"Upload of {document_type.value} timed out after {self.timeout_seconds}s",
                extra=log_extra,
            )
            document_uploads_total.labels(document_type=document_type.value, status="timeout").inc()
            raise UploadTimeout(document_type, f"timed out after {self.timeout_seconds}s")

        try:
            transfer.result()
        except Exception as e:
            logger.error(f"Upload of {document_type.value} failed: {e}", extra=log_extra, exc_info=True)
            document_uploads_total.labels(document_type=document_type.value, status="transport_error").inc()
            raise UploadTransportError(document_type, str(e)) from e

        try:
            return await self.storage.get_retrieval_url(storage_key)
        except Exception as e:
            logger.error(
                f"Could not resolve retrieval URL for {document_type.value}: {e}",
                extra=log_extra,
                exc_info=True,
            )
            document_uploads_total.labels(document_type=document_type.value, status="url_error").inc()
            raise UrlResolutionError(document_type, str(e)) from e
