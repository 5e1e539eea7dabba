"""Object Storage Port - Domain interface for S3-compatible storage.

This port defines the contract for transferring vehicle documents to object
storage and resolving durable retrieval URLs for them.
Adapters must implement this interface to provide S3, MinIO, or other backends.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from ..cancellation import CancellationToken

# (bytes_transferred, total_bytes)
ProgressCallback = Callable[[int, int], None]


@dataclass
class StoredObject:
    """Metadata for an object written to storage.

    Attributes:
        storage_key: Key of the object (format: vehicle_documents/{owner_id}/{ms}_{name})
        size_bytes: Decoded object size in bytes
        content_type: MIME type tagged on the object (e.g., 'application/pdf')
    """
    storage_key: str
    size_bytes: int
    content_type: str


class ObjectStoragePort(ABC):
    """Port interface for S3-compatible object storage operations.

    Example Usage:
        storage = S3StorageAdapter(...)
        token = CancellationToken()

        stored = await storage.put_encoded(
            storage_key='vehicle_documents/u1/1717000000000_soap.pdf',
            data_b64=base64_payload,
            content_type='application/pdf',
            cancel_token=token,
        )
        url = await storage.get_retrieval_url(stored.storage_key)
    """

    @abstractmethod
    async def put_encoded(
        self,
        storage_key: str,
        data_b64: str,
        content_type: str,
        cancel_token: CancellationToken,
        on_progress: Optional[ProgressCallback] = None,
    ) -> StoredObject:
        """Transfer a base64-encoded payload to storage under storage_key.

        Args:
            storage_key: Destination key (overwrites are the caller's concern)
            data_b64: Base64-encoded object content
            content_type: MIME type to tag the object with
            cancel_token: Checked while the transfer runs; once cancelled the
                transfer stops and TransferCancelled is raised
            on_progress: Optional advisory callback (bytes_transferred, total_bytes)

        Returns:
            StoredObject: Metadata about the written object

        Raises:
            TransferCancelled: If cancel_token was cancelled
            StorageError: If the transfer fails
            ValueError: If the payload is empty or not valid base64
        """
        pass

    @abstractmethod
    async def get_retrieval_url(self, storage_key: str) -> str:
        """Resolve a durable URL for an uploaded object.

        Raises:
            FileNotFoundError: If the object doesn't exist
            StorageError: If URL generation fails
        """
        pass

    @abstractmethod
    async def verify_bucket_exists(self) -> bool:
        """Check the configured bucket is reachable.

        Raises:
            StorageError: If the bucket is missing or unreachable
        """
        pass
