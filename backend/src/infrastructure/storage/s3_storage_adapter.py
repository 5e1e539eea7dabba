"""S3 Storage Adapter - Implementation of ObjectStoragePort using boto3.

Provides S3-compatible storage operations for AWS S3, MinIO, and other
S3-compatible services: base64 payload transfers with progress and
cooperative cancellation, and retrieval URLs (public or presigned).

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import asyncio
import base64
import binascii
import hashlib
import logging
from io import BytesIO
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from domain.documents.cancellation import CancellationToken, TransferCancelled
from domain.documents.ports.object_storage_port import (
    ObjectStoragePort,
    ProgressCallback,
    StoredObject,
)

logger = logging.getLogger(__name__)

# Longest lifetime S3 accepts for a SigV4 presigned URL
MAX_PRESIGN_SECONDS = 7 * 24 * 3600


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class S3StorageAdapter(ObjectStoragePort):
    """S3-compatible storage adapter using boto3.

    Transfers run in a worker thread. The boto3 progress callback checks the
    cancellation token on every chunk, so a cancelled transfer stops at the
    next chunk boundary.

    Example:
        config = load_storage_config_from_env()
        storage = S3StorageAdapter(
            endpoint_url=config.endpoint_url,
            access_key=config.access_key,
            secret_key=config.secret_key,
            bucket_name=config.bucket_name,
            region=config.region,
        )
    """

    def __init__(
        self,
        endpoint_url: Optional[str],
        access_key: str,
        secret_key: str,
        bucket_name: str,
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
        url_expires_in_seconds: int = MAX_PRESIGN_SECONDS,
    ):
        """Initialize S3 storage adapter.

        Args:
            endpoint_url: S3 endpoint URL (None for AWS S3, URL for MinIO)
            access_key: S3 access key ID
            secret_key: S3 secret access key
            bucket_name: S3 bucket name
            region: AWS region (default: 'us-east-1')
            public_base_url: If set, retrieval URLs are '{public_base_url}/{key}'
                instead of presigned URLs
            url_expires_in_seconds: Presigned URL lifetime, capped at 7 days

        Raises:
            StorageError: If S3 client initialization fails
        """
        try:
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region,
            )
        except NoCredentialsError as e:
            raise StorageError(f"Invalid S3 credentials: {e}")
        except Exception as e:
            raise StorageError(f"Failed to initialize S3 client: {e}")

        self.bucket_name = bucket_name
        self.region = region
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self.url_expires_in_seconds = min(url_expires_in_seconds, MAX_PRESIGN_SECONDS)

        logger.info(
            f"Initialized S3 storage adapter: bucket={bucket_name}, "
            f"endpoint={endpoint_url or 'AWS S3'}, region={region}"
        )

    async def put_encoded(
        self,
        storage_key: str,
        data_b64: str,
        content_type: str,
        cancel_token: CancellationToken,
        on_progress: Optional[ProgressCallback] = None,
    ) -> StoredObject:
        """Decode a base64 payload and upload it to storage_key.

        Raises:
            ValueError: If the payload is not valid base64 or is empty
            TransferCancelled: If cancel_token was cancelled
            StorageError: If the upload fails
        """
        try:
            payload = base64.b64decode(data_b64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Payload is not valid base64: {e}")

        if not payload:
            raise ValueError("Cannot store empty file")

        cancel_token.raise_if_cancelled()

        total = len(payload)
        transferred = 0

        def _callback(chunk_bytes: int) -> None:
            nonlocal transferred
            cancel_token.raise_if_cancelled()
            transferred += chunk_bytes
            if on_progress is not None:
                on_progress(min(transferred, total), total)

        try:
            await asyncio.to_thread(
                self.s3_client.upload_fileobj,
                BytesIO(payload),
                self.bucket_name,
                storage_key,
                ExtraArgs={
                    "ContentType": content_type,
                    "Metadata": {"sha256": hashlib.sha256(payload).hexdigest()},
                },
                Callback=_callback,
            )
        except TransferCancelled:
            logger.warning(f"Upload cancelled: storage_key={storage_key}")
            raise
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(
                f"S3 upload failed: storage_key={storage_key}, "
                f"error={error_code}, message={e}"
            )
            raise StorageError(f"Failed to upload file: {error_code}")
        except Exception as e:
            if cancel_token.cancelled:
                raise TransferCancelled(f"Transfer cancelled: {storage_key}") from e
            logger.error(f"Unexpected error during upload: {e}")
            raise StorageError(f"Failed to upload file: {e}")

        logger.info(
            f"Uploaded file: storage_key={storage_key}, "
            f"size={total}, content_type={content_type}"
        )
        return StoredObject(storage_key=storage_key, size_bytes=total, content_type=content_type)

    async def get_retrieval_url(self, storage_key: str) -> str:
        """Resolve a URL for an uploaded object.

        Returns a public URL when public_base_url is configured, otherwise a
        presigned GET URL valid for url_expires_in_seconds.

        Raises:
            FileNotFoundError: If the object doesn't exist
            StorageError: If URL generation fails
        """
        if not await self.file_exists(storage_key):
            raise FileNotFoundError(f"File not found: {storage_key}")

        if self.public_base_url:
            return f"{self.public_base_url}/{quote(storage_key)}"

        try:
            url = await asyncio.to_thread(
                self.s3_client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket_name, "Key": storage_key},
                ExpiresIn=self.url_expires_in_seconds,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(
                f"Presigned URL generation failed: storage_key={storage_key}, "
                f"error={error_code}"
            )
            raise StorageError(f"Failed to generate presigned URL: {error_code}")
        except Exception as e:
            logger.error(f"Unexpected error generating presigned URL: {e}")
            raise StorageError(f"Failed to generate presigned URL: {e}")

        logger.info(
            f"Generated presigned URL: storage_key={storage_key}, "
            f"expires_in={self.url_expires_in_seconds}s"
        )
        return url

    async def file_exists(self, storage_key: str) -> bool:
        """Check if an object exists (HEAD request).

        Raises:
            StorageError: For errors other than a missing object
        """
        try:
            await asyncio.to_thread(
                self.s3_client.head_object,
                Bucket=self.bucket_name,
                Key=storage_key,
            )
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey", "NotFound"):
                return False
            logger.warning(
                f"Error checking file existence: storage_key={storage_key}, "
                f"error={error_code}"
            )
            raise StorageError(f"Failed to check file: {error_code}")

    async def verify_bucket_exists(self) -> bool:
        """Verify that the configured bucket exists.

        Raises:
            StorageError: If bucket check fails or bucket doesn't exist
        """
        try:
            await asyncio.to_thread(self.s3_client.head_bucket, Bucket=self.bucket_name)
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchBucket"):
                raise StorageError(
                    f"Bucket '{self.bucket_name}' does not exist. "
                    f"Create it first or update S3_BUCKET_NAME."
                )
            raise StorageError(f"Failed to verify bucket: {error_code}")
        except Exception as e:
            raise StorageError(f"Failed to verify bucket: {e}")
