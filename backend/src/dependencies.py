"""Global FastAPI dependencies wiring the registration workflow to its adapters.

This module provides:
- get_storage: S3 adapter built from settings (process-wide)
- get_staging: local file staging under STAGING_CACHE_DIR
- get_uploader: process-wide DocumentUploader, so storage keys stay unique
  across requests
- get_catalog: brand/model choice lists from settings
- get_registration_service: per-request service bound to a DB session

Tests replace any of these through app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from config import get_settings
from database import get_db
from domain.documents.ports.file_staging_port import FileStagingPort
from domain.documents.ports.object_storage_port import ObjectStoragePort
from domain.vehicles.form import VehicleCatalog
from domain.vehicles.registration import VehicleRegistrationService
from domain.vehicles.uploader import DocumentUploader
from infrastructure.repositories.vehicle_repository import SqlVehicleRepository
from infrastructure.staging.local_file_staging import LocalFileStaging
from infrastructure.storage.s3_storage_adapter import S3StorageAdapter
from infrastructure.storage.storage_config import load_storage_config_from_env


@lru_cache()
def get_storage() -> ObjectStoragePort:
    """Dependency for object storage adapter"""
    config = load_storage_config_from_env()
    return S3StorageAdapter(
        endpoint_url=config.endpoint_url,
        access_key=config.access_key,
        secret_key=config.secret_key,
        bucket_name=config.bucket_name,
        region=config.region,
        public_base_url=config.public_base_url,
        url_expires_in_seconds=config.url_expires_in_seconds,
    )


@lru_cache()
def get_staging() -> FileStagingPort:
    return LocalFileStaging(get_settings().STAGING_CACHE_DIR)


@lru_cache()
def get_uploader() -> DocumentUploader:
    return DocumentUploader(
        storage=get_storage(),
        staging=get_staging(),
        timeout_seconds=get_settings().UPLOAD_TIMEOUT_SECONDS,
    )


def get_catalog() -> VehicleCatalog:
    return VehicleCatalog(models_by_brand=get_settings().VEHICLE_CATALOG)


def get_registration_service(
    db: Session = Depends(get_db),
    uploader: DocumentUploader = Depends(get_uploader),
) -> VehicleRegistrationService:
    return VehicleRegistrationService(
        uploader=uploader,
        repository=SqlVehicleRepository(db),
        min_year=get_settings().MIN_VEHICLE_YEAR,
    )
