"""Vehicle API endpoints for AutoDoc

Provides the "Register Vehicle" action: POST /vehicles accepts the form
fields plus up to three PDF documents, uploads the documents to object
storage and writes one vehicle record. On success the client is told which
screen to open next.
"""

import logging
from typing import Annotated, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from auth.dependencies import get_current_user_id
from config import get_settings
from dependencies import get_catalog, get_registration_service
from domain.documents.document_types import PDF_MIME_TYPE, DocumentType
from domain.vehicles.form import VehicleCatalog, VehicleForm, validate_vehicle_form, year_choices
from domain.vehicles.registration import VehicleRegistrationService
from domain.vehicles.selection import select_document
from infrastructure.picker.upload_file_picker import UploadFilePicker
from .schemas import (
    RegistrationErrorResponse,
    RegistrationResponse,
    VehicleOptionsResponse,
    VehicleResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("/options", response_model=VehicleOptionsResponse)
def get_vehicle_options(catalog: Annotated[VehicleCatalog, Depends(get_catalog)]):
    """Choice lists for the registration form."""
    settings = get_settings()
    return VehicleOptionsResponse(
        brands=catalog.brands,
        models={brand: catalog.models_for(brand) for brand in catalog.brands},
        years=year_choices(min_year=settings.MIN_VEHICLE_YEAR),
        document_types=[document_type.value for document_type in DocumentType],
        accepted_mime_types=[PDF_MIME_TYPE],
    )


@router.post(
    "",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": RegistrationErrorResponse},
        422: {"model": RegistrationErrorResponse},
        500: {"model": RegistrationErrorResponse},
        502: {"model": RegistrationErrorResponse},
        504: {"model": RegistrationErrorResponse},
    },
)
async def register_vehicle(
    owner_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[VehicleRegistrationService, Depends(get_registration_service)],
    brand: Annotated[str, Form()] = "",
    model: Annotated[str, Form()] = "",
    year: Annotated[Optional[int], Form()] = None,
    plate: Annotated[str, Form()] = "",
    permiso_circulacion: Annotated[Optional[UploadFile], File(alias="permisoCirculacion")] = None,
    soap: Annotated[Optional[UploadFile], File()] = None,
    revision_tecnica: Annotated[Optional[UploadFile], File(alias="revisionTecnica")] = None,
):
    """Register a vehicle for the authenticated user

    Accepts multipart/form-data:
    - brand, model, year, plate (required)
    - permisoCirculacion, soap, revisionTecnica (optional PDF files)

    Processing:
    1. Validate required fields (422, nothing stored)
    2. Select each attached document (PDF only)
    3. Upload documents one at a time, in slot order; the first failure aborts
    4. Write the vehicle record with a server-side creation timestamp

    Example:
        curl -X POST https://api.autodoc.app/api/v1/vehicles \\
             -H "Authorization: Bearer $TOKEN" \\
             -F brand=Subaru -F model=Impreza -F year=2023 -F plate=ABCD12 \\
             -F "soap=@soap.pdf;type=application/pdf"
    """
    settings = get_settings()
    form = VehicleForm(brand=brand, model=model, year=year, plate=plate)
    validate_vehicle_form(form, min_year=settings.MIN_VEHICLE_YEAR)

    uploads: Dict[DocumentType, Optional[UploadFile]] = {
        DocumentType.PERMISO_CIRCULACION: permiso_circulacion,
        DocumentType.SOAP: soap,
        DocumentType.REVISION_TECNICA: revision_tecnica,
    }
    pickers = [
        (document_type, UploadFilePicker(upload, settings.STAGING_CACHE_DIR, settings.MAX_UPLOAD_SIZE_BYTES))
        for document_type, upload in uploads.items()
    ]

    try:
        for document_type, picker in pickers:
            await select_document(form, document_type, picker)

        result = await service.register(form, owner_id)
    finally:
        for _, picker in pickers:
            picker.cleanup()

    logger.info(f"Registered vehicle {result.vehicle_id}", extra={"vehicle_id": result.vehicle_id})
    return RegistrationResponse(
        vehicle_id=result.vehicle_id,
        document_urls=result.document_urls,
        next_screen=result.next_screen,
        params=result.params,
    )


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: str,
    owner_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[VehicleRegistrationService, Depends(get_registration_service)],
):
    """Fetch one of the caller's vehicles. Other owners' vehicles are 404.

    Document links are resolved again on every read, so presigned links in
    the response are always within their lifetime.
    """
    record = await service.get_vehicle(vehicle_id, owner_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vehicle not found")
    return VehicleResponse(**record)
