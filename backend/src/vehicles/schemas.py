"""Vehicle API request/response schemas"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RegistrationResponse(BaseModel):
    """Response for a successful vehicle registration"""
    vehicle_id: str = Field(..., description="Backend-assigned id of the new vehicle record")
    document_urls: Dict[str, str] = Field(..., description="Retrieval URL per uploaded document type")
    next_screen: str = Field(..., description="Screen the client should navigate to")
    params: Dict[str, bool] = Field(..., description="Navigation parameters (refreshVehicles)")

    model_config = ConfigDict(from_attributes=True)


class VehicleResponse(BaseModel):
    """A persisted vehicle record"""
    id: str
    owner_id: str
    brand: str
    model: str
    year: int
    plate: str
    document_urls: Dict[str, str]
    created_at: Optional[datetime] = None


class VehicleOptionsResponse(BaseModel):
    """Choice lists for the registration form"""
    brands: List[str] = Field(..., description="Selectable brands")
    models: Dict[str, List[str]] = Field(..., description="Selectable models per brand")
    years: List[int] = Field(..., description="Selectable years, newest first")
    document_types: List[str] = Field(..., description="Document slots in upload order")
    accepted_mime_types: List[str] = Field(..., description="MIME types accepted for documents")


class RegistrationErrorResponse(BaseModel):
    """Error body for a failed registration"""
    error: str = Field(..., description="Error code (e.g., VALIDATION_ERROR, UPLOAD_TIMEOUT)")
    message: str = Field(..., description="Human-readable error message")
    document_type: Optional[str] = Field(None, description="Document that failed, if any")
    fields: Optional[List[str]] = Field(None, description="Invalid form fields, for VALIDATION_ERROR")
