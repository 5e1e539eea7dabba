"""Vehicle registration form state, choice lists and validation."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from domain.documents.document_types import DocumentRef, DocumentType

from .errors import VehicleValidationError

MIN_VEHICLE_YEAR = 1900

REQUIRED_FIELDS = ("brand", "model", "year", "plate")


def _empty_documents() -> Dict[DocumentType, Optional[DocumentRef]]:
    return {document_type: None for document_type in DocumentType}


@dataclass
class VehicleForm:
    """Transient form state for one registration attempt.

    documents always holds a key for every DocumentType; None means the slot
    is empty.
    """
    brand: str = ""
    model: str = ""
    year: Optional[int] = None
    plate: str = ""
    documents: Dict[DocumentType, Optional[DocumentRef]] = field(default_factory=_empty_documents)

    def __post_init__(self):
        # Callers may pass a partial mapping
        documents = _empty_documents()
        documents.update(self.documents)
        self.documents = documents

    def selected_documents(self) -> Dict[DocumentType, DocumentRef]:
        return {t: ref for t, ref in self.documents.items() if ref is not None}


def year_choices(current_year: Optional[int] = None, min_year: int = MIN_VEHICLE_YEAR) -> List[int]:
    """Selectable years, newest first.

    Example:
        >>> year_choices(1902)
        [1902, 1901, 1900]
    """
    if current_year is None:
        current_year = date.today().year
    return list(range(current_year, min_year - 1, -1))


@dataclass
class VehicleCatalog:
    """Open brand -> models choice lists, loaded from configuration."""
    models_by_brand: Mapping[str, Sequence[str]]

    @property
    def brands(self) -> List[str]:
        return list(self.models_by_brand)

    def models_for(self, brand: str) -> List[str]:
        return list(self.models_by_brand.get(brand, []))


def validate_vehicle_form(
    form: VehicleForm,
    current_year: Optional[int] = None,
    min_year: int = MIN_VEHICLE_YEAR,
) -> None:
    """Check required fields before any side effect happens.

    Raises:
        VehicleValidationError: Listing every missing or invalid field
    """
    if current_year is None:
        current_year = date.today().year

    invalid = []
    if not (form.brand or "").strip():
        invalid.append("brand")
    if not (form.model or "").strip():
        invalid.append("model")
    if (
        form.year is None
        or isinstance(form.year, bool)
        or not isinstance(form.year, int)
        or not min_year <= form.year <= current_year
    ):
        invalid.append("year")
    if not (form.plate or "").strip():
        invalid.append("plate")

    if invalid:
        raise VehicleValidationError(invalid)
