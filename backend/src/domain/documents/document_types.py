"""Vehicle document types and the references passed between workflow steps."""

from dataclasses import dataclass
from enum import Enum

PDF_MIME_TYPE = "application/pdf"


class DocumentType(str, Enum):
    """The three vehicle documents a registration can carry.

    Declaration order is the upload order.
    """
    PERMISO_CIRCULACION = "permisoCirculacion"  # Circulation permit
    SOAP = "soap"                               # Mandatory accident insurance
    REVISION_TECNICA = "revisionTecnica"        # Technical inspection


@dataclass(frozen=True)
class DocumentRef:
    """A user-selected file that has not been uploaded yet.

    Attributes:
        location: Opaque URI of the file (file://, content://, or a bare path)
        display_name: Name shown to the user, also used in the storage path
    """
    location: str
    display_name: str


@dataclass(frozen=True)
class UploadedDocument:
    """Result of a successful upload. Never mutated afterwards."""
    type: DocumentType
    retrieval_url: str
    storage_path: str
