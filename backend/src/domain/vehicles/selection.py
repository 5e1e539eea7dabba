"""Document selection step: fill one document slot of the form."""

import logging
from typing import Optional

from domain.documents.document_types import PDF_MIME_TYPE, DocumentRef, DocumentType
from domain.documents.ports.document_picker_port import DocumentPickerPort, PickerCancelled

from .errors import SelectionFailed
from .form import VehicleForm

logger = logging.getLogger(__name__)


async def select_document(
    form: VehicleForm,
    document_type: DocumentType,
    picker: DocumentPickerPort,
) -> Optional[DocumentRef]:
    """Ask the picker for a PDF and store it in the form slot for document_type.

    A new selection replaces any previous one for the same slot.

    Returns:
        The picked reference, or None if the user cancelled (form unchanged)

    Raises:
        SelectionFailed: If the picker failed for any other reason (form unchanged)
    """
    try:
        ref = await picker.pick(allowed_types=[PDF_MIME_TYPE])
    except PickerCancelled:
        logger.info(
            f"Document selection cancelled for {document_type.value}",
            extra={"document_type": document_type.value},
        )
        return None
    except Exception as e:
        logger.error(
            f"Document selection failed for {document_type.value}: {e}",
            extra={"document_type": document_type.value},
            exc_info=True,
        )
        raise SelectionFailed(document_type, str(e)) from e

    form.documents[document_type] = ref
    logger.info(
        f"Selected document {ref.display_name} for {document_type.value}",
        extra={"document_type": document_type.value},
    )
    return ref
