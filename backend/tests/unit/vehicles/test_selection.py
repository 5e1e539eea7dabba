"""Unit tests for document selection"""

import pytest

from domain.documents.document_types import DocumentRef, DocumentType
from domain.vehicles.errors import SelectionFailed
from domain.vehicles.form import VehicleForm
from domain.vehicles.selection import select_document
from fixtures.fakes import FakePicker


@pytest.mark.asyncio
async def test_pick_stores_ref_in_slot():
    form = VehicleForm()
    ref = DocumentRef(location="file:///tmp/soap.pdf", display_name="soap.pdf")
    picker = FakePicker(ref=ref)

    result = await select_document(form, DocumentType.SOAP, picker)

    assert result == ref
    assert form.documents[DocumentType.SOAP] == ref
    assert form.documents[DocumentType.PERMISO_CIRCULACION] is None
    assert picker.allowed_types == ["application/pdf"]


@pytest.mark.asyncio
async def test_new_pick_replaces_previous():
    old = DocumentRef(location="/a.pdf", display_name="a.pdf")
    new = DocumentRef(location="/b.pdf", display_name="b.pdf")
    form = VehicleForm(documents={DocumentType.SOAP: old})

    await select_document(form, DocumentType.SOAP, FakePicker(ref=new))

    assert form.documents[DocumentType.SOAP] == new


@pytest.mark.asyncio
async def test_cancel_leaves_form_unchanged():
    old = DocumentRef(location="/a.pdf", display_name="a.pdf")
    form = VehicleForm(documents={DocumentType.REVISION_TECNICA: old})

    result = await select_document(form, DocumentType.REVISION_TECNICA, FakePicker())

    assert result is None
    assert form.documents[DocumentType.REVISION_TECNICA] == old


@pytest.mark.asyncio
async def test_picker_error_raises_selection_failed():
    form = VehicleForm()
    picker = FakePicker(error=OSError("picker crashed"))

    with pytest.raises(SelectionFailed) as exc_info:
        await select_document(form, DocumentType.PERMISO_CIRCULACION, picker)

    assert exc_info.value.document_type == DocumentType.PERMISO_CIRCULACION
    assert exc_info.value.status_code == 400
    assert "picker crashed" in exc_info.value.message
    assert form.selected_documents() == {}
