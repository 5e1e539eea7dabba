"""Unit tests for the multipart document picker"""

import io
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from domain.documents.ports.document_picker_port import PickerCancelled
from infrastructure.picker.upload_file_picker import UploadFilePicker

PDF_TYPES = ["application/pdf"]


def make_upload(content: bytes, filename: str = "soap.pdf", content_type: str = "application/pdf") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.asyncio
async def test_pick_writes_file_and_returns_file_uri(tmp_path):
    picker = UploadFilePicker(make_upload(b"%PDF-1.4"), tmp_path)

    ref = await picker.pick(PDF_TYPES)

    assert ref.display_name == "soap.pdf"
    assert ref.location.startswith("file://")
    path = Path(url2pathname(urlparse(ref.location).path))
    assert path.read_bytes() == b"%PDF-1.4"

    picker.cleanup()
    assert not path.exists()


@pytest.mark.asyncio
async def test_missing_upload_is_cancel(tmp_path):
    with pytest.raises(PickerCancelled):
        await UploadFilePicker(None, tmp_path).pick(PDF_TYPES)


@pytest.mark.asyncio
async def test_non_pdf_rejected(tmp_path):
    picker = UploadFilePicker(make_upload(b"\x89PNG", "photo.png", "image/png"), tmp_path)

    with pytest.raises(ValueError, match="Unsupported MIME type"):
        await picker.pick(PDF_TYPES)


@pytest.mark.asyncio
async def test_empty_file_rejected(tmp_path):
    picker = UploadFilePicker(make_upload(b""), tmp_path)

    with pytest.raises(ValueError, match="empty"):
        await picker.pick(PDF_TYPES)


@pytest.mark.asyncio
async def test_oversized_file_rejected(tmp_path):
    picker = UploadFilePicker(make_upload(b"x" * 11), tmp_path, max_size=10)

    with pytest.raises(ValueError, match="exceeds maximum size"):
        await picker.pick(PDF_TYPES)


@pytest.mark.asyncio
async def test_same_name_in_two_pickers_does_not_collide(tmp_path):
    first = UploadFilePicker(make_upload(b"first"), tmp_path)
    second = UploadFilePicker(make_upload(b"second"), tmp_path)

    first_ref = await first.pick(PDF_TYPES)
    second_ref = await second.pick(PDF_TYPES)

    assert first_ref.location != second_ref.location
