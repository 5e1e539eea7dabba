"""Document picker backed by a multipart file field.

Over HTTP the "picker" is the optional file part the client attached for a
document slot. An absent or unnamed part counts as a cancelled pick. Accepted
files are written to a private directory under the staging cache and handed
on as file:// references.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional, Sequence, Union
from uuid import uuid4

from fastapi import UploadFile

from domain.documents.document_types import DocumentRef
from domain.documents.ports.document_picker_port import DocumentPickerPort, PickerCancelled
from domain.documents.validation import (
    MAX_FILE_SIZE,
    sanitize_filename,
    validate_file_size,
    validate_filename,
)

logger = logging.getLogger(__name__)


class UploadFilePicker(DocumentPickerPort):
    """Picks the document carried by one multipart field.

    Call cleanup() once the registration attempt is over to remove the
    staged copy.
    """

    def __init__(
        self,
        upload: Optional[UploadFile],
        cache_dir: Union[str, Path],
        max_size: int = MAX_FILE_SIZE,
    ):
        self.upload = upload
        self.max_size = max_size
        self.staging_dir = Path(cache_dir) / uuid4().hex

    async def pick(self, allowed_types: Sequence[str]) -> DocumentRef:
        if self.upload is None or not self.upload.filename:
            raise PickerCancelled()

        is_valid, error_msg = validate_filename(self.upload.filename)
        if not is_valid:
            raise ValueError(error_msg)

        if self.upload.content_type not in allowed_types:
            raise ValueError(
                f"Unsupported MIME type: {self.upload.content_type}. "
                f"Allowed: {', '.join(allowed_types)}"
            )

        content = await self.upload.read()
        is_valid, error_msg = validate_file_size(len(content), self.max_size)
        if not is_valid:
            raise ValueError(error_msg)

        safe_filename = sanitize_filename(self.upload.filename)
        self.staging_dir.mkdir(parents=True, exist_ok=True)
        path = self.staging_dir / safe_filename
        path.write_bytes(content)

        logger.info(f"Picked {safe_filename} ({len(content)} bytes) into {path}")
        return DocumentRef(location=path.resolve().as_uri(), display_name=self.upload.filename)

    def cleanup(self) -> None:
        shutil.rmtree(self.staging_dir, ignore_errors=True)
