"""Local file staging - resolve picked document locations to readable files.

file:// URIs and bare paths are read in place. Any other scheme (content://,
provider URIs) goes through a content resolver and is copied into the
staging cache directory first, under a name unique to the call. A copy is
deleted once it has been read; files read in place are never touched.
"""

import base64
import logging
import shutil
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Set, Union
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname
from uuid import uuid4

from domain.documents.ports.file_staging_port import FileStagingPort, StagingError
from domain.documents.validation import sanitize_filename

logger = logging.getLogger(__name__)

# Opens a provider URI for reading; the caller closes the stream
ContentResolver = Callable[[str], BinaryIO]


class LocalFileStaging(FileStagingPort):
    """Stages documents on the local filesystem.

    Example:
        staging = LocalFileStaging("/tmp/autodoc-staging")
        path = staging.stage("file:///tmp/soap.pdf", "soap.pdf")
        encoded = staging.read_encoded(path)
    """

    def __init__(self, cache_dir: Union[str, Path], content_resolver: Optional[ContentResolver] = None):
        self.cache_dir = Path(cache_dir)
        self.content_resolver = content_resolver
        self._copies: Set[Path] = set()

    def stage(self, location: str, display_name: str) -> Path:
        parsed = urlparse(location)

        # One-letter schemes are Windows drive letters, not URI schemes
        if parsed.scheme in ("", "file") or len(parsed.scheme) == 1:
            if parsed.scheme == "file":
                path = Path(url2pathname(unquote(parsed.path)))
            else:
                path = Path(location)
            if not path.is_file():
                raise StagingError(f"File not found: {path}")
            return path

        if self.content_resolver is None:
            raise StagingError(f"Cannot stage '{parsed.scheme}://' locations: no content resolver")

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        dest = self.cache_dir / f"{uuid4().hex}_{sanitize_filename(display_name)}"
        try:
            with self.content_resolver(location) as source, open(dest, "wb") as target:
                shutil.copyfileobj(source, target)
        except OSError as e:
            dest.unlink(missing_ok=True)
            raise StagingError(f"Failed to copy {location} to {dest}: {e}") from e

        self._copies.add(dest)
        logger.info(f"Staged {location} to {dest}")
        return dest

    def read_encoded(self, path: Path) -> str:
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            raise StagingError(f"Failed to read {path}: {e}") from e
        finally:
            self._discard_copy(Path(path))
        return base64.b64encode(content).decode("ascii")

    def _discard_copy(self, path: Path) -> None:
        if path not in self._copies:
            return
        self._copies.discard(path)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove staged copy {path}: {e}")
