"""File Staging Port - turn a picked document location into encoded bytes."""

from abc import ABC, abstractmethod
from pathlib import Path


class StagingError(Exception):
    """Raised when a document cannot be staged or read."""
    pass


class FileStagingPort(ABC):
    """Port interface for local file staging.

    Some locations (content-provider URIs) cannot be read directly and must
    first be copied to a local cache path. Both methods block and are called
    from a worker thread.
    """

    @abstractmethod
    def stage(self, location: str, display_name: str) -> Path:
        """Return a readable local path for location, copying it if needed.

        Raises:
            StagingError: If the location cannot be resolved or copied
        """
        pass

    @abstractmethod
    def read_encoded(self, path: Path) -> str:
        """Read path fully and return its content base64-encoded.

        A cache copy made by stage() is removed once read.

        Raises:
            StagingError: If the file cannot be read
        """
        pass
