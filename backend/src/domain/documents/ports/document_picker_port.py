"""Document Picker Port - where a user-selected file comes from."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..document_types import DocumentRef


class PickerCancelled(Exception):
    """The user dismissed the picker. A normal outcome, not a failure."""
    pass


class DocumentPickerPort(ABC):
    """Port interface for selecting a single document.

    Implementations restrict the selection to allowed_types and return a
    reference to the picked file, raise PickerCancelled when nothing was
    picked, and raise any other exception on malfunction.
    """

    @abstractmethod
    async def pick(self, allowed_types: Sequence[str]) -> DocumentRef:
        pass
