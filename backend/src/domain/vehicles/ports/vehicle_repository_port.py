"""Vehicle Repository Port - where registered vehicles are persisted.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional


class _ServerTimestamp:
    """Sentinel asking the backend to stamp the field with its own clock."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()

VEHICLES_COLLECTION = "vehicles"


class VehicleRepositoryPort(ABC):
    """Port interface for vehicle record persistence.

    Records are created once and never updated. Any field whose value is
    SERVER_TIMESTAMP must be replaced by the backend's write time.
    """

    @abstractmethod
    async def add_record(self, collection: str, fields: Mapping[str, Any]) -> str:
        """Persist one record and return its backend-assigned id.

        Raises:
            Exception: Any backend failure; the workflow wraps it
        """
        pass

    @abstractmethod
    async def get_record(self, record_id: str, owner_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a record owned by owner_id, or None."""
        pass
