"""Identity Port - who is registering the vehicle."""

from abc import ABC, abstractmethod


class IdentityPort(ABC):
    """Supplies the id used to stamp ownership and namespace storage paths."""

    @abstractmethod
    def current_user_id(self) -> str:
        pass
