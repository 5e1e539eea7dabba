"""SQLAlchemy Models for AutoDoc"""

from .base import Base, PortableJSONB
from .vehicle import Vehicle

__all__ = [
    "Base",
    "PortableJSONB",
    "Vehicle",
]
