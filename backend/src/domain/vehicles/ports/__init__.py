from .identity_port import IdentityPort
from .vehicle_repository_port import (
    SERVER_TIMESTAMP,
    VEHICLES_COLLECTION,
    VehicleRepositoryPort,
)

__all__ = [
    "IdentityPort",
    "SERVER_TIMESTAMP",
    "VEHICLES_COLLECTION",
    "VehicleRepositoryPort",
]
