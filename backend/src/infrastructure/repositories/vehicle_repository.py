"""Vehicle repository for database operations"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from domain.vehicles.ports.vehicle_repository_port import (
    SERVER_TIMESTAMP,
    VEHICLES_COLLECTION,
    VehicleRepositoryPort,
)
from models.vehicle import Vehicle

logger = logging.getLogger(__name__)


class SqlVehicleRepository(VehicleRepositoryPort):
    """Repository for vehicle table operations.

    The only supported collection is "vehicles". SERVER_TIMESTAMP values are
    written as NOW() so the database clock stamps them.

    Session work runs in a worker thread; the session is only ever used by
    one call at a time.
    """

    def __init__(self, db: Session):
        """Initialize repository with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    async def add_record(self, collection: str, fields: Mapping[str, Any]) -> str:
        if collection != VEHICLES_COLLECTION:
            raise ValueError(f"Unknown collection: {collection}")

        values = {
            name: func.now() if value is SERVER_TIMESTAMP else value
            for name, value in fields.items()
        }
        vehicle_id = await asyncio.to_thread(self._insert, Vehicle(**values))

        logger.info(f"Created vehicle record: id={vehicle_id}", extra={"vehicle_id": vehicle_id})
        return vehicle_id

    async def get_record(self, record_id: str, owner_id: str) -> Optional[Dict[str, Any]]:
        try:
            vehicle_uuid = UUID(record_id)
        except ValueError:
            return None

        return await asyncio.to_thread(self._select_owned, vehicle_uuid, owner_id)

    def _insert(self, vehicle: Vehicle) -> str:
        try:
            self.db.add(vehicle)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return str(vehicle.id)

    def _select_owned(self, vehicle_id: UUID, owner_id: str) -> Optional[Dict[str, Any]]:
        vehicle = self.db.execute(
            select(Vehicle).where(Vehicle.id == vehicle_id, Vehicle.owner_id == owner_id)
        ).scalar_one_or_none()
        return vehicle.to_dict() if vehicle else None
