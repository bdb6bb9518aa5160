"""Vigil Maintenance — Sensor Service.

Ingestion of sensor readings. A reading is committed on its own before
any prediction work starts, so it survives a later prediction failure.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ResourceNotFound
from db.models import Equipment, SensorReading
from schemas.sensor import SensorReadingCreate
from services.base import BaseService


class SensorService(BaseService[SensorReading, SensorReadingCreate]):
    """Service for sensor reading ingestion."""

    def __init__(self, db: AsyncSession):
        super().__init__(SensorReading, db)

    async def add_reading(self, payload: SensorReadingCreate) -> SensorReading:
        """Store one reading for an existing equipment.

        Raises:
            ResourceNotFound: If the referenced equipment does not exist.
            StoreError: If the insert fails.
        """
        if await self.db.get(Equipment, payload.equipment_id) is None:
            raise ResourceNotFound("Equipment", payload.equipment_id)

        reading = await self.create(payload)
        self.logger.debug(
            "Stored sensor reading",
            equipment_id=reading.equipment_id,
            type=reading.type,
            value=reading.value,
        )
        return reading
