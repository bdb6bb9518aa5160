"""Vigil Maintenance — Equipment Service.

Registration, lookup and removal of monitored equipment. Removal cascades
explicitly to every record the equipment owns, because the store does not
enforce the cascade itself.
"""

from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StoreError
from database import transaction
from db.models import Equipment, MaintenanceLog, Prediction, SensorReading
from schemas.equipment import EquipmentCreate
from services.base import BaseService

# Children first, parent last
_DEPENDENT_MODELS = (Prediction, SensorReading, MaintenanceLog)


class EquipmentService(BaseService[Equipment, EquipmentCreate]):
    """Service for the Equipment root entity."""

    def __init__(self, db: AsyncSession):
        super().__init__(Equipment, db)

    async def delete_with_dependents(self, equipment_id: str) -> Equipment:
        """Delete an equipment together with its readings, logs and predictions.

        All deletes run in one transaction: either every row is removed or,
        if any step fails, none is.

        Raises:
            ResourceNotFound: If the equipment does not exist.
            StoreError: If any delete fails; nothing is removed.
        """
        equipment = await self.get_or_404(equipment_id)

        removed: dict[str, int] = {}
        try:
            async with transaction(self.db):
                for model in _DEPENDENT_MODELS:
                    result = await self.db.execute(
                        delete(model).where(model.equipment_id == equipment.id)
                    )
                    removed[model.__tablename__] = result.rowcount
                await self.db.execute(delete(Equipment).where(Equipment.id == equipment.id))
        except SQLAlchemyError as e:
            self.logger.error(
                "Cascading delete rolled back",
                equipment_id=equipment_id,
                error_type=type(e).__name__,
            )
            raise StoreError("delete Equipment", str(e)) from e

        self.logger.info("Deleted equipment", equipment_id=equipment_id, removed=removed)
        return equipment
