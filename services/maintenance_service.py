"""Vigil Maintenance — Maintenance Log Service."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ResourceNotFound
from db.models import Equipment, MaintenanceLog
from schemas.maintenance import MaintenanceLogCreate
from services.base import BaseService


class MaintenanceLogService(BaseService[MaintenanceLog, MaintenanceLogCreate]):
    """Service for maintenance log records. Not consumed by the predictor."""

    def __init__(self, db: AsyncSession):
        super().__init__(MaintenanceLog, db)

    async def add_log(self, payload: MaintenanceLogCreate) -> MaintenanceLog:
        """Store a maintenance log for an existing equipment.

        Raises:
            ResourceNotFound: If the referenced equipment does not exist.
            StoreError: If the insert fails.
        """
        if await self.db.get(Equipment, payload.equipment_id) is None:
            raise ResourceNotFound("Equipment", payload.equipment_id)
        return await self.create(payload)
