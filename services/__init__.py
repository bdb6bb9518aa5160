"""Vigil Maintenance — Service Layer.

This package contains business logic services that encapsulate
domain operations and keep API routes thin.

Services:
    - EquipmentService: Registration, lookup, cascading delete
    - SensorService: Sensor reading ingestion
    - MaintenanceLogService: Maintenance log records
    - MaintenancePredictor: Failure-risk prediction orchestration
    - BaseService: Generic read/create operations (for ORM models)

Usage:
    from services import EquipmentService

    async def list_equipment(db: AsyncSession = Depends(get_db)):
        service = EquipmentService(db)
        return await service.get_multi()
"""

from services.base import BaseService
from services.equipment_service import EquipmentService
from services.maintenance_service import MaintenanceLogService
from services.prediction_service import MaintenancePredictor
from services.repositories import (
    PredictionRepository,
    SensorRepository,
    SqlPredictionRepository,
    SqlSensorRepository,
)
from services.sensor_service import SensorService

__all__ = [
    "BaseService",
    "EquipmentService",
    "MaintenanceLogService",
    "MaintenancePredictor",
    "PredictionRepository",
    "SensorRepository",
    "SensorService",
    "SqlPredictionRepository",
    "SqlSensorRepository",
]
