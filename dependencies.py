"""Vigil Maintenance — FastAPI Dependencies.

Dependency injection for settings, database sessions, services and the
maintenance predictor. Each request gets its own session; services and
the predictor are built around it.

Usage:
    from dependencies import Predictor, Equipments

    @router.post("/predictions/{equipment_id}")
    async def recompute(equipment_id: str, predictor: Predictor):
        return await predictor.predict_and_persist(equipment_id)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config import Settings
from database import get_db
from services import (
    EquipmentService,
    MaintenanceLogService,
    MaintenancePredictor,
    SensorService,
    SqlPredictionRepository,
    SqlSensorRepository,
)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]


# =============================================================================
# Service Dependencies
# =============================================================================

def get_equipment_service(db: DbSession) -> EquipmentService:
    return EquipmentService(db)


def get_sensor_service(db: DbSession) -> SensorService:
    return SensorService(db)


def get_maintenance_service(db: DbSession) -> MaintenanceLogService:
    return MaintenanceLogService(db)


def get_prediction_repository(db: DbSession) -> SqlPredictionRepository:
    return SqlPredictionRepository(db)


def get_predictor(
    db: DbSession,
    settings: AppSettings,
) -> MaintenancePredictor:
    """Predictor wired to the request's session and the configured strategy."""
    return MaintenancePredictor.from_settings(
        settings.predictor,
        SqlSensorRepository(db),
        SqlPredictionRepository(db),
    )


# =============================================================================
# Convenience Aliases
# =============================================================================

Equipments = Annotated[EquipmentService, Depends(get_equipment_service)]
Sensors = Annotated[SensorService, Depends(get_sensor_service)]
MaintenanceLogs = Annotated[MaintenanceLogService, Depends(get_maintenance_service)]
Predictions = Annotated[SqlPredictionRepository, Depends(get_prediction_repository)]
Predictor = Annotated[MaintenancePredictor, Depends(get_predictor)]
