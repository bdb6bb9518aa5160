"""
Maintenance API Module
Routes for equipment, sensor ingestion, maintenance logs and predictions.

Import this into api_server.py to add the routes.
"""

from typing import List

from fastapi import APIRouter, Query, status

from dependencies import Equipments, MaintenanceLogs, Predictions, Predictor, Sensors
from schemas import (
    Equipment,
    EquipmentCreate,
    ErrorResponse,
    MaintenanceLog,
    MaintenanceLogCreate,
    MessageResponse,
    Prediction,
    PredictionWithEquipment,
    SensorReading,
    SensorReadingCreate,
)

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Equipment not found"}}

equipment_router = APIRouter(prefix="/equipment", tags=["Equipment"])
sensor_router = APIRouter(prefix="/sensors", tags=["Sensors"])
maintenance_router = APIRouter(prefix="/maintenance", tags=["Maintenance"])
prediction_router = APIRouter(prefix="/predictions", tags=["Predictions"])


# =============================================================================
# EQUIPMENT
# =============================================================================
@equipment_router.post("", response_model=Equipment, status_code=status.HTTP_201_CREATED)
async def create_equipment(payload: EquipmentCreate, equipment: Equipments):
    """Register a new equipment."""
    return await equipment.create(payload)


@equipment_router.get("", response_model=List[Equipment])
async def list_equipment(
    equipment: Equipments,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List registered equipment, oldest first."""
    return await equipment.get_multi(skip=skip, limit=limit)


@equipment_router.get("/{equipment_id}", response_model=Equipment, responses=_NOT_FOUND)
async def get_equipment(equipment_id: str, equipment: Equipments):
    return await equipment.get_or_404(equipment_id)


@equipment_router.delete("/{equipment_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_equipment(equipment_id: str, equipment: Equipments):
    """Delete an equipment with its sensor readings, maintenance logs and predictions."""
    await equipment.delete_with_dependents(equipment_id)
    return MessageResponse(message="Equipment deleted successfully")


# =============================================================================
# SENSOR INGESTION
# =============================================================================
@sensor_router.post(
    "",
    response_model=SensorReading,
    status_code=status.HTTP_201_CREATED,
    responses=_NOT_FOUND,
)
async def add_sensor_data(payload: SensorReadingCreate, sensors: Sensors, predictor: Predictor):
    """
    Store a sensor reading, then refresh the equipment's failure prediction.

    The reading is committed before the prediction runs; if the prediction
    fails the request reports the error but the reading stays stored.
    """
    reading = await sensors.add_reading(payload)
    await predictor.predict_and_persist(reading.equipment_id)
    return reading


# =============================================================================
# MAINTENANCE LOGS
# =============================================================================
@maintenance_router.post(
    "",
    response_model=MaintenanceLog,
    status_code=status.HTTP_201_CREATED,
    responses=_NOT_FOUND,
)
async def add_maintenance_log(payload: MaintenanceLogCreate, logs: MaintenanceLogs):
    return await logs.add_log(payload)


# =============================================================================
# PREDICTIONS
# =============================================================================
@prediction_router.get("/{equipment_id}", response_model=List[PredictionWithEquipment])
async def get_predictions(
    equipment_id: str,
    predictions: Predictions,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """Prediction history of one equipment, most recent first."""
    return await predictions.list_for_equipment(equipment_id, skip=skip, limit=limit)


@prediction_router.post(
    "/{equipment_id}",
    response_model=Prediction,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_NOT_FOUND,
        422: {"model": ErrorResponse, "description": "No sensor data for the equipment"},
    },
)
async def recompute_prediction(equipment_id: str, equipment: Equipments, predictor: Predictor):
    """Recompute the prediction from the full sensor history on demand."""
    await equipment.get_or_404(equipment_id)
    return await predictor.predict_and_persist(equipment_id)


routers = (equipment_router, sensor_router, maintenance_router, prediction_router)
