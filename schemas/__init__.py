"""Vigil Maintenance — API Schemas.

Request and response models for every resource exposed by the API.
"""

from schemas.equipment import Equipment, EquipmentCreate
from schemas.maintenance import MaintenanceLog, MaintenanceLogCreate
from schemas.prediction import Prediction, PredictionWithEquipment
from schemas.response import ErrorResponse, MessageResponse, ORJSONResponse
from schemas.sensor import SensorReading, SensorReadingCreate

__all__ = [
    "Equipment",
    "EquipmentCreate",
    "ErrorResponse",
    "MaintenanceLog",
    "MaintenanceLogCreate",
    "MessageResponse",
    "ORJSONResponse",
    "Prediction",
    "PredictionWithEquipment",
    "SensorReading",
    "SensorReadingCreate",
]
