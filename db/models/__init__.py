"""Vigil Maintenance — ORM models.

Importing this package registers every mapper on ``Base.metadata``.
"""

from db.models.equipment import Equipment
from db.models.maintenance_log import MaintenanceLog
from db.models.prediction import Prediction
from db.models.sensor_reading import SensorReading

__all__ = [
    "Equipment",
    "MaintenanceLog",
    "Prediction",
    "SensorReading",
]
