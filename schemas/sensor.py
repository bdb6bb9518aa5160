"""Vigil Maintenance — Sensor Reading Schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SensorReadingCreate(BaseModel):
    """Payload for ingesting one sensor reading.

    ``value`` must be a finite number; NaN and infinities are rejected
    before they reach the store.
    """
    equipment_id: str = Field(..., min_length=1, max_length=36)
    type: str = Field(..., min_length=1, max_length=50, description="Reading category, e.g. 'temperature'")
    value: float = Field(..., allow_inf_nan=False)


class SensorReading(SensorReadingCreate):
    """Stored sensor reading."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime
