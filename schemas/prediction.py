"""Vigil Maintenance — Prediction Schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from schemas.equipment import Equipment


class Prediction(BaseModel):
    """A stored failure-risk prediction."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    equipment_id: str
    predicted_failure_date: datetime
    failure_probability: float = Field(..., ge=0.0, le=1.0)
    created_at: datetime
    updated_at: datetime


class PredictionWithEquipment(Prediction):
    """Prediction with its parent equipment embedded."""
    equipment: Equipment
