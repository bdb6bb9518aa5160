"""Vigil Maintenance — Maintenance Log Schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MaintenanceLogCreate(BaseModel):
    """Payload for recording maintenance work.

    ``date`` defaults to the time the log is stored.
    """
    equipment_id: str = Field(..., min_length=1, max_length=36)
    description: str = Field(..., min_length=1, max_length=10000)
    date: Optional[datetime] = None


class MaintenanceLog(BaseModel):
    """Stored maintenance log."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    equipment_id: str
    description: str
    date: datetime
