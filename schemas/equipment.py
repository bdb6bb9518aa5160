"""Vigil Maintenance — Equipment Schemas.

Pydantic models for Equipment API requests and responses.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EquipmentBase(BaseModel):
    """Shared properties for Equipment models."""
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=50)


class EquipmentCreate(EquipmentBase):
    """Payload for registering a new equipment."""
    pass


class Equipment(EquipmentBase):
    """Full Equipment resource response."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime
