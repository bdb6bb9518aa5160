"""Vigil Maintenance — Sensor Reading ORM Model."""

from __future__ import annotations

from sqlalchemy import Column, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from db.base import Base, IdentityMixin, TimestampMixin


class SensorReading(IdentityMixin, TimestampMixin, Base):
    """One timestamped numeric observation tied to an equipment. Immutable."""
    __tablename__ = "sensor_readings"

    equipment_id = Column(String(36), ForeignKey("equipment.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)  # e.g. 'temperature', 'vibration'
    value = Column(Float, nullable=False)

    equipment = relationship("Equipment", lazy="raise")
