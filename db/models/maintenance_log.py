"""Vigil Maintenance — Maintenance Log ORM Model."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from db.base import Base, IdentityMixin, UTCDateTime, utcnow


class MaintenanceLog(IdentityMixin, Base):
    """Free-text record of maintenance work carried out on an equipment."""
    __tablename__ = "maintenance_logs"

    equipment_id = Column(String(36), ForeignKey("equipment.id"), nullable=False, index=True)
    date = Column(UTCDateTime, nullable=False, default=utcnow)
    description = Column(Text, nullable=False)

    equipment = relationship("Equipment", lazy="raise")
