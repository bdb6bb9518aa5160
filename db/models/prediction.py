"""Vigil Maintenance — Prediction ORM Model."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from db.base import Base, IdentityMixin, TimestampMixin, UTCDateTime


class Prediction(IdentityMixin, TimestampMixin, Base):
    """A failure-probability estimate with a forecast date.

    Append-only history: each predictor run inserts a new row.
    """
    __tablename__ = "predictions"
    __table_args__ = (
        CheckConstraint(
            "failure_probability >= 0 AND failure_probability <= 1",
            name="ck_predictions_probability_range",
        ),
    )

    equipment_id = Column(String(36), ForeignKey("equipment.id"), nullable=False, index=True)
    predicted_failure_date = Column(UTCDateTime, nullable=False)
    failure_probability = Column(Float, nullable=False)

    equipment = relationship("Equipment", lazy="raise")
