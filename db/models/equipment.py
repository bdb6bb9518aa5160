"""Vigil Maintenance — Equipment ORM Model."""

from __future__ import annotations

from sqlalchemy import Column, String

from db.base import Base, IdentityMixin, TimestampMixin


class Equipment(IdentityMixin, TimestampMixin, Base):
    """A physical asset being monitored.

    Root of the ownership tree: sensor readings, maintenance logs and
    predictions belong to one equipment and are removed with it.
    """
    __tablename__ = "equipment"

    name = Column(String(255), nullable=False, index=True)
    type = Column(String(50), nullable=False)  # e.g. 'Pump', 'Compressor'

    def __repr__(self) -> str:
        return f"<Equipment id={self.id} name={self.name!r}>"
