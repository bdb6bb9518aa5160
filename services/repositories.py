"""Vigil Maintenance — Repositories consumed by the predictor.

The predictor depends only on two narrow capabilities: reading every sensor
reading of an equipment and persisting a prediction. Both are expressed as
protocols so the orchestration can run against any store; the SQLAlchemy
implementations below are the production ones.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.exceptions import StoreError
from db.models import Prediction, SensorReading
from logger import get_logger

logger = get_logger(__name__)


class SensorRepository(Protocol):
    """Read access to sensor readings."""

    async def get_readings_for_equipment(self, equipment_id: str) -> Sequence[SensorReading]:
        """Return every reading of the equipment; empty when there are none."""
        ...


class PredictionRepository(Protocol):
    """Write access to prediction records."""

    async def create_prediction(self, prediction: Prediction) -> Prediction:
        """Persist the prediction and return it."""
        ...


class SqlSensorRepository:
    """SensorRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_readings_for_equipment(self, equipment_id: str) -> list[SensorReading]:
        try:
            result = await self.db.execute(
                select(SensorReading).where(SensorReading.equipment_id == equipment_id)
            )
        except SQLAlchemyError as exc:
            logger.error(
                "Sensor lookup failed",
                equipment_id=equipment_id,
                error_type=type(exc).__name__,
            )
            raise StoreError("get_readings_for_equipment", str(exc)) from exc
        return list(result.scalars().all())


class SqlPredictionRepository:
    """PredictionRepository backed by an AsyncSession.

    ``create_prediction`` commits on its own, so a stored prediction never
    depends on the outcome of the surrounding request.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_prediction(self, prediction: Prediction) -> Prediction:
        self.db.add(prediction)
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(
                "Prediction persist failed",
                equipment_id=prediction.equipment_id,
                error_type=type(exc).__name__,
            )
            raise StoreError("create_prediction", str(exc)) from exc
        return prediction

    async def list_for_equipment(
        self,
        equipment_id: str,
        *,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Prediction]:
        """Predictions of one equipment, most recent first, parent loaded."""
        try:
            result = await self.db.execute(
                select(Prediction)
                .where(Prediction.equipment_id == equipment_id)
                .options(selectinload(Prediction.equipment))
                .order_by(Prediction.created_at.desc(), Prediction.id)
                .offset(skip)
                .limit(limit)
            )
        except SQLAlchemyError as exc:
            raise StoreError("list_predictions", str(exc)) from exc
        return list(result.scalars().all())
