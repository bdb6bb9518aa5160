"""Vigil Maintenance — Prediction Service.

Orchestrates the maintenance predictor: reads an equipment's sensor
history, runs the pure risk computation and appends a Prediction record.

The read and the write are two separate operations with no shared
transaction. Concurrent calls for the same equipment each append their
own row.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from config import PredictorSettings
from core.exceptions import NoDataError
from db.models import Prediction
from logger import get_logger
from predictor import DEFAULT_HORIZON, MedianThreshold, RiskEstimator, compute_failure_risk
from services.repositories import PredictionRepository, SensorRepository

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MaintenancePredictor:
    """Failure-risk predictor bound to a sensor and a prediction repository.

    Args:
        sensors: Source of sensor readings.
        predictions: Sink for prediction records.
        estimator: Risk estimation strategy.
        horizon: Offset from computation time to the forecast failure date.
        clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        sensors: SensorRepository,
        predictions: PredictionRepository,
        estimator: RiskEstimator | None = None,
        horizon: timedelta = DEFAULT_HORIZON,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.sensors = sensors
        self.predictions = predictions
        self.estimator = estimator or MedianThreshold()
        self.horizon = horizon
        self.clock = clock
        self.logger = logger.bind(service="MaintenancePredictor")

    @classmethod
    def from_settings(
        cls,
        settings: PredictorSettings,
        sensors: SensorRepository,
        predictions: PredictionRepository,
    ) -> "MaintenancePredictor":
        """Build a predictor using the MedianThreshold strategy from settings."""
        return cls(
            sensors,
            predictions,
            estimator=MedianThreshold(
                threshold=settings.failure_threshold,
                high_risk_probability=settings.high_risk_probability,
                low_risk_probability=settings.low_risk_probability,
            ),
            horizon=timedelta(hours=settings.horizon_hours),
        )

    async def predict_and_persist(self, equipment_id: str) -> Prediction:
        """Compute and store a new prediction for one equipment.

        Args:
            equipment_id: Equipment whose full sensor history is used.

        Returns:
            The stored Prediction.

        Raises:
            NoDataError: If the equipment has no readings. Nothing is stored.
            StoreError: If reading history or storing the prediction fails.
        """
        readings = await self.sensors.get_readings_for_equipment(equipment_id)
        if not readings:
            self.logger.info("No sensor data, skipping prediction", equipment_id=equipment_id)
            raise NoDataError(equipment_id)

        now = self.clock()
        risk = compute_failure_risk(
            [reading.value for reading in readings],
            estimator=self.estimator,
            horizon=self.horizon,
            now=now,
        )

        self.logger.info(
            "Failure risk computed",
            equipment_id=equipment_id,
            readings=risk.summary.count,
            median=risk.summary.median,
            probability=risk.probability,
        )

        prediction = Prediction(
            equipment_id=equipment_id,
            predicted_failure_date=risk.forecast_date,
            failure_probability=risk.probability,
            created_at=now,
            updated_at=now,
        )
        prediction = await self.predictions.create_prediction(prediction)

        self.logger.info(
            "Prediction stored",
            equipment_id=equipment_id,
            prediction_id=prediction.id,
        )
        return prediction
