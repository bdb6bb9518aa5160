"""
Failure Risk Computation
Pure, synchronous core of the predictor: sensor values in, failure
probability and forecast date out. No I/O and no shared state.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from numbers import Real
from typing import Iterable, Optional

import numpy as np

from core.exceptions import InvalidReadingError, NoDataError
from predictor.estimators import MedianThreshold, ReadingSummary, RiskEstimator

DEFAULT_HORIZON = timedelta(hours=30)
DEFAULT_ESTIMATOR = MedianThreshold()


@dataclass(frozen=True)
class FailureRisk:
    """Result of one risk computation."""
    probability: float
    forecast_date: datetime
    summary: ReadingSummary


def _as_array(readings: Iterable[float]) -> np.ndarray:
    """Copy readings into a float array, rejecting anything non-finite."""
    values = list(readings)
    for position, value in enumerate(values):
        # bool is a Real subclass but never a sensor value
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidReadingError(value, position)
    array = np.asarray(values, dtype=np.float64)
    if array.size:
        finite = np.isfinite(array)
        if not finite.all():
            position = int(np.argmin(finite))
            raise InvalidReadingError(values[position], position)
    return array


def median(readings: Iterable[float]) -> float:
    """
    Median of the readings, independent of input order.

    Odd count: the middle element after sorting. Even count: the mean of
    the two central elements. The caller's sequence is not modified.

    Raises:
        NoDataError: If there are no readings.
        InvalidReadingError: If a reading is not a finite number.
    """
    return summarize(readings).median


def summarize(readings: Iterable[float]) -> ReadingSummary:
    """Build the ReadingSummary handed to risk estimators."""
    array = np.sort(_as_array(readings))
    n = array.size
    if n == 0:
        raise NoDataError()

    mid = n // 2
    if n % 2 == 0:
        middle = (array[mid - 1] + array[mid]) / 2.0
    else:
        middle = array[mid]

    return ReadingSummary(
        count=int(n),
        median=float(middle),
        minimum=float(array[0]),
        maximum=float(array[-1]),
    )


def compute_failure_risk(
    readings: Iterable[float],
    *,
    estimator: Optional[RiskEstimator] = None,
    horizon: timedelta = DEFAULT_HORIZON,
    now: Optional[datetime] = None,
) -> FailureRisk:
    """
    Estimate failure probability from an equipment's sensor values.

    Args:
        readings: Sensor values, in any order. Must not be empty.
        estimator: Risk estimation strategy (MedianThreshold by default).
        horizon: Offset from ``now`` to the forecast failure date.
        now: Computation time; defaults to the current UTC time. Passing the
            same ``now`` and readings always yields the same result.

    Raises:
        NoDataError: If ``readings`` is empty.
        InvalidReadingError: If a reading is not a finite number.
        ValueError: If the estimator returns a probability outside [0, 1].
    """
    summary = summarize(readings)
    estimator = estimator or DEFAULT_ESTIMATOR

    probability = float(estimator.estimate(summary))
    if not 0.0 <= probability <= 1.0:
        raise ValueError(
            f"{estimator!r} returned probability {probability}, expected a value in [0, 1]"
        )

    if now is None:
        now = datetime.now(timezone.utc)

    return FailureRisk(
        probability=probability,
        forecast_date=now + horizon,
        summary=summary,
    )
