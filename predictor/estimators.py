"""
Risk Estimators
Map a summary of an equipment's sensor history to a failure probability.

An estimator is any object with an ``estimate(summary) -> float`` method;
the orchestration code never depends on a concrete estimator.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ReadingSummary:
    """Summary statistics of a non-empty set of sensor values."""
    count: int
    median: float
    minimum: float
    maximum: float


@runtime_checkable
class RiskEstimator(Protocol):
    """Strategy interface: summary statistics in, probability in [0, 1] out."""

    def estimate(self, summary: ReadingSummary) -> float:
        ...


class MedianThreshold:
    """
    Binary threshold classifier on the median.

    Reports ``high_risk_probability`` when the median is strictly greater
    than ``threshold`` and ``low_risk_probability`` otherwise. There is no
    interpolation between the two levels.
    """

    def __init__(
        self,
        threshold: float = 70.0,
        high_risk_probability: float = 0.8,
        low_risk_probability: float = 0.0,
    ):
        for name, value in (
            ("high_risk_probability", high_risk_probability),
            ("low_risk_probability", low_risk_probability),
        ):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        self.threshold = float(threshold)
        self.high_risk_probability = float(high_risk_probability)
        self.low_risk_probability = float(low_risk_probability)

    def estimate(self, summary: ReadingSummary) -> float:
        if summary.median > self.threshold:
            return self.high_risk_probability
        return self.low_risk_probability

    def __repr__(self) -> str:
        return (
            f"MedianThreshold(threshold={self.threshold}, "
            f"high={self.high_risk_probability}, low={self.low_risk_probability})"
        )
