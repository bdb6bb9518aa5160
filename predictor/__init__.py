# Predictor package
from .estimators import MedianThreshold, ReadingSummary, RiskEstimator
from .risk import DEFAULT_HORIZON, FailureRisk, compute_failure_risk, median, summarize

__all__ = [
    'DEFAULT_HORIZON',
    'FailureRisk',
    'MedianThreshold',
    'ReadingSummary',
    'RiskEstimator',
    'compute_failure_risk',
    'median',
    'summarize',
]
