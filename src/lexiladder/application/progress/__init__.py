# Application Progress Package
from .metrics_calculator import MetricsCalculator, ProgressSummary

__all__ = ["MetricsCalculator", "ProgressSummary"]
