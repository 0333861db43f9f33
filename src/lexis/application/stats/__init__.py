# Application Stats Package
from .metrics_calculator import MetricsCalculator, compute_review_stats

__all__ = ["MetricsCalculator", "compute_review_stats"]
