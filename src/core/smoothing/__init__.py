"""
Smoothing modules

Сглаженные оценки position/velocity, их обновление alpha-beta фильтром
и аналитический интеграл отношения двух оценок по диапазону эпох.
"""

from src.core.smoothing.estimate import SmoothedEstimate
from src.core.smoothing.alpha_beta_filter import (
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    AlphaBetaFilter,
    AlphaBetaFilterConfig,
)
from src.core.smoothing.cumulative_ratio import cumulative_ratio

__all__ = [
    # Estimate
    "SmoothedEstimate",
    # Alpha-Beta Filter
    "DEFAULT_ALPHA",
    "DEFAULT_BETA",
    "AlphaBetaFilter",
    "AlphaBetaFilterConfig",
    # Cumulative Ratio
    "cumulative_ratio",
]
