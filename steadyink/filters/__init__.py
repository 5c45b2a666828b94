"""Real-time (causal) filters."""

from .ema import EmaFilter, EmaFilterParams
from .kalman import KalmanFilter, KalmanFilterParams
from .linear_prediction import LinearPredictionFilter, LinearPredictionFilterParams
from .moving_average import MovingAverageFilter, MovingAverageFilterParams
from .noise import NoiseFilter, NoiseFilterParams
from .one_euro import OneEuroFilter, OneEuroFilterParams
from .string import StringFilter, StringFilterParams

__all__ = [
    "NoiseFilter",
    "NoiseFilterParams",
    "EmaFilter",
    "EmaFilterParams",
    "KalmanFilter",
    "KalmanFilterParams",
    "MovingAverageFilter",
    "MovingAverageFilterParams",
    "StringFilter",
    "StringFilterParams",
    "OneEuroFilter",
    "OneEuroFilterParams",
    "LinearPredictionFilter",
    "LinearPredictionFilterParams",
]
