"""SteadyInk - pointer and stylus stroke stabilization."""

__version__ = "0.1.0"

from .filters import (
    EmaFilter,
    KalmanFilter,
    LinearPredictionFilter,
    MovingAverageFilter,
    NoiseFilter,
    OneEuroFilter,
    StringFilter,
)
from .kernels import (
    AdaptiveKernel,
    FixedKernel,
    PaddingMode,
    bilateral_kernel,
    box_kernel,
    gaussian_kernel,
    triangle_kernel,
)
from .pointer import StabilizedPointer
from .presets import PRESETS, create_from_preset, create_stabilized_pointer, get_preset
from .smoothing import smooth
from .types import Filter, FilterType, Point, PointerPoint, UpdatableFilter

__all__ = [
    "Point",
    "PointerPoint",
    "Filter",
    "UpdatableFilter",
    "FilterType",
    "NoiseFilter",
    "EmaFilter",
    "KalmanFilter",
    "MovingAverageFilter",
    "StringFilter",
    "OneEuroFilter",
    "LinearPredictionFilter",
    "FixedKernel",
    "AdaptiveKernel",
    "PaddingMode",
    "box_kernel",
    "triangle_kernel",
    "gaussian_kernel",
    "bilateral_kernel",
    "smooth",
    "StabilizedPointer",
    "PRESETS",
    "get_preset",
    "create_stabilized_pointer",
    "create_from_preset",
]
