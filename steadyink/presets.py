"""Stabilization presets.

A single 0-100 level picks the filter chain:

- 0: no stabilization
- 1-20: noise gate only
- 21-40: noise gate + Kalman
- 41-60: + moving average
- 61-80: + light string stabilizer
- 81-100: + strong string stabilizer
"""

from dataclasses import dataclass
from typing import Dict

from .filters import KalmanFilter, MovingAverageFilter, NoiseFilter, StringFilter
from .pointer import StabilizedPointer


@dataclass
class StabilizationPreset:
    """Named stabilization level."""
    name: str
    description: str
    level: int


PRESETS: Dict[str, StabilizationPreset] = {
    "none": StabilizationPreset(
        name="none",
        description="Raw input, no stabilization",
        level=0,
    ),
    "light": StabilizationPreset(
        name="light",
        description="Drops sensor noise only",
        level=20,
    ),
    "medium": StabilizationPreset(
        name="medium",
        description="Balanced smoothing (default)",
        level=50,
    ),
    "heavy": StabilizationPreset(
        name="heavy",
        description="Strong smoothing with a short string",
        level=75,
    ),
    "extreme": StabilizationPreset(
        name="extreme",
        description="Maximum smoothing with a long string",
        level=100,
    ),
}


def get_preset(name: str) -> StabilizationPreset:
    """Get a preset by name, defaults to 'medium' if not found."""
    return PRESETS.get(name, PRESETS["medium"])


def create_stabilized_pointer(level: float) -> StabilizedPointer:
    """Build a pointer whose filter chain grows with ``level`` (clamped to 0-100)."""
    level = max(0.0, min(100.0, level))
    pointer = StabilizedPointer()
    if level == 0:
        return pointer

    t = level / 100
    pointer.add_filter(NoiseFilter(min_distance=1.0 + t * 2.0))

    if level >= 21:
        pointer.add_filter(KalmanFilter(
            process_noise=0.12 - t * 0.08,
            measurement_noise=0.4 + t * 0.6,
        ))

    if level >= 41:
        pointer.add_filter(MovingAverageFilter(window_size=7 if level >= 61 else 5))

    if level >= 61:
        pointer.add_filter(StringFilter(string_length=15 if level >= 81 else 8))

    return pointer


def create_from_preset(name: str) -> StabilizedPointer:
    return create_stabilized_pointer(get_preset(name).level)
