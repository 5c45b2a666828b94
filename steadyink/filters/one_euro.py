"""One Euro filter: velocity-adaptive low-pass smoothing.

Slow movement gets a low cutoff (strong jitter removal); fast movement
raises the cutoff so the output keeps up with the pen.

See https://cristal.univ-lille.fr/~casiez/1euro/
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..types import FilterType, PointerPoint, UpdatableFilter

# Sample rate assumed for the first point or a non-increasing timestamp
DEFAULT_RATE = 60.0

DEFAULT_D_CUTOFF = 1.0


@dataclass
class OneEuroFilterParams:
    # Cutoff in Hz at rest; recommended 0.5 - 2.0
    min_cutoff: float
    # Cutoff increase per unit of speed; recommended 0.001 - 0.01
    beta: float
    # Cutoff in Hz for the derivative estimate
    d_cutoff: float = DEFAULT_D_CUTOFF


class LowPass:
    """Single-pole low-pass filter with an externally set coefficient."""

    def __init__(self):
        self.value: Optional[float] = None
        self._alpha = 1.0

    def set_alpha(self, alpha: float):
        self._alpha = max(0.0, min(1.0, alpha))

    def filter(self, value: float) -> float:
        if self.value is None:
            self.value = value
        else:
            self.value = self._alpha * value + (1 - self._alpha) * self.value
        return self.value

    def reset(self):
        self.value = None


def smoothing_factor(cutoff: float, rate: float) -> float:
    """Convert a cutoff frequency to an exponential smoothing coefficient."""
    if cutoff <= 0:
        # Limit of the formula as the cutoff approaches zero
        return 0.0
    tau = 1.0 / (2 * math.pi * cutoff)
    te = 1.0 / rate
    return 1.0 / (1.0 + tau / te)


class OneEuroFilter(UpdatableFilter):
    type = FilterType.ONE_EURO

    def __init__(self, min_cutoff: float, beta: float, d_cutoff: float = DEFAULT_D_CUTOFF):
        self.params = OneEuroFilterParams(min_cutoff=min_cutoff, beta=beta, d_cutoff=d_cutoff)
        self._x = LowPass()
        self._y = LowPass()
        self._dx = LowPass()
        self._dy = LowPass()
        self._pressure = LowPass()
        self._last_timestamp: Optional[float] = None

    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        rate = DEFAULT_RATE
        if self._last_timestamp is not None:
            dt = (point.timestamp - self._last_timestamp) / 1000
            if dt > 0:
                rate = 1.0 / dt
        self._last_timestamp = point.timestamp

        x = self._filter_axis(point.x, self._x, self._dx, rate)
        y = self._filter_axis(point.y, self._y, self._dy, rate)

        pressure = None
        if point.pressure is not None:
            # Pressure is not speed dependent
            self._pressure.set_alpha(smoothing_factor(self.params.min_cutoff, rate))
            pressure = self._pressure.filter(point.pressure)

        return PointerPoint(x=x, y=y, timestamp=point.timestamp, pressure=pressure)

    def _filter_axis(self, value: float, value_filter: LowPass,
                     derivative_filter: LowPass, rate: float) -> float:
        previous = value_filter.value
        derivative = 0.0 if previous is None else (value - previous) * rate

        derivative_filter.set_alpha(smoothing_factor(self.params.d_cutoff, rate))
        speed = abs(derivative_filter.filter(derivative))

        cutoff = self.params.min_cutoff + self.params.beta * speed
        value_filter.set_alpha(smoothing_factor(cutoff, rate))
        return value_filter.filter(value)

    def reset(self) -> None:
        for low_pass in (self._x, self._y, self._dx, self._dy, self._pressure):
            low_pass.reset()
        self._last_timestamp = None
