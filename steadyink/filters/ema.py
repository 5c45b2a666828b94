"""Exponential moving average filter."""

from dataclasses import dataclass
from typing import Optional

from ..types import FilterType, PointerPoint, UpdatableFilter


@dataclass
class EmaFilterParams:
    # 0 freezes the output, 1 passes input through untouched
    alpha: float


class EmaFilter(UpdatableFilter):
    """IIR smoothing: ``y = alpha * x + (1 - alpha) * y_prev``.

    Cheapest filter in the library and adds the least latency. Pressure is
    smoothed only when both the new point and the previous output carry it.
    Recommended ``alpha``: 0.2 (heavy) to 0.7 (light).
    """

    type = FilterType.EMA

    def __init__(self, alpha: float):
        self.params = EmaFilterParams(alpha=alpha)
        self._last: Optional[PointerPoint] = None

    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        if self._last is None:
            self._last = point
            return point

        alpha = self.params.alpha
        last = self._last

        pressure = point.pressure
        if point.pressure is not None and last.pressure is not None:
            pressure = alpha * point.pressure + (1 - alpha) * last.pressure

        self._last = PointerPoint(
            x=alpha * point.x + (1 - alpha) * last.x,
            y=alpha * point.y + (1 - alpha) * last.y,
            timestamp=point.timestamp,
            pressure=pressure,
        )
        return self._last

    def reset(self) -> None:
        self._last = None
