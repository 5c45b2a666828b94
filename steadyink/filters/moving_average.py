"""Sliding-window moving average filter."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from ..types import FilterType, PointerPoint, UpdatableFilter


@dataclass
class MovingAverageFilterParams:
    window_size: int


class MovingAverageFilter(UpdatableFilter):
    """Averages the last ``window_size`` points (FIR).

    Pressure is averaged only over the points in the window that have it.
    A window of 1 passes points through.
    """

    type = FilterType.MOVING_AVERAGE

    def __init__(self, window_size: int):
        self.params = MovingAverageFilterParams(window_size=window_size)
        self._window: Deque[PointerPoint] = deque()

    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        self._window.append(point)
        self._trim()

        count = len(self._window)
        pressures = [p.pressure for p in self._window if p.pressure is not None]

        return PointerPoint(
            x=sum(p.x for p in self._window) / count,
            y=sum(p.y for p in self._window) / count,
            timestamp=point.timestamp,
            pressure=sum(pressures) / len(pressures) if pressures else None,
        )

    def _trim(self):
        # Always keep the newest point so the average is defined
        limit = max(1, int(self.params.window_size))
        while len(self._window) > limit:
            self._window.popleft()

    def update_params(self, **changes) -> None:
        super().update_params(**changes)
        self._trim()

    def reset(self) -> None:
        self._window.clear()
