"""Noise gate: drops samples that barely moved."""

import math
from dataclasses import dataclass
from typing import Optional

from ..types import FilterType, PointerPoint, UpdatableFilter


@dataclass
class NoiseFilterParams:
    # Points closer than this to the last accepted point are rejected
    min_distance: float


class NoiseFilter(UpdatableFilter):
    """Rejects points within ``min_distance`` of the last accepted point.

    The first point of a stream is always accepted. A point at exactly
    ``min_distance`` is accepted.
    """

    type = FilterType.NOISE

    def __init__(self, min_distance: float):
        self.params = NoiseFilterParams(min_distance=min_distance)
        self._last: Optional[PointerPoint] = None

    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        if self._last is None:
            self._last = point
            return point

        distance = math.hypot(point.x - self._last.x, point.y - self._last.y)
        if distance < self.params.min_distance:
            return None

        self._last = point
        return point

    def reset(self) -> None:
        self._last = None
