"""String (lazy brush) stabilizer."""

import math
from dataclasses import dataclass
from typing import Optional

from ..types import FilterType, PointerPoint, UpdatableFilter


@dataclass
class StringFilterParams:
    string_length: float


class StringFilter(UpdatableFilter):
    """Dead-zone stabilizer: the output is an anchor tethered to the pen.

    While the pen stays within ``string_length`` of the anchor the anchor
    does not move. Once the string goes taut the anchor is dragged along
    the pen direction by the excess distance.
    """

    type = FilterType.STRING

    def __init__(self, string_length: float):
        self.params = StringFilterParams(string_length=string_length)
        self._anchor: Optional[PointerPoint] = None

    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        anchor = self._anchor
        if anchor is None:
            self._anchor = point
            return point

        dx = point.x - anchor.x
        dy = point.y - anchor.y
        distance = math.hypot(dx, dy)
        length = max(0.0, self.params.string_length)

        if distance <= length:
            return PointerPoint(
                x=anchor.x, y=anchor.y,
                timestamp=point.timestamp, pressure=point.pressure,
            )

        ratio = (distance - length) / distance
        self._anchor = PointerPoint(
            x=anchor.x + dx * ratio,
            y=anchor.y + dy * ratio,
            timestamp=point.timestamp,
            pressure=point.pressure,
        )
        return self._anchor

    def reset(self) -> None:
        self._anchor = None
