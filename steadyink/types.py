"""Core data types for SteadyInk.

Points are immutable; every filter returns a new point rather than
modifying the one it was given.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class Point:
    """A bare 2D coordinate."""
    x: float
    y: float


@dataclass(frozen=True)
class PointerPoint(Point):
    """A pointer sample with a timestamp (milliseconds) and optional pressure."""
    timestamp: float
    pressure: Optional[float] = None


class FilterType(str, Enum):
    """Type tags of the real-time filters."""
    NOISE = "noise"
    EMA = "ema"
    KALMAN = "kalman"
    MOVING_AVERAGE = "movingAverage"
    STRING = "string"
    ONE_EURO = "oneEuro"
    LINEAR_PREDICTION = "linearPrediction"


class Filter(ABC):
    """A causal point transformer.

    ``process`` returns ``None`` to reject a point: it is neither forwarded
    to the next filter nor buffered.
    """

    type: FilterType

    @abstractmethod
    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        ...

    @abstractmethod
    def reset(self) -> None:
        """Forget all history; the next point starts a fresh stream."""


class UpdatableFilter(Filter):
    """A filter whose parameters can change without losing its state.

    Subclasses keep their parameters in a dataclass stored on ``params``.
    Changes apply from the next ``process`` call; filters with bounded
    history trim it right away.
    """

    params: Any

    def update_params(self, **changes) -> None:
        self.params = replace(self.params, **changes)
