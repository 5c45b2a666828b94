"""Convolution kernels for post-processing a finished stroke.

Kernels run along the point index of a stroke, not over an XY grid.
Every factory forces an odd size by rounding even sizes up (4 -> 5), so
each kernel has a well-defined center.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from .types import Point


class PaddingMode(str, Enum):
    """How out-of-range neighbors are synthesized at stroke boundaries."""
    REFLECT = "reflect"
    EDGE = "edge"
    ZERO = "zero"


@dataclass(frozen=True)
class FixedKernel:
    """Precomputed normalized weights."""
    type: str
    weights: List[float]

    @property
    def size(self) -> int:
        return len(self.weights)


@dataclass(frozen=True)
class AdaptiveKernel:
    """Kernel whose weights are recomputed for every output point.

    ``compute_weights(center, neighbors)`` receives the ``size`` neighbors
    of a window (center included) and returns one weight per neighbor.
    """
    type: str
    size: int
    compute_weights: Callable[[Point, Sequence[Point]], List[float]]


Kernel = Union[FixedKernel, AdaptiveKernel]


def odd_size(size: int) -> int:
    size = max(1, int(size))
    return size + 1 if size % 2 == 0 else size


def _normalize(weights: List[float]) -> List[float]:
    total = sum(weights)
    if total <= 0:
        return weights
    return [w / total for w in weights]


def box_kernel(size: int) -> FixedKernel:
    """Uniform weights, a plain moving average."""
    size = odd_size(size)
    return FixedKernel(type="box", weights=[1.0 / size] * size)


def triangle_kernel(size: int) -> FixedKernel:
    """Weights rise linearly to the center: size 5 -> [1, 2, 3, 2, 1] / 9."""
    size = odd_size(size)
    half = size // 2
    weights = [float(half + 1 - abs(i - half)) for i in range(size)]
    return FixedKernel(type="triangle", weights=_normalize(weights))


def gaussian_kernel(size: int, sigma: Optional[float] = None) -> FixedKernel:
    """Gaussian weights; ``sigma`` defaults to ``size / 3``."""
    if sigma is None:
        sigma = size / 3
    size = odd_size(size)
    half = size // 2
    if sigma <= 0:
        # Degenerates to an impulse at the center
        weights = [0.0] * size
        weights[half] = 1.0
        return FixedKernel(type="gaussian", weights=weights)

    weights = [math.exp(-((i - half) ** 2) / (2 * sigma * sigma)) for i in range(size)]
    return FixedKernel(type="gaussian", weights=_normalize(weights))


def bilateral_kernel(size: int, sigma_value: float,
                     sigma_space: Optional[float] = None) -> AdaptiveKernel:
    """Edge-preserving kernel.

    Each neighbor's weight is its Gaussian distance in the sequence times a
    Gaussian of its spatial distance to the center point, so neighbors on
    the far side of a sharp corner barely contribute.

    Args:
        size: Window size, forced odd.
        sigma_value: Spread of the value (spatial distance) term, in
            coordinate units.
        sigma_space: Spread of the index term; defaults to ``size / 3``
            computed after the odd-size correction.
    """
    size = odd_size(size)
    if sigma_space is None:
        sigma_space = size / 3
    half = size // 2

    if sigma_space > 0:
        index_weights = [math.exp(-((i - half) ** 2) / (2 * sigma_space * sigma_space))
                         for i in range(size)]
    else:
        index_weights = [1.0 if i == half else 0.0 for i in range(size)]

    def compute_weights(center: Point, neighbors: Sequence[Point]) -> List[float]:
        weights = []
        for i, neighbor in enumerate(neighbors):
            dx = neighbor.x - center.x
            dy = neighbor.y - center.y
            dist_sq = dx * dx + dy * dy
            if sigma_value > 0:
                value_weight = math.exp(-dist_sq / (2 * sigma_value * sigma_value))
            else:
                value_weight = 1.0 if dist_sq == 0 else 0.0
            weights.append(index_weights[i] * value_weight)
        return _normalize(weights)

    return AdaptiveKernel(type="bilateral", size=size, compute_weights=compute_weights)
