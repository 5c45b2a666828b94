"""Non-causal smoothing of finished strokes.

Operates on whole point sequences after the pen lifts. All functions
return new lists and never modify their input.
"""

from typing import List, Sequence, Union

from .kernels import AdaptiveKernel, FixedKernel, Kernel, PaddingMode
from .types import Point

ORIGIN = Point(x=0.0, y=0.0)


def apply_padding(points: Sequence[Point], half_size: int,
                  mode: Union[PaddingMode, str] = PaddingMode.REFLECT) -> List[Point]:
    """Extend ``points`` by ``half_size`` synthesized points on each side.

    ``reflect`` mirrors interior points by index (the boundary point itself
    is not repeated), ``edge`` repeats the boundary point and ``zero`` pads
    with the origin.
    """
    if not points:
        return []

    mode = PaddingMode(mode)
    n = len(points)
    last = n - 1

    if mode == PaddingMode.REFLECT:
        head = [points[min(i, last)] for i in range(half_size, 0, -1)]
        tail = [points[max(0, last - i)] for i in range(1, half_size + 1)]
    elif mode == PaddingMode.EDGE:
        head = [points[0]] * half_size
        tail = [points[last]] * half_size
    else:
        head = [ORIGIN] * half_size
        tail = [ORIGIN] * half_size

    return head + list(points) + tail


def smooth(points: Sequence[Point], kernel: Kernel,
           padding: Union[PaddingMode, str] = PaddingMode.REFLECT,
           preserve_endpoints: bool = True) -> List[Point]:
    """Convolve a stroke with ``kernel``.

    The output has the same length as the input. With
    ``preserve_endpoints`` the first and last output points are the exact
    input coordinates, so padding cannot pull the stroke away from where
    the pen touched down and lifted.
    """
    if not points:
        return []

    if isinstance(kernel, AdaptiveKernel):
        size = kernel.size
    elif isinstance(kernel, FixedKernel):
        size = kernel.size
        if size <= 1:
            return list(points)
    else:
        raise TypeError(f"Unsupported kernel: {kernel!r}")

    half = size // 2
    padded = apply_padding(points, half, padding)
    result = []

    for i in range(len(points)):
        window = padded[i:i + size]
        if isinstance(kernel, AdaptiveKernel):
            weights = kernel.compute_weights(padded[i + half], window)
        else:
            weights = kernel.weights

        sx = sum(w * p.x for w, p in zip(weights, window))
        sy = sum(w * p.y for w, p in zip(weights, window))
        result.append(Point(x=sx, y=sy))

    if preserve_endpoints:
        first, last = points[0], points[-1]
        result[0] = Point(x=first.x, y=first.y)
        result[-1] = Point(x=last.x, y=last.y)

    return result
