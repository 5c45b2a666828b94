"""Least-squares motion prediction filter.

Fits ``p(t) = a + b*t + c*t^2`` to the recent history of each axis and
extrapolates slightly ahead to compensate for the latency other filters
add. The prediction is blended with the previous output to keep the
extrapolation from amplifying jitter.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from ..types import FilterType, PointerPoint, UpdatableFilter

# Smallest prediction step in seconds
MIN_DT = 0.001

# Determinant below which the quadratic normal equations count as singular
SINGULAR_THRESHOLD = 1e-10

DEFAULT_SMOOTHING = 0.6


@dataclass
class LinearPredictionFilterParams:
    # Number of past points used for the fit (3 - 5 recommended)
    history_size: int
    # 0 disables prediction, 1 predicts one sample interval ahead
    prediction_factor: float
    # Blend of the prediction against the previous output; None disables it
    smoothing: Optional[float] = DEFAULT_SMOOTHING


def polynomial_fit(ts: List[float], vs: List[float]) -> Tuple[float, float, float]:
    """Least-squares quadratic fit, returns ``(a, b, c)``.

    Solves the 3x3 normal equations with Cramer's rule. A singular system
    (fewer than three distinct times) falls back to a linear fit with
    ``c = 0``.
    """
    n = len(ts)
    s1 = s2 = s3 = s4 = 0.0
    sy = sty = st2y = 0.0
    for t, v in zip(ts, vs):
        t2 = t * t
        s1 += t
        s2 += t2
        s3 += t2 * t
        s4 += t2 * t2
        sy += v
        sty += t * v
        st2y += t2 * v

    det = (n * (s2 * s4 - s3 * s3)
           - s1 * (s1 * s4 - s3 * s2)
           + s2 * (s1 * s3 - s2 * s2))

    if abs(det) < SINGULAR_THRESHOLD:
        mean_t = s1 / n
        mean_v = sy / n
        num = sum((t - mean_t) * (v - mean_v) for t, v in zip(ts, vs))
        den = sum((t - mean_t) ** 2 for t in ts)
        b = num / den if den > 0 else 0.0
        return mean_v - b * mean_t, b, 0.0

    a = (sy * (s2 * s4 - s3 * s3)
         - s1 * (sty * s4 - s3 * st2y)
         + s2 * (sty * s3 - s2 * st2y)) / det
    b = (n * (sty * s4 - s3 * st2y)
         - sy * (s1 * s4 - s3 * s2)
         + s2 * (s1 * st2y - sty * s2)) / det
    c = (n * (s2 * st2y - sty * s3)
         - s1 * (s1 * st2y - sty * s2)
         + sy * (s1 * s3 - s2 * s2)) / det
    return a, b, c


class LinearPredictionFilter(UpdatableFilter):
    type = FilterType.LINEAR_PREDICTION

    def __init__(self, history_size: int, prediction_factor: float,
                 smoothing: Optional[float] = DEFAULT_SMOOTHING):
        self.params = LinearPredictionFilterParams(
            history_size=history_size,
            prediction_factor=prediction_factor,
            smoothing=smoothing,
        )
        self._history: Deque[PointerPoint] = deque()
        self._last_output: Optional[PointerPoint] = None

    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        self._history.append(point)
        self._trim()

        if len(self._history) == 1:
            self._last_output = point
            return point

        (vx, vy), (ax, ay) = self._estimate_motion()

        dt = max(MIN_DT, (self._history[-1].timestamp - self._history[-2].timestamp) / 1000)
        factor = self.params.prediction_factor
        x = point.x + vx * dt * factor + 0.5 * ax * dt * dt * factor
        y = point.y + vy * dt * factor + 0.5 * ay * dt * dt * factor
        pressure = point.pressure

        s = self.params.smoothing
        last = self._last_output
        if last is not None and s is not None:
            x = s * x + (1 - s) * last.x
            y = s * y + (1 - s) * last.y
            if point.pressure is not None and last.pressure is not None:
                pressure = s * point.pressure + (1 - s) * last.pressure

        self._last_output = PointerPoint(x=x, y=y, timestamp=point.timestamp, pressure=pressure)
        return self._last_output

    def _estimate_motion(self):
        """Velocity and acceleration per axis at the newest sample, in units/s."""
        history = self._history
        t0 = history[0].timestamp
        ts = [(p.timestamp - t0) / 1000 for p in history]
        xs = [p.x for p in history]
        ys = [p.y for p in history]

        if len(history) == 2:
            dt = ts[1] - ts[0]
            if dt <= 0:
                return (0.0, 0.0), (0.0, 0.0)
            return ((xs[1] - xs[0]) / dt, (ys[1] - ys[0]) / dt), (0.0, 0.0)

        _, bx, cx = polynomial_fit(ts, xs)
        _, by, cy = polynomial_fit(ts, ys)
        t = ts[-1]
        return (bx + 2 * cx * t, by + 2 * cy * t), (2 * cx, 2 * cy)

    def _trim(self):
        limit = max(1, int(self.params.history_size) + 1)
        while len(self._history) > limit:
            self._history.popleft()

    def update_params(self, **changes) -> None:
        super().update_params(**changes)
        self._trim()

    def reset(self) -> None:
        self._history.clear()
        self._last_output = None
