"""Constant-velocity Kalman filter for pointer positions."""

import math
from dataclasses import dataclass
from typing import Optional

from ..types import FilterType, PointerPoint, UpdatableFilter

# Smallest time step in seconds (1ms). Guards the velocity update against
# repeated or out-of-order timestamps.
MIN_DT = 0.001

DEFAULT_MAX_VELOCITY = 5000.0


@dataclass
class KalmanFilterParams:
    # Q: smaller trusts the prediction more
    process_noise: float
    # R: larger smooths more
    measurement_noise: float
    # Velocity magnitude cap in units per second
    max_velocity: float = DEFAULT_MAX_VELOCITY


@dataclass
class _KalmanState:
    x: float
    y: float
    vx: float
    vy: float
    p: float
    timestamp: float


class KalmanFilter(UpdatableFilter):
    """Per-axis Kalman filter over a [position, velocity] state.

    Both axes share one scalar covariance. Velocity is capped at
    ``max_velocity`` after every update; without the cap, rapid reversals
    sampled 1ms apart drive the estimate to huge values.
    """

    type = FilterType.KALMAN

    def __init__(self, process_noise: float, measurement_noise: float,
                 max_velocity: float = DEFAULT_MAX_VELOCITY):
        self.params = KalmanFilterParams(
            process_noise=process_noise,
            measurement_noise=measurement_noise,
            max_velocity=max_velocity,
        )
        self._state: Optional[_KalmanState] = None

    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        state = self._state
        if state is None:
            self._state = _KalmanState(
                x=point.x, y=point.y, vx=0.0, vy=0.0, p=1.0,
                timestamp=point.timestamp,
            )
            return point

        dt = max(MIN_DT, (point.timestamp - state.timestamp) / 1000)
        q = self.params.process_noise
        r = self.params.measurement_noise

        # Predict
        predicted_x = state.x + state.vx * dt
        predicted_y = state.y + state.vy * dt
        predicted_p = state.p + q

        # Update. With zero total uncertainty the measurement is taken as is.
        total = predicted_p + r
        gain = predicted_p / total if total > 0 else 1.0
        innovation_x = point.x - predicted_x
        innovation_y = point.y - predicted_y

        vx, vy = self._clamp_velocity(
            state.vx + gain * innovation_x / dt,
            state.vy + gain * innovation_y / dt,
        )

        self._state = _KalmanState(
            x=predicted_x + gain * innovation_x,
            y=predicted_y + gain * innovation_y,
            vx=vx,
            vy=vy,
            p=(1 - gain) * predicted_p,
            timestamp=point.timestamp,
        )

        return PointerPoint(
            x=self._state.x,
            y=self._state.y,
            timestamp=point.timestamp,
            pressure=point.pressure,
        )

    def _clamp_velocity(self, vx: float, vy: float):
        limit = self.params.max_velocity
        speed = math.hypot(vx, vy)
        if speed > limit:
            scale = limit / speed
            return vx * scale, vy * scale
        return vx, vy

    def reset(self) -> None:
        self._state = None
