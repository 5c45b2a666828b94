"""Test fixtures and helpers."""

from typing import Callable, Dict, List

from steadyink.types import PointerPoint


def make_point(x: float, y: float, timestamp: float = 0.0, pressure=None) -> PointerPoint:
    return PointerPoint(x=x, y=y, timestamp=timestamp, pressure=pressure)


class FakeScheduler:
    """Scheduler that only fires when the test says a frame has passed."""

    def __init__(self):
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._next_token = 0
        self.requested = 0
        self.cancelled: List[int] = []

    def request_callback(self, callback: Callable[[], None]) -> int:
        self._next_token += 1
        self.requested += 1
        self._callbacks[self._next_token] = callback
        return self._next_token

    def cancel_callback(self, token: int) -> None:
        self.cancelled.append(token)
        self._callbacks.pop(token, None)

    @property
    def outstanding(self) -> int:
        return len(self._callbacks)

    def run_frame(self):
        """Fire every callback scheduled so far."""
        callbacks, self._callbacks = self._callbacks, {}
        for callback in callbacks.values():
            callback()
