"""Deferred batch processing of pointer samples.

Pointer events often arrive faster than the screen refreshes. A
``BatchQueue`` collects them and processes the whole batch once per
rendering opportunity. The scheduling primitive is injected; there is at
most one outstanding callback at a time.
"""

import asyncio
import logging
from typing import Any, Callable, Iterable, List, Optional, Protocol

from .types import PointerPoint

logger = logging.getLogger("steadyink.batching")

# Roughly one frame at 60Hz, in seconds
FRAME_DELAY = 0.016

PointCallback = Callable[[PointerPoint], None]
BatchCallback = Callable[[List[PointerPoint]], None]


class Scheduler(Protocol):
    """Notifies when the next rendering opportunity arrives."""

    def request_callback(self, callback: Callable[[], None]) -> Any:
        ...

    def cancel_callback(self, token: Any) -> None:
        ...


class AsyncioScheduler:
    """Fixed-delay fallback scheduler running on an asyncio event loop.

    Uses the running loop unless one is given explicitly.
    """

    def __init__(self, delay: float = FRAME_DELAY,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.delay = delay
        self._loop = loop

    def request_callback(self, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(self.delay, callback)

    def cancel_callback(self, token: asyncio.TimerHandle) -> None:
        token.cancel()


class BatchQueue:
    """Pending points plus the single scheduled flush that will drain them."""

    def __init__(self, process_all: Callable[[List[PointerPoint]], List[PointerPoint]],
                 scheduler: Scheduler,
                 on_point: Optional[PointCallback] = None,
                 on_batch: Optional[BatchCallback] = None):
        self._process_all = process_all
        self.scheduler = scheduler
        self.on_point = on_point
        self.on_batch = on_batch
        self._pending: List[PointerPoint] = []
        self._token: Any = None

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def is_scheduled(self) -> bool:
        return self._token is not None

    def queue(self, point: PointerPoint):
        self._pending.append(point)
        self._schedule()

    def queue_all(self, points: Iterable[PointerPoint]):
        self._pending.extend(points)
        if self._pending:
            self._schedule()

    def flush(self) -> List[PointerPoint]:
        """Process all pending points now and notify the callbacks.

        Returns the accepted points. ``on_batch`` is not called when every
        point was rejected.
        """
        self.cancel()
        if not self._pending:
            return []

        points, self._pending = self._pending, []
        results = self._process_all(points)
        logger.debug("Flushed batch: %d queued, %d accepted", len(points), len(results))

        if self.on_point is not None:
            for result in results:
                self.on_point(result)
        if self.on_batch is not None and results:
            self.on_batch(results)
        return results

    def cancel(self):
        """Cancel the scheduled flush, if any. Pending points are kept."""
        if self._token is not None:
            self.scheduler.cancel_callback(self._token)
            self._token = None

    def discard(self) -> int:
        """Cancel the scheduled flush and drop pending points unprocessed."""
        self.cancel()
        dropped = len(self._pending)
        self._pending = []
        return dropped

    def _schedule(self):
        if self._token is None:
            self._token = self.scheduler.request_callback(self._on_frame)

    def _on_frame(self):
        self._token = None
        self.flush()
