"""Dynamic stabilization pipeline.

``StabilizedPointer`` chains real-time filters (applied to every sample
while drawing) with post-process kernels (applied once when the stroke
ends). Filters and kernels can be added, removed and retuned at any time;
there is no build step.

Example::

    pointer = (
        StabilizedPointer()
        .add_filter(NoiseFilter(min_distance=2))
        .add_filter(KalmanFilter(process_noise=0.1, measurement_noise=0.5))
        .add_post_process(gaussian_kernel(size=7))
    )

    for sample in samples:
        preview = pointer.process(sample)

    stroke = pointer.finish()
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .batching import AsyncioScheduler, BatchCallback, BatchQueue, PointCallback, Scheduler
from .kernels import Kernel, PaddingMode
from .smoothing import smooth
from .types import Filter, FilterType, Point, PointerPoint, UpdatableFilter

logger = logging.getLogger("steadyink.pointer")


@dataclass
class PostProcessor:
    kernel: Kernel
    padding: PaddingMode = PaddingMode.REFLECT
    preserve_endpoints: bool = True


class StabilizedPointer:
    """Ordered filter chain plus post-processors over a per-stroke buffer.

    Filters run in insertion order, each feeding the next, so order changes
    the result. One instance handles one stroke at a time; use a separate
    instance per concurrent pointer (e.g. per touch).
    """

    def __init__(self):
        self._filters: List[Filter] = []
        self._post_processors: List[PostProcessor] = []
        self._buffer: List[PointerPoint] = []
        self._batch: Optional[BatchQueue] = None

    def __len__(self) -> int:
        return len(self._filters)

    # ------------------------------------------------------------------
    # Real-time layer
    # ------------------------------------------------------------------

    def add_filter(self, filter: Filter) -> "StabilizedPointer":
        self._filters.append(filter)
        logger.debug("Added filter %s (%d total)", _tag(filter.type), len(self._filters))
        return self

    def remove_filter(self, type: Union[FilterType, str]) -> bool:
        """Remove the first filter of ``type``. Returns False if none matched."""
        filter = self.get_filter(type)
        if filter is None:
            return False
        self._filters.remove(filter)
        logger.debug("Removed filter %s", _tag(type))
        return True

    def update_filter(self, type: Union[FilterType, str], **params) -> bool:
        """Retune the first filter of ``type`` in place, keeping its state.

        Returns False if no such filter exists or it is not updatable.
        """
        filter = self.get_filter(type)
        if not isinstance(filter, UpdatableFilter):
            return False
        filter.update_params(**params)
        logger.debug("Updated filter %s: %s", _tag(type), params)
        return True

    def get_filter(self, type: Union[FilterType, str]) -> Optional[Filter]:
        for filter in self._filters:
            if filter.type == type:
                return filter
        return None

    def has_filter(self, type: Union[FilterType, str]) -> bool:
        return self.get_filter(type) is not None

    @property
    def filter_types(self) -> List[str]:
        return [_tag(f.type) for f in self._filters]

    def process(self, point: PointerPoint) -> Optional[PointerPoint]:
        """Run one sample through the filters.

        Returns the filtered point, or None if a filter rejected it. Only
        accepted points are buffered.
        """
        current: Optional[PointerPoint] = point
        for filter in self._filters:
            current = filter.process(current)
            if current is None:
                return None

        self._buffer.append(current)
        return current

    def process_all(self, points: Iterable[PointerPoint]) -> List[PointerPoint]:
        """Process points in order, returning only the accepted results."""
        results = []
        for point in points:
            result = self.process(point)
            if result is not None:
                results.append(result)
        return results

    def get_buffer(self) -> List[PointerPoint]:
        """Snapshot of the accepted points of the current stroke."""
        return list(self._buffer)

    def flush_buffer(self) -> List[PointerPoint]:
        """Return the buffered points and empty the buffer."""
        flushed, self._buffer = self._buffer, []
        return flushed

    def reset(self):
        """Reset every filter and empty the buffer; the chains are kept.

        Points still queued for batching belong to the abandoned stroke and
        are dropped. Batching itself stays enabled.
        """
        if self._batch is not None:
            dropped = self._batch.discard()
            if dropped:
                logger.debug("Dropped %d queued points on reset", dropped)
        for filter in self._filters:
            filter.reset()
        self._buffer = []

    def clear(self):
        """Remove all filters and post-processors, empty the buffer and
        disable batching. Queued points are dropped, not processed.
        """
        if self._batch is not None:
            self._batch.discard()
            self._batch = None
        self._filters = []
        self._post_processors = []
        self._buffer = []
        logger.debug("Pipeline cleared")

    # ------------------------------------------------------------------
    # Post-processing layer
    # ------------------------------------------------------------------

    def add_post_process(self, kernel: Kernel,
                         padding: Union[PaddingMode, str] = PaddingMode.REFLECT,
                         preserve_endpoints: bool = True) -> "StabilizedPointer":
        self._post_processors.append(PostProcessor(
            kernel=kernel,
            padding=PaddingMode(padding),
            preserve_endpoints=preserve_endpoints,
        ))
        logger.debug("Added post-process %s (padding=%s)", kernel.type, PaddingMode(padding).value)
        return self

    def remove_post_process(self, type: str) -> bool:
        for processor in self._post_processors:
            if processor.kernel.type == type:
                self._post_processors.remove(processor)
                logger.debug("Removed post-process %s", type)
                return True
        return False

    def has_post_process(self, type: str) -> bool:
        return any(p.kernel.type == type for p in self._post_processors)

    @property
    def post_process_types(self) -> List[str]:
        return [p.kernel.type for p in self._post_processors]

    @property
    def post_process_length(self) -> int:
        return len(self._post_processors)

    def _apply_post_process(self) -> List[Point]:
        points: List[Point] = list(self._buffer)
        for processor in self._post_processors:
            points = smooth(
                points,
                processor.kernel,
                padding=processor.padding,
                preserve_endpoints=processor.preserve_endpoints,
            )
        return points

    def finish_without_reset(self) -> List[Point]:
        """Post-process the current stroke but keep the buffer and filter state.

        Useful for previewing different kernels on the same stroke.
        """
        self.flush_batch()
        return self._apply_post_process()

    def finish(self) -> List[Point]:
        """End the stroke: post-process the buffer, then reset the pipeline."""
        self.flush_batch()
        points = self._apply_post_process()
        logger.debug("Finished stroke: %d points, %d post-processors",
                     len(points), len(self._post_processors))
        self.reset()
        return points

    # ------------------------------------------------------------------
    # Batching
    # ------------------------------------------------------------------

    def enable_batching(self, on_point: Optional[PointCallback] = None,
                        on_batch: Optional[BatchCallback] = None,
                        scheduler: Optional[Scheduler] = None) -> "StabilizedPointer":
        """Queue points and process them once per rendering opportunity.

        ``scheduler`` defaults to an ``AsyncioScheduler`` bound to the running
        event loop, and ``RuntimeError`` is raised if there is none.
        Re-enabling first flushes points queued under the previous settings.
        """
        if scheduler is None:
            scheduler = AsyncioScheduler(loop=asyncio.get_running_loop())

        if self._batch is not None:
            self._batch.flush()

        self._batch = BatchQueue(
            self.process_all,
            scheduler,
            on_point=on_point,
            on_batch=on_batch,
        )
        logger.debug("Batching enabled")
        return self

    def disable_batching(self) -> "StabilizedPointer":
        """Process any pending points immediately and stop batching."""
        if self._batch is not None:
            self._batch.flush()
            self._batch = None
        return self

    @property
    def is_batching_enabled(self) -> bool:
        return self._batch is not None

    @property
    def pending_count(self) -> int:
        return self._batch.pending_count if self._batch is not None else 0

    def queue(self, point: PointerPoint) -> "StabilizedPointer":
        """Queue a point, or process it right away when batching is off."""
        if self._batch is None:
            self.process(point)
        else:
            self._batch.queue(point)
        return self

    def queue_all(self, points: Iterable[PointerPoint]) -> "StabilizedPointer":
        if self._batch is None:
            self.process_all(points)
        else:
            self._batch.queue_all(points)
        return self

    def flush_batch(self) -> List[PointerPoint]:
        """Process pending points now, cancelling the scheduled flush."""
        if self._batch is None:
            return []
        return self._batch.flush()


def _tag(type: Union[FilterType, str]) -> str:
    return type.value if isinstance(type, FilterType) else type
