"""Tests for the StabilizedPointer pipeline."""

import pytest

from steadyink.filters import (
    EmaFilter,
    KalmanFilter,
    MovingAverageFilter,
    NoiseFilter,
    StringFilter,
)
from steadyink.kernels import PaddingMode, box_kernel, gaussian_kernel
from steadyink.pointer import StabilizedPointer
from steadyink.types import Filter, FilterType, PointerPoint
from tests.fixtures import make_point


class FixedOnlyFilter(Filter):
    """A filter without the updatable capability."""

    type = "fixedOnly"

    def process(self, point):
        return point

    def reset(self):
        pass


# ============================================================================
# Filter management
# ============================================================================


class TestFilterManagement:
    def test_starts_empty(self, pointer):
        assert len(pointer) == 0
        assert pointer.filter_types == []

    def test_add_filter_chains(self, pointer):
        result = (
            pointer
            .add_filter(NoiseFilter(min_distance=2))
            .add_filter(KalmanFilter(process_noise=0.1, measurement_noise=0.5))
        )
        assert result is pointer
        assert len(pointer) == 2
        assert pointer.filter_types == ["noise", "kalman"]

    def test_remove_filter(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=2)).add_filter(EmaFilter(alpha=0.5))
        assert pointer.remove_filter("noise") is True
        assert pointer.filter_types == ["ema"]

    def test_remove_missing_filter(self, pointer):
        assert pointer.remove_filter("kalman") is False

    def test_remove_only_first_match(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=1)).add_filter(NoiseFilter(min_distance=2))
        pointer.remove_filter(FilterType.NOISE)
        assert len(pointer) == 1
        assert pointer.get_filter("noise").params.min_distance == 2

    def test_has_and_get_filter(self, pointer):
        ema = EmaFilter(alpha=0.5)
        pointer.add_filter(ema)
        assert pointer.has_filter("ema")
        assert pointer.has_filter(FilterType.EMA)
        assert not pointer.has_filter("kalman")
        assert pointer.get_filter("ema") is ema
        assert pointer.get_filter("kalman") is None

    def test_update_filter_keeps_instance(self, pointer):
        noise = NoiseFilter(min_distance=2)
        pointer.add_filter(noise)
        assert pointer.update_filter("noise", min_distance=10) is True
        assert pointer.get_filter("noise") is noise
        assert noise.params.min_distance == 10

    def test_update_filter_keeps_running_state(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=1))
        pointer.process(make_point(0, 0))
        pointer.update_filter("noise", min_distance=50)
        # Still compares against the point seen before the update
        assert pointer.process(make_point(10, 0)) is None

    def test_update_missing_filter(self, pointer):
        assert pointer.update_filter("kalman", process_noise=0.2) is False

    def test_update_non_updatable_filter(self, pointer):
        pointer.add_filter(FixedOnlyFilter())
        assert pointer.update_filter("fixedOnly", anything=1) is False


# ============================================================================
# Processing
# ============================================================================


class TestProcess:
    def test_passes_through_without_filters(self, pointer):
        point = make_point(10, 20, 0)
        assert pointer.process(point) == point

    def test_applies_filters_in_order(self, pointer):
        pointer.add_filter(EmaFilter(alpha=0.5)).add_filter(StringFilter(string_length=4))
        pointer.process(make_point(0, 0, 0))
        result = pointer.process(make_point(20, 0, 16))
        # EMA halves the move to 10, the string then removes 4
        assert (result.x, result.y) == (6, 0)

    def test_order_changes_result(self):
        points = [make_point(x, 0, i * 16.0) for i, x in enumerate([0, 3, 10, 11, 25, 26, 40])]

        noise_first = (
            StabilizedPointer()
            .add_filter(NoiseFilter(min_distance=5))
            .add_filter(KalmanFilter(process_noise=0.1, measurement_noise=0.5))
        )
        kalman_first = (
            StabilizedPointer()
            .add_filter(KalmanFilter(process_noise=0.1, measurement_noise=0.5))
            .add_filter(NoiseFilter(min_distance=5))
        )

        a = [(p.x, p.y) for p in noise_first.process_all(points)]
        b = [(p.x, p.y) for p in kalman_first.process_all(points)]
        assert a != b

    def test_rejection_short_circuits(self, pointer):
        ema = EmaFilter(alpha=0.5)
        pointer.add_filter(NoiseFilter(min_distance=10)).add_filter(ema)
        pointer.process(make_point(0, 0))
        assert pointer.process(make_point(1, 1)) is None
        # The EMA never saw the rejected point
        assert ema._last.x == 0

    def test_buffer_holds_accepted_points(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=10))
        pointer.process(make_point(0, 0))
        pointer.process(make_point(1, 1))
        pointer.process(make_point(20, 20))
        assert [(p.x, p.y) for p in pointer.get_buffer()] == [(0, 0), (20, 20)]

    def test_process_all_drops_rejected(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=10))
        results = pointer.process_all([
            make_point(0, 0),
            make_point(1, 1),
            make_point(20, 20),
            make_point(21, 21),
            make_point(40, 40),
        ])
        assert [p.x for p in results] == [0, 20, 40]

    def test_get_buffer_is_snapshot(self, pointer):
        pointer.process(make_point(1, 1))
        snapshot = pointer.get_buffer()
        snapshot.clear()
        assert len(pointer.get_buffer()) == 1

    def test_flush_buffer(self, pointer):
        pointer.process(make_point(1, 1))
        pointer.process(make_point(2, 2))
        flushed = pointer.flush_buffer()
        assert len(flushed) == 2
        assert pointer.get_buffer() == []

    def test_reset_keeps_chains(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=10)).add_post_process(box_kernel(3))
        pointer.process(make_point(0, 0))
        pointer.reset()
        assert pointer.get_buffer() == []
        assert len(pointer) == 1
        assert pointer.post_process_length == 1
        # Filter state was reset, so a nearby point counts as a fresh start
        assert pointer.process(make_point(1, 1)) is not None

    def test_clear_removes_everything(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=10)).add_post_process(box_kernel(3))
        pointer.process(make_point(0, 0))
        pointer.clear()
        assert len(pointer) == 0
        assert pointer.post_process_length == 0
        assert pointer.get_buffer() == []
        point = make_point(5, 5)
        assert pointer.process(point) == point


# ============================================================================
# Post-processing
# ============================================================================


class TestPostProcess:
    def test_starts_empty(self, pointer):
        assert pointer.post_process_length == 0
        assert pointer.post_process_types == []

    def test_add_chains(self, pointer):
        result = pointer.add_post_process(box_kernel(3)).add_post_process(gaussian_kernel(5))
        assert result is pointer
        assert pointer.post_process_types == ["box", "gaussian"]

    def test_default_padding_is_reflect(self, pointer):
        pointer.add_post_process(box_kernel(3))
        assert pointer._post_processors[0].padding == PaddingMode.REFLECT
        assert pointer._post_processors[0].preserve_endpoints is True

    def test_remove(self, pointer):
        pointer.add_post_process(box_kernel(3)).add_post_process(gaussian_kernel(5))
        assert pointer.remove_post_process("box") is True
        assert pointer.post_process_types == ["gaussian"]
        assert pointer.remove_post_process("box") is False

    def test_has_post_process(self, pointer):
        pointer.add_post_process(gaussian_kernel(5))
        assert pointer.has_post_process("gaussian")
        assert not pointer.has_post_process("box")


class TestFinish:
    def test_returns_buffer_without_post_processors(self, pointer, line_points):
        pointer.process_all(line_points)
        result = pointer.finish()
        assert [(p.x, p.y) for p in result] == [(p.x, p.y) for p in line_points]

    def test_applies_post_processors(self, pointer, zigzag_points):
        pointer.add_post_process(box_kernel(3))
        pointer.process_all(zigzag_points)
        result = pointer.finish()
        assert len(result) == 5
        assert 0 < result[2].y < 20

    def test_post_processors_chain_in_order(self, pointer):
        pointer.add_post_process(box_kernel(3)).add_post_process(gaussian_kernel(3))
        pointer.process_all([make_point(0, 0, 0), make_point(10, 100, 100),
                             make_point(20, 0, 200), make_point(30, 0, 300)])
        result = pointer.finish()
        assert result[1].y < 100

    def test_endpoints_preserved(self, pointer, zigzag_points):
        pointer.add_post_process(gaussian_kernel(5))
        pointer.process_all(zigzag_points)
        result = pointer.finish()
        assert (result[0].x, result[0].y) == (0, 0)
        assert (result[-1].x, result[-1].y) == (40, 0)

    def test_endpoints_can_drift_when_disabled(self, pointer, line_points):
        pointer.add_post_process(box_kernel(3), preserve_endpoints=False)
        pointer.process_all(line_points)
        result = pointer.finish()
        assert result[0].x != 0

    def test_resets_buffer_and_filters(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=5))
        pointer.process(make_point(0, 0, 0))
        pointer.process(make_point(100, 100, 100))
        pointer.finish()
        assert pointer.get_buffer() == []
        assert pointer.process(make_point(1, 1, 200)) is not None

    def test_finish_twice(self, pointer, line_points):
        pointer.process_all(line_points)
        pointer.finish()
        assert pointer.finish() == []

    def test_noise_and_kalman_scenario(self, pointer):
        """Accepted points come back unchanged from finish without post-processors."""
        pointer.add_filter(NoiseFilter(min_distance=1))
        pointer.add_filter(KalmanFilter(process_noise=0.1, measurement_noise=0.5))
        points = [make_point(i * 10.0, i * 10.0, i * 100.0) for i in range(4)]

        realtime = pointer.process_all(points)
        assert len(realtime) == 4
        buffered = pointer.get_buffer()

        result = pointer.finish()
        assert result == buffered

        fresh = make_point(500, 500, 400)
        assert pointer.process(fresh) == fresh


class TestFinishWithoutReset:
    def test_keeps_buffer(self, pointer):
        pointer.process(make_point(10, 10, 0))
        pointer.process(make_point(20, 20, 100))
        pointer.finish_without_reset()
        assert len(pointer.get_buffer()) == 2

    def test_keeps_filter_state(self, pointer):
        pointer.add_filter(NoiseFilter(min_distance=5))
        pointer.process(make_point(0, 0))
        pointer.finish_without_reset()
        assert pointer.process(make_point(1, 1)) is None

    def test_reapply_with_different_kernels(self, pointer):
        pointer.process_all([make_point(0, 0, 0), make_point(10, 100, 100),
                             make_point(20, 0, 200)])
        pointer.add_post_process(box_kernel(3))
        first = pointer.finish_without_reset()

        pointer.remove_post_process("box")
        pointer.add_post_process(gaussian_kernel(3))
        second = pointer.finish_without_reset()

        assert first[1].y < 100
        assert second[1].y < 100
        assert first[1].y != second[1].y
        assert len(pointer.get_buffer()) == 3


def test_complex_chain():
    pointer = (
        StabilizedPointer()
        .add_filter(NoiseFilter(min_distance=1))
        .add_filter(KalmanFilter(process_noise=0.1, measurement_noise=0.5))
        .add_filter(MovingAverageFilter(window_size=3))
        .add_filter(StringFilter(string_length=2))
        .add_filter(EmaFilter(alpha=0.7))
        .add_post_process(gaussian_kernel(5))
    )
    points = [make_point(i * 5.0, (i % 3) * 2.0, i * 16.0, pressure=0.5) for i in range(30)]
    realtime = pointer.process_all(points)
    assert 0 < len(realtime) <= 30
    assert all(isinstance(p, PointerPoint) for p in realtime)

    stroke = pointer.finish()
    assert len(stroke) == len(realtime)
