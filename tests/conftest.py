"""Pytest configuration and fixtures."""

import pytest

from steadyink.pointer import StabilizedPointer
from tests.fixtures import FakeScheduler, make_point


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def pointer():
    return StabilizedPointer()


@pytest.fixture
def line_points():
    """A straight diagonal stroke sampled every 100ms."""
    return [make_point(i * 10.0, i * 10.0, i * 100.0) for i in range(5)]


@pytest.fixture
def zigzag_points():
    return [
        make_point(0.0, 0.0, 0),
        make_point(10.0, 20.0, 100),
        make_point(20.0, 0.0, 200),
        make_point(30.0, 20.0, 300),
        make_point(40.0, 0.0, 400),
    ]
