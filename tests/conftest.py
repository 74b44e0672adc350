"""Shared pytest fixtures for the geomkit test suite.

This module provides common fixtures used across unit and integration tests.

Fixtures:
    unit_square_path: Closed 100x100 square path with corner anchors
    sample_cubic: Four control points of an arch-shaped cubic
    quarter_circle_path: Open quarter arc of radius 100 around the origin
    rect_shape: Shape holding a 40x20 rectangle
    no_engine: Unregisters any path engine for the duration of a test

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path as FilePath

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(FilePath(__file__).parent.parent))

from geomkit.domain import Path, Shape, Vec, get_engine, register_engine, unregister_engine  # noqa: E402


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Geometry Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def unit_square_path():
    """Return a closed square path from (0, 0) to (100, 100).

    Returns:
        Path: Four corner anchors, counter-clockwise in a y-up frame.
    """
    return Path.from_points([Vec(0, 0), Vec(100, 0), Vec(100, 100), Vec(0, 100)], closed=True)


@pytest.fixture
def sample_cubic():
    """Return the control points of a symmetric arch from (0, 0) to (100, 0).

    Returns:
        list[Vec]: Four control points; the apex is (50, 75).
    """
    return [Vec(0, 0), Vec(0, 100), Vec(100, 100), Vec(100, 0)]


@pytest.fixture
def quarter_circle_path():
    """Return an open quarter arc of radius 100 from (100, 0) to (0, 100)."""
    return Path.from_arc(Vec(0, 0), 100, 0, 90)


@pytest.fixture
def rect_shape():
    """Return a Shape with a single 40x20 rectangle at (10, 10)."""
    return Shape([Path.rect(10, 10, 40, 20)])


@pytest.fixture
def no_engine():
    """Run a test without a registered path engine, restoring the previous one."""
    previous = get_engine()
    unregister_engine()
    yield
    if previous is not None:
        register_engine(previous)
