"""Pytest fixtures for network cutter tests."""

import random
import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from geometry import Point  # noqa: E402


def make_square(size: float = 100.0) -> list[Point]:
    """Axis-aligned square with its lower-left corner at the origin (CCW)."""
    return [Point(0, 0), Point(size, 0), Point(size, size), Point(0, size)]


@pytest.fixture
def square() -> list[Point]:
    """Return the 100 x 100 CCW square."""
    return make_square(100.0)


@pytest.fixture
def cw_square() -> list[Point]:
    """Return the 100 x 100 square wound clockwise."""
    return list(reversed(make_square(100.0)))


@pytest.fixture
def notched_rect() -> list[Point]:
    """Return a concave outline (rectangle with a notch in the top edge)."""
    return [
        Point(0, 0), Point(200, 0), Point(200, 80), Point(140, 80),
        Point(140, 60), Point(60, 60), Point(60, 80), Point(0, 80),
    ]


@pytest.fixture
def rng() -> random.Random:
    """Return a seeded random source."""
    return random.Random(1234)
