"""
Tests for the cutting pipeline and its retry loop.

Covers single passes with hand-made curves as well as full seeded runs of
cut() and generate().
"""

import logging
import math
import random

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bezier import BezierCurve, create_radial_curve
from config import CutterConfig
from geometry import (
    Point,
    bounding_box,
    mark_non_original,
    point_in_polygon,
    polygon_centroid,
    signed_area,
)
from network_cutter import (
    AttemptStats,
    PartialResult,
    ValidatedResult,
    cut,
    cut_shape_with_curves,
    generate,
    invariants_hold,
    total_area,
)


def _line(x0, y0, x1, y1):
    """Straight cut expressed as a Bezier with its control point at the middle."""
    return BezierCurve(Point(x0, y0), Point((x0 + x1) / 2, (y0 + y1) / 2), Point(x1, y1))


class TestCutShapeWithCurves:
    """Single pass with an explicit curve set."""

    def test_no_curves_returns_whole_shape(self, square):
        pieces, curves = cut_shape_with_curves(square, [])
        assert curves == []
        assert len(pieces) == 1
        assert abs(signed_area(pieces[0])) == pytest.approx(10000.0)

    def test_fallback_marks_non_original(self):
        shape = [Point(0, 0, True), Point(100, 0, True), Point(100, 100, True), Point(0, 100, True)]
        # A curve far away leaves nothing but the shape itself
        pieces, _ = cut_shape_with_curves(shape, [_line(500, 500, 600, 600)])
        assert pieces == [mark_non_original(shape)]

    def test_two_crossing_lines(self, square):
        curves = [_line(-10, 50, 110, 50), _line(50, -10, 50, 110)]
        pieces, returned = cut_shape_with_curves(square, curves)
        assert returned == curves
        assert len(pieces) == 4
        assert total_area(pieces) == pytest.approx(10000.0)

    def test_axis_rays_from_center(self, square):
        """Four rays from the center cut the square into equal quadrants."""
        hub = Point(50, 50)
        curves = [
            BezierCurve(hub, Point(100, 50), Point(250, 50)),
            BezierCurve(hub, Point(50, 100), Point(50, 250)),
            BezierCurve(hub, Point(0, 50), Point(-150, 50)),
            BezierCurve(hub, Point(50, 0), Point(50, -150)),
        ]
        pieces, _ = cut_shape_with_curves(square, curves)
        assert len(pieces) == 4
        for piece in pieces:
            assert signed_area(piece) == pytest.approx(2500.0)

    def test_radial_factory_quadrants(self, square):
        """Unswirled factory curves along the axes split the square into quadrants."""
        config = CutterConfig(swirl_degrees=0.0)
        bounds = bounding_box(square)
        curves = [
            create_radial_curve(bounds, Point(50, 50), k * math.pi / 2, config)
            for k in range(4)
        ]
        pieces, _ = cut_shape_with_curves(square, curves, config)
        assert len(pieces) == 4
        for piece in pieces:
            assert signed_area(piece) == pytest.approx(2500.0)
        assert total_area(pieces) == pytest.approx(10000.0)

    def test_clockwise_shape_keeps_winding(self, cw_square):
        curves = [_line(-10, 50, 110, 50), _line(50, -10, 50, 110)]
        pieces, _ = cut_shape_with_curves(cw_square, curves)
        assert len(pieces) == 4
        for piece in pieces:
            assert signed_area(piece) == pytest.approx(-2500.0)

    def test_pieces_not_original(self, square):
        pieces, _ = cut_shape_with_curves(square, [_line(-10, 50, 110, 50)])
        assert len(pieces) == 2
        assert all(not p.is_original for piece in pieces for p in piece)


class TestInvariants:
    """Tests for the acceptance check."""

    def test_exact_area_and_count(self):
        assert invariants_hold(1.0, 10, 10)

    def test_area_bounds_are_strict(self):
        assert not invariants_hold(1.01, 10, 10)
        assert not invariants_hold(0.99, 10, 10)
        assert invariants_hold(1.009, 10, 10)

    def test_piece_count_threshold(self):
        assert invariants_hold(1.0, 9, 10)
        assert not invariants_hold(1.0, 8, 10)


class TestCut:
    """Full seeded runs of the retry loop."""

    def test_square_five_cuts(self, square):
        result = cut(square, 5, rng=random.Random(2024))
        assert isinstance(result, ValidatedResult)
        assert result.is_validated
        assert 9 <= len(result.pieces) <= 11
        assert 9900 <= total_area(result.pieces) <= 10100
        assert len(result.curves) == 10
        assert result.attempts == len(result.history) >= 1

    def test_history_records_attempts(self, square):
        result = cut(square, 3, rng=random.Random(5))
        assert all(isinstance(s, AttemptStats) for s in result.history)
        assert result.history[-1].piece_count == len(result.pieces)
        assert result.history[-1].area_ratio == pytest.approx(result.area_ratio)

    def test_zero_cuts_returns_shape(self):
        shape = [Point(0, 0, True), Point(100, 0, True), Point(100, 100, True), Point(0, 100, True)]
        result = cut(shape, 0)
        assert isinstance(result, ValidatedResult)
        assert result.attempts == 0
        assert result.pieces == [mark_non_original(shape)]

    def test_seeded_runs_identical(self, square):
        a = cut(square, 4, rng=random.Random(99))
        b = cut(square, 4, rng=random.Random(99))
        assert a.pieces == b.pieces
        assert a.curves == b.curves

    def test_different_seeds_differ(self, square):
        a = cut(square, 4, rng=random.Random(1))
        b = cut(square, 4, rng=random.Random(2))
        assert a.pieces != b.pieces

    @pytest.mark.parametrize("seed", [3, 17, 256])
    def test_orientation_matches_shape(self, square, cw_square, seed):
        for shape, sign in ((square, 1), (cw_square, -1)):
            result = cut(shape, 3, rng=random.Random(seed))
            assert result.is_validated
            for piece in result.pieces:
                assert signed_area(piece) * sign > 0

    def test_pieces_cover_shape_once(self, square):
        """Sampled interior points fall into exactly one piece."""
        result = cut(square, 5, rng=random.Random(11))
        sampler = random.Random(0)
        hits = []
        for _ in range(300):
            p = Point(sampler.uniform(1, 99), sampler.uniform(1, 99))
            hits.append(sum(point_in_polygon(p, piece) for piece in result.pieces))
        assert max(hits) == 1
        assert hits.count(1) >= 297

    def test_accepts_tuples(self):
        result = cut([(0, 0), (100, 0), (100, 100), (0, 100)], 2, rng=random.Random(4))
        assert result.is_validated
        assert total_area(result.pieces) == pytest.approx(10000.0, rel=0.01)

    def test_curved_shape_is_smoothed(self, square):
        result = cut(square, 3, shape_type="curve", rng=random.Random(8))
        assert result.is_validated
        assert 8000 * 0.99 < total_area(result.pieces) < 9000 * 1.01

    def test_concave_shape(self, notched_rect):
        result = cut(notched_rect, 3, rng=random.Random(21), config=CutterConfig(curve_samples=100))
        assert result.pieces
        for piece in result.pieces:
            assert signed_area(piece) > 0
            assert point_in_polygon(polygon_centroid(piece), notched_rect, 5.0)
        if result.is_validated:
            assert total_area(result.pieces) == pytest.approx(14400.0, rel=0.01)

    def test_exhaustion_returns_partial(self, square, caplog):
        """An unsatisfiable area tolerance runs out of attempts."""
        config = CutterConfig(max_attempts=3, area_tolerance=0.0, curve_samples=50)
        with caplog.at_level(logging.INFO, logger="network_cutter"):
            result = cut(square, 2, rng=random.Random(6), config=config)

        assert isinstance(result, PartialResult)
        assert not result.is_validated
        assert result.attempts == 3
        assert len(result.history) == 3
        assert result.pieces

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "All 3 cutting attempts failed" in errors[0].getMessage()
        assert "Attempt 1 rejected" in caplog.text


class TestCutErrors:
    """Invalid input raises ValueError."""

    def test_too_few_points(self):
        with pytest.raises(ValueError, match="at least 3 points"):
            cut([Point(0, 0), Point(1, 1)], 2)

    def test_negative_cut_count(self, square):
        with pytest.raises(ValueError, match="negative"):
            cut(square, -1)

    def test_zero_area(self):
        with pytest.raises(ValueError, match="zero area"):
            cut([Point(0, 0), Point(1, 1), Point(2, 2)], 2)

    def test_invalid_config(self, square):
        with pytest.raises(ValueError, match="max_attempts"):
            cut(square, 2, config=CutterConfig(max_attempts=0))


class TestGenerate:
    """Tests for the plain generate() entry point."""

    def test_returns_piece_rings(self, square):
        pieces = generate(square, 2, rng=random.Random(12))
        assert isinstance(pieces, list)
        assert 4 <= len(pieces) <= 5
        assert all(isinstance(p, Point) for piece in pieces for p in piece)

    def test_zero_cuts(self, square):
        assert generate(square, 0) == [square]
