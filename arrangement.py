"""
Segment Arrangement Module

Splits a set of straight segments at every mutual intersection so that no
two output segments cross except at a shared endpoint.

Algorithm:
1. Reject segment pairs whose bounding boxes are apart (vectorized per segment)
2. Solve the 2x2 line system for the remaining pairs
3. Record interior hits (parameter strictly inside the segment) on both segments
4. Sort each segment's hits by parameter, merge near-duplicates, emit sub-segments

All output coordinates are snapped to the same grid the planar graph uses
for node identity; mixing snapped and unsnapped coordinates fragments the
arrangement.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from bezier import BezierCurve
from config import CutterConfig, DEFAULT_CONFIG
from geometry import Point, snap


@dataclass
class Segment:
    """A directed straight edge. is_curve marks segments sampled from a cut curve."""
    p1: Point
    p2: Point
    is_curve: bool = False


@dataclass
class Intersection:
    """A hit on a segment at parameter t."""
    x: float
    y: float
    t: float


def line_segment_intersection(
    p1: Point, p2: Point,
    p3: Point, p4: Point,
    parallel_epsilon: float = 1e-10
) -> Optional[tuple[float, float, float, float]]:
    """
    Intersect the lines through p1-p2 and p3-p4.

    Returns:
        (x, y, t1, t2) with t1 the parameter along p1-p2 and t2 along p3-p4,
        or None if the lines are parallel or a segment is degenerate.
    """
    d1x = p2.x - p1.x
    d1y = p2.y - p1.y
    d2x = p4.x - p3.x
    d2y = p4.y - p3.y

    cross = d1x * d2y - d1y * d2x
    if abs(cross) < parallel_epsilon:
        return None

    dx = p3.x - p1.x
    dy = p3.y - p1.y
    t1 = (dx * d2y - dy * d2x) / cross
    t2 = (dx * d1y - dy * d1x) / cross
    return (p1.x + t1 * d1x, p1.y + t1 * d1y, t1, t2)


def shape_segments(shape: Sequence[Point]) -> list[Segment]:
    """Boundary edges of a closed ring."""
    n = len(shape)
    return [Segment(shape[i], shape[(i + 1) % n], False) for i in range(n)]


def curve_segments(curves: Sequence[BezierCurve], samples: int) -> list[Segment]:
    """Sample every curve into consecutive straight segments."""
    segments = []
    for curve in curves:
        points = curve.get_points(samples)
        for a, b in zip(points, points[1:]):
            segments.append(Segment(a, b, True))
    return segments


def _bounds_arrays(segments: Sequence[Segment]) -> tuple[np.ndarray, ...]:
    coords = np.array(
        [(s.p1.x, s.p1.y, s.p2.x, s.p2.y) for s in segments],
        dtype=np.float64
    ).reshape(-1, 4)
    min_x = np.minimum(coords[:, 0], coords[:, 2])
    max_x = np.maximum(coords[:, 0], coords[:, 2])
    min_y = np.minimum(coords[:, 1], coords[:, 3])
    max_y = np.maximum(coords[:, 1], coords[:, 3])
    return min_x, max_x, min_y, max_y


def find_intersections(
    segments: Sequence[Segment],
    config: CutterConfig = DEFAULT_CONFIG
) -> list[list[Intersection]]:
    """
    Collect the interior intersection points of every segment.

    Args:
        segments: Input segments
        config: Tolerances and snapping precision

    Returns:
        One list of snapped Intersections per input segment. Hits at a
        segment's own endpoints are not recorded.
    """
    eps = config.intersection_epsilon
    margin = config.bbox_margin
    precision = config.snap_precision

    cuts: list[list[Intersection]] = [[] for _ in segments]
    if len(segments) < 2:
        return cuts

    min_x, max_x, min_y, max_y = _bounds_arrays(segments)

    for i in range(len(segments) - 1):
        rest = slice(i + 1, None)
        apart = (
            (max_x[i] < min_x[rest] - margin) |
            (min_x[i] > max_x[rest] + margin) |
            (max_y[i] < min_y[rest] - margin) |
            (min_y[i] > max_y[rest] + margin)
        )
        candidates = np.flatnonzero(~apart) + (i + 1)
        if candidates.size == 0:
            continue

        seg_a = segments[i]
        for j in candidates.tolist():
            seg_b = segments[j]
            hit = line_segment_intersection(
                seg_a.p1, seg_a.p2, seg_b.p1, seg_b.p2, config.parallel_epsilon
            )
            if hit is None:
                continue

            x, y, t1, t2 = hit
            if not (-eps <= t1 <= 1 + eps and -eps <= t2 <= 1 + eps):
                continue

            sx = snap(x, precision)
            sy = snap(y, precision)
            if eps < t1 < 1 - eps:
                cuts[i].append(Intersection(sx, sy, t1))
            if eps < t2 < 1 - eps:
                cuts[j].append(Intersection(sx, sy, t2))

    return cuts


def compute_arrangement(
    segments: Sequence[Segment],
    config: CutterConfig = DEFAULT_CONFIG
) -> list[Segment]:
    """
    Split every segment at its intersections with the others.

    Args:
        segments: Boundary and curve segments
        config: Tolerances and snapping precision

    Returns:
        Sub-segments with snapped endpoints, keeping each parent's is_curve flag.
    """
    precision = config.snap_precision
    dedup = config.dedup_distance
    cuts = find_intersections(segments, config)

    result: list[Segment] = []
    for seg, seg_cuts in zip(segments, cuts):
        start = Intersection(snap(seg.p1.x, precision), snap(seg.p1.y, precision), 0.0)
        end = Intersection(snap(seg.p2.x, precision), snap(seg.p2.y, precision), 1.0)

        all_points = [start] + seg_cuts + [end]
        all_points.sort(key=lambda c: c.t)

        unique = [all_points[0]]
        for cp in all_points[1:]:
            lp = unique[-1]
            if abs(cp.x - lp.x) > dedup or abs(cp.y - lp.y) > dedup:
                unique.append(cp)

        for a, b in zip(unique, unique[1:]):
            result.append(Segment(Point(a.x, a.y), Point(b.x, b.y), seg.is_curve))

    return result
