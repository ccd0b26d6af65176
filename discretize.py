"""
Outline smoothing for curved shapes.

Curved shapes arrive as a coarse ring of control vertices. Before cutting,
each corner is replaced by a quadratic Bezier running between the midpoints
of its two adjacent edges, which turns the ring into a smooth, dense
polyline that the straight-segment arrangement can consume.
"""

import math
from typing import Sequence

from config import CutterConfig, DEFAULT_CONFIG
from geometry import Point, Ring


def discretize_shape(shape: Sequence[Point], config: CutterConfig = DEFAULT_CONFIG) -> Ring:
    """
    Replace every vertex of the ring with a sampled quadratic Bezier corner.

    Args:
        shape: Control ring of a curved outline
        config: Supplies discretize_steps and discretize_min_spacing

    Returns:
        Dense polyline ring (open: the first point is not repeated at the end).
    """
    n = len(shape)
    if n < 3:
        return list(shape)

    steps = config.discretize_steps
    min_spacing = config.discretize_min_spacing
    result: Ring = []

    for i in range(n):
        p0 = shape[i]
        p1 = shape[(i + 1) % n]
        p2 = shape[(i + 2) % n]

        start_x = (p0.x + p1.x) / 2
        start_y = (p0.y + p1.y) / 2
        end_x = (p1.x + p2.x) / 2
        end_y = (p1.y + p2.y) / 2

        for t in range(steps + 1):
            # The corner's end point is the next corner's start point
            if t == steps and i < n - 1:
                continue

            ratio = t / steps
            inv = 1 - ratio
            x = inv * inv * start_x + 2 * inv * ratio * p1.x + ratio * ratio * end_x
            y = inv * inv * start_y + 2 * inv * ratio * p1.y + ratio * ratio * end_y

            if result:
                last = result[-1]
                if math.hypot(x - last.x, y - last.y) < min_spacing:
                    continue
            result.append(Point(x, y))

    # The final corner ends where the first one started
    if len(result) > 1:
        first, last = result[0], result[-1]
        if math.hypot(first.x - last.x, first.y - last.y) < min_spacing:
            result.pop()

    return result
