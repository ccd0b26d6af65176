"""
Quadratic Bezier cut curves.

Cuts are a "wheel" of curves that all start at one random hub point inside
the shape and sweep outwards past its boundary. Each curve leaves the hub
exactly along its base angle, so curves sharing the hub separate
immediately instead of crossing near it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math
import random
from typing import Optional, Sequence

import numpy as np

from config import CutterConfig, DEFAULT_CONFIG
from geometry import BoundingBox, Point, bounding_box, polygon_centroid


@dataclass
class BezierCurve:
    """A quadratic Bezier curve defined by 3 control points."""
    p0: Point  # Start point
    p1: Point  # Control point
    p2: Point  # End point

    def get_point(self, t: float) -> Point:
        """Evaluate the curve at parameter t (0 to 1)."""
        mt = 1 - t
        x = mt * mt * self.p0.x + 2 * mt * t * self.p1.x + t * t * self.p2.x
        y = mt * mt * self.p0.y + 2 * mt * t * self.p1.y + t * t * self.p2.y
        return Point(x, y)

    def get_points(self, segments: int = 100) -> list[Point]:
        """
        Sample the curve into segments + 1 points.

        The first and last samples are exactly p0 and p2.
        """
        t = np.linspace(0.0, 1.0, segments + 1)
        mt = 1.0 - t
        xs = mt * mt * self.p0.x + 2 * mt * t * self.p1.x + t * t * self.p2.x
        ys = mt * mt * self.p0.y + 2 * mt * t * self.p1.y + t * t * self.p2.y
        return [Point(x, y) for x, y in zip(xs.tolist(), ys.tolist())]


@dataclass
class RadialFan:
    """A set of cut curves radiating from a shared hub."""
    hub: Point
    rotation: float
    curves: list[BezierCurve] = field(default_factory=list)


def create_radial_curve(
    bounds: BoundingBox,
    hub: Point,
    angle: float,
    config: CutterConfig = DEFAULT_CONFIG
) -> BezierCurve:
    """
    Create a cut curve leaving the hub along the given angle.

    Args:
        bounds: Bounding box of the shape being cut
        hub: Shared start point of all curves
        angle: Direction (radians) of the curve's initial tangent
        config: Supplies radius_factor and swirl_degrees

    Returns:
        BezierCurve whose end point lies well outside the shape.
    """
    radius = max(bounds.width, bounds.height) * config.radius_factor

    # Control point on the base angle: initial tangent is exactly radial
    p1_dist = radius * 0.5
    p1 = Point(
        hub.x + math.cos(angle) * p1_dist,
        hub.y + math.sin(angle) * p1_dist
    )

    swirl = math.radians(config.swirl_degrees)
    p2 = Point(
        hub.x + math.cos(angle + swirl) * radius,
        hub.y + math.sin(angle + swirl) * radius
    )

    return BezierCurve(hub, p1, p2)


def generate_radial_fan(
    shape: Sequence[Point],
    curve_count: int,
    rng: Optional[random.Random] = None,
    config: CutterConfig = DEFAULT_CONFIG
) -> RadialFan:
    """
    Pick a random hub near the shape's centroid and fan curves out from it.

    Curves are evenly spaced around the hub with one shared random rotation.

    Args:
        shape: Outline being cut
        curve_count: Number of curves in the fan
        rng: Random source (module-level random if None)
        config: Cutter configuration

    Returns:
        RadialFan with curve_count curves.
    """
    rng = rng or random
    bounds = bounding_box(shape)
    center = polygon_centroid(shape)

    offset_range = min(bounds.width, bounds.height) * config.hub_offset_ratio
    hub = Point(
        center.x + (rng.random() - 0.5) * offset_range,
        center.y + (rng.random() - 0.5) * offset_range
    )

    rotation = rng.random() * math.pi * 2
    fan = RadialFan(hub=hub, rotation=rotation)
    for i in range(curve_count):
        angle = (i / curve_count) * math.pi * 2 + rotation
        fan.curves.append(create_radial_curve(bounds, hub, angle, config))

    return fan
