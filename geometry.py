"""
Basic 2D geometry for the puzzle cutter.

Point and bounding-box types plus the polygon helpers (shoelace area,
centroid, ray-casting containment) shared by every stage of the pipeline.
"""

from dataclasses import dataclass, replace
import math
from typing import Iterable, Sequence, Union


@dataclass(frozen=True)
class Point:
    """
    An immutable 2D point.

    is_original marks vertices that come from the source outline rather
    than from a cut.
    """
    x: float
    y: float
    is_original: bool = False

    def __iter__(self):
        yield self.x
        yield self.y

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


# Type aliases
Ring = list[Point]
PointLike = Union[Point, tuple[float, float]]


@dataclass
class BoundingBox:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def expand(self, margin: float) -> 'BoundingBox':
        return BoundingBox(
            self.min_x - margin,
            self.min_y - margin,
            self.max_x + margin,
            self.max_y + margin
        )


def snap_key(x: float, y: float, precision: float) -> tuple[int, int]:
    """
    Integer grid key for a coordinate pair.

    Points that agree after rounding to 1 / precision get the same key, no
    matter which arithmetic produced them.
    """
    return (round(x * precision), round(y * precision))


def snap(value: float, precision: float) -> float:
    """Round a coordinate onto the 1 / precision grid."""
    return round(value * precision) / precision


def as_points(points: Iterable[PointLike]) -> Ring:
    """Convert a sequence of Points or (x, y) tuples into a list of Points."""
    result = []
    for p in points:
        if isinstance(p, Point):
            result.append(p)
        else:
            x, y = p
            result.append(Point(float(x), float(y)))
    return result


def mark_non_original(ring: Sequence[Point]) -> Ring:
    """Return a copy of the ring with every vertex flagged as cut-generated."""
    return [replace(p, is_original=False) for p in ring]


def bounding_box(points: Sequence[Point]) -> BoundingBox:
    """Compute the bounding box of a point sequence."""
    if not points:
        return BoundingBox(0, 0, 0, 0)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return BoundingBox(min(xs), min(ys), max(xs), max(ys))


def signed_area(polygon: Sequence[Point]) -> float:
    """
    Calculate signed area of polygon using shoelace formula.

    Returns:
        Positive for CCW winding, negative for CW winding (y axis up).
    """
    n = len(polygon)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += polygon[i].x * polygon[j].y
        area -= polygon[j].x * polygon[i].y
    return area / 2.0


def polygon_centroid(polygon: Sequence[Point]) -> Point:
    """
    Area-weighted centroid of a polygon.

    Degenerate polygons (near-zero area) return their first vertex.
    """
    area = 0.0
    cx = 0.0
    cy = 0.0
    n = len(polygon)
    for i in range(n):
        j = (i + 1) % n
        cross = polygon[i].x * polygon[j].y - polygon[j].x * polygon[i].y
        area += cross
        cx += (polygon[i].x + polygon[j].x) * cross
        cy += (polygon[i].y + polygon[j].y) * cross
    area *= 0.5
    if abs(area) < 1e-6:
        return polygon[0]
    return Point(cx / (6 * area), cy / (6 * area))


def point_to_segment_distance(p: Point, a: Point, b: Point) -> float:
    """Euclidean distance from point p to segment ab."""
    l2 = (b.x - a.x) ** 2 + (b.y - a.y) ** 2
    if l2 == 0:
        return math.hypot(p.x - a.x, p.y - a.y)
    t = ((p.x - a.x) * (b.x - a.x) + (p.y - a.y) * (b.y - a.y)) / l2
    t = max(0.0, min(1.0, t))
    return math.hypot(p.x - (a.x + t * (b.x - a.x)), p.y - (a.y + t * (b.y - a.y)))


def point_in_polygon(point: Point, polygon: Sequence[Point], tolerance: float = 0.0) -> bool:
    """
    Check if point is inside polygon using even-odd ray casting.

    Args:
        point: Query point
        polygon: Polygon vertices
        tolerance: A point outside the polygon but within this distance of
            one of its edges is still reported as inside.

    Returns:
        True if point is inside polygon.
    """
    x, y = point.x, point.y
    n = len(polygon)
    inside = False

    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i

    if not inside and tolerance > 0:
        for i in range(n):
            if point_to_segment_distance(point, polygon[i], polygon[(i + 1) % n]) <= tolerance:
                return True

    return inside
