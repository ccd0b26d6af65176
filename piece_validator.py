"""
Filtering of traced faces down to puzzle pieces.

A traced face is kept only if it:
- winds the same way as the source shape (drops the outer face and
  complement regions)
- is larger than the sliver threshold
- has its centroid inside the shape (with an edge-distance tolerance)
- stays inside the shape's bounding box plus the overflow margin
"""

import logging
from collections import Counter
from typing import Optional, Sequence

from config import CutterConfig, DEFAULT_CONFIG
from geometry import (
    BoundingBox,
    Point,
    Ring,
    bounding_box,
    mark_non_original,
    point_in_polygon,
    polygon_centroid,
    signed_area,
)

logger = logging.getLogger(__name__)


def _rejection_reason(
    face: Sequence[Point],
    shape: Sequence[Point],
    shape_positive: bool,
    limits: BoundingBox,
    config: CutterConfig
) -> Optional[str]:
    """Name of the first check the face fails, or None if it is a piece."""
    face_area = signed_area(face)
    if (face_area >= 0) != shape_positive:
        return "winding"

    if abs(face_area) < config.min_piece_area:
        return "area"

    if not point_in_polygon(polygon_centroid(face), shape, config.centroid_tolerance):
        return "centroid"

    if not all(limits.contains(p.x, p.y) for p in face):
        return "overflow"

    return None


def is_valid_piece(
    face: Sequence[Point],
    shape: Sequence[Point],
    config: CutterConfig = DEFAULT_CONFIG
) -> bool:
    """Check a single face against the source shape."""
    limits = bounding_box(shape).expand(config.overflow_margin)
    return _rejection_reason(face, shape, signed_area(shape) >= 0, limits, config) is None


def filter_valid_pieces(
    faces: Sequence[Sequence[Point]],
    shape: Sequence[Point],
    config: CutterConfig = DEFAULT_CONFIG
) -> list[Ring]:
    """
    Keep the faces that are real pieces of the shape.

    Args:
        faces: All traced faces from PlanarGraph.extract_faces
        shape: Source outline
        config: Validation thresholds

    Returns:
        Surviving faces with every vertex marked non-original.
    """
    shape_positive = signed_area(shape) >= 0
    limits = bounding_box(shape).expand(config.overflow_margin)

    pieces: list[Ring] = []
    rejected: Counter = Counter()

    for face in faces:
        reason = _rejection_reason(face, shape, shape_positive, limits, config)
        if reason is None:
            pieces.append(mark_non_original(face))
        else:
            rejected[reason] += 1

    logger.debug("Kept %d of %d faces (rejected: %s)", len(pieces), len(faces), dict(rejected))
    return pieces
