"""
Network Cutter Module

Cuts a shape into puzzle pieces with a randomized fan of Bezier curves.

Each attempt runs the full pipeline with fresh randomness:
1. Pick a hub near the centroid and fan 2 x cut_count curves out from it
2. Arrange shape edges and sampled curve segments (split at intersections)
3. Build a fresh planar graph and trace its faces
4. Keep faces that are real pieces of the shape
5. Check the global invariants: summed piece area matches the shape, and
   enough pieces came out of the fan

A failed attempt is discarded whole and retried. When every attempt fails
the last attempt's pieces are returned as a PartialResult.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random
from typing import ClassVar, Iterable, Optional, Sequence

from arrangement import compute_arrangement, curve_segments, shape_segments
from bezier import BezierCurve, generate_radial_fan
from config import CutterConfig, DEFAULT_CONFIG
from discretize import discretize_shape
from geometry import Point, PointLike, Ring, as_points, mark_non_original, signed_area
from piece_validator import filter_valid_pieces
from planar_subdivision import PlanarGraph

logger = logging.getLogger(__name__)

POLYGON_SHAPE = "polygon"


# =============================================================================
# Results
# =============================================================================

@dataclass
class AttemptStats:
    """Outcome of a single cutting attempt."""
    attempt: int
    piece_count: int
    area_ratio: float


@dataclass
class CutResult:
    """
    Pieces produced by cut().

    Attributes:
        pieces: Piece rings, every vertex marked non-original
        curves: Cut curves of the attempt that produced the pieces
        attempts: Number of attempts run (0 when no cut was needed)
        area_ratio: Summed piece area divided by the shape area
        history: Statistics of every attempt, in order
    """
    pieces: list[Ring]
    curves: list[BezierCurve] = field(default_factory=list)
    attempts: int = 0
    area_ratio: float = 1.0
    history: list[AttemptStats] = field(default_factory=list)

    is_validated: ClassVar[bool] = False


@dataclass
class ValidatedResult(CutResult):
    """Pieces that passed the area and piece-count invariants."""
    is_validated: ClassVar[bool] = True


@dataclass
class PartialResult(CutResult):
    """Best-effort pieces from the last attempt after retries ran out; may violate the invariants."""
    is_validated: ClassVar[bool] = False


# =============================================================================
# Single Pass
# =============================================================================

def cut_shape_with_curves(
    shape: Sequence[Point],
    curves: Sequence[BezierCurve],
    config: CutterConfig = DEFAULT_CONFIG
) -> tuple[list[Ring], list[BezierCurve]]:
    """
    Cut a shape with an explicit set of curves.

    Args:
        shape: Source outline
        curves: Cut curves
        config: Cutter configuration

    Returns:
        (pieces, curves). When no face survives validation the shape itself
        is returned as the only piece.
    """
    segments = shape_segments(shape) + curve_segments(curves, config.curve_samples)
    arranged = compute_arrangement(segments, config)

    graph = PlanarGraph.from_segments(arranged, config)
    faces = graph.extract_faces()

    # Bounded faces are traced CCW; flip them to a CW shape's winding
    if signed_area(shape) < 0:
        faces = [face[::-1] for face in faces]

    pieces = filter_valid_pieces(faces, shape, config)

    logger.debug(
        "Cut pass: %d segments -> %d arranged, %d nodes, %d faces, %d pieces",
        len(segments), len(arranged), len(graph.nodes), len(faces), len(pieces)
    )

    if not pieces:
        return [mark_non_original(shape)], list(curves)

    return pieces, list(curves)


def total_area(pieces: Iterable[Sequence[Point]]) -> float:
    """Sum of the absolute areas of the pieces."""
    return sum(abs(signed_area(piece)) for piece in pieces)


def invariants_hold(
    area_ratio: float,
    piece_count: int,
    curve_count: int,
    config: CutterConfig = DEFAULT_CONFIG
) -> bool:
    """Area within tolerance of the shape, and at least min_piece_ratio of the curve count as pieces."""
    area_ok = 1 - config.area_tolerance < area_ratio < 1 + config.area_tolerance
    return area_ok and piece_count >= curve_count * config.min_piece_ratio


# =============================================================================
# Retrying Orchestration
# =============================================================================

def cut(
    shape: Sequence[PointLike],
    cut_count: int,
    shape_type: str = POLYGON_SHAPE,
    rng: Optional[random.Random] = None,
    config: Optional[CutterConfig] = None
) -> CutResult:
    """
    Cut a shape into roughly 2 x cut_count pieces.

    Args:
        shape: Simple polygon as Points or (x, y) tuples, either winding
        cut_count: Requested cuts; the fan has 2 x cut_count curves
        shape_type: "polygon" cuts the outline as given; anything else
            smooths it with discretize_shape first
        rng: Random source; pass a seeded random.Random for reproducible cuts
        config: Cutter configuration (defaults if None)

    Returns:
        ValidatedResult if an attempt met the invariants, otherwise a
        PartialResult holding the last attempt's pieces.

    Raises:
        ValueError: If the shape has fewer than 3 points or no area, cut_count
            is negative, or the configuration is invalid.
    """
    config = config or DEFAULT_CONFIG
    errors = config.validate()
    if errors:
        raise ValueError("Invalid cutter configuration: " + "; ".join(errors))

    points = as_points(shape)
    if len(points) < 3:
        raise ValueError(f"Shape must have at least 3 points, got {len(points)}")
    if cut_count < 0:
        raise ValueError(f"cut_count cannot be negative, got {cut_count}")

    actual_shape = points if shape_type == POLYGON_SHAPE else discretize_shape(points, config)

    original_area = abs(signed_area(actual_shape))
    if original_area == 0:
        raise ValueError("Shape has zero area")

    if cut_count == 0:
        return ValidatedResult(pieces=[mark_non_original(actual_shape)])

    rng = rng or random
    curve_count = cut_count * 2
    history: list[AttemptStats] = []
    pieces: list[Ring] = []
    curves: list[BezierCurve] = []

    for attempt in range(1, config.max_attempts + 1):
        fan = generate_radial_fan(actual_shape, curve_count, rng, config)
        pieces, curves = cut_shape_with_curves(actual_shape, fan.curves, config)

        area_ratio = total_area(pieces) / original_area
        stats = AttemptStats(attempt, len(pieces), area_ratio)
        history.append(stats)

        if invariants_hold(area_ratio, len(pieces), curve_count, config):
            logger.debug(
                "Attempt %d succeeded: %d pieces, area ratio %.4f",
                attempt, len(pieces), area_ratio
            )
            return ValidatedResult(pieces, curves, attempt, area_ratio, history)

        logger.info(
            "Attempt %d rejected: %d pieces for %d curves, area ratio %.4f",
            attempt, len(pieces), curve_count, area_ratio
        )

    logger.error(
        "All %d cutting attempts failed; returning best-effort pieces "
        "(%d pieces, area ratio %.4f)",
        config.max_attempts, len(pieces), history[-1].area_ratio
    )
    return PartialResult(pieces, curves, config.max_attempts, history[-1].area_ratio, history)


def generate(
    shape: Sequence[PointLike],
    cut_count: int,
    shape_type: str = POLYGON_SHAPE,
    rng: Optional[random.Random] = None,
    config: Optional[CutterConfig] = None
) -> list[Ring]:
    """
    Cut a shape into puzzle pieces and return just the piece rings.

    Use cut() to tell a validated decomposition from a best-effort one.
    """
    return cut(shape, cut_count, shape_type, rng, config).pieces
