"""
Configuration for the puzzle cutting engine.

Collects the numerical tolerances and sizing constants used by curve
generation, segment arrangement, face validation and the retry loop.
"""

from dataclasses import dataclass, fields
import json
from pathlib import Path


@dataclass
class CutterConfig:
    """
    Tunable constants for cutting a shape into puzzle pieces.

    Attributes:
        max_attempts: Full-pipeline retries before falling back to a partial result
        curve_samples: Number of straight sub-segments each Bezier curve is sampled into
        snap_precision: Coordinates are rounded to 1 / snap_precision
        dedup_distance: Split points closer than this (per axis) are merged
        intersection_epsilon: Parametric tolerance when accepting intersections
        parallel_epsilon: Cross products below this count as parallel
        bbox_margin: Slack for the bounding-box rejection test
        min_edge_length: Graph edges shorter than this are ignored
        min_piece_area: Faces smaller than this are treated as noise
        centroid_tolerance: Edge distance at which a centroid still counts as inside
        overflow_margin: Allowed overflow of piece vertices beyond the shape bounds
        area_tolerance: Allowed relative error of the summed piece area
        min_piece_ratio: Required fraction of the radial curve count as pieces
        hub_offset_ratio: Hub jitter range relative to min(width, height)
        swirl_degrees: Angular offset of each curve's end point
        radius_factor: Curve radius as a multiple of max(width, height)
        discretize_steps: Samples per smoothed corner of a curved outline
        discretize_min_spacing: Discretized points closer than this are dropped
    """
    # Retry loop
    max_attempts: int = 20

    # Arrangement
    curve_samples: int = 250
    snap_precision: float = 1e6  # 1e-6 grid
    dedup_distance: float = 0.001
    intersection_epsilon: float = 1e-6
    parallel_epsilon: float = 1e-10
    bbox_margin: float = 1.0

    # Graph
    min_edge_length: float = 1e-4

    # Piece validation
    min_piece_area: float = 2.0  # px^2
    centroid_tolerance: float = 5.0
    overflow_margin: float = 20.0  # px

    # Invariants
    area_tolerance: float = 0.01
    min_piece_ratio: float = 0.9

    # Curve generation
    hub_offset_ratio: float = 0.3
    swirl_degrees: float = 30.0
    radius_factor: float = 2.0

    # Outline smoothing
    discretize_steps: int = 40
    discretize_min_spacing: float = 0.01

    def validate(self) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if self.max_attempts < 1:
            errors.append(f"max_attempts must be >= 1, got {self.max_attempts}")

        if self.curve_samples < 1:
            errors.append(f"curve_samples must be >= 1, got {self.curve_samples}")

        if self.snap_precision <= 0:
            errors.append(f"snap_precision must be positive, got {self.snap_precision}")

        if self.discretize_steps < 1:
            errors.append(f"discretize_steps must be >= 1, got {self.discretize_steps}")

        if self.radius_factor <= 0:
            errors.append(f"radius_factor must be positive, got {self.radius_factor}")

        for name in ("dedup_distance", "intersection_epsilon", "parallel_epsilon",
                     "bbox_margin", "min_edge_length", "min_piece_area",
                     "centroid_tolerance", "overflow_margin", "area_tolerance",
                     "discretize_min_spacing"):
            value = getattr(self, name)
            if value < 0:
                errors.append(f"{name} cannot be negative, got {value}")

        if not 0 < self.min_piece_ratio <= 1:
            errors.append(f"min_piece_ratio must be in (0, 1], got {self.min_piece_ratio}")

        if not 0 <= self.hub_offset_ratio <= 1:
            errors.append(f"hub_offset_ratio must be in [0, 1], got {self.hub_offset_ratio}")

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "CutterConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def save(self, filepath: Path | str) -> None:
        """Save configuration to JSON file."""
        filepath = Path(filepath)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Path | str) -> "CutterConfig":
        """Load configuration from JSON file."""
        filepath = Path(filepath)
        if not filepath.exists():
            return cls()  # Return defaults if file doesn't exist

        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)


DEFAULT_CONFIG = CutterConfig()
