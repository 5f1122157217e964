#!/usr/bin/env python3
"""
Comparison of two pasted points under the selected algorithms.

This is the result set a front end renders: one distance row per algorithm,
the midpoint, the bearing, a polyline per algorithm for drawing, and an
optional ring around a center point.
"""

from typing import List, NamedTuple, Optional, Tuple
import logging
import math

from .config import ComparisonConfig
from .algorithms import (
    Algorithm,
    CoordinateMode,
    GeographicAlgorithm,
    PlanarAlgorithm,
    geographic_distance,
    planar_distance,
)
from .geometry import PlanarPoint, Point
from .geometry_utils import (
    geodesic_circle,
    geographic_midpoint,
    great_circle_path,
    initial_bearing,
    planar_bearing,
    planar_circle,
    planar_midpoint,
)
from .parsing import Failure, ParseOutcome, parse_geographic, parse_planar
from .units import from_base_units, to_base_units

logger = logging.getLogger(__name__)


class DistanceResult(NamedTuple):
    """Distance for one algorithm."""

    algorithm: Algorithm
    raw: float  # meters (geographic) or planar units
    meters: float
    display_value: float  # meters converted to the output unit


class AlgorithmPath(NamedTuple):
    """Polyline that visualizes how an algorithm measures the distance."""

    algorithm: Algorithm
    points: List[Point]


class Comparison(NamedTuple):
    """Everything computed for a pair of inputs."""

    mode: CoordinateMode
    point_a: ParseOutcome
    point_b: ParseOutcome
    distances: List[DistanceResult]
    midpoint: Optional[Point]
    bearing: Optional[float]
    paths: List[AlgorithmPath]
    radius_ring: Optional[List[Point]]

    @property
    def ok(self) -> bool:
        return self.point_a.ok and self.point_b.ok

    def sorted_distances(self) -> List[DistanceResult]:
        """Distance rows ordered from shortest to longest."""
        return sorted(self.distances, key=lambda row: row.meters)

    def distance_range(self) -> Optional[Tuple[float, float]]:
        """Smallest and largest distance in meters, or None without results."""
        if not self.distances:
            return None
        meters = [row.meters for row in self.distances]
        return min(meters), max(meters)


def parse_point(text: str, mode: CoordinateMode) -> ParseOutcome:
    """Parse text with the parser that belongs to the mode."""
    if mode is CoordinateMode.GEOGRAPHIC:
        return parse_geographic(text)
    return parse_planar(text)


def radius_to_meters(radius: Optional[float], config: ComparisonConfig) -> float:
    """
    Convert a user radius in the output unit to meters.

    Missing, non-finite and non-positive radii disable the ring and give 0.
    """
    if radius is None or not math.isfinite(radius) or radius <= 0:
        return 0.0
    return to_base_units(radius, config.unit)


def _distance_rows(
    a: Point, b: Point, config: ComparisonConfig
) -> List[DistanceResult]:
    rows = []
    for algorithm in config.algorithms:
        if config.mode is CoordinateMode.GEOGRAPHIC:
            raw = geographic_distance(algorithm, a, b)  # type: ignore[arg-type]
            meters = raw
        else:
            raw = planar_distance(algorithm, a, b)  # type: ignore[arg-type]
            meters = raw * config.planar_scale
        rows.append(
            DistanceResult(
                algorithm=algorithm,
                raw=raw,
                meters=meters,
                display_value=from_base_units(meters, config.unit),
            )
        )
    return rows


def algorithm_path(
    algorithm: Algorithm, a: Point, b: Point, steps: int
) -> List[Point]:
    """
    Polyline for drawing an algorithm's measurement between a and b.

    Haversine and Vincenty follow the great circle, the equirectangular
    approximation and Euclidean distances are straight segments, and the
    Manhattan distance is drawn as an L through ``(b.x, a.y)``.
    """
    if algorithm in (GeographicAlgorithm.HAVERSINE, GeographicAlgorithm.VINCENTY):
        return great_circle_path(a, b, steps)  # type: ignore[arg-type]
    if algorithm is PlanarAlgorithm.MANHATTAN_2D:
        corner = PlanarPoint(b.x, a.y, a.z)  # type: ignore[union-attr]
        return [a, corner, b]
    return [a, b]


def _radius_ring(
    center_text: Optional[str], radius: Optional[float], config: ComparisonConfig
) -> Optional[List[Point]]:
    if not center_text or not center_text.strip():
        return None
    radius_meters = radius_to_meters(radius, config)
    if radius_meters <= 0:
        return None

    center = parse_point(center_text, config.mode)
    if isinstance(center, Failure):
        logger.debug(f"Center {center_text!r} not usable: {center.reason}")
        return None

    if config.mode is CoordinateMode.GEOGRAPHIC:
        return geodesic_circle(center.value, radius_meters, config.circle_steps)
    return planar_circle(
        center.value, radius_meters / config.planar_scale, config.circle_steps
    )


def compare(
    a_text: str,
    b_text: str,
    config: Optional[ComparisonConfig] = None,
    center_text: Optional[str] = None,
    radius: Optional[float] = None,
) -> Comparison:
    """
    Parse two inputs and compute every configured result.

    Args:
        a_text: Text for point A
        b_text: Text for point B
        config: Mode, algorithms, output unit and planar scale
        center_text: Optional text for a ring center
        radius: Optional ring radius in the output unit

    Returns:
        Comparison; distance rows, midpoint, bearing and paths are empty or
        None when either point fails to parse

    Raises:
        AlgorithmModeError: If the configuration selects an algorithm of the
            other mode
        ValueError: If the planar scale or a step count is unusable
    """
    config = config or ComparisonConfig()
    config.validate()

    point_a = parse_point(a_text, config.mode)
    point_b = parse_point(b_text, config.mode)
    ring = _radius_ring(center_text, radius, config)

    if isinstance(point_a, Failure) or isinstance(point_b, Failure):
        logger.debug(f"Comparison skipped: A={point_a}, B={point_b}")
        return Comparison(
            mode=config.mode,
            point_a=point_a,
            point_b=point_b,
            distances=[],
            midpoint=None,
            bearing=None,
            paths=[],
            radius_ring=ring,
        )

    a, b = point_a.value, point_b.value
    if config.mode is CoordinateMode.GEOGRAPHIC:
        midpoint: Point = geographic_midpoint(a, b)
        bearing = initial_bearing(a, b)
    else:
        midpoint = planar_midpoint(a, b)
        bearing = planar_bearing(a, b)

    paths = [
        AlgorithmPath(algorithm, algorithm_path(algorithm, a, b, config.path_steps))
        for algorithm in config.algorithms
    ]

    return Comparison(
        mode=config.mode,
        point_a=point_a,
        point_b=point_b,
        distances=_distance_rows(a, b, config),
        midpoint=midpoint,
        bearing=bearing,
        paths=paths,
        radius_ring=ring,
    )
