#!/usr/bin/env python3
"""
Derived geometry: midpoints, bearings, great-circle paths and circles.
"""

from typing import List
import logging
import math

from .algorithms import EARTH_RADIUS_M
from .geometry import GeographicPoint, PlanarPoint, normalize_longitude

logger = logging.getLogger(__name__)

DEFAULT_PATH_STEPS = 96
DEFAULT_CIRCLE_STEPS = 120


def _check_steps(steps: int) -> None:
    if steps < 1:
        raise ValueError(f"steps must be a positive integer, got {steps}")


def geographic_midpoint(a: GeographicPoint, b: GeographicPoint) -> GeographicPoint:
    """
    Calculate the midpoint of the great circle arc between two points.

    Both points are summed as vectors on the unit sphere and the sum is
    converted back, which stays correct across the antimeridian and near the
    poles where averaging degrees does not.

    Args:
        a: First point
        b: Second point

    Returns:
        Midpoint with normalized longitude
    """
    lat1 = math.radians(a.latitude)
    lon1 = math.radians(a.longitude)
    lat2 = math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    bx = math.cos(lat2) * math.cos(dlon)
    by = math.cos(lat2) * math.sin(dlon)

    lat3 = math.atan2(
        math.sin(lat1) + math.sin(lat2),
        math.sqrt((math.cos(lat1) + bx) ** 2 + by**2),
    )
    lon3 = lon1 + math.atan2(by, math.cos(lat1) + bx)

    return GeographicPoint(
        math.degrees(lat3), normalize_longitude(math.degrees(lon3))
    )


def planar_midpoint(a: PlanarPoint, b: PlanarPoint) -> PlanarPoint:
    """Component-wise mean of two planar points."""
    return PlanarPoint((a.x + b.x) / 2, (a.y + b.y) / 2, (a.z + b.z) / 2)


def initial_bearing(a: GeographicPoint, b: GeographicPoint) -> float:
    """
    Calculate the initial bearing (forward azimuth) from a to b.

    Args:
        a: Start point
        b: End point

    Returns:
        Bearing in degrees clockwise from north, in [0, 360)
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        dlon
    )

    return (math.degrees(math.atan2(y, x)) + 360) % 360


def planar_bearing(a: PlanarPoint, b: PlanarPoint) -> float:
    """
    Calculate the compass-style bearing from a to b on a north-up grid.

    The +y axis is 0 degrees and angles grow clockwise towards +x.

    Returns:
        Bearing in degrees, in [0, 360)
    """
    bearing = math.degrees(math.atan2(b.x - a.x, b.y - a.y))
    return (bearing + 360) % 360


def great_circle_path(
    a: GeographicPoint, b: GeographicPoint, steps: int = DEFAULT_PATH_STEPS
) -> List[GeographicPoint]:
    """
    Interpolate evenly spaced points along the shortest arc from a to b.

    Args:
        a: Start point
        b: End point
        steps: Number of segments; steps + 1 points are returned

    Returns:
        Points at parameters 0, 1/steps, ..., 1 including both endpoints

    Raises:
        ValueError: If steps is not positive
    """
    _check_steps(steps)

    lon0, lat0 = math.radians(a.longitude), math.radians(a.latitude)
    lon1, lat1 = math.radians(b.longitude), math.radians(b.latitude)

    cos_lat0, sin_lat0 = math.cos(lat0), math.sin(lat0)
    cos_lat1, sin_lat1 = math.cos(lat1), math.sin(lat1)
    kx0, ky0 = cos_lat0 * math.cos(lon0), cos_lat0 * math.sin(lon0)
    kx1, ky1 = cos_lat1 * math.cos(lon1), cos_lat1 * math.sin(lon1)

    d = 2 * math.asin(
        math.sqrt(
            math.sin((lat1 - lat0) / 2) ** 2
            + cos_lat0 * cos_lat1 * math.sin((lon1 - lon0) / 2) ** 2
        )
    )
    if d == 0:
        return [a] * (steps + 1)

    k = math.sin(d)
    points = []
    for i in range(steps + 1):
        t = d * i / steps
        weight_b = math.sin(t) / k
        weight_a = math.sin(d - t) / k
        x = weight_a * kx0 + weight_b * kx1
        y = weight_a * ky0 + weight_b * ky1
        z = weight_a * sin_lat0 + weight_b * sin_lat1
        points.append(
            GeographicPoint(
                math.degrees(math.atan2(z, math.sqrt(x * x + y * y))),
                math.degrees(math.atan2(y, x)),
            )
        )
    return points


def destination_point(
    start: GeographicPoint, bearing: float, distance: float
) -> GeographicPoint:
    """
    Solve the direct problem on the sphere.

    Args:
        start: Start point
        bearing: Initial bearing in degrees clockwise from north
        distance: Distance to travel in meters

    Returns:
        Destination point with normalized longitude
    """
    angular = distance / EARTH_RADIUS_M
    theta = math.radians(bearing)
    lat1 = math.radians(start.latitude)
    lon1 = math.radians(start.longitude)

    sin_lat2 = math.sin(lat1) * math.cos(angular) + math.cos(lat1) * math.sin(
        angular
    ) * math.cos(theta)
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )

    return GeographicPoint(math.degrees(lat2), normalize_longitude(math.degrees(lon2)))


def geodesic_circle(
    center: GeographicPoint, radius: float, steps: int = DEFAULT_CIRCLE_STEPS
) -> List[GeographicPoint]:
    """
    Build a closed ring of points at a fixed distance around a center.

    Bearings are spaced evenly from 0 to 360 degrees inclusive, so the first
    and last points coincide.

    Args:
        center: Ring center
        radius: Radius in meters
        steps: Number of segments; steps + 1 points are returned

    Returns:
        Ring points in bearing order
    """
    _check_steps(steps)
    logger.debug(f"Building geodesic circle of {radius:.3f} m around {center}")
    return [
        destination_point(center, 360.0 * i / steps, radius) for i in range(steps + 1)
    ]


def planar_circle(
    center: PlanarPoint, radius: float, steps: int = DEFAULT_CIRCLE_STEPS
) -> List[PlanarPoint]:
    """
    Build a closed ring of points on a circle around a planar center.

    Args:
        center: Ring center; its z is kept for every point
        radius: Radius in planar units
        steps: Number of segments; steps + 1 points are returned

    Returns:
        Ring points in counter-clockwise angle order starting on +x
    """
    _check_steps(steps)
    points = []
    for i in range(steps + 1):
        theta = 2 * math.pi * i / steps
        points.append(
            PlanarPoint(
                center.x + radius * math.cos(theta),
                center.y + radius * math.sin(theta),
                center.z,
            )
        )
    return points
