#!/usr/bin/env python3
"""
Point types shared by the parser, the distance engine and the geometry builders.
"""

from typing import NamedTuple, Union
import math


class GeographicPoint(NamedTuple):
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


class PlanarPoint(NamedTuple):
    """A point on a flat grid in abstract planar units."""

    x: float
    y: float
    z: float = 0.0


Point = Union[GeographicPoint, PlanarPoint]


def normalize_longitude(longitude: float) -> float:
    """
    Wrap a longitude into the [-180, 180] range.

    Values are wrapped rather than clamped, so 181 becomes -179. A non-finite
    input is returned unchanged.

    Args:
        longitude: Longitude in decimal degrees

    Returns:
        Longitude in decimal degrees within [-180, 180)
    """
    if not math.isfinite(longitude):
        return longitude
    return ((longitude + 540.0) % 360.0) - 180.0


def is_valid_lat_lon(latitude: float, longitude: float) -> bool:
    """Check that both values are finite and inside the raw geographic ranges."""
    return (
        math.isfinite(latitude)
        and math.isfinite(longitude)
        and -90.0 <= latitude <= 90.0
        and -180.0 <= longitude <= 180.0
    )
