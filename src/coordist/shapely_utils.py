"""
Conversion of point sequences into Shapely geometries.

Geographic points are emitted in (longitude, latitude) order, the axis order
GIS tools expect. Planar points keep (x, y, z).
"""

from typing import List, Sequence, Tuple
from shapely.geometry import LineString, Polygon

from .geometry import GeographicPoint, Point


def points_to_coords(points: Sequence[Point]) -> List[Tuple[float, ...]]:
    """Convert points to coordinate tuples in GIS axis order."""
    return [
        (point.longitude, point.latitude)
        if isinstance(point, GeographicPoint)
        else (point.x, point.y, point.z)
        for point in points
    ]


def points_to_linestring(points: Sequence[Point]) -> LineString:
    """
    Convert a path to a Shapely LineString.

    Args:
        points: Path points, all of the same family

    Returns:
        LineString in (lon, lat) or (x, y, z) coordinates

    Raises:
        ValueError: If fewer than two points are given
    """
    if len(points) < 2:
        raise ValueError("At least two points are required to create a LineString.")
    return LineString(points_to_coords(points))


def ring_to_polygon(points: Sequence[Point]) -> Polygon:
    """
    Convert a closed ring to a Shapely Polygon.

    Raises:
        ValueError: If fewer than three points are given
    """
    if len(points) < 3:
        raise ValueError("At least three points are required to create a Polygon.")
    return Polygon(points_to_coords(points))
