#!/usr/bin/env python3
"""
Distance algorithms for geographic and planar point pairs.

Geographic algorithms return meters; planar algorithms return abstract planar
units that the caller scales to meters. The two families are separate enums
and the dispatcher rejects any pairing of an algorithm with points of the
other family.
"""

from enum import Enum
from typing import Callable, Dict, NamedTuple, Tuple, Union
import logging
import math

from .geometry import GeographicPoint, PlanarPoint, Point

logger = logging.getLogger(__name__)

# Mean Earth radius (IUGG)
EARTH_RADIUS_M = 6371008.8

# WGS84 ellipsoid
WGS84_A = 6378137.0
WGS84_B = 6356752.314245
WGS84_F = 1 / 298.257223563

VINCENTY_TOLERANCE = 1e-12
VINCENTY_MAX_ITERATIONS = 200


class AlgorithmModeError(TypeError):
    """Raised when an algorithm is used with points of the other family."""


class CoordinateMode(Enum):
    """Enumeration for coordinate modes."""

    GEOGRAPHIC = "geographic"
    PLANAR = "planar"

    def __str__(self) -> str:
        return self.value


class GeographicAlgorithm(Enum):
    """Enumeration for distance algorithms on the Earth's surface."""

    HAVERSINE = "haversine"
    VINCENTY = "vincenty"
    EQUIRECTANGULAR = "equirect"

    def __str__(self) -> str:
        return self.value

    @property
    def message_key(self) -> str:
        """Lookup key for the rendering layer, e.g. ``algoHaversine``."""
        return ALGORITHM_MESSAGE_KEYS[self]


class PlanarAlgorithm(Enum):
    """Enumeration for distance algorithms on a flat grid."""

    EUCLIDEAN_2D = "euclidean2d"
    EUCLIDEAN_3D = "euclidean3d"
    MANHATTAN_2D = "manhattan2d"

    def __str__(self) -> str:
        return self.value

    @property
    def message_key(self) -> str:
        return ALGORITHM_MESSAGE_KEYS[self]


Algorithm = Union[GeographicAlgorithm, PlanarAlgorithm]

ALGORITHM_MESSAGE_KEYS: Dict[Algorithm, str] = {
    GeographicAlgorithm.HAVERSINE: "algoHaversine",
    GeographicAlgorithm.VINCENTY: "algoVincenty",
    GeographicAlgorithm.EQUIRECTANGULAR: "algoEquirect",
    PlanarAlgorithm.EUCLIDEAN_2D: "algoEuclidean2D",
    PlanarAlgorithm.EUCLIDEAN_3D: "algoEuclidean3D",
    PlanarAlgorithm.MANHATTAN_2D: "algoManhattan",
}

ALGORITHMS_BY_MODE: Dict[CoordinateMode, Tuple[Algorithm, ...]] = {
    CoordinateMode.GEOGRAPHIC: tuple(GeographicAlgorithm),
    CoordinateMode.PLANAR: tuple(PlanarAlgorithm),
}


class VincentyResult(NamedTuple):
    """Outcome of the Vincenty inverse solution."""

    distance: float  # meters
    iterations: int
    converged: bool


def algorithms_for_mode(mode: CoordinateMode) -> Tuple[Algorithm, ...]:
    """Return the algorithms that are legal for a coordinate mode."""
    return ALGORITHMS_BY_MODE[mode]


def mode_of(algorithm: Algorithm) -> CoordinateMode:
    """Return the coordinate mode an algorithm belongs to."""
    if isinstance(algorithm, GeographicAlgorithm):
        return CoordinateMode.GEOGRAPHIC
    if isinstance(algorithm, PlanarAlgorithm):
        return CoordinateMode.PLANAR
    raise AlgorithmModeError(f"Unknown algorithm: {algorithm!r}")


def haversine_distance(a: GeographicPoint, b: GeographicPoint) -> float:
    """
    Calculate the great circle distance between two points.

    Uses the Haversine formula on a sphere with the mean Earth radius.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in meters
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push h a hair above 1 for antipodal pairs
    h = min(h, 1.0)

    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def vincenty_inverse(a: GeographicPoint, b: GeographicPoint) -> VincentyResult:
    """
    Solve the inverse geodesic problem on the WGS84 ellipsoid.

    The longitude on the auxiliary sphere is iterated until successive values
    differ by at most 1e-12 radians. Coincident points return 0. When the
    iteration cap is reached (typically for nearly antipodal points) the
    Haversine distance is returned instead and ``converged`` is False.

    Args:
        a: First point
        b: Second point

    Returns:
        VincentyResult with the distance in meters and iteration diagnostics
    """
    L = math.radians(b.longitude - a.longitude)
    U1 = math.atan((1 - WGS84_F) * math.tan(math.radians(a.latitude)))
    U2 = math.atan((1 - WGS84_F) * math.tan(math.radians(b.latitude)))

    sin_u1, cos_u1 = math.sin(U1), math.cos(U1)
    sin_u2, cos_u2 = math.sin(U2), math.cos(U2)

    lam = L
    for iteration in range(1, VINCENTY_MAX_ITERATIONS + 1):
        sin_lam = math.sin(lam)
        cos_lam = math.cos(lam)

        sin_sigma = math.sqrt(
            (cos_u2 * sin_lam) ** 2
            + (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) ** 2
        )
        if sin_sigma == 0:
            return VincentyResult(0.0, iteration, True)

        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1 - sin_alpha**2

        # Equatorial line: cos_sq_alpha is zero
        if cos_sq_alpha == 0:
            cos_2sigma_m = 0.0
        else:
            cos_2sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha

        C = WGS84_F / 16 * cos_sq_alpha * (4 + WGS84_F * (4 - 3 * cos_sq_alpha))
        lam_prev = lam
        lam = L + (1 - C) * WGS84_F * sin_alpha * (
            sigma
            + C
            * sin_sigma
            * (cos_2sigma_m + C * cos_sigma * (-1 + 2 * cos_2sigma_m**2))
        )

        if abs(lam - lam_prev) <= VINCENTY_TOLERANCE:
            break
    else:
        fallback = haversine_distance(a, b)
        logger.debug(
            f"Vincenty did not converge after {VINCENTY_MAX_ITERATIONS} iterations "
            f"for {a} -> {b}; using Haversine distance {fallback:.3f} m"
        )
        return VincentyResult(fallback, VINCENTY_MAX_ITERATIONS, False)

    u_sq = cos_sq_alpha * (WGS84_A**2 - WGS84_B**2) / WGS84_B**2
    A = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    B = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sigma = (
        B
        * sin_sigma
        * (
            cos_2sigma_m
            + B
            / 4
            * (
                cos_sigma * (-1 + 2 * cos_2sigma_m**2)
                - B
                / 6
                * cos_2sigma_m
                * (-3 + 4 * sin_sigma**2)
                * (-3 + 4 * cos_2sigma_m**2)
            )
        )
    )

    return VincentyResult(WGS84_B * A * (sigma - delta_sigma), iteration, True)


def vincenty_distance(a: GeographicPoint, b: GeographicPoint) -> float:
    """Vincenty inverse distance in meters, falling back to Haversine."""
    return vincenty_inverse(a, b).distance


def equirectangular_distance(a: GeographicPoint, b: GeographicPoint) -> float:
    """
    Approximate distance on an equirectangular projection.

    Only suitable for small separations; the longitude difference is not
    wrapped across the antimeridian.
    """
    x = math.radians(b.longitude - a.longitude) * math.cos(
        math.radians((a.latitude + b.latitude) / 2)
    )
    y = math.radians(b.latitude - a.latitude)
    return math.sqrt(x * x + y * y) * EARTH_RADIUS_M


def euclidean_2d_distance(a: PlanarPoint, b: PlanarPoint) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def euclidean_3d_distance(a: PlanarPoint, b: PlanarPoint) -> float:
    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2 + (b.z - a.z) ** 2)


def manhattan_2d_distance(a: PlanarPoint, b: PlanarPoint) -> float:
    return abs(b.x - a.x) + abs(b.y - a.y)


GEOGRAPHIC_DISTANCES: Dict[
    GeographicAlgorithm, Callable[[GeographicPoint, GeographicPoint], float]
] = {
    GeographicAlgorithm.HAVERSINE: haversine_distance,
    GeographicAlgorithm.VINCENTY: vincenty_distance,
    GeographicAlgorithm.EQUIRECTANGULAR: equirectangular_distance,
}

PLANAR_DISTANCES: Dict[PlanarAlgorithm, Callable[[PlanarPoint, PlanarPoint], float]] = {
    PlanarAlgorithm.EUCLIDEAN_2D: euclidean_2d_distance,
    PlanarAlgorithm.EUCLIDEAN_3D: euclidean_3d_distance,
    PlanarAlgorithm.MANHATTAN_2D: manhattan_2d_distance,
}


def geographic_distance(
    algorithm: GeographicAlgorithm, a: GeographicPoint, b: GeographicPoint
) -> float:
    """Distance in meters between two geographic points."""
    if not isinstance(algorithm, GeographicAlgorithm):
        raise AlgorithmModeError(
            f"{algorithm!r} is not a geographic algorithm"
        )
    if not (isinstance(a, GeographicPoint) and isinstance(b, GeographicPoint)):
        raise AlgorithmModeError(
            f"{algorithm} requires GeographicPoint operands, "
            f"got {type(a).__name__} and {type(b).__name__}"
        )
    return GEOGRAPHIC_DISTANCES[algorithm](a, b)


def planar_distance(algorithm: PlanarAlgorithm, a: PlanarPoint, b: PlanarPoint) -> float:
    """Distance in planar units between two planar points."""
    if not isinstance(algorithm, PlanarAlgorithm):
        raise AlgorithmModeError(f"{algorithm!r} is not a planar algorithm")
    if not (isinstance(a, PlanarPoint) and isinstance(b, PlanarPoint)):
        raise AlgorithmModeError(
            f"{algorithm} requires PlanarPoint operands, "
            f"got {type(a).__name__} and {type(b).__name__}"
        )
    return PLANAR_DISTANCES[algorithm](a, b)


def distance(algorithm: Algorithm, a: Point, b: Point) -> float:
    """
    Calculate the distance between two points with the named algorithm.

    Args:
        algorithm: A GeographicAlgorithm or PlanarAlgorithm
        a: First point, of the algorithm's family
        b: Second point, of the algorithm's family

    Returns:
        Meters for geographic algorithms, planar units for planar algorithms

    Raises:
        AlgorithmModeError: If the algorithm and the points belong to
            different families
    """
    if mode_of(algorithm) is CoordinateMode.GEOGRAPHIC:
        return geographic_distance(algorithm, a, b)  # type: ignore[arg-type]
    return planar_distance(algorithm, a, b)  # type: ignore[arg-type]
