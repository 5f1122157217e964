import pytest
import math
from hypothesis import given, strategies as st, assume
from pyproj import Geod
from coordist.geometry import GeographicPoint, PlanarPoint, normalize_longitude
from coordist.algorithms import (
    GeographicAlgorithm,
    PlanarAlgorithm,
    distance,
    haversine_distance,
    vincenty_inverse,
    equirectangular_distance,
    euclidean_2d_distance,
    euclidean_3d_distance,
    manhattan_2d_distance,
)
from coordist.geometry_utils import geographic_midpoint, geodesic_circle
from coordist.units import OutputUnit, from_base_units, to_base_units

# Strategy for valid geographic coordinates
valid_lat = st.floats(-85.0, 85.0)  # Keep clear of the poles
valid_lon = st.floats(-180.0, 180.0)
valid_geographic = st.builds(GeographicPoint, latitude=valid_lat, longitude=valid_lon)

planar_coord = st.floats(-1e6, 1e6)
valid_planar = st.builds(PlanarPoint, x=planar_coord, y=planar_coord, z=planar_coord)

WGS84 = Geod(ellps="WGS84")


class TestGeographicDistanceProperties:

    @given(valid_geographic, st.sampled_from(list(GeographicAlgorithm)))
    def test_distance_to_self_is_zero(self, pos, algorithm):
        """Distance from a point to itself is always zero."""
        assert distance(algorithm, pos, pos) == 0

    @given(valid_geographic, valid_geographic)
    def test_haversine_is_symmetric(self, pos1, pos2):
        d1 = haversine_distance(pos1, pos2)
        d2 = haversine_distance(pos2, pos1)
        assert d1 >= 0
        assert d1 == pytest.approx(d2, abs=1e-6)

    @given(valid_geographic, valid_geographic)
    def test_equirectangular_is_symmetric(self, pos1, pos2):
        d1 = equirectangular_distance(pos1, pos2)
        d2 = equirectangular_distance(pos2, pos1)
        assert d1 >= 0
        assert d1 == pytest.approx(d2, abs=1e-6)

    @given(valid_geographic, valid_geographic)
    def test_vincenty_is_symmetric(self, pos1, pos2):
        assume(haversine_distance(pos1, pos2) < 18_000_000)
        d1 = vincenty_inverse(pos1, pos2).distance
        d2 = vincenty_inverse(pos2, pos1).distance
        assert d1 == pytest.approx(d2, abs=1e-4)

    @given(valid_geographic, valid_geographic)
    def test_vincenty_matches_reference_geodesic(self, pos1, pos2):
        """Away from antipodal pairs, Vincenty agrees with pyproj to a centimeter."""
        assume(haversine_distance(pos1, pos2) < 18_000_000)
        result = vincenty_inverse(pos1, pos2)
        _, _, expected = WGS84.inv(
            pos1.longitude, pos1.latitude, pos2.longitude, pos2.latitude
        )
        assert result.converged
        assert result.distance == pytest.approx(expected, abs=1e-2)

    @given(valid_geographic, valid_geographic)
    def test_haversine_never_exceeds_half_circumference(self, pos1, pos2):
        assert haversine_distance(pos1, pos2) <= math.pi * 6371008.8 + 1e-6


class TestPlanarDistanceProperties:

    @given(valid_planar, st.sampled_from(list(PlanarAlgorithm)))
    def test_distance_to_self_is_zero(self, pos, algorithm):
        assert distance(algorithm, pos, pos) == 0

    @given(valid_planar, valid_planar, st.sampled_from(list(PlanarAlgorithm)))
    def test_distance_is_symmetric(self, pos1, pos2, algorithm):
        assert distance(algorithm, pos1, pos2) == pytest.approx(
            distance(algorithm, pos2, pos1)
        )

    @given(valid_planar, valid_planar)
    def test_distance_ordering(self, pos1, pos2):
        """Straight line in 2D is never longer than the 3D or Manhattan distance."""
        d2 = euclidean_2d_distance(pos1, pos2)
        assert euclidean_3d_distance(pos1, pos2) >= d2 * (1 - 1e-12) - 1e-9
        assert manhattan_2d_distance(pos1, pos2) >= d2 * (1 - 1e-12) - 1e-9


class TestUnitProperties:

    @given(st.floats(-1e12, 1e12), st.sampled_from(list(OutputUnit)))
    def test_unit_round_trip(self, value, unit):
        restored = from_base_units(to_base_units(value, unit), unit)
        assert restored == pytest.approx(value, rel=1e-9, abs=1e-300)


class TestLongitudeProperties:

    @given(st.floats(-1e6, 1e6))
    def test_normalization_range_and_idempotence(self, lon):
        once = normalize_longitude(lon)
        assert -180.0 <= once <= 180.0
        assert normalize_longitude(once) == pytest.approx(once, abs=1e-9)

    @given(st.floats(-180.0, 180.0, exclude_max=True))
    def test_normalization_keeps_canonical_values(self, lon):
        assert normalize_longitude(lon) == pytest.approx(lon, abs=1e-9)

    def test_just_past_the_antimeridian_wraps_west(self):
        wrapped = normalize_longitude(180.0000001)
        assert -180.0 < wrapped <= -179.999


class TestGeometryProperties:

    @given(valid_geographic, st.floats(1.0, 1e6))
    def test_geodesic_circle_points_lie_on_the_radius(self, center, radius):
        for point in geodesic_circle(center, radius, steps=8):
            assert haversine_distance(center, point) == pytest.approx(
                radius, rel=1e-6, abs=1e-6
            )

    @given(valid_geographic, valid_geographic)
    def test_midpoint_is_order_independent(self, pos1, pos2):
        assume(haversine_distance(pos1, pos2) < 19_000_000)
        mid1 = geographic_midpoint(pos1, pos2)
        mid2 = geographic_midpoint(pos2, pos1)
        assert haversine_distance(mid1, mid2) < 1e-3
