import pytest
from coordist.algorithms import (
    AlgorithmModeError,
    CoordinateMode,
    GeographicAlgorithm,
    PlanarAlgorithm,
)
from coordist.config import (
    ComparisonConfig,
    parse_algorithm_list,
    parse_mode,
    parse_scale,
    parse_unit,
)
from coordist.units import OutputUnit


def test_default_config():
    config = ComparisonConfig()
    assert config.mode is CoordinateMode.GEOGRAPHIC
    assert config.algorithms == [GeographicAlgorithm.HAVERSINE]
    assert config.unit is OutputUnit.KILOMETERS
    assert config.planar_scale == 1.0
    assert config.path_steps == 96
    assert config.circle_steps == 120
    config.validate()


def test_planar_config_defaults_to_first_planar_algorithm():
    config = ComparisonConfig(mode=CoordinateMode.PLANAR)
    assert config.algorithms == [PlanarAlgorithm.EUCLIDEAN_2D]


def test_validate_rejects_algorithm_of_other_mode():
    config = ComparisonConfig(
        mode=CoordinateMode.PLANAR,
        algorithms=[PlanarAlgorithm.MANHATTAN_2D, GeographicAlgorithm.VINCENTY],
    )
    with pytest.raises(AlgorithmModeError):
        config.validate()


@pytest.mark.parametrize(
    "value, expected",
    [
        ("planar", CoordinateMode.PLANAR),
        (" Planar ", CoordinateMode.PLANAR),
        ("flat", CoordinateMode.PLANAR),
        ("geographic", CoordinateMode.GEOGRAPHIC),
        ("anything", CoordinateMode.GEOGRAPHIC),
        (None, CoordinateMode.GEOGRAPHIC),
    ],
)
def test_parse_mode(value, expected):
    assert parse_mode(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("m", OutputUnit.METERS),
        ("MI", OutputUnit.MILES),
        ("nmi", OutputUnit.NAUTICAL_MILES),
        ("ft", OutputUnit.FEET),
        ("blocks", OutputUnit.BLOCKS),
        ("furlongs", OutputUnit.KILOMETERS),
        ("", OutputUnit.KILOMETERS),
        (None, OutputUnit.KILOMETERS),
    ],
)
def test_parse_unit(value, expected):
    assert parse_unit(value) is expected


def test_parse_algorithm_list_keeps_request_order_without_duplicates():
    algorithms = parse_algorithm_list(
        "vincenty, HAVERSINE,vincenty", CoordinateMode.GEOGRAPHIC
    )
    assert algorithms == [GeographicAlgorithm.VINCENTY, GeographicAlgorithm.HAVERSINE]


def test_parse_algorithm_list_drops_other_mode():
    algorithms = parse_algorithm_list("haversine,manhattan2d", CoordinateMode.PLANAR)
    assert algorithms == [PlanarAlgorithm.MANHATTAN_2D]


@pytest.mark.parametrize("value", [None, "", "bogus", "euclidean2d"])
def test_parse_algorithm_list_falls_back_to_first_of_mode(value):
    assert parse_algorithm_list(value, CoordinateMode.GEOGRAPHIC) == [
        GeographicAlgorithm.HAVERSINE
    ]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2.5", 2.5),
        ("100", 100.0),
        ("0", 1.0),
        ("-3", 1.0),
        ("nan", 1.0),
        ("inf", 1.0),
        ("abc", 1.0),
        (None, 1.0),
    ],
)
def test_parse_scale(value, expected):
    assert parse_scale(value) == expected


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"planar_scale": 0.0}, "planar_scale"),
        ({"planar_scale": -1.0}, "planar_scale"),
        ({"planar_scale": float("nan")}, "planar_scale"),
        ({"path_steps": 0}, "path_steps"),
        ({"circle_steps": -3}, "circle_steps"),
    ],
)
def test_validate_rejects_unusable_numbers(overrides, message):
    config = ComparisonConfig(mode=CoordinateMode.PLANAR, **overrides)
    with pytest.raises(ValueError, match=message):
        config.validate()
