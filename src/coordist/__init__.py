#!/usr/bin/env python3
"""
Coordist - coordinate parsing and distance comparison.

This package turns pasted coordinate text (decimal pairs, DMS, labeled pairs
and map links) into points, and measures distance, midpoint, bearing and
path geometry between them with interchangeable algorithms.
"""
import importlib.metadata

__version__ = importlib.metadata.version("coordist")

# Import main classes for public API
from .geometry import GeographicPoint, PlanarPoint, normalize_longitude
from .parsing import (
    Failure,
    ParseError,
    ParseOutcome,
    Success,
    parse_geographic,
    parse_planar,
)
from .providers import Provider, detect_provider
from .algorithms import (
    AlgorithmModeError,
    CoordinateMode,
    GeographicAlgorithm,
    PlanarAlgorithm,
    distance,
)
from .units import OutputUnit, from_base_units, to_base_units
from .comparison import Comparison, compare

__all__ = [
    "GeographicPoint",
    "PlanarPoint",
    "normalize_longitude",
    "Failure",
    "ParseError",
    "ParseOutcome",
    "Success",
    "parse_geographic",
    "parse_planar",
    "Provider",
    "detect_provider",
    "AlgorithmModeError",
    "CoordinateMode",
    "GeographicAlgorithm",
    "PlanarAlgorithm",
    "distance",
    "OutputUnit",
    "from_base_units",
    "to_base_units",
    "Comparison",
    "compare",
]
