#!/usr/bin/env python3
"""
Linear conversion between base units and user-facing output units.

Geographic distances use meters as the base unit. Planar distances are scaled
to meters by the caller before they reach this module.
"""

from enum import Enum


class OutputUnit(Enum):
    """Enumeration for output units."""

    METERS = "m"
    KILOMETERS = "km"
    MILES = "mi"
    NAUTICAL_MILES = "nmi"
    FEET = "ft"
    BLOCKS = "blocks"

    def __str__(self) -> str:
        return self.value

    @property
    def meters_per_unit(self) -> float:
        return METERS_PER_UNIT[self]


# Blocks are a planar alias for meters
METERS_PER_UNIT = {
    OutputUnit.METERS: 1.0,
    OutputUnit.KILOMETERS: 1000.0,
    OutputUnit.MILES: 1609.344,
    OutputUnit.NAUTICAL_MILES: 1852.0,
    OutputUnit.FEET: 0.3048,
    OutputUnit.BLOCKS: 1.0,
}


def to_base_units(value: float, unit: OutputUnit) -> float:
    """
    Convert a value expressed in ``unit`` to base units (meters).

    Args:
        value: Value in the given unit
        unit: Unit the value is expressed in

    Returns:
        Value in meters
    """
    return value * METERS_PER_UNIT[unit]


def from_base_units(value: float, unit: OutputUnit) -> float:
    """
    Convert a value in base units (meters) to ``unit``.

    Args:
        value: Value in meters
        unit: Target unit

    Returns:
        Value in the target unit
    """
    return value / METERS_PER_UNIT[unit]
