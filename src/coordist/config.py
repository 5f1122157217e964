from dataclasses import dataclass, field
from typing import List, Optional
import math

from .algorithms import (
    Algorithm,
    AlgorithmModeError,
    CoordinateMode,
    algorithms_for_mode,
)
from .geometry_utils import DEFAULT_CIRCLE_STEPS, DEFAULT_PATH_STEPS
from .units import OutputUnit


@dataclass
class ComparisonConfig:
    """Configuration for comparing two points."""

    mode: CoordinateMode = CoordinateMode.GEOGRAPHIC
    algorithms: List[Algorithm] = field(default_factory=list)
    unit: OutputUnit = OutputUnit.KILOMETERS
    planar_scale: float = 1.0  # meters per planar unit
    path_steps: int = DEFAULT_PATH_STEPS
    circle_steps: int = DEFAULT_CIRCLE_STEPS
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not self.algorithms:
            self.algorithms = [algorithms_for_mode(self.mode)[0]]

    def validate(self) -> None:
        """
        Check that every selected algorithm belongs to the configured mode and
        that the numeric settings are usable.

        Raises:
            AlgorithmModeError: If an algorithm belongs to the other mode
            ValueError: If the planar scale is not a positive finite number or
                a step count is not positive
        """
        if not math.isfinite(self.planar_scale) or self.planar_scale <= 0:
            raise ValueError(
                f"planar_scale must be a positive finite number, got {self.planar_scale}"
            )
        for name in ("path_steps", "circle_steps"):
            if getattr(self, name) < 1:
                raise ValueError(
                    f"{name} must be a positive integer, got {getattr(self, name)}"
                )

        allowed = algorithms_for_mode(self.mode)
        for algorithm in self.algorithms:
            if algorithm not in allowed:
                raise AlgorithmModeError(
                    f"Algorithm {algorithm} is not available in {self.mode} mode"
                )


def parse_mode(value: Optional[str]) -> CoordinateMode:
    """Anything other than "planar" (or its "flat" alias) is geographic."""
    if value is not None and value.strip().lower() in ("planar", "flat"):
        return CoordinateMode.PLANAR
    return CoordinateMode.GEOGRAPHIC


def parse_unit(value: Optional[str]) -> OutputUnit:
    """Unknown or missing units fall back to kilometers."""
    try:
        return OutputUnit((value or "").strip().lower())
    except ValueError:
        return OutputUnit.KILOMETERS


def parse_algorithm_list(value: Optional[str], mode: CoordinateMode) -> List[Algorithm]:
    """
    Parse a comma separated list of algorithm identifiers for a mode.

    Identifiers that are unknown or belong to the other mode are dropped. If
    nothing is left, the first algorithm of the mode is selected.

    Args:
        value: Comma separated identifiers, e.g. "haversine,vincenty"
        mode: Coordinate mode that restricts the legal identifiers

    Returns:
        Non-empty list of algorithms in request order, without duplicates
    """
    allowed = algorithms_for_mode(mode)
    by_id = {algorithm.value: algorithm for algorithm in allowed}

    selected: List[Algorithm] = []
    for item in (value or "").split(","):
        algorithm = by_id.get(item.strip().lower())
        if algorithm is not None and algorithm not in selected:
            selected.append(algorithm)

    return selected or [allowed[0]]


def parse_scale(value: Optional[str]) -> float:
    """Meters per planar unit; non-finite or non-positive values become 1."""
    try:
        scale = float(value) if value is not None else 1.0
    except ValueError:
        return 1.0
    return scale if math.isfinite(scale) and scale > 0 else 1.0
