#!/usr/bin/env python3
"""
Coordinate distance command line tool.

Parses two pasted coordinates (decimal pairs, DMS, labeled pairs or map
links), then prints the distance under each selected algorithm, the
midpoint and the initial bearing.
"""

from typing import List, Optional
import argparse
import logging
import sys

from . import __version__
from .comparison import Comparison, compare
from .config import (
    ComparisonConfig,
    parse_algorithm_list,
    parse_mode,
    parse_scale,
    parse_unit,
)
from .algorithms import CoordinateMode
from .geometry import GeographicPoint, Point
from .parsing import Failure
from .providers import detect_provider
from .shapely_utils import points_to_linestring, ring_to_polygon

logger = logging.getLogger("coordist")


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Distance, midpoint and bearing between two pasted coordinates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("point_a", type=str, help="First point (text or map link)")
    parser.add_argument("point_b", type=str, help="Second point (text or map link)")
    parser.add_argument(
        "--mode",
        type=str,
        default="geographic",
        help="Coordinate mode: geographic or planar (default: geographic)",
    )
    parser.add_argument(
        "--algorithms",
        type=str,
        default=None,
        help="Comma separated algorithms, e.g. haversine,vincenty,equirect or "
        "euclidean2d,euclidean3d,manhattan2d (default: first of the mode)",
    )
    parser.add_argument(
        "--unit",
        type=str,
        default="km",
        help="Output unit: m, km, mi, nmi, ft or blocks (default: km)",
    )
    parser.add_argument(
        "--scale",
        type=str,
        default="1",
        help="Meters per planar unit, planar mode only (default: 1)",
    )
    parser.add_argument(
        "--center",
        type=str,
        default=None,
        help="Center point for a radius ring",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=None,
        help="Ring radius in the output unit",
    )
    parser.add_argument(
        "--wkt",
        action="store_true",
        help="Print algorithm paths and the radius ring as WKT",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"coordist {__version__}",
    )
    return parser


def build_config(args: argparse.Namespace) -> ComparisonConfig:
    """Build a ComparisonConfig from parsed arguments."""
    mode = parse_mode(args.mode)
    return ComparisonConfig(
        mode=mode,
        algorithms=parse_algorithm_list(args.algorithms, mode),
        unit=parse_unit(args.unit),
        planar_scale=parse_scale(args.scale),
        log_level=args.log_level,
    )


def setup_logging(config: ComparisonConfig) -> None:
    """Setup logging configuration."""
    level = getattr(logging, config.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def format_point(point: Point) -> str:
    if isinstance(point, GeographicPoint):
        return f"{point.latitude:.6f}, {point.longitude:.6f}"
    return f"{point.x:.3f}, {point.y:.3f}, {point.z:.3f}"


def format_number(value: float) -> str:
    """Two decimals for large values, four otherwise."""
    if abs(value) >= 1000:
        return f"{value:,.2f}"
    return f"{value:.4f}"


def report_lines(
    comparison: Comparison,
    config: ComparisonConfig,
    raw_inputs: Optional[List[str]] = None,
    wkt: bool = False,
) -> List[str]:
    """
    Render a successful comparison as plain text lines.

    Args:
        comparison: Comparison whose points both parsed
        config: Configuration used for the comparison
        raw_inputs: Original input texts, used for provider detection
        wkt: Whether to append WKT for paths and the ring

    Returns:
        Output lines
    """
    lines = []
    for row in comparison.distances:
        lines.append(f"{row.algorithm}: {format_number(row.display_value)} {config.unit}")

    if comparison.midpoint is not None:
        lines.append(f"midpoint: {format_point(comparison.midpoint)}")
    if comparison.bearing is not None:
        lines.append(f"bearing: {format_number(comparison.bearing)}°")

    for label, text in zip(("A", "B"), raw_inputs or []):
        provider = detect_provider(text)
        if provider is not None:
            lines.append(f"{label} detected from: {provider}")

    if comparison.radius_ring is not None:
        lines.append(f"radius ring: {len(comparison.radius_ring)} points")

    if wkt:
        for path in comparison.paths:
            lines.append(f"{path.algorithm} path: {points_to_linestring(path.points).wkt}")
        if comparison.radius_ring is not None:
            lines.append(f"radius ring: {ring_to_polygon(comparison.radius_ring).wkt}")

    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parses command-line arguments, compares the two points and prints
    the results.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    config = build_config(args)
    setup_logging(config)
    logger.debug(f"Configuration: {config}")

    comparison = compare(
        args.point_a,
        args.point_b,
        config,
        center_text=args.center,
        radius=args.radius,
    )

    failed = False
    for label, outcome in (("A", comparison.point_a), ("B", comparison.point_b)):
        if isinstance(outcome, Failure):
            logger.error(f"Could not parse point {label}: {outcome.reason}")
            failed = True
    if failed:
        return 1

    if args.center and comparison.radius_ring is None:
        logger.warning("Radius ring skipped: center or radius not usable")

    if config.mode is CoordinateMode.PLANAR:
        logger.info(f"Planar scale: {config.planar_scale} m per unit")

    for line in report_lines(
        comparison, config, raw_inputs=[args.point_a, args.point_b], wkt=args.wkt
    ):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
