#!/usr/bin/env python3
"""
Tolerant parsing of pasted coordinate text.

Geographic text is handed to an ordered chain of recognizers. Each recognizer
looks for one notation and returns a raw ``(latitude, longitude)`` tuple or
None; the first recognizer that matches decides the outcome, including an
out-of-range failure. Parsers never raise: they return ``Success`` or
``Failure`` values so the caller can render a message keyed by the reason.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, List, Optional, Tuple, TypeVar, Union
from urllib.parse import parse_qs, urlsplit
import logging
import math
import re

from .geometry import (
    GeographicPoint,
    PlanarPoint,
    is_valid_lat_lon,
    normalize_longitude,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RawPair = Tuple[float, float]


class ParseError(Enum):
    """Enumeration for parse failure reasons."""

    EMPTY_INPUT = "empty"
    OUT_OF_RANGE = "out_of_range"
    INVALID_NUMBER = "invalid_number"
    UNRECOGNIZED_FORMAT = "invalid_format"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successfully parsed value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A parse failure with its reason."""

    reason: ParseError

    @property
    def ok(self) -> bool:
        return False


ParseOutcome = Union[Success[T], Failure]

_DECIMAL = r"-?\d+(?:\.\d+)?"
_AT_PAIR = re.compile(rf"@({_DECIMAL}),({_DECIMAL})")
_DECIMAL_PAIR = re.compile(rf"({_DECIMAL})\s*[, ]\s*({_DECIMAL})")
_LABELED_PAIR = re.compile(
    rf"lat(?:itude)?\s*[:=]\s*({_DECIMAL})\s*[,;\s]+lon(?:gitude)?\s*[:=]\s*({_DECIMAL})",
    re.IGNORECASE,
)
_NUMBER = re.compile(_DECIMAL)
_URL_SCHEME = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)

# degrees (possibly decimal), optional minutes, optional seconds, hemisphere.
# Separators are short and never contain "." so "40.7128 N" stays decimal
# degrees and long non-matching text fails in linear time.
_DMS_GROUP = (
    r"(\d{{1,3}}(?:\.\d+)?)[^\d.]{{1,4}}(\d{{1,2}})?[^\d.]{{0,4}}"
    r"(\d{{1,2}}(?:\.\d+)?)?[^\d.]{{0,4}}([{hemi}])"
)
_DMS_LAT_LON = re.compile(
    _DMS_GROUP.format(hemi="NS") + r"[^\dA-Z]+" + _DMS_GROUP.format(hemi="EW"),
    re.IGNORECASE,
)
_DMS_LON_LAT = re.compile(
    _DMS_GROUP.format(hemi="EW") + r"[^\dA-Z]+" + _DMS_GROUP.format(hemi="NS"),
    re.IGNORECASE,
)


def _as_url(text: str) -> str:
    """Prefix a default scheme when the text is not already an absolute URL."""
    if _URL_SCHEME.match(text):
        return text
    return "https://" + text


def match_url_pair(text: str) -> Optional[RawPair]:
    """
    Recognize a pair embedded in a map-service link.

    An ``@lat,lon`` fragment wins; otherwise the ``q`` query parameter, then
    ``ll``, is searched for a ``lat,lon`` pair.

    Args:
        text: Trimmed input text

    Returns:
        Raw (latitude, longitude) tuple, or None if nothing matched
    """
    at_match = _AT_PAIR.search(text)
    if at_match:
        return float(at_match.group(1)), float(at_match.group(2))

    try:
        query = parse_qs(urlsplit(_as_url(text)).query, keep_blank_values=True)
    except ValueError:
        return None

    for key in ("q", "ll"):
        values = query.get(key)
        if not values:
            continue
        pair_match = _DECIMAL_PAIR.search(values[0])
        if pair_match:
            return float(pair_match.group(1)), float(pair_match.group(2))
        # only the first present parameter is consulted
        return None

    return None


def dms_to_decimal(
    degrees: str,
    minutes: Optional[str],
    seconds: Optional[str],
    hemisphere: str,
) -> float:
    """
    Convert captured DMS components to signed decimal degrees.

    The sign comes from the hemisphere letter only.
    """
    value = abs(float(degrees))
    if minutes:
        value += float(minutes) / 60.0
    if seconds:
        value += float(seconds) / 3600.0
    return -value if hemisphere.upper() in ("S", "W") else value


def match_dms_pair(text: str) -> Optional[RawPair]:
    """
    Recognize a degrees-minutes-seconds pair with hemisphere letters.

    Latitude-first order is tried before longitude-first order.
    """
    upper = text.upper()

    lat_lon = _DMS_LAT_LON.search(upper)
    if lat_lon:
        groups = lat_lon.groups()
        return dms_to_decimal(*groups[:4]), dms_to_decimal(*groups[4:])

    lon_lat = _DMS_LON_LAT.search(upper)
    if lon_lat:
        groups = lon_lat.groups()
        return dms_to_decimal(*groups[4:]), dms_to_decimal(*groups[:4])

    return None


def match_labeled_pair(text: str) -> Optional[RawPair]:
    """Recognize ``lat: .., lon: ..`` or ``latitude=..; longitude=..`` text."""
    labeled = _LABELED_PAIR.search(text)
    if labeled:
        return float(labeled.group(1)), float(labeled.group(2))
    return None


def match_decimal_pair(text: str) -> Optional[RawPair]:
    """Recognize the first two decimals separated by a comma or whitespace."""
    pair = _DECIMAL_PAIR.search(text)
    if pair:
        return float(pair.group(1)), float(pair.group(2))
    return None


Recognizer = Callable[[str], Optional[RawPair]]

GEOGRAPHIC_RECOGNIZERS: Tuple[Recognizer, ...] = (
    match_url_pair,
    match_dms_pair,
    match_labeled_pair,
    match_decimal_pair,
)


def parse_geographic(raw: str) -> ParseOutcome[GeographicPoint]:
    """
    Parse free text into a geographic point.

    Args:
        raw: Text typed or pasted by a user

    Returns:
        Success with a GeographicPoint whose longitude is normalized, or a
        Failure carrying the ParseError reason
    """
    text = raw.strip()
    if not text:
        return Failure(ParseError.EMPTY_INPUT)

    for recognizer in GEOGRAPHIC_RECOGNIZERS:
        pair = recognizer(text)
        if pair is None:
            continue

        latitude, longitude = pair
        logger.debug(
            f"{recognizer.__name__} matched {text!r} -> ({latitude}, {longitude})"
        )
        if not is_valid_lat_lon(latitude, longitude):
            return Failure(ParseError.OUT_OF_RANGE)
        return Success(GeographicPoint(latitude, normalize_longitude(longitude)))

    return Failure(ParseError.UNRECOGNIZED_FORMAT)


def parse_planar(raw: str) -> ParseOutcome[PlanarPoint]:
    """
    Parse free text into a planar point.

    Every signed decimal is extracted in order; the first two are x and y,
    the optional third is z.

    Args:
        raw: Text typed or pasted by a user

    Returns:
        Success with a PlanarPoint, or Failure(INVALID_NUMBER)
    """
    values: List[float] = [float(token) for token in _NUMBER.findall(raw.strip())]
    if len(values) < 2:
        return Failure(ParseError.INVALID_NUMBER)

    x, y = values[0], values[1]
    z = values[2] if len(values) > 2 else 0.0
    if not all(math.isfinite(value) for value in (x, y, z)):
        return Failure(ParseError.INVALID_NUMBER)

    return Success(PlanarPoint(x, y, z))
