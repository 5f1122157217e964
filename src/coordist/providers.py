#!/usr/bin/env python3
"""
Advisory detection of the map service a pasted string came from.

Detection never influences parsing; it only lets a front end show a
"detected from" note next to the input.
"""

from enum import Enum
from typing import List, Optional, Pattern, Tuple
from urllib.parse import parse_qs, urlsplit
import logging
import re

logger = logging.getLogger(__name__)


class Provider(Enum):
    """Enumeration for map/link services a coordinate can be copied from."""

    GOOGLE_MAPS = "google_maps"
    APPLE_MAPS = "apple_maps"
    OPENSTREETMAP = "openstreetmap"
    BING_MAPS = "bing_maps"
    HERE_WEGO = "here_wego"
    WAZE = "waze"
    YANDEX_MAPS = "yandex_maps"
    MAPY_CZ = "mapy_cz"
    BAIDU_MAPS = "baidu_maps"
    GEO_URI = "geo_uri"
    WHAT3WORDS = "what3words"
    MAPBOX = "mapbox"
    COPIED_LINK = "copied_link"

    def __str__(self) -> str:
        return self.value

    @property
    def message_key(self) -> str:
        """Lookup key for the rendering layer, e.g. ``providerGoogleMaps``."""
        return "provider" + "".join(
            part.capitalize() for part in self.value.split("_")
        )


# First match wins
PROVIDER_PATTERNS: List[Tuple[Provider, Pattern[str]]] = [
    (
        Provider.GOOGLE_MAPS,
        re.compile(
            r"(?:maps\.google\.|google\.(?:com/maps|co\.\w+/maps)|goo\.gl/maps)",
            re.IGNORECASE,
        ),
    ),
    (Provider.APPLE_MAPS, re.compile(r"maps\.apple\.com", re.IGNORECASE)),
    (
        Provider.OPENSTREETMAP,
        re.compile(r"(?:openstreetmap\.org|osm\.org)", re.IGNORECASE),
    ),
    (Provider.BING_MAPS, re.compile(r"bing\.com/maps", re.IGNORECASE)),
    (
        Provider.HERE_WEGO,
        re.compile(r"(?:here\.com|wego\.here\.net)", re.IGNORECASE),
    ),
    (Provider.WAZE, re.compile(r"waze\.com", re.IGNORECASE)),
    (Provider.YANDEX_MAPS, re.compile(r"yandex\.(?:com|ru)/maps", re.IGNORECASE)),
    (Provider.MAPY_CZ, re.compile(r"mapy\.cz", re.IGNORECASE)),
    (
        Provider.BAIDU_MAPS,
        re.compile(r"(?:baidu\.com/maps|map\.baidu\.com)", re.IGNORECASE),
    ),
    (Provider.WHAT3WORDS, re.compile(r"what3words\.com", re.IGNORECASE)),
    (Provider.MAPBOX, re.compile(r"mapbox\.com", re.IGNORECASE)),
]

_GEO_URI = re.compile(r"^geo:\s*-?\d", re.IGNORECASE)
_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_AT_COORDS = re.compile(r"@-?\d[\d.]*,-?[\d.]+")


def detect_provider(raw: str) -> Optional[Provider]:
    """
    Guess which service a pasted string was copied from.

    Args:
        raw: Text pasted by a user

    Returns:
        The detected Provider, or None when nothing is recognized
    """
    text = raw.strip()
    if not text:
        return None

    if _GEO_URI.match(text):
        return Provider.GEO_URI

    url_string = text if _HTTP_SCHEME.match(text) else "https://" + text
    try:
        url = urlsplit(url_string)
        hostname = url.hostname or ""
        query = parse_qs(url.query, keep_blank_values=True)
    except ValueError as e:
        logger.debug(f"Not a URL, no provider detected: {e}")
        return None

    full_url = url.geturl()
    for provider, pattern in PROVIDER_PATTERNS:
        if pattern.search(full_url) or pattern.search(hostname):
            return provider

    if _AT_COORDS.search(full_url) or "q" in query or "ll" in query:
        return Provider.COPIED_LINK

    return None
