"""
Free-form coordinate parser.

Accepted formats, tried in this order (first match wins):

1. MGRS, e.g. ``18S UJ 23487 06483`` (via the injected grid codec)
2. Degrees-minutes-seconds, e.g. ``38°53'51.72" N 77°2'11.40" W``
3. Degrees-decimal-minutes, e.g. ``38° 53.8620' N 77° 2.1900' W``
4. Decimal degrees, e.g. ``38.8977, -77.0365``

For DMS and DMM the hemisphere letters decide which group is latitude, so
``77°2'11.40" W 38°53'51.72" N`` is the same point as the lat-first form.
Decimal degrees carry no letters and are always read latitude first.

Unrecognised input is an expected outcome: ``parse`` returns None and
never raises.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from tacgrid.core.coords.mgrs_codec import DEFAULT_MGRS_CODEC, MilitaryGridCodec
from tacgrid.models.geo import GeoPoint, InputFormat, is_valid_lat_lng

logger = logging.getLogger(__name__)

LatLng = Tuple[float, float]

# ASCII apostrophe, right single quote, modifier apostrophe, prime
_MINUTE_MARKS = "'’ʼ′"
# ASCII double quote, double prime
_SECOND_MARKS = '"″'
_DEGREE = r"(\d{1,3})[°º\s]\s*"
_NUMBER = r"\d+(?:\.\d+)?"

_DMS_GROUP = (
    _DEGREE
    + r"(\d{1,2})[" + _MINUTE_MARKS + r"]\s*"
    + r"(" + _NUMBER + r")[" + _SECOND_MARKS + r"]\s*"
    + r"([NSEW])"
)
_DMM_GROUP = (
    _DEGREE
    + r"(" + _NUMBER + r")[" + _MINUTE_MARKS + r"]\s*"
    + r"([NSEW])"
)

DMS_PATTERN = re.compile(_DMS_GROUP + r"[,\s]+" + _DMS_GROUP, re.IGNORECASE)
DMM_PATTERN = re.compile(_DMM_GROUP + r"[,\s]+" + _DMM_GROUP, re.IGNORECASE)
DD_PATTERN = re.compile(r"^([-+]?\d{1,3}(?:\.\d+)?)[,\s]+([-+]?\d{1,3}(?:\.\d+)?)$")


@dataclass(frozen=True)
class ParsedCoordinate:
    """
    Result of a successful parse.

    Attributes:
        point: Parsed point
        input_format: Format the input was recognised as
    """

    point: GeoPoint
    input_format: InputFormat


def to_decimal(
    degrees: float, minutes: float, seconds: float, hemisphere: str
) -> Optional[float]:
    """
    Convert sexagesimal parts to signed decimal degrees.

    Args:
        degrees: Whole degrees
        minutes: Minutes (may be fractional for DMM)
        seconds: Seconds (0 for DMM)
        hemisphere: N, S, E or W; S and W give negative values

    Returns:
        Decimal degrees, or None if minutes or seconds are 60 or more
    """
    if minutes >= 60 or seconds >= 60:
        return None
    value = degrees + minutes / 60 + seconds / 3600
    return -value if hemisphere.upper() in ("S", "W") else value


def assign_axes(
    first: float, first_hemisphere: str, second: float, second_hemisphere: str
) -> Optional[LatLng]:
    """
    Decide which of two values is latitude from their hemisphere letters.

    The value marked N/S is latitude and the one marked E/W is longitude,
    whatever their order in the input.

    Returns:
        (lat, lng), or None when both values are on the same axis
    """
    first_is_lat = first_hemisphere.upper() in ("N", "S")
    second_is_lat = second_hemisphere.upper() in ("N", "S")
    if first_is_lat == second_is_lat:
        return None
    return (first, second) if first_is_lat else (second, first)


class CoordinateParser:
    """
    Parses coordinate strings in MGRS, DMS, DMM or decimal degrees.

    The MGRS step is delegated to an injected codec; pass
    ``mgrs_codec=None`` to disable it.
    """

    def __init__(self, mgrs_codec: Optional[MilitaryGridCodec] = DEFAULT_MGRS_CODEC):
        """
        Initialize CoordinateParser.

        Args:
            mgrs_codec: Military grid codec, or None to skip MGRS parsing
        """
        self.mgrs_codec = mgrs_codec
        self._strategies: Tuple[Tuple[InputFormat, Callable[[str], Optional[LatLng]]], ...] = (
            (InputFormat.MGRS, self._try_mgrs),
            (InputFormat.DMS, self._try_dms),
            (InputFormat.DMM, self._try_dmm),
            (InputFormat.DD, self._try_dd),
        )

    def parse(self, text: str) -> Optional[GeoPoint]:
        """
        Parse a coordinate string.

        Args:
            text: Free-form coordinate text

        Returns:
            GeoPoint, or None if no format matched or the result is out of range
        """
        parsed = self.parse_detailed(text)
        return parsed.point if parsed else None

    def parse_detailed(self, text: str) -> Optional[ParsedCoordinate]:
        """
        Parse a coordinate string and report which format matched.

        Args:
            text: Free-form coordinate text

        Returns:
            ParsedCoordinate, or None if nothing matched
        """
        if not isinstance(text, str):
            return None
        s = text.strip()
        if not s:
            return None

        for input_format, strategy in self._strategies:
            result = strategy(s)
            if result is None:
                continue
            lat, lng = result
            if is_valid_lat_lng(lat, lng):
                return ParsedCoordinate(point=GeoPoint(lat=lat, lng=lng), input_format=input_format)
            logger.debug(f"{input_format.value} match out of range: lat={lat}, lng={lng}")

        return None

    def _try_mgrs(self, s: str) -> Optional[LatLng]:
        if self.mgrs_codec is None:
            return None
        try:
            lat, lng = self.mgrs_codec.decode(s)
        except Exception as e:
            # Any codec failure just means the text is not MGRS
            logger.debug(f"Not MGRS: {type(e).__name__}: {e}")
            return None
        return float(lat), float(lng)

    def _try_dms(self, s: str) -> Optional[LatLng]:
        m = DMS_PATTERN.search(s)
        if not m:
            return None

        first = to_decimal(float(m.group(1)), float(m.group(2)), float(m.group(3)), m.group(4))
        second = to_decimal(float(m.group(5)), float(m.group(6)), float(m.group(7)), m.group(8))
        if first is None or second is None:
            return None

        return assign_axes(first, m.group(4), second, m.group(8))

    def _try_dmm(self, s: str) -> Optional[LatLng]:
        m = DMM_PATTERN.search(s)
        if not m:
            return None

        first = to_decimal(float(m.group(1)), float(m.group(2)), 0.0, m.group(3))
        second = to_decimal(float(m.group(4)), float(m.group(5)), 0.0, m.group(6))
        if first is None or second is None:
            return None

        return assign_axes(first, m.group(3), second, m.group(6))

    def _try_dd(self, s: str) -> Optional[LatLng]:
        m = DD_PATTERN.match(s)
        if not m:
            return None
        return float(m.group(1)), float(m.group(2))
