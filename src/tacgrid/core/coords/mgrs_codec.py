"""
Military Grid Reference System (MGRS) codec.

The parser and the display formatter take any object implementing
``MilitaryGridCodec``; ``MgrsLibraryCodec`` is the default and wraps the
``mgrs`` package. This module also splits raw MGRS strings into their
zone, 100 km square, easting and northing fields.
"""

import logging
import re
from dataclasses import dataclass
from typing import Protocol, Tuple

import mgrs

from tacgrid.core.errors import CoordinateFormatError, CoordinateParseError

logger = logging.getLogger(__name__)

# 5 digits per axis = 1 m resolution
DEFAULT_MGRS_PRECISION = 5

# Zone number + latitude band (UTM) or a bare polar letter (UPS),
# 100 km square letters, then an even number of digits
_MGRS_INPUT = re.compile(r"^(\d{1,2}[C-HJ-NP-X]|[ABYZ])([A-HJ-NP-Z]{2})(\d{0,10})$")
_MGRS_OUTPUT = re.compile(r"^(\d{0,2}[A-Z])([A-Z]{2})(\d*)$")


class MilitaryGridCodec(Protocol):
    """Encodes and decodes military grid references."""

    def encode(self, lat: float, lng: float, precision: int = DEFAULT_MGRS_PRECISION) -> str:
        """Encode a point with ``precision`` digits per axis."""
        ...

    def decode(self, text: str) -> Tuple[float, float]:
        """Decode a reference to ``(lat, lng)``; raise on malformed input."""
        ...


@dataclass(frozen=True)
class MgrsReference:
    """
    MGRS reference split into its fields.

    Attributes:
        zone: Zone number and latitude band, e.g. "18S"
        square: 100 km square identifier, e.g. "UJ"
        easting: Easting digits
        northing: Northing digits
    """

    zone: str
    square: str
    easting: str
    northing: str

    @property
    def precision(self) -> int:
        """Digits per axis."""
        return len(self.easting)

    def spaced(self) -> str:
        """Render as "18S UJ 23487 06483"."""
        return " ".join(part for part in (self.zone, self.square, self.easting, self.northing) if part)

    def compact(self) -> str:
        """Render as "18SUJ2348706483"."""
        return f"{self.zone}{self.square}{self.easting}{self.northing}"


def split_mgrs(raw: str, precision: int) -> MgrsReference:
    """
    Split a raw MGRS string into its fields.

    Args:
        raw: MGRS string, with or without spaces
        precision: Expected digits per axis

    Returns:
        MgrsReference

    Raises:
        CoordinateFormatError: If the string is not MGRS shaped or its digit
            count does not match ``precision``
    """
    compact = "".join(raw.split()).upper()
    match = _MGRS_OUTPUT.match(compact)
    if not match:
        raise CoordinateFormatError(f"Not an MGRS string: {raw!r}", raw_value=raw)

    zone, square, digits = match.groups()
    if len(digits) != 2 * precision:
        raise CoordinateFormatError(
            f"Expected {2 * precision} MGRS digits, got {len(digits)}",
            raw_value=raw,
            details={"precision": precision},
        )

    return MgrsReference(
        zone=zone,
        square=square,
        easting=digits[:precision],
        northing=digits[precision:],
    )


class MgrsLibraryCodec:
    """MilitaryGridCodec backed by the ``mgrs`` package."""

    def __init__(self) -> None:
        self._mgrs = mgrs.MGRS()

    def encode(self, lat: float, lng: float, precision: int = DEFAULT_MGRS_PRECISION) -> str:
        """
        Encode a point as a compact MGRS string.

        Args:
            lat: Latitude in decimal degrees
            lng: Longitude in decimal degrees
            precision: Digits per axis (1-5)

        Returns:
            MGRS string without spaces, e.g. "18SUJ2348706483"

        Raises:
            ValueError: If precision is out of range
        """
        if not 1 <= precision <= 5:
            raise ValueError(f"MGRS precision must be between 1 and 5, got {precision}")

        raw = self._mgrs.toMGRS(lat, lng, MGRSPrecision=precision)
        if isinstance(raw, bytes):
            raw = raw.decode("ascii")
        return raw

    def decode(self, text: str) -> Tuple[float, float]:
        """
        Decode an MGRS string (spaces allowed, any case).

        Returns:
            Tuple of (latitude, longitude) of the referenced square's
            south-west corner

        Raises:
            CoordinateParseError: If the text is not MGRS shaped
        """
        compact = "".join(text.split()).upper()
        match = _MGRS_INPUT.match(compact)
        if not match or len(match.group(3)) % 2:
            raise CoordinateParseError("Not an MGRS reference", text=text)

        lat, lng = self._mgrs.toLatLon(compact)
        return float(lat), float(lng)


DEFAULT_MGRS_CODEC = MgrsLibraryCodec()
