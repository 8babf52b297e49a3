"""
Coordinate display formatting and the current-format cursor.

Output formats::

    MGRS  18S UJ 23487 06483
    DMS   38° 53' 51.72" N 77° 2' 11.40" W
    DMM   38° 53.8620' N 77° 2.1900' W

DMS and DMM values are rounded to the displayed resolution before being
split into fields, so a carry turns 59.999" into the next whole minute
instead of printing 60.00".
"""

import logging
from typing import Callable, Dict, List, Optional

from tacgrid.core.coords.mgrs_codec import (
    DEFAULT_MGRS_CODEC,
    DEFAULT_MGRS_PRECISION,
    MilitaryGridCodec,
    split_mgrs,
)
from tacgrid.core.errors import CoordinateFormatError, UnsupportedFormatError
from tacgrid.models.geo import DisplayFormat, GeoPoint

logger = logging.getLogger(__name__)

FORMAT_CYCLE = (
    DisplayFormat.MILITARY_GRID,
    DisplayFormat.DEG_MIN_SEC,
    DisplayFormat.DEG_DEC_MIN,
)

# Read-out shown when the pointer is off the map
NO_POSITION = "--"

FormatListener = Callable[[DisplayFormat], None]

_HUNDREDTHS_PER_DEGREE = 3600 * 100  # DMS resolution: 0.01"
_TEN_THOUSANDTHS_PER_DEGREE = 60 * 10000  # DMM resolution: 0.0001'


def hemisphere(value: float, is_latitude: bool) -> str:
    """
    Hemisphere letter for a signed coordinate.

    Zero, including -0.0, belongs to the northern/eastern hemisphere.
    """
    if is_latitude:
        return "N" if value >= 0 else "S"
    return "E" if value >= 0 else "W"


def to_dms(value: float, is_latitude: bool) -> str:
    """
    Format one axis as degrees, minutes and seconds.

    Args:
        value: Signed decimal degrees
        is_latitude: True for latitude (N/S), False for longitude (E/W)

    Returns:
        String like ``38° 53' 51.72" N``
    """
    total = round(abs(value) * _HUNDREDTHS_PER_DEGREE)
    degrees, remainder = divmod(total, _HUNDREDTHS_PER_DEGREE)
    minutes, hundredths = divmod(remainder, 6000)
    seconds, fraction = divmod(hundredths, 100)
    return f"{degrees}° {minutes}' {seconds}.{fraction:02d}\" {hemisphere(value, is_latitude)}"


def to_dmm(value: float, is_latitude: bool) -> str:
    """
    Format one axis as degrees and decimal minutes.

    Args:
        value: Signed decimal degrees
        is_latitude: True for latitude (N/S), False for longitude (E/W)

    Returns:
        String like ``38° 53.8620' N``
    """
    total = round(abs(value) * _TEN_THOUSANDTHS_PER_DEGREE)
    degrees, remainder = divmod(total, _TEN_THOUSANDTHS_PER_DEGREE)
    minutes, fraction = divmod(remainder, 10000)
    return f"{degrees}° {minutes}.{fraction:04d}' {hemisphere(value, is_latitude)}"


class CoordinateDisplay:
    """
    Formats points for display and tracks the current read-out format.

    The current format is the only mutable state; it advances through
    MGRS -> DMS -> DMM -> MGRS on each ``cycle_format`` call and every
    registered listener is notified synchronously.
    """

    def __init__(
        self,
        mgrs_codec: Optional[MilitaryGridCodec] = DEFAULT_MGRS_CODEC,
        mgrs_precision: int = DEFAULT_MGRS_PRECISION,
        mgrs_spaced: bool = True,
        initial_format: DisplayFormat = DisplayFormat.MILITARY_GRID,
    ):
        """
        Initialize CoordinateDisplay.

        Args:
            mgrs_codec: Military grid codec used for MGRS output
            mgrs_precision: MGRS digits per axis (5 = 1 m)
            mgrs_spaced: Group MGRS output with spaces
            initial_format: Format the cursor starts on
        """
        self.mgrs_codec = mgrs_codec
        self.mgrs_precision = mgrs_precision
        self.mgrs_spaced = mgrs_spaced
        self._format_index = FORMAT_CYCLE.index(DisplayFormat(initial_format))
        self._listeners: List[FormatListener] = []

    def format(self, point: GeoPoint, fmt: DisplayFormat) -> str:
        """
        Format a point.

        Args:
            point: Point to format
            fmt: Display format

        Returns:
            Formatted coordinate string

        Raises:
            UnsupportedFormatError: If fmt is not a DisplayFormat
            CoordinateFormatError: If MGRS output cannot be produced
        """
        if fmt is DisplayFormat.MILITARY_GRID:
            return self._format_mgrs(point)
        elif fmt is DisplayFormat.DEG_MIN_SEC:
            return f"{to_dms(point.lat, True)} {to_dms(point.lng, False)}"
        elif fmt is DisplayFormat.DEG_DEC_MIN:
            return f"{to_dmm(point.lat, True)} {to_dmm(point.lng, False)}"
        raise UnsupportedFormatError(fmt)

    def format_all(self, point: GeoPoint) -> Dict[DisplayFormat, str]:
        """Format a point in every display format, in cycle order."""
        return {fmt: self.format(point, fmt) for fmt in FORMAT_CYCLE}

    def readout(self, point: Optional[GeoPoint]) -> str:
        """
        Status line text for the current format.

        Args:
            point: Point under the cursor, or None when off the map

        Returns:
            ``"MGRS: 18S UJ 23487 06483"`` style text, or ``"--"``
        """
        if point is None:
            return NO_POSITION
        fmt = self.get_current_format()
        return f"{fmt.value}: {self.format(point, fmt)}"

    def get_current_format(self) -> DisplayFormat:
        """Get the current read-out format."""
        return FORMAT_CYCLE[self._format_index]

    def cycle_format(self) -> DisplayFormat:
        """
        Advance to the next format and notify listeners.

        Returns:
            The new current format
        """
        self._format_index = (self._format_index + 1) % len(FORMAT_CYCLE)
        fmt = self.get_current_format()

        for listener in list(self._listeners):
            try:
                listener(fmt)
            except Exception:
                logger.exception(f"Format change listener {listener!r} failed")

        return fmt

    def on_format_change(self, listener: FormatListener) -> Callable[[], None]:
        """
        Register a listener called with the new format on every cycle.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _format_mgrs(self, point: GeoPoint) -> str:
        if self.mgrs_codec is None:
            raise CoordinateFormatError("No military grid codec configured")

        raw = self.mgrs_codec.encode(point.lat, point.lng, self.mgrs_precision)
        reference = split_mgrs(raw, self.mgrs_precision)
        return reference.spaced() if self.mgrs_spaced else reference.compact()
