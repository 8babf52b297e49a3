"""
Tests for coordinate display formatting and the format cursor.
"""

import logging
import re
from typing import List, Tuple

import pytest

from tacgrid.core.coords import FORMAT_CYCLE, NO_POSITION, CoordinateDisplay, to_dmm, to_dms
from tacgrid.core.errors import CoordinateFormatError, UnsupportedFormatError
from tacgrid.models.geo import DisplayFormat, GeoPoint, InputFormat

WHITE_HOUSE = GeoPoint(lat=38.8977, lng=-77.0365)


class FixedCodec:
    """MGRS codec that always returns the same reference."""

    def __init__(self, raw: str = "18SUJ2348706483"):
        self.raw = raw
        self.calls: List[Tuple[float, float, int]] = []

    def encode(self, lat: float, lng: float, precision: int = 5) -> str:
        self.calls.append((lat, lng, precision))
        return self.raw

    def decode(self, text: str) -> Tuple[float, float]:
        raise NotImplementedError


@pytest.fixture
def display() -> CoordinateDisplay:
    """Display with a fixed MGRS codec."""
    return CoordinateDisplay(mgrs_codec=FixedCodec())


class TestSexagesimal:
    """Tests for DMS and DMM formatting."""

    def test_dms(self) -> None:
        """Test DMS output for the White House."""
        assert to_dms(38.8977, True) == "38° 53' 51.72\" N"
        assert to_dms(-77.0365, False) == "77° 2' 11.40\" W"

    def test_dmm(self) -> None:
        """Test DMM output for the White House."""
        assert to_dmm(38.8977, True) == "38° 53.8620' N"
        assert to_dmm(-77.0365, False) == "77° 2.1900' W"

    def test_negative_zero_is_north_east(self) -> None:
        """Test that -0.0 gets the N/E hemisphere."""
        assert to_dms(-0.0, True) == "0° 0' 0.00\" N"
        assert to_dmm(-0.0, False) == "0° 0.0000' E"

    def test_seconds_carry(self) -> None:
        """Test that rounding up to 60 seconds carries into minutes and degrees."""
        assert to_dms(10.9999999, True) == "11° 0' 0.00\" N"
        assert to_dms(-10.9999999, False) == "11° 0' 0.00\" W"

    def test_minutes_carry(self) -> None:
        """Test that rounding up to 60 minutes carries into degrees."""
        assert to_dmm(10.99999999, True) == "11° 0.0000' N"

    def test_extremes(self) -> None:
        """Test the range limits."""
        assert to_dms(-90, True) == "90° 0' 0.00\" S"
        assert to_dmm(180, False) == "180° 0.0000' E"


class TestFormat:
    """Tests for CoordinateDisplay.format."""

    def test_mgrs_spaced(self, display: CoordinateDisplay) -> None:
        """Test grouped MGRS output."""
        assert display.format(WHITE_HOUSE, DisplayFormat.MILITARY_GRID) == "18S UJ 23487 06483"

    def test_mgrs_compact(self) -> None:
        """Test ungrouped MGRS output."""
        display = CoordinateDisplay(mgrs_codec=FixedCodec(), mgrs_spaced=False)
        assert display.format(WHITE_HOUSE, DisplayFormat.MILITARY_GRID) == "18SUJ2348706483"

    def test_mgrs_precision_passed_to_codec(self) -> None:
        """Test that the configured precision reaches the codec."""
        codec = FixedCodec("18SUJ234064")
        display = CoordinateDisplay(mgrs_codec=codec, mgrs_precision=3)

        assert display.format(WHITE_HOUSE, DisplayFormat.MILITARY_GRID) == "18S UJ 234 064"
        assert codec.calls == [(38.8977, -77.0365, 3)]

    def test_mgrs_malformed_codec_output(self) -> None:
        """Test that codec output with the wrong digit count raises."""
        display = CoordinateDisplay(mgrs_codec=FixedCodec("18SUJ234064"))
        with pytest.raises(CoordinateFormatError):
            display.format(WHITE_HOUSE, DisplayFormat.MILITARY_GRID)

    def test_mgrs_without_codec(self) -> None:
        """Test that MGRS output needs a codec."""
        with pytest.raises(CoordinateFormatError):
            CoordinateDisplay(mgrs_codec=None).format(WHITE_HOUSE, DisplayFormat.MILITARY_GRID)

    def test_mgrs_real_codec(self) -> None:
        """Test MGRS output from the mgrs package."""
        text = CoordinateDisplay().format(WHITE_HOUSE, DisplayFormat.MILITARY_GRID)
        assert re.fullmatch(r"18S UJ \d{5} \d{5}", text)

    def test_dms(self, display: CoordinateDisplay) -> None:
        """Test full DMS output."""
        assert (
            display.format(WHITE_HOUSE, DisplayFormat.DEG_MIN_SEC)
            == "38° 53' 51.72\" N 77° 2' 11.40\" W"
        )

    def test_dmm(self, display: CoordinateDisplay) -> None:
        """Test full DMM output."""
        assert (
            display.format(WHITE_HOUSE, DisplayFormat.DEG_DEC_MIN)
            == "38° 53.8620' N 77° 2.1900' W"
        )

    @pytest.mark.parametrize("fmt", [InputFormat.DD, "DMS", None])
    def test_unsupported_format(self, display: CoordinateDisplay, fmt) -> None:
        """Test that anything but a DisplayFormat member raises."""
        with pytest.raises(UnsupportedFormatError):
            display.format(WHITE_HOUSE, fmt)

    def test_format_all(self, display: CoordinateDisplay) -> None:
        """Test formatting in every display format."""
        result = display.format_all(WHITE_HOUSE)
        assert list(result) == list(FORMAT_CYCLE)
        assert result[DisplayFormat.DEG_DEC_MIN] == "38° 53.8620' N 77° 2.1900' W"


class TestFormatCursor:
    """Tests for the current-format cursor and listeners."""

    def test_initial_format(self, display: CoordinateDisplay) -> None:
        """Test that the cursor starts on MGRS."""
        assert display.get_current_format() is DisplayFormat.MILITARY_GRID

    def test_custom_initial_format(self) -> None:
        """Test starting on another format."""
        display = CoordinateDisplay(initial_format=DisplayFormat.DEG_DEC_MIN)
        assert display.cycle_format() is DisplayFormat.MILITARY_GRID

    def test_cycle_order(self, display: CoordinateDisplay) -> None:
        """Test MGRS -> DMS -> DMM -> MGRS."""
        assert display.cycle_format() is DisplayFormat.DEG_MIN_SEC
        assert display.cycle_format() is DisplayFormat.DEG_DEC_MIN
        assert display.cycle_format() is DisplayFormat.MILITARY_GRID

    def test_listeners_notified(self, display: CoordinateDisplay) -> None:
        """Test that listeners receive the new format."""
        received: List[DisplayFormat] = []
        display.on_format_change(received.append)

        display.cycle_format()
        display.cycle_format()

        assert received == [DisplayFormat.DEG_MIN_SEC, DisplayFormat.DEG_DEC_MIN]

    def test_failing_listener_isolated(
        self, display: CoordinateDisplay, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that one failing listener does not stop the others."""
        received: List[DisplayFormat] = []

        def broken(fmt: DisplayFormat) -> None:
            raise RuntimeError("listener failed")

        display.on_format_change(broken)
        display.on_format_change(received.append)

        with caplog.at_level(logging.ERROR):
            assert display.cycle_format() is DisplayFormat.DEG_MIN_SEC

        assert received == [DisplayFormat.DEG_MIN_SEC]
        assert "listener" in caplog.text

    def test_unsubscribe(self, display: CoordinateDisplay) -> None:
        """Test that an unsubscribed listener is no longer called."""
        received: List[DisplayFormat] = []
        unsubscribe = display.on_format_change(received.append)

        display.cycle_format()
        unsubscribe()
        unsubscribe()
        display.cycle_format()

        assert received == [DisplayFormat.DEG_MIN_SEC]

    def test_listener_unsubscribing_during_cycle(self, display: CoordinateDisplay) -> None:
        """Test that a listener may unsubscribe itself while being notified."""
        received: List[DisplayFormat] = []
        unsubscribe = None

        def once(fmt: DisplayFormat) -> None:
            received.append(fmt)
            unsubscribe()

        unsubscribe = display.on_format_change(once)
        display.cycle_format()
        display.cycle_format()

        assert received == [DisplayFormat.DEG_MIN_SEC]


class TestReadout:
    """Tests for the status line read-out."""

    def test_readout_current_format(self, display: CoordinateDisplay) -> None:
        """Test the read-out prefix follows the cursor."""
        assert display.readout(WHITE_HOUSE) == "MGRS: 18S UJ 23487 06483"

        display.cycle_format()
        assert display.readout(WHITE_HOUSE) == "DMS: 38° 53' 51.72\" N 77° 2' 11.40\" W"

    def test_readout_no_point(self, display: CoordinateDisplay) -> None:
        """Test the placeholder when there is no point."""
        assert display.readout(None) == NO_POSITION == "--"
