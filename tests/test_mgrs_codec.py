"""
Tests for the MGRS codec and MGRS string splitting.
"""

import re

import pytest

from tacgrid.core.coords.mgrs_codec import MgrsLibraryCodec, MgrsReference, split_mgrs
from tacgrid.core.errors import CoordinateFormatError, CoordinateParseError


@pytest.fixture(scope="module")
def codec() -> MgrsLibraryCodec:
    """Codec backed by the mgrs package."""
    return MgrsLibraryCodec()


class TestSplitMgrs:
    """Tests for split_mgrs."""

    def test_split_compact(self) -> None:
        """Test splitting a compact string into fields."""
        ref = split_mgrs("18SUJ2348706483", 5)
        assert ref == MgrsReference(zone="18S", square="UJ", easting="23487", northing="06483")
        assert ref.precision == 5

    def test_split_spaced_lowercase(self) -> None:
        """Test that spaces and case are normalised."""
        assert split_mgrs("18s uj 23487 06483", 5).compact() == "18SUJ2348706483"

    def test_spaced_rendering(self) -> None:
        """Test the grouped rendering."""
        assert split_mgrs("4QFJ1234567890", 5).spaced() == "4Q FJ 12345 67890"

    def test_low_precision(self) -> None:
        """Test splitting a 1 km reference."""
        ref = split_mgrs("18SUJ234064", 3)
        assert (ref.easting, ref.northing) == ("234", "064")

    def test_digit_count_mismatch(self) -> None:
        """Test that digits not matching the precision raise."""
        with pytest.raises(CoordinateFormatError) as exc_info:
            split_mgrs("18SUJ234064", 5)
        assert exc_info.value.details["raw_value"] == "18SUJ234064"

    def test_not_mgrs(self) -> None:
        """Test that garbage raises CoordinateFormatError."""
        with pytest.raises(CoordinateFormatError):
            split_mgrs("hello world", 5)


class TestMgrsLibraryCodec:
    """Tests for MgrsLibraryCodec against the mgrs package."""

    def test_encode(self, codec: MgrsLibraryCodec) -> None:
        """Test encoding the White House at 1 m precision."""
        raw = codec.encode(38.8977, -77.0365, 5)
        assert re.fullmatch(r"18SUJ\d{10}", raw)

    def test_encode_low_precision(self, codec: MgrsLibraryCodec) -> None:
        """Test encoding at 10 km precision."""
        assert re.fullmatch(r"18SUJ\d{2}", codec.encode(38.8977, -77.0365, 1))

    @pytest.mark.parametrize("precision", [0, 6])
    def test_encode_invalid_precision(self, codec: MgrsLibraryCodec, precision: int) -> None:
        """Test that unsupported precisions raise."""
        with pytest.raises(ValueError, match="precision"):
            codec.encode(38.8977, -77.0365, precision)

    def test_decode_spaced(self, codec: MgrsLibraryCodec) -> None:
        """Test decoding a spaced reference."""
        lat, lng = codec.decode("18S UJ 23487 06483")
        assert lat == pytest.approx(38.8977, abs=1e-3)
        assert lng == pytest.approx(-77.0365, abs=1e-3)

    def test_round_trip(self, codec: MgrsLibraryCodec) -> None:
        """Test that decoding an encoded point lands within a few metres."""
        lat, lng = codec.decode(codec.encode(38.8977, -77.0365, 5))
        assert lat == pytest.approx(38.8977, abs=1e-4)
        assert lng == pytest.approx(-77.0365, abs=1e-4)

    @pytest.mark.parametrize(
        "text",
        ["hello", "18SUJ2348", "38.8977, -77.0365", "18SIJ2348706483", ""],
    )
    def test_decode_rejects_malformed(self, codec: MgrsLibraryCodec, text: str) -> None:
        """Test that non-MGRS text raises CoordinateParseError."""
        with pytest.raises(CoordinateParseError):
            codec.decode(text)
