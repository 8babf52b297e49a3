"""
Tests for custom exception hierarchy.
"""

import pytest

from tacgrid.core.errors import (
    ConfigurationError,
    CoordinateFormatError,
    CoordinateParseError,
    GridError,
    TacGridException,
    UnsupportedFormatError,
)
from tacgrid.models.geo import InputFormat


class TestTacGridException:
    """Tests for base TacGridException class."""

    def test_basic_exception(self):
        """Test basic exception creation."""
        exc = TacGridException(message="Test error", error_code="TEST_ERROR")

        assert str(exc) == "TEST_ERROR: Test error"
        assert exc.message == "Test error"
        assert exc.status_code == 500
        assert exc.details == {}
        assert exc.suggestions == []

    def test_to_dict(self):
        """Test conversion to dictionary."""
        exc = TacGridException(
            message="Test error",
            error_code="TEST_ERROR",
            details={"key": "value"},
            suggestions=["suggestion"],
        )

        assert exc.to_dict() == {
            "error_code": "TEST_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
            "suggestions": ["suggestion"],
        }

    def test_repr(self):
        """Test debug representation."""
        exc = TacGridException(message="boom", error_code="X", status_code=418)
        assert repr(exc) == "TacGridException(error_code='X', message='boom', status_code=418)"


class TestSubclasses:
    """Tests for specific exception types."""

    def test_coordinate_parse_error(self):
        """Test CoordinateParseError carries the text and format examples."""
        exc = CoordinateParseError("Could not parse coordinate", text="hello")

        assert exc.status_code == 422
        assert exc.error_code == "COORDINATE_PARSE_ERROR"
        assert exc.details["text"] == "hello"
        assert len(exc.suggestions) == 4

    def test_coordinate_format_error(self):
        """Test CoordinateFormatError."""
        exc = CoordinateFormatError("bad digits", raw_value="18SUJ1")

        assert exc.status_code == 500
        assert exc.details["raw_value"] == "18SUJ1"

    def test_unsupported_format_error(self):
        """Test UnsupportedFormatError names the requested format."""
        exc = UnsupportedFormatError(InputFormat.DD)

        assert exc.error_code == "UNSUPPORTED_FORMAT"
        assert "DD" in exc.message

    def test_grid_error(self):
        """Test GridError."""
        exc = GridError("Too many cells", precision="keypad", details={"limit": 10})

        assert exc.status_code == 400
        assert exc.details == {"limit": 10, "precision": "keypad"}
        assert exc.suggestions

    def test_configuration_error(self):
        """Test ConfigurationError."""
        exc = ConfigurationError("bad scheme", config_key="grid_scheme")

        assert exc.status_code == 500
        assert exc.details["config_key"] == "grid_scheme"

    @pytest.mark.parametrize(
        "exc",
        [
            CoordinateParseError("x"),
            CoordinateFormatError("x"),
            UnsupportedFormatError("x"),
            GridError("x"),
            ConfigurationError("x"),
        ],
    )
    def test_all_inherit_from_base(self, exc):
        """Test that every error is a TacGridException."""
        assert isinstance(exc, TacGridException)
