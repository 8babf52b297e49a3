"""
Custom exception hierarchy for TacGrid.

This module defines the exceptions raised by the grid and coordinate
services. Expected outcomes such as an unparseable coordinate string are
signalled with return values, not exceptions; the classes here cover
programmer errors, invalid configuration and API-level failures.
"""

from typing import Any, Dict, List, Optional


class TacGridException(Exception):
    """
    Base exception for all TacGrid-specific errors.

    Attributes:
        error_code: String identifier for the error type
        message: User-friendly error message
        details: Technical details for logging/debugging
        status_code: HTTP status code for API responses
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize TacGridException.

        Args:
            message: User-friendly error message
            error_code: String identifier for the error type
            status_code: HTTP status code (default: 500)
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for API responses.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}', "
            f"status_code={self.status_code})"
        )


class CoordinateParseError(TacGridException):
    """
    Raised when a coordinate string cannot be interpreted.

    The parser itself returns None for unrecognised input; this exception is
    raised by codecs that reject malformed text and by the API layer when
    a parse request finds no match. Maps to HTTP 422 Unprocessable Entity.
    """

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        if text is not None:
            error_details["text"] = text

        default_suggestions = [
            "Use MGRS, e.g. 18S UJ 23487 06483",
            "Use degrees-minutes-seconds, e.g. 38°53'51.72\" N 77°2'11.40\" W",
            "Use degrees-decimal-minutes, e.g. 38° 53.8620' N 77° 2.1900' W",
            "Use decimal degrees, e.g. 38.8977, -77.0365",
        ]

        super().__init__(
            message=message,
            error_code="COORDINATE_PARSE_ERROR",
            status_code=422,
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class CoordinateFormatError(TacGridException):
    """
    Raised when a point cannot be rendered in the requested format.

    Typically the military grid codec returned a string whose digit groups
    do not match the requested precision. Maps to HTTP 500.
    """

    def __init__(
        self,
        message: str,
        raw_value: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if raw_value is not None:
            error_details["raw_value"] = raw_value

        super().__init__(
            message=message,
            error_code="COORDINATE_FORMAT_ERROR",
            status_code=500,
            details=error_details,
        )


class UnsupportedFormatError(TacGridException):
    """
    Raised when a display format outside DisplayFormat is requested.

    This can only come from a coding mistake, never from user input.
    """

    def __init__(self, requested: Any):
        super().__init__(
            message=f"Unsupported display format: {requested!r}",
            error_code="UNSUPPORTED_FORMAT",
            status_code=500,
            details={"requested": str(requested)},
            suggestions=["Use one of: MGRS, DMS, DMM"],
        )


class GridError(TacGridException):
    """
    Raised when a grid request cannot be served.

    Used for unknown precisions or enumerations that exceed the configured
    cell limit. Maps to HTTP 400 Bad Request.
    """

    def __init__(
        self,
        message: str,
        precision: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        if precision:
            error_details["precision"] = precision

        super().__init__(
            message=message,
            error_code="GRID_ERROR",
            status_code=400,
            details=error_details,
            suggestions=suggestions or ["Zoom in or request a smaller region"],
        )


class ConfigurationError(TacGridException):
    """
    Raised when application configuration is invalid.

    Maps to HTTP 500 Internal Server Error.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        default_suggestions = [
            "Check TACGRID_* environment variables are set correctly",
            "Verify the .env file syntax",
        ]

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            status_code=500,
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )
