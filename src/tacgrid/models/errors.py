"""
Pydantic models for standardized error responses.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ErrorDetail(BaseModel):
    """Field-level error, used for request validation failures."""

    field: Optional[str] = Field(None, description="Field name that caused the error")
    message: str = Field(..., description="Error message for this field")
    code: Optional[str] = Field(None, description="Error code for this specific issue")


class ErrorResponse(BaseModel):
    """
    Error body returned by every API endpoint.

    Attributes:
        error_code: Machine-readable error identifier (e.g. 'COORDINATE_PARSE_ERROR')
        message: Human-readable error message
        details: Optional dictionary with additional technical details
        timestamp: When the error occurred (UTC)
        request_id: Optional request correlation ID for tracing
        suggestions: Optional list of actionable suggestions
        errors: Optional list of field-level errors
    """

    error_code: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["VALIDATION_ERROR", "COORDINATE_PARSE_ERROR", "GRID_ERROR"],
    )
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional technical details")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the error occurred (UTC)",
    )
    request_id: Optional[str] = Field(None, description="Request correlation ID for tracing")
    suggestions: Optional[List[str]] = Field(None, description="Suggestions for resolving the error")
    errors: Optional[List[ErrorDetail]] = Field(None, description="Field-level errors")

    @field_serializer("timestamp")
    def serialize_timestamp(self, timestamp: datetime, _info) -> str:
        """Serialize timestamp to ISO format string."""
        return timestamp.isoformat()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "COORDINATE_PARSE_ERROR",
                "message": "Could not parse coordinate",
                "details": {"text": "not a coordinate"},
                "timestamp": "2026-10-19T15:30:00+00:00",
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "suggestions": ["Use decimal degrees, e.g. 38.8977, -77.0365"],
            }
        }
    )
