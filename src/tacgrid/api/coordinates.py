"""
Coordinate API endpoints: parsing, formatting and the read-out format cursor.
"""

import logging

from fastapi import APIRouter

from tacgrid.core.errors import CoordinateParseError
from tacgrid.core.services import services
from tacgrid.models.api import (
    CurrentFormatResponse,
    FormatRequest,
    FormatResponse,
    ParseRequest,
    ParseResponse,
)
from tacgrid.models.errors import ErrorResponse
from tacgrid.models.geo import GeoPoint

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/coordinates", tags=["coordinates"])


@router.post(
    "/parse",
    response_model=ParseResponse,
    responses={422: {"model": ErrorResponse, "description": "Unrecognised coordinate"}},
    summary="Parse a coordinate string",
    description="Parse MGRS, DMS, DMM or decimal-degree text into a point",
)
async def parse_coordinate(request: ParseRequest) -> ParseResponse:
    """
    Parse a free-form coordinate string.

    Raises:
        CoordinateParseError: If no supported format matches
    """
    parsed = services.parser.parse_detailed(request.text)
    if parsed is None:
        raise CoordinateParseError("Could not parse coordinate", text=request.text)

    return ParseResponse(
        lat=parsed.point.lat,
        lng=parsed.point.lng,
        input_format=parsed.input_format,
    )


@router.post(
    "/format",
    response_model=FormatResponse,
    summary="Format a point",
    description="Format a point in one display format, or in all of them",
)
async def format_coordinate(request: FormatRequest) -> FormatResponse:
    """Format a point as MGRS, DMS and/or DMM."""
    point = GeoPoint(lat=request.lat, lng=request.lng)

    if request.format is None:
        formats = services.display.format_all(point)
    else:
        formats = {request.format: services.display.format(point, request.format)}

    return FormatResponse(
        lat=point.lat,
        lng=point.lng,
        formats={fmt.value: value for fmt, value in formats.items()},
    )


@router.get(
    "/format/current",
    response_model=CurrentFormatResponse,
    summary="Get the current read-out format",
)
async def get_current_format() -> CurrentFormatResponse:
    """Get the current read-out format."""
    return CurrentFormatResponse(format=services.display.get_current_format())


@router.post(
    "/format/cycle",
    response_model=CurrentFormatResponse,
    summary="Advance the read-out format",
    description="Cycle MGRS -> DMS -> DMM -> MGRS and return the new format",
)
async def cycle_format() -> CurrentFormatResponse:
    """Advance the read-out format cursor."""
    fmt = services.display.cycle_format()
    logger.info(f"Read-out format changed to {fmt.value}")
    return CurrentFormatResponse(format=fmt)
