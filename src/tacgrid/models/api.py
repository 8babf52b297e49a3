"""
Request and response models for the TacGrid API.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from tacgrid.models.geo import DisplayFormat, GridCell, GridPrecision, InputFormat


class ParseRequest(BaseModel):
    """Coordinate text to parse."""

    text: str = Field(..., max_length=200, description="Free-form coordinate text")


class ParseResponse(BaseModel):
    """Parsed coordinate."""

    lat: float
    lng: float
    input_format: InputFormat


class FormatRequest(BaseModel):
    """Point to format; all formats are returned when format is omitted."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    format: Optional[DisplayFormat] = None


class FormatResponse(BaseModel):
    """Formatted coordinate strings keyed by format name."""

    lat: float
    lng: float
    formats: Dict[str, str]


class CurrentFormatResponse(BaseModel):
    """Current read-out format."""

    format: DisplayFormat


class CellResponse(BaseModel):
    """A killbox or keypad cell."""

    code: str
    precision: GridPrecision
    sw_lat: float
    sw_lon: float
    ne_lat: float
    ne_lon: float

    @classmethod
    def from_cell(cls, cell: GridCell) -> "CellResponse":
        """Build from a GridCell."""
        return cls(**cell.to_dict())


class CellsRequest(BaseModel):
    """Region to enumerate."""

    min_lat: float = Field(..., ge=-90, le=90)
    max_lat: float = Field(..., ge=-90, le=90)
    min_lon: float = Field(..., ge=-180, le=180)
    max_lon: float = Field(..., ge=-180, le=180)
    precision: GridPrecision = GridPrecision.KILLBOX


class CellsResponse(BaseModel):
    """Cells intersecting a region, clipped to the AOI."""

    precision: GridPrecision
    count: int
    cells: List[CellResponse]
