"""
Grid API endpoints: cell lookup, cell enumeration and map overlays.
"""

import logging
from itertools import islice
from typing import Any, Dict, List

from fastapi import APIRouter, Query

from tacgrid.core.config import settings
from tacgrid.core.errors import GridError
from tacgrid.core.grid import GridCellSequence
from tacgrid.core.services import services
from tacgrid.models.api import CellResponse, CellsRequest, CellsResponse
from tacgrid.models.errors import ErrorResponse
from tacgrid.models.geo import GeoPoint, GridCell, GridPrecision, Region
from tacgrid.utils.logging import PerformanceTimer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/grid", tags=["grid"])


def collect_cells(sequence: GridCellSequence, limit: int) -> List[GridCell]:
    """
    Materialize a cell sequence, refusing to go past ``limit`` cells.

    Raises:
        GridError: If the sequence holds more than ``limit`` cells
    """
    with PerformanceTimer(f"{sequence.precision.value} enumeration"):
        cells = list(islice(sequence, limit + 1))

    if len(cells) > limit:
        raise GridError(
            f"Region contains more than {limit} cells",
            precision=sequence.precision.value,
            details={"limit": limit, "bounds": sequence.bounds.to_dict()},
        )
    return cells


@router.get(
    "/cell",
    response_model=CellResponse,
    summary="Find the cell containing a point",
)
async def get_cell(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    precision: GridPrecision = GridPrecision.KEYPAD,
) -> CellResponse:
    """Find the killbox or keypad containing a point."""
    cell = services.grid_codec.cell_for(GeoPoint(lat=lat, lng=lng), precision)
    return CellResponse.from_cell(cell)


@router.post(
    "/cells",
    response_model=CellsResponse,
    responses={400: {"model": ErrorResponse, "description": "Too many cells"}},
    summary="List cells in a region",
    description="List every cell intersecting a region, clipped to the operational area",
)
async def list_cells(request: CellsRequest) -> CellsResponse:
    """Enumerate cells intersecting a region, clipped to the AOI."""
    region = Region(
        min_lat=request.min_lat,
        max_lat=request.max_lat,
        min_lon=request.min_lon,
        max_lon=request.max_lon,
    )
    sequence = services.grid_codec.cells_in(region, request.precision, settings.aoi)
    cells = collect_cells(sequence, settings.max_cells)

    return CellsResponse(
        precision=request.precision,
        count=len(cells),
        cells=[CellResponse.from_cell(cell) for cell in cells],
    )


@router.get(
    "/overlay",
    summary="Grid overlay for a map view",
    description="GeoJSON FeatureCollection of the cells to draw at a zoom level",
)
async def get_overlay(
    south: float = Query(..., ge=-90, le=90),
    west: float = Query(..., ge=-180, le=180),
    north: float = Query(..., ge=-90, le=90),
    east: float = Query(..., ge=-180, le=180),
    zoom: float = Query(..., ge=0, le=24),
) -> Dict[str, Any]:
    """Build the grid overlay for a viewport and zoom level."""
    viewport = Region(min_lat=south, max_lat=north, min_lon=west, max_lon=east)
    overlay = services.grid_overlay
    cells = collect_cells(overlay.plan(viewport, zoom), settings.max_cells)
    return overlay.to_feature_collection(cells)
