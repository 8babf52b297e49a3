"""
Killbox/keypad grid codec.

Killboxes are 30-minute squares indexed by integer band numbers counted
from the south pole and the antimeridian. Each killbox is split into nine
10-minute keypads numbered like a telephone keypad::

    1 | 2 | 3   <- north
    4 | 5 | 6
    7 | 8 | 9   <- south

All naming and enumeration work on integer band indices; degree values are
only derived from them, never the other way round, so cells at boundary
values are neither skipped nor emitted twice.
"""

import logging
import math
from typing import Iterator

from tacgrid.core.errors import GridError
from tacgrid.core.grid.naming import CGRS_NAMING, LAT_BANDS, LON_BANDS, BandNaming
from tacgrid.models.geo import GeoPoint, GridCell, GridPrecision, Region

logger = logging.getLogger(__name__)

KILLBOXES_PER_DEGREE = 2
KEYPADS_PER_DEGREE = 6

LAT_OFFSET = 90
LON_OFFSET = 180


def _edge(index: int, per_degree: int, offset: int) -> float:
    """South or west edge, in degrees, of grid step ``index``."""
    return index / per_degree - offset


def _step_index(value: float, per_degree: int, offset: int, count: int) -> int:
    """
    Index of the grid step ``[edge(i), edge(i + 1))`` holding a value.

    The floor estimate is checked against the same edges the cells are built
    from, so a value lying exactly on an edge always lands in the cell whose
    south/west edge it is. Values past the last edge (90°N, 180°E) are
    clamped into the last step.

    Args:
        value: Latitude or longitude in degrees
        per_degree: Grid steps per degree (2 for killboxes, 6 for keypads)
        offset: 90 for latitude, 180 for longitude
        count: Number of steps on the axis

    Returns:
        Step index in [0, count - 1]
    """
    index = min(max(math.floor((value + offset) * per_degree), 0), count - 1)
    if index > 0 and value < _edge(index, per_degree, offset):
        index -= 1
    elif index < count - 1 and value >= _edge(index + 1, per_degree, offset):
        index += 1
    return index


def _end_index(value: float, per_degree: int, offset: int, count: int) -> int:
    """Exclusive end index of the steps overlapping ``[.., value)``."""
    last = _step_index(value, per_degree, offset, count)
    return last + 1 if value > _edge(last, per_degree, offset) else last


def lat_band_index(lat: float) -> int:
    """Latitude band index of a latitude, with the north pole clamped into band 359."""
    return _step_index(lat, KILLBOXES_PER_DEGREE, LAT_OFFSET, LAT_BANDS)


def lon_band_index(lng: float) -> int:
    """Longitude band index of a longitude, with 180°E clamped into band 719."""
    return _step_index(lng, KILLBOXES_PER_DEGREE, LON_OFFSET, LON_BANDS)


def keypad_number(row: int, col: int) -> int:
    """
    Telephone-style keypad number for a sub-grid position.

    Args:
        row: 0 = southern third, 2 = northern third
        col: 0 = western third, 2 = eastern third

    Returns:
        Keypad number 1 (NW) to 9 (SE)
    """
    return (2 - row) * 3 + col + 1


def _check_precision(precision: GridPrecision) -> None:
    if not isinstance(precision, GridPrecision):
        raise GridError(f"Unknown grid precision: {precision!r}", precision=str(precision))


class GridCellSequence:
    """
    Lazy, restartable sequence of the grid cells covering a region.

    Nothing is computed until the sequence is iterated, and every call to
    ``iter()`` derives the cells again from the bounds, so the same sequence
    can be walked any number of times.
    """

    def __init__(self, naming: BandNaming, bounds: Region, precision: GridPrecision):
        """
        Initialize GridCellSequence.

        Args:
            naming: Killbox naming scheme
            bounds: Effective (already clipped) bounds
            precision: Cell size to enumerate
        """
        self.naming = naming
        self.bounds = bounds
        self.precision = precision

    @property
    def is_empty(self) -> bool:
        """True when the bounds have no area, so no cell will be produced."""
        return self.bounds.is_empty

    def __iter__(self) -> Iterator[GridCell]:
        if self.bounds.is_empty:
            return

        b = self.bounds
        lat_start = _step_index(b.min_lat, KILLBOXES_PER_DEGREE, LAT_OFFSET, LAT_BANDS)
        lat_end = _end_index(b.max_lat, KILLBOXES_PER_DEGREE, LAT_OFFSET, LAT_BANDS)
        lon_start = _step_index(b.min_lon, KILLBOXES_PER_DEGREE, LON_OFFSET, LON_BANDS)
        lon_end = _end_index(b.max_lon, KILLBOXES_PER_DEGREE, LON_OFFSET, LON_BANDS)

        for lat_band in range(lat_start, lat_end):
            for lon_band in range(lon_start, lon_end):
                if self.precision is GridPrecision.KILLBOX:
                    yield killbox_cell(self.naming, lat_band, lon_band)
                    continue

                for row in range(3):
                    for col in range(3):
                        cell = keypad_cell(self.naming, lat_band, lon_band, row, col)
                        if _overlaps(cell, b):
                            yield cell

    def __repr__(self) -> str:
        return (
            f"GridCellSequence(precision={self.precision.value}, "
            f"bounds={self.bounds.to_dict()})"
        )


def _overlaps(cell: GridCell, bounds: Region) -> bool:
    """Half-open overlap test between a cell and a region."""
    return not (
        cell.south_west.lat >= bounds.max_lat
        or cell.north_east.lat <= bounds.min_lat
        or cell.south_west.lng >= bounds.max_lon
        or cell.north_east.lng <= bounds.min_lon
    )


def killbox_cell(naming: BandNaming, lat_band: int, lon_band: int) -> GridCell:
    """Build the killbox cell for a pair of band indices."""
    return GridCell(
        code=naming.killbox_code(lat_band, lon_band),
        south_west=GeoPoint(
            lat=_edge(lat_band, KILLBOXES_PER_DEGREE, LAT_OFFSET),
            lng=_edge(lon_band, KILLBOXES_PER_DEGREE, LON_OFFSET),
        ),
        north_east=GeoPoint(
            lat=_edge(lat_band + 1, KILLBOXES_PER_DEGREE, LAT_OFFSET),
            lng=_edge(lon_band + 1, KILLBOXES_PER_DEGREE, LON_OFFSET),
        ),
        precision=GridPrecision.KILLBOX,
    )


def keypad_cell(
    naming: BandNaming, lat_band: int, lon_band: int, row: int, col: int
) -> GridCell:
    """
    Build the keypad cell at (row, col) inside a killbox.

    Edges are computed in whole sixths of a degree so that keypad edges
    coincide exactly with killbox edges and with their neighbours.
    """
    lat_sixth = lat_band * 3 + row
    lon_sixth = lon_band * 3 + col
    return GridCell(
        code=naming.keypad_code(lat_band, lon_band, keypad_number(row, col)),
        south_west=GeoPoint(
            lat=_edge(lat_sixth, KEYPADS_PER_DEGREE, LAT_OFFSET),
            lng=_edge(lon_sixth, KEYPADS_PER_DEGREE, LON_OFFSET),
        ),
        north_east=GeoPoint(
            lat=_edge(lat_sixth + 1, KEYPADS_PER_DEGREE, LAT_OFFSET),
            lng=_edge(lon_sixth + 1, KEYPADS_PER_DEGREE, LON_OFFSET),
        ),
        precision=GridPrecision.KEYPAD,
    )


class GridCodec:
    """
    Maps geodetic points to killbox/keypad cells and enumerates cells over
    regions.

    The codec holds no state besides its naming scheme, which can be swapped
    (CGRS or GARS-style) without changing any call site.
    """

    def __init__(self, naming: BandNaming = CGRS_NAMING):
        """
        Initialize GridCodec.

        Args:
            naming: Killbox naming scheme (default: CGRS)
        """
        self.naming = naming

    def cell_for(
        self, point: GeoPoint, precision: GridPrecision = GridPrecision.KILLBOX
    ) -> GridCell:
        """
        Find the cell containing a point.

        Latitude 90 and longitude 180 are clamped into the northernmost and
        easternmost bands; longitude -180 falls in band 0.

        Args:
            point: Point to locate
            precision: Killbox or keypad

        Returns:
            The containing GridCell

        Raises:
            GridError: If precision is not a GridPrecision
        """
        _check_precision(precision)

        if precision is GridPrecision.KILLBOX:
            return killbox_cell(
                self.naming, lat_band_index(point.lat), lon_band_index(point.lng)
            )

        # Keypad indices are whole sixths of a degree, three per killbox
        lat_sixth = _step_index(point.lat, KEYPADS_PER_DEGREE, LAT_OFFSET, LAT_BANDS * 3)
        lon_sixth = _step_index(point.lng, KEYPADS_PER_DEGREE, LON_OFFSET, LON_BANDS * 3)
        lat_band, row = divmod(lat_sixth, 3)
        lon_band, col = divmod(lon_sixth, 3)
        return keypad_cell(self.naming, lat_band, lon_band, row, col)

    def cells_in(
        self,
        region: Region,
        precision: GridPrecision = GridPrecision.KILLBOX,
        aoi: Region = Region.WORLD,
    ) -> GridCellSequence:
        """
        Enumerate every cell that intersects a region, clipped to an AOI.

        An empty intersection between region and AOI is not an error; the
        returned sequence is simply empty.

        Args:
            region: Region of interest (typically the map viewport)
            precision: Killbox or keypad
            aoi: Operational area to clip to (default: whole world)

        Returns:
            Lazy, restartable sequence of GridCells

        Raises:
            GridError: If precision is not a GridPrecision
        """
        _check_precision(precision)
        bounds = region.intersection(aoi)

        if bounds.is_empty:
            logger.debug(f"Region {region.to_dict()} does not intersect AOI {aoi.to_dict()}")

        return GridCellSequence(self.naming, bounds, precision)
