"""
Data models for geodetic points, regions and grid cells.

This module defines the canonical point representation that every
coordinate format converts to and from, the rectangular regions used for
viewport queries and AOI clipping, and the killbox/keypad grid cells.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple

from shapely.geometry import Polygon, box


class DisplayFormat(str, Enum):
    """Coordinate formats available for display read-outs."""

    MILITARY_GRID = "MGRS"
    DEG_MIN_SEC = "DMS"
    DEG_DEC_MIN = "DMM"


class InputFormat(str, Enum):
    """Coordinate formats recognised by the parser."""

    MGRS = "MGRS"
    DMS = "DMS"
    DMM = "DMM"
    DD = "DD"  # Input only, never displayed


class GridPrecision(str, Enum):
    """Grid cell sizes."""

    KILLBOX = "killbox"  # 30 minutes
    KEYPAD = "keypad"  # 10 minutes


def is_valid_lat_lng(lat: float, lng: float) -> bool:
    """
    Check that a latitude/longitude pair is finite and within WGS84 range.

    Args:
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees

    Returns:
        True if -90 <= lat <= 90 and -180 <= lng <= 180
    """
    return (
        math.isfinite(lat)
        and math.isfinite(lng)
        and -90 <= lat <= 90
        and -180 <= lng <= 180
    )


@dataclass(frozen=True)
class GeoPoint:
    """
    WGS84 geodetic point in decimal degrees.

    Attributes:
        lat: Latitude (-90 to 90)
        lng: Longitude (-180 to 180)
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not is_valid_lat_lng(self.lat, self.lng):
            raise ValueError(
                f"Coordinates out of range: lat={self.lat}, lng={self.lng}"
            )

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple (lat, lng)."""
        return (self.lat, self.lng)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {"lat": self.lat, "lng": self.lng}

    def __str__(self) -> str:
        """String representation."""
        return f"({self.lat:.6f}, {self.lng:.6f})"


@dataclass(frozen=True)
class Region:
    """
    Axis-aligned latitude/longitude rectangle.

    A region may be degenerate (min >= max on either axis); such a region
    is empty and intersects nothing.

    Attributes:
        min_lat: Southern edge
        max_lat: Northern edge
        min_lon: Western edge
        max_lon: Eastern edge
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    WORLD: ClassVar["Region"]

    @property
    def is_empty(self) -> bool:
        """True when the region has no area."""
        return self.min_lat >= self.max_lat or self.min_lon >= self.max_lon

    def intersection(self, other: "Region") -> "Region":
        """
        Intersect this region with another.

        The result may be empty; check ``is_empty`` before using it.
        """
        return Region(
            min_lat=max(self.min_lat, other.min_lat),
            max_lat=min(self.max_lat, other.max_lat),
            min_lon=max(self.min_lon, other.min_lon),
            max_lon=min(self.max_lon, other.max_lon),
        )

    def contains(self, point: GeoPoint) -> bool:
        """Check if a point lies within the region (edges included)."""
        return (
            self.min_lat <= point.lat <= self.max_lat
            and self.min_lon <= point.lng <= self.max_lon
        )

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "min_lat": self.min_lat,
            "max_lat": self.max_lat,
            "min_lon": self.min_lon,
            "max_lon": self.max_lon,
        }


Region.WORLD = Region(min_lat=-90.0, max_lat=90.0, min_lon=-180.0, max_lon=180.0)


@dataclass(frozen=True)
class GridCell:
    """
    A killbox or keypad cell.

    The cell covers the half-open rectangle
    ``[south_west.lat, north_east.lat) x [south_west.lng, north_east.lng)``.

    Attributes:
        code: Cell identifier, e.g. "39TJ" (killbox) or "39TJ9" (keypad)
        south_west: South-west corner
        north_east: North-east corner
        precision: Killbox or keypad
    """

    code: str
    south_west: GeoPoint
    north_east: GeoPoint
    precision: GridPrecision

    @property
    def center(self) -> GeoPoint:
        """Center of the cell, used as the label anchor."""
        return GeoPoint(
            lat=(self.south_west.lat + self.north_east.lat) / 2,
            lng=(self.south_west.lng + self.north_east.lng) / 2,
        )

    def contains(self, point: GeoPoint) -> bool:
        """Check if a point lies within the cell (south/west edges inclusive)."""
        return (
            self.south_west.lat <= point.lat < self.north_east.lat
            and self.south_west.lng <= point.lng < self.north_east.lng
        )

    def to_polygon(self) -> Polygon:
        """Convert to a shapely polygon in (lng, lat) order."""
        return box(
            self.south_west.lng,
            self.south_west.lat,
            self.north_east.lng,
            self.north_east.lat,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "code": self.code,
            "precision": self.precision.value,
            "sw_lat": self.south_west.lat,
            "sw_lon": self.south_west.lng,
            "ne_lat": self.north_east.lat,
            "ne_lon": self.north_east.lng,
        }

    def __str__(self) -> str:
        """String representation."""
        return f"{self.code} [{self.south_west} - {self.north_east}]"
