"""
Data models and schemas.
"""

from .geo import (
    DisplayFormat,
    GeoPoint,
    GridCell,
    GridPrecision,
    InputFormat,
    Region,
    is_valid_lat_lng,
)

__all__ = [
    "DisplayFormat",
    "GeoPoint",
    "GridCell",
    "GridPrecision",
    "InputFormat",
    "Region",
    "is_valid_lat_lng",
]
