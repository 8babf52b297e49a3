"""
Killbox/keypad grid module.

This module provides:
- Point to cell lookup at killbox or keypad precision
- Lazy enumeration of cells over a region, clipped to an AOI
- Pluggable killbox naming (CGRS or GARS-style)
- Overlay planning and GeoJSON export for map display
"""

from tacgrid.core.grid.codec import (
    GridCellSequence,
    GridCodec,
    keypad_number,
    lat_band_index,
    lon_band_index,
)
from tacgrid.core.grid.naming import (
    CGRS_NAMING,
    GARS_NAMING,
    BandNaming,
    CgrsNaming,
    GarsNaming,
    get_naming,
)
from tacgrid.core.grid.overlay import GridOverlay

__all__ = [
    # Codec
    "GridCellSequence",
    "GridCodec",
    "keypad_number",
    "lat_band_index",
    "lon_band_index",
    # Naming
    "CGRS_NAMING",
    "GARS_NAMING",
    "BandNaming",
    "CgrsNaming",
    "GarsNaming",
    "get_naming",
    # Overlay
    "GridOverlay",
]
