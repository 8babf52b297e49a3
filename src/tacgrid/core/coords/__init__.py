"""
Coordinate parsing and display module.

This module provides:
- Parsing of MGRS, DMS, DMM and decimal-degree strings
- Formatting of points as MGRS, DMS or DMM
- The cyclic current-format cursor used by live read-outs
- An injectable MGRS codec backed by the mgrs package
"""

from tacgrid.core.coords.display import (
    FORMAT_CYCLE,
    NO_POSITION,
    CoordinateDisplay,
    hemisphere,
    to_dmm,
    to_dms,
)
from tacgrid.core.coords.mgrs_codec import (
    DEFAULT_MGRS_CODEC,
    DEFAULT_MGRS_PRECISION,
    MgrsLibraryCodec,
    MgrsReference,
    MilitaryGridCodec,
    split_mgrs,
)
from tacgrid.core.coords.parser import (
    CoordinateParser,
    ParsedCoordinate,
    assign_axes,
    to_decimal,
)

__all__ = [
    # Display
    "FORMAT_CYCLE",
    "NO_POSITION",
    "CoordinateDisplay",
    "hemisphere",
    "to_dmm",
    "to_dms",
    # MGRS
    "DEFAULT_MGRS_CODEC",
    "DEFAULT_MGRS_PRECISION",
    "MgrsLibraryCodec",
    "MgrsReference",
    "MilitaryGridCodec",
    "split_mgrs",
    # Parser
    "CoordinateParser",
    "ParsedCoordinate",
    "assign_axes",
    "to_decimal",
]
