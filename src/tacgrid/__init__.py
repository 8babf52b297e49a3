"""
TacGrid - coordinate conversion and tactical grid reference engine.

This package parses and formats geodetic coordinates (MGRS, DMS, DMM, DD)
and encodes points into a killbox/keypad grid for map overlays.
"""

__version__ = "0.1.0"
