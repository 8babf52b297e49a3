"""
Process-wide service instances built from settings.
"""

import logging
from dataclasses import dataclass

from tacgrid.core.config import Settings, settings
from tacgrid.core.coords import CoordinateDisplay, CoordinateParser
from tacgrid.core.grid import GridCodec, GridOverlay, get_naming
from tacgrid.models.geo import DisplayFormat

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """
    Wired grid and coordinate services.

    Attributes:
        grid_codec: Killbox/keypad codec using the configured naming scheme
        grid_overlay: Overlay planner clipped to the configured AOI
        parser: Coordinate parser
        display: Coordinate formatter holding the shared format cursor
    """

    grid_codec: GridCodec
    grid_overlay: GridOverlay
    parser: CoordinateParser
    display: CoordinateDisplay


def build_services(config: Settings) -> Services:
    """
    Build services from a Settings instance.

    Raises:
        ConfigurationError: If the grid naming scheme is unknown
    """
    grid_codec = GridCodec(get_naming(config.grid_scheme))
    services = Services(
        grid_codec=grid_codec,
        grid_overlay=GridOverlay(grid_codec, config.aoi, config.keypad_min_zoom),
        parser=CoordinateParser(),
        display=CoordinateDisplay(
            mgrs_precision=config.mgrs_precision,
            mgrs_spaced=config.mgrs_spaced,
            initial_format=DisplayFormat(config.default_display_format),
        ),
    )
    logger.info(
        f"Services built: scheme={config.grid_scheme}, aoi={config.aoi.to_dict()}, "
        f"display={config.default_display_format}"
    )
    return services


# Global services instance
services = build_services(settings)
