"""
Grid overlay planning for map display.

At low zoom the whole AOI is covered with killboxes; from
``keypad_min_zoom`` upwards only the keypads in the visible viewport are
drawn, which keeps the cell count bounded by what is on screen.
"""

import logging
from typing import Any, Dict, Iterable

from shapely.geometry import mapping

from tacgrid.core.grid.codec import GridCellSequence, GridCodec
from tacgrid.models.geo import GridCell, GridPrecision, Region
from tacgrid.utils.logging import log_performance

logger = logging.getLogger(__name__)

DEFAULT_KEYPAD_MIN_ZOOM = 8


class GridOverlay:
    """
    Decides which grid cells to draw for a given viewport and zoom.

    Attributes:
        codec: Grid codec used for enumeration
        aoi: Operational area every overlay is clipped to
        keypad_min_zoom: First zoom level that shows keypads
    """

    def __init__(
        self,
        codec: GridCodec,
        aoi: Region,
        keypad_min_zoom: int = DEFAULT_KEYPAD_MIN_ZOOM,
    ):
        self.codec = codec
        self.aoi = aoi
        self.keypad_min_zoom = keypad_min_zoom

    def precision_for_zoom(self, zoom: float) -> GridPrecision:
        """Killboxes below ``keypad_min_zoom``, keypads from there on."""
        return GridPrecision.KEYPAD if zoom >= self.keypad_min_zoom else GridPrecision.KILLBOX

    def plan(self, viewport: Region, zoom: float) -> GridCellSequence:
        """
        Select the cells to draw.

        Args:
            viewport: Visible map bounds
            zoom: Current map zoom level

        Returns:
            Lazy sequence of cells; the whole AOI at killbox precision, the
            viewport clipped to the AOI at keypad precision
        """
        precision = self.precision_for_zoom(zoom)
        bounds = self.aoi if precision is GridPrecision.KILLBOX else viewport
        return self.codec.cells_in(bounds, precision, self.aoi)

    @log_performance(threshold_ms=50)
    def to_feature_collection(self, cells: Iterable[GridCell]) -> Dict[str, Any]:
        """
        Convert cells to a GeoJSON FeatureCollection.

        Each feature carries the cell code and a label anchor at the cell
        center so the map can place the code text.

        Args:
            cells: Cells to export

        Returns:
            GeoJSON FeatureCollection dictionary
        """
        features = []
        for cell in cells:
            center = cell.center
            features.append(
                {
                    "type": "Feature",
                    "geometry": mapping(cell.to_polygon()),
                    "properties": {
                        "code": cell.code,
                        "precision": cell.precision.value,
                        "label_lat": center.lat,
                        "label_lng": center.lng,
                    },
                }
            )

        logger.debug(f"Built grid overlay with {len(features)} features")

        return {
            "type": "FeatureCollection",
            "features": features,
        }
