"""
Configuration settings for the TacGrid application.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tacgrid.models.geo import Region


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Attributes:
        aoi_min_lat: Southern edge of the operational area
        aoi_max_lat: Northern edge of the operational area
        aoi_min_lon: Western edge of the operational area
        aoi_max_lon: Eastern edge of the operational area
        grid_scheme: Killbox naming scheme ("cgrs" or "gars")
        keypad_min_zoom: Map zoom at which the overlay switches to keypads
        max_cells: Maximum number of cells returned by one API call
        mgrs_precision: MGRS digits per axis (5 = 1 m)
        mgrs_spaced: Whether MGRS read-outs are grouped with spaces
        default_display_format: Initial coordinate read-out format
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="TACGRID_",
    )

    # Operational area (defaults to Texas)
    aoi_min_lat: float = 25.8
    aoi_max_lat: float = 36.5
    aoi_min_lon: float = -106.6
    aoi_max_lon: float = -93.5

    # Grid settings
    grid_scheme: Literal["cgrs", "gars"] = "cgrs"
    keypad_min_zoom: int = 8
    max_cells: int = Field(default=20000, gt=0)

    # Coordinate display settings
    mgrs_precision: int = Field(default=5, ge=1, le=5)
    mgrs_spaced: bool = True
    default_display_format: Literal["MGRS", "DMS", "DMM"] = "MGRS"

    # API settings
    api_v1_prefix: str = "/api/v1"

    # CORS settings
    cors_origins: str = "http://localhost:5173,http://localhost:3000,http://localhost:4173"

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_dir: Optional[Path] = None

    @model_validator(mode="after")
    def check_aoi(self) -> "Settings":
        """Reject an inverted or out-of-range operational area."""
        if not (-90 <= self.aoi_min_lat < self.aoi_max_lat <= 90):
            raise ValueError(
                f"AOI latitude bounds invalid: {self.aoi_min_lat}..{self.aoi_max_lat}"
            )
        if not (-180 <= self.aoi_min_lon < self.aoi_max_lon <= 180):
            raise ValueError(
                f"AOI longitude bounds invalid: {self.aoi_min_lon}..{self.aoi_max_lon}"
            )
        return self

    @property
    def aoi(self) -> Region:
        """Get the operational area as a Region."""
        return Region(
            min_lat=self.aoi_min_lat,
            max_lat=self.aoi_max_lat,
            min_lon=self.aoi_min_lon,
            max_lon=self.aoi_max_lon,
        )

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
