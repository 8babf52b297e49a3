"""
Killbox naming schemes.

A naming scheme turns the integer 30-minute band indices of a killbox into
its code. Band indices are counted from the south pole (latitude) and from
the antimeridian (longitude), so ``lat_band`` is in [0, 359] and
``lon_band`` is in [0, 719].

Two schemes exist for the same grid and they are not interchangeable:

- CGRS: ``{lat number}{2 letters}`` with a 26-letter alphabet, e.g. "39TJ".
- GARS-style: ``{3-digit lon number}{2 letters}`` with a 24-letter alphabet
  (no I or O), e.g. "164KZ".

Keypad codes append a single digit 1-9 to the killbox code in both schemes.
"""

from abc import ABC, abstractmethod
from typing import Dict

from tacgrid.core.errors import ConfigurationError

LAT_BANDS = 360
LON_BANDS = 720


class BandNaming(ABC):
    """Maps killbox band indices to a killbox code."""

    #: Scheme identifier used in configuration
    name: str = ""

    @abstractmethod
    def killbox_code(self, lat_band: int, lon_band: int) -> str:
        """
        Build the killbox code for a pair of band indices.

        Args:
            lat_band: Latitude band index (0 = 90°S to 89.5°S)
            lon_band: Longitude band index (0 = 180°W to 179.5°W)

        Returns:
            Killbox code
        """

    def keypad_code(self, lat_band: int, lon_band: int, keypad: int) -> str:
        """
        Build the keypad code for a killbox and keypad number.

        Raises:
            ValueError: If keypad is not in 1..9
        """
        if not 1 <= keypad <= 9:
            raise ValueError(f"Keypad must be between 1 and 9, got {keypad}")
        return f"{self.killbox_code(lat_band, lon_band)}{keypad}"

    @staticmethod
    def _check_bands(lat_band: int, lon_band: int) -> None:
        if not 0 <= lat_band < LAT_BANDS:
            raise ValueError(f"Latitude band must be between 0 and 359, got {lat_band}")
        if not 0 <= lon_band < LON_BANDS:
            raise ValueError(f"Longitude band must be between 0 and 719, got {lon_band}")


class CgrsNaming(BandNaming):
    """
    CGRS naming with the standard A-Z alphabet.

    Latitude number = ``lat_band - 200`` (29.5°N gives 39). Longitude letters
    = base-26 encoding of ``lon_band + 340`` (98.5°W gives "TJ"). Two letters
    only hold 676 values, so the letter pair wraps every 676 bands (338°);
    codes are unique within any narrower AOI.
    """

    name = "cgrs"

    LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    LAT_OFFSET = 200
    LON_OFFSET = 340

    def killbox_code(self, lat_band: int, lon_band: int) -> str:
        self._check_bands(lat_band, lon_band)
        base = len(self.LETTERS)
        combined = (lon_band + self.LON_OFFSET) % (base * base)
        letters = self.LETTERS[combined // base] + self.LETTERS[combined % base]
        return f"{lat_band - self.LAT_OFFSET}{letters}"


class GarsNaming(BandNaming):
    """
    GARS-style naming with the 24-letter alphabet (I and O omitted).

    Longitude number = ``lon_band + 1`` zero padded to three digits (001 at
    the antimeridian, 720 at 179.5°E). Latitude letters = base-24 encoding
    of ``lat_band`` (AA at the south pole).
    """

    name = "gars"

    LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"

    def killbox_code(self, lat_band: int, lon_band: int) -> str:
        self._check_bands(lat_band, lon_band)
        base = len(self.LETTERS)
        letters = self.LETTERS[lat_band // base] + self.LETTERS[lat_band % base]
        return f"{lon_band + 1:03d}{letters}"


CGRS_NAMING = CgrsNaming()
GARS_NAMING = GarsNaming()

NAMING_SCHEMES: Dict[str, BandNaming] = {
    CGRS_NAMING.name: CGRS_NAMING,
    GARS_NAMING.name: GARS_NAMING,
}


def get_naming(name: str) -> BandNaming:
    """
    Resolve a naming scheme by name.

    Args:
        name: Scheme name ("cgrs" or "gars", case-insensitive)

    Returns:
        Shared BandNaming instance

    Raises:
        ConfigurationError: If the scheme is unknown
    """
    try:
        return NAMING_SCHEMES[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown grid naming scheme: {name}",
            config_key="grid_scheme",
            details={"available": sorted(NAMING_SCHEMES)},
        )
