# carport_truss/codes.py
"""
Regional climate codes (SP 20.13330) and the reference-table bundle.

The engine never reads these tables as globals: a DesignTables instance is
built once and handed to calculate_truss(), so a calculation is a function
of (config, tables) only.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from .catalog import DEFAULT_CATALOG, ProfileCatalog
from .config import DEFAULT_SETTINGS, EngineSettings, RoofMaterial


@dataclass(frozen=True)
class Region:
    """A climate region: id, characteristic value (kPa) and display name."""
    id: int
    value: float
    name: str


SNOW_REGIONS: List[Region] = [
    Region(1, 0.5, "I (0.5 kPa)"),
    Region(2, 1.0, "II (1.0 kPa)"),
    Region(3, 1.5, "III (1.5 kPa)"),  # Moscow
    Region(4, 2.0, "IV (2.0 kPa)"),
    Region(5, 2.5, "V (2.5 kPa)"),
]

WIND_REGIONS: List[Region] = [
    Region(1, 0.23, "I (0.23 kPa)"),  # Moscow
    Region(2, 0.30, "II (0.30 kPa)"),
    Region(3, 0.38, "III (0.38 kPa)"),
    Region(4, 0.48, "IV (0.48 kPa)"),
]

# Values used when a region id is not in the table
SNOW_FALLBACK = 1.5
WIND_FALLBACK = 0.23

# Roofing self-weight (kPa); light sheet roofs only
DEAD_LOADS: Dict[RoofMaterial, float] = {
    RoofMaterial.POLYCARBONATE: 0.02,
    RoofMaterial.DECKING: 0.02,
    RoofMaterial.METAL_TILE: 0.05,
}
DEAD_LOAD_FALLBACK = 0.02


def _by_id(regions: List[Region]) -> Dict[int, float]:
    return {r.id: r.value for r in regions}


@dataclass(frozen=True)
class DesignTables:
    """Everything the engine looks up: catalog, climate codes, constants."""
    catalog: ProfileCatalog = DEFAULT_CATALOG
    snow: Mapping[int, float] = field(default_factory=lambda: _by_id(SNOW_REGIONS))
    wind: Mapping[int, float] = field(default_factory=lambda: _by_id(WIND_REGIONS))
    dead_loads: Mapping[RoofMaterial, float] = field(default_factory=lambda: dict(DEAD_LOADS))
    snow_fallback: float = SNOW_FALLBACK
    wind_fallback: float = WIND_FALLBACK
    dead_load_fallback: float = DEAD_LOAD_FALLBACK
    settings: EngineSettings = DEFAULT_SETTINGS

    def snow_value(self, region_id: int) -> float:
        return self.snow.get(region_id, self.snow_fallback)

    def wind_value(self, region_id: int) -> float:
        return self.wind.get(region_id, self.wind_fallback)

    def dead_load(self, material: RoofMaterial) -> float:
        return self.dead_loads.get(material, self.dead_load_fallback)


DEFAULT_TABLES = DesignTables()
