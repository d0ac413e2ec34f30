# carport_truss/config.py
"""
Engine configuration: the input record and the fixed engineering constants.
"""

from dataclasses import dataclass
from enum import Enum


class RoofType(str, Enum):
    """Roof archetype tags, as sent by the configurator front-end."""
    SINGLE_SLOPE = 'single'
    TRIANGULAR = 'triangular'
    GABLE = 'gable'
    ARCHED = 'arched'
    SEMI_ARCHED = 'semiarched'
    FLAT = 'flat'


class RoofMaterial(str, Enum):
    POLYCARBONATE = 'polycarbonate'
    METAL_TILE = 'metaltile'
    DECKING = 'decking'


class PillarSize(str, Enum):
    SIZE_60 = '60x60'
    SIZE_80 = '80x80'
    SIZE_100 = '100x100'


# Product bounds offered by the configurator (metres)
MIN_WIDTH = 3.0
MAX_WIDTH = 10.0
MIN_LENGTH = 3.0
MAX_LENGTH = 12.0
MIN_HEIGHT = 2.0
MAX_HEIGHT = 4.0

MIN_SLOPE = 0.0
MAX_SLOPE = 75.0


@dataclass
class CarportConfig:
    """
    One carport configuration as entered by the customer.

    Parameters:
    -----------
    width : float
        Carport width across the trusses (m). This is the truss span.
    length : float
        Carport length along the ridge (m). Drives truss and post counts.
    height : float
        Eave height, i.e. the post height (m).
    roof_type : RoofType
        Roof archetype.
    roof_slope : float
        Roof slope in degrees. Ignored by the flat and arched archetypes.
    roof_material : RoofMaterial
        Roofing class, selects the dead load.
    snow_region, wind_region : int
        Regional climate codes (SP 20.13330 region numbers).
    pillar_size : PillarSize
        Nominal post size picked in the UI.
    """
    width: float = 4.5
    length: float = 6.0
    height: float = 2.5
    roof_type: RoofType = RoofType.GABLE
    roof_slope: float = 20.0
    roof_material: RoofMaterial = RoofMaterial.POLYCARBONATE
    snow_region: int = 3
    wind_region: int = 1
    pillar_size: PillarSize = PillarSize.SIZE_80

    @property
    def span(self) -> float:
        return self.width

    def numeric_fields(self):
        """(name, value) pairs of the float inputs, in declaration order."""
        return [
            ('width', self.width),
            ('length', self.length),
            ('height', self.height),
            ('roof_slope', self.roof_slope),
        ]


@dataclass(frozen=True)
class EngineSettings:
    """
    Fixed constants of the truss engine.

    Geometry (m):
        min_truss_height     floor applied to every archetype height formula
        eave_rise            minimum top chord height at a gable/arch eave
        single_slope_offset  top chord height at the low end of a single slope
        arch_rise_ratio      arch rise as a fraction of the span
        target_panel_length  panel count is derived from this length
        min_panel_count

    Loads:
        truss_spacing        tributary width carried by one truss (m)
        load_factor          safety multiplier on snow and wind
        lever_arm_factor     effective lever arm as a fraction of truss height
        min_lever_arm        floor on the lever arm (m)
        web_angle_deg        assumed diagonal inclination

    Steel (SP 16.13330, C245):
        Ry                   design resistance (kN/cm²)
        gamma_c              operating condition factor
        phi                  buckling factor assumed for compression members
        column_end_factor    effective length factor of a cantilever post
        slenderness_limit

    Section floors (mm): chord_min_h, web_min_h / web_min_t,
    purlin_min_h / purlin_min_t.

    Fabrication: post_spacing (m) and metal_price (RUB/kg).
    """
    min_truss_height: float = 0.4
    eave_rise: float = 0.3
    single_slope_offset: float = 0.4
    arch_rise_ratio: float = 0.15
    target_panel_length: float = 1.5
    min_panel_count: int = 4

    truss_spacing: float = 2.5
    load_factor: float = 1.4
    lever_arm_factor: float = 0.9
    min_lever_arm: float = 0.3
    web_angle_deg: float = 45.0

    Ry: float = 24.0
    gamma_c: float = 1.0
    phi: float = 0.5
    column_end_factor: float = 2.0
    slenderness_limit: float = 150.0

    chord_min_h: float = 60.0
    chord_min_t: float = 0.0
    web_min_h: float = 40.0
    web_min_t: float = 2.0
    purlin_min_h: float = 40.0
    purlin_min_t: float = 2.0

    post_spacing: float = 2.5
    metal_price: float = 120.0


DEFAULT_SETTINGS = EngineSettings()

# Nominal post size -> (minimum side mm, minimum wall mm); posts are square tubes
PILLAR_MENU = {
    PillarSize.SIZE_60: (60.0, 3.0),
    PillarSize.SIZE_80: (80.0, 3.0),
    PillarSize.SIZE_100: (100.0, 4.0),
}
