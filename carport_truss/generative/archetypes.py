# carport_truss/generative/archetypes.py
"""
ROOF ARCHETYPES: truss height and roofline per roof type
========================================================

Each archetype answers two questions:

    truss_height_for(span, slope)      -> raw truss height (m), before the floor
    height_at(x, span, height, slope)  -> top chord y at position x (m)

All five formulas live here, looked up through ARCHETYPES, so the generator
never branches on the roof type itself.

HEIGHTS:
--------
- gable:               (span / 2) * tan(slope)
- single / triangular: span * tan(slope)
- arched / semiarched: span * arch_rise_ratio
- flat:                span / 8

ROOFLINES:
----------
- gable:      symmetric ramp up to the ridge at midspan, never below the
              eave rise so the end nodes keep a non-zero height
- single:     straight ramp from the low eave
- arched:     circular arc from the eave to the ridge at midspan
- semiarched: rising half of a circular arc, ridge at the far end
- flat:       constant
"""

import math

from ..config import EngineSettings, RoofType
from ..errors import InvalidInputError


def _tan(slope_deg: float) -> float:
    return math.tan(math.radians(slope_deg))


def _arc_y(x: float, chord: float, crown_x: float, eave_y: float, crown_y: float) -> float:
    """
    y on the circular arc through (crown_x - chord/2, eave_y) and (crown_x, crown_y).

    radius = (chord² + 4·rise²) / (8·rise), centre below the crown.
    """
    rise = crown_y - eave_y
    if rise <= 0.0:
        return crown_y
    radius = (chord * chord + 4.0 * rise * rise) / (8.0 * rise)
    center_y = crown_y - radius
    dx = x - crown_x
    return center_y + math.sqrt(max(0.0, radius * radius - dx * dx))


class RoofArchetype:
    """Base archetype: the flat (parallel chord) truss."""
    roof_type = RoofType.FLAT

    def truss_height_for(self, span: float, slope_deg: float, settings: EngineSettings) -> float:
        return span / 8.0

    def height_at(self, x: float, span: float, height: float, slope_deg: float,
                  settings: EngineSettings) -> float:
        return height

    def __repr__(self):
        return f"{type(self).__name__}()"


class FlatRoof(RoofArchetype):
    roof_type = RoofType.FLAT


class GableRoof(RoofArchetype):
    roof_type = RoofType.GABLE

    def truss_height_for(self, span, slope_deg, settings):
        return (span / 2.0) * _tan(slope_deg)

    def height_at(self, x, span, height, slope_deg, settings):
        half = span / 2.0
        # Slope implied by the (possibly floored) height; equals tan(slope) otherwise
        tan_eff = height / half
        y = (half - abs(x - half)) * tan_eff
        return max(settings.eave_rise, y)


class SingleSlopeRoof(RoofArchetype):
    roof_type = RoofType.SINGLE_SLOPE

    def truss_height_for(self, span, slope_deg, settings):
        return span * _tan(slope_deg)

    def height_at(self, x, span, height, slope_deg, settings):
        return settings.single_slope_offset + x * _tan(slope_deg)


class ArchedRoof(RoofArchetype):
    roof_type = RoofType.ARCHED

    def truss_height_for(self, span, slope_deg, settings):
        return span * settings.arch_rise_ratio

    def height_at(self, x, span, height, slope_deg, settings):
        return _arc_y(x, span, span / 2.0, settings.eave_rise, height)


class SemiArchedRoof(ArchedRoof):
    roof_type = RoofType.SEMI_ARCHED

    def height_at(self, x, span, height, slope_deg, settings):
        # Half of an arch spanning 2 * span, crown over the right-hand end
        return _arc_y(x, 2.0 * span, span, settings.eave_rise, height)


_SINGLE = SingleSlopeRoof()

ARCHETYPES = {
    RoofType.FLAT: FlatRoof(),
    RoofType.GABLE: GableRoof(),
    RoofType.SINGLE_SLOPE: _SINGLE,
    RoofType.TRIANGULAR: _SINGLE,
    RoofType.ARCHED: ArchedRoof(),
    RoofType.SEMI_ARCHED: SemiArchedRoof(),
}


def archetype_for(roof_type) -> RoofArchetype:
    """Look up the archetype for a RoofType or its string tag."""
    try:
        return ARCHETYPES[RoofType(roof_type)]
    except (ValueError, KeyError):
        raise InvalidInputError(f"Unknown roof type: {roof_type!r}")
