# loads.py - Code loads and equivalent-beam forces for one truss
"""
LOADS: snow, wind and dead load on a carport truss (SP 20.13330)
================================================================

The truss is treated as a simply supported beam under a uniform line load:

    q      = (snow + dead) * truss_spacing          kN/m
    M_max  = q * span² / 8                          kN·m
    Q_max  = q * span / 2                           kN
    N_ch   = M_max / (0.9 * height)                 kN, both chords
    N_web  = Q_max / sin(45°)                       kN

Wind is computed and reported but does not enter q. The same chord force is
used for the compressed top chord and the tensioned bottom chord.
"""

import logging
import math
from typing import List, Tuple

from .codes import DEFAULT_TABLES, DesignTables
from .config import CarportConfig, EngineSettings, RoofMaterial
from .errors import WarningKind
from .model import LoadAnalysis, TrussGeometry

log = logging.getLogger(__name__)

# Terrain type B height factor k(z): (upper height bound m, k)
WIND_HEIGHT_BANDS = [
    (5.0, 0.5),
    (10.0, 0.65),
    (20.0, 0.85),
]
WIND_HEIGHT_FACTOR_ABOVE = 1.0


def snow_slope_factor(slope_deg: float) -> float:
    """
    Roof shape factor mu.

    1.0 up to 30°, linear down to 0 at 60°, 0 beyond.
    """
    if slope_deg > 60.0:
        return 0.0
    if slope_deg > 30.0:
        return (60.0 - slope_deg) / 30.0
    return 1.0


def wind_height_factor(height: float) -> float:
    for upper, k in WIND_HEIGHT_BANDS:
        if height <= upper:
            return k
    return WIND_HEIGHT_FACTOR_ABOVE


def snow_load(
    region_id: int,
    slope_deg: float,
    tables: DesignTables = DEFAULT_TABLES,
) -> float:
    """Design snow load (kPa) = Sg * mu(slope) * load_factor."""
    Sg = tables.snow_value(region_id)
    return Sg * snow_slope_factor(slope_deg) * tables.settings.load_factor


def wind_load(
    region_id: int,
    height: float,
    tables: DesignTables = DEFAULT_TABLES,
) -> float:
    """Design wind pressure (kPa) = W0 * k(height) * load_factor."""
    W0 = tables.wind_value(region_id)
    return W0 * wind_height_factor(height) * tables.settings.load_factor


def dead_load(material: RoofMaterial, tables: DesignTables = DEFAULT_TABLES) -> float:
    """Roofing self-weight (kPa)."""
    return tables.dead_load(material)


def effective_lever_arm(height: float, settings: EngineSettings) -> float:
    return max(settings.lever_arm_factor * height, settings.min_lever_arm)


def analyze_loads(
    geometry: TrussGeometry,
    config: CarportConfig,
    tables: DesignTables = DEFAULT_TABLES,
) -> Tuple[LoadAnalysis, List[str]]:
    """
    Loads and equivalent internal forces for one truss.

    Parameters:
    -----------
    geometry : TrussGeometry
        Output of generate_truss (span and height are read from it).
    config : CarportConfig
        Climate regions, slope, eave height and roofing material.
    tables : DesignTables
        Climate tables and engine constants.

    Returns:
    --------
    (LoadAnalysis, warnings)
        Utilization is left at zero here; the section selector fills it in.
    """
    settings = tables.settings
    warnings = []

    if geometry.span <= 0 or geometry.height <= 0:
        msg = (
            f"{WarningKind.INPUT_DEGENERATE.value}: degenerate truss "
            f"(span {geometry.span:.3f} m, height {geometry.height:.3f} m) reached load analysis."
        )
        log.warning(msg)
        warnings.append(msg)

    for label, region_id, table, fallback in (
        ('snow', config.snow_region, tables.snow, tables.snow_fallback),
        ('wind', config.wind_region, tables.wind, tables.wind_fallback),
    ):
        if region_id not in table:
            msg = (
                f"{WarningKind.INPUT_DEGENERATE.value}: {label} region {region_id} is not in "
                f"the climate table (regions {min(table)}-{max(table)}); "
                f"using {fallback:.2f} kPa."
            )
            log.warning(msg)
            warnings.append(msg)

    snow = snow_load(config.snow_region, config.roof_slope, tables)
    wind = wind_load(config.wind_region, config.height, tables)
    dead = dead_load(config.roof_material, tables)

    area_load = snow + dead
    q = area_load * settings.truss_spacing

    span = geometry.span
    M_max = q * span * span / 8.0
    Q_max = q * span / 2.0

    lever_arm = effective_lever_arm(geometry.height, settings)
    N_chord = M_max / lever_arm
    N_web = Q_max / math.sin(math.radians(settings.web_angle_deg))

    log.debug(
        "Loads: snow=%.3f wind=%.3f dead=%.3f kPa, q=%.3f kN/m, M=%.3f kN·m, N_chord=%.2f kN",
        snow, wind, dead, q, M_max, N_chord,
    )

    analysis = LoadAnalysis(
        snow_load=snow,
        wind_load=wind,
        dead_load=dead,
        total_area_load=area_load,
        total_linear_load=q,
        max_moment=M_max,
        max_shear=Q_max,
        lever_arm=lever_arm,
        max_axial_top=N_chord,
        max_axial_bottom=N_chord,
        max_axial_web=N_web,
    )
    return analysis, warnings
