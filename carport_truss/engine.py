# carport_truss/engine.py
"""
ENGINE: configuration in, calculation result out
================================================

    CarportConfig -> generate_truss -> analyze_loads -> SectionSelector
                  -> build_bom -> {CalculationResult, DXF drawing}

calculate_truss() is a pure function of (config, tables): no I/O, no state
kept between calls, identical input gives an identical result.

ERROR POLICY:
-------------
- Degenerate but repairable input (non-positive or oversized dimensions,
  out-of-range slope, unknown climate region, height below the floor) is
  clamped or replaced by a fallback and reported as a warning.
- Undersized or slender sections are reported as warnings.
- Non-finite numbers or unknown tags give success=False. So does any other
  exception, which is logged. A failed result still carries renderable
  default geometry and sections, never None.
"""

import dataclasses
import logging
import math
from typing import List, Tuple

from .codes import DEFAULT_TABLES, DesignTables
from .config import (
    MAX_HEIGHT,
    MAX_LENGTH,
    MAX_SLOPE,
    MAX_WIDTH,
    MIN_HEIGHT,
    MIN_LENGTH,
    MIN_SLOPE,
    MIN_WIDTH,
    CarportConfig,
    PillarSize,
    RoofMaterial,
    RoofType,
)
from .errors import InvalidInputError, WarningKind
from .export import geometry_to_dxf
from .generative import TrussParams, generate_truss
from .generative.archetypes import archetype_for
from .loads import analyze_loads
from .bom import build_bom
from .model import BillOfMaterials, CalculationResult, ElementSections, LoadAnalysis
from .selection import SectionSelector

log = logging.getLogger(__name__)

# (field, value used when not positive, upper clamp), metres
DIMENSION_BOUNDS = [
    ('width', MIN_WIDTH, MAX_WIDTH),
    ('length', MIN_LENGTH, MAX_LENGTH),
    ('height', MIN_HEIGHT, MAX_HEIGHT),
]


def _coerce_enum(enum_cls, value, label):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidInputError(f"Unknown {label}: {value!r}")


def sanitize_config(config: CarportConfig) -> Tuple[CarportConfig, List[str]]:
    """
    Validate and clamp a configuration.

    Raises InvalidInputError for NaN/inf numbers and unknown tags. Returns a
    new config (the input is not modified) and the clamp warnings.
    """
    for name, value in config.numeric_fields():
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise InvalidInputError(f"{name} is not a number: {value!r}")
        if not math.isfinite(number):
            raise InvalidInputError(f"{name} must be finite, got {value!r}")

    roof_type = _coerce_enum(RoofType, config.roof_type, 'roof type')
    archetype_for(roof_type)
    roof_material = _coerce_enum(RoofMaterial, config.roof_material, 'roof material')
    pillar_size = _coerce_enum(PillarSize, config.pillar_size, 'pillar size')

    warnings = []
    changes = {}
    for name, minimum, maximum in DIMENSION_BOUNDS:
        value = float(getattr(config, name))
        if value <= 0:
            msg = (
                f"{WarningKind.INPUT_DEGENERATE.value}: {name} {value:.2f} m is not positive; "
                f"using {minimum:.2f} m."
            )
            log.warning(msg)
            warnings.append(msg)
            value = minimum
        elif value > maximum:
            msg = (
                f"{WarningKind.INPUT_DEGENERATE.value}: {name} {value:.2f} m exceeds the "
                f"{maximum:.2f} m maximum; using {maximum:.2f} m."
            )
            log.warning(msg)
            warnings.append(msg)
            value = maximum
        changes[name] = value

    slope = float(config.roof_slope)
    clamped = min(max(slope, MIN_SLOPE), MAX_SLOPE)
    if clamped != slope:
        msg = (
            f"{WarningKind.INPUT_DEGENERATE.value}: roof slope {slope:.1f}° outside "
            f"[{MIN_SLOPE:.0f}°, {MAX_SLOPE:.0f}°]; using {clamped:.1f}°."
        )
        log.warning(msg)
        warnings.append(msg)

    sanitized = dataclasses.replace(
        config,
        roof_slope=clamped,
        roof_type=roof_type,
        roof_material=roof_material,
        pillar_size=pillar_size,
        **changes,
    )
    return sanitized, warnings


def _run_pipeline(config: CarportConfig, tables: DesignTables) -> CalculationResult:
    settings = tables.settings
    config, warnings = sanitize_config(config)

    params = TrussParams(span=config.width, roof_type=config.roof_type, slope_deg=config.roof_slope)
    geometry, w = generate_truss(params, settings)
    warnings.extend(w)

    loads, w = analyze_loads(geometry, config, tables)
    warnings.extend(w)

    selector = SectionSelector(tables.catalog, settings)
    sections, utilization, w = selector.select_sections(loads, config.pillar_size, config.height)
    warnings.extend(w)
    loads = dataclasses.replace(loads, utilization=utilization)

    bom = build_bom(geometry, sections, config.length, config.height, settings)
    dxf = geometry_to_dxf(geometry)

    log.info(
        "Calculated %s carport %.2f x %.2f m: %.1f kg, %.0f RUB, %d warning(s)",
        config.roof_type.value, config.width, config.length,
        bom.total_weight, bom.total_cost, len(warnings),
    )
    return CalculationResult(
        success=True,
        geometry=geometry,
        sections=sections,
        loads=loads,
        bom=bom,
        dxf_content=dxf,
        warnings=warnings,
    )


def failure_result(message: str, tables: DesignTables = DEFAULT_TABLES) -> CalculationResult:
    """
    A success=False result that downstream consumers can still render:
    a flat truss at the minimum width and the lightest catalog profile
    for every role.
    """
    geometry, _ = generate_truss(
        TrussParams(span=MIN_WIDTH, roof_type=RoofType.FLAT, slope_deg=0.0),
        tables.settings,
    )
    lightest = tables.catalog.lightest
    sections = ElementSections(
        top_chord=lightest,
        bottom_chord=lightest,
        web=lightest,
        pillar=lightest,
        purlin=lightest,
    )
    return CalculationResult(
        success=False,
        geometry=geometry,
        sections=sections,
        loads=LoadAnalysis(),
        bom=BillOfMaterials(),
        dxf_content=geometry_to_dxf(geometry),
        warnings=[message],
    )


def calculate_truss(
    config: CarportConfig,
    tables: DesignTables = DEFAULT_TABLES,
) -> CalculationResult:
    """
    Run the full truss calculation for one configuration.

    Parameters:
    -----------
    config : CarportConfig
        Customer configuration. Not modified.
    tables : DesignTables
        Profile catalog, climate tables and engine constants.

    Returns:
    --------
    CalculationResult
        success=True with warnings for any clamped or undersized input, or
        success=False with default geometry and the reason as the warning.
    """
    try:
        return _run_pipeline(config, tables)
    except InvalidInputError as e:
        log.warning("Invalid carport configuration: %s", e)
        return failure_result(str(e), tables)
    except Exception as e:
        log.exception("Truss calculation failed")
        return failure_result(f"Calculation failed: {e}", tables)
