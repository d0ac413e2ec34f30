# carport_truss/generative/truss.py
r"""
TRUSS GENERATOR: Parametric Planar Roof Trusses
===============================================

PURPOSE:
--------
Turn (span, roof type, slope) into the node/element graph of one carport
truss. Every later stage (loads, sections, bill of materials, drawing) reads
this graph; none of them changes it.

LAYOUT:
-------
    top chord     P+1 --- P+2 --- P+3 --- ... --- 2P+1
                   |    /  |  \    |    /          |
    bottom chord   0 ----- 1 ----- 2 ----- ... ---- P

- P = panel_count = max(4, ceil(span / 1.5) * 2), always even
- bottom chord: straight, y = 0, one node per panel boundary
- top chord: same x positions, y from the roof archetype
- verticals at the interior boundaries 1..P-1
- one diagonal per panel, direction alternating panel by panel
  (even panel: bottom i -> top i+1, odd panel: top i -> bottom i+1)

Curved roofs are discretised here, so every element is a straight segment.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from ..config import DEFAULT_SETTINGS, EngineSettings, RoofType
from ..errors import WarningKind
from ..model import Element, ElementRole, Node, TrussGeometry, make_element
from .archetypes import archetype_for

log = logging.getLogger(__name__)


@dataclass
class TrussParams:
    """
    Parameters defining one truss.

    span : float
        Clear span between posts (m). Must be positive.
    roof_type : RoofType
        Roof archetype tag.
    slope_deg : float
        Roof slope in degrees (used by gable and single-slope roofs).
    """
    span: float = 6.0
    roof_type: RoofType = RoofType.GABLE
    slope_deg: float = 20.0


def panel_count_for(span: float, settings: EngineSettings = DEFAULT_SETTINGS) -> int:
    """max(4, ceil(span / 1.5) * 2): even, so the lattice is symmetric."""
    raw = math.ceil(span / settings.target_panel_length) * 2
    return max(settings.min_panel_count, raw)


def truss_height(
    span: float,
    roof_type: RoofType,
    slope_deg: float,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Tuple[float, List[str]]:
    """Archetype height, clamped to the height floor with a warning."""
    warnings = []
    raw = archetype_for(roof_type).truss_height_for(span, slope_deg, settings)
    floor = settings.min_truss_height
    if not raw >= floor:
        msg = (
            f"{WarningKind.INPUT_DEGENERATE.value}: truss height {raw:.3f} m is below "
            f"the {floor:.2f} m minimum; "
            f"height clamped to {floor:.2f} m."
        )
        log.warning(msg)
        warnings.append(msg)
        return floor, warnings
    return raw, warnings


def _generate_nodes(
    params: TrussParams,
    height: float,
    panel_count: int,
    settings: EngineSettings,
) -> List[Node]:
    archetype = archetype_for(params.roof_type)
    xs = np.linspace(0.0, params.span, panel_count + 1)

    nodes = [Node(x=float(x), y=0.0) for x in xs]
    for x in xs:
        y = archetype.height_at(float(x), params.span, height, params.slope_deg, settings)
        nodes.append(Node(x=float(x), y=float(y)))
    return nodes


def _generate_elements(nodes: List[Node], panel_count: int) -> List[Element]:
    top = panel_count + 1
    elements = []

    # Chords
    for i in range(panel_count):
        elements.append(make_element(nodes, i, i + 1, ElementRole.BOTTOM_CHORD))
        elements.append(make_element(nodes, top + i, top + i + 1, ElementRole.TOP_CHORD))

    # Verticals (end boundaries are closed by the chords)
    for i in range(1, panel_count):
        elements.append(make_element(nodes, i, top + i, ElementRole.WEB))

    # Diagonals, alternating
    for i in range(panel_count):
        if i % 2 == 0:
            elements.append(make_element(nodes, i, top + i + 1, ElementRole.WEB))
        else:
            elements.append(make_element(nodes, top + i, i + 1, ElementRole.WEB))

    return elements


def generate_truss(
    params: TrussParams,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Tuple[TrussGeometry, List[str]]:
    """
    Generate the truss graph.

    Returns:
    --------
    (TrussGeometry, warnings)
        warnings holds the height-floor message when the archetype formula
        came out below settings.min_truss_height.
    """
    if not params.span > 0:
        raise ValueError(f"span must be positive, got {params.span}")

    height, warnings = truss_height(params.span, params.roof_type, params.slope_deg, settings)
    panel_count = panel_count_for(params.span, settings)
    panel_length = params.span / panel_count

    nodes = _generate_nodes(params, height, panel_count, settings)
    elements = _generate_elements(nodes, panel_count)

    geometry = TrussGeometry(
        span=params.span,
        height=height,
        panel_count=panel_count,
        panel_length=panel_length,
        nodes=tuple(nodes),
        elements=tuple(elements),
    )
    log.debug(
        "Generated %s truss: span=%.2f m height=%.3f m panels=%d elements=%d",
        RoofType(params.roof_type).value, params.span, height, panel_count, len(elements),
    )
    return geometry, warnings


def compute_length_bins(
    geometry: TrussGeometry,
    tolerance: float = 0.005,  # 5mm tolerance
) -> Dict[str, List[int]]:
    """
    Group elements into cut-length bins for fabrication.

    Elements within `tolerance` of a bin's reference length share that bin.
    Elements are visited shortest first, so each bin is named after its
    shortest member.

    Returns:
    --------
    Dict mapping bin name ("L1 (750mm)") to element indices
    """
    lengths = sorted(enumerate(e.length for e in geometry.elements), key=lambda x: x[1])
    bins = []
    for index, length in lengths:
        for ref_length, members in bins:
            if abs(length - ref_length) <= tolerance:
                members.append(index)
                break
        else:
            bins.append((length, [index]))

    return {
        f"L{i + 1} ({ref_length * 1000:.0f}mm)": members
        for i, (ref_length, members) in enumerate(bins)
    }
