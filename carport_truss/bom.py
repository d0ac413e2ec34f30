# carport_truss/bom.py
"""
Bill of materials: member lengths times profile weights, plus the posts.

Line items, in order:

    1. top chord      sum of top chord lengths      x top chord kg/m
    2. bottom chord   sum of bottom chord lengths   x bottom chord kg/m
    3. web            sum of web lengths            x web kg/m
    4. posts          post height x post count      x post kg/m

post count = (ceil(length / post_spacing) + 1) * 2, i.e. two rows of posts.
Truss lines are per truss (quantity 1). The result is a pure function of
(geometry, sections, carport length, eave height).
"""

import logging
import math
from typing import List

from .config import DEFAULT_SETTINGS, EngineSettings
from .model import BillOfMaterials, BOMItem, ElementRole, ElementSections, TrussGeometry

log = logging.getLogger(__name__)

ROLE_ITEM_NAMES = [
    (ElementRole.TOP_CHORD, "Top chord"),
    (ElementRole.BOTTOM_CHORD, "Bottom chord"),
    (ElementRole.WEB, "Web members"),
]
PILLAR_ITEM_NAME = "Posts"


def pillar_count(length: float, settings: EngineSettings = DEFAULT_SETTINGS) -> int:
    """Posts in two rows, one every post_spacing along the carport, ends included."""
    return (math.ceil(length / settings.post_spacing) + 1) * 2


def truss_count(length: float, settings: EngineSettings = DEFAULT_SETTINGS) -> int:
    """Trusses along the carport, one every truss_spacing, ends included."""
    return math.ceil(length / settings.truss_spacing) + 1


def build_bom(
    geometry: TrussGeometry,
    sections: ElementSections,
    length: float,
    pillar_height: float,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> BillOfMaterials:
    """
    Build the bill of materials for one truss and the carport's posts.

    Parameters:
    -----------
    geometry : TrussGeometry
        Element lengths are read from here (true lengths, never re-derived).
    sections : ElementSections
        One profile per role; linear_weight in kg/m.
    length : float
        Carport length (m), perpendicular to the truss plane.
    pillar_height : float
        Post height (m).
    settings : EngineSettings
        post_spacing, truss_spacing and metal_price.

    Returns:
    --------
    BillOfMaterials with items in fixed order, total_weight (kg) and
    total_cost (RUB, rounded up).
    """
    items: List[BOMItem] = []
    role_lengths = geometry.lengths_by_role()

    for role, name in ROLE_ITEM_NAMES:
        profile = sections.for_role(role)
        role_length = role_lengths[role]
        items.append(BOMItem(
            name=name,
            profile_name=profile.name,
            representative_length=role_length,
            quantity=1,
            weight=role_length * profile.linear_weight,
        ))

    n_pillars = pillar_count(length, settings)
    items.append(BOMItem(
        name=PILLAR_ITEM_NAME,
        profile_name=sections.pillar.name,
        representative_length=pillar_height,
        quantity=n_pillars,
        weight=pillar_height * n_pillars * sections.pillar.linear_weight,
    ))

    total_weight = 0.0
    for item in items:
        total_weight += item.weight
    total_cost = float(math.ceil(total_weight * settings.metal_price))

    log.debug("BOM: %d items, %.2f kg, %.0f RUB", len(items), total_weight, total_cost)
    return BillOfMaterials(
        items=items,
        total_weight=total_weight,
        total_cost=total_cost,
        truss_count=truss_count(length, settings),
    )
