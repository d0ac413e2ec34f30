# carport_truss/model.py
"""
MODEL DEFINITIONS: truss geometry, loads, sections and results
==============================================================

PURPOSE:
--------
Plain data records passed between the pipeline stages:

    CarportConfig -> TrussGeometry -> LoadAnalysis -> ElementSections
                  -> BillOfMaterials -> CalculationResult

Every record is created fresh for one calculation and never mutated by a
later stage. Geometry records are frozen.

COORDINATES:
------------
Nodes live in the truss plane: x along the span (m), y up (m), origin at the
left end of the bottom chord.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

import pandas as pd

from .catalog import Profile


class ElementRole(str, Enum):
    TOP_CHORD = 'topChord'
    BOTTOM_CHORD = 'bottomChord'
    WEB = 'web'
    PILLAR = 'pillar'


@dataclass(frozen=True)
class Node:
    """A truss joint in the truss plane (m)."""
    x: float
    y: float


@dataclass(frozen=True)
class Element:
    """
    A straight member between two nodes.

    length is the true Euclidean distance between the end nodes, computed
    once when the element is created (see make_element).
    """
    start: int
    end: int
    role: ElementRole
    length: float


def make_element(nodes: List[Node], start: int, end: int, role: ElementRole) -> Element:
    a, b = nodes[start], nodes[end]
    return Element(start=start, end=end, role=role, length=math.hypot(b.x - a.x, b.y - a.y))


@dataclass(frozen=True)
class TrussGeometry:
    """
    Node/element graph of one planar truss.

    Node layout: bottom chord nodes 0..panel_count, then top chord nodes
    panel_count+1 .. 2*panel_count+1 (same x positions).
    """
    span: float
    height: float
    panel_count: int
    panel_length: float
    nodes: Tuple[Node, ...]
    elements: Tuple[Element, ...]

    @property
    def top_offset(self) -> int:
        return self.panel_count + 1

    def elements_with_role(self, role: ElementRole) -> List[Element]:
        return [e for e in self.elements if e.role == role]

    def length_of(self, role: ElementRole) -> float:
        return sum(e.length for e in self.elements if e.role == role)

    def lengths_by_role(self) -> Dict[ElementRole, float]:
        return {role: self.length_of(role) for role in ElementRole}

    def top_chord_profile(self) -> List[Tuple[float, float]]:
        """Roofline as (x, y) points, left to right."""
        return [(n.x, n.y) for n in self.nodes[self.top_offset:]]

    def validate(self, min_height: float = 0.0) -> List[str]:
        """Return a list of violated invariants (empty when the graph is sound)."""
        problems = []
        n = len(self.nodes)
        for i, e in enumerate(self.elements):
            if not (0 <= e.start < n and 0 <= e.end < n):
                problems.append(f"element {i} references a missing node ({e.start}, {e.end})")
        if self.panel_count < 4:
            problems.append(f"panel_count {self.panel_count} < 4")
        if self.height < min_height:
            problems.append(f"height {self.height:.3f} m below floor {min_height:.3f} m")
        return problems


@dataclass(frozen=True)
class Utilization:
    """Required / provided capacity per role, percent in [0, 100]."""
    top: float = 0.0
    bottom: float = 0.0
    web: float = 0.0
    pillar: float = 0.0


@dataclass
class LoadAnalysis:
    """
    Loads and equivalent internal forces of one truss.

    Area loads in kPa, line load in kN/m, moment in kN·m, forces in kN.
    max_axial_top and max_axial_bottom carry the same chord force.
    """
    snow_load: float = 0.0
    wind_load: float = 0.0
    dead_load: float = 0.0
    total_area_load: float = 0.0
    total_linear_load: float = 0.0
    max_moment: float = 0.0
    max_shear: float = 0.0
    lever_arm: float = 0.0
    max_axial_top: float = 0.0
    max_axial_bottom: float = 0.0
    max_axial_web: float = 0.0
    utilization: Utilization = field(default_factory=Utilization)


@dataclass(frozen=True)
class ElementSections:
    """Chosen profile per member role."""
    top_chord: Profile
    bottom_chord: Profile
    web: Profile
    pillar: Profile
    purlin: Profile

    def for_role(self, role: ElementRole) -> Profile:
        return {
            ElementRole.TOP_CHORD: self.top_chord,
            ElementRole.BOTTOM_CHORD: self.bottom_chord,
            ElementRole.WEB: self.web,
            ElementRole.PILLAR: self.pillar,
        }[role]


@dataclass(frozen=True)
class BOMItem:
    """One line of the bill of materials. weight is the line total (kg)."""
    name: str
    profile_name: str
    representative_length: float
    quantity: int
    weight: float


@dataclass
class BillOfMaterials:
    items: List[BOMItem] = field(default_factory=list)
    total_weight: float = 0.0
    total_cost: float = 0.0
    truss_count: int = 0

    def to_dataframe(self) -> pd.DataFrame:
        """Line items as a pandas DataFrame (one row per item)."""
        columns = ['name', 'profile_name', 'representative_length', 'quantity', 'weight']
        rows = [
            {
                'name': item.name,
                'profile_name': item.profile_name,
                'representative_length': item.representative_length,
                'quantity': item.quantity,
                'weight': item.weight,
            }
            for item in self.items
        ]
        return pd.DataFrame(rows, columns=columns)


@dataclass
class CalculationResult:
    """
    Everything the rendering and report collaborators consume.

    success is False only for invalid numeric input or an unexpected
    failure; geometry and sections are still renderable in that case.
    """
    success: bool
    geometry: TrussGeometry
    sections: ElementSections
    loads: LoadAnalysis
    bom: BillOfMaterials
    dxf_content: str
    warnings: List[str] = field(default_factory=list)
