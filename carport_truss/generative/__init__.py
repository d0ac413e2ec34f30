# carport_truss/generative - Parametric Truss Generators
"""
GENERATIVE: Parametric Truss Generators
=======================================

This package turns a roof choice into a planar truss: nodes, typed elements
and true member lengths.

Available archetypes:
---------------------
- flat, gable, single / triangular, arched, semiarched

USAGE:
------
    from carport_truss.generative import generate_truss, TrussParams

    params = TrussParams(span=6.0, roof_type='gable', slope_deg=20.0)
    geometry, warnings = generate_truss(params)
"""

from .archetypes import ARCHETYPES, RoofArchetype, archetype_for
from .truss import (
    TrussParams,
    compute_length_bins,
    generate_truss,
    panel_count_for,
    truss_height,
)

__all__ = [
    'ARCHETYPES',
    'RoofArchetype',
    'archetype_for',
    'TrussParams',
    'compute_length_bins',
    'generate_truss',
    'panel_count_for',
    'truss_height',
]
