# File: tests/test_bom.py
"""
Test the bill of materials: weights follow member lengths and profile
weights, post counts follow the carport length.
"""

import math

import pytest

from carport_truss.bom import build_bom, pillar_count, truss_count
from carport_truss.catalog import DEFAULT_CATALOG
from carport_truss.config import CarportConfig, PillarSize, RoofType
from carport_truss.generative import TrussParams, generate_truss
from carport_truss.loads import analyze_loads
from carport_truss.model import ElementRole
from carport_truss.selection import SectionSelector


def _pipeline(span=6.0, roof_type=RoofType.GABLE, slope=20.0, length=6.0, height=2.5):
    geometry, _ = generate_truss(TrussParams(span=span, roof_type=roof_type, slope_deg=slope))
    config = CarportConfig(width=span, length=length, height=height, roof_type=roof_type, roof_slope=slope)
    loads, _ = analyze_loads(geometry, config)
    sections, _, _ = SectionSelector(DEFAULT_CATALOG).select_sections(
        loads, PillarSize.SIZE_80, height,
    )
    return geometry, sections


@pytest.mark.parametrize("length, expected", [
    (3.0, 6),
    (5.0, 6),
    (6.0, 8),
    (7.5, 8),
    (12.0, 12),
])
def test_pillar_count(length, expected):
    assert pillar_count(length) == expected


def test_truss_count():
    assert truss_count(6.0) == 4
    assert truss_count(5.0) == 3


def test_item_order_and_names():
    geometry, sections = _pipeline()
    bom = build_bom(geometry, sections, length=6.0, pillar_height=2.5)

    assert [item.name for item in bom.items] == ["Top chord", "Bottom chord", "Web members", "Posts"]
    assert bom.items[0].profile_name == sections.top_chord.name
    assert bom.items[3].quantity == 8
    assert bom.items[3].representative_length == 2.5
    assert bom.truss_count == 4


@pytest.mark.parametrize("roof", list(RoofType))
def test_total_weight_matches_members(roof):
    geometry, sections = _pipeline(span=7.3, roof_type=roof, slope=25.0, length=9.0, height=3.0)
    bom = build_bom(geometry, sections, length=9.0, pillar_height=3.0)

    expected = sum(
        geometry.length_of(role) * sections.for_role(role).linear_weight
        for role in (ElementRole.TOP_CHORD, ElementRole.BOTTOM_CHORD, ElementRole.WEB)
    )
    expected += 3.0 * pillar_count(9.0) * sections.pillar.linear_weight

    assert bom.total_weight == pytest.approx(expected)
    assert bom.total_weight == pytest.approx(sum(item.weight for item in bom.items))
    assert bom.total_cost == math.ceil(bom.total_weight * 120.0)


def test_bom_is_reproducible():
    geometry, sections = _pipeline()
    a = build_bom(geometry, sections, length=6.0, pillar_height=2.5)
    b = build_bom(geometry, sections, length=6.0, pillar_height=2.5)

    assert a == b
    assert a.total_weight == b.total_weight


def test_longer_carport_needs_more_posts_not_heavier_truss():
    geometry, sections = _pipeline()
    short = build_bom(geometry, sections, length=6.0, pillar_height=2.5)
    long = build_bom(geometry, sections, length=12.0, pillar_height=2.5)

    assert long.items[0].weight == short.items[0].weight
    assert long.items[3].quantity > short.items[3].quantity
    assert long.total_weight > short.total_weight


def test_to_dataframe():
    geometry, sections = _pipeline()
    df = build_bom(geometry, sections, length=6.0, pillar_height=2.5).to_dataframe()

    assert list(df.columns) == ['name', 'profile_name', 'representative_length', 'quantity', 'weight']
    assert len(df) == 4
    assert df['quantity'].tolist() == [1, 1, 1, 8]
