# File: tests/test_selection.py
"""
Test section selection and the steel checks behind it.

KEY PROPERTIES:
---------------
- More required area never gives a lighter profile
- Nothing big enough: heaviest profile plus an "undersized" warning, no exception
- Posts come from the nominal menu and are checked, not re-sized
"""

import numpy as np
import pytest

from carport_truss.catalog import DEFAULT_CATALOG, Profile, ProfileCatalog
from carport_truss.checks import (
    check_steel_member,
    required_area_compression,
    required_area_tension,
    slenderness_check,
    utilization_percent,
)
from carport_truss.config import DEFAULT_SETTINGS, PillarSize
from carport_truss.model import LoadAnalysis
from carport_truss.selection import SectionSelector


@pytest.fixture
def selector():
    return SectionSelector(DEFAULT_CATALOG, DEFAULT_SETTINGS)


def test_required_areas():
    # 24 kN over Ry = 24 kN/cm²
    assert required_area_tension(24.0, 24.0) == pytest.approx(1.0)
    assert required_area_compression(24.0, 24.0, phi=0.5) == pytest.approx(2.0)
    assert required_area_tension(-24.0, 24.0) == pytest.approx(1.0)


def test_utilization_percent_clamped():
    assert utilization_percent(1.0, 4.0) == pytest.approx(25.0)
    assert utilization_percent(10.0, 4.0) == 100.0
    assert utilization_percent(1.0, 0.0) == 100.0


def test_check_steel_member():
    profile = DEFAULT_CATALOG.by_name("40x20x2")
    ok = check_steel_member(10.0, profile, compression=False)
    assert ok['status'] == 'PASS'
    assert ok['governing'] == 'tension'

    fail = check_steel_member(100.0, profile, compression=True)
    assert fail['status'] == 'FAIL'
    assert fail['utilization'] == 100.0


def test_slenderness_of_default_post():
    """80x80x3 at 2.5 m as a cantilever: 2 * 250 / 3.13 ≈ 160 > 150."""
    post = DEFAULT_CATALOG.by_name("80x80x3")
    slenderness, status = slenderness_check(post, 2.5)
    assert slenderness == pytest.approx(2 * 250 / 3.13)
    assert status == 'WARNING'

    _, status = slenderness_check(post, 2.0)
    assert status == 'PASS'


def test_selection_is_monotonic(selector):
    weights = []
    for area in np.linspace(0.0, 18.0, 73):
        profile, _ = selector.select(float(area), min_h=60)
        weights.append(profile.linear_weight)
        assert profile.area >= area
    assert weights == sorted(weights)


def test_selection_is_monotonic_synthetic_catalog():
    """Same property on a catalog handed over out of order."""
    catalog = ProfileCatalog([
        Profile("C", 60, 60, 3, 6.0, 1, 1, 1, 1, 1, 1, 5.0),
        Profile("A", 60, 60, 2, 2.0, 1, 1, 1, 1, 1, 1, 2.0),
        Profile("B", 60, 60, 2, 4.0, 1, 1, 1, 1, 1, 1, 3.5),
    ])
    sel = SectionSelector(catalog)
    picks = [sel.select(a)[0].name for a in (0.5, 2.0, 2.5, 4.0, 5.0, 6.0)]
    assert picks == ["A", "A", "B", "B", "C", "C"]


def test_undersized_falls_back_to_heaviest(selector):
    profile, warnings = selector.select(500.0, label='top chord')
    assert profile is DEFAULT_CATALOG.heaviest
    assert len(warnings) == 1
    assert "undersized" in warnings[0]
    assert "top chord" in warnings[0]


def test_chord_minimum_depth(selector):
    top, A_req, warnings = selector.select_top_chord(1.0)
    assert top.nominal_h >= 60
    assert A_req == pytest.approx(1.0 / 12.0)
    assert warnings == []

    bottom, _, _ = selector.select_bottom_chord(1.0)
    assert bottom.nominal_h >= 60


def test_web_and_purlin_minimums(selector):
    web, _, _ = selector.select_web(0.0)
    assert web.name == "40x20x2"
    assert selector.select_purlin().name == "40x20x2"


@pytest.mark.parametrize("size, expected", [
    (PillarSize.SIZE_60, "60x60x3"),
    (PillarSize.SIZE_80, "80x80x3"),
    (PillarSize.SIZE_100, "100x100x4"),
    ("80x80", "80x80x3"),
])
def test_pillar_menu(selector, size, expected):
    profile, check, _ = selector.select_pillar(size, 10.0, 2.0)
    assert profile.name == expected
    assert profile.nominal_h == profile.nominal_b
    assert check['status'] == 'PASS'


def test_slender_post_warns(selector):
    profile, check, warnings = selector.select_pillar(PillarSize.SIZE_80, 10.0, 2.5)
    assert profile.name == "80x80x3"
    assert check['slenderness'] > DEFAULT_SETTINGS.slenderness_limit
    assert any(w.startswith("StabilityExceeded") for w in warnings)


def test_overloaded_post_warns_without_resizing(selector):
    profile, check, warnings = selector.select_pillar(PillarSize.SIZE_60, 500.0, 2.0)
    assert profile.name == "60x60x3"
    assert check['status'] == 'FAIL'
    assert any("post section undersized" in w for w in warnings)


def test_select_sections_for_gable_6m(selector):
    """Chord force ≈ 24.3 kN, web force ≈ 22.5 kN (see test_loads)."""
    loads = LoadAnalysis(
        max_axial_top=24.27,
        max_axial_bottom=24.27,
        max_axial_web=22.49,
        max_shear=15.9,
    )
    sections, utilization, warnings = selector.select_sections(loads, PillarSize.SIZE_100, 2.5)

    assert sections.top_chord.name == "60x40x2"
    assert sections.bottom_chord.name == "60x40x2"
    assert sections.web.name == "40x20x2"
    assert sections.pillar.name == "100x100x4"
    assert sections.purlin.name == "40x20x2"
    assert warnings == []

    for value in (utilization.top, utilization.bottom, utilization.web, utilization.pillar):
        assert 0.0 <= value <= 100.0
    assert utilization.top > utilization.bottom


def test_huge_load_never_raises(selector):
    loads = LoadAnalysis(max_axial_top=1e6, max_axial_bottom=1e6, max_axial_web=1e6, max_shear=1e6)
    sections, utilization, warnings = selector.select_sections(loads, PillarSize.SIZE_80, 2.5)

    assert sections.top_chord is DEFAULT_CATALOG.heaviest
    assert utilization.top == 100.0
    assert sum("undersized" in w for w in warnings) >= 3
