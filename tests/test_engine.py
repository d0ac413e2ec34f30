# File: tests/test_engine.py
"""
Test calculate_truss() end to end: success path, clamping, failure results.

ERROR POLICY UNDER TEST:
------------------------
- Repairable input is clamped and reported in warnings (success=True)
- NaN / inf / unknown tags give success=False with renderable defaults
- Nothing escapes calculate_truss() as an exception
"""

import dataclasses
import math

import pytest

from carport_truss import (
    DEFAULT_SETTINGS,
    CarportConfig,
    DesignTables,
    InvalidInputError,
    RoofType,
    calculate_truss,
    failure_result,
    sanitize_config,
)
from carport_truss.export import count_line_entities


def _assert_renderable(result):
    """A result the UI can draw and list, whatever its success flag."""
    geometry = result.geometry
    assert len(geometry.nodes) == 2 * (geometry.panel_count + 1)
    assert len(geometry.elements) == 4 * geometry.panel_count - 1
    assert geometry.height >= DEFAULT_SETTINGS.min_truss_height
    assert result.sections.top_chord is not None
    assert count_line_entities(result.dxf_content) == len(geometry.elements)


@pytest.mark.parametrize("roof", list(RoofType))
def test_every_roof_type_calculates(roof):
    result = calculate_truss(CarportConfig(width=6.0, roof_type=roof, pillar_size='100x100'))

    assert result.success
    _assert_renderable(result)
    assert result.bom.total_weight > 0
    assert result.bom.total_cost > 0
    assert result.loads.utilization.top > 0


def test_gable_6m_scenario():
    result = calculate_truss(CarportConfig(width=6.0, roof_type=RoofType.GABLE, roof_slope=20.0))

    assert result.success
    assert result.geometry.height == pytest.approx(1.09, abs=0.005)
    assert result.geometry.panel_count == 8
    assert result.sections.top_chord.name == "60x40x2"
    # Default 80x80x3 post at 2.5 m is too slender
    assert any(w.startswith("StabilityExceeded") for w in result.warnings)


def test_short_span_height_floor_warning():
    result = calculate_truss(CarportConfig(width=3.0, roof_type=RoofType.GABLE, roof_slope=10.0))

    assert result.success
    assert result.geometry.height == 0.4
    assert any("height" in w and "0.40" in w for w in result.warnings)


def test_string_tags_accepted():
    config = CarportConfig(roof_type='semiarched', roof_material='metaltile', pillar_size='60x60')
    result = calculate_truss(config)

    assert result.success
    assert result.sections.pillar.name == "60x60x3"
    assert result.loads.dead_load == 0.05


@pytest.mark.parametrize("field", ['width', 'length', 'height', 'roof_slope'])
@pytest.mark.parametrize("bad", [float('nan'), float('inf'), float('-inf')])
def test_non_finite_input_fails_gracefully(field, bad):
    result = calculate_truss(CarportConfig(**{field: bad}))

    assert not result.success
    assert len(result.warnings) == 1
    assert field in result.warnings[0]
    _assert_renderable(result)
    assert result.bom.items == []


def test_non_numeric_input_fails_gracefully():
    result = calculate_truss(CarportConfig(width='wide'))
    assert not result.success
    assert "width" in result.warnings[0]


@pytest.mark.parametrize("field, value", [
    ('roof_type', 'dome'),
    ('roof_material', 'straw'),
    ('pillar_size', '120x120'),
])
def test_unknown_tag_fails_gracefully(field, value):
    result = calculate_truss(CarportConfig(**{field: value}))

    assert not result.success
    assert "Unknown" in result.warnings[0]
    _assert_renderable(result)


def test_non_positive_width_clamped():
    result = calculate_truss(CarportConfig(width=-1.0))

    assert result.success
    assert result.geometry.span == 3.0
    assert any(w.startswith("InputDegenerate") and "width" in w for w in result.warnings)


def test_zero_height_and_length_clamped():
    result = calculate_truss(CarportConfig(height=0.0, length=0.0))

    assert result.success
    assert result.bom.items[3].representative_length == 2.0
    assert sum("not positive" in w for w in result.warnings) == 2


def test_slope_clamped():
    config, warnings = sanitize_config(CarportConfig(roof_slope=89.0))
    assert config.roof_slope == 75.0
    assert len(warnings) == 1

    config, warnings = sanitize_config(CarportConfig(roof_slope=-5.0))
    assert config.roof_slope == 0.0
    assert len(warnings) == 1


def test_sanitize_raises_for_nan():
    with pytest.raises(InvalidInputError):
        sanitize_config(CarportConfig(width=math.nan))


def test_input_not_modified():
    config = CarportConfig(width=-2.0, roof_slope=80.0, roof_type='flat')
    before = dataclasses.replace(config)
    calculate_truss(config)
    assert config == before
    assert config.roof_type == 'flat'


def test_calculation_is_idempotent():
    config = CarportConfig(width=7.3, length=9.0, roof_type=RoofType.ARCHED, snow_region=5)
    first = calculate_truss(config)
    second = calculate_truss(config)

    assert first == second
    assert first.dxf_content == second.dxf_content
    assert first.bom.total_weight == second.bom.total_weight


def test_unexpected_error_becomes_failure_result():
    """A broken table value surfaces as success=False, not an exception."""
    tables = DesignTables(snow={3: 'heavy'})
    result = calculate_truss(CarportConfig(), tables)

    assert not result.success
    assert result.warnings[0].startswith("Calculation failed")
    _assert_renderable(result)


def test_failure_result_defaults():
    result = failure_result("boom")

    assert not result.success
    assert result.warnings == ["boom"]
    assert result.geometry.span == 3.0
    assert result.sections.pillar.name == "40x20x2"
    assert result.bom.total_weight == 0.0
    _assert_renderable(result)


@pytest.mark.parametrize("field, value, maximum", [
    ('width', 2e5, 10.0),
    ('length', 50.0, 12.0),
    ('height', 9.0, 4.0),
])
def test_oversized_dimension_clamped(field, value, maximum):
    config, warnings = sanitize_config(CarportConfig(**{field: value}))

    assert getattr(config, field) == maximum
    assert len(warnings) == 1
    assert warnings[0].startswith("InputDegenerate")
    assert field in warnings[0] and "maximum" in warnings[0]


def test_huge_width_stays_bounded():
    """A finite but absurd span is clamped, so the truss stays product-sized."""
    result = calculate_truss(CarportConfig(width=2e5))

    assert result.success
    assert result.geometry.span == 10.0
    assert result.geometry.panel_count == 14
    assert len(result.geometry.elements) == 55
    assert any("width" in w and "maximum" in w for w in result.warnings)


def test_oversized_length_and_height_in_bom():
    result = calculate_truss(CarportConfig(length=50.0, height=9.0, pillar_size='100x100'))

    assert result.success
    assert result.bom.truss_count == 6
    assert result.bom.items[3].quantity == 12
    assert result.bom.items[3].representative_length == 4.0


@pytest.mark.parametrize("field, region", [('snow_region', 8), ('wind_region', 7)])
def test_unknown_climate_region_warns(field, region):
    result = calculate_truss(CarportConfig(**{field: region}))

    assert result.success
    label = field.split('_')[0]
    assert any(f"{label} region {region}" in w for w in result.warnings)
