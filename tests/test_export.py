# File: tests/test_export.py
"""
Test the export module: DXF drawing, specification sheet, cut list, report.
"""

import io
import zipfile

from carport_truss import CarportConfig, RoofType, calculate_truss
from carport_truss.export import (
    PACKAGE_FILES,
    ExportService,
    count_line_entities,
    generate_dxf,
    geometry_to_dxf,
)
from carport_truss.generative import TrussParams, compute_length_bins, generate_truss
from carport_truss.model import Element, ElementRole, Node


def test_dxf_single_line():
    nodes = [Node(0.0, 0.0), Node(1.5, 0.25)]
    elements = [Element(0, 1, ElementRole.BOTTOM_CHORD, 1.52)]
    dxf = generate_dxf(nodes, elements)
    lines = dxf.splitlines()

    assert lines[:4] == ['0', 'SECTION', '2', 'HEADER']
    assert '$ACADVER' in lines and 'AC1009' in lines
    assert lines[-2:] == ['0', 'EOF']
    assert dxf.endswith("EOF\n")

    start = lines.index('LINE')
    assert lines[start + 1:start + 15] == [
        '8', '0',
        '10', '0.000000', '20', '0.000000', '30', '0.000000',
        '11', '1.500000', '21', '0.250000', '31', '0.000000',
    ]


def test_dxf_one_line_per_element():
    for roof in RoofType:
        geometry, _ = generate_truss(TrussParams(span=6.0, roof_type=roof, slope_deg=20.0))
        dxf = geometry_to_dxf(geometry)
        assert count_line_entities(dxf) == len(geometry.elements)


def test_dxf_empty_truss_is_still_valid():
    dxf = generate_dxf([], [])
    assert count_line_entities(dxf) == 0
    assert 'ENTITIES' in dxf
    assert dxf.endswith("EOF\n")


def test_specification_csv():
    result = calculate_truss(CarportConfig(width=6.0, length=6.0))
    csv = ExportService.specification_csv(result.bom)
    lines = csv.strip().splitlines()

    assert lines[0] == "item;profile;length_m;quantity;weight_kg"
    assert lines[1].startswith("Top chord;")
    assert lines[4].startswith("Posts;")
    assert lines[-2].startswith("Total weight, kg")
    assert lines[-1] == f"Total cost, RUB;;;;{result.bom.total_cost:.0f}"


def test_specification_text():
    result = calculate_truss(CarportConfig())
    text = ExportService.specification_text(result.bom)

    assert text.startswith("MATERIALS SPECIFICATION")
    assert "1. Top chord" in text
    assert "4. Posts" in text
    assert f"TOTAL WEIGHT: {result.bom.total_weight:.1f} kg" in text


def test_cutlist_covers_every_element():
    geometry, _ = generate_truss(TrussParams(span=6.0, roof_type=RoofType.GABLE, slope_deg=20.0))
    csv = ExportService.generate_cutlist_csv(geometry)
    lines = csv.strip().splitlines()

    assert lines[0] == "element;role;node_i;node_j;length_m;length_mm;bin"
    assert len(lines) == 1 + len(geometry.elements)

    lengths = [float(line.split(';')[4]) for line in lines[1:]]
    assert lengths == sorted(lengths)

    bin_names = {name.split(' ')[0] for name in compute_length_bins(geometry)}
    assert {line.split(';')[6] for line in lines[1:]} == bin_names


def test_calculation_report_sections():
    config = CarportConfig(width=6.0, roof_type=RoofType.ARCHED)
    result = calculate_truss(config)
    report = ExportService.calculation_report(config, result)

    for heading in ("TRUSS CALCULATION REPORT", "GEOMETRY", "LOADS", "FORCES", "SECTIONS"):
        assert heading in report
    assert "Roof type:     arched" in report
    assert result.sections.top_chord.name in report
    if result.warnings:
        assert "WARNINGS" in report


def test_production_package():
    """Zip with drawing, plain-text materials list and report."""
    config = CarportConfig(width=6.0, length=7.5)
    result = calculate_truss(config)
    package = ExportService.production_package(config, result)

    with zipfile.ZipFile(io.BytesIO(package)) as archive:
        assert tuple(archive.namelist()) == PACKAGE_FILES
        assert archive.read("truss_drawing.dxf").decode() == result.dxf_content
        assert archive.read("spec_materials.txt").decode() == ExportService.specification_text(result.bom)
        report = archive.read("calculation_report.txt").decode("utf-8")
    assert report == ExportService.calculation_report(config, result)
