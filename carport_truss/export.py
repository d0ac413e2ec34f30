# carport_truss/export.py
"""
Export: DXF line drawing of the truss, plus the text/CSV content of the
specification sheet and the calculation report.

Everything here returns strings (or bytes for the zip package); writing
files or streaming downloads is the caller's job.

DXF LAYOUT (R12, AC1009):
-------------------------
    0 SECTION / 2 HEADER / 9 $ACADVER / 1 AC1009 / 0 ENDSEC
    0 SECTION / 2 ENTITIES
        0 LINE / 8 <layer> / 10 x1 / 20 y1 / 30 0.0 / 11 x2 / 21 y2 / 31 0.0
        ... one LINE per element ...
    0 ENDSEC
    0 EOF

Arches are already straight segments, so only LINE entities are written.
"""

import io
import zipfile
from typing import Dict, List, Sequence

from .config import CarportConfig, RoofType
from .generative.truss import compute_length_bins
from .model import BillOfMaterials, CalculationResult, Element, Node, TrussGeometry

DXF_VERSION = 'AC1009'
DXF_LAYER = '0'

# Production package contents, in archive order
PACKAGE_FILES = ('truss_drawing.dxf', 'spec_materials.txt', 'calculation_report.txt')


def _num(value: float) -> str:
    return f"{value:.6f}"


def _pairs(*pairs) -> List[str]:
    lines = []
    for code, value in pairs:
        lines.append(str(code))
        lines.append(str(value))
    return lines


def generate_dxf(nodes: Sequence[Node], elements: Sequence[Element], layer: str = DXF_LAYER) -> str:
    """
    Serialize a truss as a DXF R12 drawing.

    Args:
        nodes: Truss nodes (m)
        elements: Elements indexing into nodes

    Returns:
        DXF text, one LINE entity per element, newline separated.
    """
    lines = _pairs(
        (0, 'SECTION'), (2, 'HEADER'),
        (9, '$ACADVER'), (1, DXF_VERSION),
        (0, 'ENDSEC'),
        (0, 'SECTION'), (2, 'ENTITIES'),
    )
    for element in elements:
        a = nodes[element.start]
        b = nodes[element.end]
        lines.extend(_pairs(
            (0, 'LINE'), (8, layer),
            (10, _num(a.x)), (20, _num(a.y)), (30, _num(0.0)),
            (11, _num(b.x)), (21, _num(b.y)), (31, _num(0.0)),
        ))
    lines.extend(_pairs((0, 'ENDSEC'), (0, 'EOF')))
    return "\n".join(lines) + "\n"


def geometry_to_dxf(geometry: TrussGeometry) -> str:
    return generate_dxf(geometry.nodes, geometry.elements)


def count_line_entities(dxf: str) -> int:
    """Number of LINE entities in DXF text (group code 0 followed by LINE)."""
    tokens = [t.strip() for t in dxf.splitlines()]
    return sum(
        1 for code, value in zip(tokens[0::2], tokens[1::2])
        if code == '0' and value == 'LINE'
    )


class ExportService:
    """Builds the downloadable report artifacts from a calculation result."""

    @staticmethod
    def specification_csv(bom: BillOfMaterials) -> str:
        """
        Materials specification sheet as ';'-separated CSV.

        Columns: item, profile, length_m, quantity, weight_kg; followed by a
        total row.
        """
        df = bom.to_dataframe().rename(columns={
            'name': 'item',
            'profile_name': 'profile',
            'representative_length': 'length_m',
            'weight': 'weight_kg',
        })
        df['length_m'] = df['length_m'].round(3)
        df['weight_kg'] = df['weight_kg'].round(2)

        output = io.StringIO()
        df.to_csv(output, sep=';', index=False)
        output.write(f"Total weight, kg;;;;{bom.total_weight:.2f}\n")
        output.write(f"Total cost, RUB;;;;{bom.total_cost:.0f}\n")
        return output.getvalue()

    @staticmethod
    def specification_text(bom: BillOfMaterials) -> str:
        """Numbered plain-text materials list."""
        lines = [
            "MATERIALS SPECIFICATION",
            "-" * 40,
        ]
        for i, item in enumerate(bom.items, start=1):
            lines.append(
                f"{i}. {item.name} ({item.profile_name}) - "
                f"{item.representative_length:.2f} m x {item.quantity} pcs = {item.weight:.1f} kg"
            )
        lines.append("-" * 40)
        lines.append(f"TOTAL WEIGHT: {bom.total_weight:.1f} kg")
        lines.append(f"TOTAL COST:   {bom.total_cost:.0f} RUB")
        return "\n".join(lines)

    @staticmethod
    def generate_cutlist_csv(geometry: TrussGeometry, tolerance: float = 0.005) -> str:
        """
        Cut list for one truss, sorted by length, with fabrication length bins.
        """
        bins = compute_length_bins(geometry, tolerance=tolerance)
        bin_of: Dict[int, str] = {}
        for bin_name, members in bins.items():
            for index in members:
                bin_of[index] = bin_name.split(' ')[0]

        output = io.StringIO()
        output.write("element;role;node_i;node_j;length_m;length_mm;bin\n")
        order = sorted(range(len(geometry.elements)), key=lambda i: geometry.elements[i].length)
        for i in order:
            e = geometry.elements[i]
            output.write(
                f"{i};{e.role.value};{e.start};{e.end};"
                f"{e.length:.4f};{e.length * 1000:.1f};{bin_of[i]}\n"
            )
        return output.getvalue()

    @staticmethod
    def calculation_report(config: CarportConfig, result: CalculationResult) -> str:
        """Plain-text structural calculation report."""
        loads = result.loads
        sections = result.sections
        geometry = result.geometry
        lines = [
            "TRUSS CALCULATION REPORT",
            "=" * 40,
            "",
            "GEOMETRY",
            f"  Roof type:     {RoofType(config.roof_type).value}",
            f"  Span:          {geometry.span:.2f} m",
            f"  Truss height:  {geometry.height:.3f} m",
            f"  Panels:        {geometry.panel_count} x {geometry.panel_length:.3f} m",
            "",
            "LOADS (SP 20.13330)",
            f"  Snow region:   {config.snow_region} ({loads.snow_load:.2f} kPa)",
            f"  Wind region:   {config.wind_region} ({loads.wind_load:.2f} kPa)",
            f"  Dead load:     {loads.dead_load:.2f} kPa",
            f"  Line load:     {loads.total_linear_load:.2f} kN/m",
            "",
            "FORCES",
            f"  Max moment:    {loads.max_moment:.2f} kN·m",
            f"  Max shear:     {loads.max_shear:.2f} kN",
            f"  Chord force:   {loads.max_axial_top:.1f} kN",
            f"  Web force:     {loads.max_axial_web:.1f} kN",
            "",
            "SECTIONS (SP 16.13330)",
            f"  Top chord:     {sections.top_chord.name}  utilization {loads.utilization.top:.0f}%",
            f"  Bottom chord:  {sections.bottom_chord.name}  utilization {loads.utilization.bottom:.0f}%",
            f"  Web:           {sections.web.name}  utilization {loads.utilization.web:.0f}%",
            f"  Posts:         {sections.pillar.name}  utilization {loads.utilization.pillar:.0f}%",
            f"  Purlins:       {sections.purlin.name}",
        ]
        if result.warnings:
            lines.append("")
            lines.append("WARNINGS")
            lines.extend(f"  - {w}" for w in result.warnings)
        return "\n".join(lines)

    @staticmethod
    def production_package(config: CarportConfig, result: CalculationResult) -> bytes:
        """
        Zip archive handed to the workshop: DXF drawing, materials list and
        calculation report.
        """
        contents = (
            result.dxf_content,
            ExportService.specification_text(result.bom),
            ExportService.calculation_report(config, result),
        )
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
            for name, content in zip(PACKAGE_FILES, contents):
                archive.writestr(name, content)
        return buffer.getvalue()
