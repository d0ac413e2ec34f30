#!/usr/bin/env python3
"""
RUN_CARPORT_TRUSS: Calculate One Carport Truss End to End
=========================================================

This demo runs the whole engine for one configuration:
1. Define the carport (size, roof, climate regions)
2. Generate the truss and compute loads
3. Pick steel sections
4. Build the bill of materials
5. Export DXF drawing, specification sheet and report
6. Plot the truss

Run with:
    python demos/run_carport_truss.py

Outputs:
    artifacts/truss_drawing.dxf       - Line drawing for CAD
    artifacts/spec_materials.csv      - Materials specification sheet
    artifacts/calculation_report.txt  - Structural report
    artifacts/truss_cutlist.csv       - Cut list with length bins
    artifacts/truss.png               - Elevation plot (needs matplotlib)
"""

import logging
from pathlib import Path

from carport_truss import CarportConfig, ElementRole, RoofType, calculate_truss
from carport_truss.export import ExportService

ARTIFACTS = Path(__file__).parent.parent / "artifacts"

ROLE_COLORS = {
    ElementRole.TOP_CHORD: 'tab:red',
    ElementRole.BOTTOM_CHORD: 'tab:blue',
    ElementRole.WEB: 'tab:gray',
}


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70)


def plot_truss(geometry, title: str, outpath: Path):
    """Elevation of the truss, members colored by role."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 3.5))
    for element in geometry.elements:
        a = geometry.nodes[element.start]
        b = geometry.nodes[element.end]
        ax.plot([a.x, b.x], [a.y, b.y], color=ROLE_COLORS[element.role], linewidth=1.5)
    xs = [n.x for n in geometry.nodes]
    ys = [n.y for n in geometry.nodes]
    ax.scatter(xs, ys, s=10, color='black', zorder=3)
    ax.set_aspect('equal')
    ax.set_xlabel('x (m)')
    ax.set_ylabel('y (m)')
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(outpath, dpi=150)
    plt.close(fig)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print_header("STEP 1: Carport Configuration")
    config = CarportConfig(
        width=6.0,
        length=7.5,
        height=2.5,
        roof_type=RoofType.GABLE,
        roof_slope=20.0,
        snow_region=3,
        wind_region=1,
    )
    print(f"""
    Size:          {config.width} x {config.length} m, eave {config.height} m
    Roof:          {config.roof_type.value}, {config.roof_slope}°
    Climate:       snow region {config.snow_region}, wind region {config.wind_region}
    """)

    print_header("STEP 2-4: Calculation")
    result = calculate_truss(config)
    geometry = result.geometry
    print(f"""
    Truss height:  {geometry.height:.3f} m
    Panels:        {geometry.panel_count} x {geometry.panel_length:.3f} m
    Nodes:         {len(geometry.nodes)}
    Elements:      {len(geometry.elements)}
    Chord force:   {result.loads.max_axial_top:.1f} kN
    Top chord:     {result.sections.top_chord.name}
    Bottom chord:  {result.sections.bottom_chord.name}
    Web:           {result.sections.web.name}
    Posts:         {result.sections.pillar.name}
    Total weight:  {result.bom.total_weight:.1f} kg
    Total cost:    {result.bom.total_cost:.0f} RUB
    """)
    for warning in result.warnings:
        print(f"    WARNING: {warning}")

    print_header("STEP 5: Export")
    ARTIFACTS.mkdir(exist_ok=True)
    outputs = {
        "truss_drawing.dxf": result.dxf_content,
        "spec_materials.csv": ExportService.specification_csv(result.bom),
        "calculation_report.txt": ExportService.calculation_report(config, result),
        "truss_cutlist.csv": ExportService.generate_cutlist_csv(geometry),
    }
    for name, content in outputs.items():
        path = ARTIFACTS / name
        path.write_text(content, encoding="utf-8")
        print(f"    Wrote {path}")

    print_header("STEP 6: Plot")
    try:
        plot_path = ARTIFACTS / "truss.png"
        plot_truss(geometry, f"{config.roof_type.value} truss, span {config.width} m", plot_path)
        print(f"    Wrote {plot_path}")
    except ImportError:
        print("    matplotlib not installed, skipping plot")
        print("    Install with: pip install matplotlib")

    return result


if __name__ == "__main__":
    main()
