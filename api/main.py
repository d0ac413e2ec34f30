# api/main.py
"""
FastAPI backend for the carport configurator - exposes the truss engine as REST API.
"""

import logging
from typing import Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, StreamingResponse
from pydantic import BaseModel, Field

from carport_truss import (
    CalculationResult,
    CarportConfig,
    PillarSize,
    Profile,
    RoofMaterial,
    RoofType,
    calculate_truss,
)
from carport_truss.codes import SNOW_REGIONS, WIND_REGIONS
from carport_truss.config import (
    MAX_HEIGHT,
    MAX_LENGTH,
    MAX_SLOPE,
    MAX_WIDTH,
    MIN_HEIGHT,
    MIN_LENGTH,
    MIN_SLOPE,
    MIN_WIDTH,
)
from carport_truss.export import ExportService

log = logging.getLogger(__name__)

# Region ids the climate tables define
SNOW_MIN = min(r.id for r in SNOW_REGIONS)
SNOW_MAX = max(r.id for r in SNOW_REGIONS)
WIND_MIN = min(r.id for r in WIND_REGIONS)
WIND_MAX = max(r.id for r in WIND_REGIONS)

app = FastAPI(
    title="Carport Truss API",
    description="Parametric steel truss engine for carports",
    version="0.1.0",
)

# CORS for the configurator front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class CarportParams(BaseModel):
    """Input parameters for a truss calculation."""
    width: float = Field(4.5, ge=MIN_WIDTH, le=MAX_WIDTH, description="Carport width / truss span (m)")
    length: float = Field(6.0, ge=MIN_LENGTH, le=MAX_LENGTH, description="Carport length (m)")
    height: float = Field(2.5, ge=MIN_HEIGHT, le=MAX_HEIGHT, description="Eave height (m)")
    roof_type: RoofType = Field(RoofType.GABLE, description="single, triangular, gable, arched, semiarched, flat")
    roof_slope: float = Field(20.0, ge=MIN_SLOPE, le=MAX_SLOPE, description="Roof slope (deg)")
    roof_material: RoofMaterial = Field(RoofMaterial.POLYCARBONATE, description="Roofing material")
    snow_region: int = Field(3, ge=SNOW_MIN, le=SNOW_MAX, description="Snow region (SP 20.13330)")
    wind_region: int = Field(1, ge=WIND_MIN, le=WIND_MAX, description="Wind region (SP 20.13330)")
    pillar_size: PillarSize = Field(PillarSize.SIZE_80, description="Post size: 60x60, 80x80, 100x100")

    def to_config(self) -> CarportConfig:
        return CarportConfig(**self.model_dump())


class NodeData(BaseModel):
    """Node geometry data."""
    id: int
    x: float
    y: float


class ElementData(BaseModel):
    """Truss element data."""
    id: int
    start: int
    end: int
    role: str
    length: float


class ProfileData(BaseModel):
    """Chosen section, with the nominal size the renderer extrudes."""
    name: str
    nominal_h: float
    nominal_b: float
    wall_t: float
    area: float
    linear_weight: float


class LoadData(BaseModel):
    """Loads, forces and utilization."""
    snow_load: float
    wind_load: float
    dead_load: float
    total_linear_load: float
    max_moment: float
    max_shear: float
    max_axial_top: float
    max_axial_bottom: float
    max_axial_web: float
    utilization: Dict[str, float]


class BOMItemData(BaseModel):
    name: str
    profile_name: str
    representative_length: float
    quantity: int
    weight: float


class BOMData(BaseModel):
    items: List[BOMItemData]
    total_weight: float
    total_cost: float
    truss_count: int


class CalculationResponse(BaseModel):
    """Complete calculation result."""
    success: bool
    warnings: List[str]
    span: float
    height: float
    panel_count: int
    panel_length: float
    nodes: List[NodeData]
    elements: List[ElementData]
    sections: Dict[str, ProfileData]
    loads: LoadData
    bom: BOMData


def _profile_data(profile: Profile) -> ProfileData:
    return ProfileData(
        name=profile.name,
        nominal_h=profile.nominal_h,
        nominal_b=profile.nominal_b,
        wall_t=profile.wall_t,
        area=profile.area,
        linear_weight=profile.linear_weight,
    )


def to_response(result: CalculationResult) -> CalculationResponse:
    """Convert an engine result into the JSON response model."""
    geometry = result.geometry
    loads = result.loads
    sections = result.sections
    return CalculationResponse(
        success=result.success,
        warnings=list(result.warnings),
        span=geometry.span,
        height=round(geometry.height, 4),
        panel_count=geometry.panel_count,
        panel_length=round(geometry.panel_length, 4),
        nodes=[
            NodeData(id=i, x=round(n.x, 4), y=round(n.y, 4))
            for i, n in enumerate(geometry.nodes)
        ],
        elements=[
            ElementData(id=i, start=e.start, end=e.end, role=e.role.value, length=round(e.length, 4))
            for i, e in enumerate(geometry.elements)
        ],
        sections={
            'top_chord': _profile_data(sections.top_chord),
            'bottom_chord': _profile_data(sections.bottom_chord),
            'web': _profile_data(sections.web),
            'pillar': _profile_data(sections.pillar),
            'purlin': _profile_data(sections.purlin),
        },
        loads=LoadData(
            snow_load=loads.snow_load,
            wind_load=loads.wind_load,
            dead_load=loads.dead_load,
            total_linear_load=loads.total_linear_load,
            max_moment=loads.max_moment,
            max_shear=loads.max_shear,
            max_axial_top=loads.max_axial_top,
            max_axial_bottom=loads.max_axial_bottom,
            max_axial_web=loads.max_axial_web,
            utilization={
                'top': loads.utilization.top,
                'bottom': loads.utilization.bottom,
                'web': loads.utilization.web,
                'pillar': loads.utilization.pillar,
            },
        ),
        bom=BOMData(
            items=[
                BOMItemData(
                    name=item.name,
                    profile_name=item.profile_name,
                    representative_length=round(item.representative_length, 4),
                    quantity=item.quantity,
                    weight=round(item.weight, 3),
                )
                for item in result.bom.items
            ],
            total_weight=round(result.bom.total_weight, 3),
            total_cost=result.bom.total_cost,
            truss_count=result.bom.truss_count,
        ),
    )


def _calculate_or_400(params: CarportParams) -> CalculationResult:
    result = calculate_truss(params.to_config())
    if not result.success:
        raise HTTPException(status_code=400, detail="; ".join(result.warnings))
    return result


def _attachment(content: str, media_type: str, filename: str) -> PlainTextResponse:
    return PlainTextResponse(
        content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "Carport Truss API"}


@app.post("/api/calculate", response_model=CalculationResponse)
async def calculate(params: CarportParams):
    """Run the truss calculation."""
    return to_response(calculate_truss(params.to_config()))


@app.post("/api/export/dxf")
async def export_dxf(params: CarportParams):
    """Truss drawing as DXF."""
    result = _calculate_or_400(params)
    return _attachment(result.dxf_content, "application/dxf", "truss_drawing.dxf")


@app.post("/api/export/csv")
async def export_csv(params: CarportParams):
    """Materials specification sheet as CSV."""
    result = _calculate_or_400(params)
    return _attachment(ExportService.specification_csv(result.bom), "text/csv", "spec_materials.csv")


@app.post("/api/export/cutlist")
async def export_cutlist(params: CarportParams):
    """Per-truss cut list as CSV."""
    result = _calculate_or_400(params)
    return _attachment(ExportService.generate_cutlist_csv(result.geometry), "text/csv", "truss_cutlist.csv")


@app.post("/api/export/report")
async def export_report(params: CarportParams):
    """Plain-text calculation report."""
    result = _calculate_or_400(params)
    report = ExportService.calculation_report(params.to_config(), result)
    return _attachment(report, "text/plain", "calculation_report.txt")


@app.post("/api/export/package")
async def export_package(params: CarportParams):
    """Production package: DXF drawing, materials list and report in one zip."""
    result = _calculate_or_400(params)
    package = ExportService.production_package(params.to_config(), result)
    return StreamingResponse(
        iter([package]),
        media_type="application/zip",
        headers={"Content-Disposition": "attachment; filename=truss_project.zip"},
    )


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host="0.0.0.0", port=8000)
