# carport_truss - Parametric carport truss engine
"""
CARPORT-TRUSS: Parametric Steel Truss Engine for Carports
=========================================================

Given a carport configuration (span, length, roof type, slope, climate
regions, roofing, post size) the engine:

- generates the truss geometry for the roof archetype
- derives snow / wind / dead loads and equivalent chord and web forces
- picks steel tubes from the profile catalog
- builds a bill of materials with weight and cost
- exports the truss as a DXF line drawing

ARCHITECTURE:
-------------
    config.py       Input record, enums, engine constants
    codes.py        Climate regions, dead loads, DesignTables bundle
    catalog.py      Steel tube profiles and the ProfileCatalog repository
    model.py        Geometry, load, section, BOM and result records
    generative/     Roof archetypes and the truss generator
    loads.py        Code loads and equivalent-beam statics
    checks/         Steel member checks
    selection.py    SectionSelector
    bom.py          Bill of materials
    export.py       DXF drawing, specification sheet, calculation report
    engine.py       calculate_truss() pipeline and error boundary

USAGE:
------
    from carport_truss import CarportConfig, calculate_truss

    result = calculate_truss(CarportConfig(width=6.0, roof_type='gable', roof_slope=20))
    result.geometry.height, result.bom.total_weight, result.warnings
"""

from .catalog import DEFAULT_CATALOG, Profile, ProfileCatalog
from .codes import DEFAULT_TABLES, DesignTables
from .config import (
    DEFAULT_SETTINGS,
    CarportConfig,
    EngineSettings,
    PillarSize,
    RoofMaterial,
    RoofType,
)
from .engine import calculate_truss, failure_result, sanitize_config
from .errors import InvalidInputError, TrussEngineError, WarningKind
from .model import (
    BillOfMaterials,
    BOMItem,
    CalculationResult,
    Element,
    ElementRole,
    ElementSections,
    LoadAnalysis,
    Node,
    TrussGeometry,
    Utilization,
)

__version__ = "0.1.0"
