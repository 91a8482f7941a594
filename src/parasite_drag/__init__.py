"""
Parasite Drag Module
====================

Component build-up of the zero-lift (parasite) drag of a vehicle:

    CD0 = sum(Swet_i * Q_i * Cf_i * FF_i) / Sref + excrescences

Each analyzable component surface becomes a drag row. For every row the
build-up derives wetted area, reference length, Reynolds number, skin
friction coefficient, fineness ratio and form factor, then the drag area
f and its CD. User excrescences (counts, CD, percent of geometry CD,
drag area, margin) are added on top.

Key Classes:
------------
- ParasiteDragManager: settings, calculation and totals
- FlowCondition: freestream state and units
- Vehicle / Component / GeometrySnapshot: geometry inputs
- ExcrescenceLedger: excrescence items
- DragReport: ordered results, DataFrame and CSV export

Example Usage:
-------------
    from src.parasite_drag import ParasiteDragManager, load_geometry

    vehicle, snapshot = load_geometry("aircraft.json")
    manager = ParasiteDragManager(vehicle)
    manager.sref = 174.0

    report = manager.calculate_all(snapshot)
    print(report.summary())
    report.export_csv(manager.file_name)

Units Convention:
----------------
- Lengths and areas: model length unit (LengthUnit, default ft)
- Altitude: ft (imperial) or m (metric)
- Velocity: selected VelocityUnit
- Angles passed to correlations: radians
"""

from .config import ParasiteDragConfig, DEFAULT_CONFIG
from .units import (
    UnitSystem,
    LengthUnit,
    VelocityUnit,
    TemperatureUnit,
    PressureUnit,
)
from .atmosphere import FlowCondition, FreestreamType
from .correlations import (
    LaminarCfEqn,
    TurbulentCfEqn,
    WingFormFactorEqn,
    BodyFormFactorEqn,
    calc_lam_cf,
    calc_turb_cf,
    calc_ff_wing,
    calc_ff_body,
)
from .models import (
    SurfaceType,
    GeomType,
    DegenStick,
    DegenSurface,
    SubSurface,
    Component,
    Vehicle,
    GeometrySnapshot,
    DragRow,
    ExcrescenceType,
    ExcrescenceItem,
    ExcrescenceLedger,
)
from .sorting import SortOrder
from .manager import ParasiteDragManager, ReferenceMode
from .report import DragReport, DragTotals
from .persistence import (
    encode_settings,
    decode_settings,
    save_settings,
    load_settings,
    load_geometry,
)
from .debugger import CalculationDebugger, trace_calculation

__all__ = [
    "ParasiteDragConfig",
    "DEFAULT_CONFIG",
    "UnitSystem",
    "LengthUnit",
    "VelocityUnit",
    "TemperatureUnit",
    "PressureUnit",
    "FlowCondition",
    "FreestreamType",
    "LaminarCfEqn",
    "TurbulentCfEqn",
    "WingFormFactorEqn",
    "BodyFormFactorEqn",
    "calc_lam_cf",
    "calc_turb_cf",
    "calc_ff_wing",
    "calc_ff_body",
    "SurfaceType",
    "GeomType",
    "DegenStick",
    "DegenSurface",
    "SubSurface",
    "Component",
    "Vehicle",
    "GeometrySnapshot",
    "DragRow",
    "ExcrescenceType",
    "ExcrescenceItem",
    "ExcrescenceLedger",
    "SortOrder",
    "ParasiteDragManager",
    "ReferenceMode",
    "DragReport",
    "DragTotals",
    "encode_settings",
    "decode_settings",
    "save_settings",
    "load_settings",
    "load_geometry",
    "CalculationDebugger",
    "trace_calculation",
]
