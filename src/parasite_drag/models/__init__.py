"""
Parasite Drag Models
====================

Geometry contracts, drag rows and the excrescence ledger.
"""

from .geometry import (
    SurfaceType,
    GeomType,
    DegenStick,
    DegenSurface,
    SubSurface,
    Component,
    Vehicle,
    GeometrySnapshot,
)
from .row import DragRow
from .excrescence import (
    ExcrescenceType,
    ExcrescenceItem,
    ExcrescenceLedger,
    margin_amount,
)

__all__ = [
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
    "margin_amount",
]
