"""
Parasite Drag Manager
=====================

Owns the build-up settings, the active component list, the drag rows and
the excrescence ledger, and runs the full calculation.

Example Usage:
-------------
    from src.parasite_drag import ParasiteDragManager

    manager = ParasiteDragManager(vehicle)
    manager.sref = 250.0
    manager.add_excrescence(ExcrescenceType.COUNT, 25.0, "Antennas")
    report = manager.calculate_all(snapshot)
    print(report.summary())
"""

import logging
import math
from enum import Enum
from typing import List, Optional

from .atmosphere import FlowCondition
from .builder import build_rows, count_rows, select_active_components
from .config import DEFAULT_CONFIG, ParasiteDragConfig
from .correlations import lam_cf_name, turb_cf_name
from .debugger import debug_section, debug_step
from .derivation import (
    calculate_wetted_areas,
    calculate_reference_lengths,
    calculate_reynolds_numbers,
    calculate_friction_coefficients,
    calculate_fineness_ratios,
    calculate_form_factors,
    calculate_drag_areas,
    calculate_drag_coefficients,
    magnitude,
    reynolds_divisor,
)
from .grouping import overwrite_from_ancestors
from .models import (
    DragRow,
    ExcrescenceItem,
    ExcrescenceLedger,
    ExcrescenceType,
    GeomType,
    GeometrySnapshot,
    Vehicle,
)
from .report import DragReport, build_report
from .sorting import SortOrder, sort_rows
from .units import export_labels

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ReferenceMode(Enum):
    """Where the reference area comes from."""
    MANUAL = "manual"
    COMPONENT = "component"


class ParasiteDragManager:
    """
    Parasite drag build-up for one vehicle.

    Parameters:
    ----------
    vehicle : Vehicle
        Vehicle context (required)

    config : ParasiteDragConfig, optional
        Defaults and solver settings

    Attributes:
    ----------
    set_name : str, optional
        Component set to analyze (None for every component)

    sort_order : SortOrder
        Table ordering applied after each calculation

    reference_mode : ReferenceMode
        Manual Sref or Sref from ``ref_component_id``

    flow : FlowCondition
        Freestream condition

    ledger : ExcrescenceLedger
        Excrescence items
    """

    def __init__(self, vehicle: Vehicle, config: Optional[ParasiteDragConfig] = None):
        if vehicle is None:
            raise ValueError("ParasiteDragManager requires a vehicle context")

        self.vehicle = vehicle
        self.config = config or DEFAULT_CONFIG

        self.set_name: Optional[str] = None
        self.sort_order = SortOrder.NONE
        self.reference_mode = ReferenceMode.MANUAL
        self.ref_component_id = ""
        self.sref = self.config.default_sref
        self.lam_cf_eqn = self.config.default_lam_cf_eqn
        self.turb_cf_eqn = self.config.default_turb_cf_eqn
        self.length_unit = self.config.default_length_unit
        self.file_name = self.config.export_file_name
        self.flow = FlowCondition.from_config(self.config)
        self.ledger = ExcrescenceLedger()

        self.component_ids: List[str] = []
        self.rows: List[DragRow] = []
        self.snapshot: Optional[GeometrySnapshot] = None
        self.reynolds_divisor = 1.0

    # -------------------------------------------------------------------------
    # Equation names
    # -------------------------------------------------------------------------

    @property
    def lam_cf_name(self) -> str:
        return lam_cf_name(self.lam_cf_eqn)

    @property
    def turb_cf_name(self) -> str:
        return turb_cf_name(self.turb_cf_eqn)

    @property
    def has_geometry(self) -> bool:
        return self.snapshot is not None

    # -------------------------------------------------------------------------
    # Component set
    # -------------------------------------------------------------------------

    def set_active_components(self):
        self.component_ids = select_active_components(self.vehicle, self.set_name)

    def is_same_component_set(self) -> bool:
        """True if the analyzable components of the set are unchanged."""
        current = select_active_components(self.vehicle, self.set_name)
        if count_rows(self.vehicle, current) != len(self.rows):
            return False
        return current == self.component_ids

    def refresh(self):
        """Drop the snapshot and rows if the component set has changed."""
        if not self.is_same_component_set():
            self.snapshot = None
            self.rows = []
            self.set_active_components()

    def renew(self):
        """Reset every setting, the ledger and the computed state."""
        self.__init__(self.vehicle, self.config)

    # -------------------------------------------------------------------------
    # Reference area and flow
    # -------------------------------------------------------------------------

    def update_reference_area(self):
        """Take Sref from the reference wing in component mode."""
        comp = self.vehicle.find_component(self.ref_component_id)
        if comp is None:
            self.ref_component_id = ""
            return
        if self.reference_mode != ReferenceMode.COMPONENT:
            return
        if comp.geom_type != GeomType.WING or comp.total_area is None:
            logger.warning("Reference component %s has no wing area", comp.name)
            return
        self.sref = comp.total_area

    def update(self):
        """Refresh reference area, flow condition and excrescences."""
        self.update_reference_area()
        self.flow.update(self.length_unit)
        self.ledger.recompute(self.geometry_cd(), self.sref, self.has_geometry)

    # -------------------------------------------------------------------------
    # Calculation
    # -------------------------------------------------------------------------

    def calculate_all(self, snapshot: Optional[GeometrySnapshot] = None) -> DragReport:
        """
        Run the full build-up.

        Parameters:
        ----------
        snapshot : GeometrySnapshot, optional
            Geometry for this pass. Without one the previously supplied
            snapshot is used; with neither, every derived row field is -1.

        Returns:
        -------
        DragReport
            Ordered rows, excrescences and totals
        """
        if snapshot is not None:
            self.snapshot = snapshot

        self.set_active_components()
        self.update_reference_area()
        self.flow.update(self.length_unit)

        rows = build_rows(self.vehicle, self.component_ids)
        snap = self.snapshot

        calculate_wetted_areas(rows, self.vehicle, snap)
        calculate_reference_lengths(rows, snap)
        calculate_reynolds_numbers(rows, self.flow, self.length_unit, snap)
        self.reynolds_divisor = reynolds_divisor(rows)
        calculate_friction_coefficients(
            rows, self.flow, self.lam_cf_eqn, self.turb_cf_eqn,
            self.length_unit, snap, self.config
        )
        calculate_fineness_ratios(rows, snap)
        calculate_form_factors(rows, snap, self.flow.mach)
        overwrite_from_ancestors(rows, self.vehicle)
        calculate_drag_areas(rows, self.vehicle, self.has_geometry)
        calculate_drag_coefficients(rows, self.vehicle, self.sref, self.has_geometry)

        self.rows = rows
        self.ledger.recompute(self.geometry_cd(), self.sref, self.has_geometry)
        self.update_percentages()
        self.rows = sort_rows(self.rows, self.vehicle, self.sort_order)

        debug_section("Totals")
        debug_step("Totals", "Geometry", "sum(CD > 0)", {}, self.geometry_cd(), "CD_geom")
        debug_step("Totals", "Total", "CD_geom + excrescences", {}, self.total_cd(), "CD_total")

        return build_report(self)

    def sort(self, order: Optional[SortOrder] = None):
        """Re-order the current rows without recalculating."""
        if order is not None:
            self.sort_order = order
        self.rows = sort_rows(self.rows, self.vehicle, self.sort_order)

    # -------------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------------

    def geometry_cd(self) -> float:
        """Sum of the positive row CDs."""
        return sum(row.cd for row in self.rows if row.cd > 0)

    def subtotal_cd(self) -> float:
        """Geometry CD plus every non-margin excrescence."""
        return self.geometry_cd() + self.ledger.subtotal_amount()

    def total_cd(self) -> float:
        """Subtotal plus the margin, if there is one."""
        if self.ledger.has_margin():
            return self.geometry_cd() + self.ledger.total_amount()
        return self.subtotal_cd()

    def update_percentages(self):
        """Share of the total CD for every row and excrescence."""
        total = self.total_cd()
        for row in self.rows:
            if not self.has_geometry or math.isnan(row.f) or total <= 0:
                row.perc_total_cd = 0.0
            else:
                row.perc_total_cd = row.cd / total
        self.ledger.update_percentages(total, self.has_geometry)

    def geometry_f_total(self) -> float:
        if not self.has_geometry:
            return 0.0
        return sum(row.f for row in self.rows if not math.isnan(row.f))

    def geometry_percent_total(self) -> float:
        return sum(row.perc_total_cd for row in self.rows)

    def excrescence_f_total(self) -> float:
        return self.ledger.total_f()

    def excrescence_percent_total(self) -> float:
        return self.ledger.total_percent()

    def f_total(self) -> float:
        return self.geometry_f_total() + self.excrescence_f_total()

    def percent_total(self) -> float:
        return self.geometry_percent_total() + self.excrescence_percent_total()

    def lref_significant_figures(self) -> int:
        """Decimal places for reference lengths, from the largest one."""
        lrefs = [row.lref for row in self.rows]
        mag = magnitude(max(lrefs)) if lrefs else 1.0
        if mag > 1:
            return 1
        if mag == 1:
            return 2
        return 3

    # -------------------------------------------------------------------------
    # Excrescences
    # -------------------------------------------------------------------------

    def add_excrescence(
        self,
        excres_type: ExcrescenceType = ExcrescenceType.COUNT,
        value: float = 0.0,
        label: Optional[str] = None,
    ) -> Optional[ExcrescenceItem]:
        """Add an excrescence and refresh the dependent totals."""
        item = self.ledger.add(excres_type, value, label, self.sref)
        if item is not None:
            self.refresh_excrescences()
        return item

    def delete_excrescence(self, index: Optional[int] = None):
        self.ledger.delete(index)
        self.refresh_excrescences()

    def set_excrescence_value(self, value: float):
        """Change the current item's raw value."""
        self.ledger.set_current_value(value)
        self.refresh_excrescences()

    def refresh_excrescences(self):
        self.ledger.recompute(self.geometry_cd(), self.sref, self.has_geometry)
        self.update_percentages()

    # -------------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------------

    def axis_labels(self) -> dict:
        flow = self.flow
        return export_labels(
            flow.unit_system, self.length_unit, flow.velocity_unit,
            flow.temperature_unit, flow.pressure_unit
        )
