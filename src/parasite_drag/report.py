"""
Parasite Drag Report
====================

Snapshot of a finished build-up: flow condition, ordered component rows,
excrescences and totals, with text, pandas and CSV views.

Result Names:
------------
Flow condition values are stored under FC_* names, component columns
under Comp_*, excrescence columns under Excres_* and totals under
Geom_*_Total, Excres_*_Total and Total_*_Total.
"""

import csv
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

import pandas as pd

from .models import DragRow, ExcrescenceItem


@dataclass
class DragTotals:
    """Drag area, CD and percentage totals."""
    geom_f: float = 0.0
    geom_cd: float = 0.0
    geom_perc: float = 0.0
    excres_f: float = 0.0
    excres_cd: float = 0.0
    excres_perc: float = 0.0
    total_f: float = 0.0
    total_cd: float = 0.0
    total_perc: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "Geom_f_Total": self.geom_f,
            "Geom_Cd_Total": self.geom_cd,
            "Geom_Perc_Total": self.geom_perc,
            "Excres_f_Total": self.excres_f,
            "Excres_Cd_Total": self.excres_cd,
            "Excres_Perc_Total": self.excres_perc,
            "Total_f_Total": self.total_f,
            "Total_Cd_Total": self.total_cd,
            "Total_Perc_Total": self.total_perc,
        }


@dataclass
class DragReport:
    """
    Result of one parasite drag build-up.

    Attributes:
    ----------
    labels : Dict[str, str]
        Unit-dependent axis labels (Alt, Density, Vinf, Temp, Pres, Sref,
        Swet, Lref, f)

    flow : Dict[str, float]
        FC_Mach, FC_Alt, FC_Vinf, FC_Sref, FC_Temp, FC_Pres, FC_Rho

    lam_cf_name, turb_cf_name : str
        Skin friction laws used

    rows : List[DragRow]
        Component rows in display order

    excrescences : List[ExcrescenceItem]
        Excrescence items in ledger order

    totals : DragTotals
        Drag totals

    reynolds_divisor : float
        Power of ten used to display Reynolds numbers

    lref_decimals : int
        Decimal places used to display reference lengths
    """
    labels: Dict[str, str]
    flow: Dict[str, float]
    lam_cf_name: str
    turb_cf_name: str
    rows: List[DragRow] = field(default_factory=list)
    excrescences: List[ExcrescenceItem] = field(default_factory=list)
    totals: DragTotals = field(default_factory=DragTotals)
    reynolds_divisor: float = 1.0
    lref_decimals: int = 2

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def to_dataframe(self) -> pd.DataFrame:
        """Component rows as a DataFrame (one row per drag row)."""
        if not self.rows:
            return pd.DataFrame(columns=list(_COMPONENT_COLUMNS))
        return pd.DataFrame([row.to_dict() for row in self.rows])

    def excrescence_dataframe(self) -> pd.DataFrame:
        if not self.excrescences:
            return pd.DataFrame(columns=list(_EXCRESCENCE_COLUMNS))
        return pd.DataFrame([item.to_dict() for item in self.excrescences])

    def to_results(self) -> Dict[str, Any]:
        """Flat name -> value mapping; column values are lists."""
        results: Dict[str, Any] = dict(self.flow)
        results["LamCfEqnName"] = self.lam_cf_name
        results["TurbCfEqnName"] = self.turb_cf_name
        results["Num_Comp"] = len(self.rows)
        for name in _COMPONENT_COLUMNS:
            results[name] = [row.to_dict()[name] for row in self.rows]
        results["Num_Excres"] = len(self.excrescences)
        for name in _EXCRESCENCE_COLUMNS:
            results[name] = [item.to_dict()[name] for item in self.excrescences]
        results.update(self.totals.to_dict())
        return results

    def summary(self) -> str:
        """Fixed-width text table of the build-up."""
        lines = [
            "=" * 96,
            "PARASITE DRAG BUILD-UP",
            "=" * 96,
            f"Mach {self.flow['FC_Mach']:.3f}   "
            f"{self.labels['Alt']}: {self.flow['FC_Alt']:.1f}   "
            f"{self.labels['Vinf']}: {self.flow['FC_Vinf']:.2f}   "
            f"{self.labels['Sref']}: {self.flow['FC_Sref']:.3f}",
            f"Laminar Cf: {self.lam_cf_name}   Turbulent Cf: {self.turb_cf_name}",
            "-" * 96,
            f"{'Component':<24}{'Swet':>10}{'Lref':>10}{'Re':>12}{'Cf':>10}"
            f"{'FR':>8}{'FF':>8}{'Q':>6}{'f':>10}{'CD':>9}{'%':>7}",
            "-" * 96,
        ]
        for row in self.rows:
            lines.append(
                f"{row.label[:23]:<24}{row.swet:>10.3f}{row.lref:>10.{self.lref_decimals}f}"
                f"{row.re / self.reynolds_divisor:>12.3f}{row.cf:>10.5f}"
                f"{row.fine_rat:>8.3f}{row.form_factor:>8.3f}{row.q_factor:>6.2f}"
                f"{row.f:>10.4f}{row.cd:>9.5f}{row.perc_total_cd * 100:>7.1f}"
            )
        if self.excrescences:
            lines.append("-" * 96)
            for item in self.excrescences:
                lines.append(
                    f"{item.label[:23]:<24}{item.type_string:<20}{item.input_value:>10.4f}"
                    f"{'':>30}{item.f:>10.4f}{item.amount:>9.5f}{item.perc_total_cd * 100:>7.1f}"
                )
        t = self.totals
        lines.extend([
            "-" * 96,
            f"{'Geometry':<24}{'':>64}{t.geom_cd:>9.5f}{t.geom_perc * 100:>7.1f}",
            f"{'Excrescences':<24}{'':>64}{t.excres_cd:>9.5f}{t.excres_perc * 100:>7.1f}",
            f"{'Total':<24}{'':>54}{t.total_f:>10.4f}{t.total_cd:>9.5f}{t.total_perc * 100:>7.1f}",
            "=" * 96,
        ])
        if self.reynolds_divisor != 1.0:
            lines.append(f"Re shown divided by {self.reynolds_divisor:.0e}")
        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_csv(self, filepath: str):
        """
        Write the report as a sectioned CSV file.

        Sections: flow condition and equations (name, value), component
        table, excrescence table, totals (name, value).

        Parameters:
        ----------
        filepath : str
            Path to CSV file
        """
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(["Parasite Drag Build-Up"])
            for key, value in self.flow.items():
                writer.writerow([key, _label_for(key, self.labels), value])
            writer.writerow(["LamCfEqnName", "", self.lam_cf_name])
            writer.writerow(["TurbCfEqnName", "", self.turb_cf_name])
            writer.writerow([])

            component_writer = csv.DictWriter(f, fieldnames=list(_COMPONENT_COLUMNS))
            component_writer.writeheader()
            for row in self.rows:
                component_writer.writerow(row.to_dict())
            writer.writerow([])

            excres_writer = csv.DictWriter(f, fieldnames=list(_EXCRESCENCE_COLUMNS))
            excres_writer.writeheader()
            for item in self.excrescences:
                excres_writer.writerow(item.to_dict())
            writer.writerow([])

            for key, value in self.totals.to_dict().items():
                writer.writerow([key, "", value])


_EXCRESCENCE_COLUMNS = (
    "Excres_Label",
    "Excres_Type",
    "Excres_Input",
    "Excres_Amount",
    "Excres_f",
    "Excres_PercTotalCD",
)

_FLOW_LABEL_KEYS = {
    "FC_Alt": "Alt",
    "FC_Vinf": "Vinf",
    "FC_Sref": "Sref",
    "FC_Temp": "Temp",
    "FC_Pres": "Pres",
    "FC_Rho": "Density",
}


def _label_for(key: str, labels: Dict[str, str]) -> str:
    return labels.get(_FLOW_LABEL_KEYS.get(key, ""), "")


_COMPONENT_COLUMNS = (
    "Comp_ID", "Comp_Label", "Comp_SubSurfID", "Comp_Swet", "Comp_Lref",
    "Comp_Re", "Comp_Cf", "Comp_FineRat", "Comp_FFEqn", "Comp_FF", "Comp_Q",
    "Comp_PercLam", "Comp_f", "Comp_CD", "Comp_PercTotalCD",
)


def build_report(manager) -> DragReport:
    """Collect a manager's current state into a DragReport."""
    flow = manager.flow
    totals = DragTotals(
        geom_f=manager.geometry_f_total(),
        geom_cd=manager.geometry_cd(),
        geom_perc=manager.geometry_percent_total(),
        excres_f=manager.excrescence_f_total(),
        excres_cd=manager.ledger.total_amount(),
        excres_perc=manager.excrescence_percent_total(),
        total_f=manager.f_total(),
        total_cd=manager.total_cd(),
        total_perc=manager.percent_total(),
    )
    return DragReport(
        labels=manager.axis_labels(),
        flow={
            "FC_Mach": flow.mach,
            "FC_Alt": flow.altitude,
            "FC_Vinf": flow.vinf,
            "FC_Sref": manager.sref,
            "FC_Temp": flow.temperature,
            "FC_Pres": flow.pressure,
            "FC_Rho": flow.density,
        },
        lam_cf_name=manager.lam_cf_name,
        turb_cf_name=manager.turb_cf_name,
        rows=[replace(row) for row in manager.rows],
        excrescences=[replace(item) for item in manager.ledger.items],
        totals=totals,
        reynolds_divisor=manager.reynolds_divisor,
        lref_decimals=manager.lref_significant_figures(),
    )
