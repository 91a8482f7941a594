"""
Excrescence Ledger
==================

User-entered drag increments added on top of the geometry build-up.

Excrescence Kinds:
-----------------
- COUNT: drag counts, CD = input / 10000
- CD: CD given directly
- PERCENT_GEOM: percent of the geometry CD
- MARGIN: percent margin on the final total (at most one per ledger)
- DRAG_AREA: drag area D/q, CD = input / Sref

Percent-of-geometry, margin and drag area items depend on the geometry
total and are recomputed with ``recompute()`` whenever it changes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..config import EXCRESCENCE_LABEL_STEM

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ExcrescenceType(Enum):
    """Excrescence kinds."""
    COUNT = "count"
    CD = "cd"
    PERCENT_GEOM = "percent_geom"
    MARGIN = "margin"
    DRAG_AREA = "drag_area"

    @property
    def type_string(self) -> str:
        return _TYPE_STRINGS[self]

    @property
    def limits(self) -> Tuple[float, float]:
        return _INPUT_LIMITS[self]


_TYPE_STRINGS = {
    ExcrescenceType.COUNT: "Count (10000*CD)",
    ExcrescenceType.CD: "CD",
    ExcrescenceType.PERCENT_GEOM: "% of Cd_Geom",
    ExcrescenceType.MARGIN: "Margin",
    ExcrescenceType.DRAG_AREA: "Drag Area (D/q)",
}

_INPUT_LIMITS = {
    ExcrescenceType.CD: (0.0, 0.2),
    ExcrescenceType.COUNT: (0.0, 2000.0),
    ExcrescenceType.PERCENT_GEOM: (0.0, 100.0),
    ExcrescenceType.MARGIN: (0.0, 100.0),
    ExcrescenceType.DRAG_AREA: (0.0, 10.0),
}


def clamp_input(value: float, excres_type: ExcrescenceType) -> float:
    lo, hi = excres_type.limits
    return min(max(value, lo), hi)


def margin_amount(subtotal_cd: float, margin_percent: float) -> float:
    """
    Margin increment that makes the margin item ``margin_percent`` of the
    final total: subtotal / ((100 - p) / 100) - subtotal.
    """
    if subtotal_cd <= 0:
        return 0.0
    if margin_percent >= 100.0:
        logger.warning("Margin of %.1f%% has no finite total, using 0", margin_percent)
        return 0.0
    return subtotal_cd / ((100.0 - margin_percent) / 100.0) - subtotal_cd


@dataclass
class ExcrescenceItem:
    """
    One excrescence line.

    Attributes:
    ----------
    label : str
        Display label

    excres_type : ExcrescenceType
        Kind of increment

    input_value : float
        Raw user value, interpreted according to the kind

    amount : float
        Resolved CD increment

    f : float
        Drag area, amount * Sref

    perc_total_cd : float
        Share of the total CD
    """
    label: str
    excres_type: ExcrescenceType
    input_value: float
    amount: float = 0.0
    f: float = 0.0
    perc_total_cd: float = 0.0

    @property
    def type_string(self) -> str:
        return self.excres_type.type_string

    @property
    def is_margin(self) -> bool:
        return self.excres_type == ExcrescenceType.MARGIN

    def to_dict(self) -> dict:
        return {
            "Excres_Label": self.label,
            "Excres_Type": self.type_string,
            "Excres_Input": self.input_value,
            "Excres_Amount": self.amount,
            "Excres_f": self.f,
            "Excres_PercTotalCD": self.perc_total_cd,
        }


class ExcrescenceLedger:
    """
    Ordered list of excrescence items with a current-item cursor.

    ``current_index`` is -1 when the ledger is empty.
    """

    def __init__(self):
        self.items: List[ExcrescenceItem] = []
        self.current_index: int = -1

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def current(self) -> Optional[ExcrescenceItem]:
        if 0 <= self.current_index < len(self.items):
            return self.items[self.current_index]
        return None

    def has_margin(self) -> bool:
        return any(item.is_margin for item in self.items)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add(
        self,
        excres_type: ExcrescenceType = ExcrescenceType.COUNT,
        value: float = 0.0,
        label: Optional[str] = None,
        sref: float = 1.0,
    ) -> Optional[ExcrescenceItem]:
        """
        Append an item and make it current.

        A second margin item is refused: the ledger is left unchanged and
        None is returned.

        Parameters:
        ----------
        excres_type : ExcrescenceType
            Kind of increment

        value : float
            Raw input, clamped to the kind's limits

        label : str, optional
            Display label; defaults to "EXCRES_<n>"

        sref : float
            Reference area used for the initial drag area

        Returns:
        -------
        ExcrescenceItem or None
        """
        if excres_type == ExcrescenceType.MARGIN and self.has_margin():
            logger.debug("Ledger already holds a margin item, add ignored")
            return None

        if not label:
            label = f"{EXCRESCENCE_LABEL_STEM}{len(self.items)}"

        value = clamp_input(value, excres_type)
        if excres_type == ExcrescenceType.COUNT:
            amount = value / 10000.0
        elif excres_type == ExcrescenceType.CD:
            amount = value
        else:
            # resolved by recompute()
            amount = 0.0

        item = ExcrescenceItem(
            label=label,
            excres_type=excres_type,
            input_value=value,
            amount=amount,
            f=amount * sref,
            perc_total_cd=0.0,
        )
        self.items.append(item)
        self.current_index = len(self.items) - 1
        return item

    def delete(self, index: Optional[int] = None):
        """Delete the item at ``index`` (or the current item)."""
        if index is not None:
            self.current_index = index
        if 0 <= self.current_index < len(self.items):
            del self.items[self.current_index]
        self.current_index = 0 if self.items else -1

    def clear(self):
        self.items = []
        self.current_index = -1

    def set_current(self, index: int):
        if not 0 <= index < len(self.items):
            raise IndexError(f"No excrescence at index {index}")
        self.current_index = index

    def set_current_label(self, label: str):
        if self.current is not None:
            self.current.label = label

    def set_current_value(self, value: float):
        """Change the raw input of the current item (clamped to limits)."""
        item = self.current
        if item is None:
            return
        item.input_value = clamp_input(value, item.excres_type)

    # -------------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------------

    def subtotal_amount(self) -> float:
        """Sum of all non-margin increments."""
        return sum(item.amount for item in self.items if not item.is_margin)

    def total_amount(self) -> float:
        return sum(item.amount for item in self.items)

    def total_f(self) -> float:
        return sum(item.f for item in self.items)

    def total_percent(self) -> float:
        return sum(item.perc_total_cd for item in self.items)

    def recompute(self, geometry_cd: float, sref: float, has_geometry: bool = True):
        """
        Resolve every item's CD and drag area.

        Non-margin items are resolved first so that the margin sees the
        final subtotal.

        Parameters:
        ----------
        geometry_cd : float
            Sum of the positive component row CDs

        sref : float
            Reference area

        has_geometry : bool
            False before a geometry snapshot is processed
        """
        for item in self.items:
            value = item.input_value
            kind = item.excres_type
            if kind == ExcrescenceType.COUNT:
                item.amount = value / 10000.0
            elif kind == ExcrescenceType.CD:
                item.amount = value
            elif kind == ExcrescenceType.PERCENT_GEOM:
                if has_geometry and geometry_cd > 0:
                    item.amount = value / 100.0 * geometry_cd
                else:
                    item.amount = 0.0
            elif kind == ExcrescenceType.DRAG_AREA:
                if has_geometry and geometry_cd > 0 and sref > 0:
                    item.amount = value / sref
                else:
                    item.amount = 0.0

        subtotal_cd = geometry_cd + self.subtotal_amount()
        for item in self.items:
            if item.is_margin:
                if has_geometry:
                    item.amount = margin_amount(subtotal_cd, item.input_value)
                else:
                    item.amount = 0.0

        if subtotal_cd > 0:
            for item in self.items:
                item.f = item.amount * sref

    def update_percentages(self, total_cd: float, has_geometry: bool = True):
        for item in self.items:
            if has_geometry and total_cd > 0:
                item.perc_total_cd = item.amount / total_cd
            else:
                item.perc_total_cd = 0.0
