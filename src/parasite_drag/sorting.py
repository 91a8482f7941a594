"""
Row Ordering
============

Display orders for the drag table. Every order keeps a component's rows
together and places rows grouped with an ancestor right after it.

- NONE: vehicle order, with each component's group kept together
- WETTED_AREA / PERCENT_CD: groups ordered by descending key of their
  leading row
"""

from enum import Enum
from typing import Callable, List

from .grouping import row_ancestor_id
from .models import DragRow, Vehicle


class SortOrder(Enum):
    """Table sort orders."""
    NONE = "none"
    WETTED_AREA = "wetted_area"
    PERCENT_CD = "percent_cd"


def _append_group(
    rows: List[DragRow],
    vehicle: Vehicle,
    lead: int,
    is_sorted: List[bool],
    ordered: List[DragRow],
):
    """Place row ``lead``, then its component's rows, then its descendants."""
    lead_id = rows[lead].component_id
    is_sorted[lead] = True
    ordered.append(rows[lead])

    for j, row in enumerate(rows):
        if not is_sorted[j] and row.component_id == lead_id:
            is_sorted[j] = True
            ordered.append(row)

    for j, row in enumerate(rows):
        if not is_sorted[j] and row_ancestor_id(vehicle, row) == lead_id:
            is_sorted[j] = True
            ordered.append(row)


def group_by_ancestor(rows: List[DragRow], vehicle: Vehicle) -> List[DragRow]:
    """Keep rows in order but pull same-component and descendant rows forward."""
    is_sorted = [False] * len(rows)
    ordered: List[DragRow] = []
    for i in range(len(rows)):
        if not is_sorted[i]:
            _append_group(rows, vehicle, i, is_sorted, ordered)
    return ordered


def sort_by_key(
    rows: List[DragRow],
    vehicle: Vehicle,
    key: Callable[[DragRow], float],
) -> List[DragRow]:
    """
    Order groups by descending ``key`` of their leading row.

    Selection sort with a rotating start index: on each pass the first
    unsorted row at or after the cursor is the candidate, and a later
    unsorted row replaces it only when strictly larger.
    """
    n = len(rows)
    is_sorted = [False] * n
    ordered: List[DragRow] = []

    i = 0
    while not all(is_sorted):
        if not is_sorted[i]:
            best = i
            for j in range(n):
                if not is_sorted[j] and key(rows[j]) > key(rows[best]):
                    best = j
            _append_group(rows, vehicle, best, is_sorted, ordered)
        i = i + 1 if i < n - 1 else 0

    return ordered


def sort_rows(rows: List[DragRow], vehicle: Vehicle, order: SortOrder) -> List[DragRow]:
    """Apply the ancestor grouping, then the requested order."""
    rows = group_by_ancestor(rows, vehicle)
    if order == SortOrder.WETTED_AREA:
        return sort_by_key(rows, vehicle, lambda row: row.swet)
    if order == SortOrder.PERCENT_CD:
        return sort_by_key(rows, vehicle, lambda row: row.perc_total_cd)
    return rows
