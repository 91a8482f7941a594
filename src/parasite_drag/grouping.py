"""
Ancestor and Grouping Resolver
==============================

Rules that tie rows together across the component tree:

- wetted area folding: sub-surface and grouped-descendant wetted areas
  are summed into the owning (or ancestor) row
- ancestor overwrite: rows of a component grouped with an ancestor take
  that ancestor's drag properties
- line item rule: which rows contribute a drag area of their own
"""

import logging
from typing import List, Optional

from .config import NONE_ID
from .models import Component, DragRow, Vehicle

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def row_ancestor_id(vehicle: Vehicle, row: DragRow) -> str:
    """Ancestor ID of a row at its grouped ancestor generation."""
    return vehicle.get_ancestor_id(row.component_id, row.grouped_ancestor_gen)


def _is_expanded(component: Optional[Component]) -> bool:
    return component is not None and component.expanded_list


def _sub_surface_included(vehicle: Vehicle, row: DragRow) -> bool:
    comp = vehicle.find_component(row.component_id)
    if comp is None:
        return False
    sub = comp.get_sub_surface(row.sub_surface_id)
    return sub is not None and sub.include_in_wetted_area


# =============================================================================
# Wetted Area Folding
# =============================================================================

def fold_sub_surface_areas(rows: List[DragRow], vehicle: Vehicle):
    """
    Add included sub-surface wetted areas to the first row of their owner.

    Only collapsed (not expanded) owners and rows with surface number 0
    receive the area.
    """
    for i, target in enumerate(rows):
        if target.is_sub_surface or target.surf_num != 0:
            continue
        if _is_expanded(vehicle.find_component(target.component_id)):
            continue
        for j, source in enumerate(rows):
            if i == j or not source.is_sub_surface:
                continue
            if not _sub_surface_included(vehicle, source):
                continue
            if (target.component_id == source.component_id
                    or target.component_id == row_ancestor_id(vehicle, source)):
                target.swet += source.swet


def fold_grouped_areas(rows: List[DragRow], vehicle: Vehicle):
    """
    Add wetted areas of symmetric copies and grouped descendants to the
    row that represents them.

    A main row i absorbs main row j of the same shape type when row i is
    not row-expanded and either
    - j is a surface of the same component and i is its first row,
    - j's component is grouped with i's component as ancestor, i is a
      first row and j's component is collapsed, or
    - i belongs to a custom component ([W]/[B] label).
    """
    for i, target in enumerate(rows):
        if target.is_sub_surface:
            continue
        for j, source in enumerate(rows):
            if i == j or source.is_sub_surface:
                continue

            same_component = (
                target.component_id == source.component_id and target.surf_num == 0
            )
            grouped_descendant = (
                target.component_id != source.component_id
                and target.component_id == row_ancestor_id(vehicle, source)
                and target.surf_num == 0
                and not _is_expanded(vehicle.find_component(source.component_id))
            )
            if ((same_component or grouped_descendant or target.is_custom_part)
                    and target.shape_type == source.shape_type
                    and not target.expanded_list):
                target.swet += source.swet


def update_wetted_area_totals(rows: List[DragRow], vehicle: Vehicle):
    """Run both wetted area folding passes."""
    fold_sub_surface_areas(rows, vehicle)
    fold_grouped_areas(rows, vehicle)


# =============================================================================
# Ancestor Overwrite
# =============================================================================

def find_ancestor_row(rows: List[DragRow], ancestor_id: str) -> Optional[DragRow]:
    """First main row of the ancestor component (surface number 0)."""
    for row in rows:
        if row.component_id == ancestor_id and row.surf_num == 0 and not row.is_sub_surface:
            return row
    return None


def overwrite_from_ancestors(rows: List[DragRow], vehicle: Vehicle):
    """
    Copy drag properties from the grouped ancestor's row.

    Rows with a positive ancestor generation take the ancestor row's
    Lref, Re, fineness ratio, form factor (value and equation), laminar
    percentage, Q and Cf.
    """
    for row in rows:
        if row.grouped_ancestor_gen <= 0:
            continue
        ancestor_id = row_ancestor_id(vehicle, row)
        if ancestor_id == NONE_ID:
            logger.debug("No ancestor at generation %d for %s", row.grouped_ancestor_gen, row.label)
            continue
        source = find_ancestor_row(rows, ancestor_id)
        if source is None or source is row:
            continue

        row.lref = source.lref
        row.re = source.re
        row.fine_rat = source.fine_rat
        row.ff_out = source.ff_out
        row.ff_eqn = source.ff_eqn
        row.ff_eqn_name = source.ff_eqn_name
        row.perc_lam = source.perc_lam
        row.q_factor = source.q_factor
        row.cf = source.cf


# =============================================================================
# Line Item Rule
# =============================================================================

def is_line_item(row: DragRow, vehicle: Vehicle) -> bool:
    """
    Whether a row contributes its own drag area.

    A main row counts when it is a representative row (surface number 0,
    an expanded component, or a custom part) and it is not grouped into a
    collapsed ancestor. A sub-surface row counts only when its sub-surface
    is included in the wetted area and its component is expanded.
    """
    comp = vehicle.find_component(row.component_id)
    comp_expanded = _is_expanded(comp)

    if row.is_sub_surface:
        return _sub_surface_included(vehicle, row) and comp_expanded

    representative = row.surf_num == 0 or comp_expanded or row.is_custom_part
    if not representative:
        return False

    if row.grouped_ancestor_gen == 0 or comp_expanded:
        return True
    ancestor = vehicle.find_component(row_ancestor_id(vehicle, row))
    return _is_expanded(ancestor)
