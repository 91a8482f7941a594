"""
Row Model Builder
=================

Turns the active vehicle components into the ordered list of drag rows.

Row Layout per Component:
------------------------
1. One row per surface. A surface with the same type as the surface
   before it is a symmetric copy: it takes the previous row's drag
   inputs, is numbered by its surface index and labelled "<name>_<j>".
   Otherwise the row takes the component's inputs and is labelled
   "<name>" (or "[B] <name>" / "[W] <name>" for custom components, which
   also number every surface).
2. For each sub-surface, one row per surface, labelled
   "[ss] <sub name>_<k>", inheriting the previous row's inputs.

Disk surfaces carry no drag and get no rows.
"""

import logging
from typing import List, Optional

from .config import WING_PREFIX, BODY_PREFIX, SUB_SURFACE_PREFIX
from .models import Component, DragRow, SurfaceType, Vehicle

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def select_active_components(vehicle: Vehicle, set_name: Optional[str] = None) -> List[str]:
    """
    IDs of the analyzable components of a set, in vehicle order.

    Mesh, hinge and blank components, and components whose first surface
    is a disk, are left out.
    """
    active = []
    for comp_id in vehicle.get_component_set(set_name):
        comp = vehicle.find_component(comp_id)
        if comp is not None and comp.is_analyzable:
            active.append(comp_id)
    return active


def _row_surfaces(component: Component) -> List[int]:
    return [j for j, s in enumerate(component.surface_types) if s != SurfaceType.DISK]


def count_rows(vehicle: Vehicle, component_ids: List[str]) -> int:
    """Number of rows ``build_rows`` produces for these components."""
    total = 0
    for comp_id in component_ids:
        comp = vehicle.find_component(comp_id)
        if comp is None:
            continue
        n_surfs = len(_row_surfaces(comp))
        total += n_surfs * (1 + len(comp.sub_surfaces))
    return total


def _main_label(component: Component, surface_type: SurfaceType) -> str:
    if component.is_custom:
        prefix = BODY_PREFIX if surface_type == SurfaceType.BODY else WING_PREFIX
        return f"{prefix} {component.name}"
    return component.name


def build_component_rows(component: Component) -> List[DragRow]:
    """Rows of a single component (surfaces first, then sub-surfaces)."""
    rows: List[DragRow] = []
    surfaces = _row_surfaces(component)

    for j in surfaces:
        surface_type = component.surface_types[j]
        row = DragRow(
            component_id=component.id,
            label="",
            shape_type=surface_type,
            source_surface=j,
            ff_eqn=component.ff_eqn_for(surface_type),
            grouped_ancestor_gen=component.grouped_ancestor_gen,
        )

        is_symmetric_copy = (
            j > 0
            and rows
            and surface_type == component.surface_types[j - 1]
        )
        if is_symmetric_copy:
            row.copy_inputs_from(rows[-1])
            row.surf_num = j
            row.expanded_list = False
            row.label = f"{component.name}_{j}"
        else:
            row.perc_lam = component.perc_lam
            row.ff_user = component.ff_user
            row.q_factor = component.q_factor
            row.roughness = component.roughness
            row.te_tw_ratio = component.te_tw_ratio
            row.taw_tw_ratio = component.taw_tw_ratio
            row.expanded_list = component.expanded_list
            row.surf_num = j if component.is_custom else 0
            row.label = _main_label(component, surface_type)

        rows.append(row)

    for sub in component.sub_surfaces:
        for k in surfaces:
            surface_type = component.surface_types[k]
            row = DragRow(
                component_id=component.id,
                sub_surface_id=sub.id,
                label=f"{SUB_SURFACE_PREFIX} {sub.name}_{k}",
                shape_type=surface_type,
                surf_num=k,
                source_surface=k,
                ff_eqn=component.ff_eqn_for(surface_type),
                grouped_ancestor_gen=-1,
                expanded_list=False,
            )
            row.copy_inputs_from(rows[-1])
            rows.append(row)

    return rows


def build_rows(vehicle: Vehicle, component_ids: List[str]) -> List[DragRow]:
    """
    Build the ordered row list for the active components.

    Parameters:
    ----------
    vehicle : Vehicle
        Vehicle context

    component_ids : List[str]
        Active component IDs in display order

    Returns:
    -------
    List[DragRow]
        Rows with inputs filled and derived fields at the sentinel
    """
    rows: List[DragRow] = []
    for comp_id in component_ids:
        comp = vehicle.find_component(comp_id)
        if comp is None:
            logger.warning("Component %s not found, skipping", comp_id)
            continue
        rows.extend(build_component_rows(comp))
    return rows
