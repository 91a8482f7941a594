"""
Per-Row Derivation Pipeline
===========================

The stages that fill in the derived fields of every drag row, in order:

1. Wetted area (from tagged areas, then folded by the grouping rules)
2. Reference length
3. Reynolds number
4. Skin friction coefficient
5. Fineness ratio
6. Form factor
7. Ancestor overwrite (see grouping.py)
8. Drag area f = Swet * Q * Cf * FF
9. Drag coefficient CD = f / Sref

Each stage assigns -1 to every row when no geometry snapshot exists.
A row whose surface is missing from the snapshot keeps -1 for its
fineness ratio and form factor, with Lref falling back to 1.0.
Sub-surface rows repeat the value of the row before them for every
quantity except wetted area.
"""

import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from .atmosphere import FlowCondition
from .config import (
    DEFAULT_CONFIG,
    SENTINEL,
    NEAR_ZERO_LENGTH,
    FALLBACK_REFERENCE_LENGTH,
    ParasiteDragConfig,
)
from .correlations import (
    LaminarCfEqn,
    TurbulentCfEqn,
    calc_lam_cf,
    calc_turb_cf,
    calc_ff_wing,
    calc_ff_body,
    ff_name,
)
from .debugger import debug_section, debug_step
from .grouping import update_wetted_area_totals, is_line_item
from .models import (
    DegenStick,
    DegenSurface,
    DragRow,
    GeometrySnapshot,
    SurfaceType,
    Vehicle,
)
from .units import LengthUnit

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _surface_for(snapshot: GeometrySnapshot, row: DragRow) -> Optional[DegenSurface]:
    return snapshot.get_surface(row.component_id, row.source_surface)


# =============================================================================
# Stage 1: Wetted Area
# =============================================================================

def calculate_wetted_areas(
    rows: List[DragRow],
    vehicle: Vehicle,
    snapshot: Optional[GeometrySnapshot],
):
    """Look up each row's tagged wetted area, then fold grouped areas."""
    debug_section("Wetted Area")
    if snapshot is None:
        for row in rows:
            row.swet = SENTINEL
        return

    for row in rows:
        comp = vehicle.find_component(row.component_id)
        sub_name = None
        if row.is_sub_surface:
            sub = comp.get_sub_surface(row.sub_surface_id)
            sub_name = sub.name if sub is not None else row.sub_surface_id
        tag = GeometrySnapshot.tag(comp.name, row.surf_num, sub_name)

        area = snapshot.get_wetted_area(tag)
        if area is None:
            logger.warning("No wetted area for tag %r, using 0", tag)
            area = 0.0
        row.swet = area

    update_wetted_area_totals(rows, vehicle)

    for row in rows:
        debug_step("Wetted Area", row.label, "", {}, row.swet, "Swet")


# =============================================================================
# Stage 2: Reference Length
# =============================================================================

def reference_chord(stick: DegenStick) -> float:
    """
    Area-weighted mean chord of a lifting surface.

    Each section between stations i and i+1 has area
    span_i * (c_i + c_i+1) / 2, with span_i the distance between the
    leading edge points.
    """
    n = stick.num_sections
    if n == 0:
        return 0.0
    spans = np.linalg.norm(np.diff(stick.xle, axis=0), axis=1)[:n]
    chords = stick.chord
    sec_area = spans * 0.5 * (chords[:n] + chords[1:n + 1])
    total_area = np.sum(sec_area)
    if total_area <= 0:
        return 0.0
    return float(np.sum(chords[:n] * sec_area) / total_area)


def body_length(stick: DegenStick) -> float:
    """Distance between the first and last leading edge points."""
    if stick.num_stations == 0:
        return 0.0
    return float(np.linalg.norm(stick.xle[0] - stick.xle[-1]))


def reference_length(surface: DegenSurface) -> float:
    """
    Reference length of a surface.

    Lifting surfaces use the weighted chord and bodies the end-to-end
    length. A degenerate result falls back to the other method, then to
    1.0.
    """
    if surface.surface_type == SurfaceType.WING:
        methods = (reference_chord, body_length)
    else:
        methods = (body_length, reference_chord)

    for method in methods:
        lref = method(surface.stick)
        if lref > NEAR_ZERO_LENGTH:
            return lref

    logger.debug(
        "Degenerate reference length on %s surface %d, using %.1f",
        surface.component_id, surface.surface_index, FALLBACK_REFERENCE_LENGTH
    )
    return FALLBACK_REFERENCE_LENGTH


def calculate_reference_lengths(rows: List[DragRow], snapshot: Optional[GeometrySnapshot]):
    debug_section("Reference Length")
    for i, row in enumerate(rows):
        if snapshot is None:
            row.lref = SENTINEL
        elif row.is_sub_surface:
            row.lref = rows[i - 1].lref
        else:
            surface = _surface_for(snapshot, row)
            if surface is None:
                logger.warning(
                    "No degenerate surface %d for component %s, using Lref %.1f",
                    row.source_surface, row.component_id, FALLBACK_REFERENCE_LENGTH
                )
                row.lref = FALLBACK_REFERENCE_LENGTH
                continue
            row.lref = reference_length(surface)
            debug_step("Reference Length", row.label, "", {"shape": row.shape_type.value},
                       row.lref, "Lref")


# =============================================================================
# Stage 3: Reynolds Number
# =============================================================================

def calculate_reynolds_numbers(
    rows: List[DragRow],
    flow: FlowCondition,
    length_unit: LengthUnit,
    snapshot: Optional[GeometrySnapshot],
):
    debug_section("Reynolds Number")
    for i, row in enumerate(rows):
        if snapshot is None:
            row.re = SENTINEL
        elif row.is_sub_surface:
            row.re = rows[i - 1].re
        else:
            row.re = flow.reynolds_number(row.lref, length_unit)
            debug_step("Reynolds", row.label, "Re = V * Lref / nu",
                       {"V": flow.true_airspeed(), "Lref": row.lref,
                        "nu": flow.kinematic_viscosity},
                       row.re, "Re")


def magnitude(value: float) -> float:
    """Power of ten of a positive value (1 for non-positive values)."""
    if value <= 0 or not math.isfinite(value):
        return 1.0
    return 10.0 ** math.floor(math.log10(value))


def reynolds_divisor(rows: List[DragRow]) -> float:
    """Display divisor for Reynolds numbers: power of ten of the largest."""
    values = [row.re for row in rows]
    if not values:
        return 1.0
    return magnitude(max(values))


# =============================================================================
# Stage 4: Skin Friction
# =============================================================================

def friction_coefficient(
    row: DragRow,
    flow: FlowCondition,
    lam_eqn: LaminarCfEqn,
    turb_eqn: TurbulentCfEqn,
    length_unit: LengthUnit,
    config: ParasiteDragConfig = DEFAULT_CONFIG,
) -> float:
    """
    Mixed laminar/turbulent skin friction of a row.

    With a laminar fraction p of the reference length:
        Cf = Cf_turb(Re) - p * Cf_turb(Re_lam) + p * Cf_lam(Re_lam)
    where Re_lam is the Reynolds number of the laminar run p * Lref.
    A laminar percentage of 0 (or -1) means fully turbulent.
    """
    def turbulent(re):
        return calc_turb_cf(
            re, turb_eqn,
            ref_length=row.lref,
            roughness=row.roughness,
            gamma=flow.specific_heat_ratio,
            taw_tw_ratio=row.taw_tw_ratio,
            te_tw_ratio=row.te_tw_ratio,
            mach=flow.mach,
            length_unit=length_unit,
            tolerance=config.solver_tolerance,
            max_iterations=config.solver_max_iterations,
        )

    if row.perc_lam in (0, SENTINEL):
        return turbulent(row.re)

    if row.re == 0:
        return 0.0

    lam_fraction = row.perc_lam / 100.0
    re_lam = flow.reynolds_number(lam_fraction * row.lref, length_unit)

    cf_full_turb = turbulent(row.re)
    cf_part_turb = turbulent(re_lam)
    cf_part_lam = calc_lam_cf(re_lam, lam_eqn)

    return cf_full_turb - cf_part_turb * lam_fraction + cf_part_lam * lam_fraction


def calculate_friction_coefficients(
    rows: List[DragRow],
    flow: FlowCondition,
    lam_eqn: LaminarCfEqn,
    turb_eqn: TurbulentCfEqn,
    length_unit: LengthUnit,
    snapshot: Optional[GeometrySnapshot],
    config: ParasiteDragConfig = DEFAULT_CONFIG,
):
    debug_section("Skin Friction")
    for i, row in enumerate(rows):
        if snapshot is None:
            row.cf = SENTINEL
        elif row.is_sub_surface:
            row.cf = rows[i - 1].cf
        else:
            row.cf = friction_coefficient(row, flow, lam_eqn, turb_eqn, length_unit, config)
            debug_step("Skin Friction", row.label,
                       "Cf = Cf_t(Re) - p Cf_t(Re_lam) + p Cf_l(Re_lam)",
                       {"Re": row.re, "perc_lam": row.perc_lam},
                       row.cf, "Cf")


# =============================================================================
# Stage 5: Fineness Ratio
# =============================================================================

def fineness_ratio(surface: DegenSurface, lref: float) -> float:
    """
    Lifting surfaces: maximum thickness/chord.
    Bodies: nominal diameter over reference length, with the diameter
    taken from the largest cross-section area.
    """
    stick = surface.stick
    if surface.surface_type == SurfaceType.WING:
        return float(np.max(stick.toc)) if stick.toc.size else 0.0

    max_area = float(np.max(stick.sect_area)) if stick.sect_area.size else 0.0
    diameter = 2.0 * math.sqrt(max_area / math.pi)
    return diameter / lref


def calculate_fineness_ratios(rows: List[DragRow], snapshot: Optional[GeometrySnapshot]):
    debug_section("Fineness Ratio")
    for i, row in enumerate(rows):
        if snapshot is None:
            row.fine_rat = SENTINEL
        elif row.is_sub_surface:
            row.fine_rat = rows[i - 1].fine_rat
        else:
            surface = _surface_for(snapshot, row)
            if surface is None:
                row.fine_rat = SENTINEL
                continue
            row.fine_rat = fineness_ratio(surface, row.lref)
            debug_step("Fineness Ratio", row.label, "", {"Lref": row.lref},
                       row.fine_rat, "FR")


# =============================================================================
# Stage 6: Form Factor
# =============================================================================

def average_sweeps(stick: DegenStick) -> Tuple[float, float]:
    """
    Area-weighted quarter and half chord sweep of a lifting surface (rad).

    Per section: width = areaTop / mean(perimTop), and
        sweep_x = atan(tan(sweep_le) + x * (c_i - c_i+1) / width)
    weighted by c_i * width.
    """
    n = stick.num_sections
    if n == 0:
        return 0.0, 0.0

    chords = stick.chord
    width = stick.area_top / (0.5 * (stick.perim_top[:n] + stick.perim_top[1:n + 1]))
    taper = (chords[:n] - chords[1:n + 1]) / width
    tan_le = np.tan(np.radians(stick.sweep_le[:n]))
    sweep25 = np.arctan(tan_le + 0.25 * taper)
    sweep50 = np.arctan(tan_le + 0.50 * taper)

    sec_area = chords[:n] * width
    total_area = np.sum(sec_area)
    return (float(np.sum(sec_area * sweep25) / total_area),
            float(np.sum(sec_area * sweep50) / total_area))


def form_factor(row: DragRow, surface: DegenSurface, mach: float) -> float:
    """
    Compute a row's form factor; the Jenkinson tail equation also sets Q.

    Bodies take their maximum area from the cross-section areas
    (sect_area), not the top-view areas, for both the L/sqrt(A) fineness
    and the Jenkinson fuselage equation.
    """
    stick = surface.stick
    if surface.surface_type == SurfaceType.WING:
        with np.errstate(divide="ignore", invalid="ignore"):
            sweep25, sweep50 = average_sweeps(stick)
        result = calc_ff_wing(row.fine_rat, row.ff_eqn, row.perc_lam, sweep25, sweep50, mach)
        if result.q_factor is not None:
            row.q_factor = result.q_factor
        debug_step("Form Factor", row.label, ff_name(row.ff_eqn),
                   {"t/c": row.fine_rat, "sweep25": sweep25, "sweep50": sweep50, "M": mach},
                   result.value, "FF")
        return result.value

    max_area = float(np.max(stick.sect_area)) if stick.sect_area.size else 0.0
    with np.errstate(divide="ignore", invalid="ignore"):
        fineness = float(np.float64(1.0) / row.fine_rat)
        fineness_alt = float(np.float64(row.lref) / np.sqrt(max_area))
    value = calc_ff_body(fineness, fineness_alt, row.ff_eqn, row.lref, max_area, mach)
    debug_step("Form Factor", row.label, ff_name(row.ff_eqn),
               {"L/D": fineness, "L/sqrt(A)": fineness_alt, "M": mach},
               value, "FF")
    return value


def calculate_form_factors(
    rows: List[DragRow],
    snapshot: Optional[GeometrySnapshot],
    mach: float,
):
    debug_section("Form Factor")
    for i, row in enumerate(rows):
        if snapshot is None:
            row.ff_out = SENTINEL
            row.ff_eqn_name = ""
        elif row.is_sub_surface:
            row.ff_out = rows[i - 1].ff_out
            row.ff_eqn_name = rows[i - 1].ff_eqn_name
        else:
            row.ff_eqn_name = ff_name(row.ff_eqn)
            surface = _surface_for(snapshot, row)
            if surface is None:
                row.ff_out = SENTINEL
                continue
            row.ff_out = form_factor(row, surface, mach)


# =============================================================================
# Stages 8-9: Drag Area and Coefficient
# =============================================================================

def drag_area(row: DragRow) -> float:
    """
    f = Swet * Q * Cf * FF, using the user form factor when given.

    A row whose form factor could not be computed has no drag area.
    """
    q = row.q_factor if row.q_factor != SENTINEL else 1.0
    ff = row.ff_user if row.has_user_ff else row.ff_out
    if ff == SENTINEL:
        return 0.0
    return row.swet * q * row.cf * ff


def calculate_drag_areas(rows: List[DragRow], vehicle: Vehicle, has_geometry: bool):
    debug_section("Drag Area")
    for row in rows:
        if not has_geometry:
            row.f = SENTINEL
        elif is_line_item(row, vehicle):
            row.f = drag_area(row)
            debug_step("Drag Area", row.label, "f = Swet * Q * Cf * FF",
                       {"Swet": row.swet, "Q": row.q_factor, "Cf": row.cf,
                        "FF": row.ff_user if row.has_user_ff else row.ff_out},
                       row.f, "f")
        else:
            row.f = 0.0


def calculate_drag_coefficients(
    rows: List[DragRow],
    vehicle: Vehicle,
    sref: float,
    has_geometry: bool,
):
    debug_section("Drag Coefficient")
    if has_geometry and sref <= 0:
        logger.warning("Reference area %.6g is not positive, CD set to 0", sref)

    for row in rows:
        if not has_geometry:
            row.cd = SENTINEL
        elif not is_line_item(row, vehicle) or sref <= 0 or math.isnan(row.f):
            row.cd = 0.0
        else:
            row.cd = row.f / sref
            debug_step("Drag Coefficient", row.label, "CD = f / Sref",
                       {"f": row.f, "Sref": sref}, row.cd, "CD")
