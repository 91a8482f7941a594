"""
Skin Friction Correlations
==========================

Laminar and turbulent flat-plate skin friction coefficient laws.

Turbulent laws fall into four groups:
- explicit curve fits in Re (power laws, log-law fits)
- implicit laws solved by Newton-Raphson (Schoenherr, von Karman,
  Karman-Schoenherr)
- roughness-dominated laws in L/k
- the White-Christoph compressible law with heat transfer

All arithmetic is done with numpy scalars under ``np.errstate`` so that a
degenerate input yields NaN/inf instead of raising.

References:
----------
- Schlichting, H., "Boundary Layer Theory"
- White, F. M., "Viscous Fluid Flow"
- Hoerner, S. F., "Fluid-Dynamic Drag"
"""

import logging
from enum import Enum
from typing import Callable, Dict, NamedTuple

import numpy as np
from scipy import optimize

from ..units import LengthUnit, INCHES_PER_UNIT

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# Recovery factor and viscosity power-law exponent for the heat transfer law
RECOVERY_FACTOR = 0.89
VISCOSITY_POWER_EXPONENT = 0.67

# Newton-Raphson defaults for the implicit laws
DEFAULT_SOLVER_TOLERANCE = 1e-12
DEFAULT_SOLVER_MAX_ITERATIONS = 100

# Display name returned for an unrecognized selector
UNKNOWN_EQUATION_NAME = "ERROR"


class LaminarCfEqn(Enum):
    """Laminar skin friction laws."""
    BLASIUS = "blasius"
    BLASIUS_W_HEAT = "blasius_w_heat"


class TurbulentCfEqn(Enum):
    """Turbulent skin friction laws."""
    WHITE_CHRISTOPH_COMPRESSIBLE = "white_christoph_compressible"
    SCHLICHTING_PRANDTL = "schlichting_prandtl"
    SCHLICHTING_COMPRESSIBLE = "schlichting_compressible"
    SCHLICHTING_INCOMPRESSIBLE = "schlichting_incompressible"
    SCHULTZ_GRUNOW_SCHOENHERR = "schultz_grunow_schoenherr"
    SCHULTZ_GRUNOW_HIGH_RE = "schultz_grunow_high_re"
    POWER_LAW_BLASIUS = "power_law_blasius"
    POWER_LAW_PRANDTL_LOW_RE = "power_law_prandtl_low_re"
    POWER_LAW_PRANDTL_MEDIUM_RE = "power_law_prandtl_medium_re"
    POWER_LAW_PRANDTL_HIGH_RE = "power_law_prandtl_high_re"
    EXPLICIT_FIT_SPALDING = "explicit_fit_spalding"
    EXPLICIT_FIT_SPALDING_CHI = "explicit_fit_spalding_chi"
    EXPLICIT_FIT_SCHOENHERR = "explicit_fit_schoenherr"
    IMPLICIT_SCHOENHERR = "implicit_schoenherr"
    IMPLICIT_KARMAN = "implicit_karman"
    IMPLICIT_KARMAN_SCHOENHERR = "implicit_karman_schoenherr"
    ROUGHNESS_WHITE = "roughness_white"
    ROUGHNESS_SCHLICHTING_LOCAL = "roughness_schlichting_local"
    ROUGHNESS_SCHLICHTING_AVG = "roughness_schlichting_avg"
    ROUGHNESS_SCHLICHTING_AVG_FLOW_CORRECTION = "roughness_schlichting_avg_flow_correction"
    HEAT_TRANSFER_WHITE_CHRISTOPH = "heat_transfer_white_christoph"


LAMINAR_CF_NAMES: Dict[LaminarCfEqn, str] = {
    LaminarCfEqn.BLASIUS: "Blasius",
    LaminarCfEqn.BLASIUS_W_HEAT: "Blasius w Heat Transfer",
}

TURBULENT_CF_NAMES: Dict[TurbulentCfEqn, str] = {
    TurbulentCfEqn.WHITE_CHRISTOPH_COMPRESSIBLE: "Compressible White-Christoph",
    TurbulentCfEqn.SCHLICHTING_PRANDTL: "Schlichting-Prandtl",
    TurbulentCfEqn.SCHLICHTING_COMPRESSIBLE: "Compressible Schlichting",
    TurbulentCfEqn.SCHLICHTING_INCOMPRESSIBLE: "Incompressible Schlichting",
    TurbulentCfEqn.SCHULTZ_GRUNOW_SCHOENHERR: "Schultz-Grunow Schoenherr",
    TurbulentCfEqn.SCHULTZ_GRUNOW_HIGH_RE: "High Reynolds Number Schultz-Grunow",
    TurbulentCfEqn.POWER_LAW_BLASIUS: "Blasius Power Law",
    TurbulentCfEqn.POWER_LAW_PRANDTL_LOW_RE: "Low Reynolds Number Prandtl Power Law",
    TurbulentCfEqn.POWER_LAW_PRANDTL_MEDIUM_RE: "Medium Reynolds Number Prandtl Power Law",
    TurbulentCfEqn.POWER_LAW_PRANDTL_HIGH_RE: "High Reynolds Number Prandtl Power Law",
    TurbulentCfEqn.EXPLICIT_FIT_SPALDING: "Spalding Explicit Empirical Fit",
    TurbulentCfEqn.EXPLICIT_FIT_SPALDING_CHI: "Spalding-Chi Explicit Empirical Fit",
    TurbulentCfEqn.EXPLICIT_FIT_SCHOENHERR: "Schoenherr Explicit Empirical Fit",
    TurbulentCfEqn.IMPLICIT_SCHOENHERR: "Schoenherr Implicit",
    TurbulentCfEqn.IMPLICIT_KARMAN: "Von Karman Implicit",
    TurbulentCfEqn.IMPLICIT_KARMAN_SCHOENHERR: "Karman-Schoenherr Implicit",
    TurbulentCfEqn.ROUGHNESS_WHITE: "White Roughness",
    TurbulentCfEqn.ROUGHNESS_SCHLICHTING_LOCAL: "Schlichting Local Roughness",
    TurbulentCfEqn.ROUGHNESS_SCHLICHTING_AVG: "Schlichting Avg Roughness",
    TurbulentCfEqn.ROUGHNESS_SCHLICHTING_AVG_FLOW_CORRECTION:
        "Schlichting Avg Roughness w Flow Correctioin",
    TurbulentCfEqn.HEAT_TRANSFER_WHITE_CHRISTOPH: "White-Christoph w Heat Transfer",
}


def lam_cf_name(eqn) -> str:
    """Display name of a laminar law ("ERROR" if unknown)."""
    return LAMINAR_CF_NAMES.get(eqn, UNKNOWN_EQUATION_NAME)


def turb_cf_name(eqn) -> str:
    """Display name of a turbulent law ("ERROR" if unknown)."""
    return TURBULENT_CF_NAMES.get(eqn, UNKNOWN_EQUATION_NAME)


# =============================================================================
# Laminar
# =============================================================================

def calc_lam_cf(re: float, eqn) -> float:
    """
    Laminar skin friction coefficient.

    Parameters:
    ----------
    re : float
        Reynolds number based on the laminar run length

    eqn : LaminarCfEqn
        Laminar law. The heat transfer variant and unknown selectors
        return 0.

    Returns:
    -------
    float
        Cf (0 for Re <= 0)
    """
    if eqn != LaminarCfEqn.BLASIUS or re <= 0:
        return 0.0
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(1.32824 / np.sqrt(np.float64(re)))


# =============================================================================
# Turbulent
# =============================================================================

class FrictionInputs(NamedTuple):
    """Inputs shared by the turbulent laws."""
    re: np.float64
    ref_length: np.float64
    roughness: np.float64
    gamma: np.float64
    taw_tw_ratio: np.float64
    te_tw_ratio: np.float64
    mach: np.float64
    inches_per_unit: float
    tolerance: float
    max_iterations: int


def _schoenherr_explicit(re):
    return (1.0 / (3.46 * np.log10(re) - 5.6)) ** 2.0


def _karman_seed(re):
    return 0.455 / np.log10(re) ** 2.58


# Implicit residuals and their derivatives with respect to Cf

def _schoenherr_residual(cf, re):
    return 0.242 / (np.sqrt(cf) * np.log10(re * cf)) - 1.0


def _schoenherr_slope(cf, re):
    ln_rc = np.log(re * cf)
    return (-0.278613 * ln_rc - 0.557226) / (cf ** 1.5 * ln_rc ** 2.0)


def _karman_residual(cf, re):
    return (4.15 * np.log10(re * cf) + 1.70) * np.sqrt(cf) - 1.0


def _karman_slope(cf, re):
    return (0.901161 * np.log(re * cf) + 2.65232) / np.sqrt(cf)


def _karman_schoenherr_residual(cf, re):
    return 4.13 * np.log10(re * cf) * np.sqrt(cf) - 1.0


def _karman_schoenherr_slope(cf, re):
    return (0.896818 * np.log(re * cf) + 1.79364) / np.sqrt(cf)


def solve_implicit_cf(
    residual: Callable,
    slope: Callable,
    re: float,
    initial_guess: float,
    tolerance: float = DEFAULT_SOLVER_TOLERANCE,
    max_iterations: int = DEFAULT_SOLVER_MAX_ITERATIONS,
) -> float:
    """
    Solve an implicit friction law for Cf with Newton-Raphson.

    The iteration count is bounded. When the solver does not converge or
    wanders to a non-physical value, the best available estimate is
    returned: the last iterate if it is finite and positive, otherwise the
    initial guess.

    Parameters:
    ----------
    residual : Callable
        g(cf, re), zero at the solution

    slope : Callable
        dg/dcf (cf, re)

    re : float
        Reynolds number

    initial_guess : float
        Starting Cf, normally an explicit fit of the same law

    Returns:
    -------
    float
        Skin friction coefficient
    """
    root, info = optimize.newton(
        residual,
        initial_guess,
        fprime=slope,
        args=(re,),
        tol=tolerance,
        maxiter=max_iterations,
        full_output=True,
        disp=False,
    )

    root = float(root)
    if info.converged and np.isfinite(root) and root > 0:
        return root

    logger.warning(
        "Implicit Cf did not converge at Re=%.6g after %d iterations",
        re, info.iterations
    )
    if np.isfinite(root) and root > 0:
        return root
    return float(initial_guess)


def _white_christoph_compressible(inp):
    return 0.42 / np.log(0.056 * inp.re) ** 2.0


def _schlichting_prandtl(inp):
    return 1.0 / (2.0 * np.log10(inp.re) - 0.65) ** 2.3


def _schlichting_compressible(inp):
    return 0.455 / np.log10(inp.re) ** 2.58


def _schlichting_incompressible(inp):
    return 0.472 / np.log10(inp.re) ** 2.5


def _schultz_grunow_schoenherr(inp):
    return 0.427 / (np.log10(inp.re) - 0.407) ** 2.64


def _schultz_grunow_high_re(inp):
    return 0.37 / np.log10(inp.re) ** 2.584


def _power_law_blasius(inp):
    return 0.0592 / inp.re ** 0.2


def _power_law_prandtl_low_re(inp):
    return 0.074 / inp.re ** 0.2


def _power_law_prandtl_medium_re(inp):
    return 0.027 / inp.re ** (1.0 / 7.0)


def _power_law_prandtl_high_re(inp):
    return 0.058 / inp.re ** 0.2


def _explicit_fit_spalding(inp):
    return 0.455 / np.log(0.06 * inp.re) ** 2.0


def _explicit_fit_spalding_chi(inp):
    return 0.225 / np.log10(inp.re) ** 2.32


def _explicit_fit_schoenherr(inp):
    return _schoenherr_explicit(inp.re)


def _implicit_schoenherr(inp):
    return solve_implicit_cf(
        _schoenherr_residual, _schoenherr_slope, inp.re,
        _schoenherr_explicit(inp.re), inp.tolerance, inp.max_iterations
    )


def _implicit_karman(inp):
    return solve_implicit_cf(
        _karman_residual, _karman_slope, inp.re,
        _karman_seed(inp.re), inp.tolerance, inp.max_iterations
    )


def _implicit_karman_schoenherr(inp):
    return solve_implicit_cf(
        _karman_schoenherr_residual, _karman_schoenherr_slope, inp.re,
        _schoenherr_explicit(inp.re), inp.tolerance, inp.max_iterations
    )


def _roughness_white(inp):
    height_ratio = inp.ref_length / inp.roughness
    return (1.4 + 3.7 * np.log10(height_ratio)) ** -2.0


def _roughness_schlichting_avg(inp):
    height_ratio = inp.ref_length / (inp.roughness * inp.inches_per_unit)
    return (1.89 + 1.62 * np.log10(height_ratio)) ** -2.5


def _roughness_schlichting_avg_flow_correction(inp):
    # Mach enters to the first power
    correction = (1.0 + (inp.gamma - 1.0) / 2.0 * inp.mach) ** 0.467
    return _roughness_schlichting_avg(inp) / correction


def _heat_transfer_white_christoph(inp):
    r = RECOVERY_FACTOR
    n = VISCOSITY_POWER_EXPONENT
    f = (1.0 + 0.22 * r * (inp.gamma - 1.0) / 2.0 * inp.mach ** 2 * inp.te_tw_ratio) / \
        (1.0 + 0.3 * (inp.taw_tw_ratio - 1.0))
    log_term = np.log(0.056 * f * inp.te_tw_ratio ** (1.0 + n) * inp.re)
    # log is squared and the recovery term uses gamma, not roughness, so the
    # law reduces to 0.451 / ln^2(0.056 Re) for an adiabatic wall at M = 0
    return 0.451 * f ** 2 * inp.te_tw_ratio / log_term ** 2.0


_TURBULENT_LAWS: Dict[TurbulentCfEqn, Callable[[FrictionInputs], float]] = {
    TurbulentCfEqn.WHITE_CHRISTOPH_COMPRESSIBLE: _white_christoph_compressible,
    TurbulentCfEqn.SCHLICHTING_PRANDTL: _schlichting_prandtl,
    TurbulentCfEqn.SCHLICHTING_COMPRESSIBLE: _schlichting_compressible,
    TurbulentCfEqn.SCHLICHTING_INCOMPRESSIBLE: _schlichting_incompressible,
    TurbulentCfEqn.SCHULTZ_GRUNOW_SCHOENHERR: _schultz_grunow_schoenherr,
    TurbulentCfEqn.SCHULTZ_GRUNOW_HIGH_RE: _schultz_grunow_high_re,
    TurbulentCfEqn.POWER_LAW_BLASIUS: _power_law_blasius,
    TurbulentCfEqn.POWER_LAW_PRANDTL_LOW_RE: _power_law_prandtl_low_re,
    TurbulentCfEqn.POWER_LAW_PRANDTL_MEDIUM_RE: _power_law_prandtl_medium_re,
    TurbulentCfEqn.POWER_LAW_PRANDTL_HIGH_RE: _power_law_prandtl_high_re,
    TurbulentCfEqn.EXPLICIT_FIT_SPALDING: _explicit_fit_spalding,
    TurbulentCfEqn.EXPLICIT_FIT_SPALDING_CHI: _explicit_fit_spalding_chi,
    TurbulentCfEqn.EXPLICIT_FIT_SCHOENHERR: _explicit_fit_schoenherr,
    TurbulentCfEqn.IMPLICIT_SCHOENHERR: _implicit_schoenherr,
    TurbulentCfEqn.IMPLICIT_KARMAN: _implicit_karman,
    TurbulentCfEqn.IMPLICIT_KARMAN_SCHOENHERR: _implicit_karman_schoenherr,
    TurbulentCfEqn.ROUGHNESS_WHITE: _roughness_white,
    TurbulentCfEqn.ROUGHNESS_SCHLICHTING_LOCAL: _roughness_white,
    TurbulentCfEqn.ROUGHNESS_SCHLICHTING_AVG: _roughness_schlichting_avg,
    TurbulentCfEqn.ROUGHNESS_SCHLICHTING_AVG_FLOW_CORRECTION:
        _roughness_schlichting_avg_flow_correction,
    TurbulentCfEqn.HEAT_TRANSFER_WHITE_CHRISTOPH: _heat_transfer_white_christoph,
}


def calc_turb_cf(
    re: float,
    eqn,
    ref_length: float = 1.0,
    roughness: float = 0.0,
    gamma: float = 1.4,
    taw_tw_ratio: float = 1.0,
    te_tw_ratio: float = 1.0,
    mach: float = 0.0,
    length_unit: LengthUnit = LengthUnit.FT,
    tolerance: float = DEFAULT_SOLVER_TOLERANCE,
    max_iterations: int = DEFAULT_SOLVER_MAX_ITERATIONS,
) -> float:
    """
    Turbulent skin friction coefficient.

    Parameters:
    ----------
    re : float
        Reynolds number

    eqn : TurbulentCfEqn
        Turbulent law. Unknown selectors return 0.

    ref_length : float
        Reference length, used by the roughness laws (model length unit)

    roughness : float
        Equivalent sand grain roughness height (model length unit)

    gamma : float
        Specific heat ratio

    taw_tw_ratio, te_tw_ratio : float
        Adiabatic-wall / wall and edge / wall temperature ratios, used by
        the heat transfer law

    mach : float
        Freestream Mach number

    length_unit : LengthUnit
        Model length unit; sets the inch scaling of the roughness height
        for the Schlichting average laws

    Returns:
    -------
    float
        Cf (0 for Re <= 0 or an unknown selector)
    """
    law = _TURBULENT_LAWS.get(eqn)
    if law is None or re <= 0:
        return 0.0

    inputs = FrictionInputs(
        re=np.float64(re),
        ref_length=np.float64(ref_length),
        roughness=np.float64(roughness),
        gamma=np.float64(gamma),
        taw_tw_ratio=np.float64(taw_tw_ratio),
        te_tw_ratio=np.float64(te_tw_ratio),
        mach=np.float64(mach),
        inches_per_unit=INCHES_PER_UNIT.get(length_unit, 1.0),
        tolerance=tolerance,
        max_iterations=max_iterations,
    )
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(law(inputs))
