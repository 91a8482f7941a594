"""
Form Factor Correlations
========================

Form factors for lifting surfaces (function of thickness/chord, sweep
and Mach) and for bodies (function of fineness ratio).

The DATCOM lifting-surface correction Rls is a cubic fit in cos(sweep25)
at four Mach breakpoints, linearly interpolated between them and held
constant outside the breakpoint range.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional

import numpy as np

from .friction import UNKNOWN_EQUATION_NAME


# Q factor imposed by the Jenkinson tail form factor
JENKINSON_TAIL_Q = 1.2

# DATCOM Rls fits: Mach breakpoints and cubic coefficients in cos(sweep25)
# (c^3, c^2, c, 1)
DATCOM_MACH_BREAKPOINTS = np.array([0.25, 0.60, 0.80, 0.90])
DATCOM_RLS_COEFFICIENTS = np.array([
    [-2.0292, 3.6345, -1.391, 0.8521],
    [-1.9735, 3.4504, -1.186, 0.858],
    [-1.6538, 2.865, -0.886, 0.934],
    [-1.8316, 3.3944, -1.3596, 1.1567],
])

# Laminar percentage at or below which DATCOM uses L = 2.0; compared
# against the raw percentage, so only nearly turbulent rows qualify
DATCOM_TRANSITION_LIMIT = 0.30


class WingFormFactorEqn(Enum):
    """Lifting surface form factor equations."""
    MANUAL = "manual"
    EDET_CONV = "edet_conv"
    EDET_ADV = "edet_adv"
    HOERNER = "hoerner"
    COVERT = "covert"
    SHEVELL = "shevell"
    KROO = "kroo"
    TORENBEEK = "torenbeek"
    DATCOM = "datcom"
    SCHEMENSKY_6_SERIES_AF = "schemensky_6_series_af"
    SCHEMENSKY_4_SERIES_AF = "schemensky_4_series_af"
    JENKINSON_WING = "jenkinson_wing"
    JENKINSON_TAIL = "jenkinson_tail"


class BodyFormFactorEqn(Enum):
    """Body form factor equations."""
    MANUAL = "manual"
    SCHEMENSKY_FUSE = "schemensky_fuse"
    SCHEMENSKY_NACELLE = "schemensky_nacelle"
    HOERNER_STREAMBODY = "hoerner_streambody"
    TORENBEEK = "torenbeek"
    SHEVELL = "shevell"
    JENKINSON_FUSE = "jenkinson_fuse"
    JENKINSON_WING_NACELLE = "jenkinson_wing_nacelle"
    JENKINSON_AFT_FUSE_NACELLE = "jenkinson_aft_fuse_nacelle"
    JOBE = "jobe"


WING_FF_NAMES: Dict[WingFormFactorEqn, str] = {
    WingFormFactorEqn.MANUAL: "Manual",
    WingFormFactorEqn.EDET_CONV: "EDET Conventional",
    WingFormFactorEqn.EDET_ADV: "EDET Advanced",
    WingFormFactorEqn.HOERNER: "Hoerner",
    WingFormFactorEqn.COVERT: "Covert",
    WingFormFactorEqn.SHEVELL: "Shevell",
    WingFormFactorEqn.KROO: "Kroo",
    WingFormFactorEqn.TORENBEEK: "Torenbeek",
    WingFormFactorEqn.DATCOM: "DATCOM",
    WingFormFactorEqn.SCHEMENSKY_6_SERIES_AF: "Schemensky 6 Series AF",
    WingFormFactorEqn.SCHEMENSKY_4_SERIES_AF: "Schemensky 4 Series AF",
    WingFormFactorEqn.JENKINSON_WING: "Jenkinson Wing",
    WingFormFactorEqn.JENKINSON_TAIL: "Jenkinson Tail",
}

BODY_FF_NAMES: Dict[BodyFormFactorEqn, str] = {
    BodyFormFactorEqn.MANUAL: "Manual",
    BodyFormFactorEqn.SCHEMENSKY_FUSE: "Schemensky Fuselage",
    BodyFormFactorEqn.SCHEMENSKY_NACELLE: "Schemensky Nacelle",
    BodyFormFactorEqn.HOERNER_STREAMBODY: "Hoerner Streamlined Body",
    BodyFormFactorEqn.TORENBEEK: "Torenbeek",
    BodyFormFactorEqn.SHEVELL: "Shevell",
    BodyFormFactorEqn.JENKINSON_FUSE: "Jenkinson Fuselage",
    BodyFormFactorEqn.JENKINSON_WING_NACELLE: "Jenkinson Wing Nacelle",
    BodyFormFactorEqn.JENKINSON_AFT_FUSE_NACELLE: "Jenkinson Aft Fuse Nacelle",
    BodyFormFactorEqn.JOBE: "Jobe",
}


def wing_ff_name(eqn) -> str:
    """Display name of a wing form factor equation."""
    return WING_FF_NAMES.get(eqn, UNKNOWN_EQUATION_NAME)


def body_ff_name(eqn) -> str:
    """Display name of a body form factor equation."""
    return BODY_FF_NAMES.get(eqn, UNKNOWN_EQUATION_NAME)


def ff_name(eqn) -> str:
    """Display name of either kind of form factor equation."""
    if isinstance(eqn, BodyFormFactorEqn):
        return body_ff_name(eqn)
    return wing_ff_name(eqn)


def is_manual_ff(eqn) -> bool:
    """True for the manual selector of either kind."""
    return eqn in (WingFormFactorEqn.MANUAL, BodyFormFactorEqn.MANUAL)


class WingFormFactor(NamedTuple):
    """Wing form factor result; q_factor is set when the equation imposes Q."""
    value: float
    q_factor: Optional[float] = None


def datcom_rls(mach: float, sweep25: float) -> float:
    """
    DATCOM lifting surface correction Rls.

    Parameters:
    ----------
    mach : float
        Freestream Mach number

    sweep25 : float
        Quarter chord sweep (rad)
    """
    c = np.cos(sweep25)
    rls_at_breakpoints = DATCOM_RLS_COEFFICIENTS @ np.array([c ** 3, c ** 2, c, 1.0])
    return float(np.interp(mach, DATCOM_MACH_BREAKPOINTS, rls_at_breakpoints))


def calc_ff_wing(
    toc: float,
    eqn,
    perc_lam: float = 0.0,
    sweep25: float = 0.0,
    sweep50: float = 0.0,
    mach: float = 0.0,
) -> WingFormFactor:
    """
    Lifting surface form factor.

    Parameters:
    ----------
    toc : float
        Maximum thickness/chord

    eqn : WingFormFactorEqn
        Form factor equation. Unknown selectors return 0.

    perc_lam : float
        Laminar run as percent of chord (DATCOM transition input)

    sweep25, sweep50 : float
        Area-weighted quarter and half chord sweep (rad)

    mach : float
        Freestream Mach number

    Returns:
    -------
    WingFormFactor
        Form factor, with q_factor = 1.2 for the Jenkinson tail equation
    """
    toc = np.float64(toc)
    mach = np.float64(mach)
    cos25 = np.cos(sweep25)
    cos50 = np.cos(sweep50)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if eqn == WingFormFactorEqn.MANUAL:
            ff = 1.0
        elif eqn == WingFormFactorEqn.EDET_CONV:
            ff = 1.0 + toc * (2.94206 + toc * (7.16974 + toc * (48.8876 + toc * (
                -1403.02 + toc * (8598.76 + toc * (-15834.3))))))
        elif eqn == WingFormFactorEqn.EDET_ADV:
            ff = 1.0 + 4.275 * toc
        elif eqn == WingFormFactorEqn.HOERNER:
            ff = 1.0 + 2.0 * toc + 60.0 * toc ** 4
        elif eqn == WingFormFactorEqn.COVERT:
            ff = 1.0 + 1.8 * toc + 50.0 * toc ** 4
        elif eqn == WingFormFactorEqn.SHEVELL:
            z = (2.0 - mach ** 2) * cos25 / np.sqrt(1.0 - mach ** 2 * cos25 ** 2)
            ff = 1.0 + z * toc + 100.0 * toc ** 4
        elif eqn == WingFormFactorEqn.KROO:
            compress = 1.0 - mach ** 2 * cos25 ** 2
            ff = (1.0
                  + 2.2 * cos25 ** 2 * toc / np.sqrt(compress)
                  + 4.84 * cos25 ** 2 * (1.0 + 5.0 * cos25 ** 2) * toc ** 2 / (2.0 * compress))
        elif eqn == WingFormFactorEqn.TORENBEEK:
            ff = 1.0 + 2.7 * toc + 100.0 * toc ** 4
        elif eqn == WingFormFactorEqn.DATCOM:
            L = 2.0 if perc_lam <= DATCOM_TRANSITION_LIMIT else 1.2
            ff = (1.0 + L * toc + 100.0 * toc ** 4) * datcom_rls(mach, sweep25)
        elif eqn == WingFormFactorEqn.SCHEMENSKY_6_SERIES_AF:
            ff = 1.0 + 1.44 * toc + 2.0 * toc ** 2
        elif eqn == WingFormFactorEqn.SCHEMENSKY_4_SERIES_AF:
            ff = 1.0 + 1.68 * toc + 3.0 * toc ** 2
        elif eqn == WingFormFactorEqn.JENKINSON_WING:
            f_star = 1.0 + 3.3 * toc - 0.008 * toc ** 2 + 27.0 * toc ** 3
            ff = (f_star - 1.0) * cos50 ** 2 + 1.0
        elif eqn == WingFormFactorEqn.JENKINSON_TAIL:
            f_star = 1.0 + 3.52 * toc
            ff = (f_star - 1.0) * cos50 ** 2 + 1.0
            return WingFormFactor(float(ff), JENKINSON_TAIL_Q)
        else:
            ff = 0.0

    return WingFormFactor(float(ff))


def calc_ff_body(
    fineness: float,
    fineness_alt: float,
    eqn,
    ref_length: float,
    max_area: float,
    mach: float = 0.0,
) -> float:
    """
    Body form factor.

    Parameters:
    ----------
    fineness : float
        Length over nominal diameter, L/D

    fineness_alt : float
        Length over sqrt(max cross-section area), used by Schemensky

    eqn : BodyFormFactorEqn
        Form factor equation. Unknown selectors return 0.

    ref_length : float
        Body reference length

    max_area : float
        Maximum cross-section area

    mach : float
        Freestream Mach number (Jobe)

    Returns:
    -------
    float
        Form factor
    """
    longF = np.float64(fineness)
    FR = np.float64(fineness_alt)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if eqn == BodyFormFactorEqn.MANUAL:
            ff = 1.0
        elif eqn == BodyFormFactorEqn.SCHEMENSKY_FUSE:
            ff = 1.0 + 60.0 / FR ** 3 + 0.0025 * FR
        elif eqn == BodyFormFactorEqn.SCHEMENSKY_NACELLE:
            ff = 1.0 + 0.35 / FR
        elif eqn == BodyFormFactorEqn.HOERNER_STREAMBODY:
            ff = 1.0 + 1.5 / longF ** 1.5 + 7.0 / longF ** 3
        elif eqn == BodyFormFactorEqn.TORENBEEK:
            ff = 1.0 + 2.2 / longF ** 1.5 + 3.8 / longF ** 3
        elif eqn == BodyFormFactorEqn.SHEVELL:
            ff = 1.0 + 2.8 / longF ** 1.5 + 3.8 / longF ** 3
        elif eqn == BodyFormFactorEqn.JENKINSON_FUSE:
            lam = np.float64(ref_length) / np.sqrt(4.0 / np.pi * np.float64(max_area))
            ff = 1.0 + 2.2 / lam ** 1.5 - 0.9 / lam ** 3
        elif eqn == BodyFormFactorEqn.JENKINSON_WING_NACELLE:
            ff = 1.25
        elif eqn == BodyFormFactorEqn.JENKINSON_AFT_FUSE_NACELLE:
            ff = 1.5
        elif eqn == BodyFormFactorEqn.JOBE:
            ff = 1.02 + 1.5 / longF ** 1.5 + 7.0 / (0.6 * longF ** 3 * (1.0 - np.float64(mach) ** 3))
        else:
            ff = 0.0

    return float(ff)
