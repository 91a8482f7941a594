"""
Unit Handling
=============

Unit enumerations, conversion helpers and the export axis labels used
by the parasite drag build-up.

Every conversion goes through an SI pivot value (m, m/s, K, Pa) so that
any pair of units in the same family can be converted directly.

Usage:
------
    from src.parasite_drag.units import LengthUnit, convert_length

    length_ft = convert_length(2.5, LengthUnit.M, LengthUnit.FT)
"""

from enum import Enum
from typing import Dict


# =============================================================================
# Unit Enumerations
# =============================================================================

class UnitSystem(Enum):
    """Unit system used for altitude, density and viscosity."""
    IMPERIAL = "imperial"   # ft, slug/ft^3, slug/(ft s)
    METRIC = "metric"       # m, kg/m^3, kg/(m s)


class LengthUnit(Enum):
    """Model length units."""
    MM = "mm"
    CM = "cm"
    M = "m"
    IN = "in"
    FT = "ft"
    YD = "yd"
    UNITLESS = "LU"


class VelocityUnit(Enum):
    """Freestream velocity units."""
    FT_S = "ft/s"
    M_S = "m/s"
    MPH = "mph"
    KM_HR = "km/hr"
    KEAS = "KEAS"
    KTAS = "KTAS"


class TemperatureUnit(Enum):
    """Temperature units."""
    C = "C"
    F = "F"
    K = "K"
    R = "R"


class PressureUnit(Enum):
    """Pressure units."""
    PSF = "lbf/ft^2"
    PSI = "lbf/in^2"
    PA = "Pa"
    KPA = "kPa"
    INCHHG = "inHg"
    MMHG = "mmHg"
    MMH2O = "mmH2O"
    MB = "mB"
    ATM = "atm"


# =============================================================================
# Conversion Factors (to SI)
# =============================================================================

# metres per unit
_LENGTH_TO_M: Dict[LengthUnit, float] = {
    LengthUnit.MM: 0.001,
    LengthUnit.CM: 0.01,
    LengthUnit.M: 1.0,
    LengthUnit.IN: 0.0254,
    LengthUnit.FT: 0.3048,
    LengthUnit.YD: 0.9144,
}

# m/s per unit; KEAS is handled as knots here, the equivalent-airspeed
# correction lives in FlowCondition
_VELOCITY_TO_M_S: Dict[VelocityUnit, float] = {
    VelocityUnit.FT_S: 0.3048,
    VelocityUnit.M_S: 1.0,
    VelocityUnit.MPH: 0.44704,
    VelocityUnit.KM_HR: 1.0 / 3.6,
    VelocityUnit.KEAS: 1852.0 / 3600.0,
    VelocityUnit.KTAS: 1852.0 / 3600.0,
}

# Pa per unit
_PRESSURE_TO_PA: Dict[PressureUnit, float] = {
    PressureUnit.PSF: 47.880259,
    PressureUnit.PSI: 6894.757,
    PressureUnit.PA: 1.0,
    PressureUnit.KPA: 1000.0,
    PressureUnit.INCHHG: 3386.389,
    PressureUnit.MMHG: 133.322387,
    PressureUnit.MMH2O: 9.80665,
    PressureUnit.MB: 100.0,
    PressureUnit.ATM: 101325.0,
}

# slug/ft^3 -> kg/m^3
SLUG_FT3_TO_KG_M3 = 515.378818

# slug/(ft s) -> Pa s
SLUG_FT_S_TO_PA_S = 47.880259

# inches per length unit, used to express surface roughness in inches
INCHES_PER_UNIT: Dict[LengthUnit, float] = {
    LengthUnit.MM: 1.0 / 25.4,
    LengthUnit.CM: 1.0 / 2.54,
    LengthUnit.M: 39.3701,
    LengthUnit.IN: 1.0,
    LengthUnit.FT: 12.0,
    LengthUnit.YD: 36.0,
    LengthUnit.UNITLESS: 1.0,
}


def convert_length(value: float, from_unit: LengthUnit, to_unit: LengthUnit) -> float:
    """
    Convert a length between units.

    Unitless lengths are passed through unchanged in either direction.
    """
    if from_unit == to_unit or LengthUnit.UNITLESS in (from_unit, to_unit):
        return value
    return value * _LENGTH_TO_M[from_unit] / _LENGTH_TO_M[to_unit]


def convert_area(value: float, from_unit: LengthUnit, to_unit: LengthUnit) -> float:
    """Convert an area between the squares of two length units."""
    return convert_length(convert_length(value, from_unit, to_unit), from_unit, to_unit)


def convert_velocity(value: float, from_unit: VelocityUnit, to_unit: VelocityUnit) -> float:
    """Convert a speed between units (KEAS is treated as plain knots)."""
    if from_unit == to_unit:
        return value
    return value * _VELOCITY_TO_M_S[from_unit] / _VELOCITY_TO_M_S[to_unit]


def convert_pressure(value: float, from_unit: PressureUnit, to_unit: PressureUnit) -> float:
    """Convert a pressure between units."""
    if from_unit == to_unit:
        return value
    return value * _PRESSURE_TO_PA[from_unit] / _PRESSURE_TO_PA[to_unit]


def temperature_to_kelvin(value: float, unit: TemperatureUnit) -> float:
    """Convert an absolute temperature to Kelvin."""
    if unit == TemperatureUnit.C:
        return value + 273.15
    if unit == TemperatureUnit.F:
        return (value - 32.0) * 5.0 / 9.0 + 273.15
    if unit == TemperatureUnit.R:
        return value * 5.0 / 9.0
    return value


def temperature_from_kelvin(value: float, unit: TemperatureUnit) -> float:
    """Convert a Kelvin temperature to the requested unit."""
    if unit == TemperatureUnit.C:
        return value - 273.15
    if unit == TemperatureUnit.F:
        return (value - 273.15) * 9.0 / 5.0 + 32.0
    if unit == TemperatureUnit.R:
        return value * 9.0 / 5.0
    return value


def temperature_delta_to_kelvin(delta: float, unit: TemperatureUnit) -> float:
    """Convert a temperature difference to Kelvin."""
    if unit in (TemperatureUnit.F, TemperatureUnit.R):
        return delta * 5.0 / 9.0
    return delta


def density_to_si(value: float, system: UnitSystem) -> float:
    """Density in the unit system's unit -> kg/m^3."""
    if system == UnitSystem.IMPERIAL:
        return value * SLUG_FT3_TO_KG_M3
    return value


def density_from_si(value: float, system: UnitSystem) -> float:
    """kg/m^3 -> density in the unit system's unit."""
    if system == UnitSystem.IMPERIAL:
        return value / SLUG_FT3_TO_KG_M3
    return value


def viscosity_from_si(value: float, system: UnitSystem) -> float:
    """Dynamic viscosity Pa s -> unit system's unit."""
    if system == UnitSystem.IMPERIAL:
        return value / SLUG_FT_S_TO_PA_S
    return value


def system_length_unit(system: UnitSystem) -> LengthUnit:
    """Length unit carried by a unit system (ft or m)."""
    return LengthUnit.FT if system == UnitSystem.IMPERIAL else LengthUnit.M


def system_velocity_unit(system: UnitSystem) -> VelocityUnit:
    """Velocity unit carried by a unit system (ft/s or m/s)."""
    return VelocityUnit.FT_S if system == UnitSystem.IMPERIAL else VelocityUnit.M_S


# =============================================================================
# Export Labels
# =============================================================================

_LENGTH_LABEL_SUFFIX = {
    LengthUnit.MM: "mm",
    LengthUnit.CM: "cm",
    LengthUnit.M: "m",
    LengthUnit.IN: "in",
    LengthUnit.FT: "ft",
    LengthUnit.YD: "yd",
    LengthUnit.UNITLESS: "LU",
}

_TEMPERATURE_LABELS = {
    TemperatureUnit.C: "Temp (°C)",
    TemperatureUnit.F: "Temp (°F)",
    TemperatureUnit.K: "Temp (K)",
    TemperatureUnit.R: "Temp (°R)",
}

_PRESSURE_LABELS = {
    PressureUnit.PSF: "Pressure (lbf/ft^2)",
    PressureUnit.PSI: "Pressure (lbf/in^2)",
    PressureUnit.PA: "Pressure (Pa)",
    PressureUnit.KPA: "Pressure (kPa)",
    PressureUnit.INCHHG: "Pressure (\"Hg)",
    PressureUnit.MMHG: "Pressure (mmHg)",
    PressureUnit.MMH2O: "Pressure (mmH20)",
    PressureUnit.MB: "Pressure (mB)",
    PressureUnit.ATM: "Pressure (atm)",
}


def export_labels(
    system: UnitSystem,
    length_unit: LengthUnit,
    velocity_unit: VelocityUnit,
    temperature_unit: TemperatureUnit,
    pressure_unit: PressureUnit,
) -> Dict[str, str]:
    """
    Build the axis labels used in reports and CSV export.

    Returns:
    -------
    Dict[str, str]
        Keys: Alt, Density, Vinf, Temp, Pres, Sref, Swet, Lref, f
    """
    if system == UnitSystem.IMPERIAL:
        alt_label = "Altitude (ft)"
        rho_label = "Density (slug/ft^3)"
    else:
        alt_label = "Altitude (m)"
        rho_label = "Density (kg/m^3)"

    suffix = _LENGTH_LABEL_SUFFIX[length_unit]
    if length_unit == LengthUnit.UNITLESS:
        area_suffix = suffix
    else:
        area_suffix = f"{suffix}^2"

    return {
        "Alt": alt_label,
        "Density": rho_label,
        "Vinf": f"Vinf ({velocity_unit.value})",
        "Temp": _TEMPERATURE_LABELS[temperature_unit],
        "Pres": _PRESSURE_LABELS[pressure_unit],
        "Sref": f"S_ref ({area_suffix})",
        "Swet": f"S_wet ({area_suffix})",
        "Lref": f"L_ref ({suffix})",
        "f": f"f ({area_suffix})",
    }
