"""
Parasite Drag Configuration Module
==================================

Physical constants, sentinel values and default settings for the
parasite drag build-up.

Physical Constants:
------------------
- GAS_CONSTANT_AIR: Specific gas constant of dry air (287.05287 J/(kg·K))
- SUTHERLAND_BETA / SUTHERLAND_TEMPERATURE: Sutherland viscosity law
- AIR_DENSITY_SEA_LEVEL: Standard sea level density (1.225 kg/m³)

Usage:
------
    from src.parasite_drag.config import ParasiteDragConfig

    config = ParasiteDragConfig(default_sref=250.0)
"""

from dataclasses import dataclass

from .correlations import LaminarCfEqn, TurbulentCfEqn
from .correlations.friction import (
    DEFAULT_SOLVER_TOLERANCE,
    DEFAULT_SOLVER_MAX_ITERATIONS,
)
from .units import (
    LengthUnit,
    UnitSystem,
    VelocityUnit,
    TemperatureUnit,
    PressureUnit,
)


# =============================================================================
# Physical Constants
# =============================================================================

# Gas constant for dry air (J/(kg·K)), US Standard Atmosphere 1976 value
GAS_CONSTANT_AIR = 287.05287

# Sutherland's law: mu = beta * T^1.5 / (T + S)
SUTHERLAND_BETA = 1.458e-6          # kg/(m·s·K^0.5)
SUTHERLAND_TEMPERATURE = 110.4      # K

# Standard air density at sea level (kg/m³), for equivalent airspeed
AIR_DENSITY_SEA_LEVEL = 1.225

# Default ratio of specific heats
SPECIFIC_HEAT_RATIO = 1.4


# =============================================================================
# Build-up Constants
# =============================================================================

# Value carried by every derived row field when no geometry snapshot exists
SENTINEL = -1.0

# Reference lengths at or below this are treated as degenerate
NEAR_ZERO_LENGTH = 1e-6

# Reference length used when both methods are degenerate
FALLBACK_REFERENCE_LENGTH = 1.0

# Component ID returned when an ancestor cannot be resolved
NONE_ID = "NONE"

# Row label prefixes
WING_PREFIX = "[W]"
BODY_PREFIX = "[B]"
SUB_SURFACE_PREFIX = "[ss]"

# Default excrescence label stem ("EXCRES_0", "EXCRES_1", ...)
EXCRESCENCE_LABEL_STEM = "EXCRES_"

# Default export file
DEFAULT_EXPORT_FILE = "ParasiteDragBuildUp.csv"


@dataclass
class ParasiteDragConfig:
    """
    Configuration settings for the parasite drag build-up.

    Attributes:
    ----------
    default_sref : float
        Reference area used until a reference wing is chosen.

    default_lam_cf_eqn / default_turb_cf_eqn
        Skin friction laws selected on a fresh manager.

    solver_tolerance : float
        Absolute Cf tolerance for the implicit friction laws.

    solver_max_iterations : int
        Iteration cap for the implicit friction laws.
    """

    # -------------------------------------------------------------------------
    # Reference Quantities
    # -------------------------------------------------------------------------

    default_sref: float = 100.0

    default_length_unit: LengthUnit = LengthUnit.FT

    # -------------------------------------------------------------------------
    # Skin Friction
    # -------------------------------------------------------------------------

    default_lam_cf_eqn: LaminarCfEqn = LaminarCfEqn.BLASIUS

    default_turb_cf_eqn: TurbulentCfEqn = TurbulentCfEqn.POWER_LAW_BLASIUS

    solver_tolerance: float = DEFAULT_SOLVER_TOLERANCE

    solver_max_iterations: int = DEFAULT_SOLVER_MAX_ITERATIONS

    # -------------------------------------------------------------------------
    # Flow Condition Defaults
    # -------------------------------------------------------------------------

    default_unit_system: UnitSystem = UnitSystem.IMPERIAL

    default_velocity_unit: VelocityUnit = VelocityUnit.FT_S

    default_temperature_unit: TemperatureUnit = TemperatureUnit.F

    default_pressure_unit: PressureUnit = PressureUnit.PSF

    # Vinf in default_velocity_unit, altitude in the unit system's length
    default_vinf: float = 500.0

    default_altitude: float = 20000.0

    default_specific_heat_ratio: float = SPECIFIC_HEAT_RATIO

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    export_file_name: str = DEFAULT_EXPORT_FILE


# =============================================================================
# Default Configuration Instance
# =============================================================================

DEFAULT_CONFIG = ParasiteDragConfig()
