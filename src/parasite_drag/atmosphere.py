"""
Flow Condition
==============

Freestream state for the parasite drag build-up: velocity, altitude,
thermodynamic state, Mach number, viscosity and Reynolds number per unit
length, kept consistent across the selected units.

The standard atmosphere mode uses the US Standard Atmosphere 1976 layer
model from ``ambiance`` for temperature and pressure; density, viscosity
(Sutherland's law) and speed of sound are then derived from the shifted
temperature so that a delta-T offset applies consistently.

Freestream Modes:
----------------
- US_STANDARD_1976: altitude + delta-T
- MANUAL_P_R: pressure and density given
- MANUAL_P_T: pressure and temperature given
- MANUAL_R_T: density and temperature given
- MANUAL_RE_L: Reynolds number per length and Mach given; Vinf is derived
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ambiance import Atmosphere

from .config import (
    DEFAULT_CONFIG,
    GAS_CONSTANT_AIR,
    SUTHERLAND_BETA,
    SUTHERLAND_TEMPERATURE,
    AIR_DENSITY_SEA_LEVEL,
    ParasiteDragConfig,
)
from .units import (
    LengthUnit,
    UnitSystem,
    VelocityUnit,
    TemperatureUnit,
    PressureUnit,
    convert_length,
    convert_velocity,
    convert_pressure,
    temperature_to_kelvin,
    temperature_from_kelvin,
    temperature_delta_to_kelvin,
    density_to_si,
    density_from_si,
    viscosity_from_si,
    system_length_unit,
    system_velocity_unit,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# Valid altitude range of the ambiance layer model (m)
ALTITUDE_MIN_M = -5004.0
ALTITUDE_MAX_M = 81020.0


class FreestreamType(Enum):
    """How the freestream thermodynamic state is specified."""
    US_STANDARD_1976 = "us_standard_1976"
    MANUAL_P_R = "manual_p_r"
    MANUAL_P_T = "manual_p_t"
    MANUAL_R_T = "manual_r_t"
    MANUAL_RE_L = "manual_re_l"


def sutherland_viscosity(temperature_k: float) -> float:
    """Dynamic viscosity of air (Pa·s) from Sutherland's law."""
    return SUTHERLAND_BETA * temperature_k ** 1.5 / (temperature_k + SUTHERLAND_TEMPERATURE)


@dataclass
class FlowCondition:
    """
    Freestream flow condition.

    Input fields (depending on ``freestream_type``) are stored in the
    selected display units; ``update()`` fills in every dependent field.
    Atmosphere modes use the US Standard Atmosphere 1976 only; the
    Herrington 1966 atmosphere is not supported.

    Attributes:
    ----------
    vinf : float
        Freestream speed in ``velocity_unit``

    altitude : float
        Altitude in ft (imperial) or m (metric)

    delta_temp : float
        Temperature offset from the standard day, in ``temperature_unit``

    temperature, pressure, density : float
        Static state in ``temperature_unit``, ``pressure_unit`` and
        slug/ft³ or kg/m³

    mach : float
        Freestream Mach number (input in MANUAL_RE_L mode)

    re_per_length : float
        Reynolds number per model length unit (input in MANUAL_RE_L mode)

    dynamic_viscosity : float
        slug/(ft·s) or kg/(m·s)

    kinematic_viscosity : float
        ft²/s or m²/s

    speed_of_sound : float
        ft/s or m/s
    """

    freestream_type: FreestreamType = FreestreamType.US_STANDARD_1976
    unit_system: UnitSystem = UnitSystem.IMPERIAL
    velocity_unit: VelocityUnit = VelocityUnit.FT_S
    temperature_unit: TemperatureUnit = TemperatureUnit.F
    pressure_unit: PressureUnit = PressureUnit.PSF

    vinf: float = 500.0
    altitude: float = 20000.0
    delta_temp: float = 0.0
    temperature: float = 59.0
    pressure: float = 2116.22
    density: float = 0.0023769
    specific_heat_ratio: float = 1.4
    mach: float = 0.0
    re_per_length: float = 0.0

    dynamic_viscosity: float = 0.0
    kinematic_viscosity: float = 0.0
    speed_of_sound: float = 0.0

    @classmethod
    def from_config(cls, config: Optional[ParasiteDragConfig] = None) -> "FlowCondition":
        """Create a flow condition from configuration defaults."""
        config = config or DEFAULT_CONFIG
        return cls(
            unit_system=config.default_unit_system,
            velocity_unit=config.default_velocity_unit,
            temperature_unit=config.default_temperature_unit,
            pressure_unit=config.default_pressure_unit,
            vinf=config.default_vinf,
            altitude=config.default_altitude,
            specific_heat_ratio=config.default_specific_heat_ratio,
        )

    # -------------------------------------------------------------------------
    # SI views
    # -------------------------------------------------------------------------

    @property
    def temperature_k(self) -> float:
        return temperature_to_kelvin(self.temperature, self.temperature_unit)

    @property
    def pressure_pa(self) -> float:
        return convert_pressure(self.pressure, self.pressure_unit, PressureUnit.PA)

    @property
    def density_si(self) -> float:
        return density_to_si(self.density, self.unit_system)

    def true_airspeed(self, unit: Optional[VelocityUnit] = None) -> float:
        """
        Freestream true airspeed.

        KEAS inputs are corrected with the density ratio
        sigma = rho / rho_SL before conversion.

        Parameters:
        ----------
        unit : VelocityUnit, optional
            Output unit. Defaults to the unit system's velocity unit.
        """
        unit = unit or system_velocity_unit(self.unit_system)
        if self.velocity_unit == VelocityUnit.KEAS:
            sigma = self.density_si / AIR_DENSITY_SEA_LEVEL
            ktas = self.vinf / math.sqrt(sigma) if sigma > 0 else self.vinf
            return convert_velocity(ktas, VelocityUnit.KTAS, unit)
        return convert_velocity(self.vinf, self.velocity_unit, unit)

    def _set_true_airspeed(self, v_m_s: float):
        if self.velocity_unit == VelocityUnit.KEAS:
            sigma = self.density_si / AIR_DENSITY_SEA_LEVEL
            keas = convert_velocity(v_m_s, VelocityUnit.M_S, VelocityUnit.KTAS) * math.sqrt(max(sigma, 0.0))
            self.vinf = keas
        else:
            self.vinf = convert_velocity(v_m_s, VelocityUnit.M_S, self.velocity_unit)

    # -------------------------------------------------------------------------
    # State update
    # -------------------------------------------------------------------------

    def _standard_day_state(self):
        """Temperature (K) and pressure (Pa) from the 1976 atmosphere."""
        h_m = convert_length(self.altitude, system_length_unit(self.unit_system), LengthUnit.M)
        if not ALTITUDE_MIN_M <= h_m <= ALTITUDE_MAX_M:
            logger.warning(
                "Altitude %.1f m outside the standard atmosphere range, clamping", h_m
            )
            h_m = min(max(h_m, ALTITUDE_MIN_M), ALTITUDE_MAX_M)
            self.altitude = convert_length(h_m, LengthUnit.M, system_length_unit(self.unit_system))

        atmos = Atmosphere(h_m)
        t_k = float(atmos.temperature[0]) + temperature_delta_to_kelvin(
            self.delta_temp, self.temperature_unit
        )
        p_pa = float(atmos.pressure[0])
        return t_k, p_pa

    def update(self, length_unit: LengthUnit = LengthUnit.FT):
        """
        Re-derive every dependent quantity from the mode's inputs.

        Parameters:
        ----------
        length_unit : LengthUnit
            Model length unit that ``re_per_length`` refers to
        """
        mode = self.freestream_type
        R = GAS_CONSTANT_AIR

        if mode == FreestreamType.US_STANDARD_1976:
            t_k, p_pa = self._standard_day_state()
            rho = p_pa / (R * t_k)
        elif mode == FreestreamType.MANUAL_P_R:
            p_pa = self.pressure_pa
            rho = self.density_si
            t_k = p_pa / (rho * R)
        elif mode == FreestreamType.MANUAL_R_T:
            rho = self.density_si
            t_k = self.temperature_k
            p_pa = rho * R * t_k
        else:
            # MANUAL_P_T and MANUAL_RE_L take the state from pressure/temperature
            p_pa = self.pressure_pa
            t_k = self.temperature_k
            rho = p_pa / (R * t_k)

        mu = sutherland_viscosity(t_k)
        a_m_s = math.sqrt(self.specific_heat_ratio * R * t_k)

        self.temperature = temperature_from_kelvin(t_k, self.temperature_unit)
        self.pressure = convert_pressure(p_pa, PressureUnit.PA, self.pressure_unit)
        self.density = density_from_si(rho, self.unit_system)
        self.dynamic_viscosity = viscosity_from_si(mu, self.unit_system)
        self.kinematic_viscosity = self.dynamic_viscosity / self.density
        self.speed_of_sound = convert_velocity(
            a_m_s, VelocityUnit.M_S, system_velocity_unit(self.unit_system)
        )

        if mode == FreestreamType.MANUAL_RE_L:
            self._set_true_airspeed(self.mach * a_m_s)
            return

        v_m_s = self.true_airspeed(VelocityUnit.M_S)
        self.mach = v_m_s / a_m_s
        # Re per system length (ft or m), rescaled to the model length unit
        re_per_system_length = self.true_airspeed() / self.kinematic_viscosity
        self.re_per_length = re_per_system_length * convert_length(
            1.0, length_unit, system_length_unit(self.unit_system)
        )

    def reynolds_number(self, ref_length: float, length_unit: LengthUnit = LengthUnit.FT) -> float:
        """
        Reynolds number for a reference length in the model length unit.

        In MANUAL_RE_L mode Re = Re/L * L; otherwise Re = V L / nu with V,
        L and nu all in the unit system's units.
        """
        if self.freestream_type == FreestreamType.MANUAL_RE_L:
            return self.re_per_length * ref_length

        length = convert_length(ref_length, length_unit, system_length_unit(self.unit_system))
        if self.kinematic_viscosity == 0:
            return 0.0
        return self.true_airspeed() * length / self.kinematic_viscosity
