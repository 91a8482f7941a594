"""
Skin Friction and Form Factor Correlation Tests
===============================================

Checks the correlations against closed-form reference values.

Reference Values:
- Blasius laminar flat plate: Cf = 1.32824 / sqrt(Re)
- Blasius turbulent power law: Cf = 0.0592 / Re^0.2
- Schoenherr (Karman-Schoenherr) implicit law:
  0.242 / (sqrt(Cf) * log10(Re * Cf)) = 1
"""

import math
import sys
from pathlib import Path
import unittest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.parasite_drag.correlations import (
    LaminarCfEqn,
    TurbulentCfEqn,
    WingFormFactorEqn,
    BodyFormFactorEqn,
    calc_lam_cf,
    calc_turb_cf,
    calc_ff_wing,
    calc_ff_body,
    datcom_rls,
    solve_implicit_cf,
    lam_cf_name,
    turb_cf_name,
    wing_ff_name,
    body_ff_name,
    is_manual_ff,
)
from src.parasite_drag.correlations.friction import (
    _schoenherr_explicit,
    _schoenherr_residual,
    _schoenherr_slope,
)
from src.parasite_drag.units import LengthUnit


class TestLaminarFriction(unittest.TestCase):
    """Laminar skin friction."""

    def test_blasius_at_one_million(self):
        """Blasius Cf at Re = 1e6 is 1.32824e-3."""
        self.assertAlmostEqual(calc_lam_cf(1.0e6, LaminarCfEqn.BLASIUS), 1.32824e-3, delta=1e-6)

    def test_heat_transfer_variant_not_implemented(self):
        """The heat transfer laminar law returns 0."""
        self.assertEqual(calc_lam_cf(1.0e6, LaminarCfEqn.BLASIUS_W_HEAT), 0.0)

    def test_non_positive_reynolds(self):
        self.assertEqual(calc_lam_cf(0.0, LaminarCfEqn.BLASIUS), 0.0)
        self.assertEqual(calc_lam_cf(-5.0, LaminarCfEqn.BLASIUS), 0.0)


class TestTurbulentFriction(unittest.TestCase):
    """Explicit turbulent laws and selector handling."""

    def test_power_law_blasius(self):
        """Blasius power law at Re = 1e7 is about 0.002360."""
        cf = calc_turb_cf(1.0e7, TurbulentCfEqn.POWER_LAW_BLASIUS)
        self.assertAlmostEqual(cf, 0.0592 / 1.0e7 ** 0.2, delta=1e-9)
        self.assertAlmostEqual(cf, 0.002360, delta=1e-6)

    def test_explicit_laws_are_physical(self):
        """Every smooth-wall law gives a Cf between 0.001 and 0.006 at Re = 1e7."""
        smooth = [
            TurbulentCfEqn.WHITE_CHRISTOPH_COMPRESSIBLE,
            TurbulentCfEqn.SCHLICHTING_PRANDTL,
            TurbulentCfEqn.SCHLICHTING_COMPRESSIBLE,
            TurbulentCfEqn.SCHLICHTING_INCOMPRESSIBLE,
            TurbulentCfEqn.SCHULTZ_GRUNOW_SCHOENHERR,
            TurbulentCfEqn.SCHULTZ_GRUNOW_HIGH_RE,
            TurbulentCfEqn.POWER_LAW_BLASIUS,
            TurbulentCfEqn.POWER_LAW_PRANDTL_LOW_RE,
            TurbulentCfEqn.POWER_LAW_PRANDTL_MEDIUM_RE,
            TurbulentCfEqn.POWER_LAW_PRANDTL_HIGH_RE,
            TurbulentCfEqn.EXPLICIT_FIT_SPALDING,
            TurbulentCfEqn.EXPLICIT_FIT_SPALDING_CHI,
            TurbulentCfEqn.EXPLICIT_FIT_SCHOENHERR,
            TurbulentCfEqn.IMPLICIT_SCHOENHERR,
            TurbulentCfEqn.IMPLICIT_KARMAN,
            TurbulentCfEqn.IMPLICIT_KARMAN_SCHOENHERR,
        ]
        for eqn in smooth:
            cf = calc_turb_cf(1.0e7, eqn)
            self.assertGreater(cf, 0.001, eqn.name)
            self.assertLess(cf, 0.006, eqn.name)

    def test_unknown_selector_returns_zero(self):
        self.assertEqual(calc_turb_cf(1.0e7, "not_a_law"), 0.0)

    def test_non_positive_reynolds_returns_zero(self):
        """Re <= 0 gives Cf = 0 without raising."""
        self.assertEqual(calc_turb_cf(0.0, TurbulentCfEqn.IMPLICIT_SCHOENHERR), 0.0)
        self.assertEqual(calc_turb_cf(-1.0, TurbulentCfEqn.POWER_LAW_BLASIUS), 0.0)

    def test_white_roughness(self):
        """White roughness law depends on Lref / k only."""
        cf = calc_turb_cf(1.0e7, TurbulentCfEqn.ROUGHNESS_WHITE, ref_length=10.0, roughness=0.001)
        expected = (1.4 + 3.7 * math.log10(10.0 / 0.001)) ** -2.0
        self.assertAlmostEqual(cf, expected, places=12)

    def test_schlichting_roughness_scales_to_inches(self):
        """The average roughness law takes the height in inches."""
        feet = calc_turb_cf(
            1.0e7, TurbulentCfEqn.ROUGHNESS_SCHLICHTING_AVG,
            ref_length=10.0, roughness=0.001, length_unit=LengthUnit.FT
        )
        expected = (1.89 + 1.62 * math.log10(10.0 / (0.001 * 12.0))) ** -2.5
        self.assertAlmostEqual(feet, expected, places=12)

        inches = calc_turb_cf(
            1.0e7, TurbulentCfEqn.ROUGHNESS_SCHLICHTING_AVG,
            ref_length=10.0, roughness=0.012, length_unit=LengthUnit.IN
        )
        self.assertAlmostEqual(inches, expected, places=12)

    def test_roughness_flow_correction(self):
        """Flow correction divides by (1 + (gamma - 1)/2 * M)^0.467."""
        base = calc_turb_cf(
            1.0e7, TurbulentCfEqn.ROUGHNESS_SCHLICHTING_AVG,
            ref_length=10.0, roughness=0.001
        )
        corrected = calc_turb_cf(
            1.0e7, TurbulentCfEqn.ROUGHNESS_SCHLICHTING_AVG_FLOW_CORRECTION,
            ref_length=10.0, roughness=0.001, gamma=1.4, mach=0.8
        )
        self.assertAlmostEqual(corrected, base / (1.0 + 0.2 * 0.8) ** 0.467, places=12)

    def test_heat_transfer_adiabatic_low_speed(self):
        """With unit temperature ratios at M = 0 the law reduces to White-Christoph."""
        re = 1.0e7
        cf = calc_turb_cf(re, TurbulentCfEqn.HEAT_TRANSFER_WHITE_CHRISTOPH, mach=0.0)
        expected = 0.451 / math.log(0.056 * re) ** 2
        self.assertAlmostEqual(cf, expected, places=12)


class TestImplicitSolver(unittest.TestCase):
    """Newton solution of the implicit friction laws."""

    REYNOLDS = [1.0e5, 1.0e6, 1.0e7, 1.0e8, 1.0e9]

    def test_schoenherr_seed_independence(self):
        """Root is the same from the explicit fit and from +/-20% seeds."""
        for re in self.REYNOLDS:
            seed = float(_schoenherr_explicit(re))
            reference = solve_implicit_cf(_schoenherr_residual, _schoenherr_slope, re, seed)
            for factor in (0.8, 0.9, 1.1, 1.2):
                cf = solve_implicit_cf(
                    _schoenherr_residual, _schoenherr_slope, re, seed * factor
                )
                self.assertAlmostEqual(cf, reference, delta=1e-8, msg=f"Re={re}, seed x{factor}")

    def test_schoenherr_root_satisfies_law(self):
        for re in self.REYNOLDS:
            cf = calc_turb_cf(re, TurbulentCfEqn.IMPLICIT_SCHOENHERR)
            self.assertLess(abs(_schoenherr_residual(cf, re)), 1e-9)

    def test_iteration_cap_returns_estimate(self):
        """A capped solve still returns a finite, positive estimate."""
        cf = calc_turb_cf(1.0e7, TurbulentCfEqn.IMPLICIT_KARMAN, max_iterations=1)
        self.assertTrue(math.isfinite(cf))
        self.assertGreater(cf, 0.0)


class TestEquationNames(unittest.TestCase):

    def test_known_names(self):
        self.assertEqual(lam_cf_name(LaminarCfEqn.BLASIUS), "Blasius")
        self.assertEqual(turb_cf_name(TurbulentCfEqn.IMPLICIT_KARMAN), "Von Karman Implicit")

    def test_unknown_names(self):
        """Unknown selectors are reported as ERROR."""
        self.assertEqual(lam_cf_name("bogus"), "ERROR")
        self.assertEqual(turb_cf_name(99), "ERROR")
        self.assertEqual(wing_ff_name("bogus"), "ERROR")
        self.assertEqual(body_ff_name(None), "ERROR")

    def test_manual_detection(self):
        self.assertTrue(is_manual_ff(WingFormFactorEqn.MANUAL))
        self.assertTrue(is_manual_ff(BodyFormFactorEqn.MANUAL))
        self.assertFalse(is_manual_ff(WingFormFactorEqn.HOERNER))


class TestWingFormFactor(unittest.TestCase):
    """Lifting surface form factors."""

    def test_hoerner(self):
        result = calc_ff_wing(0.12, WingFormFactorEqn.HOERNER)
        self.assertAlmostEqual(result.value, 1.0 + 0.24 + 60.0 * 0.12 ** 4, places=12)
        self.assertIsNone(result.q_factor)

    def test_manual_is_unity(self):
        self.assertEqual(calc_ff_wing(0.12, WingFormFactorEqn.MANUAL).value, 1.0)

    def test_unknown_is_zero(self):
        self.assertEqual(calc_ff_wing(0.12, "bogus").value, 0.0)

    def test_jenkinson_tail_sets_q(self):
        """Jenkinson tail returns Q = 1.2 with its form factor."""
        result = calc_ff_wing(0.10, WingFormFactorEqn.JENKINSON_TAIL)
        self.assertAlmostEqual(result.value, 1.0 + 3.52 * 0.10, places=12)
        self.assertEqual(result.q_factor, 1.2)

    def test_jenkinson_wing_sweep(self):
        """The thickness term scales with cos^2 of the half chord sweep."""
        toc = 0.12
        sweep = math.radians(30.0)
        f_star = 1.0 + 3.3 * toc - 0.008 * toc ** 2 + 27.0 * toc ** 3
        result = calc_ff_wing(toc, WingFormFactorEqn.JENKINSON_WING, sweep50=sweep)
        self.assertAlmostEqual(result.value, (f_star - 1.0) * math.cos(sweep) ** 2 + 1.0, places=12)

    def test_datcom_transition_location(self):
        """The raw laminar percentage is compared with 0.30: L = 2.0 at or below, 1.2 above."""
        toc = 0.12
        rls = datcom_rls(0.5, 0.0)
        turbulent = calc_ff_wing(toc, WingFormFactorEqn.DATCOM, perc_lam=0.0, mach=0.5)
        limit = calc_ff_wing(toc, WingFormFactorEqn.DATCOM, perc_lam=0.30, mach=0.5)
        ten_percent = calc_ff_wing(toc, WingFormFactorEqn.DATCOM, perc_lam=10.0, mach=0.5)
        fifty_percent = calc_ff_wing(toc, WingFormFactorEqn.DATCOM, perc_lam=50.0, mach=0.5)
        short_run = 1.0 + 2.0 * toc + 100.0 * toc ** 4
        long_run = 1.0 + 1.2 * toc + 100.0 * toc ** 4
        self.assertAlmostEqual(turbulent.value, short_run * rls, places=12)
        self.assertAlmostEqual(limit.value, short_run * rls, places=12)
        self.assertAlmostEqual(ten_percent.value, long_run * rls, places=12)
        self.assertAlmostEqual(fifty_percent.value, long_run * rls, places=12)

    def test_datcom_mach_clamped(self):
        """Rls is held constant outside the 0.25 to 0.9 Mach table."""
        self.assertAlmostEqual(datcom_rls(0.05, 0.2), datcom_rls(0.25, 0.2), places=12)
        self.assertAlmostEqual(datcom_rls(1.5, 0.2), datcom_rls(0.90, 0.2), places=12)

    def test_shevell_incompressible(self):
        result = calc_ff_wing(0.10, WingFormFactorEqn.SHEVELL, mach=0.0)
        self.assertAlmostEqual(result.value, 1.0 + 2.0 * 0.10 + 100.0 * 0.10 ** 4, places=12)


class TestBodyFormFactor(unittest.TestCase):
    """Body form factors."""

    def test_hoerner_streambody(self):
        ff = calc_ff_body(5.0, 5.0, BodyFormFactorEqn.HOERNER_STREAMBODY, 10.0, math.pi)
        self.assertAlmostEqual(ff, 1.0 + 1.5 / 5.0 ** 1.5 + 7.0 / 125.0, places=12)

    def test_constant_factors(self):
        self.assertEqual(calc_ff_body(5.0, 5.0, BodyFormFactorEqn.JENKINSON_WING_NACELLE, 10.0, 1.0), 1.25)
        self.assertEqual(calc_ff_body(5.0, 5.0, BodyFormFactorEqn.JENKINSON_AFT_FUSE_NACELLE, 10.0, 1.0), 1.5)
        self.assertEqual(calc_ff_body(5.0, 5.0, BodyFormFactorEqn.MANUAL, 10.0, 1.0), 1.0)

    def test_jenkinson_fuse_uses_equivalent_diameter(self):
        """Jenkinson fuselage fineness is L over the equivalent circular diameter."""
        ff = calc_ff_body(0.0, 0.0, BodyFormFactorEqn.JENKINSON_FUSE, 10.0, math.pi)
        lam = 10.0 / 2.0
        self.assertAlmostEqual(ff, 1.0 + 2.2 / lam ** 1.5 - 0.9 / lam ** 3, places=12)

    def test_schemensky_uses_alternate_fineness(self):
        ff = calc_ff_body(1.0, 4.0, BodyFormFactorEqn.SCHEMENSKY_NACELLE, 10.0, 1.0)
        self.assertAlmostEqual(ff, 1.0 + 0.35 / 4.0, places=12)

    def test_unknown_is_zero(self):
        self.assertEqual(calc_ff_body(5.0, 5.0, "bogus", 10.0, 1.0), 0.0)


if __name__ == "__main__":
    unittest.main()
