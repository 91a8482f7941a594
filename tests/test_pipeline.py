"""
Parasite Drag Build-Up Pipeline Tests
=====================================

Runs the full build-up on small vehicles and checks every derived row
quantity against hand calculation.

Test Methodology:
- Re is prescribed per unit length so Re = 1e6 * Lref
- Power law friction and Hoerner form factors give closed-form rows
- Grouping cases (symmetric copies, sub-surfaces, grouped children,
  custom components) are checked through wetted areas and line items
"""

import math
import sys
from pathlib import Path
import unittest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from src.parasite_drag import (
    Component,
    DegenStick,
    DegenSurface,
    GeomType,
    LaminarCfEqn,
    ParasiteDragManager,
    ReferenceMode,
    SubSurface,
    SurfaceType,
    Vehicle,
    calc_lam_cf,
    trace_calculation,
)
from src.parasite_drag.debugger import get_debugger
from src.parasite_drag.derivation import reference_length

from drag_fixtures import (
    RE_PER_FT,
    basic_snapshot,
    basic_vehicle,
    body_stick,
    find_row,
    hoerner_body_ff,
    hoerner_wing_ff,
    make_fuselage,
    make_manager,
    make_snapshot,
    make_wing,
    power_law_cf,
    wing_stick,
)


class TestBasicBuildUp(unittest.TestCase):
    """Fuselage plus a wing with a symmetric copy."""

    def setUp(self):
        self.vehicle = basic_vehicle()
        self.snapshot = basic_snapshot(self.vehicle)
        self.manager = make_manager(self.vehicle)
        self.report = self.manager.calculate_all(self.snapshot)

    def test_row_layout(self):
        """One row per surface, symmetric copy labelled <name>_<j>."""
        labels = [row.label for row in self.report.rows]
        self.assertEqual(labels, ["Fuselage", "Wing", "Wing_1"])
        copy = find_row(self.report.rows, "Wing_1")
        self.assertEqual(copy.surf_num, 1)
        self.assertEqual(find_row(self.report.rows, "Wing").surf_num, 0)

    def test_fuselage_row(self):
        row = find_row(self.report.rows, "Fuselage")
        self.assertAlmostEqual(row.swet, 100.0)
        self.assertAlmostEqual(row.lref, 10.0)
        self.assertAlmostEqual(row.re, 10.0 * RE_PER_FT, delta=1e-3)
        self.assertAlmostEqual(row.cf, power_law_cf(1.0e7), places=12)
        self.assertAlmostEqual(row.fine_rat, 0.2, places=12)
        self.assertAlmostEqual(row.ff_out, hoerner_body_ff(5.0), places=9)
        self.assertEqual(row.ff_eqn_name, "Hoerner Streamlined Body")

        expected_f = 100.0 * power_law_cf(1.0e7) * hoerner_body_ff(5.0)
        self.assertAlmostEqual(row.f, expected_f, places=9)

    def test_wing_row_absorbs_symmetric_copy(self):
        """The first wing row carries both surfaces' wetted area."""
        row = find_row(self.report.rows, "Wing")
        self.assertAlmostEqual(row.swet, 100.0)
        self.assertAlmostEqual(row.lref, 2.0)
        self.assertAlmostEqual(row.fine_rat, 0.12)
        self.assertAlmostEqual(row.ff_out, hoerner_wing_ff(0.12), places=12)

        expected_f = 100.0 * power_law_cf(2.0e6) * hoerner_wing_ff(0.12)
        self.assertAlmostEqual(row.f, expected_f, places=9)

    def test_symmetric_copy_is_not_line_item(self):
        row = find_row(self.report.rows, "Wing_1")
        self.assertAlmostEqual(row.swet, 50.0)
        self.assertEqual(row.f, 0.0)
        self.assertEqual(row.cd, 0.0)

    def test_cd_times_sref_is_f(self):
        """CD * Sref = f for every row."""
        for row in self.report.rows:
            self.assertAlmostEqual(row.cd * self.manager.sref, row.f, places=12)

    def test_totals(self):
        totals = self.report.totals
        fuse = find_row(self.report.rows, "Fuselage")
        wing = find_row(self.report.rows, "Wing")
        self.assertAlmostEqual(totals.geom_cd, fuse.cd + wing.cd, places=12)
        self.assertAlmostEqual(totals.total_cd, totals.geom_cd, places=12)
        self.assertAlmostEqual(totals.total_perc, 1.0, places=9)
        self.assertAlmostEqual(totals.geom_f, fuse.f + wing.f, places=12)

    def test_recalculation_is_idempotent(self):
        """Running twice on the same inputs gives identical results."""
        second = self.manager.calculate_all(self.snapshot)
        for a, b in zip(self.report.rows, second.rows):
            self.assertEqual(a.label, b.label)
            self.assertEqual(a.swet, b.swet)
            self.assertEqual(a.cd, b.cd)
        self.assertEqual(self.report.totals.total_cd, second.totals.total_cd)

    def test_report_is_a_copy(self):
        """Later calculations do not change an earlier report."""
        before = self.report.rows[0].cd
        self.manager.sref = 50.0
        self.manager.calculate_all()
        self.assertEqual(self.report.rows[0].cd, before)

    def test_reynolds_divisor(self):
        self.assertEqual(self.report.reynolds_divisor, 1.0e7)
        self.assertEqual(self.report.lref_decimals, 1)


class TestLaminarRun(unittest.TestCase):

    def test_mixed_laminar_turbulent_cf(self):
        """Cf = Cf_t(Re) - p Cf_t(Re_lam) + p Cf_l(Re_lam)."""
        vehicle = Vehicle([make_wing(perc_lam=10.0)])
        manager = make_manager(vehicle)
        manager.lam_cf_eqn = LaminarCfEqn.BLASIUS
        report = manager.calculate_all(make_snapshot(vehicle, {"Wing0": 50.0, "Wing1": 50.0}))

        re = 2.0e6
        re_lam = 0.1 * re
        expected = (power_law_cf(re) - 0.1 * power_law_cf(re_lam)
                    + 0.1 * calc_lam_cf(re_lam, LaminarCfEqn.BLASIUS))
        self.assertAlmostEqual(find_row(report.rows, "Wing").cf, expected, places=12)
        # symmetric copy takes the laminar input of the row before it
        self.assertEqual(find_row(report.rows, "Wing_1").perc_lam, 10.0)


class TestWithoutGeometry(unittest.TestCase):

    def test_sentinels_without_snapshot(self):
        """Every derived field is -1 before geometry is supplied."""
        manager = make_manager(basic_vehicle())
        report = manager.calculate_all()
        self.assertEqual(len(report.rows), 3)
        for row in report.rows:
            for value in (row.swet, row.lref, row.re, row.cf, row.fine_rat, row.ff_out, row.f, row.cd):
                self.assertEqual(value, -1.0)
            self.assertEqual(row.perc_total_cd, 0.0)
        self.assertEqual(report.totals.total_cd, 0.0)
        self.assertEqual(report.totals.geom_f, 0.0)


class TestReferenceLength(unittest.TestCase):
    """Reference length fallbacks."""

    def test_degenerate_body_falls_back_to_one(self):
        stick = DegenStick(
            xle=[[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]],
            chord=[0.0, 0.0],
            toc=[0.0, 0.0],
            sect_area=[0.0, 0.0],
            perim_top=[0.0, 0.0],
            sweep_le=[],
            area_top=[],
        )
        surface = DegenSurface("X", 0, SurfaceType.BODY, stick)
        self.assertEqual(reference_length(surface), 1.0)

    def test_zero_chord_wing_uses_length(self):
        """A wing with no chord falls back to its end-to-end length."""
        stick = wing_stick(span=5.0, chord=0.0)
        surface = DegenSurface("X", 0, SurfaceType.WING, stick)
        self.assertAlmostEqual(reference_length(surface), 5.0)

    def test_body_uses_length(self):
        surface = DegenSurface("X", 0, SurfaceType.BODY, body_stick(length=7.5))
        self.assertAlmostEqual(reference_length(surface), 7.5)


class TestSubSurfaces(unittest.TestCase):

    def build(self, include: bool = True):
        wing = make_wing(sub_surfaces=[SubSurface("SS1", "aileron", include)])
        vehicle = Vehicle([wing])
        snapshot = make_snapshot(vehicle, {
            "Wing0": 50.0, "Wing1": 50.0,
            "Wing0,aileron": 5.0, "Wing1,aileron": 5.0,
        })
        manager = make_manager(vehicle)
        return manager.calculate_all(snapshot)

    def test_sub_surface_rows(self):
        """One row per surface per sub-surface, after the main rows."""
        report = self.build()
        labels = [row.label for row in report.rows]
        self.assertEqual(labels, ["Wing", "Wing_1", "[ss] aileron_0", "[ss] aileron_1"])
        for row in report.rows[2:]:
            self.assertEqual(row.sub_surface_id, "SS1")
            self.assertEqual(row.grouped_ancestor_gen, -1)
            self.assertEqual(row.f, 0.0)

    def test_sub_surface_copies_previous_row(self):
        report = self.build()
        sub = find_row(report.rows, "[ss] aileron_0")
        prev = find_row(report.rows, "Wing_1")
        self.assertEqual(sub.lref, prev.lref)
        self.assertEqual(sub.re, prev.re)
        self.assertEqual(sub.cf, prev.cf)
        self.assertAlmostEqual(sub.swet, 5.0)

    def test_included_area_folds_into_owner(self):
        report = self.build(include=True)
        self.assertAlmostEqual(find_row(report.rows, "Wing").swet, 110.0)

    def test_excluded_area_not_folded(self):
        report = self.build(include=False)
        self.assertAlmostEqual(find_row(report.rows, "Wing").swet, 100.0)


class TestAncestorGrouping(unittest.TestCase):
    """A winglet grouped with the wing one generation up."""

    def build(self, wing_expanded: bool = False):
        wing = make_wing(q_factor=1.1, expanded_list=wing_expanded)
        winglet = Component(
            id="WLET",
            name="Winglet",
            geom_type=GeomType.WING,
            surface_types=[SurfaceType.WING],
            parent_id="WING",
            grouped_ancestor_gen=1,
        )
        vehicle = Vehicle([wing, make_fuselage(), winglet])
        snapshot = make_snapshot(vehicle, {
            "Fuselage0": 100.0, "Wing0": 50.0, "Wing1": 50.0, "Winglet0": 10.0,
        })
        # shorter chord so an un-overwritten winglet would differ
        snapshot.add_surface(DegenSurface("WLET", 0, SurfaceType.WING, wing_stick(span=2.0, chord=1.0)))
        manager = make_manager(vehicle)
        return manager.calculate_all(snapshot)

    def test_child_takes_ancestor_properties(self):
        report = self.build()
        wing = find_row(report.rows, "Wing")
        winglet = find_row(report.rows, "Winglet")
        self.assertEqual(winglet.lref, wing.lref)
        self.assertEqual(winglet.re, wing.re)
        self.assertEqual(winglet.cf, wing.cf)
        self.assertEqual(winglet.ff_out, wing.ff_out)
        self.assertEqual(winglet.ff_eqn_name, wing.ff_eqn_name)
        self.assertEqual(winglet.q_factor, 1.1)

    def test_collapsed_child_folds_into_ancestor(self):
        report = self.build()
        self.assertAlmostEqual(find_row(report.rows, "Wing").swet, 110.0)
        self.assertEqual(find_row(report.rows, "Winglet").f, 0.0)

    def test_grouped_rows_follow_ancestor(self):
        """Unsorted order pulls the winglet up behind the wing rows."""
        report = self.build()
        labels = [row.label for row in report.rows]
        self.assertEqual(labels, ["Wing", "Wing_1", "Winglet", "Fuselage"])

    def test_expanded_ancestor_lists_children(self):
        """An expanded wing shows every surface and child as a line item."""
        report = self.build(wing_expanded=True)
        wing = find_row(report.rows, "Wing")
        copy = find_row(report.rows, "Wing_1")
        winglet = find_row(report.rows, "Winglet")
        self.assertAlmostEqual(wing.swet, 50.0)
        self.assertGreater(copy.f, 0.0)
        self.assertGreater(winglet.f, 0.0)
        self.assertAlmostEqual(winglet.f, 10.0 * 1.1 * wing.cf * wing.ff_out, places=12)


class TestGrandparentGrouping(unittest.TestCase):
    """A pod on a pylon, grouped with the wing two generations up."""

    def build(self, wing_expanded: bool = False):
        wing = make_wing(q_factor=1.1, perc_lam=20.0, expanded_list=wing_expanded)
        pylon = Component(
            id="PYLN",
            name="Pylon",
            geom_type=GeomType.WING,
            surface_types=[SurfaceType.WING],
            parent_id="WING",
        )
        pod = Component(
            id="POD",
            name="Pod",
            geom_type=GeomType.WING,
            surface_types=[SurfaceType.WING],
            parent_id="PYLN",
            grouped_ancestor_gen=2,
            perc_lam=0.0,
            q_factor=1.5,
        )
        vehicle = Vehicle([wing, pylon, pod])
        snapshot = make_snapshot(vehicle, {
            "Wing0": 50.0, "Wing1": 50.0, "Pylon0": 4.0, "Pod0": 6.0,
        })
        snapshot.add_surface(DegenSurface("POD", 0, SurfaceType.WING,
                                          wing_stick(span=1.0, chord=0.5, toc=0.30)))
        manager = make_manager(vehicle)
        return manager.calculate_all(snapshot)

    def test_grandchild_takes_grandparent_properties(self):
        report = self.build()
        wing = find_row(report.rows, "Wing")
        pod = find_row(report.rows, "Pod")
        self.assertEqual(pod.lref, wing.lref)
        self.assertEqual(pod.re, wing.re)
        self.assertEqual(pod.fine_rat, wing.fine_rat)
        self.assertEqual(pod.ff_out, wing.ff_out)
        self.assertEqual(pod.perc_lam, 20.0)
        self.assertEqual(pod.q_factor, 1.1)
        self.assertEqual(pod.cf, wing.cf)

    def test_collapsed_grandparent_absorbs_grandchild(self):
        report = self.build()
        self.assertAlmostEqual(find_row(report.rows, "Wing").swet, 106.0)
        self.assertAlmostEqual(find_row(report.rows, "Pylon").swet, 4.0)
        self.assertEqual(find_row(report.rows, "Pod").f, 0.0)
        self.assertGreater(find_row(report.rows, "Pylon").f, 0.0)

    def test_expanded_grandparent_lists_grandchild(self):
        report = self.build(wing_expanded=True)
        wing = find_row(report.rows, "Wing")
        pod = find_row(report.rows, "Pod")
        self.assertAlmostEqual(wing.swet, 50.0)
        self.assertAlmostEqual(pod.f, 6.0 * 1.1 * wing.cf * wing.ff_out, places=12)


class TestComponentSelection(unittest.TestCase):

    def test_custom_component_labels(self):
        """Custom components get [B]/[W] labels and number every surface."""
        pod = Component(
            id="POD", name="Pod", geom_type=GeomType.CUSTOM,
            surface_types=[SurfaceType.BODY, SurfaceType.WING],
        )
        vehicle = Vehicle([pod])
        manager = make_manager(vehicle)
        report = manager.calculate_all(make_snapshot(vehicle, {"Pod0": 20.0, "Pod1": 8.0}))
        body = find_row(report.rows, "[B] Pod")
        fin = find_row(report.rows, "[W] Pod")
        self.assertEqual((body.surf_num, fin.surf_num), (0, 1))
        self.assertGreater(body.f, 0.0)
        self.assertGreater(fin.f, 0.0)

    def test_disks_and_meshes_skipped(self):
        vehicle = Vehicle([
            make_fuselage(),
            Component(id="PROP", name="Prop", surface_types=[SurfaceType.DISK]),
            Component(id="MESH", name="Scan", geom_type=GeomType.MESH),
            Component(id="NAC", name="Nacelle", surface_types=[SurfaceType.BODY, SurfaceType.DISK]),
        ])
        manager = make_manager(vehicle)
        report = manager.calculate_all(make_snapshot(vehicle, {"Fuselage0": 100.0, "Nacelle0": 10.0}))
        self.assertEqual([row.label for row in report.rows], ["Fuselage", "Nacelle"])

    def test_component_set(self):
        vehicle = basic_vehicle()
        vehicle.sets = {"wings": ["WING"]}
        manager = make_manager(vehicle)
        manager.set_name = "wings"
        report = manager.calculate_all(basic_snapshot(vehicle))
        self.assertEqual([row.label for row in report.rows], ["Wing", "Wing_1"])

    def test_refresh_drops_stale_rows(self):
        vehicle = basic_vehicle()
        manager = make_manager(vehicle)
        manager.calculate_all(basic_snapshot(vehicle))
        self.assertTrue(manager.is_same_component_set())

        vehicle.add_component(Component(id="TAIL", name="Tail", surface_types=[SurfaceType.WING]))
        self.assertFalse(manager.is_same_component_set())
        manager.refresh()
        self.assertEqual(manager.rows, [])
        self.assertFalse(manager.has_geometry)


class TestManagerSettings(unittest.TestCase):

    def test_requires_vehicle(self):
        with self.assertRaises(ValueError):
            ParasiteDragManager(None)

    def test_reference_area_from_wing(self):
        manager = make_manager(basic_vehicle())
        manager.reference_mode = ReferenceMode.COMPONENT
        manager.ref_component_id = "WING"
        manager.calculate_all()
        self.assertEqual(manager.sref, 40.0)

    def test_unknown_reference_component_cleared(self):
        manager = make_manager(basic_vehicle())
        manager.reference_mode = ReferenceMode.COMPONENT
        manager.ref_component_id = "GONE"
        manager.update_reference_area()
        self.assertEqual(manager.ref_component_id, "")

    def test_non_positive_sref_gives_zero_cd(self):
        vehicle = basic_vehicle()
        manager = make_manager(vehicle)
        manager.sref = 0.0
        report = manager.calculate_all(basic_snapshot(vehicle))
        for row in report.rows:
            self.assertEqual(row.cd, 0.0)
        self.assertGreater(find_row(report.rows, "Fuselage").f, 0.0)

    def test_missing_wetted_area_logged(self):
        vehicle = basic_vehicle()
        snapshot = make_snapshot(vehicle, {"Wing0": 50.0, "Wing1": 50.0})
        manager = make_manager(vehicle)
        with self.assertLogs("src.parasite_drag.derivation", level="WARNING"):
            report = manager.calculate_all(snapshot)
        self.assertEqual(find_row(report.rows, "Fuselage").swet, 0.0)

    def test_missing_surface_falls_back(self):
        """A component without a surface in the snapshot keeps sentinels."""
        vehicle = basic_vehicle()
        snapshot = basic_snapshot(vehicle)
        del snapshot.surfaces[("FUSE", 0)]
        with self.assertLogs("src.parasite_drag.derivation", level="WARNING"):
            report = make_manager(vehicle).calculate_all(snapshot)

        fuse = find_row(report.rows, "Fuselage")
        self.assertEqual(fuse.lref, 1.0)
        self.assertAlmostEqual(fuse.re, RE_PER_FT * 1.0)
        self.assertEqual(fuse.fine_rat, -1.0)
        self.assertEqual(fuse.ff_out, -1.0)
        self.assertEqual(fuse.f, 0.0)
        self.assertEqual(fuse.cd, 0.0)
        self.assertGreater(find_row(report.rows, "Wing").f, 0.0)

    def test_renew_resets_state(self):
        manager = make_manager(basic_vehicle())
        manager.sref = 12.0
        manager.add_excrescence(value=10.0)
        manager.renew()
        self.assertEqual(manager.sref, manager.config.default_sref)
        self.assertEqual(len(manager.ledger), 0)


class TestTrace(unittest.TestCase):

    def test_trace_records_steps(self):
        vehicle = basic_vehicle()
        manager = make_manager(vehicle)
        debugger = trace_calculation(manager, basic_snapshot(vehicle))

        self.assertIsNone(get_debugger())
        self.assertEqual(len(debugger.find_steps_by_category("Skin Friction")), 3)
        step = debugger.find_step_by_result("CD_total")
        self.assertIsNotNone(step)
        self.assertAlmostEqual(step.result, manager.total_cd(), places=12)
        self.assertIn("Skin Friction", debugger.get_report())

    def test_report_lists_rows_under_stages(self):
        vehicle = basic_vehicle()
        manager = make_manager(vehicle)
        report = trace_calculation(manager, basic_snapshot(vehicle)).get_report()
        self.assertIn("--- Reference Length ---", report)
        self.assertIn("CD_total = ", report)
        self.assertIn("turbulent_cf: Blasius Power Law", report)


if __name__ == "__main__":
    unittest.main()
