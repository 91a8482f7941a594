"""
Drag Breakdown Plot Tests
=========================

Smoke tests of the breakdown charts on the non-interactive backend.
"""

import sys
from pathlib import Path
import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from src.parasite_drag import ExcrescenceType
from src.parasite_drag.plotting import DragBreakdownPlotter

from drag_fixtures import basic_snapshot, basic_vehicle, make_manager


class TestDragBreakdownPlotter(unittest.TestCase):

    def setUp(self):
        vehicle = basic_vehicle()
        manager = make_manager(vehicle)
        manager.add_excrescence(ExcrescenceType.COUNT, 20.0, "Antennas")
        self.report = manager.calculate_all(basic_snapshot(vehicle))
        self.plotter = DragBreakdownPlotter()

    def tearDown(self):
        plt.close("all")

    def test_cd_breakdown_bars(self):
        """One bar per line item plus one per excrescence."""
        fig = self.plotter.plot_cd_breakdown(self.report)
        ax = fig.axes[0]
        self.assertEqual(len(ax.patches), 3)
        labels = [t.get_text() for t in ax.get_yticklabels()]
        self.assertEqual(labels, ["Fuselage", "Wing", "Antennas"])

    def test_wetted_area_on_existing_axes(self):
        fig, ax = plt.subplots()
        returned = self.plotter.plot_wetted_area(self.report, ax=ax)
        self.assertIs(returned, fig)
        self.assertEqual(len(ax.patches), 3)
        self.assertEqual(ax.get_xlabel(), "S_wet (ft^2)")

    def test_drag_area_pie(self):
        fig = self.plotter.plot_drag_area_pie(self.report)
        self.assertEqual(len(fig.axes[0].patches), 3)


if __name__ == "__main__":
    unittest.main()
