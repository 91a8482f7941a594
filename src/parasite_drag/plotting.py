"""
Parasite Drag Plotting Module
=============================

Charts of a finished build-up.

Plot Types Available:
--------------------
- Percent of total CD per line item (components and excrescences)
- Wetted area per component row
- Drag area share as a pie chart

Classes:
--------
- DragBreakdownPlotter: charts from a DragReport

Usage:
-----
    from src.parasite_drag.plotting import DragBreakdownPlotter

    plotter = DragBreakdownPlotter()
    fig = plotter.plot_cd_breakdown(report)
    fig.savefig("breakdown.png", dpi=150)
"""

from typing import List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from .report import DragReport


class DragBreakdownPlotter:
    """
    Drag build-up visualization.

    Only rows with a drag contribution of their own (positive CD) are
    drawn in the CD charts; folded symmetric copies and sub-surfaces show
    up through their representative row.
    """

    # -------------------------------------------------------------------------
    # Default Plot Styling
    # -------------------------------------------------------------------------

    DEFAULT_FIGURE_SIZE = (10, 6)
    DEFAULT_PIE_SIZE = (8, 8)
    DEFAULT_GRID = True

    COMPONENT_COLOR = "tab:blue"
    EXCRESCENCE_COLOR = "tab:orange"

    def _get_axes(self, ax: Optional[Axes], figsize) -> Tuple[Figure, Axes]:
        if ax is None:
            fig, ax = plt.subplots(1, figsize=figsize or self.DEFAULT_FIGURE_SIZE)
        else:
            fig = ax.get_figure()
        return fig, ax

    @staticmethod
    def _cd_items(report: DragReport) -> Tuple[List[str], List[float], List[str]]:
        """Labels, percent of total CD and bar colors of every line item."""
        labels, percents, colors = [], [], []
        for row in report.rows:
            if row.cd > 0:
                labels.append(row.label)
                percents.append(row.perc_total_cd * 100.0)
                colors.append(DragBreakdownPlotter.COMPONENT_COLOR)
        for item in report.excrescences:
            labels.append(item.label)
            percents.append(item.perc_total_cd * 100.0)
            colors.append(DragBreakdownPlotter.EXCRESCENCE_COLOR)
        return labels, percents, colors

    def plot_cd_breakdown(
        self,
        report: DragReport,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Horizontal bar chart of each line item's share of the total CD.

        Parameters:
        ----------
        report : DragReport
            Finished build-up

        figsize : tuple, optional
            Figure size as (width, height) in inches.

        ax : matplotlib.axes.Axes, optional
            Existing axes to plot on. If None, creates new figure.

        Returns:
        -------
        matplotlib.figure.Figure
            The matplotlib figure object.
        """
        fig, ax = self._get_axes(ax, figsize)
        labels, percents, colors = self._cd_items(report)

        y = np.arange(len(labels))
        ax.barh(y, percents, color=colors)
        ax.set_yticks(y)
        ax.set_yticklabels(labels)
        ax.invert_yaxis()

        ax.set_xlabel("Percent of Total CD [%]")
        ax.set_title(f"Parasite Drag Build-Up (CD = {report.totals.total_cd:.5f})")
        ax.grid(self.DEFAULT_GRID, axis="x")

        return fig

    def plot_wetted_area(
        self,
        report: DragReport,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """Bar chart of the wetted area of every main component row."""
        fig, ax = self._get_axes(ax, figsize)

        rows = [row for row in report.rows if not row.is_sub_surface]
        y = np.arange(len(rows))
        ax.barh(y, [row.swet for row in rows], color=self.COMPONENT_COLOR)
        ax.set_yticks(y)
        ax.set_yticklabels([row.label for row in rows])
        ax.invert_yaxis()

        ax.set_xlabel(report.labels["Swet"])
        ax.set_title("Wetted Area")
        ax.grid(self.DEFAULT_GRID, axis="x")

        return fig

    def plot_drag_area_pie(
        self,
        report: DragReport,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """Pie chart of the drag area f of every line item."""
        fig, ax = self._get_axes(ax, figsize or self.DEFAULT_PIE_SIZE)

        labels = [row.label for row in report.rows if row.f > 0]
        values = [row.f for row in report.rows if row.f > 0]
        for item in report.excrescences:
            if item.f > 0:
                labels.append(item.label)
                values.append(item.f)

        if values:
            ax.pie(values, labels=labels, autopct="%1.1f%%", startangle=90)
        ax.set_title(f"Drag Area Breakdown ({report.labels['f']})")
        ax.axis("equal")

        return fig
