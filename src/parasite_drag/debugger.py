"""
Build-up Trace
==============

Records the per-row steps of a parasite drag build-up (row, inputs,
formula, result) so that a table value can be traced back to its
equation.

Pipeline stages report through ``debug_step``, which does nothing unless
a debugger has been installed with ``set_debugger``.

Usage:
------
    from src.parasite_drag.debugger import trace_calculation

    debugger = trace_calculation(manager, snapshot)
    print(debugger.get_report())
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """One traced row value."""
    category: str           # pipeline stage, e.g. "Reynolds", "Form Factor"
    description: str        # row label
    formula: str
    variables: dict
    result: Any
    result_name: str


def _format_value(value: Any) -> str:
    return f"{value:.6g}" if isinstance(value, float) else str(value)


class CalculationDebugger:
    """Collects trace steps under the pipeline stage that produced them."""

    def __init__(self):
        self.steps: List[TraceStep] = []
        self.sections: List[tuple] = []  # (step index, stage name)
        self.settings: Dict[str, Any] = {}

    def start(self, **settings):
        """Reset the trace and record the settings of the pass."""
        self.steps = []
        self.sections = []
        self.settings = settings

    def start_section(self, name: str):
        self.sections.append((len(self.steps), name))

    def add_step(self, category, description, formula, variables, result, result_name):
        self.steps.append(TraceStep(category, description, formula, variables, result, result_name))

    def get_report(self) -> str:
        """
        Render the trace as one line per row value, under stage headings.

        Stages that recorded no rows (e.g. every row was a sub-surface
        copy) are left out.
        """
        lines = ["=" * 70, "PARASITE DRAG BUILD-UP TRACE", "=" * 70]
        for key, value in self.settings.items():
            lines.append(f"  {key}: {value}")

        bounds = [idx for idx, _ in self.sections[1:]] + [len(self.steps)]
        for (start, name), end in zip(self.sections, bounds):
            if start == end:
                continue
            lines.extend(["", f"--- {name} ---"])
            if self.steps[start].formula:
                lines.append(f"    {self.steps[start].formula}")
            for step in self.steps[start:end]:
                inputs = ", ".join(f"{k}={_format_value(v)}" for k, v in step.variables.items())
                line = f"  {step.description:<24} {step.result_name} = {_format_value(step.result)}"
                if inputs:
                    line += f"   [{inputs}]"
                lines.append(line)

        lines.extend(["", "=" * 70, f"Total Steps: {len(self.steps)}"])
        return "\n".join(lines)

    def find_steps_by_category(self, category: str) -> List[TraceStep]:
        return [s for s in self.steps if s.category == category]

    def find_step_by_result(self, result_name: str) -> Optional[TraceStep]:
        """Most recent step that produced ``result_name``."""
        for step in reversed(self.steps):
            if step.result_name == result_name:
                return step
        return None


# Installed debugger, None when tracing is off
_debugger: Optional[CalculationDebugger] = None


def get_debugger() -> Optional[CalculationDebugger]:
    return _debugger


def set_debugger(debugger: Optional[CalculationDebugger]):
    global _debugger
    _debugger = debugger


def debug_section(name: str):
    if _debugger is not None:
        _debugger.start_section(name)


def debug_step(category, description, formula, variables, result, result_name):
    if _debugger is not None:
        _debugger.add_step(category, description, formula, variables, result, result_name)


def trace_calculation(manager, snapshot=None) -> CalculationDebugger:
    """
    Run a full build-up with a fresh debugger installed.

    Parameters:
    ----------
    manager : ParasiteDragManager
        Manager to run

    snapshot : GeometrySnapshot, optional
        Geometry for the pass; the manager's current snapshot otherwise

    Returns:
    -------
    CalculationDebugger
        The populated debugger (uninstalled again afterwards)
    """
    previous = get_debugger()
    debugger = CalculationDebugger()
    debugger.start(
        reference_area=manager.sref,
        laminar_cf=manager.lam_cf_name,
        turbulent_cf=manager.turb_cf_name,
        length_unit=manager.length_unit.value,
    )
    set_debugger(debugger)
    try:
        manager.calculate_all(snapshot)
    finally:
        set_debugger(previous)
    return debugger
