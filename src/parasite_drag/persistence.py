"""
Settings and Geometry Files
===========================

JSON documents for the build-up:

- settings: reference component, scalar settings, flow condition inputs
  and the excrescence ledger (label, kind, raw input)
- geometry: vehicle components plus a geometry snapshot, standing in for
  the output of a geometry kernel

Excrescences are re-added through the ledger on load, so the
single-margin rule holds for loaded documents too.
"""

import json
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .atmosphere import FreestreamType
from .correlations import LaminarCfEqn, TurbulentCfEqn
from .manager import ParasiteDragManager, ReferenceMode
from .models import ExcrescenceType, GeometrySnapshot, Vehicle
from .sorting import SortOrder
from .units import (
    LengthUnit,
    UnitSystem,
    VelocityUnit,
    TemperatureUnit,
    PressureUnit,
)


SETTINGS_VERSION = 1

# FlowCondition fields stored as plain numbers
_FLOW_VALUES = (
    "vinf", "altitude", "delta_temp", "temperature", "pressure", "density",
    "specific_heat_ratio", "mach", "re_per_length",
)


def encode_settings(manager: ParasiteDragManager) -> Dict[str, Any]:
    """Serialize a manager's settings and excrescences to a dict."""
    flow = manager.flow
    return {
        "version": SETTINGS_VERSION,
        "reference_component_id": manager.ref_component_id,
        "settings": {
            "set_name": manager.set_name,
            "sort_order": manager.sort_order.value,
            "reference_mode": manager.reference_mode.value,
            "sref": manager.sref,
            "lam_cf_eqn": manager.lam_cf_eqn.value,
            "turb_cf_eqn": manager.turb_cf_eqn.value,
            "length_unit": manager.length_unit.value,
            "file_name": manager.file_name,
        },
        "flow": {
            "freestream_type": flow.freestream_type.value,
            "unit_system": flow.unit_system.value,
            "velocity_unit": flow.velocity_unit.value,
            "temperature_unit": flow.temperature_unit.value,
            "pressure_unit": flow.pressure_unit.value,
            **{name: getattr(flow, name) for name in _FLOW_VALUES},
        },
        "excrescences": [
            {
                "label": item.label,
                "type": item.excres_type.value,
                "input": item.input_value,
            }
            for item in manager.ledger
        ],
    }


def decode_settings(manager: ParasiteDragManager, data: Dict[str, Any]):
    """
    Apply a settings dict to a manager.

    The ledger is cleared and rebuilt with ``add``.

    Raises:
    ------
    KeyError
        If the reference component is not part of the vehicle
    """
    ref_id = data.get("reference_component_id", "")
    if ref_id and manager.vehicle.find_component(ref_id) is None:
        raise KeyError(f"Reference component {ref_id!r} not found in vehicle")
    manager.ref_component_id = ref_id

    settings = data.get("settings", {})
    if "set_name" in settings:
        manager.set_name = settings["set_name"]
    if "sort_order" in settings:
        manager.sort_order = SortOrder(settings["sort_order"])
    if "reference_mode" in settings:
        manager.reference_mode = ReferenceMode(settings["reference_mode"])
    if "sref" in settings:
        manager.sref = float(settings["sref"])
    if "lam_cf_eqn" in settings:
        manager.lam_cf_eqn = LaminarCfEqn(settings["lam_cf_eqn"])
    if "turb_cf_eqn" in settings:
        manager.turb_cf_eqn = TurbulentCfEqn(settings["turb_cf_eqn"])
    if "length_unit" in settings:
        manager.length_unit = LengthUnit(settings["length_unit"])
    if "file_name" in settings:
        manager.file_name = settings["file_name"]

    flow_data = data.get("flow", {})
    flow = manager.flow
    if "freestream_type" in flow_data:
        flow.freestream_type = FreestreamType(flow_data["freestream_type"])
    if "unit_system" in flow_data:
        flow.unit_system = UnitSystem(flow_data["unit_system"])
    if "velocity_unit" in flow_data:
        flow.velocity_unit = VelocityUnit(flow_data["velocity_unit"])
    if "temperature_unit" in flow_data:
        flow.temperature_unit = TemperatureUnit(flow_data["temperature_unit"])
    if "pressure_unit" in flow_data:
        flow.pressure_unit = PressureUnit(flow_data["pressure_unit"])
    for name in _FLOW_VALUES:
        if name in flow_data:
            setattr(flow, name, float(flow_data[name]))

    manager.ledger.clear()
    for entry in data.get("excrescences", []):
        manager.ledger.add(
            ExcrescenceType(entry["type"]),
            float(entry.get("input", 0.0)),
            entry.get("label"),
            manager.sref,
        )
    manager.update()


def save_settings(manager: ParasiteDragManager, filepath: Union[str, Path]):
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(encode_settings(manager), f, indent=2)


def load_settings(manager: ParasiteDragManager, filepath: Union[str, Path]):
    with open(filepath, 'r', encoding='utf-8') as f:
        decode_settings(manager, json.load(f))


def load_geometry(filepath: Union[str, Path]) -> Tuple[Vehicle, GeometrySnapshot]:
    """
    Read a vehicle and its geometry snapshot from a JSON file.

    The file holds a "vehicle" object (components, optional sets) and a
    "snapshot" object (surfaces with degenerate sticks, wetted areas).

    Raises:
    ------
    KeyError
        If a snapshot surface refers to a component that is not defined
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)

    vehicle = Vehicle.from_dict(data["vehicle"])
    snapshot = GeometrySnapshot.from_dict(data.get("snapshot", {}))

    for comp_id, _ in snapshot.surfaces:
        if vehicle.find_component(comp_id) is None:
            raise KeyError(f"Snapshot surface refers to unknown component {comp_id!r}")

    return vehicle, snapshot
