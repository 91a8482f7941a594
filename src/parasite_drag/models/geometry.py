"""
Geometry Contracts
==================

Vehicle components and the degenerate-geometry snapshot consumed by the
parasite drag build-up.

The geometry kernel that produces these objects is external. A
``Vehicle`` holds the component tree (with each component's drag inputs)
and a ``GeometrySnapshot`` holds, per component surface, the degenerate
stick reduction plus the wetted areas keyed by tag.

Wetted Area Tags:
----------------
- main surface:  "<component name><surface number>"
- sub-surface:   "<component name><surface number>,<sub-surface name>"
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..config import NONE_ID
from ..correlations import WingFormFactorEqn, BodyFormFactorEqn


class SurfaceType(Enum):
    """Degenerate surface classification."""
    BODY = "body"
    WING = "wing"
    DISK = "disk"


class GeomType(Enum):
    """Component kinds that matter to the build-up."""
    GENERIC = "generic"
    WING = "wing"
    CUSTOM = "custom"
    MESH = "mesh"
    HINGE = "hinge"
    BLANK = "blank"


# Component kinds never given drag rows
NON_ANALYZABLE_TYPES = (GeomType.MESH, GeomType.HINGE, GeomType.BLANK)


@dataclass
class DegenStick:
    """
    One-dimensional reduction of a surface along its stations.

    Station arrays have N entries; section arrays (between stations)
    have N-1 entries.

    Attributes:
    ----------
    xle : np.ndarray
        Leading edge points, shape (N, 3)

    chord : np.ndarray
        Chord at each station

    toc : np.ndarray
        Thickness/chord at each station

    sect_area : np.ndarray
        Cross-section area at each station

    perim_top : np.ndarray
        Top perimeter at each station

    sweep_le : np.ndarray
        Leading edge sweep of each section (deg)

    area_top : np.ndarray
        Top planform area of each section
    """
    xle: np.ndarray
    chord: np.ndarray
    toc: np.ndarray
    sect_area: np.ndarray
    perim_top: np.ndarray
    sweep_le: np.ndarray
    area_top: np.ndarray

    def __post_init__(self):
        self.xle = np.asarray(self.xle, dtype=float).reshape(-1, 3)
        for name in ("chord", "toc", "sect_area", "perim_top", "sweep_le", "area_top"):
            setattr(self, name, np.asarray(getattr(self, name), dtype=float).ravel())

        n_stations = len(self.xle)
        for name in ("chord", "toc", "sect_area", "perim_top"):
            if len(getattr(self, name)) != n_stations:
                raise ValueError(
                    f"DegenStick.{name} has {len(getattr(self, name))} entries, "
                    f"expected {n_stations}"
                )
        if len(self.area_top) > max(n_stations - 1, 0):
            raise ValueError("DegenStick.area_top has more sections than stations allow")
        if len(self.sweep_le) < len(self.area_top):
            raise ValueError("DegenStick.sweep_le is shorter than area_top")

    @property
    def num_stations(self) -> int:
        return len(self.xle)

    @property
    def num_sections(self) -> int:
        return len(self.area_top)

    @classmethod
    def from_dict(cls, data: dict) -> "DegenStick":
        return cls(
            xle=data["xle"],
            chord=data["chord"],
            toc=data["toc"],
            sect_area=data["sect_area"],
            perim_top=data["perim_top"],
            sweep_le=data["sweep_le"],
            area_top=data["area_top"],
        )


@dataclass
class DegenSurface:
    """Degenerate geometry of one component surface."""
    component_id: str
    surface_index: int
    surface_type: SurfaceType
    stick: DegenStick


@dataclass
class SubSurface:
    """A tagged patch of a component surface (control surface, panel...)."""
    id: str
    name: str
    include_in_wetted_area: bool = True


@dataclass
class Component:
    """
    Vehicle component with its parasite drag inputs.

    Attributes:
    ----------
    id, name : str
        Unique ID and display name

    surface_types : List[SurfaceType]
        Type of every surface including symmetric copies

    geom_type : GeomType
        Component kind; custom components label rows by surface type

    parent_id : str, optional
        Parent component in the vehicle tree

    total_area : float, optional
        Total planform area, used when the component is the reference wing

    perc_lam : float
        Laminar run as percent of the reference length

    ff_user : float, optional
        User form factor; used instead of the computed value when set

    q_factor : float
        Interference factor

    roughness : float
        Equivalent sand grain height (model length unit)

    te_tw_ratio, taw_tw_ratio : float
        Temperature ratios for the heat transfer friction law

    ff_wing_eqn / ff_body_eqn
        Form factor equations for lifting and body surfaces

    grouped_ancestor_gen : int
        Ancestor generation whose drag properties this component adopts
        (0 for none)

    expanded_list : bool
        Show surfaces as individual line items instead of folding them
        into the first row
    """
    id: str
    name: str
    surface_types: List[SurfaceType] = field(default_factory=lambda: [SurfaceType.BODY])
    geom_type: GeomType = GeomType.GENERIC
    parent_id: Optional[str] = None
    sub_surfaces: List[SubSurface] = field(default_factory=list)
    total_area: Optional[float] = None

    # Drag inputs
    perc_lam: float = 0.0
    ff_user: Optional[float] = None
    q_factor: float = 1.0
    roughness: float = 0.0
    te_tw_ratio: float = 1.0
    taw_tw_ratio: float = 1.0
    ff_wing_eqn: WingFormFactorEqn = WingFormFactorEqn.HOERNER
    ff_body_eqn: BodyFormFactorEqn = BodyFormFactorEqn.HOERNER_STREAMBODY
    grouped_ancestor_gen: int = 0
    expanded_list: bool = False

    @property
    def num_total_surfs(self) -> int:
        return len(self.surface_types)

    @property
    def is_custom(self) -> bool:
        return self.geom_type == GeomType.CUSTOM

    @property
    def is_analyzable(self) -> bool:
        if self.geom_type in NON_ANALYZABLE_TYPES:
            return False
        return bool(self.surface_types) and self.surface_types[0] != SurfaceType.DISK

    def get_sub_surface(self, sub_surface_id: str) -> Optional[SubSurface]:
        for sub in self.sub_surfaces:
            if sub.id == sub_surface_id:
                return sub
        return None

    def ff_eqn_for(self, surface_type: SurfaceType):
        """Form factor equation used for a surface of the given type."""
        if surface_type == SurfaceType.BODY:
            return self.ff_body_eqn
        return self.ff_wing_eqn

    @classmethod
    def from_dict(cls, data: dict) -> "Component":
        ff_user = data.get("ff_user")
        return cls(
            id=data["id"],
            name=data["name"],
            surface_types=[SurfaceType(s) for s in data.get("surface_types", ["body"])],
            geom_type=GeomType(data.get("geom_type", "generic")),
            parent_id=data.get("parent_id"),
            sub_surfaces=[
                SubSurface(s["id"], s["name"], s.get("include_in_wetted_area", True))
                for s in data.get("sub_surfaces", [])
            ],
            total_area=data.get("total_area"),
            perc_lam=data.get("perc_lam", 0.0),
            ff_user=None if ff_user is None else float(ff_user),
            q_factor=data.get("q_factor", 1.0),
            roughness=data.get("roughness", 0.0),
            te_tw_ratio=data.get("te_tw_ratio", 1.0),
            taw_tw_ratio=data.get("taw_tw_ratio", 1.0),
            ff_wing_eqn=WingFormFactorEqn(data.get("ff_wing_eqn", "hoerner")),
            ff_body_eqn=BodyFormFactorEqn(data.get("ff_body_eqn", "hoerner_streambody")),
            grouped_ancestor_gen=data.get("grouped_ancestor_gen", 0),
            expanded_list=data.get("expanded_list", False),
        )


class Vehicle:
    """
    Vehicle/session context: the component tree and named component sets.

    Components keep their insertion order, which is the row order of
    the build-up.
    """

    ALL_SET = "all"

    def __init__(self, components: Optional[List[Component]] = None):
        self.components: Dict[str, Component] = {}
        self.sets: Dict[str, List[str]] = {}
        for comp in components or []:
            self.add_component(comp)

    def add_component(self, component: Component) -> Component:
        self.components[component.id] = component
        return component

    def find_component(self, component_id: str) -> Optional[Component]:
        return self.components.get(component_id)

    def get_component_set(self, set_name: Optional[str] = None) -> List[str]:
        """IDs in a named set, or every component for the "all" set."""
        if set_name is None or set_name == self.ALL_SET:
            return list(self.components)
        return list(self.sets.get(set_name, []))

    def get_ancestor_id(self, component_id: str, generation: int) -> str:
        """
        ID of the ancestor ``generation`` levels up the tree.

        Generation 0 (or negative) is the component itself; an ancestor
        that does not exist resolves to NONE_ID.
        """
        comp = self.find_component(component_id)
        if comp is None:
            return NONE_ID
        if generation <= 0:
            return comp.id

        current = comp
        for _ in range(generation):
            if current.parent_id is None:
                return NONE_ID
            current = self.find_component(current.parent_id)
            if current is None:
                return NONE_ID
        return current.id

    @classmethod
    def from_dict(cls, data: dict) -> "Vehicle":
        vehicle = cls([Component.from_dict(c) for c in data.get("components", [])])
        vehicle.sets = {name: list(ids) for name, ids in data.get("sets", {}).items()}
        return vehicle


@dataclass
class GeometrySnapshot:
    """
    Degenerate geometry produced for one build-up pass.

    Attributes:
    ----------
    surfaces : Dict[Tuple[str, int], DegenSurface]
        Keyed by (component ID, surface index)

    wetted_areas : Dict[str, float]
        Wetted area per tag (see module docstring)
    """
    surfaces: Dict[Tuple[str, int], DegenSurface] = field(default_factory=dict)
    wetted_areas: Dict[str, float] = field(default_factory=dict)

    @staticmethod
    def tag(component_name: str, surf_num: int, sub_surface_name: Optional[str] = None) -> str:
        base = f"{component_name}{surf_num}"
        if sub_surface_name:
            return f"{base},{sub_surface_name}"
        return base

    def add_surface(self, surface: DegenSurface):
        self.surfaces[(surface.component_id, surface.surface_index)] = surface

    def get_surface(self, component_id: str, surface_index: int) -> Optional[DegenSurface]:
        return self.surfaces.get((component_id, surface_index))

    def get_wetted_area(self, tag: str) -> Optional[float]:
        return self.wetted_areas.get(tag)

    @classmethod
    def from_dict(cls, data: dict) -> "GeometrySnapshot":
        snapshot = cls(wetted_areas={k: float(v) for k, v in data.get("wetted_areas", {}).items()})
        for s in data.get("surfaces", []):
            snapshot.add_surface(DegenSurface(
                component_id=s["component_id"],
                surface_index=s.get("surface_index", 0),
                surface_type=SurfaceType(s["surface_type"]),
                stick=DegenStick.from_dict(s["stick"]),
            ))
        return snapshot
