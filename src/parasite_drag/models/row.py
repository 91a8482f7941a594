"""
Drag Row Model
==============

One line of the parasite drag table: a component surface, or a
sub-surface of one, with its drag inputs and every derived quantity.

Derived fields hold the sentinel -1 until a geometry snapshot has been
processed.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import SENTINEL, WING_PREFIX, BODY_PREFIX
from ..correlations import is_manual_ff, ff_name
from .geometry import SurfaceType


@dataclass
class DragRow:
    """
    Parasite drag line item.

    Attributes:
    ----------
    component_id : str
        Owning component

    sub_surface_id : str
        Sub-surface ID, empty for main surface rows

    label : str
        Display label

    surf_num : int
        Surface number used for wetted area tags and grouping (0 for the
        first row of a standard component)

    source_surface : int
        Index of the component surface the row's geometry comes from

    shape_type : SurfaceType
        Body or wing surface

    grouped_ancestor_gen : int
        Ancestor generation (-1 for sub-surface rows)

    expanded_list : bool
        Row-level expansion flag
    """
    component_id: str
    label: str
    shape_type: SurfaceType
    surf_num: int = 0
    source_surface: int = 0
    sub_surface_id: str = ""

    # Inputs
    perc_lam: float = 0.0
    ff_user: Optional[float] = None
    q_factor: float = 1.0
    roughness: float = SENTINEL
    te_tw_ratio: float = SENTINEL
    taw_tw_ratio: float = SENTINEL
    ff_eqn: object = None
    grouped_ancestor_gen: int = 0
    expanded_list: bool = False

    # Derived
    swet: float = SENTINEL
    lref: float = SENTINEL
    re: float = SENTINEL
    cf: float = SENTINEL
    fine_rat: float = SENTINEL
    ff_out: float = SENTINEL
    ff_eqn_name: str = ""
    f: float = SENTINEL
    cd: float = SENTINEL
    perc_total_cd: float = SENTINEL

    @property
    def is_sub_surface(self) -> bool:
        return self.sub_surface_id != ""

    @property
    def is_custom_part(self) -> bool:
        """Rows of custom components carry a [W]/[B] label prefix."""
        return self.label.startswith(WING_PREFIX) or self.label.startswith(BODY_PREFIX)

    @property
    def has_user_ff(self) -> bool:
        return self.ff_user is not None and self.ff_user != SENTINEL

    @property
    def form_factor(self) -> float:
        """Form factor shown in the table: user value for manual equations."""
        if is_manual_ff(self.ff_eqn) and self.has_user_ff:
            return self.ff_user
        return self.ff_out

    @property
    def ff_eqn_display(self) -> str:
        return self.ff_eqn_name or ff_name(self.ff_eqn)

    def copy_inputs_from(self, other: "DragRow"):
        """Take over the user drag inputs of another row."""
        self.perc_lam = other.perc_lam
        self.ff_user = other.ff_user
        self.q_factor = other.q_factor
        self.roughness = other.roughness
        self.te_tw_ratio = other.te_tw_ratio
        self.taw_tw_ratio = other.taw_tw_ratio

    def to_dict(self) -> dict:
        return {
            "Comp_ID": self.component_id,
            "Comp_Label": self.label,
            "Comp_SubSurfID": self.sub_surface_id,
            "Comp_Swet": self.swet,
            "Comp_Lref": self.lref,
            "Comp_Re": self.re,
            "Comp_Cf": self.cf,
            "Comp_FineRat": self.fine_rat,
            "Comp_FFEqn": self.ff_eqn_display,
            "Comp_FF": self.form_factor,
            "Comp_Q": self.q_factor,
            "Comp_PercLam": self.perc_lam,
            "Comp_f": self.f,
            "Comp_CD": self.cd,
            "Comp_PercTotalCD": self.perc_total_cd,
        }
