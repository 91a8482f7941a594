"""
Parasite Drag Correlations Module
=================================

Pure functions for skin friction and form factor correlations.
Inputs are dimensionless apart from lengths, which are in the model
length unit.
"""

from .friction import (
    LaminarCfEqn,
    TurbulentCfEqn,
    calc_lam_cf,
    calc_turb_cf,
    solve_implicit_cf,
    lam_cf_name,
    turb_cf_name,
)

from .form_factor import (
    WingFormFactorEqn,
    BodyFormFactorEqn,
    WingFormFactor,
    calc_ff_wing,
    calc_ff_body,
    datcom_rls,
    wing_ff_name,
    body_ff_name,
    ff_name,
    is_manual_ff,
)

__all__ = [
    # Skin friction
    "LaminarCfEqn",
    "TurbulentCfEqn",
    "calc_lam_cf",
    "calc_turb_cf",
    "solve_implicit_cf",
    "lam_cf_name",
    "turb_cf_name",
    # Form factor
    "WingFormFactorEqn",
    "BodyFormFactorEqn",
    "WingFormFactor",
    "calc_ff_wing",
    "calc_ff_body",
    "datcom_rls",
    "wing_ff_name",
    "body_ff_name",
    "ff_name",
    "is_manual_ff",
]
