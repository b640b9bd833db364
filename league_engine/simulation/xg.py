"""
Expected goals (xG) from team strength, venue and recent form.

Multivariate logistic curve:
    z  = strength_coeff * strength + home_coeff * is_home + form_coeff * form + intercept
    xG = max_xg / (1 + e^-z), floored at min_xg

Home advantage and form are separate additive terms on the logit, so they shift every
strength level consistently instead of being folded into strength.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from league_engine.models import Form


def sigmoid(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


@dataclass(frozen=True)
class XGCalibration:
    """Logistic regression coefficients; defaults produce realistic football scores."""
    max_xg: float = 2.2
    strength_coeff: float = 0.06
    home_coeff: float = 0.5
    form_coeff: float = 0.3
    intercept: float = -3.0  # centres the curve at strength ~50
    min_xg: float = 0.15


DEFAULT_CALIBRATION = XGCalibration()


def calculate_base_xg(
    strength: float,
    is_home: bool = False,
    form_score: float = 0.0,
    calibration: XGCalibration = DEFAULT_CALIBRATION,
) -> float:
    z = (
        calibration.strength_coeff * strength
        + calibration.home_coeff * (1 if is_home else 0)
        + calibration.form_coeff * form_score
        + calibration.intercept
    )
    return max(calibration.max_xg * sigmoid(z), calibration.min_xg)


def calculate_form_score(form: Form | None) -> float:
    """W=+1, D=0, L=-1 averaged over recent results; 0.0 (neutral) when there are none."""
    if form is None:
        return 0.0
    return form.score()
