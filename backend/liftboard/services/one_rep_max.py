# liftboard/services/one_rep_max.py
"""
One-rep-max estimation and percentage resolution.

Two estimation formulas coexist and are kept separate on purpose:

* ``estimate_one_rep_max_brzycki`` -- ``weight * 36 / (37 - reps)``, used when
  logging raw stats and when raising an athlete's stored max.
* ``estimate_one_rep_max_display`` -- ``weight / (1.0278 - 0.0278 * reps)``, used
  for the estimated 1RM shown next to workout-log history. Only defined for
  reps in (0, 12].

Neither raises: "no estimate" is 0 (Brzycki) or ``None`` (display).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

from liftboard.settings import get_settings

Number = float | int
OneRepMaxFormula = Callable[[Optional[Number], Optional[Number]], Optional[Number]]

DISPLAY_FORMULA_MAX_REPS = 12


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_number(value: Number) -> str:
    """Render 75.0 as "75" and 72.5 as "72.5"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def estimate_one_rep_max_brzycki(weight: Number, reps: Number) -> Number:
    # reps >= 37 makes the denominator zero or negative; callers keep reps low
    if reps == 1:
        return weight
    if reps <= 0 or weight <= 0:
        return 0
    return round_half_up(weight * 36 / (37 - reps))


# the estimator used for stat logging and max tracking
estimate_one_rep_max = estimate_one_rep_max_brzycki


def estimate_one_rep_max_display(weight: Optional[Number], reps: Optional[Number]) -> Optional[int]:
    if not weight or not reps or reps <= 0 or reps > DISPLAY_FORMULA_MAX_REPS:
        return None
    return round_half_up(weight / (1.0278 - 0.0278 * reps))


ONE_REP_MAX_FORMULAS: dict[str, OneRepMaxFormula] = {
    "brzycki": estimate_one_rep_max_brzycki,
    "display": estimate_one_rep_max_display,
}


def weight_from_percentage(one_rep_max: Optional[Number], percentage: Optional[Number]) -> Optional[int]:
    if not one_rep_max or not percentage:
        return None
    return round_half_up(one_rep_max * percentage / 100)


@dataclass(frozen=True, slots=True)
class WeightDisplay:
    display_text: str
    calculated_weight: Optional[int]


def resolve_display_weight(one_rep_max: Optional[Number], percentage: Optional[Number]) -> WeightDisplay:
    """
    Text for a percentage prescription.

    With a max: ``"225 lbs (75%)"``. Without one only the percentage is shown,
    so no weight is implied that cannot be computed. No percentage at all gives
    an empty string.
    """
    if not percentage:
        return WeightDisplay(display_text="", calculated_weight=None)
    pct = format_number(percentage)
    weight = weight_from_percentage(one_rep_max, percentage)
    if weight is None:
        return WeightDisplay(display_text=f"{pct}%", calculated_weight=None)
    unit = get_settings().WEIGHT_UNIT
    return WeightDisplay(display_text=f"{weight} {unit} ({pct}%)", calculated_weight=weight)
