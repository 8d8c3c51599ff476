"""
Heat index and heat-risk classification.

heat_index_c follows the US National Weather Service procedure: Steadman's
simple formula first, and the Rothfusz regression (with the low- and
high-humidity adjustments) once the simple estimate reaches 80 °F.

Reference:
    NWS Weather Prediction Center, "The Heat Index Equation".
"""

import math
from dataclasses import dataclass
from typing import Final

from .config import HEAT_CAUTION_C, HEAT_EXTREME_C, HEAT_WARNING_C
from .models import HeatRisk


def c_to_f(temp_c: float) -> float:
    return temp_c * 9.0 / 5.0 + 32.0


def f_to_c(temp_f: float) -> float:
    return (temp_f - 32.0) * 5.0 / 9.0


def _rothfusz(t: float, rh: float) -> float:
    hi = (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * rh
        - 0.22475541 * t * rh
        - 6.83783e-3 * t * t
        - 5.481717e-2 * rh * rh
        + 1.22874e-3 * t * t * rh
        + 8.5282e-4 * t * rh * rh
        - 1.99e-6 * t * t * rh * rh
    )
    if rh < 13 and 80 <= t <= 112:
        hi -= ((13 - rh) / 4) * math.sqrt((17 - abs(t - 95)) / 17)
    elif rh > 85 and 80 <= t <= 87:
        hi += ((rh - 85) / 10) * ((87 - t) / 5)
    return hi


def heat_index_c(temperature_c: float, humidity_pct: float) -> float:
    """
    Apparent temperature from air temperature and relative humidity.

    Args:
        temperature_c: Air temperature in °C
        humidity_pct: Relative humidity 0-100

    Returns:
        Heat index in °C
    """
    t = c_to_f(temperature_c)
    rh = max(0.0, min(100.0, humidity_pct))

    simple = 0.5 * (t + 61.0 + (t - 68.0) * 1.2 + rh * 0.094)
    if (simple + t) / 2 < 80:
        return f_to_c(simple)
    return f_to_c(_rothfusz(t, rh))


def classify_heat(heat_index: float) -> HeatRisk:
    """
    Map a heat index (°C) to a risk tier.

    Lower bounds are inclusive:
        < 27 low, 27-32 caution, 32-41 warning, >= 41 extreme

    Raises:
        ValueError: If heat_index is NaN
    """
    if math.isnan(heat_index):
        raise ValueError("heat index must be a number, got NaN")
    if heat_index < HEAT_CAUTION_C:
        return HeatRisk.LOW
    if heat_index < HEAT_WARNING_C:
        return HeatRisk.CAUTION
    if heat_index < HEAT_EXTREME_C:
        return HeatRisk.WARNING
    return HeatRisk.EXTREME


def heat_risk_for(temperature_c: float, humidity_pct: float) -> HeatRisk:
    """Classify the heat risk of raw temperature/humidity readings."""
    return classify_heat(heat_index_c(temperature_c, humidity_pct))


@dataclass(frozen=True)
class HeatAdvisory:
    """Training advice attached to a heat-risk tier."""

    should_train: bool
    intensity_adjust_pct: int  # negative = back off
    message: str


HEAT_ADVISORIES: Final[dict[HeatRisk, HeatAdvisory]] = {
    HeatRisk.LOW: HeatAdvisory(True, 0, "No heat adjustment needed"),
    HeatRisk.CAUTION: HeatAdvisory(
        True, -10, "Ease intensity slightly, prefer early morning or evening"
    ),
    HeatRisk.WARNING: HeatAdvisory(
        True, -20, "Reduce intensity and hydrate aggressively"
    ),
    HeatRisk.EXTREME: HeatAdvisory(
        False, -100, "Heat illness risk: move the session indoors or skip it"
    ),
}


def heat_advisory(risk: HeatRisk) -> HeatAdvisory:
    return HEAT_ADVISORIES[risk]
