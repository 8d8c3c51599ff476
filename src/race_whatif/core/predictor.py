"""
Race time prediction for a single scenario.

Composition order is fixed so baseline and adjusted predictions are
computed identically:

    net  = terrain * elevation * climate * fatigue
    pace = max(base_pace * net, base_pace * PACE_FLOOR_FRACTION)
    time = pace * distance
"""

import math

from .config import PACE_FLOOR_FRACTION, RIEGEL_EXPONENT
from .errors import InvalidBasePace, InvalidDistance
from .factors import compute_factors
from .models import PredictionResult, ScenarioInputs
from .weather import classify_heat, heat_index_c


def _check_positive(value: float, exc: type[Exception], name: str) -> None:
    if not (math.isfinite(value) and value > 0):
        raise exc(f"{name} must be a positive number, got {value}")


def predict(
    inputs: ScenarioInputs,
    base_pace_min_per_km: float,
    race_distance_km: float,
) -> PredictionResult:
    """
    Predict race time and average pace for one scenario.

    Args:
        inputs: Validated scenario
        base_pace_min_per_km: Neutral-conditions race pace
        race_distance_km: Race distance

    Returns:
        PredictionResult with the factor breakdown that produced it

    Raises:
        InvalidDistance: If race_distance_km <= 0
        InvalidBasePace: If base_pace_min_per_km <= 0
    """
    _check_positive(race_distance_km, InvalidDistance, "race_distance_km")
    _check_positive(base_pace_min_per_km, InvalidBasePace, "base_pace_min_per_km")

    factors = compute_factors(inputs)
    pace = max(
        base_pace_min_per_km * factors.net,
        base_pace_min_per_km * PACE_FLOOR_FRACTION,
    )
    hi = heat_index_c(inputs.temperature_c, inputs.humidity_pct)

    return PredictionResult(
        predicted_time_min=pace * race_distance_km,
        avg_pace_min_per_km=pace,
        factors=factors,
        heat_index_c=hi,
        heat_risk=classify_heat(hi),
    )


def riegel_base_pace(
    ref_distance_km: float,
    ref_time_min: float,
    race_distance_km: float,
    exponent: float = RIEGEL_EXPONENT,
) -> float:
    """
    Base race pace projected from a reference performance.

    T2 = T1 * (D2 / D1)^1.06, pace = T2 / D2

    Raises:
        InvalidDistance: If either distance is not positive
        InvalidBasePace: If the reference time is not positive
    """
    _check_positive(ref_distance_km, InvalidDistance, "ref_distance_km")
    _check_positive(race_distance_km, InvalidDistance, "race_distance_km")
    _check_positive(ref_time_min, InvalidBasePace, "ref_time_min")

    predicted = ref_time_min * (race_distance_km / ref_distance_km) ** exponent
    return predicted / race_distance_km
