"""
Factor model: how much each dimension of a scenario shifts race pace.

Every factor is a multiplicative pace factor, 1.0 = no effect,
> 1.0 = slower, < 1.0 = faster. Coefficients live in config.py.
"""

from .config import (
    ALTITUDE_PENALTY_PER_1000M,
    ALTITUDE_THRESHOLD_M,
    CLIMATE_NEUTRAL_C,
    CLIMATE_PENALTY_PER_C,
    CONSISTENCY_WEIGHT,
    ELEVATION_CURVE_EXPONENT,
    ELEVATION_PENALTY_PER_100M,
    LONG_RUN_WEIGHT,
    PRECIPITATION_STEPS,
    PRECIPITATION_SURFACE_SCALE,
    READINESS_PENALTY_DIVISOR,
    START_STRATEGY_COST,
    TAPER_WEIGHT,
    TERRAIN_FACTORS,
    TRAINING_NEUTRAL_PCT,
    WIND_PENALTY_PER_KPH,
    WIND_THRESHOLD_KPH,
)
from .models import FactorBreakdown, ScenarioInputs
from .weather import heat_index_c


def terrain_factor(surface: str) -> float:
    """
    Fixed multiplier per surface: road 1.00, mixed 1.06, trail 1.12.
    """
    return TERRAIN_FACTORS[surface]


# ---------------------------------------------------------------------------
# Elevation
# ---------------------------------------------------------------------------


def elevation_penalty(elevation_gain_m: float) -> float:
    """
    Pace penalty from total climbing.

    P_elev = k * (gain / 100)^e

    Zero at 0 m and strictly increasing; e < 1 makes each extra 100 m
    cost a little less than the previous one.
    """
    gain = max(0.0, elevation_gain_m)
    return ELEVATION_PENALTY_PER_100M * (gain / 100.0) ** ELEVATION_CURVE_EXPONENT


def altitude_penalty(altitude_m: float) -> float:
    """
    Thin-air penalty: 3% per 1000 m above the 1000 m threshold.
    """
    above = max(0.0, altitude_m - ALTITUDE_THRESHOLD_M)
    return above / 1000.0 * ALTITUDE_PENALTY_PER_1000M


def elevation_factor(elevation_gain_m: float, altitude_m: float = 0.0) -> float:
    """
    F_elev = (1 + P_elev) * (1 + P_alt)
    """
    return (1.0 + elevation_penalty(elevation_gain_m)) * (1.0 + altitude_penalty(altitude_m))


# ---------------------------------------------------------------------------
# Climate
# ---------------------------------------------------------------------------


def heat_penalty(heat_index: float) -> float:
    """
    Linear penalty above the neutral heat index, zero below it.
    """
    return CLIMATE_PENALTY_PER_C * max(0.0, heat_index - CLIMATE_NEUTRAL_C)


def wind_penalty(wind_speed_kph: float) -> float:
    """Headwind penalty above 15 kph."""
    return WIND_PENALTY_PER_KPH * max(0.0, wind_speed_kph - WIND_THRESHOLD_KPH)


def precipitation_penalty(precipitation_mm: float, surface: str = "road") -> float:
    """
    Stepped rain penalty (1% above 5 mm, 3% above 15 mm), scaled up on
    surfaces that get slippery or muddy.
    """
    base = 0.0
    for threshold, penalty in PRECIPITATION_STEPS:
        if precipitation_mm > threshold:
            base = penalty
            break
    return base * PRECIPITATION_SURFACE_SCALE[surface]


def climate_factor(inputs: ScenarioInputs) -> float:
    """
    F_climate = 1 + P_heat(HI) + P_wind + P_rain
    """
    hi = heat_index_c(inputs.temperature_c, inputs.humidity_pct)
    return (
        1.0
        + heat_penalty(hi)
        + wind_penalty(inputs.wind_speed_kph)
        + precipitation_penalty(inputs.precipitation_mm, inputs.surface)
    )


# ---------------------------------------------------------------------------
# Fatigue
# ---------------------------------------------------------------------------


def fatigue_factor(
    readiness_pct: float,
    consistency_pct: float = TRAINING_NEUTRAL_PCT,
    long_run_readiness_pct: float = TRAINING_NEUTRAL_PCT,
    taper_quality_pct: float = TRAINING_NEUTRAL_PCT,
    start_strategy: str = "target",
) -> float:
    """
    Combined readiness / training-context factor.

    F_fat = 1 + (100 - R) / 400
              + w_c * (N - C) / 100
              + w_l * (N - L) / 100
              + w_t * (N - T) / 100
              + cost(start strategy)

    N is the neutral training level (70%). Each term is monotone: more
    readiness, consistency, long-run preparation or taper quality never
    makes the factor worse.
    """
    readiness_term = (100.0 - readiness_pct) / READINESS_PENALTY_DIVISOR
    consistency_term = CONSISTENCY_WEIGHT * (TRAINING_NEUTRAL_PCT - consistency_pct) / 100.0
    long_run_term = LONG_RUN_WEIGHT * (TRAINING_NEUTRAL_PCT - long_run_readiness_pct) / 100.0
    taper_term = TAPER_WEIGHT * (TRAINING_NEUTRAL_PCT - taper_quality_pct) / 100.0

    return (
        1.0
        + readiness_term
        + consistency_term
        + long_run_term
        + taper_term
        + START_STRATEGY_COST[start_strategy]
    )


def compute_factors(inputs: ScenarioInputs) -> FactorBreakdown:
    """Compute the full factor breakdown for one scenario."""
    return FactorBreakdown(
        terrain=terrain_factor(inputs.surface),
        elevation=elevation_factor(inputs.elevation_gain_m, inputs.altitude_m),
        climate=climate_factor(inputs),
        fatigue=fatigue_factor(
            inputs.readiness_pct,
            inputs.consistency_pct,
            inputs.long_run_readiness_pct,
            inputs.taper_quality_pct,
            inputs.start_strategy,
        ),
    )
