"""
Configuration constants for the race what-if model.

All adjustable parameters are centralized here for easy tuning.
Every factor is a multiplicative pace factor whose neutral value is 1.0.
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# OVERRIDE RANGES
# =============================================================================


@dataclass(frozen=True)
class OverrideRange:
    """Admissible domain of one overridable numeric parameter."""

    min: float
    max: float
    default: float
    step: float
    unit: str

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if not self.min <= self.default <= self.max:
            raise ValueError(
                f"default {self.default} outside [{self.min}, {self.max}]"
            )


OVERRIDE_RANGES: Final[dict[str, OverrideRange]] = {
    "temperature": OverrideRange(min=-20.0, max=45.0, default=15.0, step=1.0, unit="°C"),
    "humidity": OverrideRange(min=0.0, max=100.0, default=50.0, step=5.0, unit="%"),
    "elevation": OverrideRange(min=0.0, max=5000.0, default=0.0, step=50.0, unit="m"),
    "readiness": OverrideRange(min=0.0, max=100.0, default=75.0, step=1.0, unit="%"),
    "wind_speed": OverrideRange(min=0.0, max=80.0, default=10.0, step=1.0, unit="kph"),
    "precipitation": OverrideRange(min=0.0, max=50.0, default=0.0, step=1.0, unit="mm"),
    "altitude": OverrideRange(min=0.0, max=4000.0, default=0.0, step=100.0, unit="m"),
    "consistency": OverrideRange(min=0.0, max=100.0, default=70.0, step=5.0, unit="%"),
    "long_run_readiness": OverrideRange(min=0.0, max=100.0, default=70.0, step=5.0, unit="%"),
    "taper_quality": OverrideRange(min=0.0, max=100.0, default=70.0, step=5.0, unit="%"),
}

# Parameter name -> ScenarioInputs field
PARAMETER_FIELDS: Final[dict[str, str]] = {
    "temperature": "temperature_c",
    "humidity": "humidity_pct",
    "elevation": "elevation_gain_m",
    "readiness": "readiness_pct",
    "wind_speed": "wind_speed_kph",
    "precipitation": "precipitation_mm",
    "altitude": "altitude_m",
    "consistency": "consistency_pct",
    "long_run_readiness": "long_run_readiness_pct",
    "taper_quality": "taper_quality_pct",
    "surface": "surface",
    "start_strategy": "start_strategy",
}

# =============================================================================
# CATEGORICAL PARAMETERS
# =============================================================================

SURFACES: Final[tuple[str, ...]] = ("road", "trail", "mixed")
START_STRATEGIES: Final[tuple[str, ...]] = ("conservative", "target", "aggressive")

CATEGORICAL_CHOICES: Final[dict[str, tuple[str, ...]]] = {
    "surface": SURFACES,
    "start_strategy": START_STRATEGIES,
}

CATEGORICAL_DEFAULTS: Final[dict[str, str]] = {
    "surface": "road",
    "start_strategy": "target",
}

# =============================================================================
# TERRAIN
# =============================================================================

TERRAIN_FACTORS: Final[dict[str, float]] = {
    "road": 1.00,
    "mixed": 1.06,
    "trail": 1.12,
}

# =============================================================================
# ELEVATION AND ALTITUDE
# =============================================================================

ELEVATION_PENALTY_PER_100M: Final[float] = 0.008  # Pace cost of the first 100 m of climbing
ELEVATION_CURVE_EXPONENT: Final[float] = 0.9  # < 1 gives a concave, still increasing curve

ALTITUDE_THRESHOLD_M: Final[float] = 1000.0  # No altitude effect below this
ALTITUDE_PENALTY_PER_1000M: Final[float] = 0.03

# =============================================================================
# CLIMATE
# =============================================================================

CLIMATE_NEUTRAL_C: Final[float] = 18.0  # Heat index at which heat stops being free
CLIMATE_PENALTY_PER_C: Final[float] = 0.004  # Pace cost per °C of heat index above neutral

WIND_THRESHOLD_KPH: Final[float] = 15.0
WIND_PENALTY_PER_KPH: Final[float] = 0.0002

PRECIPITATION_STEPS: Final[tuple[tuple[float, float], ...]] = (
    (15.0, 0.03),  # > 15 mm
    (5.0, 0.01),  # > 5 mm
)

PRECIPITATION_SURFACE_SCALE: Final[dict[str, float]] = {
    "road": 1.0,
    "mixed": 1.5,
    "trail": 2.0,
}

# =============================================================================
# FATIGUE
# =============================================================================

READINESS_PENALTY_DIVISOR: Final[float] = 400.0  # 1 + (100 - readiness) / 400

TRAINING_NEUTRAL_PCT: Final[float] = 70.0  # Consistency / long run / taper at which no adjustment applies
CONSISTENCY_WEIGHT: Final[float] = 0.06
LONG_RUN_WEIGHT: Final[float] = 0.08
TAPER_WEIGHT: Final[float] = 0.06

START_STRATEGY_COST: Final[dict[str, float]] = {
    "conservative": 0.005,
    "target": 0.0,
    "aggressive": 0.02,
}

# =============================================================================
# PREDICTION
# =============================================================================

PACE_FLOOR_FRACTION: Final[float] = 0.60  # Never predict faster than 60% of base pace
RIEGEL_EXPONENT: Final[float] = 1.06

# =============================================================================
# COMPARISON
# =============================================================================

TIME_DELTA_TOLERANCE_MIN: Final[float] = 2.0 / 60.0  # 2 seconds
PERCENT_DELTA_TOLERANCE: Final[float] = 0.05
PACE_DELTA_TOLERANCE_MIN_PER_KM: Final[float] = 0.5 / 60.0  # half a second per km

FACTOR_IMPACT_POSITIVE_BELOW: Final[float] = 0.98
FACTOR_IMPACT_NEGATIVE_ABOVE: Final[float] = 1.02

# =============================================================================
# HEAT RISK (heat index, °C)
# =============================================================================

HEAT_CAUTION_C: Final[float] = 27.0  # 80 °F
HEAT_WARNING_C: Final[float] = 32.0  # 90 °F
HEAT_EXTREME_C: Final[float] = 41.0  # 106 °F
