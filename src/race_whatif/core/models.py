"""
Data models for race-whatif.

Value objects for scenarios, factor breakdowns, predictions and
comparisons. Everything is frozen and created fresh per call.
"""

from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Any, Literal, Mapping

from .config import CATEGORICAL_CHOICES, OVERRIDE_RANGES, PARAMETER_FIELDS
from .errors import InvalidEnumValue

Surface = Literal["road", "trail", "mixed"]
StartStrategy = Literal["conservative", "target", "aggressive"]
FactorImpact = Literal["positive", "neutral", "negative"]


def _default(param: str) -> Any:
    return field(default=OVERRIDE_RANGES[param].default)


class HeatRisk(IntEnum):
    """Heat-index risk tier, ordered from least to most severe."""

    LOW = 0
    CAUTION = 1
    WARNING = 2
    EXTREME = 3

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class ScenarioInputs:
    """
    Environmental and physiological state used for one prediction.

    Numeric fields must lie inside their OVERRIDE_RANGES bounds; use
    from_mapping() to build an instance from loose user data (values are
    clamped and snapped, unset fields take their declared defaults).
    """

    temperature_c: float = _default("temperature")
    humidity_pct: float = _default("humidity")
    elevation_gain_m: float = _default("elevation")
    wind_speed_kph: float = _default("wind_speed")
    precipitation_mm: float = _default("precipitation")
    altitude_m: float = _default("altitude")
    readiness_pct: float = _default("readiness")
    consistency_pct: float = _default("consistency")
    long_run_readiness_pct: float = _default("long_run_readiness")
    taper_quality_pct: float = _default("taper_quality")
    surface: Surface = "road"
    start_strategy: StartStrategy = "target"

    def __post_init__(self) -> None:
        """Validate bounds and categorical membership."""
        for param, rng in OVERRIDE_RANGES.items():
            name = PARAMETER_FIELDS[param]
            value = getattr(self, name)
            if not rng.min <= value <= rng.max:
                raise ValueError(
                    f"{name} must be within [{rng.min}, {rng.max}], got {value}"
                )

        for param, choices in CATEGORICAL_CHOICES.items():
            value = getattr(self, PARAMETER_FIELDS[param])
            if value not in choices:
                raise InvalidEnumValue(param, value, choices)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ScenarioInputs":
        """
        Build a validated scenario from a mapping of parameter or field names.

        Bad single values fall back to the parameter's declared default
        (see comparison.apply_overrides for the warning behaviour).
        """
        from .comparison import apply_overrides

        return apply_overrides(cls(), raw)

    def as_dict(self) -> dict[str, Any]:
        """Field name -> value."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class FactorBreakdown:
    """
    Per-dimension pace multipliers. 1.0 means "no effect".
    """

    terrain: float = 1.0
    elevation: float = 1.0
    climate: float = 1.0
    fatigue: float = 1.0

    @property
    def net(self) -> float:
        """Combined multiplier: terrain x elevation x climate x fatigue."""
        return self.terrain * self.elevation * self.climate * self.fatigue

    def as_dict(self) -> dict[str, float]:
        return {
            "terrain": self.terrain,
            "elevation": self.elevation,
            "climate": self.climate,
            "fatigue": self.fatigue,
        }


@dataclass(frozen=True)
class PredictionResult:
    """One predicted race outcome for one scenario."""

    predicted_time_min: float
    avg_pace_min_per_km: float
    factors: FactorBreakdown
    heat_index_c: float
    heat_risk: HeatRisk

    @property
    def net_multiplier(self) -> float:
        return self.factors.net


@dataclass(frozen=True)
class MetricDelta:
    """
    Signed difference of one metric between two scenarios.

    show_comparison is False when the two values are equal within the
    metric's tolerance; the UI should then suppress the badge.
    """

    value: float
    is_improvement: bool
    show_comparison: bool


@dataclass(frozen=True)
class ComparisonDelta:
    """Raw adjusted-minus-baseline differences."""

    time_min: float
    time_pct: float
    pace: float


@dataclass(frozen=True)
class SimulationComparison:
    """
    Baseline vs adjusted prediction plus their classified deltas.
    """

    baseline: PredictionResult
    adjusted: PredictionResult
    delta: ComparisonDelta
    time: MetricDelta
    percent: MetricDelta
    pace: MetricDelta

    @property
    def is_improvement(self) -> bool:
        """True if the adjusted scenario predicts a faster time."""
        return self.time.is_improvement

    @property
    def show_comparison(self) -> bool:
        return self.time.show_comparison
