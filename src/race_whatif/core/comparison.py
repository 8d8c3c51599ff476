"""
Scenario comparison: apply overrides, predict twice, classify the deltas.

One generic reducer (metric_delta) turns any (baseline, adjusted) pair
into a MetricDelta; the time, percent and pace deltas are thin wrappers.
"""

import dataclasses
import warnings
from typing import Any, Mapping

from .config import (
    CATEGORICAL_CHOICES,
    CATEGORICAL_DEFAULTS,
    FACTOR_IMPACT_NEGATIVE_ABOVE,
    FACTOR_IMPACT_POSITIVE_BELOW,
    OVERRIDE_RANGES,
    PACE_DELTA_TOLERANCE_MIN_PER_KM,
    PARAMETER_FIELDS,
    PERCENT_DELTA_TOLERANCE,
    TIME_DELTA_TOLERANCE_MIN,
)
from .errors import DegenerateBaseline, InvalidEnumValue, InvalidOverrideValue, UnknownParameter
from .models import (
    ComparisonDelta,
    FactorImpact,
    MetricDelta,
    ScenarioInputs,
    SimulationComparison,
)
from .predictor import predict
from .validation import resolve_parameter, validate_choice, validate_override

# =============================================================================
# DELTAS
# =============================================================================


def metric_delta(
    baseline: float,
    adjusted: float,
    *,
    lower_is_better: bool = True,
    tolerance: float = 0.0,
) -> MetricDelta:
    """
    Reduce a (baseline, adjusted) pair to a classified delta.

    value = adjusted - baseline. is_improvement follows the sign alone;
    differences within tolerance only clear show_comparison.

    Args:
        baseline: Metric value for the baseline scenario
        adjusted: Metric value for the adjusted scenario
        lower_is_better: True for times and paces
        tolerance: Absolute noise band around zero

    Returns:
        MetricDelta
    """
    value = adjusted - baseline
    improved = value < 0 if lower_is_better else value > 0
    return MetricDelta(
        value=value,
        is_improvement=improved,
        show_comparison=abs(value) > tolerance,
    )


def time_delta(baseline_min: float, adjusted_min: float) -> MetricDelta:
    """Predicted-time delta in minutes; noise band of 2 seconds."""
    return metric_delta(baseline_min, adjusted_min, tolerance=TIME_DELTA_TOLERANCE_MIN)


def percent_delta(change_pct: float) -> MetricDelta:
    """Relative time change in percent."""
    return metric_delta(0.0, change_pct, tolerance=PERCENT_DELTA_TOLERANCE)


def pace_delta(baseline_pace: float, adjusted_pace: float) -> MetricDelta:
    """Average-pace delta in min/km."""
    return metric_delta(
        baseline_pace, adjusted_pace, tolerance=PACE_DELTA_TOLERANCE_MIN_PER_KM
    )


def _relative_change_pct(baseline_min: float, change_min: float) -> float:
    if baseline_min <= 0:
        raise DegenerateBaseline(f"baseline predicted time must be positive, got {baseline_min}")
    return change_min / baseline_min * 100.0


def time_change_pct(baseline_min: float, change_min: float) -> float:
    """change / baseline * 100, or 0.0 when the baseline is degenerate."""
    try:
        return _relative_change_pct(baseline_min, change_min)
    except DegenerateBaseline:
        return 0.0


# =============================================================================
# COMPARISON
# =============================================================================


def compare(
    baseline_inputs: ScenarioInputs,
    adjusted_inputs: ScenarioInputs,
    base_pace_min_per_km: float,
    race_distance_km: float,
) -> SimulationComparison:
    """
    Predict both scenarios with the same base pace and distance and diff them.

    Raises:
        InvalidDistance: If race_distance_km <= 0
        InvalidBasePace: If base_pace_min_per_km <= 0
    """
    baseline = predict(baseline_inputs, base_pace_min_per_km, race_distance_km)
    adjusted = predict(adjusted_inputs, base_pace_min_per_km, race_distance_km)

    delta = ComparisonDelta(
        time_min=adjusted.predicted_time_min - baseline.predicted_time_min,
        time_pct=time_change_pct(
            baseline.predicted_time_min,
            adjusted.predicted_time_min - baseline.predicted_time_min,
        ),
        pace=adjusted.avg_pace_min_per_km - baseline.avg_pace_min_per_km,
    )

    time = time_delta(baseline.predicted_time_min, adjusted.predicted_time_min)
    # percent and pace badges follow the time badge
    show = time.show_comparison
    percent = dataclasses.replace(percent_delta(delta.time_pct), show_comparison=show)
    pace = dataclasses.replace(
        pace_delta(baseline.avg_pace_min_per_km, adjusted.avg_pace_min_per_km),
        show_comparison=show,
    )

    return SimulationComparison(
        baseline=baseline,
        adjusted=adjusted,
        delta=delta,
        time=time,
        percent=percent,
        pace=pace,
    )


def _warn(message: str) -> None:
    warnings.warn(f"race-whatif: {message}", UserWarning, stacklevel=3)


def apply_overrides(
    baseline: ScenarioInputs,
    overrides: Mapping[str, Any],
) -> ScenarioInputs:
    """
    Return a copy of baseline with validated overrides applied.

    Keys may be parameter names ("wind_speed") or field names
    ("wind_speed_kph"). None means "not overridden". A bad single value
    does not abort the scenario: the parameter's declared default is used
    and a UserWarning is emitted. Unknown keys are skipped with a warning.
    """
    changes: dict[str, Any] = {}

    for key, raw in overrides.items():
        if raw is None:
            continue
        try:
            param = resolve_parameter(key)
        except UnknownParameter as e:
            _warn(f"ignoring override: {e}")
            continue

        if param in CATEGORICAL_CHOICES:
            try:
                value: Any = validate_choice(param, raw)
            except InvalidEnumValue as e:
                value = CATEGORICAL_DEFAULTS[param]
                _warn(f"{e}; using default {value!r}")
        else:
            try:
                value = validate_override(param, raw)
            except InvalidOverrideValue as e:
                value = OVERRIDE_RANGES[param].default
                _warn(f"{e}; using default {value}")

        changes[PARAMETER_FIELDS[param]] = value

    return dataclasses.replace(baseline, **changes)


def compare_scenarios(
    baseline: ScenarioInputs,
    overrides: Mapping[str, Any],
    base_pace_min_per_km: float,
    race_distance_km: float,
) -> SimulationComparison:
    """
    Compare a baseline scenario against the same scenario with overrides.

    With no overrides the delta is exactly zero and show_comparison is False.
    """
    adjusted = apply_overrides(baseline, overrides)
    return compare(baseline, adjusted, base_pace_min_per_km, race_distance_km)


# =============================================================================
# ATTRIBUTION AND ADVISORIES
# =============================================================================


def factor_impact(value: float) -> FactorImpact:
    """Bucket a pace factor: < 0.98 positive, > 1.02 negative, else neutral."""
    if value < FACTOR_IMPACT_POSITIVE_BELOW:
        return "positive"
    if value > FACTOR_IMPACT_NEGATIVE_ABOVE:
        return "negative"
    return "neutral"


def override_warnings(overrides: Mapping[str, Any]) -> list[str]:
    """
    Advisory messages for raw (pre-clamp) slider values.

    These flag values the validator would silently clamp, and extreme
    but admissible conditions.
    """
    messages: list[str] = []
    raw: dict[str, float] = {}
    for key, value in overrides.items():
        try:
            param = resolve_parameter(key)
        except UnknownParameter:
            continue
        if param in OVERRIDE_RANGES and isinstance(value, (int, float)) and not isinstance(value, bool):
            raw[param] = float(value)

    temp = raw.get("temperature")
    if temp is not None:
        if temp < -20:
            messages.append("Temperature below -20°C is extremely cold")
        if temp > 45:
            messages.append("Temperature above 45°C is dangerously hot")

    humidity = raw.get("humidity")
    if humidity is not None and not 0 <= humidity <= 100:
        messages.append("Humidity must be between 0-100%")

    elevation = raw.get("elevation")
    if elevation is not None:
        if elevation < 0:
            messages.append("Elevation cannot be negative")
        if elevation > 5000:
            messages.append("Elevation above 5000m is unrealistic for most races")

    readiness = raw.get("readiness")
    if readiness is not None and not 0 <= readiness <= 100:
        messages.append("Readiness must be between 0-100")

    return messages
