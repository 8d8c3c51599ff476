"""
JSON serialization for scenario models.

Handles conversion between dataclasses and JSON-compatible dicts, and
parsing of the loose "name=value" assignments used on the command line.
"""

import json
from pathlib import Path
from typing import Any

from ..core.errors import UnknownParameter
from ..core.models import (
    FactorBreakdown,
    MetricDelta,
    PredictionResult,
    ScenarioInputs,
    SimulationComparison,
)
from ..core.validation import resolve_parameter


class ValidationError(Exception):
    """Raised when input data is structurally invalid."""

    pass


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is positive.

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def parse_pace(text: str) -> float:
    """
    Parse a pace as decimal minutes ("4.5") or minutes:seconds ("4:30").

    Returns:
        Pace in min/km

    Raises:
        ValidationError: If the format is invalid or the pace is not positive
    """
    text = text.strip()
    try:
        if ":" in text:
            mins, _, secs = text.partition(":")
            if not secs.isdigit() or int(secs) >= 60:
                raise ValueError(text)
            pace = int(mins) + int(secs) / 60.0
        else:
            pace = float(text)
    except ValueError as e:
        raise ValidationError(f"Invalid pace: {text!r}. Use 4.5 or 4:30") from e
    return float(validate_positive(pace, "pace"))


def parse_assignment(text: str) -> tuple[str, str]:
    """
    Split "name=value" into its parts.

    Args:
        text: Assignment such as "temperature=30" or "surface=trail"

    Returns:
        (parameter name, raw value string)

    Raises:
        ValidationError: If there is no '=' or the name is unknown
    """
    if "=" not in text:
        raise ValidationError(f"Expected name=value, got {text!r}")
    name, _, value = text.partition("=")
    name = name.strip()
    try:
        resolve_parameter(name)
    except UnknownParameter as e:
        raise ValidationError(str(e)) from e
    return name, value.strip()


def parse_assignments(items: list[str]) -> dict[str, str]:
    """Parse a list of name=value strings into a dict (later wins)."""
    return dict(parse_assignment(item) for item in items)


def scenario_to_dict(scenario: ScenarioInputs) -> dict[str, Any]:
    """Convert ScenarioInputs to a JSON-compatible dict keyed by field name."""
    return scenario.as_dict()


def dict_to_scenario(data: dict[str, Any]) -> ScenarioInputs:
    """
    Build a validated scenario from a dict.

    Keys may be field names or parameter names; values are clamped and
    snapped like slider overrides.

    Raises:
        ValidationError: If data is not a dict or names an unknown parameter
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Scenario must be a JSON object, got {type(data).__name__}")
    for key in data:
        try:
            resolve_parameter(key)
        except UnknownParameter as e:
            raise ValidationError(str(e)) from e
    return ScenarioInputs.from_mapping(data)


def load_scenario_file(path: Path) -> ScenarioInputs:
    """
    Load a scenario from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the JSON is invalid
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path}: {e}") from e
    return dict_to_scenario(data)


def factors_to_dict(factors: FactorBreakdown) -> dict[str, float]:
    return factors.as_dict()


def prediction_to_dict(prediction: PredictionResult) -> dict[str, Any]:
    """Convert PredictionResult to a JSON-compatible dict."""
    return {
        "predicted_time_min": prediction.predicted_time_min,
        "avg_pace_min_per_km": prediction.avg_pace_min_per_km,
        "factors": factors_to_dict(prediction.factors),
        "heat_index_c": prediction.heat_index_c,
        "heat_risk": prediction.heat_risk.label,
    }


def metric_delta_to_dict(delta: MetricDelta) -> dict[str, Any]:
    return {
        "value": delta.value,
        "is_improvement": delta.is_improvement,
        "show_comparison": delta.show_comparison,
    }


def comparison_to_dict(comparison: SimulationComparison) -> dict[str, Any]:
    """Convert SimulationComparison to a JSON-compatible dict."""
    return {
        "baseline": prediction_to_dict(comparison.baseline),
        "adjusted": prediction_to_dict(comparison.adjusted),
        "delta": {
            "time_min": comparison.delta.time_min,
            "time_pct": comparison.delta.time_pct,
            "pace": comparison.delta.pace,
        },
        "time": metric_delta_to_dict(comparison.time),
        "percent": metric_delta_to_dict(comparison.percent),
        "pace": metric_delta_to_dict(comparison.pace),
        "is_improvement": comparison.is_improvement,
        "show_comparison": comparison.show_comparison,
    }
