"""
Range validation for what-if overrides.

Numeric parameters are clamped to their OverrideRange and snapped to the
step lattice anchored at the range minimum. Categorical parameters
(surface, start strategy) are validated by set membership.
"""

import math
from typing import Any

from .config import (
    CATEGORICAL_CHOICES,
    OVERRIDE_RANGES,
    PARAMETER_FIELDS,
    OverrideRange,
)
from .errors import InvalidEnumValue, InvalidOverrideValue, UnknownParameter

_FIELD_PARAMETERS: dict[str, str] = {f: p for p, f in PARAMETER_FIELDS.items()}

# Decimal places kept after snapping; strips binary noise like 0.30000000000000004
_SNAP_DIGITS = 10


def resolve_parameter(name: str) -> str:
    """
    Map a parameter name or a ScenarioInputs field name to the parameter name.

    Raises:
        UnknownParameter: If the name is neither
    """
    if name in PARAMETER_FIELDS:
        return name
    if name in _FIELD_PARAMETERS:
        return _FIELD_PARAMETERS[name]
    raise UnknownParameter(name)


def get_range(param_name: str) -> OverrideRange:
    """
    Return the OverrideRange for a numeric parameter.

    Raises:
        UnknownParameter: If the parameter has no numeric range
    """
    param = resolve_parameter(param_name)
    if param not in OVERRIDE_RANGES:
        raise UnknownParameter(param_name)
    return OVERRIDE_RANGES[param]


def _as_number(param_name: str, raw_value: Any) -> float:
    if isinstance(raw_value, bool):
        raise InvalidOverrideValue(param_name, raw_value)
    try:
        value = float(raw_value)
    except OverflowError:
        # ints beyond float range clamp like infinities
        value = math.inf if raw_value > 0 else -math.inf
    except (TypeError, ValueError) as e:
        raise InvalidOverrideValue(param_name, raw_value) from e
    if math.isnan(value):
        raise InvalidOverrideValue(param_name, raw_value)
    return value


def _clamp(value: float, rng: OverrideRange) -> float:
    return max(rng.min, min(rng.max, value))


def validate_override(param_name: str, raw_value: Any) -> float | str:
    """
    Clamp and snap a raw slider value into its admissible domain.

    Categorical parameters (surface, start_strategy) are checked by
    membership instead; see validate_choice.

    snapped = min + round((clamp(x) - min) / step) * step, re-clamped.
    Halves round up.

    Args:
        param_name: Parameter name ("temperature") or field name ("temperature_c")
        raw_value: Number or numeric string, or a variant name

    Returns:
        Value inside [min, max] on the step lattice, or the canonical variant

    Raises:
        UnknownParameter: If param_name is not a known parameter
        InvalidOverrideValue: If raw_value is not a number (or is NaN)
        InvalidEnumValue: If a categorical raw_value is not a declared variant
    """
    if resolve_parameter(param_name) in CATEGORICAL_CHOICES:
        return validate_choice(param_name, raw_value)

    rng = get_range(param_name)
    value = _as_number(param_name, raw_value)

    clamped = _clamp(value, rng)
    steps = math.floor((clamped - rng.min) / rng.step + 0.5)
    snapped = _clamp(rng.min + steps * rng.step, rng)
    return round(snapped, _SNAP_DIGITS)


def validate_choice(param_name: str, raw_value: Any, default: str | None = None) -> str:
    """
    Validate a categorical parameter value (case-insensitive).

    Args:
        param_name: "surface" or "start_strategy"
        raw_value: Candidate variant
        default: Returned instead of raising when raw_value is invalid

    Returns:
        The canonical lowercase variant

    Raises:
        UnknownParameter: If param_name is not categorical
        InvalidEnumValue: If raw_value is invalid and no default was given
    """
    param = resolve_parameter(param_name)
    if param not in CATEGORICAL_CHOICES:
        raise UnknownParameter(param_name)

    choices = CATEGORICAL_CHOICES[param]
    candidate = raw_value.strip().lower() if isinstance(raw_value, str) else raw_value
    if candidate in choices:
        return candidate
    if default is not None:
        return default
    raise InvalidEnumValue(param, raw_value, choices)


def is_lattice_point(param_name: str, value: float, tol: float = 1e-9) -> bool:
    """Return True if value is inside the range and on its step lattice."""
    rng = get_range(param_name)
    if not rng.min <= value <= rng.max:
        return False
    steps = (value - rng.min) / rng.step
    return abs(steps - round(steps)) <= tol
