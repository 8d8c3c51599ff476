"""
race-whatif: what-if race performance simulator.

Public API:
    validate_override, validate_choice  -- clamp/snap slider input
    compare_scenarios, compare          -- baseline vs adjusted prediction
    predict, compute_factors            -- single-scenario model
    classify_heat, heat_index_c         -- heat-risk advisory
    OVERRIDE_RANGES                     -- admissible input domains
"""

from .core.comparison import (
    apply_overrides,
    compare,
    compare_scenarios,
    factor_impact,
    metric_delta,
    override_warnings,
)
from .core.config import OVERRIDE_RANGES, OverrideRange
from .core.errors import (
    DegenerateBaseline,
    InvalidBasePace,
    InvalidDistance,
    InvalidEnumValue,
    InvalidOverrideValue,
    ScenarioError,
    UnknownParameter,
)
from .core.factors import compute_factors
from .core.models import (
    ComparisonDelta,
    FactorBreakdown,
    HeatRisk,
    MetricDelta,
    PredictionResult,
    ScenarioInputs,
    SimulationComparison,
)
from .core.predictor import predict
from .core.validation import validate_choice, validate_override
from .core.weather import classify_heat, heat_index_c

__version__ = "0.1.0"

__all__ = [
    "OVERRIDE_RANGES",
    "ComparisonDelta",
    "DegenerateBaseline",
    "FactorBreakdown",
    "HeatRisk",
    "InvalidBasePace",
    "InvalidDistance",
    "InvalidEnumValue",
    "InvalidOverrideValue",
    "MetricDelta",
    "OverrideRange",
    "PredictionResult",
    "ScenarioError",
    "ScenarioInputs",
    "SimulationComparison",
    "UnknownParameter",
    "apply_overrides",
    "classify_heat",
    "compare",
    "compare_scenarios",
    "compute_factors",
    "factor_impact",
    "heat_index_c",
    "metric_delta",
    "override_warnings",
    "predict",
    "validate_choice",
    "validate_override",
]
