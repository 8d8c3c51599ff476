"""
Formula-focused unit tests for the scenario engine.

Each test verifies one formula or contract of the validator, the factor
model, the heat index / risk classifier and the predictor. Expected values
are hand-computed from the constants in core/config.py.
"""

import math

import pytest

from race_whatif.core.config import (
    ALTITUDE_PENALTY_PER_1000M,
    CLIMATE_PENALTY_PER_C,
    ELEVATION_CURVE_EXPONENT,
    ELEVATION_PENALTY_PER_100M,
    OVERRIDE_RANGES,
    PARAMETER_FIELDS,
    TERRAIN_FACTORS,
    OverrideRange,
)
from race_whatif.core.errors import (
    InvalidBasePace,
    InvalidDistance,
    InvalidEnumValue,
    InvalidOverrideValue,
    UnknownParameter,
)
from race_whatif.core.factors import (
    altitude_penalty,
    climate_factor,
    compute_factors,
    elevation_factor,
    elevation_penalty,
    fatigue_factor,
    heat_penalty,
    precipitation_penalty,
    terrain_factor,
    wind_penalty,
)
from race_whatif.core.models import HeatRisk, ScenarioInputs
from race_whatif.core.predictor import predict, riegel_base_pace
from race_whatif.core.validation import (
    is_lattice_point,
    resolve_parameter,
    validate_choice,
    validate_override,
)
from race_whatif.core.weather import (
    classify_heat,
    f_to_c,
    heat_advisory,
    heat_index_c,
    heat_risk_for,
)

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _neutral(**kwargs) -> ScenarioInputs:
    """Scenario whose four factors are all exactly 1.0 unless overridden."""
    base = dict(
        temperature_c=10.0,
        humidity_pct=50.0,
        readiness_pct=100.0,
        consistency_pct=70.0,
        long_run_readiness_pct=70.0,
        taper_quality_pct=70.0,
    )
    base.update(kwargs)
    return ScenarioInputs(**base)


# ===========================================================================
# config.py: OverrideRange table
# ===========================================================================


class TestOverrideRanges:
    """min <= default <= max, step > 0, one field per parameter."""

    @pytest.mark.parametrize("name", sorted(OVERRIDE_RANGES))
    def test_range_is_consistent(self, name):
        rng = OVERRIDE_RANGES[name]
        assert rng.min <= rng.default <= rng.max
        assert rng.step > 0

    @pytest.mark.parametrize("name", sorted(OVERRIDE_RANGES))
    def test_default_is_lattice_point(self, name):
        assert is_lattice_point(name, OVERRIDE_RANGES[name].default)

    def test_every_parameter_maps_to_a_scenario_field(self):
        scenario = ScenarioInputs()
        for name in OVERRIDE_RANGES:
            assert hasattr(scenario, PARAMETER_FIELDS[name])

    def test_bad_step_rejected(self):
        with pytest.raises(ValueError, match="step"):
            OverrideRange(min=0, max=10, default=5, step=0, unit="")

    def test_default_outside_range_rejected(self):
        with pytest.raises(ValueError, match="default"):
            OverrideRange(min=0, max=10, default=11, step=1, unit="")


# ===========================================================================
# validation.py: validate_override / validate_choice
# ===========================================================================


class TestValidateOverride:
    """snapped = min + round((clamp(x) - min) / step) * step"""

    def test_value_inside_range_snaps_to_step(self):
        assert validate_override("temperature", 22.4) == 22.0
        assert validate_override("temperature", 22.6) == 23.0

    def test_half_step_rounds_up(self):
        # (52.5 - 0) / 5 = 10.5 → 11 steps → 55
        assert validate_override("humidity", 52.5) == 55.0
        assert validate_override("humidity", 47.5) == 50.0

    def test_snap_is_relative_to_min(self):
        # (1234 - 0) / 50 = 24.68 → 25 steps → 1250
        assert validate_override("elevation", 1234) == 1250.0

    def test_clamps_above_max(self):
        assert validate_override("temperature", 100) == 45.0

    def test_clamps_below_min(self):
        assert validate_override("temperature", -50) == -20.0
        assert validate_override("elevation", -300) == 0.0

    def test_infinity_clamps(self):
        assert validate_override("wind_speed", math.inf) == 80.0

    def test_numeric_string_accepted(self):
        assert validate_override("readiness", "88") == 88.0

    def test_field_name_alias(self):
        assert validate_override("temperature_c", 30) == 30.0

    def test_unknown_parameter(self):
        with pytest.raises(UnknownParameter):
            validate_override("cadence", 180)

    def test_categorical_parameter_checked_by_membership(self):
        assert validate_override("surface", "road") == "road"
        assert validate_override("start_strategy", "Conservative") == "conservative"

    def test_categorical_parameter_rejects_unknown_variant(self):
        with pytest.raises(InvalidEnumValue):
            validate_override("surface", "gravel")

    def test_huge_integers_clamp(self):
        assert validate_override("temperature", 10**400) == 45.0
        assert validate_override("temperature", -(10**400)) == -20.0

    @pytest.mark.parametrize("raw", ["hot", None, float("nan"), True])
    def test_non_numeric_rejected(self, raw):
        with pytest.raises(InvalidOverrideValue):
            validate_override("temperature", raw)

    @pytest.mark.parametrize("name", sorted(OVERRIDE_RANGES))
    @pytest.mark.parametrize("raw", [-1e6, -37.3, -0.01, 0, 0.3, 7.77, 49.9, 333.3, 4321.5, 1e6])
    def test_output_in_range_and_on_lattice(self, name, raw):
        rng = OVERRIDE_RANGES[name]
        out = validate_override(name, raw)
        assert rng.min <= out <= rng.max
        assert is_lattice_point(name, out)


class TestValidateChoice:

    def test_valid_variant(self):
        assert validate_choice("surface", "trail") == "trail"

    def test_case_insensitive(self):
        assert validate_choice("start_strategy", " Aggressive ") == "aggressive"

    def test_invalid_raises(self):
        with pytest.raises(InvalidEnumValue) as exc_info:
            validate_choice("surface", "gravel")
        assert exc_info.value.choices == ("road", "trail", "mixed")

    def test_invalid_with_default_falls_back(self):
        assert validate_choice("surface", "gravel", default="road") == "road"

    def test_numeric_parameter_is_not_categorical(self):
        with pytest.raises(UnknownParameter):
            validate_choice("temperature", "hot")

    def test_resolve_parameter(self):
        assert resolve_parameter("taper_quality_pct") == "taper_quality"
        assert resolve_parameter("surface") == "surface"
        with pytest.raises(UnknownParameter):
            resolve_parameter("vo2max")


# ===========================================================================
# weather.py: heat index and risk tiers
# ===========================================================================


class TestHeatIndex:

    def test_cool_conditions_use_simple_formula(self):
        # T = 59 °F: 0.5 * (59 + 61 + (59 - 68) * 1.2 + 40 * 0.094) = 56.48 °F = 13.6 °C
        assert heat_index_c(15, 40) == pytest.approx(13.6, abs=0.05)

    def test_rothfusz_matches_nws_table(self):
        # NWS table: 90 °F at 70% RH → 106 °F
        hi = heat_index_c(f_to_c(90.0), 70.0)
        assert hi == pytest.approx(f_to_c(105.9), abs=0.1)

    def test_humid_heat_feels_hotter_than_air(self):
        assert heat_index_c(35, 80) > 35

    def test_humidity_clamped(self):
        assert heat_index_c(30, 150) == heat_index_c(30, 100)


class TestClassifyHeat:
    """< 27 low, [27, 32) caution, [32, 41) warning, >= 41 extreme"""

    @pytest.mark.parametrize(
        "hi, expected",
        [
            (26.9, HeatRisk.LOW),
            (27.0, HeatRisk.CAUTION),
            (31.99, HeatRisk.CAUTION),
            (32.0, HeatRisk.WARNING),
            (40.9, HeatRisk.WARNING),
            (41.0, HeatRisk.EXTREME),
        ],
    )
    def test_boundaries(self, hi, expected):
        assert classify_heat(hi) == expected

    def test_total_over_extremes(self):
        assert classify_heat(-math.inf) == HeatRisk.LOW
        assert classify_heat(math.inf) == HeatRisk.EXTREME

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            classify_heat(float("nan"))

    def test_monotonic(self):
        values = [x / 4 for x in range(-40, 240)]
        tiers = [classify_heat(v) for v in values]
        assert all(a <= b for a, b in zip(tiers, tiers[1:]))

    def test_order_and_labels(self):
        assert HeatRisk.LOW < HeatRisk.CAUTION < HeatRisk.WARNING < HeatRisk.EXTREME
        assert [r.label for r in HeatRisk] == ["low", "caution", "warning", "extreme"]

    def test_heat_risk_for_raw_readings(self):
        assert heat_risk_for(15, 40) == HeatRisk.LOW
        assert heat_risk_for(35, 80) == HeatRisk.EXTREME

    def test_extreme_advises_against_training(self):
        assert heat_advisory(HeatRisk.EXTREME).should_train is False
        assert heat_advisory(HeatRisk.LOW).intensity_adjust_pct == 0


# ===========================================================================
# factors.py: terrain, elevation, climate, fatigue
# ===========================================================================


class TestTerrainFactor:

    def test_road_is_neutral(self):
        assert terrain_factor("road") == 1.0

    def test_trail_harder_than_mixed(self):
        assert terrain_factor("trail") > terrain_factor("mixed") > 1.0

    def test_values_match_config(self):
        for surface, value in TERRAIN_FACTORS.items():
            assert terrain_factor(surface) == value


class TestElevationFactor:
    """F = (1 + k * (gain/100)^e) * (1 + P_alt)"""

    def test_zero_gain_is_neutral(self):
        assert elevation_penalty(0) == 0.0
        assert elevation_factor(0, 0) == 1.0

    def test_formula(self):
        expected = 1 + ELEVATION_PENALTY_PER_100M * 10 ** ELEVATION_CURVE_EXPONENT
        assert elevation_factor(1000) == pytest.approx(expected, rel=1e-9)

    def test_strictly_increasing(self):
        gains = list(range(0, 5001, 50))
        penalties = [elevation_penalty(g) for g in gains]
        assert all(a < b for a, b in zip(penalties, penalties[1:]))

    def test_diminishing_marginal_cost(self):
        steps = [elevation_penalty(g + 100) - elevation_penalty(g) for g in range(100, 4000, 100)]
        assert all(a >= b > 0 for a, b in zip(steps, steps[1:]))

    def test_altitude_below_threshold_is_free(self):
        assert altitude_penalty(999) == 0.0

    def test_altitude_penalty_above_threshold(self):
        assert altitude_penalty(2000) == pytest.approx(ALTITUDE_PENALTY_PER_1000M)
        assert elevation_factor(0, 2000) == pytest.approx(1 + ALTITUDE_PENALTY_PER_1000M)


class TestClimateFactor:

    def test_heat_below_neutral_is_free(self):
        assert heat_penalty(10.0) == 0.0

    def test_heat_penalty_linear_above_neutral(self):
        assert heat_penalty(28.0) == pytest.approx(10 * CLIMATE_PENALTY_PER_C)

    def test_wind_below_threshold_is_free(self):
        assert wind_penalty(15) == 0.0

    def test_wind_penalty(self):
        # (25 - 15) * 0.0002
        assert wind_penalty(25) == pytest.approx(0.002)

    def test_precipitation_steps(self):
        assert precipitation_penalty(3) == 0.0
        assert precipitation_penalty(10) == pytest.approx(0.01)
        assert precipitation_penalty(20) == pytest.approx(0.03)

    def test_rain_costs_more_off_road(self):
        road = precipitation_penalty(10, "road")
        mixed = precipitation_penalty(10, "mixed")
        trail = precipitation_penalty(10, "trail")
        assert road < mixed < trail

    def test_cool_calm_dry_is_neutral(self):
        assert climate_factor(_neutral()) == 1.0

    def test_hot_humid_is_penalised(self):
        assert climate_factor(_neutral(temperature_c=35, humidity_pct=80)) > 1.1


class TestFatigueFactor:
    """F = 1 + (100 - R)/400 + Σ w * (70 - x)/100 + strategy cost"""

    def test_full_readiness_neutral_training_is_neutral(self):
        assert fatigue_factor(100) == pytest.approx(1.0)

    def test_readiness_formula(self):
        assert fatigue_factor(70) == pytest.approx(1.075)

    def test_monotone_in_readiness(self):
        values = [fatigue_factor(r) for r in range(0, 101)]
        assert all(a >= b for a, b in zip(values, values[1:]))

    def test_low_taper_increases_penalty(self):
        assert fatigue_factor(80, taper_quality_pct=30) > fatigue_factor(80, taper_quality_pct=70)

    def test_high_consistency_and_long_runs_reduce_penalty(self):
        assert fatigue_factor(80, consistency_pct=95) < fatigue_factor(80)
        assert fatigue_factor(80, long_run_readiness_pct=95) < fatigue_factor(80)

    def test_start_strategy_cost(self):
        target = fatigue_factor(80, start_strategy="target")
        conservative = fatigue_factor(80, start_strategy="conservative")
        aggressive = fatigue_factor(80, start_strategy="aggressive")
        assert target < conservative < aggressive

    def test_best_case_still_positive(self):
        assert fatigue_factor(100, 100, 100, 100) > 0.9


class TestComputeFactors:

    def test_neutral_scenario(self):
        f = compute_factors(_neutral())
        assert (f.terrain, f.elevation, f.climate, f.fatigue) == (1.0, 1.0, 1.0, 1.0)
        assert f.net == 1.0

    def test_default_scenario(self):
        # defaults: road, 0 m, 15 °C / 50% (HI < 18), 10 kph, dry, readiness 75
        f = compute_factors(ScenarioInputs())
        assert f.terrain == 1.0
        assert f.elevation == 1.0
        assert f.climate == 1.0
        assert f.fatigue == pytest.approx(1.0625)

    def test_deterministic(self):
        s = _neutral(surface="trail", elevation_gain_m=800, temperature_c=30)
        assert compute_factors(s) == compute_factors(s)


# ===========================================================================
# predictor.py
# ===========================================================================


class TestPredict:
    """pace = max(base * net, base * floor), time = pace * distance"""

    def test_neutral_prediction(self):
        result = predict(_neutral(), 5.0, 10.0)
        assert result.avg_pace_min_per_km == pytest.approx(5.0)
        assert result.predicted_time_min == pytest.approx(50.0)
        assert result.heat_risk == HeatRisk.LOW

    def test_factors_compose_multiplicatively(self):
        s = _neutral(surface="trail", readiness_pct=60)
        result = predict(s, 5.0, 10.0)
        net = 1.12 * (1 + 40 / 400)
        assert result.avg_pace_min_per_km == pytest.approx(5.0 * net)
        assert result.predicted_time_min == pytest.approx(50.0 * net)

    @pytest.mark.parametrize("distance", [0, -5, float("nan")])
    def test_invalid_distance(self, distance):
        with pytest.raises(InvalidDistance):
            predict(_neutral(), 5.0, distance)

    @pytest.mark.parametrize("pace", [0, -1, float("inf")])
    def test_invalid_base_pace(self, pace):
        with pytest.raises(InvalidBasePace):
            predict(_neutral(), pace, 10.0)

    def test_pace_floor(self, monkeypatch):
        import race_whatif.core.predictor as predictor

        monkeypatch.setattr(predictor, "PACE_FLOOR_FRACTION", 0.99)
        best = _neutral(consistency_pct=100, long_run_readiness_pct=100, taper_quality_pct=100)
        result = predictor.predict(best, 5.0, 10.0)
        assert result.avg_pace_min_per_km == pytest.approx(5.0 * 0.99)

    def test_elevation_never_makes_time_faster(self):
        times = [
            predict(_neutral(elevation_gain_m=g), 5.0, 42.2).predicted_time_min
            for g in range(0, 5001, 250)
        ]
        assert all(a <= b for a, b in zip(times, times[1:]))

    def test_readiness_never_makes_time_slower(self):
        times = [
            predict(_neutral(readiness_pct=r), 5.0, 42.2).predicted_time_min
            for r in range(0, 101, 5)
        ]
        assert all(a >= b for a, b in zip(times, times[1:]))


class TestRiegel:
    """T2 = T1 * (D2 / D1)^1.06"""

    def test_same_distance_returns_reference_pace(self):
        assert riegel_base_pace(10, 50, 10) == pytest.approx(5.0)

    def test_longer_race_is_slower(self):
        expected = 50 * (42.195 / 10) ** 1.06 / 42.195
        assert riegel_base_pace(10, 50, 42.195) == pytest.approx(expected)
        assert riegel_base_pace(10, 50, 42.195) > 5.0

    def test_invalid_reference(self):
        with pytest.raises(InvalidDistance):
            riegel_base_pace(0, 50, 10)
        with pytest.raises(InvalidBasePace):
            riegel_base_pace(10, 0, 10)
