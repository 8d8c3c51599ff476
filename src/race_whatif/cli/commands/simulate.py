"""Simulation commands: compare, presets."""

import json
import warnings
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from ...core.comparison import compare_scenarios, override_warnings
from ...core.models import ScenarioInputs
from ...core.predictor import riegel_base_pace
from ...core.presets import get_preset, load_presets
from ...io.serializers import (
    ValidationError,
    comparison_to_dict,
    load_scenario_file,
    parse_assignments,
    parse_pace,
)
from .. import views
from ..app import DEFAULT_DISTANCE_KM, JsonOption, app


def _build_baseline(baseline_path: Path | None, settings: list[str]) -> ScenarioInputs:
    """Baseline from an optional JSON file, then --set assignments on top."""
    raw: dict[str, Any] = {}
    if baseline_path is not None:
        raw.update(load_scenario_file(baseline_path).as_dict())
    raw.update(parse_assignments(settings))
    return ScenarioInputs.from_mapping(raw)


def _resolve_base_pace(
    pace: str | None,
    ref_distance: float | None,
    ref_time: float | None,
    distance_km: float,
) -> float:
    if pace is not None:
        return parse_pace(pace)
    if ref_distance is not None and ref_time is not None:
        return riegel_base_pace(ref_distance, ref_time, distance_km)
    raise ValidationError("Provide --pace or both --ref-distance and --ref-time")


@app.command()
def compare(
    baseline_path: Annotated[
        Optional[Path],
        typer.Option("--baseline", "-b", help="JSON file with the baseline scenario"),
    ] = None,
    settings: Annotated[
        Optional[list[str]],
        typer.Option("--set", "-s", help="Baseline value, e.g. temperature=18 (repeatable)"),
    ] = None,
    overrides: Annotated[
        Optional[list[str]],
        typer.Option("--override", "-o", help="What-if override, e.g. humidity=80 (repeatable)"),
    ] = None,
    preset: Annotated[
        Optional[str],
        typer.Option("--preset", "-P", help="Apply a preset scenario (see 'presets')"),
    ] = None,
    pace: Annotated[
        Optional[str],
        typer.Option("--pace", help="Base race pace in min/km (4.5 or 4:30)"),
    ] = None,
    distance_km: Annotated[
        float,
        typer.Option("--distance", "-d", help="Race distance in km"),
    ] = DEFAULT_DISTANCE_KM,
    ref_distance: Annotated[
        Optional[float],
        typer.Option("--ref-distance", help="Reference race distance in km"),
    ] = None,
    ref_time: Annotated[
        Optional[float],
        typer.Option("--ref-time", help="Reference race time in minutes"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Compare a baseline scenario with a what-if scenario.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            baseline = _build_baseline(baseline_path, settings or [])
            adjustments: dict[str, Any] = {}
            if preset is not None:
                adjustments.update(get_preset(preset).overrides)
            adjustments.update(parse_assignments(overrides or []))

            base_pace = _resolve_base_pace(pace, ref_distance, ref_time, distance_km)
            result = compare_scenarios(baseline, adjustments, base_pace, distance_km)
        except FileNotFoundError as e:
            views.print_error(f"File not found: {e.filename}")
            raise typer.Exit(1)
        except (ValidationError, ValueError) as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    messages = [str(w.message) for w in caught] + override_warnings(
        {k: _maybe_number(v) for k, v in adjustments.items()}
    )

    if json_out:
        payload = comparison_to_dict(result)
        payload["warnings"] = messages
        print(json.dumps(payload, indent=2))
        return

    for message in messages:
        views.print_warning(message)
    views.print_comparison(result)


def _maybe_number(value: Any) -> Any:
    """CLI values arrive as strings; surface numeric ones for advisory checks."""
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    return value


@app.command()
def presets(json_out: JsonOption = False) -> None:
    """
    List preset what-if scenarios.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            loaded = load_presets()
        except RuntimeError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            key: {
                "name": p.name,
                "description": p.description,
                "overrides": p.overrides,
            }
            for key, p in loaded.items()
        }, indent=2))
        return

    for w in caught:
        views.print_warning(str(w.message))
    views.console.print(views.format_presets_table(loaded))
