"""Reference commands: heat, ranges, validate."""

import dataclasses
import json
from typing import Annotated, Optional

import typer

from ...core.config import CATEGORICAL_CHOICES, OVERRIDE_RANGES
from ...core.errors import ScenarioError
from ...core.validation import resolve_parameter, validate_override
from ...core.weather import classify_heat, heat_advisory, heat_index_c
from .. import views
from ..app import JsonOption, app


@app.command()
def heat(
    temperature_c: Annotated[
        Optional[float],
        typer.Argument(help="Air temperature in °C"),
    ] = None,
    humidity_pct: Annotated[
        Optional[float],
        typer.Argument(help="Relative humidity in %"),
    ] = None,
    index: Annotated[
        Optional[float],
        typer.Option("--index", "-i", help="Classify a heat index (°C) directly"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show heat index and heat-risk tier for given conditions.
    """
    if index is not None:
        hi = index
    elif temperature_c is not None and humidity_pct is not None:
        hi = heat_index_c(temperature_c, humidity_pct)
    else:
        views.print_error("Provide TEMPERATURE and HUMIDITY, or --index")
        raise typer.Exit(1)

    try:
        risk = classify_heat(hi)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        advisory = heat_advisory(risk)
        print(json.dumps({
            "heat_index_c": round(hi, 2),
            "risk": risk.label,
            "should_train": advisory.should_train,
            "intensity_adjust_pct": advisory.intensity_adjust_pct,
        }, indent=2))
        return

    views.print_heat(hi, risk)


@app.command()
def ranges(json_out: JsonOption = False) -> None:
    """
    Show admissible ranges for every overridable parameter.
    """
    if json_out:
        payload = {name: dataclasses.asdict(rng) for name, rng in OVERRIDE_RANGES.items()}
        payload.update({name: {"choices": list(c)} for name, c in CATEGORICAL_CHOICES.items()})
        print(json.dumps(payload, indent=2))
        return

    views.console.print(views.format_ranges_table())
    for name, choices in CATEGORICAL_CHOICES.items():
        views.console.print(f"[bold]{name}[/bold]: {', '.join(choices)}")


@app.command()
def validate(
    name: Annotated[str, typer.Argument(help="Parameter name, e.g. temperature")],
    value: Annotated[str, typer.Argument(help="Raw value to validate")],
) -> None:
    """
    Clamp and snap a raw override value the way the simulator does.
    """
    try:
        param = resolve_parameter(name)
        result = validate_override(param, value)
    except ScenarioError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if param in OVERRIDE_RANGES:
        views.console.print(f"{param} = [bold]{result:g}[/bold] {OVERRIDE_RANGES[param].unit}")
    else:
        views.console.print(f"{param} = [bold]{result}[/bold]")
