"""Shared Typer app object and shared option types."""

from typing import Annotated

import typer

# Marathon distance used when --distance is omitted
DEFAULT_DISTANCE_KM = 42.195

# Shared --json option type used across commands
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="race-whatif",
    help="What-if race simulator: compare predicted race performance across conditions.",
    no_args_is_help=True,
)
