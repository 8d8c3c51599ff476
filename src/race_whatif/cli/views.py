"""
CLI view formatters using Rich for pretty console output.

All number formatting lives here; the core returns raw numbers and enums.
"""

from rich.console import Console
from rich.table import Table

from ..core.comparison import factor_impact
from ..core.config import OVERRIDE_RANGES, PARAMETER_FIELDS
from ..core.models import HeatRisk, MetricDelta, SimulationComparison
from ..core.presets import Preset
from ..core.weather import heat_advisory

console = Console()

_RISK_STYLES: dict[HeatRisk, str] = {
    HeatRisk.LOW: "green",
    HeatRisk.CAUTION: "yellow",
    HeatRisk.WARNING: "dark_orange",
    HeatRisk.EXTREME: "bold red",
}

_IMPACT_STYLES = {"positive": "green", "neutral": "dim", "negative": "yellow"}


def fmt_time(minutes: float) -> str:
    """Format minutes as H:MM:SS (or M:SS under an hour)."""
    total = int(round(abs(minutes) * 60))
    hrs, rem = divmod(total, 3600)
    mins, secs = divmod(rem, 60)
    if hrs:
        return f"{hrs}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"


def fmt_pace(pace_min_per_km: float) -> str:
    """Format min/km as M:SS."""
    total = int(round(abs(pace_min_per_km) * 60))
    mins, secs = divmod(total, 60)
    return f"{mins}:{secs:02d}"


def fmt_signed(delta: MetricDelta, body: str) -> str:
    """Colour a formatted delta: green = improvement, yellow = regression."""
    if not delta.show_comparison:
        return "[dim]=[/dim]"
    sign = "-" if delta.value < 0 else "+"
    style = "green" if delta.is_improvement else "yellow"
    return f"[{style}]{sign}{body}[/{style}]"


def fmt_risk(risk: HeatRisk) -> str:
    style = _RISK_STYLES[risk]
    return f"[{style}]{risk.label}[/{style}]"


def format_comparison_table(comparison: SimulationComparison) -> Table:
    """
    Build the baseline vs adjusted table.

    Args:
        comparison: Result of compare_scenarios

    Returns:
        Rich Table
    """
    base, adj = comparison.baseline, comparison.adjusted

    table = Table(title="What-if comparison", show_header=True, header_style="bold")
    table.add_column("", style="bold")
    table.add_column("Baseline", justify="right")
    table.add_column("Adjusted", justify="right")
    table.add_column("Δ", justify="right")

    table.add_row(
        "Predicted time",
        fmt_time(base.predicted_time_min),
        fmt_time(adj.predicted_time_min),
        fmt_signed(comparison.time, fmt_time(comparison.delta.time_min)),
    )
    table.add_row(
        "Avg pace (/km)",
        fmt_pace(base.avg_pace_min_per_km),
        fmt_pace(adj.avg_pace_min_per_km),
        fmt_signed(comparison.pace, fmt_pace(comparison.delta.pace)),
    )
    table.add_row(
        "Change",
        "",
        "",
        fmt_signed(comparison.percent, f"{abs(comparison.delta.time_pct):.1f}%"),
    )

    table.add_section()
    base_f, adj_f = base.factors.as_dict(), adj.factors.as_dict()
    for name in base_f:
        style = _IMPACT_STYLES[factor_impact(adj_f[name])]
        table.add_row(
            f"{name.capitalize()} factor",
            f"{base_f[name]:.3f}",
            f"[{style}]{adj_f[name]:.3f}[/{style}]",
            f"{adj_f[name] - base_f[name]:+.3f}",
        )

    table.add_section()
    table.add_row(
        "Heat index",
        f"{base.heat_index_c:.1f}°C",
        f"{adj.heat_index_c:.1f}°C",
        "",
    )
    table.add_row("Heat risk", fmt_risk(base.heat_risk), fmt_risk(adj.heat_risk), "")
    return table


def print_comparison(comparison: SimulationComparison) -> None:
    """Print the comparison table and a one-line verdict."""
    console.print(format_comparison_table(comparison))

    if not comparison.show_comparison:
        console.print("[dim]No meaningful change from the baseline.[/dim]")
    elif comparison.is_improvement:
        console.print(
            f"[green]Adjusted scenario is faster by {fmt_time(comparison.delta.time_min)}[/green]"
        )
    else:
        console.print(
            f"[yellow]Adjusted scenario is slower by {fmt_time(comparison.delta.time_min)}[/yellow]"
        )

    if comparison.adjusted.heat_risk >= HeatRisk.WARNING:
        print_warning(heat_advisory(comparison.adjusted.heat_risk).message)


def format_ranges_table() -> Table:
    """Table of overridable parameters and their admissible domains."""
    table = Table(title="Override ranges", show_header=True, header_style="bold")
    table.add_column("Parameter")
    table.add_column("Field", style="dim")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Default", justify="right")
    table.add_column("Step", justify="right")
    table.add_column("Unit")

    for name, rng in OVERRIDE_RANGES.items():
        table.add_row(
            name,
            PARAMETER_FIELDS[name],
            f"{rng.min:g}",
            f"{rng.max:g}",
            f"{rng.default:g}",
            f"{rng.step:g}",
            rng.unit,
        )
    return table


def format_presets_table(presets: dict[str, Preset]) -> Table:
    """Table of preset scenarios."""
    table = Table(title="Preset scenarios", show_header=True, header_style="bold")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Overrides")
    table.add_column("Description", style="dim")

    for key, preset in presets.items():
        overrides = ", ".join(f"{k}={v}" for k, v in preset.overrides.items())
        table.add_row(key, preset.name, overrides, preset.description)
    return table


def print_heat(heat_index_c: float, risk: HeatRisk) -> None:
    """Print a heat index, its tier and the matching advice."""
    advisory = heat_advisory(risk)
    console.print(f"Heat index: [bold]{heat_index_c:.1f}°C[/bold]")
    console.print(f"Risk: {fmt_risk(risk)}")
    console.print(f"Advice: {advisory.message}")
    if advisory.intensity_adjust_pct:
        console.print(f"Intensity adjustment: {advisory.intensity_adjust_pct:+d}%")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
