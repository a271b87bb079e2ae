"""
Command-line interface for Fleetmatch using Typer.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from fleetmatch import __version__
from fleetmatch.api import evaluate as api_evaluate
from fleetmatch.config import FleetmatchParams, dump_yaml, get_default_scenario
from fleetmatch.config import load_fleetmatch_params
from fleetmatch.config.params import OUTPUT_FORMATS
from fleetmatch.core_types import EvaluationReport
from fleetmatch.utils.formatting import format_cell, format_hours, format_number
from fleetmatch.utils.logging import (
    LogLevel,
    log_error,
    log_success,
    setup_logging,
)

app = typer.Typer(
    help="Fleetmatch: match waste-collection fleets to waste streams",
    add_completion=False,
)
console = Console()


def _summary_table(report: EvaluationReport) -> Table:
    scenario = report.scenario
    table = Table(title="Summary", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    best = report.best
    if best is not None:
        table.add_row("Fastest full coverage", best.describe())
        table.add_row("Longest route", f"{format_hours(best.max_minutes)} hours")

    if report.best_per_waste:
        lines = [
            f"{item.waste.waste_id}: {item.fleet.fleet_id} ({format_hours(item.minutes)} h)"
            for item in report.best_per_waste
        ]
        table.add_row("Best fleet per waste type", "\n".join(lines))

    table.add_row("Stop duration", f"{format_number(scenario.stop_minutes)} min")
    table.add_row(
        "Scenario",
        f"Fleets: {len(scenario.fleets)} · Waste streams: {len(scenario.waste_streams)}",
    )
    return table


def _matrix_table(report: EvaluationReport) -> Table:
    scenario = report.scenario
    table = Table(title="Hours per fleet and waste type", show_header=True)
    table.add_column("Waste type", style="cyan")
    for fleet in scenario.fleets:
        table.add_column(fleet.fleet_id, justify="right")

    for waste in scenario.waste_streams:
        cells = [
            format_cell(report.matrix[fleet.fleet_id][waste.waste_id].minutes)
            for fleet in scenario.fleets
        ]
        table.add_row(
            f"{waste.waste_id} · {waste.name} ({format_number(waste.stops_required)} stops)",
            *cells,
        )
    return table


def _combos_table(report: EvaluationReport) -> Table:
    table = Table(title="Ranked assignments", show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Assignment", style="cyan")
    table.add_column("Longest route", justify="right")
    table.add_column("Total hours", justify="right")

    combos = report.top_combos
    if not combos:
        table.add_row("", "No feasible assignments for current inputs.", "", "")
        return table

    for rank, combo in enumerate(combos, start=1):
        table.add_row(
            str(rank),
            combo.describe(),
            f"{format_hours(combo.max_minutes)} h",
            f"{format_hours(combo.sum_minutes)} h",
        )
    return table


def print_report(report: EvaluationReport) -> None:
    """Render an evaluation report to the console."""
    console.print(_summary_table(report))
    console.print(_matrix_table(report))
    console.print(_combos_table(report))


@app.command()
def evaluate(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to scenario YAML file (default scenario if omitted)"
    ),
    stop_minutes: float | None = typer.Option(
        None, "--stop-minutes", "-s", help="Override minutes spent per stop"
    ),
    top: int | None = typer.Option(
        None, "--top", "-k", help="Number of ranked assignments to show"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output directory (default from config)"
    ),
    format: str | None = typer.Option(
        None, "--format", "-f", help="Output format: json, csv, xlsx (default from config)"
    ),
    save: bool = typer.Option(False, "--save", help="Save results to the output directory"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Minimal output (errors only)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
) -> None:
    """
    Estimate every fleet on every waste stream and rank the assignments.

    Prints the summary, the fleet x waste type time matrix and the ranked
    one-to-one assignments; with --save the tables are also written to disk.
    """
    _setup_logging_from_flags(verbose, quiet, debug)

    if config and not config.exists():
        log_error(f"Config file not found: {config}")
        raise typer.Exit(1)

    if format is not None and format not in OUTPUT_FORMATS:
        log_error("Invalid format. Choose 'json', 'csv', or 'xlsx'")
        raise typer.Exit(1)

    if top is not None and top < 1:
        log_error("--top must be at least 1")
        raise typer.Exit(1)

    try:
        report = api_evaluate(
            config=config,
            output_dir=output if save else None,
            save=save,
            format=format,
            max_combos=top,
            stop_minutes=stop_minutes,
            verbose=verbose,
        )
    except FileNotFoundError as e:
        log_error(str(e))
        raise typer.Exit(1)
    except ValueError as e:
        log_error(str(e))
        raise typer.Exit(1)

    if not quiet:
        print_report(report)
    if report.output_path is not None:
        log_success(f"Results saved to {report.output_path}")


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path("fleetmatch.yaml"), help="Where to write the scenario file"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """
    Write the default scenario as an editable YAML file.
    """
    if path.exists() and not force:
        log_error(f"{path} already exists (use --force to overwrite)")
        raise typer.Exit(1)

    written = dump_yaml(FleetmatchParams(scenario=get_default_scenario()), path)
    # Round-trip to make sure the file is loadable as written.
    load_fleetmatch_params(written)
    console.print(f"[green]✓[/green] Default scenario written to {written}")


@app.command()
def version() -> None:
    """
    Show the Fleetmatch version.
    """
    console.print(f"Fleetmatch version {__version__}")


def _setup_logging_from_flags(
    verbose: bool = False, quiet: bool = False, debug: bool = False
):
    """Setup logging based on CLI flags or environment variable."""
    level_from_flags: LogLevel | None = None
    if debug:
        level_from_flags = LogLevel.DEBUG
    elif verbose:
        level_from_flags = LogLevel.VERBOSE
    elif quiet:
        level_from_flags = LogLevel.QUIET

    if level_from_flags is not None:
        setup_logging(level_from_flags)
    else:
        # No flags set, let setup_logging handle it (will check env var)
        setup_logging()


if __name__ == "__main__":
    app()
