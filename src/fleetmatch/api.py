"""
API facade for Fleetmatch - provides a single entry point for programmatic usage.
"""

import dataclasses
import time
from pathlib import Path

from fleetmatch.assignment import best_fleet_per_waste, search_assignments
from fleetmatch.config import FleetmatchParams, get_default_scenario, load_fleetmatch_params
from fleetmatch.core_types import EvaluationReport, Scenario
from fleetmatch.estimation import build_performance_matrix
from fleetmatch.interfaces import PerformanceEstimator
from fleetmatch.registry import get_performance_estimator
from fleetmatch.utils.formatting import format_cell, format_hours
from fleetmatch.utils.logging import (
    FleetmatchLogger,
    ProgressTracker,
    log_detail,
    log_progress,
    log_warning,
)
from fleetmatch.utils.save_results import save_evaluation_results

logger = FleetmatchLogger.get_logger("fleetmatch.api")


def run_pipeline(
    scenario: Scenario,
    estimator: PerformanceEstimator | None = None,
    max_combos: int = 6,
    progress: ProgressTracker | None = None,
) -> EvaluationReport:
    """Matrix, per-stream baseline and assignment search for one scenario.

    Nothing is written to disk. ``progress`` is advanced once after the
    matrix and once after the search when given.
    """
    start = time.perf_counter()
    matrix = build_performance_matrix(scenario, estimator)
    if progress is not None:
        progress.advance(
            f"Estimated {len(scenario.fleets) * len(scenario.waste_streams)} fleet/waste pairs"
        )

    best_per_waste = best_fleet_per_waste(scenario, matrix)
    assignments = search_assignments(scenario, matrix)
    if progress is not None:
        progress.advance(f"Ranked {len(assignments.all)} feasible assignments")

    return EvaluationReport(
        scenario=scenario,
        matrix=matrix,
        best_per_waste=best_per_waste,
        assignments=assignments,
        max_combos=max_combos,
        runtime_sec=time.perf_counter() - start,
    )

def _resolve_params(config: str | Path | FleetmatchParams | None) -> FleetmatchParams:
    if config is None:
        return FleetmatchParams(scenario=get_default_scenario())
    if isinstance(config, FleetmatchParams):
        return config

    config_path = Path(config)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please check the file path and ensure it exists."
        )
    try:
        return load_fleetmatch_params(config_path)
    except ValueError as e:
        raise ValueError(
            f"Error loading configuration from {config_path}:\n{e!s}\n"
            f"Please check the YAML syntax and required fields."
        ) from e


def evaluate(
    config: str | Path | FleetmatchParams | None = None,
    scenario: Scenario | None = None,
    output_dir: str | Path | None = None,
    format: str | None = None,
    max_combos: int | None = None,
    stop_minutes: float | None = None,
    estimator: str | None = None,
    verbose: bool = False,
    save: bool = False,
) -> EvaluationReport:
    """
    Evaluate every fleet against every waste stream and rank the assignments.

    Args:
        config: Configuration - can be:
            - Path to a scenario YAML file
            - FleetmatchParams object
            - None (uses the built-in default scenario)
        scenario: Scenario overriding the one from ``config``.
        output_dir: Directory for saved results; giving one implies ``save``.
        format: Output format - "json", "csv" or "xlsx" (default from config).
        max_combos: Number of ranked combos kept in reports (at least 1).
        stop_minutes: Override of the scenario's minutes per stop (at least 1).
        estimator: Name of a registered performance estimator.
        verbose: Enable verbose logging.
        save: Save results to ``output_dir`` or, when omitted, the configured
            results directory.

    Returns:
        EvaluationReport with the matrix, best fleet per stream and ranked
        assignments.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the config is invalid or an override is out of range.

    Example:
        >>> report = evaluate()
        >>> report.best.describe()
        'A → T1, B → T2, C → T3'
    """
    params = _resolve_params(config)

    if scenario is not None:
        params = dataclasses.replace(params, scenario=scenario)
    if stop_minutes is not None:
        params = dataclasses.replace(
            params,
            scenario=dataclasses.replace(params.scenario, stop_minutes=max(1, stop_minutes)),
        )
    if max_combos is not None:
        params = dataclasses.replace(
            params, report=dataclasses.replace(params.report, max_combos=max_combos)
        )
    if estimator is not None:
        params = dataclasses.replace(
            params, algorithm=dataclasses.replace(params.algorithm, estimator=estimator)
        )
    if output_dir is not None or format is not None:
        io_params = params.io
        if output_dir is not None:
            io_params = dataclasses.replace(io_params, results_dir=Path(output_dir))
        if format is not None:
            io_params = dataclasses.replace(io_params, format=format)
        params = dataclasses.replace(params, io=io_params)
    if verbose:
        params = dataclasses.replace(
            params, runtime=dataclasses.replace(params.runtime, verbose=True)
        )

    save = save or output_dir is not None

    scenario = params.scenario
    performance_estimator = get_performance_estimator(params.algorithm.estimator)
    log_progress(
        f"Evaluating {len(scenario.fleets)} fleets against "
        f"{len(scenario.waste_streams)} waste streams "
        f"({scenario.stop_minutes} min per stop)"
    )

    steps = ["Estimate Performance", "Search Assignments"]
    if save:
        steps.append("Save Results")
    progress = ProgressTracker(steps)

    report = run_pipeline(
        scenario,
        estimator=performance_estimator,
        max_combos=params.report.max_combos,
        progress=progress,
    )

    for fleet in scenario.fleets:
        cells = ", ".join(
            f"{waste.waste_id}={format_cell(report.matrix[fleet.fleet_id][waste.waste_id].minutes)}"
            for waste in scenario.waste_streams
        )
        log_detail(f"Fleet {fleet.fleet_id}: {cells}")

    if report.best is not None:
        logger.info(
            f"Best assignment: {report.best.describe()} "
            f"(longest route {format_hours(report.best.max_minutes)} h)"
        )
    else:
        log_warning("No feasible assignment found for current inputs")

    if save:
        try:
            report.output_path = save_evaluation_results(
                report, params, format=params.io.format
            )
            progress.advance(f"Results saved to {report.output_path}")
        except OSError as e:
            log_warning(f"Failed to save results: {e!s}")

    progress.close()
    return report
