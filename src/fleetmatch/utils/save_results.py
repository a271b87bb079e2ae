"""
save_results.py – persistence of evaluation reports

Everything that hits disk after an evaluation goes through this module so the
engine itself stays side-effect free.

Key responsibilities
• Flatten an :class:`EvaluationReport` into tables (summary, time matrix,
  per-pair details, best fleet per waste stream, ranked combos).
• Write those tables as one JSON document, one Excel workbook (a sheet per
  table) or a directory of CSV files.
• Keep "not serviceable" pairs explicit: infinite minutes become null/empty
  cells rather than a huge number.
"""

import json
import math
from datetime import datetime
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from fleetmatch.config.params import FleetmatchParams
from fleetmatch.core_types import AssignmentSearchResult, EvaluationReport
from fleetmatch.estimation.matrix import matrix_to_dataframe
from fleetmatch.utils.formatting import format_hours
from fleetmatch.utils.logging import FleetmatchLogger

logger = FleetmatchLogger.get_logger(__name__)


def _summary_rows(report: EvaluationReport, params: FleetmatchParams) -> list[tuple[str, Any]]:
    scenario = report.scenario
    best = report.best

    rows: list[tuple[str, Any]] = [
        ("Stop Duration (min)", scenario.stop_minutes),
        ("Fleets", len(scenario.fleets)),
        ("Waste Streams", len(scenario.waste_streams)),
        ("Feasible Assignments", len(report.assignments.all)),
    ]
    if best is not None:
        rows.extend(
            [
                ("Best Assignment", best.describe()),
                ("Longest Route (h)", format_hours(best.max_minutes)),
                ("Total Hours", format_hours(best.sum_minutes)),
            ]
        )
    else:
        rows.append(("Best Assignment", "No feasible assignment"))

    for item in report.best_per_waste:
        rows.append(
            (
                f"Best Fleet for {item.waste.waste_id}",
                f"{item.fleet.fleet_id} ({format_hours(item.minutes)} h)",
            )
        )

    rows.extend(
        [
            ("---Parameters---", ""),
            ("Estimator", params.algorithm.estimator),
            ("Max Combos Shown", params.report.max_combos),
            ("Runtime (s)", f"{report.runtime_sec:.3f}"),
        ]
    )
    for waste in scenario.waste_streams:
        rows.append((f"Waste {waste.waste_id} Total Bins", waste.total_bins))
        rows.append((f"Waste {waste.waste_id} Bins per Stop", waste.bins_per_stop))
    for fleet in scenario.fleets:
        for truck in fleet.trucks:
            rows.append(
                (
                    f"Fleet {fleet.fleet_id} {truck.name} ({truck.truck_id})",
                    f"{truck.count} x {truck.capacity} bins",
                )
            )
    return rows


def _details_frame(report: EvaluationReport) -> pd.DataFrame:
    data = []
    for fleet in report.scenario.fleets:
        for waste in report.scenario.waste_streams:
            performance = report.matrix[fleet.fleet_id][waste.waste_id]
            row = {"Fleet_ID": fleet.fleet_id, "Waste_ID": waste.waste_id}
            row.update(performance.to_dict())
            row["Hours"] = performance.hours if performance.serviceable else None
            data.append(row)
    return pd.DataFrame(data)


def build_result_tables(
    report: EvaluationReport, params: FleetmatchParams
) -> dict[str, pd.DataFrame]:
    """Return every exported table keyed by its sheet name."""
    matrix_hours = matrix_to_dataframe(report.scenario, report.matrix, unit="hours")

    best_rows = [item.to_dict() for item in report.best_per_waste]
    best_frame = pd.DataFrame(best_rows, columns=["Waste_ID", "Fleet_ID", "Minutes"])
    best_frame["Hours"] = best_frame["Minutes"] / 60

    combos = report.assignments.top(params.report.max_combos)
    combos_frame = AssignmentSearchResult.to_dataframe(combos)
    combos_frame["Max_Hours"] = combos_frame["Max_Minutes"] / 60
    combos_frame["Sum_Hours"] = combos_frame["Sum_Minutes"] / 60

    return {
        "Summary": pd.DataFrame(_summary_rows(report, params), columns=["Metric", "Value"]),
        "Matrix Hours": matrix_hours.reset_index(),
        "Pair Details": _details_frame(report),
        "Best Per Waste": best_frame,
        "Top Combos": combos_frame,
    }


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, np.bool_):
        return bool(value)
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value) if math.isfinite(value) else None
    return value


def _write_json(tables: dict[str, pd.DataFrame], output_filename: Path) -> None:
    document = {name: frame.to_dict(orient="records") for name, frame in tables.items()}
    with open(output_filename, "w") as f:
        json.dump(_json_safe(document), f, indent=2, ensure_ascii=False)


def _write_excel(tables: dict[str, pd.DataFrame], output_filename: Path) -> None:
    with pd.ExcelWriter(output_filename, engine="openpyxl") as writer:
        for name, frame in tables.items():
            frame.replace([np.inf, -np.inf], np.nan).to_excel(
                writer, sheet_name=name, index=False
            )


def _write_csv(tables: dict[str, pd.DataFrame], output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    for name, frame in tables.items():
        file_name = name.lower().replace(" ", "_") + ".csv"
        frame.replace([np.inf, -np.inf], np.nan).to_csv(output_dir / file_name, index=False)


def save_evaluation_results(
    report: EvaluationReport,
    params: FleetmatchParams,
    filename: str | Path | None = None,
    format: str = "json",
) -> Path:
    """Save an evaluation report as JSON, Excel or CSV.

    Args:
        report: Output of :func:`fleetmatch.api.evaluate`.
        params: Parameters of the run; ``params.io.results_dir`` is used when
            ``filename`` is not given.
        filename: Target file (or directory for CSV). Defaults to a
            timestamped name inside the results directory.
        format: ``json``, ``xlsx`` or ``csv``.

    Returns:
        Path of the written file or CSV directory.
    """
    if format not in ("json", "xlsx", "csv"):
        raise ValueError("format must be 'json', 'xlsx' or 'csv'")

    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        suffix = "" if format == "csv" else f".{format}"
        output_path = params.io.results_dir / f"evaluation_results_{timestamp}{suffix}"
    else:
        output_path = Path(filename)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    tables = build_result_tables(report, params)

    if format == "json":
        _write_json(tables, output_path)
    elif format == "xlsx":
        _write_excel(tables, output_path)
    else:
        _write_csv(tables, output_path)

    logger.info(f"Results saved to {output_path}")
    return output_path
