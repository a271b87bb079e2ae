from __future__ import annotations

"""Parameter container dataclasses for Fleetmatch.

The scenario (what is being evaluated) is kept apart from reporting, algorithm
and I/O options, each in its own immutable dataclass. A small mutable
`RuntimeParams` bucket captures flags that are never serialised to YAML but can
be toggled programmatically.
"""

from dataclasses import dataclass, field
from pathlib import Path

from fleetmatch.core_types import Scenario

__all__ = [
    "ReportParams",
    "AlgorithmParams",
    "IOParams",
    "RuntimeParams",
    "FleetmatchParams",
]

OUTPUT_FORMATS = ("json", "csv", "xlsx")


# ---------------------------------------------------------------------------
# Reporting parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReportParams:
    """How much of the ranked search output is shown and saved."""

    max_combos: int = 6

    def __post_init__(self):  # type: ignore[override]
        if self.max_combos < 1:
            raise ValueError("ReportParams.max_combos must be at least 1.")


# ---------------------------------------------------------------------------
# Algorithm parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AlgorithmParams:
    """Which registered performance estimator builds the matrix."""

    estimator: str = "waves"

    def __post_init__(self):  # type: ignore[override]
        if not self.estimator:
            raise ValueError("AlgorithmParams.estimator cannot be empty.")


# ---------------------------------------------------------------------------
# IO parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IOParams:
    """Settings for result output."""

    results_dir: Path = Path("results")
    format: str = "json"  # One of: json, csv, xlsx

    def __post_init__(self):  # type: ignore[override]
        if self.format not in OUTPUT_FORMATS:
            raise ValueError("IOParams.format must be 'json', 'csv' or 'xlsx'.")

        # Ensure results_dir is absolute
        results_dir = Path(self.results_dir)
        if not results_dir.is_absolute():
            results_dir = (Path.cwd() / results_dir).resolve()
        object.__setattr__(self, "results_dir", results_dir)


# ---------------------------------------------------------------------------
# Runtime parameters – toggles that are never serialized to yaml
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RuntimeParams:
    verbose: bool = False
    debug: bool = False


# ---------------------------------------------------------------------------
# Aggregate container
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class FleetmatchParams:
    """Aggregate parameter object passed throughout the codebase."""

    scenario: Scenario
    report: ReportParams = field(default_factory=ReportParams)
    algorithm: AlgorithmParams = field(default_factory=AlgorithmParams)
    io: IOParams = field(default_factory=IOParams)
    runtime: RuntimeParams = field(default_factory=RuntimeParams)

    @property
    def stop_minutes(self) -> float:
        return self.scenario.stop_minutes

    @property
    def max_combos(self) -> int:
        return self.report.max_combos
