from __future__ import annotations

"""Utilities for loading Fleetmatch scenario YAML files into the parameter
dataclass hierarchy.

Raw values are clamped rather than rejected: anything that is not a finite
number falls back to a default, and anything below its minimum is raised to
that minimum. The engine can therefore rely on
``stop_minutes >= 1``, ``bins_per_stop >= 0.1`` and non-negative counts.
"""

import math
from pathlib import Path
from typing import Any, Dict, List

import yaml

from fleetmatch.core_types import Fleet, Scenario, TruckType, WasteStream
from fleetmatch.utils.logging import FleetmatchLogger

from .defaults import (
    DEFAULT_MAX_COMBOS,
    DEFAULT_SCENARIO_VERSION,
    DEFAULT_STOP_MINUTES,
    default_single_waste_type,
)
from .params import AlgorithmParams, FleetmatchParams, IOParams, ReportParams

logger = FleetmatchLogger.get_logger(__name__)

# ---------------------------------------------------------------------------
# Helper parsing routines
# ---------------------------------------------------------------------------


def to_number(value: Any, fallback: float, min_value: float | None = None) -> float:
    """Coerce raw input to a number, applying a fallback and a lower clamp."""
    if isinstance(value, bool):
        value = int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    if min_value is not None and number < min_value:
        number = float(min_value)
    return int(number) if number.is_integer() else number


def _text(value: Any, default: str) -> str:
    text = "" if value is None else str(value).strip()
    return text or default


def _require_id(raw: Dict[str, Any], kind: str, position: int) -> str:
    if not isinstance(raw, dict):
        raise ValueError(f"{kind} #{position + 1} must be a mapping, got {type(raw).__name__}")
    if raw.get("id") is None or str(raw["id"]).strip() == "":
        raise ValueError(f"{kind} #{position + 1} is missing required key 'id'.")
    return str(raw["id"]).strip()


def _check_unique(ids: List[str], kind: str) -> None:
    duplicates = sorted({item for item in ids if ids.count(item) > 1})
    if duplicates:
        raise ValueError(f"Duplicate {kind} ids: {', '.join(duplicates)}")


def _parse_waste_streams(raw: List[Dict[str, Any]]) -> tuple[WasteStream, ...]:
    streams = []
    for position, item in enumerate(raw):
        waste_id = _require_id(item, "Waste stream", position)
        streams.append(
            WasteStream(
                waste_id=waste_id,
                name=_text(item.get("name"), waste_id),
                description=_text(item.get("description"), ""),
                total_bins=to_number(item.get("total_bins"), 0, 0),
                bins_per_stop=to_number(item.get("bins_per_stop"), 1, 0.1),
            )
        )
    _check_unique([stream.waste_id for stream in streams], "waste stream")
    return tuple(streams)


def _parse_trucks(fleet_id: str, raw: List[Dict[str, Any]] | None) -> tuple[TruckType, ...]:
    trucks = []
    for index, item in enumerate(raw or []):
        if not isinstance(item, dict):
            raise ValueError(f"Fleet {fleet_id}: truck #{index + 1} must be a mapping.")
        trucks.append(
            TruckType(
                truck_id=_text(item.get("id"), f"{fleet_id}-{index}"),
                name=_text(item.get("name"), "Truck"),
                count=math.floor(to_number(item.get("count"), 0, 0)),
                capacity=to_number(item.get("capacity"), 0, 0),
            )
        )
    return tuple(trucks)


def _parse_fleets(raw: List[Dict[str, Any]]) -> tuple[Fleet, ...]:
    fleets = []
    for position, item in enumerate(raw):
        fleet_id = _require_id(item, "Fleet", position)
        single = item.get("single_waste_type")
        fleets.append(
            Fleet(
                fleet_id=fleet_id,
                name=_text(item.get("name"), fleet_id),
                note=_text(item.get("note"), ""),
                single_waste_type=(
                    default_single_waste_type(fleet_id) if single is None else bool(single)
                ),
                trucks=_parse_trucks(fleet_id, item.get("trucks")),
            )
        )
    _check_unique([fleet.fleet_id for fleet in fleets], "fleet")
    return tuple(fleets)


def parse_scenario(data: Dict[str, Any]) -> Scenario:
    """Build a :class:`Scenario` from raw mapping data.

    Expects ``waste_streams`` and ``fleets`` lists; ``stop_minutes`` is
    optional. Keys are read, not consumed.
    """
    for key in ("waste_streams", "fleets"):
        if key not in data:
            raise ValueError(f"Scenario missing required key '{key}'.")
        if not isinstance(data[key], list):
            raise ValueError(f"Scenario key '{key}' must be a list.")

    return Scenario(
        stop_minutes=to_number(data.get("stop_minutes"), DEFAULT_STOP_MINUTES, 1),
        waste_streams=_parse_waste_streams(data["waste_streams"]),
        fleets=_parse_fleets(data["fleets"]),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_yaml(path: str | Path) -> FleetmatchParams:
    """Load a scenario YAML file into `FleetmatchParams`."""

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(cfg_path)

    try:
        with cfg_path.open() as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Error parsing YAML configuration {cfg_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Configuration {cfg_path} must be a YAML mapping.")

    scenario = parse_scenario(data)
    for key in ("stop_minutes", "waste_streams", "fleets"):
        data.pop(key, None)

    # Informational only; files from any version share one schema so far.
    data.pop("version", None)

    report = ReportParams(
        max_combos=int(to_number(data.pop("max_combos", None), DEFAULT_MAX_COMBOS, 1))
    )
    algorithm = AlgorithmParams(estimator=data.pop("estimator", "waves"))
    results_dir = data.pop("results_dir", "results")
    if not isinstance(results_dir, str) or not results_dir.strip():
        raise ValueError(
            f"results_dir must be a non-empty path string, got {results_dir!r}."
        )
    io_params = IOParams(
        results_dir=Path(results_dir),
        format=data.pop("format", "json"),
    )

    # Any remaining unknown keys will raise an error to avoid silent mistakes.
    if data:
        unknown_keys = ", ".join(sorted(data.keys()))
        raise ValueError(f"Unknown top-level configuration keys in YAML: {unknown_keys}")

    logger.debug(
        f"Loaded configuration from {cfg_path}: {len(scenario.fleets)} fleets, "
        f"{len(scenario.waste_streams)} waste streams, stop {scenario.stop_minutes} min"
    )

    return FleetmatchParams(scenario=scenario, report=report, algorithm=algorithm, io=io_params)


def dump_yaml(params: FleetmatchParams, path: str | Path) -> Path:
    """Write ``params`` to a YAML file that :func:`load_yaml` reads back."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data: Dict[str, Any] = {"version": DEFAULT_SCENARIO_VERSION}
    data.update(params.scenario.to_dict())
    data["max_combos"] = params.report.max_combos
    data["estimator"] = params.algorithm.estimator
    data["format"] = params.io.format

    with output_path.open("w") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
    return output_path
