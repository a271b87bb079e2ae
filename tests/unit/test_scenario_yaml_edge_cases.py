import math
from pathlib import Path

import pytest
import yaml

from fleetmatch.config import (
    DEFAULT_SCENARIO,
    FleetmatchParams,
    dump_yaml,
    get_default_scenario,
    load_fleetmatch_params,
    parse_scenario,
)
from fleetmatch.config.loader import to_number


def _write_yaml(tmp_path: Path, data: dict) -> Path:
    f = tmp_path / "scenario.yaml"
    with open(f, "w") as fp:
        yaml.dump(data, fp)
    return f


def _minimal_yaml_dict():
    return {
        "stop_minutes": 12,
        "waste_streams": [
            {"id": "W1", "name": "Paper", "total_bins": 100, "bins_per_stop": 2},
        ],
        "fleets": [
            {
                "id": "F1",
                "name": "Fleet One",
                "trucks": [{"id": "F1-1", "name": "Pantech", "count": 5, "capacity": 40}],
            }
        ],
    }


def test_load_minimal_yaml(tmp_path):
    params = load_fleetmatch_params(_write_yaml(tmp_path, _minimal_yaml_dict()))

    assert isinstance(params, FleetmatchParams)
    assert params.scenario.stop_minutes == 12
    assert params.scenario.waste_ids == ["W1"]
    assert params.scenario.fleets[0].trucks[0].capacity == 40
    assert params.report.max_combos == 6
    assert params.algorithm.estimator == "waves"
    assert params.io.format == "json"
    assert params.io.results_dir.is_absolute()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_fleetmatch_params(tmp_path / "nope.yaml")


def test_invalid_yaml_syntax(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("fleets: [unclosed\n")
    with pytest.raises(ValueError, match="Error parsing YAML"):
        load_fleetmatch_params(path)


def test_unknown_top_level_key(tmp_path):
    data = _minimal_yaml_dict()
    data["depot"] = "north"
    with pytest.raises(ValueError, match="Unknown top-level configuration keys"):
        load_fleetmatch_params(_write_yaml(tmp_path, data))


@pytest.mark.parametrize("key", ["waste_streams", "fleets"])
def test_missing_required_key(tmp_path, key):
    data = _minimal_yaml_dict()
    del data[key]
    with pytest.raises(ValueError, match=f"missing required key '{key}'"):
        load_fleetmatch_params(_write_yaml(tmp_path, data))


def test_missing_id_raises():
    data = _minimal_yaml_dict()
    del data["fleets"][0]["id"]
    with pytest.raises(ValueError, match="Fleet #1 is missing required key 'id'"):
        parse_scenario(data)


def test_duplicate_ids_raise():
    data = _minimal_yaml_dict()
    data["waste_streams"].append(dict(data["waste_streams"][0]))
    with pytest.raises(ValueError, match="Duplicate waste stream ids: W1"):
        parse_scenario(data)


def test_invalid_format_rejected(tmp_path):
    data = _minimal_yaml_dict()
    data["format"] = "pdf"
    with pytest.raises(ValueError, match="IOParams.format"):
        load_fleetmatch_params(_write_yaml(tmp_path, data))


@pytest.mark.parametrize("results_dir", [None, 5, "", ["out"]])
def test_invalid_results_dir_rejected(tmp_path, results_dir):
    data = _minimal_yaml_dict()
    data["results_dir"] = results_dir
    with pytest.raises(ValueError, match="results_dir"):
        load_fleetmatch_params(_write_yaml(tmp_path, data))


def test_results_dir_read_from_yaml(tmp_path):
    data = _minimal_yaml_dict()
    data["results_dir"] = str(tmp_path / "exports")
    data["format"] = "xlsx"
    params = load_fleetmatch_params(_write_yaml(tmp_path, data))
    assert params.io.results_dir == tmp_path / "exports"
    assert params.io.format == "xlsx"


def test_raw_values_are_clamped():
    data = {
        "stop_minutes": 0,
        "waste_streams": [
            {"id": "W1", "name": "  ", "total_bins": -5, "bins_per_stop": 0},
            {"id": "W2", "total_bins": "lots", "bins_per_stop": None},
        ],
        "fleets": [
            {
                "id": "Z",
                "trucks": [
                    {"name": "", "count": "abc", "capacity": -10},
                    {"count": 3.9, "capacity": 50},
                ],
            }
        ],
    }
    scenario = parse_scenario(data)

    assert scenario.stop_minutes == 1
    w1, w2 = scenario.waste_streams
    assert w1.name == "W1"
    assert w1.total_bins == 0
    assert w1.bins_per_stop == 0.1
    assert w2.total_bins == 0
    assert w2.bins_per_stop == 1

    fleet = scenario.fleets[0]
    assert fleet.name == "Z"
    assert fleet.single_waste_type is False
    first, second = fleet.trucks
    assert first.truck_id == "Z-0"
    assert first.name == "Truck"
    assert first.count == 0
    assert first.capacity == 0
    assert second.truck_id == "Z-1"
    assert second.count == 3


def test_single_waste_type_defaults_from_reference_fleet():
    data = _minimal_yaml_dict()
    data["fleets"] = [
        {"id": "A", "trucks": []},
        {"id": "B", "trucks": []},
        {"id": "C", "trucks": [], "single_waste_type": False},
    ]
    flags = [fleet.single_waste_type for fleet in parse_scenario(data).fleets]
    assert flags == [True, False, False]


def test_missing_stop_minutes_uses_default():
    data = _minimal_yaml_dict()
    del data["stop_minutes"]
    assert parse_scenario(data).stop_minutes == 18


@pytest.mark.parametrize(
    "value, fallback, minimum, expected",
    [
        ("7", 1, 0, 7),
        (2.5, 1, 0, 2.5),
        (float("nan"), 4, 0, 4),
        (float("inf"), 4, 0, 4),
        ("", 4, 0, 4),
        (-3, 4, 0, 0),
        (0.05, 1, 0.1, 0.1),
        (10, 1, None, 10),
    ],
)
def test_to_number(value, fallback, minimum, expected):
    assert to_number(value, fallback, minimum) == expected


def test_dump_then_load_reproduces_default_scenario(tmp_path):
    path = dump_yaml(FleetmatchParams(scenario=get_default_scenario()), tmp_path / "out" / "s.yaml")
    params = load_fleetmatch_params(path)
    assert params.scenario == DEFAULT_SCENARIO


def test_default_scenario_is_a_copy():
    first = get_default_scenario()
    second = get_default_scenario()
    assert first == second == DEFAULT_SCENARIO
    assert first is not DEFAULT_SCENARIO
    assert first.fleets[0] is not DEFAULT_SCENARIO.fleets[0]
    assert math.isclose(first.stop_minutes, 18)
