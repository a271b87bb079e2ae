import dataclasses

import pytest

from fleetmatch import EvaluationReport, evaluate, run_pipeline
from fleetmatch.config import FleetmatchParams, IOParams, dump_yaml, get_default_scenario


def test_evaluate_default_scenario():
    report = evaluate()

    assert isinstance(report, EvaluationReport)
    assert report.best.describe() == "A → T1, B → T2, C → T3"
    assert report.best.max_minutes == 90
    assert len(report.assignments.all) == 6
    assert [b.fleet.fleet_id for b in report.best_per_waste] == ["A", "A", "A"]
    assert report.max_combos == 6


def test_evaluate_is_idempotent():
    first = evaluate()
    second = evaluate()
    assert first.matrix == second.matrix
    assert [c.pairs for c in first.assignments.all] == [c.pairs for c in second.assignments.all]


def test_stop_minutes_override_scales_times():
    report = evaluate(stop_minutes=36)
    assert report.scenario.stop_minutes == 36
    assert report.matrix["A"]["T1"].minutes == 180


def test_stop_minutes_override_is_clamped():
    assert evaluate(stop_minutes=0).scenario.stop_minutes == 1


def test_max_combos_override():
    report = evaluate(max_combos=2)
    assert len(report.top_combos) == 2
    with pytest.raises(ValueError, match="max_combos"):
        evaluate(max_combos=0)


def test_evaluate_from_yaml(tmp_path):
    path = dump_yaml(FleetmatchParams(scenario=get_default_scenario()), tmp_path / "s.yaml")
    report = evaluate(config=path)
    assert report.best.max_minutes == 90


def test_evaluate_from_params_object():
    scenario = get_default_scenario()
    params = FleetmatchParams(scenario=dataclasses.replace(scenario, fleets=scenario.fleets[:2]))
    report = evaluate(config=params)
    assert report.best is None
    assert report.assignments.all == []
    assert len(report.best_per_waste) == 3


def test_scenario_override():
    scenario = dataclasses.replace(get_default_scenario(), stop_minutes=9)
    assert evaluate(scenario=scenario).matrix["B"]["T3"].minutes == 18


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        evaluate(config=tmp_path / "missing.yaml")


def test_invalid_config_file(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("waste_streams: []\n")
    with pytest.raises(ValueError, match="Error loading configuration"):
        evaluate(config=path)


def test_unknown_estimator():
    with pytest.raises(ValueError, match="Unknown performance estimator"):
        evaluate(estimator="teleport")


def test_evaluate_saves_when_output_dir_given(tmp_path):
    evaluate(output_dir=tmp_path, format="json")
    assert len(list(tmp_path.glob("evaluation_results_*.json"))) == 1


def test_run_pipeline_does_not_write(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    report = run_pipeline(get_default_scenario())
    assert report.runtime_sec >= 0
    assert list(tmp_path.iterdir()) == []


def test_save_without_output_dir_uses_configured_results_dir(tmp_path):
    params = FleetmatchParams(
        scenario=get_default_scenario(), io=IOParams(results_dir=tmp_path, format="csv")
    )
    report = evaluate(config=params, save=True)

    assert report.output_path is not None
    assert report.output_path.parent == tmp_path
    assert (report.output_path / "summary.csv").exists()


def test_output_path_unset_without_save():
    assert evaluate().output_path is None


def test_failed_save_leaves_output_path_unset(tmp_path, monkeypatch):
    def failing_save(*args, **kwargs):
        raise OSError("read-only file system")

    monkeypatch.setattr("fleetmatch.api.save_evaluation_results", failing_save)
    report = evaluate(output_dir=tmp_path)

    assert report.best is not None
    assert report.output_path is None
