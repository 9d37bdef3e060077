import dataclasses
import json
import logging

import pytest

from orbit_demo import analysis
from orbit_demo.app import main, run_headless
from orbit_demo.core.config import PhysicsCfg
from orbit_demo.core.controller import SimulationController
from orbit_demo.core.logging_utils import CONSOLE_HANDLER_NAME, RunLogger, setup_logging


def test_physics_cfg_validation() -> None:
    assert PhysicsCfg().mu == pytest.approx(6.67430e-11 * 5.972e24)
    with pytest.raises(ValueError):
        PhysicsCfg(dt=0.0)
    with pytest.raises(ValueError):
        PhysicsCfg(steps_per_frame=0)
    with pytest.raises(ValueError):
        PhysicsCfg(trail_length=0)
    with pytest.raises(ValueError):
        PhysicsCfg(min_satellites=-1)


def test_setup_logging_adds_a_single_console_handler() -> None:
    logger = setup_logging("debug")
    setup_logging("debug")
    assert logger.level == logging.DEBUG
    names = [h.get_name() for h in logger.handlers]
    assert names.count(CONSOLE_HANDLER_NAME) == 1
    setup_logging("info")


def test_run_logger_creates_unique_run_directories(tmp_path) -> None:
    with RunLogger(tmp_path, run_id="demo") as first:
        pass
    with RunLogger(tmp_path, run_id="demo") as second:
        pass
    assert first.run_dir.name == "demo"
    assert second.run_dir.name == "demo_01"
    assert (tmp_path / "last_run.txt").read_text(encoding="utf-8") == "demo_01"
    assert first.timeseries_path.read_text().splitlines() == [",".join(RunLogger.TIMESERIES_HEADER)]


def test_event_details_survive_csv_round_trip(tmp_path) -> None:
    with RunLogger(tmp_path, run_id="events") as run_logger:
        run_logger.record_event("prune", {"label": 2, "distance": 1.5e7, "count": 2})
    events = analysis.load_events(run_logger.events_path)
    assert events == [
        {
            "t": 0.0,
            "type": "prune",
            "sat": 2,
            "r": 1.5e7,
            "details": {"count": 2, "distance": 1.5e7, "label": 2},
        }
    ]


def test_headless_run_records_snapshots_and_events(tmp_path) -> None:
    snapshot = run_headless(5, log_dir=tmp_path)
    assert snapshot.frame == 5
    assert snapshot.time == pytest.approx(500.0)
    assert [s.label for s in snapshot.satellites] == [1, 3]

    run_dir = tmp_path / (tmp_path / "last_run.txt").read_text(encoding="utf-8")
    ts = analysis.load_timeseries(run_dir / "timeseries.csv")
    # Three satellites at reset, then two per frame.
    assert ts["t"].size == 3 + 5 * 2
    assert ts["t"][-1] == pytest.approx(500.0)

    events = analysis.load_events(run_dir / "events.csv")
    assert [event["type"] for event in events] == ["reset", "start", "prune"]
    assert events[2]["sat"] == 2

    meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
    assert meta["dt"] == 10.0
    assert meta["steps_per_frame"] == 10
    assert len(meta["initial"]) == 3


def test_headless_run_stops_at_first_non_finite_frame(monkeypatch, tmp_path) -> None:
    real_step = SimulationController.step
    calls = []

    def step_to_nan(self):
        snapshot = real_step(self)
        calls.append(snapshot.frame)
        if len(calls) < 2:
            return snapshot
        sats = tuple(
            dataclasses.replace(sat, position=(float("nan"), float("nan")))
            for sat in snapshot.satellites
        )
        return dataclasses.replace(snapshot, satellites=sats)

    monkeypatch.setattr(SimulationController, "step", step_to_nan)
    snapshot = run_headless(10, log_dir=tmp_path)

    assert calls == [1, 2]
    assert snapshot.frame == 2
    run_dir = tmp_path / (tmp_path / "last_run.txt").read_text(encoding="utf-8")
    ts = analysis.load_timeseries(run_dir / "timeseries.csv")
    assert ts["t"].size == 3 + 2 * 2


def test_analysis_summarizes_and_plots_last_run(tmp_path, capsys) -> None:
    run_headless(20, log_dir=tmp_path)
    assert analysis.main(["--runs-dir", str(tmp_path)]) == 0

    run_dir = tmp_path / (tmp_path / "last_run.txt").read_text(encoding="utf-8")
    for name in ("orbit_xy.png", "energy.png", "radius.png"):
        assert (run_dir / "figs" / name).exists()

    out = capsys.readouterr().out
    assert "Satellite 1" in out
    assert "prune: 1" in out

    groups = analysis.split_by_satellite(analysis.load_timeseries(run_dir / "timeseries.csv"))
    summary = analysis.summarize_satellites(groups)
    assert summary[2]["samples"] == 1
    assert abs(summary[1]["energy_drift"]) < 1e-6
    assert abs(summary[3]["h_drift"]) < 1e-6


def test_analysis_reports_missing_run(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        analysis.main(["--runs-dir", str(tmp_path)])
    assert excinfo.value.code == 2


def test_cli_headless_entry_point(tmp_path) -> None:
    assert main(["--headless", "--frames", "3", "--log-run", str(tmp_path)]) == 0
    assert (tmp_path / "last_run.txt").exists()
    with pytest.raises(SystemExit):
        main(["--headless", "--frames", "-1"])
