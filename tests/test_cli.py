import json
from pathlib import Path

import pytest

from sched_sim import cli


@pytest.fixture
def workload(tmp_path: Path) -> Path:
    p = tmp_path / "w.json"
    p.write_text(
        json.dumps(
            [
                {"arrival_time": 0, "burst_time": 5, "priority": 2},
                {"arrival_time": 1, "burst_time": 3, "priority": 1},
                {"arrival_time": 2, "burst_time": 1, "priority": 3},
            ]
        )
    )
    return p


def test_run_prints_report(workload, capsys):
    assert cli.main(["run", "-a", "fcfs", "-w", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "Gantt Chart: P1 P1 P1 P1 P1 P2 P2 P2 P3" in out
    assert "100.0%" in out


def test_run_rr_needs_quantum(workload, capsys):
    assert cli.main(["run", "-a", "rr", "-w", str(workload)]) == cli.EXIT_ERROR
    assert "positive quantum" in capsys.readouterr().out


def test_run_missing_workload(tmp_path, capsys):
    assert cli.main(["run", "-a", "srtf", "-w", str(tmp_path / "nope.json")]) == cli.EXIT_ERROR


def test_run_step_replays_without_changing_result(workload, capsys, monkeypatch):
    sleeps = []
    monkeypatch.setattr(cli.time, "sleep", sleeps.append)
    assert cli.main(["run", "-a", "rr", "-q", "2", "-w", str(workload), "--step", "--step-delay", "0.5"]) == 0
    out = capsys.readouterr().out
    assert "Process 1 executing for 2 unit(s)" in out
    assert sum(sleeps) == pytest.approx(0.5 * 9)


def test_compare(workload, capsys):
    assert cli.main(["compare", "-w", str(workload), "-q", "2"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    for name in ("FCFS", "SRTF"):
        assert name in out


def test_interactive_runs_all_four(monkeypatch, capsys):
    answers = iter(["3", "0", "5", "2", "1", "3", "1", "2", "1", "3", "0", "2"])
    monkeypatch.setattr("builtins.input", lambda message="": next(answers))
    assert cli.main(["interactive"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart: P1 P2 P3 P2 P2 P1 P1 P1 P1" in out
    assert "Gantt Chart: P1 P2 P2 P2 P1 P1 P1 P1 P3" in out
    assert "Gantt Chart: P1 P1 P2 P2 P3 P1 P1 P2 P1" in out


def test_interactive_input_ends_early(monkeypatch, capsys):
    def eof(message=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    assert cli.main(["interactive"]) == cli.EXIT_ERROR


def test_unknown_algorithm_rejected_by_parser(workload):
    with pytest.raises(SystemExit):
        cli.main(["run", "-a", "sjf", "-w", str(workload)])


def test_run_undecodable_workload(tmp_path, capsys):
    p = tmp_path / "w.json"
    p.write_bytes(b"\xff")
    assert cli.main(["run", "-a", "fcfs", "-w", str(p)]) == cli.EXIT_ERROR
    assert "Invalid JSON" in capsys.readouterr().out


@pytest.mark.parametrize("command", ["run", "interactive"])
def test_negative_step_delay_rejected(workload, command):
    argv = [command, "--step", "--step-delay", "-1"]
    if command == "run":
        argv += ["-a", "fcfs", "-w", str(workload)]
    with pytest.raises(SystemExit):
        cli.main(argv)


def test_non_negative_float():
    assert cli.non_negative_float("0") == 0.0
    assert cli.non_negative_float("0.25") == 0.25
