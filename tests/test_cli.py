import io
import json
from pathlib import Path

import pytest

from sjf_cli.cli import EXIT_INVALID_INPUT, build_parser, main


def _write_workload(tmp_path: Path, data) -> Path:
    p = tmp_path / "w.json"
    p.write_text(json.dumps(data))
    return p


def _workload():
    return [
        {"pid": "P1", "arrival_time": 0, "burst_time": 3},
        {"pid": "P2", "arrival_time": 10, "burst_time": 2},
    ]


def test_run_json(tmp_path: Path, capsys):
    path = _write_workload(tmp_path, _workload())
    assert main(["run", "-w", str(path), "--format", "json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [s["id"] for s in out["timeline"]] == ["P1", "IDLE", "P2"]
    assert out["cpuUtilization"] == pytest.approx(41.6666, rel=1e-4)


def test_run_text(tmp_path: Path, capsys):
    path = _write_workload(tmp_path, _workload())
    assert main(["run", "-w", str(path), "-f", "text"]) == 0
    out = capsys.readouterr().out
    assert "| P1 (0 -> 3) | IDLE (3 -> 10) | P2 (10 -> 12) |" in out
    assert "Average Waiting Time: 0.00" in out
    assert "Average Turnaround Time: 2.50" in out
    assert "CPU Utilization: 41.67%" in out


def test_run_table(tmp_path: Path, capsys):
    path = _write_workload(tmp_path, _workload())
    assert main(["run", "-w", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Per-process metrics" in out
    assert "41.67%" in out


def test_run_from_stdin(monkeypatch, capsys):
    payload = json.dumps({"processes": [{"pid": "P1", "arrival": 0, "burst": 5}]})
    monkeypatch.setattr("sys.stdin", io.StringIO(payload))
    assert main(["run", "-w", "-", "-f", "json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["timeline"] == [{"id": "P1", "start": 0, "end": 5}]
    assert out["cpuUtilization"] == 100


def test_invalid_input_prints_only_the_error(tmp_path: Path, capsys):
    path = _write_workload(tmp_path, [{"pid": "P1", "arrival_time": 0, "burst_time": 0}])
    assert main(["run", "-w", str(path), "-f", "json"]) == EXIT_INVALID_INPUT
    out = json.loads(capsys.readouterr().out)
    assert out["reason"] == "non_positive_burst"
    assert "timeline" not in out
    assert "details" not in out


def test_empty_workload_in_table_mode(tmp_path: Path, capsys):
    path = _write_workload(tmp_path, [])
    assert main(["run", "-w", str(path)]) == EXIT_INVALID_INPUT
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "At least one process is required" in captured.err


def test_missing_file(tmp_path: Path, capsys):
    assert main(["run", "-w", str(tmp_path / "missing.json")]) == EXIT_INVALID_INPUT
    assert capsys.readouterr().out == ""


def test_step_animation(tmp_path: Path, capsys):
    path = _write_workload(tmp_path, _workload())
    assert main(["run", "-w", str(path), "--step", "--step-delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "t= 4: IDLE" in out
    assert "t=12: done" in out


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_table_shows_ids_with_brackets_verbatim(tmp_path: Path, capsys):
    path = _write_workload(
        tmp_path,
        [{"pid": "[/x]", "arrival": 0, "burst": 2}, {"pid": "[bold]P2", "arrival": 0, "burst": 3}],
    )
    assert main(["run", "-w", str(path)]) == 0
    out = capsys.readouterr().out
    assert "[/x]" in out
    assert "[bold]P2" in out


def test_reserved_idle_id_is_rejected(tmp_path: Path, capsys):
    path = _write_workload(tmp_path, [{"pid": "IDLE", "arrival": 0, "burst": 3}])
    assert main(["run", "-w", str(path), "-f", "json"]) == EXIT_INVALID_INPUT
    assert json.loads(capsys.readouterr().out)["reason"] == "invalid_id"


def test_long_schedule_chart_fits_the_terminal(tmp_path: Path, capsys):
    path = _write_workload(tmp_path, [{"pid": "P1", "arrival": 0, "burst": 1_000_000_000}])
    assert main(["run", "-w", str(path)]) == 0
    out = capsys.readouterr().out
    assert "1000000000" in out
    assert max(len(line) for line in out.splitlines()) <= 120
