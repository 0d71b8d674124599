import csv
import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from rest_seating.cli import main

DATA_DIR = pathlib.Path(__file__).parent / "data"


def test_demo_prints_every_step(capsys):
    assert main(["--demo"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("[table 2/2, table 2/2, table 3/3")
    assert "in g0 (3)" in out
    assert "out g8" in out
    assert "[SUMMARY] tables=7 occupied=7 free_seats=2/28 waiting=2 (10 clients)" in out


def test_quiet_prints_final_state_only(capsys):
    assert main(["--demo", "--quiet"]) == 0
    out = capsys.readouterr().out
    assert "in g0" not in out
    assert out.splitlines()[1] == "[client 4, client 6]"


def test_csv_run_writes_outputs(tmp_path, capsys):
    snapshots = tmp_path / "out" / "snapshots.csv"
    report = tmp_path / "out" / "report.csv"
    code = main([
        "--tables", str(DATA_DIR / "tables.csv"),
        "--events", str(DATA_DIR / "events.csv"),
        "--quiet",
        "--out-snapshots", str(snapshots),
        "--out-report", str(report),
    ])
    assert code == 0
    capsys.readouterr()

    with snapshots.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 13
    assert rows[0]["group"] == "smith"
    assert rows[0]["table"] == "Round 1"
    assert rows[10]["event"] == "leave"
    assert rows[10]["size"] == ""
    assert " | " in rows[-1]["state"]

    with report.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["table"] for r in rows][:2] == ["Booth A", "Booth B"]
    assert rows[3]["free_seats"] == "1"
    assert rows[3]["utilisation"] == "0.7500"


def test_bad_events_exit_with_error(tmp_path, capsys):
    events = tmp_path / "events.csv"
    events.write_text("event,group,size\nleave,ghost,\n")
    code = main(["--tables", str(DATA_DIR / "tables.csv"), "--events", str(events)])
    assert code == 2
    assert "leaves before arriving" in capsys.readouterr().err


def test_tables_without_events_is_a_usage_error():
    with pytest.raises(SystemExit):
        main(["--tables", str(DATA_DIR / "tables.csv")])


def test_demo_with_events_is_a_usage_error():
    with pytest.raises(SystemExit):
        main(["--demo", "--events", str(DATA_DIR / "events.csv")])


def test_infinite_capacity_exits_with_error(tmp_path, capsys):
    tables = tmp_path / "tables.csv"
    tables.write_text("capacity\ninf\n")
    code = main(["--tables", str(tables), "--events", str(DATA_DIR / "events.csv")])
    assert code == 2
    assert "capacity is not a whole number" in capsys.readouterr().err
