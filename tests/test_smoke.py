"""Smoke tests for the end-to-end command-line flow."""

import argparse
import json

import pytest

from tzoverlap.cli import build_parser, main, parse_time


class TestCliSmoke:
    """End-to-end tests running the CLI against a temporary store."""

    @pytest.fixture
    def store_path(self, tmp_path):
        return tmp_path / "cities.json"

    @pytest.fixture
    def run(self, store_path):
        """Run the CLI on a fixed date with holidays disabled."""
        def _run(*args):
            return main([
                "--store", str(store_path),
                "--date", "2025-01-07",
                "--no-holidays",
                *args,
            ])
        return _run

    def test_grid(self, run, capsys):
        assert run("grid") == 0
        out = capsys.readouterr().out
        assert "WORKING HOURS OVERLAP - Tue, Jan 7" in out
        assert "New York" in out
        assert "Singapore" in out
        assert "this date is already over" in out

    def test_grid_writes_reports(self, run, tmp_path, capsys):
        pytest.importorskip("reportlab")
        pdf_path = tmp_path / "overlap.pdf"
        text_path = tmp_path / "overlap.txt"

        assert run("grid", "--output", str(pdf_path), "--text-output", str(text_path)) == 0
        assert pdf_path.read_bytes().startswith(b"%PDF")
        assert "BEST SLOTS" in text_path.read_text()

    def test_meeting(self, run, capsys):
        assert run("meeting", "38", "39") == 0
        out = capsys.readouterr().out
        assert "Selected Meeting (1h)" in out
        assert "2PM - 3PM" in out
        assert "7PM - 8PM" in out

    def test_meeting_bad_slot(self, run, capsys):
        assert run("meeting", "38", "48") == 1
        assert "Error:" in capsys.readouterr().err

    def test_add_hours_and_remove_persist(self, run, store_path, capsys):
        assert run("add", "tokyo") == 0
        saved = json.loads(store_path.read_text())
        assert saved[-1]["timezone"] == "Asia/Tokyo"
        assert saved[-1]["countryCode"] == "JP"

        assert run("hours", "tokyo", "22", "6:30") == 0
        saved = json.loads(store_path.read_text())
        assert (saved[-1]["workStart"], saved[-1]["workEnd"]) == (22, 6.5)

        assert run("remove", "tokyo") == 0
        saved = json.loads(store_path.read_text())
        assert "tokyo" not in [c["id"] for c in saved]

    def test_add_duplicate(self, run, capsys):
        assert run("add", "london") == 1
        assert "already tracked" in capsys.readouterr().out

    def test_add_with_name(self, run, store_path):
        assert run("add", "kolkata", "--name", "Bangalore Office") == 0
        saved = json.loads(store_path.read_text())
        assert saved[-1]["id"] == "bangalore-office"
        assert saved[-1]["timezone"] == "Asia/Kolkata"

    def test_remove_unknown(self, run):
        assert run("remove", "atlantis") == 1

    def test_move(self, run, store_path, capsys):
        assert run("move", "0", "1") == 0
        saved = json.loads(store_path.read_text())
        assert [c["id"] for c in saved[:2]] == ["london", "new-york"]

    def test_move_bad_index(self, run, capsys):
        assert run("move", "99", "0") == 1
        assert "Error:" in capsys.readouterr().err

    def test_search(self, run, capsys):
        assert run("search", "tokyo") == 0
        assert "Asia/Tokyo" in capsys.readouterr().out
        assert run("search", "qqqzzz") == 1

    def test_cities(self, run, capsys):
        assert run("cities") == 0
        out = capsys.readouterr().out
        assert "America/New_York" in out
        assert "9:00 AM - 5:00 PM" in out

    def test_options(self, run, capsys):
        assert run("options") == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 48
        assert lines[0].endswith("12:00 AM")

    def test_invalid_store(self, run, store_path, capsys):
        store_path.write_text("not json")
        assert run("cities") == 1
        assert "Error:" in capsys.readouterr().err

    def test_malformed_hours_in_store(self, run, store_path, capsys):
        store_path.write_text(json.dumps([
            {"id": "london", "name": "London", "timezone": "Europe/London",
             "countryCode": "GB", "workStart": "9", "workEnd": 17},
        ]))
        assert run("grid") == 1
        assert "Error:" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == 1


class TestParsing:
    """Tests for CLI argument parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [("9", 9.0), ("9.5", 9.5), ("9:30", 9.5), ("17:00", 17.0), ("0", 0.0)],
    )
    def test_parse_time(self, value, expected):
        assert parse_time(value) == expected

    def test_parse_time_out_of_range(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_time("24")

    @pytest.mark.parametrize("value", ["9:75", "9:60", "9:-5"])
    def test_parse_time_rejects_bad_minutes(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_time(value)

    def test_hours_command_rejects_bad_minutes(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--store", str(tmp_path / "cities.json"), "hours", "london", "9:75", "17"])
        assert exc.value.code == 2
        assert not (tmp_path / "cities.json").exists()

    def test_date_argument(self):
        args = build_parser().parse_args(["--date", "2025-12-25", "grid"])
        assert args.date.isoformat() == "2025-12-25"
        assert args.reference_tz == "UTC"
