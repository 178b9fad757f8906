"""Tests for CLI commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from muse.cli import app
from muse.config import Settings

runner = CliRunner()


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point HOME at an empty temporary directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


class TestMainCommands:
    """Tests for top-level CLI behaviour."""

    def test_help(self) -> None:
        """Test that --help works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "weight" in result.output.lower()

    def test_weight_help(self) -> None:
        """Test that weight --help lists the subcommands."""
        result = runner.invoke(app, ["weight", "--help"])
        assert result.exit_code == 0
        assert "status" in result.output


class TestWeightStatus:
    """Tests for `muse weight status`."""

    def test_reports_latest_and_trend(self, sample_csv_path) -> None:
        """Status shows the latest weight and trend direction."""
        result = runner.invoke(
            app, ["weight", "status", "--source", str(sample_csv_path), "--period", "2"]
        )

        assert result.exit_code == 0
        assert "75.3kg" in result.output
        assert "trending down" in result.output

    def test_json_output(self, sample_csv_path) -> None:
        """Status --json reports weights in kg and the trend."""
        result = runner.invoke(
            app,
            ["weight", "status", "--source", str(sample_csv_path), "--period", "2", "--json"],
        )

        assert result.exit_code == 0
        response = json.loads(result.output)
        assert response["success"] is True
        assert response["data"]["latest_weight_kg"] == 75.3
        assert response["data"]["trend_weight_kg"] == 75.5
        assert response["data"]["trend"] == "down"

    def test_not_enough_data_is_not_an_error(self, sample_csv_path) -> None:
        """Too few readings for a trend still exits 0."""
        result = runner.invoke(app, ["weight", "status", "--source", str(sample_csv_path)])

        assert result.exit_code == 0
        assert "Not enough data" in result.output

    def test_missing_file(self, tmp_path) -> None:
        """A missing log file is reported as a JSON error."""
        result = runner.invoke(
            app, ["weight", "status", "--source", str(tmp_path / "missing.csv"), "--json"]
        )

        assert result.exit_code == 1
        assert json.loads(result.output)["success"] is False

    def test_invalid_file(self, tmp_path) -> None:
        """A malformed log aborts with the parse message."""
        path = tmp_path / "weight.csv"
        path.write_text("weight,timestamp\n76.05,2019-01-01T00:06:00Z\n")

        result = runner.invoke(app, ["weight", "status", "--source", str(path)])

        assert result.exit_code == 1
        assert "76.05" in result.output

    def test_unreadable_source(self, tmp_path) -> None:
        """A directory given as the log is reported, not a traceback."""
        result = runner.invoke(app, ["weight", "status", "--source", str(tmp_path), "--json"])

        assert result.exit_code == 1
        assert json.loads(result.output)["success"] is False

    def test_zero_period_rejected(self, sample_csv_path) -> None:
        """Test that --period must be at least 1."""
        result = runner.invoke(
            app, ["weight", "status", "--source", str(sample_csv_path), "--period", "0"]
        )
        assert result.exit_code != 0

    def test_uses_configured_log(self, home, sample_csv_path, tmp_path) -> None:
        """Without --source the configured log is read."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(f"data_dir: {sample_csv_path.parent}\n")

        result = runner.invoke(
            app, ["--config", str(config_path), "weight", "status", "--period", "2"]
        )

        assert result.exit_code == 0
        assert "trending down" in result.output


class TestWeightList:
    """Tests for `muse weight list`."""

    def test_json_aligns_averages(self, sample_csv_path) -> None:
        """Each average is attached to the last record of its window."""
        result = runner.invoke(
            app,
            ["weight", "list", "--source", str(sample_csv_path), "--period", "2", "--json"],
        )

        assert result.exit_code == 0
        entries = json.loads(result.output)["data"]["entries"]
        assert [e["weight_kg"] for e in entries] == [76.0, 75.7, 75.3]
        assert [e["average_kg"] for e in entries] == [None, 75.8, 75.5]

    def test_unreadable_source(self, tmp_path) -> None:
        """A directory given as the log is reported, not a traceback."""
        result = runner.invoke(app, ["weight", "list", "--source", str(tmp_path)])

        assert result.exit_code == 1
        assert "Cannot read weight log" in result.output

    def test_table(self, sample_csv_path) -> None:
        """The table lists weights and averages."""
        result = runner.invoke(
            app, ["weight", "list", "--source", str(sample_csv_path), "--period", "2"]
        )

        assert result.exit_code == 0
        assert "75.7" in result.output
        assert "75.8" in result.output


class TestWeightAdd:
    """Tests for `muse weight add`."""

    def test_creates_log(self, tmp_path) -> None:
        """Adding to a missing file creates it and its directory."""
        path = tmp_path / "data" / "weight.csv"

        result = runner.invoke(
            app,
            ["weight", "add", "76.4", "--at", "2019-01-01T00:06:00Z", "--source", str(path)],
        )

        assert result.exit_code == 0
        assert path.read_text() == "weight,timestamp\n76.4,2019-01-01T00:06:00Z\n"

    def test_older_reading_is_sorted_into_place(self, sample_csv_path) -> None:
        """An older reading is written before newer ones."""
        result = runner.invoke(
            app,
            [
                "weight", "add", "77.0",
                "--at", "2018-12-31T00:06:00Z",
                "--source", str(sample_csv_path),
            ],
        )

        assert result.exit_code == 0
        lines = sample_csv_path.read_text().splitlines()
        assert lines[1] == "77.0,2018-12-31T00:06:00Z"
        assert len(lines) == 5

    def test_invalid_weight(self, tmp_path) -> None:
        """An over-precise weight is rejected and nothing is written."""
        path = tmp_path / "weight.csv"

        result = runner.invoke(app, ["weight", "add", "76.05", "--source", str(path)])

        assert result.exit_code == 1
        assert not path.exists()

    def test_invalid_timestamp(self, tmp_path) -> None:
        """A malformed --at timestamp is rejected."""
        path = tmp_path / "weight.csv"

        result = runner.invoke(
            app,
            ["weight", "add", "76.0", "--at", "2019-01-01T00:06:00+00:00:00", "--source", str(path)],
        )

        assert result.exit_code == 1


class TestConfigCommands:
    """Tests for `muse config`."""

    def test_show_expands_default_paths(self, home, tmp_path) -> None:
        """Config show prints default paths under HOME."""
        result = runner.invoke(
            app, ["--config", str(tmp_path / "missing.yaml"), "config", "show", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["data_dir"] == str(home / ".local" / "share" / "muse")
        assert data["weight_log_path"] == str(home / ".local" / "share" / "muse" / "weight.csv")

    def test_show_reports_missing_home(self, tmp_path, monkeypatch) -> None:
        """An unset HOME is reported as an error."""
        monkeypatch.delenv("HOME", raising=False)

        result = runner.invoke(
            app, ["--config", str(tmp_path / "missing.yaml"), "config", "show", "--json"]
        )

        assert result.exit_code == 1
        assert "HOME" in json.loads(result.output)["errors"][0]

    def test_init_writes_defaults(self, home) -> None:
        """Config init writes the default settings."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        config_path = home / ".config" / "muse" / "config.yaml"
        assert Settings.from_file(config_path) == Settings()

    def test_init_refuses_to_overwrite(self, home) -> None:
        """Config init keeps an existing file without --force."""
        runner.invoke(app, ["config", "init"])

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
