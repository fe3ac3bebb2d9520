"""
Tests for the Typer CLI.
"""

import json

import pytest
from typer.testing import CliRunner

from weekslots.cli.app import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(f"database: {tmp_path / 'events.sqlite'}\n", encoding="utf-8")
    return path


def test_mock_json_output():
    result = runner.invoke(app, ["availabilities", "2014-08-10", "--mock", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert list(data.keys())[0] == "2014-08-10"
    assert data["2014-08-11"] == ["9:30", "10:00", "11:30", "12:00"]


def test_mock_table_output():
    result = runner.invoke(app, ["availabilities", "2014-08-10", "--mock"])

    assert result.exit_code == 0
    assert "2014-08-11" in result.stdout


def test_invalid_date_exits_with_error():
    result = runner.invoke(app, ["availabilities", "not-a-date", "--mock"])

    assert result.exit_code == 1


def test_add_events_then_query(config_file):
    commands = [
        ["migrate", "--config", str(config_file)],
        ["add-event", "opening", "2014-08-11 09:00", "2014-08-11 11:00", "--config", str(config_file)],
        ["add-event", "appointment", "2014-08-11 09:30", "2014-08-11 10:00", "--config", str(config_file)],
    ]
    for command in commands:
        assert runner.invoke(app, command).exit_code == 0

    result = runner.invoke(
        app, ["availabilities", "2014-08-10", "--json", "--config", str(config_file)]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["2014-08-11"] == ["9:00", "10:00", "10:30"]


def test_add_event_rejects_bad_timestamp(config_file):
    result = runner.invoke(
        app, ["add-event", "opening", "tomorrow", "2014-08-11 11:00", "--config", str(config_file)]
    )

    assert result.exit_code == 1


def test_missing_config_file_exits(tmp_path):
    result = runner.invoke(
        app, ["availabilities", "2014-08-10", "--config", str(tmp_path / "missing.yaml")]
    )

    assert result.exit_code == 1


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.stdout
