# ==============================================================================
# Tests for CLI Commands
# ==============================================================================
"""
Tests for the `replay`, `config show` and `version` commands.

Event and settings files are written to tmp_path. Output is captured via
typer.testing.CliRunner; JSON mode is used wherever output is asserted on
structurally.
"""

import json

import pytest
from typer.testing import CliRunner

from amplitude_adapter.app import app
from amplitude_adapter.core.session import UNSET_SESSION_ID

runner = CliRunner()


def _write_events(path, events) -> None:
    path.write_text("\n".join(json.dumps(event) for event in events) + "\n")


@pytest.fixture()
def events_file(tmp_path):
    path = tmp_path / "events.jsonl"
    _write_events(
        path,
        [
            {"type": "track", "event": "Application Opened"},
            {"type": "identify", "userId": "u1", "traits": {"plan": "pro"}},
            {"type": "screen", "name": "Home"},
            {"type": "track", "event": "Order Completed", "properties": {"revenue": 20}},
            {"type": "track", "event": "Application Backgrounded"},
        ],
    )
    return path


@pytest.fixture()
def settings_file(tmp_path):
    path = tmp_path / "amplitude.json"
    path.write_text(json.dumps({"apiKey": "foo", "trackNamedPages": True}))
    return path


class TestReplay:
    def test_json_output(self, events_file, settings_file):
        result = runner.invoke(
            app, ["replay", str(events_file), "--settings", str(settings_file), "--json"]
        )
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        events = data["events"]
        methods = [[call["method"] for call in event["calls"]] for event in events]

        assert methods == [
            ["log_event"],
            ["set_user_id", "set_user_properties"],
            ["log_event"],
            ["log_event", "log_revenue"],
            ["log_event"],
        ]
        assert events[2]["calls"][0]["args"][0] == "Viewed Home Screen"
        assert data["flush"] == [{"method": "upload_events", "args": []}]

    def test_session_ids(self, events_file, settings_file):
        result = runner.invoke(
            app, ["replay", str(events_file), "--settings", str(settings_file), "--json"]
        )
        session_ids = [event["session_id"] for event in json.loads(result.output)["events"]]

        assert session_ids[0] != UNSET_SESSION_ID
        assert session_ids[:4] == [session_ids[0]] * 4
        assert session_ids[4] == UNSET_SESSION_ID

    def test_human_output(self, events_file, settings_file):
        result = runner.invoke(app, ["replay", str(events_file), "--settings", str(settings_file)])

        assert result.exit_code == 0
        assert "log_revenue(None, 0, 20.0, None, None)" in result.output
        assert "5 events replayed, 7 calls issued" in result.output

    def test_invalid_settings_file(self, events_file, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("[]")

        result = runner.invoke(app, ["replay", str(events_file), "--settings", str(bad)])

        assert result.exit_code == 1
        assert "Invalid settings file" in result.output

    def test_missing_events_file(self, tmp_path):
        result = runner.invoke(app, ["replay", str(tmp_path / "missing.jsonl")])
        assert result.exit_code != 0


class TestConfigShow:
    def test_json(self, settings_file):
        result = runner.invoke(app, ["config", "show", "--settings", str(settings_file), "--json"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["amplitude"]["api_key"] == "foo"
        assert data["amplitude"]["track_named_pages"] is True
        assert data["amplitude"]["traits_to_increment"] == []
        assert data["session"]["idle_timeout_ms"] == 300_000

    def test_human(self, settings_file):
        result = runner.invoke(app, ["config", "show", "--settings", str(settings_file)])
        assert result.exit_code == 0
        assert "Configuration" in result.output
        assert "Idle timeout" in result.output


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "amplitude-adapter" in result.output
        assert "pydantic-settings" in result.output

    def test_version_not_installed(self, monkeypatch):
        from importlib.metadata import PackageNotFoundError

        def _missing(name):
            raise PackageNotFoundError(name)

        monkeypatch.setattr("amplitude_adapter.app.version", _missing)
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "typer (not installed)" in result.output
