"""
Integration tests for the fieldreport CLI.

Each test points the app at a temporary data directory and disables the
mirror, so nothing leaves the machine.
"""

import pytest
from typer.testing import CliRunner

from fieldreport.presentation.cli.app import app

pytestmark = pytest.mark.integration

runner = CliRunner()

AUTH = ["--username", "user", "--password", "user"]


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    monkeypatch.setenv("FIELDREPORT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FIELDREPORT_MIRROR_ENABLED", "false")
    monkeypatch.setenv("FIELDREPORT_PASSWORD_HASH_ROUNDS", "4")
    monkeypatch.setenv("FIELDREPORT_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.delenv("FIELDREPORT_DATABASE_URL", raising=False)
    monkeypatch.delenv("FIELDREPORT_USERNAME", raising=False)
    monkeypatch.delenv("FIELDREPORT_PASSWORD", raising=False)


def _create(title="Light outage", description="Hall light is out on the second floor"):
    return runner.invoke(
        app,
        ["incident", "create", "--title", title, "--description", description, *AUTH],
    )


class TestCliBasics:
    """Test database setup and accounts."""

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])

        assert "incident" in result.output

    def test_db_init(self, tmp_path):
        result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 0
        assert "Database ready" in result.output
        assert (tmp_path / "data" / "fieldreport.db").exists()

    def test_register_and_duplicate(self):
        ok = runner.invoke(
            app,
            ["user", "register", "alice", "--password", "secret1", "--full-name", "Alice A"],
        )
        again = runner.invoke(app, ["user", "register", "alice", "--password", "secret1"])

        assert ok.exit_code == 0
        assert "User registered successfully" in ok.output
        assert again.exit_code == 1
        assert "Username already in use" in again.output

    def test_wrong_password(self):
        result = runner.invoke(
            app,
            ["incident", "list", "--username", "user", "--password", "nope"],
        )

        assert result.exit_code == 1
        assert "Invalid username or password" in result.output


class TestCliIncidents:
    """Test incident commands."""

    def test_create_offline_and_list(self):
        created = _create()
        listed = runner.invoke(app, ["incident", "list", *AUTH])

        assert created.exit_code == 0
        assert "Incident saved" in created.output
        assert listed.exit_code == 0
        assert "Light outage" in listed.output

    def test_create_validation_error(self):
        result = _create(title="abc")

        assert result.exit_code == 1
        assert "Title must be at least 5 characters" in result.output

    def test_list_empty(self):
        result = runner.invoke(app, ["incident", "list", *AUTH])

        assert result.exit_code == 0
        assert "No incidents yet" in result.output

    def test_status_and_show(self):
        _create()

        changed = runner.invoke(app, ["incident", "status", "1", "Resolved", *AUTH])
        shown = runner.invoke(app, ["incident", "show", "1", *AUTH])

        assert changed.exit_code == 0
        assert "Changes saved" in changed.output
        assert "Resolved" in shown.output

    def test_share(self):
        _create()

        result = runner.invoke(app, ["incident", "show", "1", "--share", *AUTH])

        assert result.exit_code == 0
        assert "Incident: Light outage" in result.output

    def test_delete(self):
        _create()

        deleted = runner.invoke(app, ["incident", "delete", "1", "--yes", *AUTH])
        missing = runner.invoke(app, ["incident", "show", "1", *AUTH])

        assert deleted.exit_code == 0
        assert "Incident deleted" in deleted.output
        assert missing.exit_code == 1
        assert "Incident not found" in missing.output


class TestCliSyncAndStats:
    """Test sync and stats while the mirror is disabled."""

    def test_sync_offline(self):
        _create()

        result = runner.invoke(app, ["sync", *AUTH])

        assert result.exit_code == 1
        assert "No internet connection" in result.output

    def test_stats(self):
        _create()
        _create(title="Server down", description="Mail server is not answering")

        result = runner.invoke(app, ["stats", *AUTH])

        assert result.exit_code == 0
        assert "Welcome, Default user" in result.output
        assert "offline" in result.output

    def test_remote_list_offline(self):
        result = runner.invoke(app, ["remote", "list"])

        assert result.exit_code == 0
        assert "Remote endpoint returned nothing" in result.output
