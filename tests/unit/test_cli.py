"""
Unit Tests for the notekeeper CLI.

Tests the click entry point with a NoteSession backed by the in-memory store.
"""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from notekeeper.cli import _build_session, main, run_tui
from notekeeper.session.session import NoteSession
from notekeeper.session.state import SessionOptions


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep CLI runs from reconfiguring global logging."""
    with patch("notekeeper.cli.setup_logging") as mock_setup:
        yield mock_setup


class TestMainOptions:
    """Tests for option handling."""

    def test_help_displays_usage(self, runner) -> None:
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--service" in result.output
        assert "--search" in result.output

    def test_invalid_service_rejected(self, runner) -> None:
        result = runner.invoke(main, ["--service", "serve"])
        assert result.exit_code != 0

    def test_debug_flag_sets_debug_logging(self, runner, quiet_logging) -> None:
        runner.invoke(main, ["--service", "config", "--debug"])
        quiet_logging.assert_called_once_with(level="DEBUG", enable_console=True)

    def test_verbose_flag_sets_info_logging(self, runner, quiet_logging) -> None:
        runner.invoke(main, ["--service", "config", "-v"])
        quiet_logging.assert_called_once_with(level="INFO", enable_console=True)

    def test_tui_disables_console_logging(self, runner, quiet_logging) -> None:
        with patch("notekeeper.cli.run_tui") as mock_run:
            result = runner.invoke(main, [])
        assert result.exit_code == 0
        mock_run.assert_called_once()
        quiet_logging.assert_called_once_with(level="WARNING", enable_console=False)


class TestConfigService:
    def test_shows_effective_configuration(self, runner) -> None:
        result = runner.invoke(main, ["--service", "config"])
        assert result.exit_code == 0
        assert "http://127.0.0.1:8000/api" in result.output
        assert "Close on mutation failure: True" in result.output


class TestListService:
    """Tests for --service list."""

    def _invoke(self, runner, store, *args):
        session = NoteSession(store)
        with patch("notekeeper.cli._build_session", return_value=session) as mock_build:
            result = runner.invoke(main, ["--service", "list", *args])
        return result, mock_build

    def test_lists_notes_with_previews(self, runner, fake_store) -> None:
        result, mock_build = self._invoke(runner, fake_store)

        assert result.exit_code == 0
        assert "[1] Groceries" in result.output
        assert "    milk, eggs" in result.output
        assert "[3] Ideas" in result.output
        assert fake_store.closed
        mock_build.assert_called_once_with(None, frontend_id="cli")

    def test_search_filters_listing(self, runner, fake_store) -> None:
        result, _ = self._invoke(runner, fake_store, "--search", "plumber")
        assert "[2] Todo" in result.output
        assert "Groceries" not in result.output

    def test_no_match_message(self, runner, fake_store) -> None:
        result, _ = self._invoke(runner, fake_store, "--search", "bread")
        assert result.exit_code == 0
        assert "No notes found for search." in result.output

    def test_empty_store_message(self, runner, empty_store) -> None:
        result, _ = self._invoke(runner, empty_store)
        assert "No notes yet. Start by adding one!" in result.output

    def test_store_failure_exits_non_zero(self, runner, fake_store) -> None:
        fake_store.fail("list")
        result, _ = self._invoke(runner, fake_store)
        assert result.exit_code == 1
        assert "Failed to load notes." in result.output
        assert fake_store.closed

    def test_api_base_passed_through(self, runner, empty_store) -> None:
        _, mock_build = self._invoke(runner, empty_store, "--api-base", "http://other:9000/api")
        mock_build.assert_called_once_with("http://other:9000/api", frontend_id="cli")


class TestBuildSession:
    def test_options_from_config(self) -> None:
        session = _build_session("http://notes.test/api", frontend_id="cli")
        assert session.options == SessionOptions()
        assert session.store.base_url == "http://notes.test/api"
        assert session.store.frontend_id == "cli"


class TestRunTui:
    def test_app_owns_store_shutdown(self, fake_store) -> None:
        """run_tui only runs the app; the app closes the store in its own loop."""
        session = NoteSession(fake_store)
        fake_store.base_url = "http://notes.test/api"
        with patch("notekeeper.cli._build_session", return_value=session), \
             patch("notekeeper.tui.app.NotekeeperApp") as mock_app:
            run_tui(MagicMock(), None)

        mock_app.assert_called_once_with(session)
        mock_app.return_value.run.assert_called_once_with()
        assert not fake_store.closed
