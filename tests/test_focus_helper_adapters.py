"""Tests for focus-helper and the iTerm2 / Terminal.app adapters."""

from unittest.mock import patch

import pytest

from focus_relay.backends.focus_helper import FocusHelper
from focus_relay.backends.iterm import ITerm2Adapter
from focus_relay.backends.process import CommandOutput
from focus_relay.backends.terminal_app import TerminalAppAdapter
from focus_relay.errors import NonZeroExitError, ProcessTimeoutError, SpawnFailureError


@pytest.fixture
def helper_path(temp_dir):
    path = temp_dir / "focus-helper"
    path.write_text("#!/bin/sh\n")
    return path


@pytest.fixture
def helper(helper_path):
    return FocusHelper(helper_path, timeout=7)


@pytest.fixture
def mock_run():
    with patch("focus_relay.backends.focus_helper.run_command") as mock:
        mock.return_value = CommandOutput(0, "", "")
        yield mock


class TestFocusHelper:
    """Tests for running the helper executable."""

    def test_runs_with_url(self, helper, helper_path, mock_run):
        result = helper.run("claude-focus://iterm2/abc")

        assert result.success is True
        assert result.details == "focus-helper completed"
        mock_run.assert_called_once_with([str(helper_path), "claude-focus://iterm2/abc"], timeout=7)

    def test_reports_stdout(self, helper, mock_run):
        mock_run.return_value = CommandOutput(0, "Focused iTerm2 session\n", "")
        assert helper.run("claude-focus://iterm2/abc").details == "Focused iTerm2 session"

    @pytest.mark.parametrize(
        "error",
        [
            NonZeroExitError("focus-helper", 2, stderr="Session not found"),
            ProcessTimeoutError("focus-helper timed out after 7s"),
            SpawnFailureError("Failed to spawn focus-helper: permission denied"),
        ],
    )
    def test_failures_become_results(self, helper, mock_run, error):
        """Process errors are reported, never raised."""
        mock_run.side_effect = error

        result = helper.run("claude-focus://iterm2/abc")

        assert result.success is False
        assert result.error == str(error)
        assert result.error_kind == type(error).__name__

    def test_missing_helper(self, temp_dir, mock_run):
        result = FocusHelper(temp_dir / "nope").run("claude-focus://iterm2/abc")

        assert result.success is False
        assert result.error_kind == "AdapterUnavailableError"
        mock_run.assert_not_called()


class TestITerm2Adapter:
    """Tests for the iTerm2 adapter."""

    def test_backend_name(self, helper):
        assert ITerm2Adapter(helper).backend_name == "iterm2"

    def test_focus_builds_url(self, helper, helper_path, mock_run):
        result = ITerm2Adapter(helper).focus("w0t0p0:6C3F")

        assert result.success is True
        assert mock_run.call_args.args[0] == [str(helper_path), "claude-focus://iterm2/w0t0p0%3A6C3F"]

    def test_send_input_carries_text(self, helper, helper_path, mock_run):
        ITerm2Adapter(helper).send_input("abc", "Continue")

        assert mock_run.call_args.args[0] == [str(helper_path), "claude-focus://iterm2/abc?text=Continue"]

    def test_deliver_passes_url_verbatim(self, helper, helper_path, mock_run):
        url = "claude-focus://iterm-tmux/dev/ttys001/main:0.0?action=push"

        ITerm2Adapter(helper).deliver(url)

        assert mock_run.call_args.args[0] == [str(helper_path), url]

    def test_unavailable_without_helper(self, temp_dir, mock_run):
        adapter = ITerm2Adapter(FocusHelper(temp_dir / "nope"))

        result = adapter.focus("abc")

        assert adapter.is_available() is False
        assert result.success is False
        assert result.error == (
            "focus-helper not available - iTerm2 focus requires macOS with focus-helper installed"
        )
        mock_run.assert_not_called()


class TestTerminalAppAdapter:
    """Tests for the Terminal.app adapter."""

    def test_backend_name(self, helper):
        assert TerminalAppAdapter(helper).backend_name == "terminal"

    def test_focus_tty(self, helper, helper_path, mock_run):
        TerminalAppAdapter(helper).focus("/dev/ttys000")

        assert mock_run.call_args.args[0] == [str(helper_path), "claude-focus://terminal/%2Fdev%2Fttys000"]

    def test_focus_frontmost(self, helper, helper_path, mock_run):
        TerminalAppAdapter(helper).focus("frontmost")

        assert mock_run.call_args.args[0] == [str(helper_path), "claude-focus://terminal/frontmost"]

    def test_input_unavailable_without_helper(self, temp_dir, mock_run):
        result = TerminalAppAdapter(FocusHelper(temp_dir / "nope")).send_input("frontmost", "1")

        assert result.success is False
        assert "Terminal.app input requires macOS" in result.error
        mock_run.assert_not_called()
