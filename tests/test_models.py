"""Tests for domain models and the error taxonomy."""

import pytest
from pydantic import ValidationError

from focus_relay.backends.base import TerminalResult
from focus_relay.errors import InvalidFocusUrlError, MalformedPayloadError, NonZeroExitError, ProcessTimeoutError
from focus_relay.models import FocusResult, ReverseLinkConfig, SessionDescriptor, TerminalType, ThreadMapping


class TestSessionDescriptor:
    """Tests for SessionDescriptor."""

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            SessionDescriptor(id="1", name="a", term_type="tmux", registered_at="2026-01-01T00:00:00Z")

    def test_optional_fields_default_empty(self):
        session = SessionDescriptor(
            id="1", name="a", hostname="h", term_type="iterm-tmux", registered_at="2026-01-01T00:00:00Z"
        )
        assert session.term_target == ""
        assert session.focus_url == ""
        assert session.term_type == TerminalType.ITERM_TMUX

    def test_extra_fields_ignored(self):
        session = SessionDescriptor(
            id="1", name="", hostname="h", term_type="tmux", registered_at="2026-01-01T00:00:00Z", pid=123
        )
        assert session.label == "1"

    def test_to_dict(self):
        session = SessionDescriptor(
            id="1", name="a", hostname="h", term_type="terminal", registered_at="2026-01-01T00:00:00Z"
        )
        assert session.to_dict()["term_type"] == "terminal"


class TestThreadMapping:
    def test_session_id_alias(self):
        assert ThreadMapping(thread_ts="1.2", session_id="42").instance_id == "42"


class TestReverseLinkConfig:
    def test_port_range(self):
        with pytest.raises(ValidationError):
            ReverseLinkConfig(mac_user="me", mac_host="mac", mac_port=70000)


class TestResults:
    """Tests for result types."""

    def test_focus_result_failure(self):
        result = FocusResult.failure(ProcessTimeoutError("ssh timed out after 15s"))
        assert result.success is False
        assert result.error_kind == "ProcessTimeoutError"
        assert result.message == "ssh timed out after 15s"

    def test_terminal_result_prefix(self):
        result = TerminalResult.failure(NonZeroExitError("tmux", 1, stderr="no pane"), prefix="Failed to focus tmux")
        assert result.message == "Failed to focus tmux: no pane"

    def test_terminal_result_ok(self):
        assert TerminalResult.ok("done").message == "done"


class TestErrors:
    def test_focus_url_error_is_malformed_payload(self):
        assert issubclass(InvalidFocusUrlError, MalformedPayloadError)

    def test_nonzero_exit_falls_back_to_stdout(self):
        assert str(NonZeroExitError("ssh", 1, stdout="remote said no\n")) == "remote said no"
