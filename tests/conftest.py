"""Pytest configuration and shared fixtures for focus relay tests."""

import json
import tempfile
from pathlib import Path

import pytest

from focus_relay.services.config_service import reset_config_service


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module-level singletons between tests."""
    reset_config_service()
    yield
    reset_config_service()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for state files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def claude_dir(temp_dir):
    """A fake ~/.claude with empty instances and threads directories."""
    root = temp_dir / ".claude"
    (root / "instances").mkdir(parents=True)
    (root / "threads").mkdir()
    return root


@pytest.fixture
def write_session(claude_dir):
    """Write a session descriptor; returns the file path.

    Extra keyword arguments override the default descriptor fields.
    """

    def _write(session_id: str, **fields) -> Path:
        data = {
            "id": session_id,
            "name": f"session-{session_id}",
            "hostname": "dev-mac",
            "term_type": "tmux",
            "term_target": "claude:0.0",
            "focus_url": "claude-focus://tmux/claude%3A0.0",
            "registered_at": "2026-01-01T12:00:00Z",
        }
        data.update(fields)
        path = claude_dir / "instances" / f"{session_id}.json"
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def write_thread(claude_dir):
    """Write a Slack thread mapping; returns the file path."""

    def _write(thread_ts: str, **fields) -> Path:
        data = {"thread_ts": thread_ts}
        data.update(fields)
        path = claude_dir / "threads" / f"{thread_ts}.json"
        path.write_text(json.dumps(data))
        return path

    return _write
