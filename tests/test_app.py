"""Tests for the application factory."""

import json
from unittest.mock import patch

import pytest

from focus_relay.app import create_app
from focus_relay.backends.base import TerminalResult
from focus_relay.services.background import InlineRunner
from focus_relay.services.config_service import ConfigService


@pytest.fixture
def config_service(temp_dir, claude_dir):
    config_file = temp_dir / "config.yaml"
    config_file.write_text(
        f"paths:\n  claude_dir: {claude_dir}\ntmux:\n  socket_path: {temp_dir / 'tmux.sock'}\n"
    )
    return ConfigService(config_file)


@pytest.fixture
def app(config_service):
    app = create_app(config_service=config_service, runner=InlineRunner())
    app.config["TESTING"] = True
    return app


class TestCreateApp:
    """Tests for service wiring."""

    def test_services_registered(self, app):
        for name in (
            "config",
            "config_service",
            "session_registry",
            "thread_store",
            "dispatcher",
            "action_router",
            "runner",
        ):
            assert name in app.extensions

    def test_health_local(self, app):
        response = app.test_client().get("/health")

        data = response.get_json()
        assert response.status_code == 200
        assert data["status"] == "ok"
        assert data["mode"] == "local"

    def test_health_forward(self, config_service, claude_dir):
        (claude_dir / ".reverse-link").write_text(json.dumps({"mac_user": "me", "mac_host": "studio.local"}))

        app = create_app(config_service=config_service, runner=InlineRunner())

        assert app.test_client().get("/health").get_json()["mode"] == "forward"
        assert app.extensions["dispatcher"].reverse_link.mac_host == "studio.local"

    def test_blueprints_mounted(self, app):
        client = app.test_client()
        assert client.get("/api/sessions").status_code == 200
        assert client.post("/slack/actions", data={}).status_code == 400


class TestEndToEnd:
    """Slack click through to the tmux adapter."""

    def test_unknown_session_invokes_no_adapter(self, app):
        tmux = app.extensions["tmux_adapter"]
        with patch.object(tmux, "focus") as mock_focus, patch.object(tmux, "send_input") as mock_input:
            payload = {"type": "block_actions", "actions": [{"value": "abc123|continue"}]}
            response = app.test_client().post("/slack/actions", data={"payload": json.dumps(payload)})

        assert response.status_code == 200
        mock_focus.assert_not_called()
        mock_input.assert_not_called()

    def test_registered_tmux_session(self, app, write_session):
        write_session("abc123", focus_url="claude-focus://tmux/main%3A0.0")
        tmux = app.extensions["tmux_adapter"]
        with (
            patch.object(tmux, "focus", return_value=TerminalResult.ok("Focused")) as mock_focus,
            patch.object(tmux, "send_input", return_value=TerminalResult.ok("Sent")) as mock_input,
        ):
            payload = {"type": "block_actions", "actions": [{"value": "abc123|continue"}]}
            response = app.test_client().post("/slack/actions", data={"payload": json.dumps(payload)})

        assert response.status_code == 200
        mock_focus.assert_called_once_with("main:0.0")
        mock_input.assert_called_once_with("main:0.0", "Continue")
