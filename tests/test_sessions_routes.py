"""Tests for the sessions API routes."""

from unittest.mock import MagicMock

import pytest
from flask import Flask

from focus_relay.models.result import FocusResult
from focus_relay.routes.sessions import sessions_bp
from focus_relay.services.session_registry import SessionRegistry


@pytest.fixture
def dispatcher():
    mock = MagicMock()
    mock.execute.return_value = FocusResult(success=True, message="Focused tmux target main:0.0")
    return mock


@pytest.fixture
def app(claude_dir, dispatcher):
    """Create a test Flask application."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.extensions["session_registry"] = SessionRegistry(claude_dir / "instances")
    app.extensions["dispatcher"] = dispatcher
    app.register_blueprint(sessions_bp, url_prefix="/api")
    return app


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


class TestListSessions:
    """Tests for GET /api/sessions."""

    def test_empty(self, client):
        response = client.get("/api/sessions")

        assert response.status_code == 200
        assert response.get_json() == {"sessions": []}

    def test_lists_newest_first(self, client, write_session):
        write_session("1", registered_at="2026-01-01T10:00:00Z")
        write_session("2", registered_at="2026-01-01T11:00:00Z")

        sessions = client.get("/api/sessions").get_json()["sessions"]

        assert [s["id"] for s in sessions] == ["2", "1"]
        assert sessions[0]["term_type"] == "tmux"
        assert sessions[0]["registered_at"] == "2026-01-01T11:00:00+00:00"

    def test_hostname_filter(self, client, write_session):
        write_session("1", hostname="a")
        write_session("2", hostname="b")

        sessions = client.get("/api/sessions?hostname=b").get_json()["sessions"]

        assert [s["id"] for s in sessions] == ["2"]


class TestGetSession:
    """Tests for single-session lookups."""

    def test_by_id(self, client, write_session):
        write_session("42", name="api")

        response = client.get("/api/sessions/42")

        assert response.status_code == 200
        assert response.get_json()["name"] == "api"

    def test_by_id_missing(self, client):
        assert client.get("/api/sessions/42").status_code == 404

    def test_by_name(self, client, write_session):
        write_session("42", name="api")

        response = client.get("/api/sessions/by-name/api")

        assert response.status_code == 200
        assert response.get_json()["id"] == "42"

    def test_by_name_missing(self, client):
        assert client.get("/api/sessions/by-name/api").status_code == 404


class TestFocusSession:
    """Tests for POST /api/sessions/<id>/focus."""

    def test_focus(self, client, write_session, dispatcher):
        write_session("42")

        response = client.post("/api/sessions/42/focus", json={"action": "push"})

        assert response.status_code == 200
        assert response.get_json() == {
            "success": True,
            "message": "Focused tmux target main:0.0",
            "error_kind": None,
        }
        session, action = dispatcher.execute.call_args.args
        assert session.id == "42"
        assert action == "push"

    def test_default_action_is_focus(self, client, write_session, dispatcher):
        write_session("42")

        client.post("/api/sessions/42/focus")

        assert dispatcher.execute.call_args.args[1] == "focus"

    def test_invalid_action(self, client, write_session, dispatcher):
        write_session("42")

        response = client.post("/api/sessions/42/focus", json={"action": "3"})

        assert response.status_code == 400
        dispatcher.execute.assert_not_called()

    def test_missing_session(self, client, dispatcher):
        response = client.post("/api/sessions/42/focus", json={"action": "focus"})

        assert response.status_code == 404
        dispatcher.execute.assert_not_called()

    def test_failed_focus_is_200(self, client, write_session, dispatcher):
        write_session("42")
        dispatcher.execute.return_value = FocusResult(
            success=False, message="Tmux socket not found at /tmp/x", error_kind="AdapterUnavailableError"
        )

        response = client.post("/api/sessions/42/focus", json={"action": "focus"})

        assert response.status_code == 200
        assert response.get_json()["success"] is False
