"""Sessions API routes.

Read-only view of the session registry plus a synchronous focus trigger,
used by local tooling and for debugging a relay.
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from focus_relay.errors import InvalidActionError
from focus_relay.focus_url import FocusAction
from focus_relay.services.action_router import validate_action

sessions_bp = Blueprint("sessions", __name__)

logger = logging.getLogger(__name__)


def _get_registry():
    """Get the SessionRegistry from app extensions."""
    return current_app.extensions["session_registry"]


def _get_dispatcher():
    """Get the FocusDispatcher from app extensions."""
    return current_app.extensions["dispatcher"]


@sessions_bp.route("/sessions", methods=["GET"])
def list_sessions():
    """List registered sessions, newest first.

    Query params:
        hostname: Only sessions from this host.
    """
    hostname = request.args.get("hostname") or None
    sessions = _get_registry().list_sessions(hostname=hostname)
    return jsonify({"sessions": [s.to_dict() for s in sessions]})


@sessions_bp.route("/sessions/<session_id>", methods=["GET"])
def get_session(session_id: str):
    session = _get_registry().get_session(id=session_id)
    if session is None:
        return jsonify({"error": f"Session not found: {session_id}"}), 404
    return jsonify(session.to_dict())


@sessions_bp.route("/sessions/by-name/<name>", methods=["GET"])
def get_session_by_name(name: str):
    session = _get_registry().get_session(name=name)
    if session is None:
        return jsonify({"error": f"Session not found: {name}"}), 404
    return jsonify(session.to_dict())


@sessions_bp.route("/sessions/<session_id>/focus", methods=["POST"])
def focus_session(session_id: str):
    """Focus a session and submit an action's input.

    Request body:
        {"action": "focus" | "1" | "2" | "continue" | "push"}

    Returns:
        FocusResult JSON. A failed focus is still a 200; check "success".
    """
    data = request.get_json(silent=True) or {}
    action = data.get("action") or FocusAction.FOCUS.value

    try:
        validate_action(action)
    except InvalidActionError as e:
        logger.warning(f"[API] focus {session_id} REJECTED: {e}")
        return jsonify({"error": str(e)}), 400

    session = _get_registry().get_session(id=session_id)
    if session is None:
        logger.warning(f"[API] focus {session_id} FAILED: session not found")
        return jsonify({"error": f"Session not found: {session_id}"}), 404

    result = _get_dispatcher().execute(session, action)
    logger.info(f"[API] focus {session.label} ({action}): success={result.success}")
    return jsonify(result.model_dump())
