"""Slack webhook routes.

Slack expects an answer within three seconds, so every route resolves what
it can synchronously, hands the slow part (focus and input) to the
background runner, and acknowledges.

Endpoints:
- POST /slack/actions - Interactive button clicks (form-encoded payload)
- POST /slack/events  - Events API (URL verification, thread replies)
"""

import hashlib
import hmac
import json
import logging
import time
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request

from focus_relay.errors import FocusError

slack_bp = Blueprint("slack", __name__)

logger = logging.getLogger(__name__)

# Requests older than this are rejected as replays
SIGNATURE_MAX_AGE_SECONDS = 300


def _get_config():
    """Get the app config from extensions."""
    return current_app.extensions.get("config")


def _get_router():
    """Get the SlackActionRouter from app extensions."""
    return current_app.extensions.get("action_router")


def _get_runner():
    """Get the background runner from app extensions."""
    return current_app.extensions.get("runner")


def _ack():
    return "", 200


def _read_signing_secret() -> str | None:
    config = _get_config()
    if config is None:
        return None
    path = config.paths.signing_secret_path
    try:
        return path.read_text().strip() or None
    except OSError:
        return None


def verify_slack_signature(secret: str, timestamp: str, body: bytes, signature: str, now: float | None = None) -> bool:
    """Check a v0 Slack request signature.

    Args:
        secret: Slack app signing secret.
        timestamp: X-Slack-Request-Timestamp header.
        body: Raw request body.
        signature: X-Slack-Signature header.
        now: Current epoch seconds (defaults to time.time()).

    Returns:
        True if the signature matches and the timestamp is fresh.
    """
    if not timestamp or not signature:
        return False
    try:
        age = abs((now if now is not None else time.time()) - int(timestamp))
    except ValueError:
        return False
    if age > SIGNATURE_MAX_AGE_SECONDS:
        return False

    base = b"v0:" + timestamp.encode() + b":" + body
    expected = "v0=" + hmac.new(secret.encode(), base, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature)


@slack_bp.before_request
def check_signature():
    """Reject unsigned or stale requests when a signing secret is installed."""
    config = _get_config()
    if config is not None and not config.slack.verify_signatures:
        return None

    secret = _read_signing_secret()
    if secret is None:
        logger.warning("[SLACK] No signing secret configured, skipping signature check")
        return None

    ok = verify_slack_signature(
        secret,
        request.headers.get("X-Slack-Request-Timestamp", ""),
        request.get_data(cache=True),
        request.headers.get("X-Slack-Signature", ""),
    )
    if not ok:
        logger.warning(f"[SLACK] {request.path} REJECTED: invalid signature")
        return jsonify({"error": "invalid signature"}), 401
    return None


def _touch_activity() -> None:
    """Mark the relay as in use for external idle watchdogs."""
    config = _get_config()
    if config is None:
        return
    path: Path = config.paths.activity_path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    except OSError as e:
        logger.debug(f"Could not touch activity file {path}: {e}")


@slack_bp.route("/actions", methods=["POST"])
def slack_actions():
    """Handle an interactive button click.

    Request body (form-encoded):
        payload=<JSON block_actions payload>

    Each button value is "<session-id>|<action>" or
    "url:<focus-url>|<action>".

    Returns:
        Empty 200 once the payload is understood (or found unusable);
        400 only when the payload field is missing.
    """
    raw = request.form.get("payload")
    if raw is None:
        logger.warning("[SLACK] actions REJECTED: missing payload")
        return "Missing payload", 400

    _touch_activity()

    try:
        payload = json.loads(raw)
    except ValueError as e:
        logger.error(f"[SLACK] actions: malformed payload JSON: {e}")
        return _ack()
    if not isinstance(payload, dict):
        logger.error("[SLACK] actions: payload is not a JSON object")
        return _ack()

    router = _get_router()
    if router is None:
        logger.error("[SLACK] actions FAILED: action router not available")
        return _ack()

    try:
        dispatch = router.resolve_block_action(payload)
    except FocusError as e:
        logger.error(f"[SLACK] actions: {type(e).__name__}: {e}")
        return _ack()
    except Exception as e:
        logger.exception(f"[SLACK] actions: unexpected error resolving payload: {e}")
        return _ack()

    if dispatch is None:
        logger.debug(f"[SLACK] actions: ignoring payload type {payload.get('type')!r}")
        return _ack()

    logger.info(f"[SLACK] actions: {dispatch.action} -> {dispatch.label}")
    _get_runner().submit(router.dispatch, dispatch)
    return _ack()


@slack_bp.route("/events", methods=["POST"])
def slack_events():
    """Handle an Events API callback.

    Handles url_verification and message replies inside notification
    threads; everything else is acknowledged and ignored.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        logger.warning("[SLACK] events REJECTED: missing JSON body")
        return "Missing body", 400

    if data.get("type") == "url_verification":
        logger.info("[SLACK] events: url_verification")
        return jsonify({"challenge": data.get("challenge", "")})

    _touch_activity()

    retry = request.headers.get("X-Slack-Retry-Num")
    if retry:
        logger.info(f"[SLACK] events: skipping retry #{retry}")
        return _ack()

    if data.get("type") != "event_callback":
        return _ack()

    event = data.get("event")
    router = _get_router()
    if not isinstance(event, dict) or router is None:
        return _ack()

    try:
        dispatch = router.resolve_thread_reply(event)
    except FocusError as e:
        logger.error(f"[SLACK] events: {type(e).__name__}: {e}")
        return _ack()
    except Exception as e:
        logger.exception(f"[SLACK] events: unexpected error resolving payload: {e}")
        return _ack()

    if dispatch is not None:
        logger.info(f"[SLACK] events: thread reply -> {dispatch.label}")
        _get_runner().submit(router.dispatch, dispatch)
    return _ack()
