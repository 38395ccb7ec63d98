"""SlackActionRouter - turns Slack callbacks into focus requests.

Button values have the form ``<selector>|<action>``. The selector is either
a session id known to the local registry, or ``url:<focus-url>`` for
sessions registered on another host. Thread replies are mapped to a
session through the thread store and delivered as literal text.
"""

import html
import logging
from dataclasses import dataclass

import requests

from focus_relay.errors import InvalidActionError, MalformedPayloadError, SessionNotFoundError
from focus_relay.focus_url import DIRECT_URL_PREFIX, VALID_ACTIONS, with_text
from focus_relay.models.result import FocusResult
from focus_relay.models.session import SessionDescriptor
from focus_relay.services.dispatcher import FocusDispatcher
from focus_relay.services.session_registry import SessionRegistry
from focus_relay.services.thread_store import ThreadStore

logger = logging.getLogger(__name__)

BLOCK_ACTIONS = "block_actions"
RESPONSE_URL_TIMEOUT = 5


@dataclass
class ActionValue:
    """A button value split into selector and action."""

    selector: str
    action: str

    @property
    def direct_url(self) -> str | None:
        """The focus URL for "url:" selectors, else None."""
        if self.selector.startswith(DIRECT_URL_PREFIX):
            return self.selector[len(DIRECT_URL_PREFIX):]
        return None


@dataclass
class DispatchRequest:
    """A resolved request ready for the dispatcher."""

    target: str | SessionDescriptor
    action: str | None
    label: str
    response_url: str | None = None


def parse_action_value(value: str) -> ActionValue:
    """Split a button value on its last pipe.

    The selector may itself contain pipes (inside a direct URL), the action
    never does.

    Raises:
        MalformedPayloadError: Not a string, no pipe, or an empty half.
    """
    if not isinstance(value, str):
        raise MalformedPayloadError(f"Action value must be a string, got {type(value).__name__}")
    selector, sep, action = value.rpartition("|")
    if not sep or not selector or not action:
        raise MalformedPayloadError(f"Invalid action value format: {value!r}")
    return ActionValue(selector=selector, action=action)


def validate_action(action: str) -> str:
    """Raises InvalidActionError for anything outside the action set."""
    if action not in VALID_ACTIONS:
        raise InvalidActionError(action)
    return action


class SlackActionRouter:
    """Resolves Slack payloads and dispatches them."""

    def __init__(
        self,
        registry: SessionRegistry,
        dispatcher: FocusDispatcher,
        thread_store: ThreadStore | None = None,
        report_failures: bool = False,
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.thread_store = thread_store
        self.report_failures = report_failures

    def resolve_block_action(self, payload: dict) -> DispatchRequest | None:
        """Resolve an interactive payload to a dispatch request.

        Returns:
            None for payloads that are not button clicks.

        Raises:
            MalformedPayloadError, InvalidActionError, SessionNotFoundError.
        """
        if payload.get("type") != BLOCK_ACTIONS:
            return None
        actions = payload.get("actions") or []
        if not isinstance(actions, list):
            raise MalformedPayloadError(f"actions must be a list, got {type(actions).__name__}")
        if not actions:
            return None

        first = actions[0]
        value = parse_action_value(first.get("value", "") if isinstance(first, dict) else "")
        action = validate_action(value.action)
        response_url = payload.get("response_url")
        if not isinstance(response_url, str):
            response_url = None

        direct_url = value.direct_url
        if direct_url is not None:
            return DispatchRequest(direct_url, action, direct_url, response_url)

        session = self.registry.get_session(id=value.selector)
        if session is None:
            raise SessionNotFoundError(value.selector)
        return DispatchRequest(session, action, session.label, response_url)

    def resolve_thread_reply(self, event: dict) -> DispatchRequest | None:
        """Resolve a human reply inside a tracked notification thread.

        Returns:
            None for anything that is not such a reply.
        """
        if self.thread_store is None or event.get("type") != "message":
            return None
        if event.get("bot_id") or event.get("subtype"):
            return None

        thread_ts = event.get("thread_ts")
        if not thread_ts or thread_ts == event.get("ts"):
            return None
        raw_text = event.get("text") or ""
        if not isinstance(thread_ts, str) or not isinstance(raw_text, str):
            raise MalformedPayloadError("thread_ts and text must be strings")
        # Slack escapes &, < and > in message text
        text = html.unescape(raw_text).strip()
        if not text:
            return None

        mapping = self.thread_store.get_mapping(thread_ts)
        if mapping is None:
            logger.debug(f"No thread mapping for {thread_ts}")
            return None

        focus_url = mapping.focus_url
        label = mapping.instance_id or thread_ts
        if not focus_url and mapping.instance_id:
            session = self.registry.get_session(id=mapping.instance_id)
            if session is not None:
                focus_url, label = session.focus_url, session.label
        if not focus_url:
            logger.warning(f"Thread {thread_ts} maps to no reachable session")
            return None

        return DispatchRequest(with_text(focus_url, text), None, label)

    def dispatch(self, request: DispatchRequest) -> FocusResult:
        """Run a resolved request and log the outcome."""
        result = self.dispatcher.execute(request.target, request.action)
        action = request.action or "reply"
        if result.success:
            logger.info(f"[SLACK] {action} for {request.label}: {result.message}")
        else:
            logger.error(f"[SLACK] {action} for {request.label} failed: {result.message}")
            if self.report_failures and request.response_url:
                self._report_failure(request, result)
        return result

    def _report_failure(self, request: DispatchRequest, result: FocusResult) -> None:
        """Best-effort ephemeral notice through the action's response_url."""
        try:
            requests.post(
                request.response_url,
                json={
                    "response_type": "ephemeral",
                    "replace_original": False,
                    "text": f"Could not reach {request.label}: {result.message}",
                },
                timeout=RESPONSE_URL_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.warning(f"Failed to report error to Slack: {e}")
