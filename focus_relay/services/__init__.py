"""Services for the focus relay."""

from focus_relay.services.action_router import (
    ActionValue,
    DispatchRequest,
    SlackActionRouter,
    parse_action_value,
    validate_action,
)
from focus_relay.services.background import BackgroundRunner, InlineRunner
from focus_relay.services.config_service import (
    ConfigService,
    get_config_service,
    reset_config_service,
)
from focus_relay.services.dispatcher import FocusDispatcher, is_local_host
from focus_relay.services.forwarder import ReverseLinkForwarder
from focus_relay.services.session_registry import SessionRegistry
from focus_relay.services.thread_store import ThreadStore

__all__ = [
    "ActionValue",
    "BackgroundRunner",
    "ConfigService",
    "DispatchRequest",
    "FocusDispatcher",
    "InlineRunner",
    "ReverseLinkForwarder",
    "SessionRegistry",
    "SlackActionRouter",
    "ThreadStore",
    "get_config_service",
    "is_local_host",
    "parse_action_value",
    "reset_config_service",
    "validate_action",
]
