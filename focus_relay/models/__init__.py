"""Domain models for the focus relay."""

from focus_relay.models.config import (
    AppConfig,
    PathsConfig,
    ReverseLinkConfig,
    SlackConfig,
    TimeoutsConfig,
    TmuxConfig,
)
from focus_relay.models.result import FocusResult
from focus_relay.models.session import SessionDescriptor, TerminalType, ThreadMapping

__all__ = [
    # Sessions
    "SessionDescriptor",
    "TerminalType",
    "ThreadMapping",
    # Results
    "FocusResult",
    # Config
    "AppConfig",
    "PathsConfig",
    "ReverseLinkConfig",
    "SlackConfig",
    "TimeoutsConfig",
    "TmuxConfig",
]
