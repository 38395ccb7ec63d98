"""Terminal adapter implementations."""

from focus_relay.backends.base import TerminalAdapter, TerminalResult
from focus_relay.backends.focus_helper import FocusHelper, HelperBackedAdapter
from focus_relay.backends.iterm import ITerm2Adapter
from focus_relay.backends.terminal_app import TerminalAppAdapter
from focus_relay.backends.tmux import TmuxAdapter, default_socket_path, split_tmux_target

__all__ = [
    "FocusHelper",
    "HelperBackedAdapter",
    "ITerm2Adapter",
    "TerminalAdapter",
    "TerminalAppAdapter",
    "TerminalResult",
    "TmuxAdapter",
    "default_socket_path",
    "split_tmux_target",
]
