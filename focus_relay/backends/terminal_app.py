"""macOS Terminal.app adapter."""

from focus_relay.backends.focus_helper import HelperBackedAdapter


class TerminalAppAdapter(HelperBackedAdapter):
    """Target format: TTY path (e.g. /dev/ttys001) or "frontmost"."""

    url_type = "terminal"
    display_name = "Terminal.app"
