"""iTerm2 terminal adapter.

Focus and input go through focus-helper, which locates the iTerm2 session
by its UUID via AppleScript. iterm-tmux URLs are handled by the same helper.
"""

from focus_relay.backends.focus_helper import HelperBackedAdapter


class ITerm2Adapter(HelperBackedAdapter):
    """Target format: iTerm2 session ID (e.g. "w0t0p0:6C3F...")."""

    url_type = "iterm2"
    display_name = "iTerm2"
