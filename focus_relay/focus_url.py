"""claude-focus:// URL building and parsing.

A focus URL encodes which terminal backend a session lives in and how to
address it, plus an optional action and literal text to submit:

    claude-focus://<type>/<segment>[/<segment>...][?action=<a>][&text=<t>]

Segment layouts per type:

    tmux          session:window.pane
    iterm2        iTerm2 session UUID
    terminal      TTY path or "frontmost"
    iterm-tmux    TTY / tmux target
    ssh-linked    link id / host / user / port / tmux target
    ssh-tmux      host / user / port / tmux target
    jupyter-tmux  link id / host / user / port / tmux target
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol
from urllib.parse import parse_qs, quote, unquote, urlencode

from focus_relay.errors import InvalidFocusUrlError, InvalidSessionError

FOCUS_URL_SCHEME = "claude-focus://"
DIRECT_URL_PREFIX = "url:"


class FocusAction(str, Enum):
    """Closed set of actions a Slack button can request."""

    FOCUS = "focus"
    OPTION_1 = "1"
    OPTION_2 = "2"
    CONTINUE = "continue"
    PUSH = "push"


VALID_ACTIONS = frozenset(a.value for a in FocusAction)

# Literal input each action submits after focusing
ACTION_INPUT = {
    FocusAction.FOCUS.value: "",
    FocusAction.OPTION_1.value: "1",
    FocusAction.OPTION_2.value: "2",
    FocusAction.CONTINUE.value: "Continue",
    FocusAction.PUSH.value: "/push",
}

SEGMENT_LAYOUTS: dict[str, tuple[str, ...]] = {
    "tmux": ("tmux_target",),
    "iterm2": ("session_id",),
    "terminal": ("tty",),
    "iterm-tmux": ("tty", "tmux_target"),
    "ssh-linked": ("link_id", "host", "user", "port", "tmux_target"),
    "ssh-tmux": ("host", "user", "port", "tmux_target"),
    "jupyter-tmux": ("link_id", "host", "user", "port", "tmux_target"),
}

# Separator inside a descriptor's term_target for hybrid types
TARGET_SEPARATOR = "|"


class HasFocusUrl(Protocol):
    id: str
    name: str
    focus_url: str


def action_input(action: str | None) -> str:
    """Text an action types into the session ("" for focus or unknown)."""
    return ACTION_INPUT.get(action or "", "")


def strip_query(url: str) -> str:
    return url.split("?", 1)[0]


def with_action(url: str, action: str | None = None) -> str:
    """Replace the query string of a focus URL with a single action.

    No action, or the focus action, yields the bare base URL.
    """
    base = strip_query(url)
    if not action or action == FocusAction.FOCUS.value:
        return base
    return f"{base}?action={action}"


def with_text(url: str, text: str, action: str | None = FocusAction.FOCUS.value) -> str:
    """Base URL carrying literal text to submit after focusing."""
    params = {}
    if action:
        params["action"] = action
    params["text"] = text
    return f"{strip_query(url)}?{urlencode(params, quote_via=quote)}"


def build(session: HasFocusUrl, action: str | None = None) -> str:
    """Build the focus URL for a session and action.

    Raises:
        InvalidSessionError: The session has no focus URL.
    """
    if not session.focus_url:
        raise InvalidSessionError(f"Session {session.name or session.id} has no focus_url")
    return with_action(session.focus_url, action)


def build_base_url(term_type: str, term_target: str) -> str:
    """Compose a focus URL from a descriptor's type and composite target.

    Raises:
        InvalidSessionError: Unknown type or wrong number of target parts.
    """
    layout = SEGMENT_LAYOUTS.get(term_type)
    if layout is None:
        raise InvalidSessionError(f"Unsupported terminal type: {term_type}")
    if not term_target:
        raise InvalidSessionError(f"{term_type} session has no terminal target")

    parts = term_target.split(TARGET_SEPARATOR) if len(layout) > 1 else [term_target]
    if len(parts) != len(layout) or not all(parts):
        raise InvalidSessionError(
            f"{term_type} target needs {len(layout)} parts "
            f"({TARGET_SEPARATOR.join(layout)}), got {term_target!r}"
        )
    path = "/".join(quote(p, safe="") for p in parts)
    return f"{FOCUS_URL_SCHEME}{term_type}/{path}"


@dataclass
class ParsedFocusUrl:
    """A decoded focus URL."""

    terminal_type: str
    segments: list[str] = field(default_factory=list)
    action: str | None = None
    text: str | None = None

    def _field(self, name: str) -> str | None:
        layout = SEGMENT_LAYOUTS.get(self.terminal_type, ())
        if name not in layout:
            return None
        return self.segments[layout.index(name)]

    @property
    def tmux_target(self) -> str | None:
        return self._field("tmux_target")

    @property
    def session_id(self) -> str | None:
        return self._field("session_id")

    @property
    def tty(self) -> str | None:
        return self._field("tty")

    @property
    def link_id(self) -> str | None:
        return self._field("link_id")

    @property
    def host(self) -> str | None:
        return self._field("host")

    @property
    def user(self) -> str | None:
        return self._field("user")

    @property
    def port(self) -> int | None:
        value = self._field("port")
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            return None


def parse(url: str) -> ParsedFocusUrl:
    """Parse a focus URL, tolerating the Slack button "url:" prefix.

    Raises:
        InvalidFocusUrlError: Not a claude-focus URL, or too few segments.
    """
    if url.startswith(DIRECT_URL_PREFIX):
        url = url[len(DIRECT_URL_PREFIX):]
    if not url.startswith(FOCUS_URL_SCHEME):
        raise InvalidFocusUrlError(f"Not a focus URL: {url!r}")

    path, _, query = url[len(FOCUS_URL_SCHEME):].partition("?")
    params = parse_qs(query, keep_blank_values=True)
    action = params.get("action", [None])[0] or None
    text = params.get("text", [None])[0]

    terminal_type, *raw = path.split("/")
    if not terminal_type:
        raise InvalidFocusUrlError(f"Focus URL has no terminal type: {url!r}")

    layout = SEGMENT_LAYOUTS.get(terminal_type)
    if layout is None:
        return ParsedFocusUrl(terminal_type, [unquote(s) for s in raw], action, text)

    if len(raw) > len(layout) and "tty" in layout:
        # Unencoded TTY paths (/dev/ttys001) spill over several segments
        start = layout.index("tty")
        extra = len(raw) - len(layout)
        raw = raw[:start] + ["/".join(raw[start:start + extra + 1])] + raw[start + extra + 1:]

    if len(raw) < len(layout) or any(not raw[i] for i in range(len(layout))):
        raise InvalidFocusUrlError(
            f"{terminal_type} URL needs {len(layout)} segments, got {len(raw)}: {url!r}"
        )

    segments = [unquote(s) for s in raw[: len(layout)]]
    return ParsedFocusUrl(terminal_type, segments, action, text)
