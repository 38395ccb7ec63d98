"""FocusDispatcher - runs a focus request on the right backend.

Given a session or focus URL, the dispatcher either forwards the whole
request over the reverse link, or parses the URL and hands it to the
adapter registered for its terminal type.
"""

import logging
import socket
from collections.abc import Callable

from focus_relay.backends.base import TerminalResult
from focus_relay.backends.focus_helper import HelperBackedAdapter
from focus_relay.backends.tmux import TmuxAdapter
from focus_relay.errors import AdapterUnavailableError, FocusError
from focus_relay.focus_url import ParsedFocusUrl, action_input, build, parse, with_action
from focus_relay.models.config import ReverseLinkConfig
from focus_relay.models.result import FocusResult
from focus_relay.models.session import SessionDescriptor
from focus_relay.services.forwarder import ReverseLinkForwarder

logger = logging.getLogger(__name__)

LOCAL_HOST_NAMES = frozenset({"localhost", "127.0.0.1", "::1"})


def is_local_host(host: str | None) -> bool:
    """Whether an SSH host named in a focus URL is this machine."""
    if not host:
        return False
    host = host.lower()
    if host in LOCAL_HOST_NAMES:
        return True
    hostname = socket.gethostname().lower()
    return host in (hostname, hostname.split(".")[0])


class FocusDispatcher:
    """Selects local adapter or reverse-link forwarding for a focus URL.

    The reverse link is resolved once at startup and injected, so the
    forward-or-local decision never reads the environment per request.
    """

    def __init__(
        self,
        tmux: TmuxAdapter,
        iterm: HelperBackedAdapter,
        terminal_app: HelperBackedAdapter,
        reverse_link: ReverseLinkConfig | None = None,
        forwarder: ReverseLinkForwarder | None = None,
    ):
        self.tmux = tmux
        self.iterm = iterm
        self.terminal_app = terminal_app
        self.reverse_link = reverse_link
        self.forwarder = forwarder or ReverseLinkForwarder()

        self._handlers: dict[str, Callable[[ParsedFocusUrl, str], TerminalResult]] = {
            "tmux": self._local_tmux,
            "iterm2": self._via_iterm,
            "iterm-tmux": self._via_iterm,
            "terminal": self._via_terminal_app,
            "ssh-linked": self._linked_tmux,
            "ssh-tmux": self._ssh_tmux,
            "jupyter-tmux": self._linked_tmux,
        }

    @property
    def forwarding(self) -> bool:
        return self.reverse_link is not None

    def resolve_url(self, target: str | SessionDescriptor, action: str | None = None) -> str:
        """Effective focus URL for a session or URL plus optional action.

        A URL without an action is used verbatim so text parameters survive.
        """
        if isinstance(target, SessionDescriptor):
            return build(target, action)
        url = target.removeprefix("url:")
        return with_action(url, action) if action else url

    def execute(self, target: str | SessionDescriptor, action: str | None = None) -> FocusResult:
        """Focus a session (and submit the action's input); never raises."""
        try:
            url = self.resolve_url(target, action)
            if self.reverse_link is not None:
                return self.forwarder.forward(self.reverse_link, url)

            parsed = parse(url)
            handler = self._handlers.get(parsed.terminal_type)
            if handler is None:
                raise AdapterUnavailableError(
                    f"No local adapter for terminal type '{parsed.terminal_type}'"
                )
            result = handler(parsed, url)
        except FocusError as e:
            logger.warning(f"Focus request failed: {e}")
            return FocusResult.failure(e)
        except Exception as e:
            logger.exception(f"Unexpected error dispatching focus request: {e}")
            return FocusResult.failure(e)

        return FocusResult(success=result.success, message=result.message, error_kind=result.error_kind)

    @staticmethod
    def _input_for(parsed: ParsedFocusUrl) -> str:
        if parsed.text:
            return parsed.text
        return action_input(parsed.action)

    def _local_tmux(self, parsed: ParsedFocusUrl, url: str) -> TerminalResult:
        target = parsed.tmux_target
        result = self.tmux.focus(target)
        text = self._input_for(parsed)
        if not result.success or not text:
            return result
        return self.tmux.send_input(target, text)

    def _ssh_tmux(self, parsed: ParsedFocusUrl, url: str) -> TerminalResult:
        if is_local_host(parsed.host):
            return self._local_tmux(parsed, url)

        host, user, port, target = parsed.host, parsed.user, parsed.port or 22, parsed.tmux_target
        result = self.tmux.switch_remote_tmux(host, user, port, target)
        text = self._input_for(parsed)
        if not result.success or not text:
            return result
        return self.tmux.send_remote_tmux_input(host, user, port, target, text)

    def _linked_tmux(self, parsed: ParsedFocusUrl, url: str) -> TerminalResult:
        """Linked sessions sit behind a local iTerm2 window holding the SSH link.

        focus-helper resolves the link id to that window; without a helper
        only the remote tmux pane can be switched.
        """
        if self.iterm.is_available():
            return self.iterm.deliver(url)
        return self._ssh_tmux(parsed, url)

    def _via_iterm(self, parsed: ParsedFocusUrl, url: str) -> TerminalResult:
        return self.iterm.deliver(url)

    def _via_terminal_app(self, parsed: ParsedFocusUrl, url: str) -> TerminalResult:
        return self.terminal_app.deliver(url)
