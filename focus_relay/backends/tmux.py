"""tmux terminal adapter.

Talks to the tmux server directly over its socket. Input uses the gastown
pattern: literal paste, 500ms, Escape, 100ms, Enter. Claude Code drops or
mangles keystrokes with any other timing, so the sequence and both sleeps
are fixed.
"""

import logging
import os
import shlex
import sys
import time
from collections.abc import Callable
from pathlib import Path

from focus_relay.backends.base import TerminalAdapter, TerminalResult
from focus_relay.backends.process import CommandOutput, run_command
from focus_relay.backends.ssh import run_ssh
from focus_relay.errors import AdapterUnavailableError, FocusError

logger = logging.getLogger(__name__)

# Gastown pattern timings - DO NOT CHANGE
PASTE_SETTLE_SECONDS = 0.5
ESCAPE_SETTLE_SECONDS = 0.1

HOMEBREW_TMUX = "/opt/homebrew/bin/tmux"
DEFAULT_UID = 501


def _is_mac() -> bool:
    return sys.platform == "darwin"


def default_socket_path() -> str:
    """Default tmux server socket for the current user.

    macOS keeps it under /private/tmp, everything else under /tmp.
    """
    uid = os.getuid() if hasattr(os, "getuid") else DEFAULT_UID
    parent = "/private/tmp" if _is_mac() else "/tmp"
    return f"{parent}/tmux-{uid}/default"


def resolve_tmux_binary() -> str:
    """Prefer the Homebrew tmux on macOS; otherwise rely on PATH."""
    if _is_mac() and Path(HOMEBREW_TMUX).exists():
        return HOMEBREW_TMUX
    return "tmux"


def split_tmux_target(target: str) -> tuple[str, str]:
    """Split 'session:window.pane' into (session, window).

    The window defaults to "0" when the target names only a session.
    """
    session, _, rest = target.partition(":")
    window = rest.split(".")[0] if rest else ""
    return session, window or "0"


class TmuxAdapter(TerminalAdapter):
    """tmux-based terminal adapter.

    Target format: session:window.pane (e.g., "claude:0.0").
    """

    def __init__(
        self,
        socket_path: str | None = None,
        timeout: float = 10.0,
        ssh_connect_timeout: int = 5,
    ):
        """Initialize the tmux adapter.

        Args:
            socket_path: tmux server socket; platform default when omitted.
            timeout: Per-command timeout in seconds.
            ssh_connect_timeout: ConnectTimeout for the remote variants.
        """
        self.socket_path = socket_path or default_socket_path()
        self.timeout = timeout
        self.ssh_connect_timeout = ssh_connect_timeout

    @property
    def backend_name(self) -> str:
        """Return the backend identifier."""
        return "tmux"

    def is_available(self) -> bool:
        """The server counts as running only if its socket file exists."""
        return Path(self.socket_path).exists()

    def _run_tmux(self, *args: str, check: bool = True) -> CommandOutput:
        cmd = [resolve_tmux_binary(), "-S", self.socket_path, *args]
        return run_command(cmd, timeout=self.timeout, check=check)

    def _require_socket(self) -> None:
        if not self.is_available():
            raise AdapterUnavailableError(f"Tmux socket not found at {self.socket_path}")

    def get_client_tty(self, session: str) -> str | None:
        """TTY of the first client attached to a session, if any."""
        output = self._run_tmux("list-clients", "-t", session, "-F", "#{client_tty}", check=False)
        if output.returncode != 0:
            return None
        lines = output.stdout.strip().splitlines()
        return lines[0].strip() if lines else None

    def focus(self, target: str) -> TerminalResult:
        """Show the target pane on whichever client watches its session.

        With an attached client, that client is switched to the target
        window; without one the window is selected on the server. The pane
        is selected explicitly in both cases.
        """
        try:
            self._require_socket()
            session, window = split_tmux_target(target)
            tty = self.get_client_tty(session)
            logger.debug(f"Focusing tmux target {target} (client tty: {tty or 'none'})")

            if tty:
                self._run_tmux("switch-client", "-c", tty, "-t", f"{session}:{window}")
            else:
                self._run_tmux("select-window", "-t", f"{session}:{window}")
            self._run_tmux("select-pane", "-t", target)
        except AdapterUnavailableError as e:
            return TerminalResult.failure(e)
        except FocusError as e:
            logger.warning(f"tmux focus failed for {target}: {e}")
            return TerminalResult.failure(e, prefix="Failed to focus tmux")

        return TerminalResult.ok(f"Focused tmux target {target}")

    def send_input(self, target: str, text: str) -> TerminalResult:
        """Type text into a pane and submit it using the gastown pattern."""
        try:
            self._require_socket()
            logger.debug(f"Sending input to tmux target {target}: {text!r}")
            self._submit(lambda *keys: self._run_tmux("send-keys", "-t", target, *keys), text)
        except AdapterUnavailableError as e:
            return TerminalResult.failure(e)
        except FocusError as e:
            logger.warning(f"tmux input failed for {target}: {e}")
            return TerminalResult.failure(e, prefix="Failed to send tmux input")

        return TerminalResult.ok(f"Sent input to tmux target {target}")

    @staticmethod
    def _submit(send_keys: Callable[..., object], text: str) -> None:
        """Run the five-step submit sequence; the first failure aborts it."""
        # GASTOWN PATTERN - DO NOT CHANGE TIMING
        # "--" stops tmux reading text that starts with "-" as flags
        send_keys("-l", "--", text)
        time.sleep(PASTE_SETTLE_SECONDS)
        # Escape clears vim mode left active by the paste
        send_keys("Escape")
        time.sleep(ESCAPE_SETTLE_SECONDS)
        # Enter must be its own keystroke, not a trailing newline in the paste
        send_keys("Enter")

    def _run_remote(self, host: str, user: str, port: int, remote_command: str) -> CommandOutput:
        return run_ssh(
            host,
            user,
            port,
            remote_command,
            connect_timeout=self.ssh_connect_timeout,
            timeout=self.timeout + self.ssh_connect_timeout,
        )

    def switch_remote_tmux(self, host: str, user: str, port: int, tmux_target: str) -> TerminalResult:
        """Select a window and pane on a tmux server reached over SSH."""
        session, window = split_tmux_target(tmux_target)
        remote_command = (
            f"tmux select-window -t {shlex.quote(f'{session}:{window}')} 2>/dev/null; "
            f"tmux select-pane -t {shlex.quote(tmux_target)} 2>/dev/null"
        )
        logger.debug(f"Switching remote tmux {user}@{host}:{port} to {tmux_target}")
        try:
            self._run_remote(host, user, port, remote_command)
        except FocusError as e:
            logger.warning(f"Remote tmux switch failed on {host}: {e}")
            return TerminalResult.failure(e, prefix="Failed to switch remote tmux")

        return TerminalResult.ok(f"Switched remote tmux to {tmux_target}")

    def send_remote_tmux_input(
        self,
        host: str,
        user: str,
        port: int,
        tmux_target: str,
        text: str,
    ) -> TerminalResult:
        """Submit text to a remote pane with the same five-step timing."""
        quoted_target = shlex.quote(tmux_target)

        def send_keys(*keys: str) -> CommandOutput:
            quoted_keys = " ".join(shlex.quote(k) for k in keys)
            return self._run_remote(host, user, port, f"tmux send-keys -t {quoted_target} {quoted_keys}")

        logger.debug(f"Sending input to remote tmux {user}@{host}:{port} {tmux_target}: {text!r}")
        try:
            self._submit(send_keys, text)
        except FocusError as e:
            logger.warning(f"Remote tmux input failed on {host}: {e}")
            return TerminalResult.failure(e, prefix="Failed to send remote tmux input")

        return TerminalResult.ok(f"Sent input to remote tmux {tmux_target}")
