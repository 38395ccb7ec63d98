"""focus-helper runner and the adapters that delegate to it.

The Mac backends (iTerm2, Terminal.app) do their AppleScript work through
~/.claude/bin/focus-helper, which takes a single claude-focus:// URL.
"""

import logging
from pathlib import Path
from urllib.parse import quote

from focus_relay.backends.base import TerminalAdapter, TerminalResult
from focus_relay.backends.process import run_command
from focus_relay.errors import AdapterUnavailableError, FocusError
from focus_relay.focus_url import FOCUS_URL_SCHEME, with_text

logger = logging.getLogger(__name__)

DEFAULT_FOCUS_HELPER = Path.home() / ".claude" / "bin" / "focus-helper"
DEFAULT_HELPER_TIMEOUT = 30.0


class FocusHelper:
    """Runs the focus-helper executable with one focus URL."""

    def __init__(self, path: str | Path | None = None, timeout: float = DEFAULT_HELPER_TIMEOUT):
        self.path = Path(path) if path else DEFAULT_FOCUS_HELPER
        self.timeout = timeout

    def is_available(self) -> bool:
        return self.path.exists()

    def run(self, focus_url: str) -> TerminalResult:
        """Run the helper; never raises."""
        if not self.is_available():
            return TerminalResult.failure(
                AdapterUnavailableError(f"focus-helper not found at {self.path}")
            )

        try:
            output = run_command([str(self.path), focus_url], timeout=self.timeout)
        except FocusError as e:
            logger.warning(f"focus-helper failed for {focus_url}: {e}")
            return TerminalResult.failure(e)

        return TerminalResult.ok(output.stdout.strip() or "focus-helper completed")


class HelperBackedAdapter(TerminalAdapter):
    """Adapter whose operations are focus URLs handed to focus-helper."""

    url_type: str = ""
    display_name: str = ""

    def __init__(self, helper: FocusHelper | None = None):
        self.helper = helper or FocusHelper()

    @property
    def backend_name(self) -> str:
        return self.url_type

    def is_available(self) -> bool:
        return self.helper.is_available()

    def target_url(self, target: str) -> str:
        return f"{FOCUS_URL_SCHEME}{self.url_type}/{quote(target, safe='')}"

    def _unavailable(self, operation: str) -> TerminalResult:
        return TerminalResult.failure(
            AdapterUnavailableError(
                f"focus-helper not available - {self.display_name} {operation} "
                "requires macOS with focus-helper installed"
            )
        )

    def focus(self, target: str) -> TerminalResult:
        if not self.is_available():
            return self._unavailable("focus")
        logger.debug(f"[{self.display_name}] Focusing {target}")
        return self.helper.run(self.target_url(target))

    def send_input(self, target: str, text: str) -> TerminalResult:
        if not self.is_available():
            return self._unavailable("input")
        logger.debug(f"[{self.display_name}] Sending input to {target}: {text!r}")
        return self.helper.run(with_text(self.target_url(target), text, action=None))

    def deliver(self, focus_url: str) -> TerminalResult:
        """Pass a complete focus URL (action and text included) to the helper."""
        if not self.is_available():
            return self._unavailable("focus")
        return self.helper.run(focus_url)
