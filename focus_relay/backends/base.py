"""Abstract base class for terminal adapter implementations.

Defines the capability contract every terminal backend offers to the
dispatcher: focus a target and submit text input to it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from focus_relay.errors import FocusError


@dataclass
class TerminalResult:
    """Outcome of one adapter operation."""

    success: bool
    details: str | None = None  # What was done, on success
    error: str | None = None  # Why it failed
    error_kind: str | None = None  # Error class name, e.g. "ProcessTimeoutError"

    @classmethod
    def ok(cls, details: str) -> "TerminalResult":
        return cls(success=True, details=details)

    @classmethod
    def failure(cls, error: FocusError, prefix: str | None = None) -> "TerminalResult":
        message = f"{prefix}: {error}" if prefix else str(error)
        return cls(success=False, error=message, error_kind=type(error).__name__)

    @property
    def message(self) -> str:
        return (self.details if self.success else self.error) or ""


class TerminalAdapter(ABC):
    """Abstract interface for terminal backends.

    Implementations must never raise from focus() or send_input(); every
    failure is reported through TerminalResult.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the backend identifier (e.g., 'tmux', 'iterm2')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the backend can be used on this machine.

        Returns:
            True if the backend can be used, False otherwise.
        """

    @abstractmethod
    def focus(self, target: str) -> TerminalResult:
        """Bring the target window/pane to the foreground.

        Args:
            target: Backend-specific address.

        Returns:
            TerminalResult describing the outcome.
        """

    @abstractmethod
    def send_input(self, target: str, text: str) -> TerminalResult:
        """Deliver literal text to the target and submit it.

        Args:
            target: Backend-specific address.
            text: Text to type, followed by Enter.

        Returns:
            TerminalResult describing the outcome.
        """
