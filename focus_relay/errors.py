"""Error taxonomy for focus and input delivery.

Adapters, the forwarder and the dispatcher never let these escape; they are
converted into failed results. Routes log them and still acknowledge.
"""


class FocusError(Exception):
    """Base class for every focus/input delivery failure."""


class SessionNotFoundError(FocusError):
    """No session descriptor matches the requested id or name."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"Session not found: {selector}")


class InvalidSessionError(FocusError):
    """A session has no focus URL to build from."""


class InvalidActionError(FocusError):
    """An action outside the closed action set."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Invalid action type: {action!r}")


class AdapterUnavailableError(FocusError):
    """The backend cannot run here (missing socket, helper or adapter)."""


class SpawnFailureError(FocusError):
    """A child process could not be started."""


class ProcessTimeoutError(FocusError):
    """A child process exceeded its timeout and was killed."""


class NonZeroExitError(FocusError):
    """A child process ran and exited with a non-zero status."""

    def __init__(self, program: str, returncode: int, stdout: str = "", stderr: str = ""):
        self.program = program
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = stderr.strip() or stdout.strip() or f"{program} exited with code {returncode}"
        super().__init__(detail)


class RemoteUnreachableError(FocusError):
    """The SSH connection to a remote machine could not be established."""


class MalformedPayloadError(FocusError):
    """An inbound payload or action value has the wrong shape."""


class InvalidFocusUrlError(MalformedPayloadError):
    """A string is not a parseable claude-focus:// URL."""
