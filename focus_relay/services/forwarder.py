"""ReverseLinkForwarder - hands focus requests to a paired Mac over SSH.

A headless Linux relay receives the Slack webhook but has no GUI terminal
to focus. When a reverse link is configured the focus URL is executed by
the Mac's own focus-helper instead:

    ssh -o BatchMode=yes -o ConnectTimeout=5 -p PORT USER@MAC \
        ~/.claude/bin/focus-helper 'claude-focus://...'

BatchMode and the connect timeout keep an unreachable Mac from holding a
request past Slack's response budget.
"""

import logging
import shlex

from focus_relay.backends.ssh import run_ssh
from focus_relay.errors import FocusError, NonZeroExitError, RemoteUnreachableError
from focus_relay.models.config import ReverseLinkConfig
from focus_relay.models.result import FocusResult

logger = logging.getLogger(__name__)

REMOTE_FOCUS_HELPER = "~/.claude/bin/focus-helper"


class ReverseLinkForwarder:
    """Runs focus URLs on the reverse-linked Mac."""

    def __init__(
        self,
        connect_timeout: int = 5,
        timeout: float = 15.0,
        remote_helper: str = REMOTE_FOCUS_HELPER,
    ):
        """Initialize the forwarder.

        Args:
            connect_timeout: SSH ConnectTimeout in seconds.
            timeout: Overall limit for the remote helper run.
            remote_helper: Helper path on the Mac; "~" expands remotely.
        """
        self.connect_timeout = connect_timeout
        self.timeout = timeout
        self.remote_helper = remote_helper

    def remote_command(self, focus_url: str) -> str:
        return f"{self.remote_helper} {shlex.quote(focus_url)}"

    def forward(self, config: ReverseLinkConfig, focus_url: str) -> FocusResult:
        """Execute a focus URL on the Mac; never raises."""
        target = f"{config.mac_user}@{config.mac_host}:{config.mac_port}"
        logger.info(f"Forwarding {focus_url} to {target}")

        try:
            output = run_ssh(
                config.mac_host,
                config.mac_user,
                config.mac_port,
                self.remote_command(focus_url),
                connect_timeout=self.connect_timeout,
                timeout=self.timeout,
            )
        except RemoteUnreachableError as e:
            logger.warning(f"Reverse link down: {e}")
            return FocusResult.failure(e)
        except NonZeroExitError as e:
            logger.warning(f"Remote focus-helper on {config.mac_host} failed: {e}")
            return FocusResult(
                success=False,
                message=f"Remote focus-helper failed on {config.mac_host}: {e}",
                error_kind=type(e).__name__,
            )
        except FocusError as e:
            logger.warning(f"Forwarding to {target} failed: {e}")
            return FocusResult.failure(e)

        detail = output.stdout.strip()
        message = f"Forwarded to {config.mac_host}"
        return FocusResult(success=True, message=f"{message}: {detail}" if detail else message)
