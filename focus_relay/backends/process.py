"""Blocking subprocess execution with the error taxonomy applied."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from focus_relay.errors import NonZeroExitError, ProcessTimeoutError, SpawnFailureError

logger = logging.getLogger(__name__)


@dataclass
class CommandOutput:
    """Captured output of a finished command."""

    returncode: int
    stdout: str
    stderr: str


def run_command(cmd: list[str], timeout: float, check: bool = True) -> CommandOutput:
    """Run a command without a shell and capture its output.

    Args:
        cmd: Program and arguments.
        timeout: Seconds before the child is killed.
        check: Raise NonZeroExitError on a non-zero exit status.

    Returns:
        CommandOutput for the finished process.

    Raises:
        SpawnFailureError: The program is missing or not executable.
        ProcessTimeoutError: The timeout expired; the child was killed.
        NonZeroExitError: The exit status was non-zero and check is set.
    """
    program = Path(cmd[0]).name
    logger.debug(f"Running command: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ProcessTimeoutError(f"{program} timed out after {timeout:g}s") from e
    except OSError as e:
        raise SpawnFailureError(f"Failed to spawn {program}: {e}") from e

    output = CommandOutput(
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
    )
    if check and output.returncode != 0:
        raise NonZeroExitError(program, output.returncode, output.stdout, output.stderr)
    return output
