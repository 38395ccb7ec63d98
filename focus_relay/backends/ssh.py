"""Non-interactive SSH invocation shared by remote tmux and forwarding."""

from focus_relay.backends.process import CommandOutput, run_command
from focus_relay.errors import NonZeroExitError, RemoteUnreachableError

# ssh reserves this status for its own failures (DNS, refused, timeout, auth)
SSH_CONNECTION_FAILURE = 255


def ssh_command(host: str, user: str, port: int, remote_command: str, connect_timeout: int) -> list[str]:
    """Build an ssh argv that can never prompt and gives up quickly."""
    return [
        "ssh",
        "-o",
        "BatchMode=yes",
        "-o",
        f"ConnectTimeout={connect_timeout}",
        "-p",
        str(port),
        f"{user}@{host}",
        remote_command,
    ]


def run_ssh(
    host: str,
    user: str,
    port: int,
    remote_command: str,
    connect_timeout: int,
    timeout: float,
) -> CommandOutput:
    """Run a command on a remote host.

    Raises:
        RemoteUnreachableError: ssh could not connect.
        NonZeroExitError: The remote command ran and failed.
        ProcessTimeoutError, SpawnFailureError: As for run_command.
    """
    cmd = ssh_command(host, user, port, remote_command, connect_timeout)
    try:
        return run_command(cmd, timeout=timeout)
    except NonZeroExitError as e:
        if e.returncode == SSH_CONNECTION_FAILURE:
            raise RemoteUnreachableError(
                f"Cannot reach {user}@{host}:{port}: {e.stderr.strip() or 'ssh connection failed'}"
            ) from e
        raise
