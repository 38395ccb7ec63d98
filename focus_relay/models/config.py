"""Application configuration models with Pydantic validation."""

from pathlib import Path

from pydantic import BaseModel, Field


class PathsConfig(BaseModel):
    """Filesystem locations shared with the register/notify tooling.

    Every location defaults to a fixed name under ``claude_dir``; set an
    explicit path to override one.
    """

    claude_dir: str = Field(
        default="~/.claude",
        description="Root of the Claude Code state directory",
    )
    instances_dir: str | None = Field(
        default=None,
        description="Session descriptor directory (default: <claude_dir>/instances)",
    )
    threads_dir: str | None = Field(
        default=None,
        description="Slack thread mapping directory (default: <claude_dir>/threads)",
    )
    reverse_link_file: str | None = Field(
        default=None,
        description="Reverse-link config; its presence enables forwarding",
    )
    focus_helper: str | None = Field(
        default=None,
        description="Local focus-helper executable (default: <claude_dir>/bin/focus-helper)",
    )
    activity_file: str | None = Field(
        default=None,
        description="File touched on every Slack action for idle watchdogs",
    )
    signing_secret_file: str | None = Field(
        default=None,
        description="Slack signing secret (default: <claude_dir>/slack-signing-secret)",
    )

    def _resolve(self, override: str | None, *default: str) -> Path:
        if override:
            return Path(override).expanduser()
        return Path(self.claude_dir).expanduser().joinpath(*default)

    @property
    def instances_path(self) -> Path:
        return self._resolve(self.instances_dir, "instances")

    @property
    def threads_path(self) -> Path:
        return self._resolve(self.threads_dir, "threads")

    @property
    def reverse_link_path(self) -> Path:
        return self._resolve(self.reverse_link_file, ".reverse-link")

    @property
    def focus_helper_path(self) -> Path:
        return self._resolve(self.focus_helper, "bin", "focus-helper")

    @property
    def activity_path(self) -> Path:
        return self._resolve(self.activity_file, ".relay-last-activity")

    @property
    def signing_secret_path(self) -> Path:
        return self._resolve(self.signing_secret_file, "slack-signing-secret")


class TmuxConfig(BaseModel):
    """tmux-specific configuration."""

    socket_path: str | None = Field(
        default=None,
        description="tmux server socket (default: platform tmux-<uid>/default)",
    )


class TimeoutsConfig(BaseModel):
    """Timeouts for external processes, in seconds."""

    helper_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="focus-helper run limit",
    )
    command_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Single tmux command limit",
    )
    ssh_connect_seconds: int = Field(
        default=5,
        ge=1,
        le=30,
        description="SSH ConnectTimeout for forwarding and remote tmux",
    )
    forward_seconds: float = Field(
        default=15.0,
        gt=0,
        le=120,
        description="Overall limit for a forwarded focus request",
    )


class SlackConfig(BaseModel):
    """Slack webhook behaviour."""

    verify_signatures: bool = Field(
        default=True,
        description="Check X-Slack-Signature when a signing secret is present",
    )
    report_failures: bool = Field(
        default=False,
        description="Post failed dispatches back to the action's response_url",
    )


class ReverseLinkConfig(BaseModel):
    """Paired Mac that performs GUI focus for a headless relay.

    Loaded once from the reverse-link file; never written here.
    """

    mac_user: str = Field(..., min_length=1)
    mac_host: str = Field(..., min_length=1)
    mac_port: int = Field(default=22, ge=1, le=65535)


class AppConfig(BaseModel):
    """Root application configuration.

    Loaded from config.yaml and validated with Pydantic.
    """

    paths: PathsConfig = Field(default_factory=PathsConfig)
    tmux: TmuxConfig = Field(default_factory=TmuxConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)
    host: str = Field(
        default="127.0.0.1",
        description="Interface for the Flask server (tunnel terminates locally)",
    )
    port: int = Field(
        default=8463,
        ge=1024,
        le=65535,
        description="Port for the Flask server",
    )
    debug: bool = Field(
        default=False,
        description="Enable Flask debug mode",
    )
