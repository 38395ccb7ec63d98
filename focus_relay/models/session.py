"""Session descriptor and thread mapping models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TerminalType(str, Enum):
    """Terminal backends a session can be registered from."""

    ITERM2 = "iterm2"
    TERMINAL = "terminal"
    TMUX = "tmux"
    ITERM_TMUX = "iterm-tmux"
    SSH_LINKED = "ssh-linked"
    SSH_TMUX = "ssh-tmux"
    JUPYTER_TMUX = "jupyter-tmux"


class SessionDescriptor(BaseModel):
    """A live Claude Code session, read from ~/.claude/instances/<id>.json.

    Written by the register step at session start and removed by external
    cleanup. This package only ever reads it.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Process-unique identifier (pid or UUID)")
    name: str = Field(..., description="Human-memorable alias, not unique")
    hostname: str = Field(..., description="Machine the session runs on")
    term_type: TerminalType = Field(..., description="Terminal backend")
    term_target: str = Field(
        default="",
        description="Backend addressing; hybrid types use a pipe-separated composite",
    )
    focus_url: str = Field(default="", description="Precomputed claude-focus:// URL")
    registered_at: datetime = Field(..., description="Registration time")

    @field_validator("registered_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Mixed naive/aware timestamps cannot be compared when sorting
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def label(self) -> str:
        """Name for messages: the alias when set, else the id."""
        return self.name or self.id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "hostname": self.hostname,
            "term_type": self.term_type.value,
            "term_target": self.term_target,
            "focus_url": self.focus_url,
            "registered_at": self.registered_at.isoformat(),
        }


class ThreadMapping(BaseModel):
    """Links a Slack notification thread to the session it was posted for."""

    model_config = ConfigDict(extra="ignore")

    thread_ts: str
    instance_id: str = Field(
        default="",
        validation_alias=AliasChoices("instance_id", "session_id"),
    )
    focus_url: str = ""
    term_type: str | None = None
