"""SessionRegistry - read-only view of registered Claude Code sessions.

Each live session has one JSON descriptor under ~/.claude/instances/,
written by the register step and deleted by external cleanup. Every call
re-reads the directory, so results always reflect the filesystem.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from focus_relay.errors import InvalidSessionError
from focus_relay.focus_url import build_base_url
from focus_relay.models.session import SessionDescriptor

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Lists and looks up session descriptors in a directory."""

    def __init__(self, instances_dir: str | Path):
        """Initialize the registry.

        Args:
            instances_dir: Directory holding one <id>.json per session.
        """
        self.instances_dir = Path(instances_dir)

    def _load(self, path: Path) -> SessionDescriptor | None:
        """Parse one descriptor; anything unusable is skipped."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            session = SessionDescriptor.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.debug(f"Skipping unreadable session file {path.name}: {e}")
            return None

        if not session.focus_url and session.term_target:
            try:
                session.focus_url = build_base_url(session.term_type.value, session.term_target)
            except InvalidSessionError as e:
                logger.debug(f"No focus URL for session {session.id}: {e}")
        return session

    def list_sessions(self, hostname: str | None = None) -> list[SessionDescriptor]:
        """List registered sessions, newest first.

        Args:
            hostname: Only return sessions registered from this host.

        Returns:
            Sessions sorted by registered_at descending. A missing
            directory yields an empty list.
        """
        try:
            paths = sorted(self.instances_dir.glob("*.json"))
        except OSError as e:
            logger.debug(f"Cannot list {self.instances_dir}: {e}")
            return []

        sessions = [s for s in (self._load(p) for p in paths) if s is not None]
        if hostname:
            sessions = [s for s in sessions if s.hostname == hostname]

        # sorted() is stable, so equal timestamps keep enumeration order
        return sorted(sessions, key=lambda s: s.registered_at, reverse=True)

    def get_session(self, id: str | None = None, name: str | None = None) -> SessionDescriptor | None:
        """Find one session by id, or by name when no id is given.

        Returns:
            The matching session, or None when nothing matches or neither
            selector is provided.
        """
        if not id and not name:
            return None

        for session in self.list_sessions():
            if id:
                if session.id == id:
                    return session
            elif session.name == name:
                return session
        return None
