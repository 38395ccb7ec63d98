"""ThreadStore - maps Slack notification threads back to sessions.

The notify step writes ~/.claude/threads/<thread_ts>.json when it posts a
message; a reply in that thread is routed to the mapped session.
"""

import json
import logging
import re
from pathlib import Path

from pydantic import ValidationError

from focus_relay.models.session import ThreadMapping

logger = logging.getLogger(__name__)

# Slack message timestamps look like "1712345678.123456"
THREAD_TS_PATTERN = re.compile(r"^\d+\.\d+$")


class ThreadStore:
    """Read-only lookup of thread mappings."""

    def __init__(self, threads_dir: str | Path):
        self.threads_dir = Path(threads_dir)

    def get_mapping(self, thread_ts: str) -> ThreadMapping | None:
        """Return the mapping for a thread, or None if unknown or corrupt."""
        if not thread_ts or not THREAD_TS_PATTERN.match(thread_ts):
            logger.debug(f"Ignoring malformed thread_ts {thread_ts!r}")
            return None

        path = self.threads_dir / f"{thread_ts}.json"
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            data.setdefault("thread_ts", thread_ts)
            return ThreadMapping.model_validate(data)
        except (OSError, AttributeError, ValueError, ValidationError) as e:
            logger.warning(f"Unreadable thread mapping {path.name}: {e}")
            return None
