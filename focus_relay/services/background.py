"""Fire-and-forget execution for work that happens after Slack is answered."""

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """Runs each job on its own daemon thread.

    Errors never reach the request that scheduled the job; they are logged
    here with a traceback.
    """

    def submit(self, fn: Callable[..., object], *args: object, name: str = "focus-dispatch") -> None:
        def run() -> None:
            try:
                fn(*args)
            except Exception as e:
                logger.exception(f"Background job {name} failed: {e}")

        thread = threading.Thread(target=run, name=name, daemon=True)
        thread.start()


class InlineRunner(BackgroundRunner):
    """Runs jobs synchronously on the calling thread (tests, one-shot use)."""

    def submit(self, fn: Callable[..., object], *args: object, name: str = "focus-dispatch") -> None:
        try:
            fn(*args)
        except Exception as e:
            logger.exception(f"Job {name} failed: {e}")
