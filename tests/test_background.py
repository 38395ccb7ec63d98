"""Tests for background job runners."""

import logging
import threading

from focus_relay.services.background import BackgroundRunner, InlineRunner


class TestBackgroundRunner:
    """Tests for daemon-thread execution."""

    def test_runs_job(self):
        done = threading.Event()
        seen = []

        def job(value):
            seen.append(value)
            done.set()

        BackgroundRunner().submit(job, "abc")

        assert done.wait(timeout=5)
        assert seen == ["abc"]

    def test_job_errors_are_logged(self, caplog):
        done = threading.Event()

        def job():
            try:
                raise RuntimeError("boom")
            finally:
                done.set()

        with caplog.at_level(logging.ERROR, logger="focus_relay.services.background"):
            BackgroundRunner().submit(job, name="failing-job")
            assert done.wait(timeout=5)
            for _ in range(50):
                if caplog.records:
                    break
                threading.Event().wait(0.05)

        assert any("failing-job failed: boom" in r.getMessage() for r in caplog.records)


class TestInlineRunner:
    """Tests for synchronous execution."""

    def test_runs_immediately(self):
        seen = []
        InlineRunner().submit(seen.append, 1)
        assert seen == [1]

    def test_errors_do_not_propagate(self, caplog):
        def job():
            raise ValueError("bad")

        with caplog.at_level(logging.ERROR):
            InlineRunner().submit(job)

        assert "bad" in caplog.text
