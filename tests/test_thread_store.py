"""Tests for ThreadStore."""

from focus_relay.services.thread_store import ThreadStore


class TestGetMapping:
    """Tests for thread mapping lookup."""

    def test_found(self, claude_dir, write_thread):
        write_thread(
            "1712345678.000100",
            session_id="42",
            focus_url="claude-focus://tmux/main:0.0",
            instance_name="api",
            created="2026-01-01T00:00:00Z",
        )

        mapping = ThreadStore(claude_dir / "threads").get_mapping("1712345678.000100")

        assert mapping.instance_id == "42"
        assert mapping.focus_url == "claude-focus://tmux/main:0.0"

    def test_instance_id_key(self, claude_dir, write_thread):
        write_thread("1.2", instance_id="99")
        assert ThreadStore(claude_dir / "threads").get_mapping("1.2").instance_id == "99"

    def test_missing(self, claude_dir):
        assert ThreadStore(claude_dir / "threads").get_mapping("1712345678.000100") is None

    def test_path_traversal_is_rejected(self, claude_dir):
        """Only Slack timestamp shapes are looked up."""
        (claude_dir / "secret.json").write_text('{"thread_ts": "x"}')
        assert ThreadStore(claude_dir / "threads").get_mapping("../secret") is None

    def test_corrupt(self, claude_dir):
        (claude_dir / "threads" / "1.2.json").write_text("{oops")
        assert ThreadStore(claude_dir / "threads").get_mapping("1.2") is None

    def test_not_an_object(self, claude_dir):
        (claude_dir / "threads" / "1.2.json").write_text("[]")
        assert ThreadStore(claude_dir / "threads").get_mapping("1.2") is None
