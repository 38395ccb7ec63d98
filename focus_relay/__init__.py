"""Slack-driven focus and input relay for Claude Code terminal sessions."""

__version__ = "0.3.0"
