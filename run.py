#!/usr/bin/env python3
"""Claude focus relay - Run the application.

Receives Slack button clicks and thread replies and turns them into
terminal focus and input for registered Claude Code sessions.

Usage:
    python run.py
    # Or: python -m focus_relay.app

Point the Slack app's interactivity and event URLs at
http://localhost:8463/slack/actions and /slack/events through a tunnel.
"""

from focus_relay.app import main

if __name__ == "__main__":
    main()
