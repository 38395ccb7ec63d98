"""Flask application factory for the Claude focus relay.

This module creates and configures the Flask application, wiring together
the relay's services:

- ConfigService: Configuration and reverse-link loading
- SessionRegistry: Registered Claude Code sessions
- ThreadStore: Slack thread to session mappings
- Terminal adapters: tmux, iTerm2, Terminal.app
- FocusDispatcher: Local adapter or reverse-link forwarding
- SlackActionRouter: Slack payload resolution
- BackgroundRunner: Dispatch after Slack is acknowledged

Usage:
    from focus_relay.app import create_app
    app = create_app()
    app.run(port=8463)
"""

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify

from focus_relay.backends import FocusHelper, ITerm2Adapter, TerminalAppAdapter, TmuxAdapter
from focus_relay.models import AppConfig
from focus_relay.routes import register_blueprints
from focus_relay.services import (
    BackgroundRunner,
    ConfigService,
    FocusDispatcher,
    ReverseLinkForwarder,
    SessionRegistry,
    SlackActionRouter,
    ThreadStore,
    get_config_service,
)

logger = logging.getLogger(__name__)


def create_app(
    config_path: str = "config.yaml",
    config_service: ConfigService | None = None,
    runner: BackgroundRunner | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Path to the configuration file.
        config_service: Preconfigured service (tests); overrides config_path.
        runner: Job runner for post-acknowledgment dispatch.

    Returns:
        Configured Flask application.
    """
    # Load configuration
    config_service = config_service or get_config_service(config_path)
    config = config_service.get_config()

    app = Flask(__name__)
    app.config["TESTING"] = False

    # Store services on app for access in routes
    app.extensions["config"] = config
    app.extensions["config_service"] = config_service

    _init_services(app, config, config_service, runner or BackgroundRunner())

    register_blueprints(app)

    @app.route("/health")
    def health():
        """Liveness probe for the tunnel and idle watchdog."""
        dispatcher = app.extensions["dispatcher"]
        return jsonify(
            {
                "status": "ok",
                "mode": "forward" if dispatcher.forwarding else "local",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

    return app


def _init_services(
    app: Flask,
    config: AppConfig,
    config_service: ConfigService,
    runner: BackgroundRunner,
) -> None:
    """Initialize all services and wire them together.

    Args:
        app: Flask application.
        config: Application configuration.
        config_service: Source of the reverse-link config.
        runner: Job runner for Slack dispatch.
    """
    paths = config.paths
    timeouts = config.timeouts

    registry = SessionRegistry(paths.instances_path)
    app.extensions["session_registry"] = registry

    thread_store = ThreadStore(paths.threads_path)
    app.extensions["thread_store"] = thread_store

    # Terminal adapters
    tmux = TmuxAdapter(
        socket_path=config.tmux.socket_path,
        timeout=timeouts.command_seconds,
        ssh_connect_timeout=timeouts.ssh_connect_seconds,
    )
    helper = FocusHelper(paths.focus_helper_path, timeout=timeouts.helper_seconds)
    app.extensions["tmux_adapter"] = tmux
    app.extensions["focus_helper"] = helper

    # Read once; forward-or-local never changes while the process runs
    reverse_link = config_service.load_reverse_link()
    forwarder = ReverseLinkForwarder(
        connect_timeout=timeouts.ssh_connect_seconds,
        timeout=timeouts.forward_seconds,
    )

    dispatcher = FocusDispatcher(
        tmux=tmux,
        iterm=ITerm2Adapter(helper),
        terminal_app=TerminalAppAdapter(helper),
        reverse_link=reverse_link,
        forwarder=forwarder,
    )
    app.extensions["dispatcher"] = dispatcher

    app.extensions["action_router"] = SlackActionRouter(
        registry=registry,
        dispatcher=dispatcher,
        thread_store=thread_store,
        report_failures=config.slack.report_failures,
    )
    app.extensions["runner"] = runner

    mode = "forward" if dispatcher.forwarding else "local"
    logger.info(f"Services initialized (mode: {mode}, instances: {paths.instances_path})")


def main():
    """Run the Flask application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = create_app()
    config = app.extensions.get("config")

    host = config.host if config else "127.0.0.1"
    port = config.port if config else 8463
    debug = config.debug if config else False

    logger.info(f"Starting focus relay on {host}:{port}")
    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
