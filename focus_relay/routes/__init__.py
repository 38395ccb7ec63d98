"""Flask routes for the focus relay."""

from focus_relay.routes.sessions import sessions_bp
from focus_relay.routes.slack import slack_bp

__all__ = [
    "sessions_bp",
    "slack_bp",
]


def register_blueprints(app):
    """Register all blueprints with the Flask app.

    Args:
        app: The Flask application instance.
    """
    app.register_blueprint(slack_bp, url_prefix="/slack")
    app.register_blueprint(sessions_bp, url_prefix="/api")
