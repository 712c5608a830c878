"""Application factory for the members site."""

from flask import Flask

from members.auth import Auth
from members.app_logging import setup_logger
from members.routes import ui
from members.services import session_store, users


def create_web_app() -> Flask:
    """Initialize and configure the members application."""
    app = Flask('members')
    app.config.from_pyfile('config.py')
    setup_logger(app.config['LOGLEVEL'])

    session_store.init_app(app)
    users.init_app(app)

    app.register_blueprint(ui.blueprint)
    Auth(app)  # Loads member sessions from cookies.
    return app
