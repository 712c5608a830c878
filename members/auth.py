"""Provides tools for working with authenticated member sessions."""

from typing import Optional

from flask import Flask, request

from . import domain
from .services import session_store
from .services.exceptions import InvalidToken, UnknownSession

import logging

logger = logging.getLogger(__name__)


class Auth(object):
    """
    Attaches the member session, if any, to the request.

    Intended for use in a Flask application factory, for example:

    .. code-block:: python

       from flask import Flask
       from members.auth import Auth
       from members.routes import ui


       def create_web_app() -> Flask:
          app = Flask('members')
          app.config.from_pyfile('config.py')
          Auth(app)   # Registers the before_request session check
          app.register_blueprint(ui.blueprint)
          return app


    Routes read the session from ``request.auth`` and hand it to controllers
    explicitly; it is ``None`` for anonymous requests.
    """

    def __init__(self, app: Optional[Flask] = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """
        Attach :meth:`.load_session` to the Flask app.

        Parameters
        ----------
        app : :class:`Flask`

        """
        self.app = app
        app.config.setdefault('AUTH_SESSION_COOKIE_NAME', 'members_session')
        app.before_request(self.load_session)

    def load_session(self) -> None:
        """Look for an active session, and attach it to the request."""
        request.auth = self.get_session()    # type: ignore

    def get_session(self) -> Optional[domain.Session]:
        """Load the session named by the request cookie, if it is valid.

        A session that cannot be read, whether missing, corrupt or behind an
        unreachable store, leaves the request anonymous.
        """
        cookie = request.cookies.get(self.app.config['AUTH_SESSION_COOKIE_NAME'])
        if not cookie:
            return None
        try:
            return session_store.current_session().load(cookie)
        except UnknownSession as e:
            logger.debug('No session available: %s', e)
        except InvalidToken as e:
            logger.debug('Invalid session cookie: %s', e)
        return None
