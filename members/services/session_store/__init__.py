"""
Internal service API for the distributed session store.

Sessions are held in a key-value store (Redis) as JSON, keyed by session ID,
with a TTL equal to the session duration. When a session is created, a cookie
value is generated (a JSON web token) that contains information sufficient to
retrieve the session: the session ID, a nonce, and the expiry.
"""

import json
import uuid
import random
from datetime import datetime, timedelta
from typing import Optional

import dateutil.parser
from pytz import UTC
import redis
import jwt
from flask import current_app, g

from ... import domain
from ..exceptions import SessionCreationFailed, SessionDeletionFailed, \
    UnknownSession, InvalidToken, ExpiredToken

import logging

logger = logging.getLogger(__name__)


def _generate_nonce(length: int = 8) -> str:
    return ''.join([str(random.randint(0, 9)) for i in range(length)])


class SessionStore(object):
    """
    Manages sessions in Redis.

    The StrictRedis instance is thread safe and connections are attached at
    the time a command is executed. This class provides a container for
    configuration, and the get/set/destroy interface used by controllers.
    """

    def __init__(self, r: redis.StrictRedis, secret: str,
                 duration: int = 3600) -> None:
        self.r = r
        self._secret = secret
        self._duration = duration

    def create(self, username: str,
               session_id: Optional[str] = None) -> domain.Session:
        """
        Create and store a new authenticated session.

        Parameters
        ----------
        username : str
        session_id : str
            If not provided, a new UUID is used.

        Returns
        -------
        :class:`domain.Session`

        """
        if session_id is None:
            session_id = str(uuid.uuid4())
        start_time = datetime.now(tz=UTC)
        session = domain.Session(
            session_id=session_id,
            username=username,
            start_time=start_time,
            end_time=start_time + timedelta(seconds=self._duration),
            nonce=_generate_nonce(),
            authenticated=True
        )
        self.set(session)
        logger.debug('Created session %s for %s', session_id, username)
        return session

    def set(self, session: domain.Session) -> None:
        """Write a session, expiring it in the store at its end time."""
        ttl = session.expires
        if ttl <= 0:
            raise SessionCreationFailed('Session is already expired')
        try:
            self.r.set(session.session_id,
                       json.dumps(domain.session_to_dict(session)), ex=ttl)
        except redis.exceptions.ConnectionError as e:
            raise SessionCreationFailed(f'Connection failed: {e}') from e
        except Exception as e:
            raise SessionCreationFailed(f'Failed to create: {e}') from e

    def get(self, session_id: str) -> domain.Session:
        """
        Get session data by session ID.

        Raises
        ------
        :class:`UnknownSession`
            No such session, or the store cannot be reached.
        :class:`InvalidToken`
            The stored record is corrupt.
        :class:`ExpiredToken`
            The session has expired.

        """
        try:
            raw = self.r.get(session_id)
        except redis.exceptions.RedisError as e:
            logger.error('Could not read session %s: %s', session_id, e)
            raise UnknownSession(f'Failed to get session {session_id}') from e
        if not raw:
            logger.debug('No such session: %s', session_id)
            raise UnknownSession(f'Failed to find session {session_id}')
        try:
            session = domain.session_from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.error('Corrupt record for session %s: %s', session_id, e)
            raise InvalidToken(f'Session {session_id} is corrupt') from e
        if session.expired:
            raise ExpiredToken('Session has expired')
        return session

    def destroy(self, session_id: str) -> None:
        """Delete a session in the key-value store by ID."""
        try:
            self.r.delete(session_id)
        except redis.exceptions.ConnectionError as e:
            raise SessionDeletionFailed(f'Connection failed: {e}') from e
        except Exception as e:
            raise SessionDeletionFailed(f'Failed to delete: {e}') from e
        logger.debug('Destroyed session %s', session_id)

    def generate_cookie(self, session: domain.Session) -> str:
        """Generate a cookie from a :class:`domain.Session`."""
        return self._pack_cookie({
            'session_id': session.session_id,
            'nonce': session.nonce,
            'expires': session.end_time.isoformat()
        })

    def load(self, cookie: str) -> domain.Session:
        """Load a session using a session cookie."""
        try:
            cookie_data = self._unpack_cookie(cookie)
            expires = dateutil.parser.parse(cookie_data['expires'])
            session_id = cookie_data['session_id']
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidToken('Token payload malformed') from e

        if expires <= datetime.now(tz=UTC):
            raise ExpiredToken('Session has expired')

        session = self.get(session_id)
        if cookie_data.get('nonce') != session.nonce:
            raise InvalidToken('Invalid token; likely a forgery')
        return session

    def _unpack_cookie(self, cookie: str) -> dict:
        try:
            return dict(jwt.decode(cookie, self._secret, algorithms=['HS256']))
        except jwt.exceptions.InvalidTokenError as e:
            raise InvalidToken('Session cookie is malformed') from e

    def _pack_cookie(self, cookie_data: dict) -> str:
        return jwt.encode(cookie_data, self._secret, algorithm='HS256')


def init_app(app: object) -> None:
    """Set default configuration parameters for an application instance."""
    config = app.config     # type: ignore
    config.setdefault('REDIS_HOST', 'localhost')
    config.setdefault('REDIS_PORT', '6379')
    config.setdefault('REDIS_DATABASE', '0')
    config.setdefault('REDIS_FAKE', False)
    config.setdefault('SESSION_SECRET', 'foosecret')
    config.setdefault('SESSION_DURATION', '3600')


def _get_redis(app: object) -> redis.StrictRedis:
    config = app.config     # type: ignore
    if config.get('REDIS_FAKE'):
        import fakeredis
        # One fake server per app, so that data outlives the request.
        server = app.extensions.setdefault(   # type: ignore
            'members.fakeredis', fakeredis.FakeServer())
        return fakeredis.FakeStrictRedis(server=server)
    host = config.get('REDIS_HOST', 'localhost')
    port = int(config.get('REDIS_PORT', '6379'))
    db = int(config.get('REDIS_DATABASE', '0'))
    logger.debug('New Redis connection at %s, port %s', host, port)
    return redis.StrictRedis(host=host, port=port, db=db)


def get_session_store(app: Optional[object] = None) -> SessionStore:
    """Get a new :class:`.SessionStore` configured for ``app``."""
    if app is None:
        app = current_app._get_current_object()     # type: ignore
    config = app.config     # type: ignore
    return SessionStore(_get_redis(app), config['SESSION_SECRET'],
                        int(config.get('SESSION_DURATION', '3600')))


def current_session() -> SessionStore:
    """Get/create :class:`.SessionStore` for this context."""
    if 'session_store' not in g:
        g.session_store = get_session_store()
    return g.session_store      # type: ignore
