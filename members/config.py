"""Flask configuration."""
import secrets
import os

#################### MongoDB credential store ####################
MONGODB_HOST = os.environ.get('MONGODB_HOST', 'localhost')
MONGODB_USER = os.environ.get('MONGODB_USER', '')
MONGODB_PASSWORD = os.environ.get('MONGODB_PASSWORD', '')
MONGODB_DATABASE = os.environ.get('MONGODB_DATABASE', 'members')

MONGODB_URI = os.environ.get('MONGODB_URI', None)
"""Full connection string for the user database.

If not set, it is built from `MONGODB_USER`, `MONGODB_PASSWORD` and
`MONGODB_HOST` as a ``mongodb+srv://`` URI."""

MONGODB_USER_COLLECTION = os.environ.get('MONGODB_USER_COLLECTION', 'users')

MONGODB_FAKE = bool(int(os.environ.get('MONGODB_FAKE', '0')))
"""Use the mongomock library instead of a MongoDB service.

Useful for testing and dev. Needs the ``dev`` extra (``pip install .[dev]``)."""


#################### Redis session store ####################
REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = os.environ.get('REDIS_PORT', '6379')
REDIS_DATABASE = os.environ.get('REDIS_DATABASE', '0')

REDIS_FAKE = bool(int(os.environ.get('REDIS_FAKE', '0')))
"""Use the FakeRedis library instead of a redis service.

Useful for testing and dev. Needs the ``dev`` extra (``pip install .[dev]``)."""

SESSION_SECRET = os.environ.get('SESSION_SECRET', secrets.token_urlsafe(32))
"""Signs the session cookie and the session records."""

SESSION_DURATION = os.environ.get('SESSION_DURATION', '3600')
"""Lifetime of a session in seconds. Refreshed by every new login."""

AUTH_SESSION_COOKIE_NAME = os.environ.get('AUTH_SESSION_COOKIE_NAME',
                                          'members_session')
AUTH_SESSION_COOKIE_DOMAIN = os.environ.get('AUTH_SESSION_COOKIE_DOMAIN', None)
AUTH_SESSION_COOKIE_SECURE = bool(int(os.environ.get('AUTH_SESSION_COOKIE_SECURE', '0')))


#################### Passwords ####################
BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', '12'))
"""Work factor for password hashes. Only lower this in tests."""


#################### Members area ####################
MEMBER_IMAGES = [
    name.strip() for name
    in os.environ.get('MEMBER_IMAGES', 'cat1.svg,cat2.svg,cat3.svg').split(',')
    if name.strip()
]
"""Static images, one of which is shown at random on the members page."""


#################### Minor configs ##############################
SECRET_KEY = os.environ.get('SECRET_KEY', SESSION_SECRET)
"""Sets the `Flask` secret key. Not used for member sessions."""

LOGLEVEL = os.environ.get('LOGLEVEL', 'INFO')

PORT = int(os.environ.get('PORT', '3000'))
"""Port for the development server in :mod:`wsgi`."""

VERSION = '0.1.0'
