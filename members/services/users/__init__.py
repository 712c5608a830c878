"""
Credential store for member accounts.

User records live in a MongoDB collection as ``{name, email, password}``
documents, where ``password`` is a hash. Records are only ever inserted and
looked up by e-mail; nothing here updates or deletes them.
"""

from typing import Optional
from urllib.parse import quote_plus

from flask import current_app, g
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ... import domain
from ..exceptions import UserCreationFailed, UserStoreUnavailable

import logging

logger = logging.getLogger(__name__)

PROJECTION = {'name': 1, 'email': 1, 'password': 1, '_id': 1}


class UserStore(object):
    """Data access for user records in a single collection."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def insert(self, user: domain.User) -> domain.User:
        """
        Append a user record. E-mail uniqueness is not checked.

        Returns
        -------
        :class:`domain.User`
            The same user, with ``user_id`` set by the store.

        """
        try:
            result = self.collection.insert_one({
                'name': user.name,
                'email': user.email,
                'password': user.password
            })
        except PyMongoError as e:
            raise UserCreationFailed(f'Failed to insert user: {e}') from e
        logger.info('Inserted user %s', result.inserted_id)
        return user._replace(user_id=str(result.inserted_id))

    def find_by_email(self, email: str) -> Optional[domain.User]:
        """
        Get the one user with ``email``.

        More than one match is treated the same as no match.
        """
        try:
            found = list(self.collection.find({'email': email}, PROJECTION)
                                        .limit(2))
        except PyMongoError as e:
            raise UserStoreUnavailable(f'Failed to query users: {e}') from e
        if len(found) > 1:
            logger.warning('More than one user with the same e-mail')
        if len(found) != 1:
            return None
        record = found[0]
        return domain.User(name=record['name'], email=record['email'],
                           password=record['password'],
                           user_id=str(record['_id']))


def init_app(app: object) -> None:
    """Set default configuration parameters for an application instance."""
    config = app.config     # type: ignore
    config.setdefault('MONGODB_HOST', 'localhost')
    config.setdefault('MONGODB_USER', '')
    config.setdefault('MONGODB_PASSWORD', '')
    config.setdefault('MONGODB_DATABASE', 'members')
    config.setdefault('MONGODB_URI', None)
    config.setdefault('MONGODB_USER_COLLECTION', 'users')
    config.setdefault('MONGODB_FAKE', False)


def mongodb_uri(config: dict) -> str:
    """Connection string from config, with credentials quoted."""
    if config.get('MONGODB_URI'):
        return str(config['MONGODB_URI'])
    user = quote_plus(config.get('MONGODB_USER', ''))
    password = quote_plus(config.get('MONGODB_PASSWORD', ''))
    host = config.get('MONGODB_HOST', 'localhost')
    return f'mongodb+srv://{user}:{password}@{host}/'


def get_client(app: object) -> MongoClient:
    """Get the :class:`MongoClient` for ``app``, creating it once."""
    extensions = app.extensions    # type: ignore
    if 'members.mongo' not in extensions:
        config = app.config     # type: ignore
        if config.get('MONGODB_FAKE'):
            import mongomock
            extensions['members.mongo'] = mongomock.MongoClient()
        else:
            # MongoClient connects lazily, on the first operation, but an
            # SRV URI is resolved and checked here.
            try:
                extensions['members.mongo'] = MongoClient(mongodb_uri(config))
            except PyMongoError as e:
                raise UserStoreUnavailable(f'Bad user store config: {e}') from e
    return extensions['members.mongo']    # type: ignore


def get_user_store(app: Optional[object] = None) -> UserStore:
    """Get a new :class:`.UserStore` configured for ``app``."""
    if app is None:
        app = current_app._get_current_object()     # type: ignore
    config = app.config     # type: ignore
    database = get_client(app)[config['MONGODB_DATABASE']]
    return UserStore(database[config['MONGODB_USER_COLLECTION']])


def current_session() -> UserStore:
    """Get/create :class:`.UserStore` for this context."""
    if 'user_store' not in g:
        g.user_store = get_user_store()
    return g.user_store      # type: ignore
