"""Tests for :mod:`members.controllers.registration`."""

from unittest import TestCase, mock
from http import HTTPStatus

import fakeredis
import mongomock
from werkzeug.datastructures import MultiDict
from werkzeug.exceptions import InternalServerError

from members.controllers.registration import signup
from members.controllers.forms import SignupForm
from members.services import passwords
from members.services.exceptions import UserCreationFailed
from members.services.session_store import SessionStore
from members.services.users import UserStore

SECRET = 'bazsecret-that-is-long-enough-for-hs256'


class TestSignup(TestCase):
    """Tests for :func:`.signup`."""

    def setUp(self):
        self.sessions = SessionStore(fakeredis.FakeStrictRedis(), SECRET, 3600)
        self.collection = mongomock.MongoClient().db.users
        self.users = UserStore(self.collection)

    def test_get(self):
        """GET request for the signup form."""
        data, code, headers = signup('GET', None, None, self.sessions,
                                     self.users, rounds=4)
        self.assertEqual(code, HTTPStatus.OK)
        self.assertIsInstance(data['form'], SignupForm)

    def test_signup(self):
        """A valid signup stores the user and logs them in."""
        form_data = MultiDict({'name': 'alice', 'email': 'a@example.com',
                               'password': 'pw123'})
        data, code, headers = signup('POST', form_data, None, self.sessions,
                                     self.users, rounds=4)
        self.assertEqual(code, HTTPStatus.FOUND)
        self.assertEqual(headers['Location'], '/members')

        record = self.collection.find_one({'email': 'a@example.com'})
        self.assertEqual(record['name'], 'alice')
        self.assertNotEqual(record['password'], 'pw123',
                            'Password is not stored as plaintext')
        self.assertTrue(passwords.check_password('pw123', record['password']))
        self.assertEqual(str(record['_id']), data['user_id'])

        cookie, expires = data['cookies']['auth_session_cookie']
        session = self.sessions.load(cookie)
        self.assertEqual(session.username, 'alice')
        self.assertTrue(session.is_authenticated)

    def test_missing_fields(self):
        """One message per missing field, and nothing is stored."""
        form_data = MultiDict({'name': 'alice'})
        data, code, headers = signup('POST', form_data, None, self.sessions,
                                     self.users, rounds=4)
        self.assertEqual(code, HTTPStatus.OK)
        self.assertEqual(data['errors'], ['Email is required.',
                                          'Password is required.'])
        self.assertNotIn('cookies', data)
        self.assertEqual(self.collection.count_documents({}), 0)

    def test_duplicate_email_is_allowed(self):
        """E-mail uniqueness is not enforced."""
        form_data = MultiDict({'name': 'alice', 'email': 'a@example.com',
                               'password': 'pw123'})
        signup('POST', form_data, None, self.sessions, self.users, rounds=4)
        signup('POST', form_data, None, self.sessions, self.users, rounds=4)
        self.assertEqual(self.collection.count_documents({}), 2)

    def test_insert_failed(self):
        """A failed write is a server error, and no session is created."""
        users = mock.MagicMock()
        users.insert.side_effect = UserCreationFailed('down')
        sessions = mock.MagicMock(wraps=self.sessions)
        form_data = MultiDict({'name': 'alice', 'email': 'a@example.com',
                               'password': 'pw123'})
        with self.assertRaises(InternalServerError):
            signup('POST', form_data, None, sessions, users, rounds=4)
        self.assertEqual(sessions.create.call_count, 0)

    def test_hash_failed(self):
        """A failure to hash is a server error, and nothing is stored."""
        form_data = MultiDict({'name': 'alice', 'email': 'a@example.com',
                               'password': 'pw123'})
        with self.assertRaises(InternalServerError):
            signup('POST', form_data, None, self.sessions, self.users,
                   rounds=1)
        self.assertEqual(self.collection.count_documents({}), 0)
