"""Tests for :mod:`members.services.passwords`."""

from unittest import TestCase

from hypothesis import given, settings
from hypothesis import strategies as st

from members.services import passwords
from members.services.exceptions import PasswordHashingFailed

ROUNDS = 4

password_text = st.text(
    alphabet=st.characters(exclude_categories=('Cs',)),
    min_size=1, max_size=20
)


class TestHashPassword(TestCase):
    """Hashes are salted bcrypt hashes."""

    def test_hash_is_not_plaintext(self):
        """The hash never contains the password as-is."""
        hashed = passwords.hash_password('pw123', rounds=ROUNDS)
        self.assertNotEqual(hashed, 'pw123')
        self.assertNotIn('pw123', hashed)
        self.assertTrue(hashed.startswith('$2b$04$'), 'Uses the work factor')

    def test_hashes_are_salted(self):
        """The same password hashes differently each time."""
        self.assertNotEqual(passwords.hash_password('pw123', rounds=ROUNDS),
                            passwords.hash_password('pw123', rounds=ROUNDS))

    def test_default_work_factor(self):
        """The default work factor is 12."""
        self.assertEqual(passwords.DEFAULT_ROUNDS, 12)

    def test_long_encoded_password(self):
        """Passwords past bcrypt's 72-byte limit are hashed in full."""
        password = '\U0001F600' * 20
        self.assertEqual(len(password.encode('utf-8')), 80)
        hashed = passwords.hash_password(password, rounds=ROUNDS)
        self.assertTrue(passwords.check_password(password, hashed))
        self.assertFalse(passwords.check_password(password[:-1] + 'x',
                                                  hashed))

    def test_hash_failure(self):
        """Passwords that bcrypt refuses raise :class:`.PasswordHashingFailed`."""
        with self.assertRaises(PasswordHashingFailed):
            passwords.hash_password('pw123', rounds=1)


class TestCheckPassword(TestCase):
    """Passwords are verified against their hash."""

    @classmethod
    def setUpClass(cls):
        cls.hashed = passwords.hash_password('pw123', rounds=ROUNDS)

    def test_correct_password(self):
        """The right password verifies."""
        self.assertTrue(passwords.check_password('pw123', self.hashed))

    def test_wrong_password(self):
        """The wrong password does not."""
        self.assertFalse(passwords.check_password('pw124', self.hashed))

    def test_empty_values(self):
        """Empty passwords or hashes never verify."""
        self.assertFalse(passwords.check_password('', self.hashed))
        self.assertFalse(passwords.check_password('pw123', ''))

    def test_malformed_hash(self):
        """A hash that is not bcrypt does not verify."""
        self.assertFalse(passwords.check_password('pw123', 'notahash'))

    @settings(max_examples=20, deadline=None)
    @given(password=password_text)
    def test_round_trip(self, password):
        """Any password verifies against its own hash, and not another's."""
        hashed = passwords.hash_password(password, rounds=ROUNDS)
        self.assertTrue(passwords.check_password(password, hashed))
        self.assertFalse(passwords.check_password(password + 'x', hashed))
