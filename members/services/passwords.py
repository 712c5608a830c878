"""
Salted, adaptive password hashes (bcrypt).

bcrypt only looks at the first 72 bytes of its input, and recent releases
refuse anything longer. Passwords are therefore reduced to a base64-encoded
SHA-256 digest (44 bytes) before they are handed to bcrypt, so that every
password, whatever its encoded length, is hashed in full.
"""

from base64 import b64encode
import hashlib
import logging

import bcrypt

from .exceptions import PasswordHashingFailed

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


def _digest(password: str) -> bytes:
    return b64encode(hashlib.sha256(password.encode('utf-8')).digest())


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Generate a secure hash of a password.

    Each hash carries its own random salt and the work factor ``rounds``.
    """
    try:
        hashed = bcrypt.hashpw(_digest(password),
                               bcrypt.gensalt(rounds=rounds))
    except (ValueError, TypeError, AttributeError) as e:
        raise PasswordHashingFailed(f'Could not hash password: {e}') from e
    return hashed.decode('ascii')


def check_password(password: str, hashed: str) -> bool:
    """Check a password against a hash made by :func:`hash_password`."""
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(_digest(password), hashed.encode('ascii'))
    except (ValueError, TypeError) as e:
        logger.debug('Password check failed: %s', e)
        return False
