"""Provides exceptions occurring with external services."""


class SessionCreationFailed(RuntimeError):
    """Failed to create a session in the session store."""


class SessionDeletionFailed(RuntimeError):
    """Failed to delete a session in the session store."""


class UnknownSession(RuntimeError):
    """Failed to locate a session in the session store."""


class InvalidToken(ValueError):
    """Session cookie is malformed, forged, or expired."""


class ExpiredToken(InvalidToken):
    """Session exists but has expired."""


class UserCreationFailed(RuntimeError):
    """Failed to write a user record to the credential store."""


class UserStoreUnavailable(RuntimeError):
    """The credential store could not be queried."""


class PasswordHashingFailed(RuntimeError):
    """The password could not be hashed."""
