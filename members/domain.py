"""Defines the core data structures for the members site."""

from typing import Any, Dict, NamedTuple, Optional
from datetime import datetime

import dateutil.parser
from pytz import UTC


class User(NamedTuple):
    """A member, as stored in the credential store."""

    name: str
    email: str
    password: str
    """Password hash. Plaintext passwords are never stored."""

    user_id: Optional[str] = None


class Session(NamedTuple):
    """Represents a logical login, held server-side."""

    session_id: str
    username: str
    start_time: datetime
    end_time: datetime
    nonce: str
    authenticated: bool = True

    @property
    def expires(self) -> int:
        """Seconds remaining until the session expires."""
        remaining = (self.end_time - datetime.now(tz=UTC)).total_seconds()
        return max(int(remaining), 0)

    @property
    def expired(self) -> bool:
        """Expired sessions are no longer valid."""
        return self.end_time <= datetime.now(tz=UTC)

    @property
    def is_authenticated(self) -> bool:
        """The only authorization state: flagged, and not yet expired."""
        return self.authenticated and not self.expired


def session_to_dict(session: Session) -> Dict[str, Any]:
    """Serialize a :class:`.Session` for the key-value store."""
    data = session._asdict()
    data['start_time'] = session.start_time.isoformat()
    data['end_time'] = session.end_time.isoformat()
    return data


def session_from_dict(data: Dict[str, Any]) -> Session:
    """Rebuild a :class:`.Session` from :func:`session_to_dict` output."""
    return Session(
        session_id=data['session_id'],
        username=data['username'],
        start_time=dateutil.parser.parse(data['start_time']),
        end_time=dateutil.parser.parse(data['end_time']),
        nonce=data['nonce'],
        authenticated=bool(data.get('authenticated', False))
    )
