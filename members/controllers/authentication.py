"""
Controllers for logging in and out.

When a user logs in, a session is created in the session store and the user
is issued a session key that is stored as a cookie in their browser. On
subsequent requests, that cookie is used to load the session (see
:mod:`members.auth`).

Every login failure, whether the form is invalid, the e-mail is unknown, or
the password is wrong, produces the same response, so that the response does
not reveal which credential was wrong.
"""

from typing import Dict, Tuple, Any, Optional
from http import HTTPStatus
import logging

from werkzeug.datastructures import MultiDict
from werkzeug.exceptions import InternalServerError

from .. import domain
from ..services import passwords
from ..services.exceptions import SessionCreationFailed, \
    SessionDeletionFailed, UserStoreUnavailable
from ..services.session_store import SessionStore
from ..services.users import UserStore
from .forms import LoginForm, validate_login

logger = logging.getLogger(__name__)

ResponseData = Tuple[dict, int, dict]

LOGIN_FAILED = 'Invalid email/password combination.'
MEMBERS_PAGE = '/members'
LANDING_PAGE = '/'


def login(method: str, form_data: Optional[MultiDict],
          session: Optional[domain.Session],
          sessions: Optional[SessionStore],
          users: Optional[UserStore]) -> ResponseData:
    """
    Provide the login form, or log the user in.

    Parameters
    ----------
    method : str
        ``GET`` for the form, ``POST`` to submit it.
    form_data : MultiDict
        Should include `email` and `password` data.
    session : :class:`domain.Session` or None
        The session of the current request, replaced on success.
    sessions : :class:`.SessionStore` or None
        Only needed to submit the form.
    users : :class:`.UserStore` or None
        Only needed to submit the form.

    Returns
    -------
    dict
        Additional data to add to the response.
    int
        Status code. This should be 302 (Found) if all goes well.
    dict
        Headers to add to the response.

    """
    if method == 'GET':
        logger.debug('Request for login form')
        return {'form': LoginForm()}, HTTPStatus.OK, {}

    logger.debug('Login form submitted')
    form = LoginForm(form_data)
    data: Dict[str, Any] = {'form': form}
    error = validate_login(form)
    if error is not None:
        logger.debug('Login form is not valid: %s %s', *error)
        data.update({'error': LOGIN_FAILED})
        return data, HTTPStatus.OK, {}

    try:
        user = users.find_by_email(form.email.data)
    except UserStoreUnavailable as e:
        logger.error('Could not look up user: %s', e)
        raise InternalServerError('Cannot log in') from e
    if user is None:
        logger.info('User not found')
        data.update({'error': LOGIN_FAILED})
        return data, HTTPStatus.OK, {}

    if not passwords.check_password(form.password.data, user.password):
        logger.info('Incorrect password for %s', user.user_id)
        data.update({'error': LOGIN_FAILED})
        return data, HTTPStatus.OK, {}

    logger.info('Correct password for %s', user.user_id)
    new_session, cookie = start_session(user.name, session, sessions)
    # The UI route should use these to set cookies on the response.
    data.update({
        'cookies': {
            'auth_session_cookie': (cookie, new_session.expires)
        }
    })
    return data, HTTPStatus.FOUND, {'Location': MEMBERS_PAGE}


def logout(session: Optional[domain.Session],
           sessions: SessionStore) -> ResponseData:
    """
    Log the user out, and redirect to the landing page.

    Parameters
    ----------
    session : :class:`domain.Session` or None
        If not None, the session is destroyed.
    sessions : :class:`.SessionStore`

    Returns
    -------
    dict
        Additional data to add to the response.
    int
        Status code. This should be 302 (Found).
    dict
        Headers to add to the response.

    """
    logger.debug('Request to log out')
    if session is not None:
        try:
            sessions.destroy(session.session_id)
        except SessionDeletionFailed as e:
            logger.warning('Logout failed: %s', e)

    data = {
        'cookies': {
            'auth_session_cookie': ('', 0)
        }
    }
    return data, HTTPStatus.FOUND, {'Location': LANDING_PAGE}


def start_session(username: str, previous: Optional[domain.Session],
                  sessions: SessionStore) -> Tuple[domain.Session, str]:
    """Create an authenticated session, replacing ``previous`` if any."""
    if previous is not None:
        try:
            sessions.destroy(previous.session_id)
        except SessionDeletionFailed as e:
            logger.warning('Could not replace session %s: %s',
                           previous.session_id, e)
    try:
        session = sessions.create(username)
        cookie = sessions.generate_cookie(session)
    except SessionCreationFailed as e:
        logger.error('Could not create session: %s', e)
        raise InternalServerError('Cannot log in') from e
    logger.debug('Created session: %s', session.session_id)
    return session, cookie
