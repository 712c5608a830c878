"""
Controllers for creating new accounts.

A successful signup stores the user with a hashed password, and logs them in
straight away.
"""

from typing import Dict, Tuple, Any, Optional
from http import HTTPStatus
import logging

from werkzeug.datastructures import MultiDict
from werkzeug.exceptions import InternalServerError

from .. import domain
from ..services import passwords
from ..services.exceptions import PasswordHashingFailed, UserCreationFailed
from ..services.session_store import SessionStore
from ..services.users import UserStore
from .authentication import start_session, MEMBERS_PAGE
from .forms import SignupForm, validate_signup, error_messages

logger = logging.getLogger(__name__)

ResponseData = Tuple[dict, int, dict]


def signup(method: str, form_data: Optional[MultiDict],
           session: Optional[domain.Session],
           sessions: Optional[SessionStore], users: Optional[UserStore],
           rounds: int = passwords.DEFAULT_ROUNDS) -> ResponseData:
    """Handle requests for the signup view."""
    if method == 'GET':
        return {'form': SignupForm()}, HTTPStatus.OK, {}

    logger.debug('Signup form submitted')
    form = SignupForm(form_data)
    data: Dict[str, Any] = {'form': form}
    errors = validate_signup(form)
    if errors:
        logger.debug('Signup form not valid: %s', errors)
        data.update({'errors': error_messages(errors), 'field_errors': errors})
        return data, HTTPStatus.OK, {}

    try:
        hashed = passwords.hash_password(form.password.data, rounds=rounds)
    except PasswordHashingFailed as e:
        raise InternalServerError('Signup failed') from e

    # E-mail addresses are not checked for uniqueness.
    try:
        user = users.insert(domain.User(name=form.name.data,
                                        email=form.email.data,
                                        password=hashed))
    except UserCreationFailed as e:
        logger.error('Could not create user: %s', e)
        raise InternalServerError('Signup failed') from e

    new_session, cookie = start_session(user.name, session, sessions)
    data.update({
        'cookies': {
            'auth_session_cookie': (cookie, new_session.expires)
        },
        'user_id': user.user_id
    })
    return data, HTTPStatus.FOUND, {'Location': MEMBERS_PAGE}
