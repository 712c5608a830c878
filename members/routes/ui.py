"""Provides Flask integration for the members site user interface."""

from typing import Optional, Tuple
from datetime import timedelta
from http import HTTPStatus

from flask import Blueprint, render_template, request, make_response, \
    redirect, current_app, Response
from werkzeug.exceptions import HTTPException, InternalServerError, NotFound

from .. import domain
from ..controllers import authentication, pages, registration
from ..services import session_store, users
from ..services.exceptions import UserStoreUnavailable

import logging

logger = logging.getLogger(__name__)
blueprint = Blueprint('ui', __name__, url_prefix='')


def current_auth() -> Optional[domain.Session]:
    """The session loaded by :class:`members.auth.Auth`, if any."""
    return getattr(request, 'auth', None)


def set_cookies(response: Response, data: dict) -> None:
    """
    Update a :class:`.Response` with cookies in controller data.

    Contollers seeking to update cookies must include a 'cookies' key
    in their response data.
    """
    cookies = data.pop('cookies', None)
    if cookies is None:
        return None
    for cookie_key, (cookie_value, expires) in cookies.items():
        cookie_name = current_app.config[f'{cookie_key.upper()}_NAME']
        max_age = timedelta(seconds=expires)
        logger.debug('Set cookie %s, max_age %s', cookie_name, max_age)
        domain = current_app.config.get('AUTH_SESSION_COOKIE_DOMAIN')
        params = dict(httponly=True, domain=domain)
        if current_app.config['AUTH_SESSION_COOKIE_SECURE']:
            # Setting samesite to lax, to allow reasonable links to
            # authenticated views using GET requests.
            params.update({'secure': True, 'samesite': 'Lax'})
        response.set_cookie(cookie_name, cookie_value, max_age=max_age,
                            **params)


def _stores() -> Tuple[Optional[session_store.SessionStore],
                       Optional[users.UserStore]]:
    """Session and user stores, only for form submissions.

    Rendering an empty form must not depend on either store being reachable.
    """
    if request.method != 'POST':
        return None, None
    try:
        return session_store.current_session(), users.current_session()
    except UserStoreUnavailable as e:
        raise InternalServerError('User store unavailable') from e


def _redirect(data: dict, headers: dict, code: int) -> Response:
    response = make_response(redirect(headers['Location'], code=code))
    set_cookies(response, data)
    return response


@blueprint.after_request
def apply_response_headers(response: Response) -> Response:
    """Prevent UI redress attacks."""
    response.headers['Content-Security-Policy'] = "frame-ancestors 'none'"
    response.headers['X-Frame-Options'] = 'DENY'
    return response


@blueprint.route('/', methods=['GET'])
def landing() -> Response:
    """Landing page; its content depends on whether the user is logged in."""
    data, code, headers = pages.landing(current_auth())
    return make_response(render_template('members/landing.html', **data),
                         code, headers)


@blueprint.route('/signup', methods=['GET'])
@blueprint.route('/signupSubmit', methods=['POST'])
def signup() -> Response:
    """Interface for creating new accounts."""
    sessions, user_store = _stores()
    data, code, headers = registration.signup(
        request.method, request.form, current_auth(), sessions, user_store,
        rounds=current_app.config['BCRYPT_ROUNDS']
    )
    # Flask puts cookie-setting methods on the response, so we do that here
    # instead of in the controller.
    if code == HTTPStatus.FOUND:
        return _redirect(data, headers, code)
    template = 'members/signup_failed.html' if data.get('errors') \
        else 'members/signup.html'
    return make_response(render_template(template, **data), code, headers)


@blueprint.route('/login', methods=['GET'])
@blueprint.route('/loginSubmit', methods=['POST'])
def login() -> Response:
    """User can log in with e-mail and password."""
    sessions, user_store = _stores()
    data, code, headers = authentication.login(
        request.method, request.form, current_auth(), sessions, user_store
    )
    if code == HTTPStatus.FOUND:
        return _redirect(data, headers, code)
    template = 'members/login_failed.html' if data.get('error') \
        else 'members/login.html'
    return make_response(render_template(template, **data), code, headers)


@blueprint.route('/members', methods=['GET'])
def members() -> Response:
    """Members area; anonymous users are sent back to the landing page."""
    data, code, headers = pages.members(current_auth(),
                                        current_app.config['MEMBER_IMAGES'])
    if code == HTTPStatus.FOUND:
        return _redirect(data, headers, code)
    return make_response(render_template('members/members.html', **data),
                         code, headers)


@blueprint.route('/logout', methods=['GET'])
def logout() -> Response:
    """Log out, and go back to the landing page."""
    data, code, headers = authentication.logout(
        current_auth(), session_store.current_session()
    )
    logger.debug('Redirecting to %s: %i', headers.get('Location'), code)
    return _redirect(data, headers, code)


@blueprint.app_errorhandler(NotFound)
def handle_not_found(error: HTTPException) -> Response:
    """Any unmatched route gets a plain-text 404."""
    response = make_response('Page not found - 404', HTTPStatus.NOT_FOUND)
    response.mimetype = 'text/plain'
    return response


@blueprint.app_errorhandler(InternalServerError)
def handle_internal_server_error(error: InternalServerError) -> Response:
    """Infrastructure failures get a generic page; nothing is retried."""
    original = getattr(error, 'original_exception', None) or error.__cause__
    logger.error('Internal server error: %s', original or error)
    return make_response(render_template('members/error.html'),
                         HTTPStatus.INTERNAL_SERVER_ERROR)
