"""
Provides forms for signup and login.

Validators carry short error codes as their messages, so that
``form.errors`` is a mapping of field name to error codes. The codes are
translated into user-facing text with :data:`MESSAGES`.
"""

from typing import Dict, List, Optional, Tuple

from wtforms import StringField, PasswordField, Form
from wtforms.validators import InputRequired, Email, Length, Regexp

REQUIRED = 'required'
INVALID = 'invalid'
TOO_LONG = 'too_long'

MAX_LENGTH = 20

FieldErrors = Dict[str, List[str]]
FIELD_ORDER = ['name', 'email', 'password']

MESSAGES = {
    ('name', REQUIRED): 'Name is required.',
    ('name', INVALID): 'Name may only contain letters and numbers.',
    ('name', TOO_LONG): f'Name must be at most {MAX_LENGTH} characters.',
    ('email', REQUIRED): 'Email is required.',
    ('email', INVALID): 'Email must be a valid email address.',
    ('password', REQUIRED): 'Password is required.',
    ('password', TOO_LONG): f'Password must be at most {MAX_LENGTH} characters.',
}


class SignupForm(Form):
    """Create user form."""

    name = StringField('Name', validators=[
        InputRequired(message=REQUIRED),
        Length(max=MAX_LENGTH, message=TOO_LONG),
        Regexp(r'^[A-Za-z0-9]+\Z', message=INVALID)
    ])
    email = StringField('Email', validators=[
        InputRequired(message=REQUIRED),
        Email(message=INVALID)
    ])
    password = PasswordField('Password', validators=[
        InputRequired(message=REQUIRED),
        Length(max=MAX_LENGTH, message=TOO_LONG)
    ])


class LoginForm(Form):
    """Log in form."""

    email = StringField('Email', validators=[
        InputRequired(message=REQUIRED),
        Email(message=INVALID)
    ])
    password = PasswordField('Password', validators=[
        InputRequired(message=REQUIRED),
        Length(max=MAX_LENGTH, message=TOO_LONG)
    ])


def validate_signup(form: SignupForm) -> FieldErrors:
    """Validate every field, and collect the first error code of each."""
    if form.validate():
        return {}
    return {field: [codes[0]] for field, codes in form.errors.items() if codes}


def validate_login(form: LoginForm) -> Optional[Tuple[str, str]]:
    """Return the first ``(field, code)`` error, or ``None`` if valid."""
    if form.validate():
        return None
    for field in form:
        if field.errors:
            return field.name, field.errors[0]
    return 'form', INVALID


def _field_position(field: str) -> int:
    return FIELD_ORDER.index(field) if field in FIELD_ORDER else len(FIELD_ORDER)


def error_messages(errors: FieldErrors) -> List[str]:
    """User-facing messages for field error codes, in form order."""
    messages = []
    for field in sorted(errors, key=_field_position):
        for code in errors[field]:
            messages.append(MESSAGES.get((field, code),
                                         f'{field.capitalize()} is invalid.'))
    return messages
