"""Credential checks for the login page."""

from __future__ import annotations

from typing import Optional

from flask import current_app
from flask_login import login_user
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash

from app.forms import LoginForm
from app.models import User

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials. Please try again."
INACTIVE_ACCOUNT_MESSAGE = "Please contact an administrator to activate your account."
GENERIC_AUTH_MESSAGE = "Something went wrong. Please try again later."


class AuthError(Exception):
    """Base class for failures raised while signing a user in."""

    type = "AuthError"


class CredentialsSignin(AuthError):
    """The email/password pair did not match a user."""

    type = "CredentialsSignin"


class AccountInactive(AuthError):
    """The user exists but has been deactivated."""

    type = "AccountInactive"


def sign_in(email: str, password: str) -> User:
    """Return the user for valid credentials and start their session."""

    try:
        user = User.query.filter_by(email=email).first()
    except SQLAlchemyError as exc:
        current_app.logger.exception("Failed to load user %s", email)
        raise AuthError("User lookup failed") from exc

    if user is None or not check_password_hash(user.password, password):
        raise CredentialsSignin()
    if not user.active:
        raise AccountInactive()

    login_user(user)
    return user


def authenticate(form: LoginForm) -> Optional[str]:
    """Sign in with the submitted credentials.

    Returns ``None`` on success, otherwise the message to show on the login
    page.  Errors that are not :class:`AuthError` propagate.
    """

    try:
        if not form.validate_on_submit():
            raise CredentialsSignin()
        sign_in(form.email.data, form.password.data)
    except AuthError as error:
        if error.type == "CredentialsSignin":
            return INVALID_CREDENTIALS_MESSAGE
        if error.type == "AccountInactive":
            return INACTIVE_ACCOUNT_MESSAGE
        return GENERIC_AUTH_MESSAGE
    return None
