"""
Auth Session State

The backend session is held in the signed cookie session and exposed to
Flask-Login as a SessionUser. Admin verification is a separate boolean
flag in the same cookie; both must be present for the verified state.
"""

import logging
from enum import Enum

from flask import current_app, session
from flask_login import UserMixin, current_user, login_user, logout_user

from app.backend.types import Session
from app.errors import BackendError

logger = logging.getLogger(__name__)

BACKEND_SESSION_KEY = 'backend_session'
ADMIN_VERIFIED_KEY = 'admin_verified'


class AuthState(Enum):
    ANONYMOUS = 'anonymous'
    SIGNED_IN_UNVERIFIED = 'signed-in-unverified'
    SIGNED_IN_VERIFIED = 'signed-in-verified'


class SessionUser(UserMixin):
    """The signed-in backend user, as seen by Flask-Login."""

    def __init__(self, backend_session):
        self.backend_session = backend_session

    def get_id(self):
        return self.backend_session.user_id

    @property
    def id(self):
        return self.backend_session.user_id

    @property
    def email(self):
        return self.backend_session.email

    @property
    def access_token(self):
        return self.backend_session.access_token

    def __repr__(self):
        return f'<SessionUser {self.email}>'


def load_session_user(user_id):
    """Flask-Login user loader.

    An expired access token is refreshed and the verified flag kept. Only
    a failed refresh means the user is signed out: then both the session
    and the verified flag are dropped.
    """
    data = session.get(BACKEND_SESSION_KEY)
    if not data or data.get('user_id') != user_id:
        return None

    backend_session = Session.from_dict(data)
    if backend_session.is_expired():
        backend_session = _refresh(backend_session)
        if backend_session is None:
            return None
    return SessionUser(backend_session)


def _refresh(expired):
    try:
        if not expired.refresh_token:
            raise BackendError('No refresh token')
        fresh = current_app.extensions['backend'].auth.refresh_session(expired.refresh_token)
    except BackendError as e:
        logger.info('Backend session for %s expired and could not be refreshed: %s', expired.email, e)
        clear_local_state()
        return None
    if fresh.user_id != expired.user_id:
        clear_local_state()
        return None
    session[BACKEND_SESSION_KEY] = fresh.to_dict()
    logger.debug('Refreshed backend session for %s', fresh.email)
    return fresh


def start_session(backend_session):
    """Remember a fresh backend session; the user starts unverified."""
    session.permanent = True
    session[BACKEND_SESSION_KEY] = backend_session.to_dict()
    session.pop(ADMIN_VERIFIED_KEY, None)
    login_user(SessionUser(backend_session))


def is_verified():
    return session.get(ADMIN_VERIFIED_KEY) is True


def mark_verified():
    session.permanent = True
    session[ADMIN_VERIFIED_KEY] = True


def clear_local_state():
    """Forget the verified flag and the backend session."""
    session.pop(ADMIN_VERIFIED_KEY, None)
    session.pop(BACKEND_SESSION_KEY, None)
    session.pop('_user_id', None)


def end_session():
    clear_local_state()
    logout_user()


def current_state():
    """Authorization state, re-derived from the session on every call."""
    if not current_user or not current_user.is_authenticated:
        return AuthState.ANONYMOUS
    if is_verified():
        return AuthState.SIGNED_IN_VERIFIED
    return AuthState.SIGNED_IN_UNVERIFIED
