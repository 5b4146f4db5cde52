"""
Admin Authorization Gate

Two checks stand between a signed-in user and the admin dashboard: the
email domain must be on the allow-list and the entered passkey must equal
the configured one. This is a convenience gate only; the backend's own
row-level policies are what actually protect the tables.
"""

import logging
from datetime import datetime, timezone

from flask import current_app

from app.auth.session import end_session, mark_verified
from app.errors import AuthorizationError, BackendError

logger = logging.getLogger(__name__)

NOT_SIGNED_IN = 'Not signed in'
DOMAIN_NOT_ALLOWED = 'Email domain not authorized for admin access'
INVALID_PASSKEY = 'Invalid passkey'

NO_ROWS_CODE = 'PGRST116'


class AuthorizationGate:
    """Domain allow-list plus shared passkey."""

    def __init__(self, passkey, allowed_domains):
        self.passkey = passkey
        self.allowed_domains = list(allowed_domains)

    @classmethod
    def from_config(cls, config):
        return cls(config['ADMIN_PASSKEY'], config['ALLOWED_DOMAINS'])

    def is_domain_allowed(self, email):
        """True iff the part after the last '@' is exactly an allowed domain."""
        if not email or '@' not in email:
            return False
        domain = email.rpartition('@')[2]
        return domain in self.allowed_domains

    def check(self, user, passkey):
        """Raise AuthorizationError unless ``user`` may enter with ``passkey``."""
        if user is None or not getattr(user, 'is_authenticated', False):
            raise AuthorizationError(NOT_SIGNED_IN)
        if not self.is_domain_allowed(user.email):
            raise AuthorizationError(DOMAIN_NOT_ALLOWED)
        if passkey != self.passkey:
            raise AuthorizationError(INVALID_PASSKEY)


def get_gate():
    return AuthorizationGate.from_config(current_app.config)


def verify_passkey(backend, user, passkey):
    """Run the gate; on success set the verified flag and ensure the admin row."""
    get_gate().check(user, passkey)
    mark_verified()
    ensure_admin_user(backend, user.id)
    logger.info('Admin access verified for %s', user.email)


def ensure_admin_user(backend, user_id):
    """Create the admin_users row for ``user_id`` if it is missing.

    Read-then-insert, not atomic: two tabs can both miss the row and both
    insert. Whatever the backend says about the second insert is logged
    and dropped; callers never see an error from here.
    """
    try:
        try:
            existing = backend.table('admin_users').select('id').eq('user_id', user_id).single().execute()
        except BackendError as e:
            if e.code != NO_ROWS_CODE:
                logger.error('Error checking admin user %s: %s', user_id, e)
                return False
            existing = None

        if existing is None or not existing.data:
            backend.table('admin_users').insert({
                'user_id': user_id,
                'role': 'admin',
                'created_at': datetime.now(timezone.utc).isoformat(),
            }).execute()
            logger.info('Created admin user record for %s', user_id)
        return True
    except BackendError as e:
        logger.warning('Could not create admin user %s: %s', user_id, e)
        return False


def is_admin(backend, user_id):
    """Ask the backend's check_admin_status procedure."""
    try:
        return bool(backend.rpc('check_admin_status', {'user_uuid': user_id}).data)
    except BackendError as e:
        logger.warning('Admin status check failed for %s: %s', user_id, e)
        return False


def sign_out(backend, access_token):
    """Clear local state first, then tell the backend.

    The local flag stays cleared whatever the remote call returns; the
    remote error, if any, is handed back to the caller.
    """
    end_session()
    if not access_token:
        return None
    try:
        backend.auth.sign_out(access_token)
    except BackendError as e:
        logger.warning('Remote sign-out failed: %s', e)
        return e
    return None


def sign_up(backend, email, password):
    redirect_to = current_app.config['SITE_URL'].rstrip('/') + '/admin/login'
    return backend.auth.sign_up(email, password, redirect_to=redirect_to)


def reset_password(backend, email):
    redirect_to = current_app.config['SITE_URL'].rstrip('/') + '/admin/reset-password'
    backend.auth.reset_password_for_email(email, redirect_to=redirect_to)
