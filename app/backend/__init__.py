"""
Backend Package

Builds the configured backend at startup and hands it out per request.
"""

from flask import current_app, has_request_context
from flask_login import current_user

from app.backend.client import BackendClient
from app.backend.local import LocalBackend
from app.backend.types import APIResponse, Session
from app.errors import ConfigurationError


def init_backend(app):
    """Create the backend for ``app``; missing URL/key is fatal."""
    mode = app.config.get('BACKEND_MODE', 'remote')
    if mode == 'local':
        backend = LocalBackend(app.config['LOCAL_STORAGE_DIR'],
                               session_seconds=app.config.get('LOCAL_SESSION_SECONDS', 3600))
    elif mode == 'remote':
        url = app.config.get('SUPABASE_URL')
        key = app.config.get('SUPABASE_ANON_KEY')
        if not url or not key:
            raise ConfigurationError(
                'Missing backend configuration. Set SUPABASE_URL and SUPABASE_ANON_KEY.')
        backend = BackendClient(url, key, timeout=app.config.get('BACKEND_TIMEOUT'))
    else:
        raise ConfigurationError(f'Unknown BACKEND_MODE {mode!r}')

    app.extensions['backend'] = backend
    return backend


def get_backend():
    """Backend for the current request, acting as the signed-in user if any."""
    backend = current_app.extensions['backend']
    if has_request_context() and current_user and current_user.is_authenticated:
        return backend.with_token(current_user.access_token)
    return backend


__all__ = ['init_backend', 'get_backend', 'BackendClient', 'LocalBackend', 'APIResponse', 'Session']
