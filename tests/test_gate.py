from types import SimpleNamespace
from unittest import mock

import pytest
from flask import session
from flask_login import AnonymousUserMixin

from app.auth.gate import AuthorizationGate, ensure_admin_user, is_admin, sign_out
from app.auth.session import (
    ADMIN_VERIFIED_KEY, BACKEND_SESSION_KEY, AuthState, current_state, is_verified,
    mark_verified, start_session,
)
from app.backend.types import Session
from app.errors import AuthorizationError, BackendError
from app.models import AdminUser

GATE = AuthorizationGate('143143', ['gmail.com', 'outlook.com', 'hotmail.com'])


def _user(email):
    return SimpleNamespace(is_authenticated=True, email=email, id='user-1')


@pytest.mark.parametrize('email, allowed', [
    ('head@gmail.com', True),
    ('head@outlook.com', True),
    ('head@hotmail.com', True),
    ('head@yahoo.com', False),
    ('head@GMAIL.com', False),
    ('head@mail.gmail.com', False),
    ('head@gmail.com.evil.org', False),
    ('odd@name@gmail.com', True),
    ('gmail.com', False),
    ('', False),
    (None, False),
])
def test_domain_allow_list(email, allowed):
    assert GATE.is_domain_allowed(email) is allowed


def test_anonymous_user_is_not_signed_in():
    with pytest.raises(AuthorizationError, match='Not signed in'):
        GATE.check(AnonymousUserMixin(), '143143')
    with pytest.raises(AuthorizationError, match='Not signed in'):
        GATE.check(None, '143143')


def test_domain_is_checked_before_passkey():
    with pytest.raises(AuthorizationError) as excinfo:
        GATE.check(_user('head@yahoo.com'), '143143')
    assert str(excinfo.value) == 'Email domain not authorized for admin access'


@pytest.mark.parametrize('passkey', ['143143 ', ' 143143', '14314', '', '143144'])
def test_passkey_must_match_exactly(passkey):
    with pytest.raises(AuthorizationError) as excinfo:
        GATE.check(_user('head@gmail.com'), passkey)
    assert str(excinfo.value) == 'Invalid passkey'


def test_correct_passkey_and_domain_pass():
    GATE.check(_user('head@gmail.com'), '143143')


def test_gate_reads_config(app):
    with app.app_context():
        gate = AuthorizationGate.from_config(app.config)
    assert gate.passkey == '143143'
    assert 'gmail.com' in gate.allowed_domains


def test_ensure_admin_user_creates_one_row(app, backend):
    with app.app_context():
        assert ensure_admin_user(backend, 'user-1') is True
        assert ensure_admin_user(backend, 'user-1') is True
        assert AdminUser.query.filter_by(user_id='user-1').count() == 1
        assert AdminUser.query.filter_by(user_id='user-1').one().role == 'admin'


def test_ensure_admin_user_swallows_duplicate_insert():
    # Another tab inserted between our read and our insert.
    backend = mock.MagicMock()
    table = backend.table.return_value
    table.select.return_value.eq.return_value.single.return_value.execute.side_effect = \
        BackendError('JSON object requested, multiple (or no) rows returned', code='PGRST116')
    table.insert.return_value.execute.side_effect = \
        BackendError('duplicate key value violates unique constraint', code='23505')

    assert ensure_admin_user(backend, 'user-1') is False
    table.insert.assert_called_once()


def test_ensure_admin_user_skips_insert_when_read_fails():
    backend = mock.MagicMock()
    table = backend.table.return_value
    table.select.return_value.eq.return_value.single.return_value.execute.side_effect = \
        BackendError('permission denied for table admin_users', code='42501')

    assert ensure_admin_user(backend, 'user-1') is False
    table.insert.assert_not_called()


def test_local_backend_rejects_second_admin_row(app, backend):
    with app.app_context():
        backend.table('admin_users').insert({'user_id': 'user-1', 'role': 'admin'}).execute()
        with pytest.raises(BackendError) as excinfo:
            backend.table('admin_users').insert({'user_id': 'user-1', 'role': 'admin'}).execute()
    assert excinfo.value.code == '23505'


def test_is_admin_uses_rpc(app, backend):
    with app.app_context():
        assert is_admin(backend, 'user-1') is False
        ensure_admin_user(backend, 'user-1')
        assert is_admin(backend, 'user-1') is True


def test_is_admin_is_false_on_error():
    backend = mock.MagicMock()
    backend.rpc.side_effect = BackendError('Could not find the function', code='PGRST202')
    assert is_admin(backend, 'user-1') is False


def _backend_session(expires_at=None):
    return Session(user_id='user-1', email='head@gmail.com', access_token='tok',
                   expires_at=expires_at)


def test_sign_out_clears_flag_even_when_remote_fails(app):
    backend = mock.MagicMock()
    backend.auth.sign_out.side_effect = BackendError('network unreachable')

    with app.test_request_context():
        start_session(_backend_session())
        mark_verified()
        assert is_verified()

        error = sign_out(backend, 'tok')

        assert str(error) == 'network unreachable'
        assert ADMIN_VERIFIED_KEY not in session
        assert BACKEND_SESSION_KEY not in session
        assert current_state() is AuthState.ANONYMOUS
    backend.auth.sign_out.assert_called_once_with('tok')


def test_sign_out_without_token_skips_remote(app):
    backend = mock.MagicMock()
    with app.test_request_context():
        assert sign_out(backend, None) is None
    backend.auth.sign_out.assert_not_called()


def test_new_session_starts_unverified(app):
    with app.test_request_context():
        mark_verified()
        start_session(_backend_session())
        assert current_state() is AuthState.SIGNED_IN_UNVERIFIED
        mark_verified()
        assert current_state() is AuthState.SIGNED_IN_VERIFIED
