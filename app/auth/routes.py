"""
Auth Routes

Backend sign-in / sign-up followed by the admin passkey step.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, current_app
from flask_login import current_user
from app.auth import auth_bp
from app.auth.gate import verify_passkey, sign_out, sign_up, reset_password
from app.auth.session import AuthState, current_state, start_session
from app.backend import get_backend
from app.errors import AuthorizationError, BackendError
from app.services.settings import is_signup_disabled

logger = logging.getLogger(__name__)


def _render_login(**context):
    return render_template('auth/login.html',
                           state=current_state(),
                           signup_disabled=is_signup_disabled(),
                           **context)


@auth_bp.route('/admin/login', methods=['GET', 'POST'])
def login():
    """Sign in with the backend; the passkey step follows on the same page."""
    state = current_state()
    if state is AuthState.SIGNED_IN_VERIFIED:
        return redirect(url_for('admin.dashboard'))

    if request.method == 'POST' and state is AuthState.ANONYMOUS:
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password.', 'danger')
            return _render_login(email=email)

        try:
            backend_session = current_app.extensions['backend'].auth.sign_in_with_password(email, password)
        except BackendError as e:
            flash(f'Sign In Failed: {e}', 'danger')
            return _render_login(email=email)

        start_session(backend_session)
        logger.info('Signed in %s', email)
        return redirect(url_for('auth.login'))

    return _render_login()


@auth_bp.route('/admin/signup', methods=['POST'])
def signup():
    """Create a backend account; the user confirms it by email."""
    if is_signup_disabled():
        flash('Signup is currently disabled. Please contact an administrator.', 'danger')
        return redirect(url_for('auth.login'))

    email = request.form.get('email', '').strip()
    password = request.form.get('password', '')
    confirm_password = request.form.get('confirm_password', '')

    if password != confirm_password:
        flash('Passwords do not match.', 'danger')
        return _render_login(email=email, tab='signup')

    try:
        sign_up(current_app.extensions['backend'], email, password)
    except BackendError as e:
        flash(f'Signup Failed: {e}', 'danger')
        return _render_login(email=email, tab='signup')

    flash('Signup Successful. Please check your email to confirm your account.', 'success')
    return redirect(url_for('auth.login'))


@auth_bp.route('/admin/passkey', methods=['POST'])
def passkey():
    """Second step: allowed email domain plus the shared passkey."""
    try:
        verify_passkey(get_backend(), current_user, request.form.get('passkey', ''))
    except AuthorizationError as e:
        flash(str(e), 'danger')
        return redirect(url_for('auth.login'))

    flash('Welcome, Administrator!', 'success')
    return redirect(url_for('admin.dashboard'))


@auth_bp.route('/admin/reset-password', methods=['GET', 'POST'])
def reset_password_request():
    """Ask the backend to email a password reset link."""
    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        if not email:
            flash('Please enter your email address.', 'danger')
            return render_template('auth/reset_password.html')
        try:
            reset_password(current_app.extensions['backend'], email)
        except BackendError as e:
            flash(str(e), 'danger')
            return render_template('auth/reset_password.html', email=email)
        flash('If an account exists for that email, a reset link is on its way.', 'info')
        return redirect(url_for('auth.login'))

    return render_template('auth/reset_password.html')


@auth_bp.route('/admin/logout')
def logout():
    """Sign out locally, then remotely; the local flag is gone either way."""
    token = current_user.access_token if current_user.is_authenticated else None
    sign_out(current_app.extensions['backend'], token)
    flash('You have been logged out of the admin panel.', 'info')
    return redirect(url_for('auth.login'))
