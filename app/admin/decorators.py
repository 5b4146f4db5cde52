"""
Admin Decorator

Admin access needs a live backend session AND the verified flag set by
the passkey step.
"""

from functools import wraps
from flask import redirect, url_for, flash
from app.auth.session import AuthState, current_state


def admin_required(f):
    """Decorator to ensure the request is from a verified admin.
    
    - No backend session: back to the sign-in form
    - Session but no verified flag: back to the passkey step
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        state = current_state()
        if state is AuthState.SIGNED_IN_VERIFIED:
            return f(*args, **kwargs)
        if state is AuthState.SIGNED_IN_UNVERIFIED:
            flash('Enter the admin passkey to continue.', 'info')
        return redirect(url_for('auth.login'))
    return wrapper
