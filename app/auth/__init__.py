"""
Auth Blueprint

Backend sign-in, sign-up and password reset, followed by the admin
passkey step.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from app.auth import routes  # noqa: E402, F401
