"""
Admin Blueprint

Content editors behind the passkey gate. Every write goes to the backend
as the signed-in user, so the backend's own policies still apply.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from app.admin import routes  # noqa: E402, F401
