"""
Flask Extensions

The signed-in backend session is tracked with Flask-Login; admin
verification is a separate session flag set by the passkey gate.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance (local backend only)
db = SQLAlchemy()

# Login manager for the backend session
login_manager = LoginManager()
