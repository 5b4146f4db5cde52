"""
School Website - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask
from app.extensions import db, login_manager
from app.config import Config


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance

    Raises:
        ConfigurationError: the remote backend's URL or key is missing
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    from app.backend import init_backend
    from app.auth.session import load_session_user

    if app.config['BACKEND_MODE'] == 'local':
        db.init_app(app)
    init_backend(app)

    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.user_loader(load_session_user)

    # Register blueprints
    from app.public import public_bp
    from app.auth import auth_bp
    from app.admin import admin_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')

    # Context processor for the admin state
    @app.context_processor
    def inject_auth_state():
        """Inject the authorization state into templates."""
        from app.auth.session import AuthState, current_state
        state = current_state()
        return dict(auth_state=state, is_admin=state is AuthState.SIGNED_IN_VERIFIED)

    # Create local backend tables
    if app.config['BACKEND_MODE'] == 'local':
        with app.app_context():
            from app import models  # noqa: F401
            os.makedirs(app.instance_path, exist_ok=True)
            os.makedirs(app.config['LOCAL_STORAGE_DIR'], exist_ok=True)
            db.create_all()

    return app
