"""
Auth Models

Accounts, sessions and admin records for the local backend.
"""

from app.extensions import db
from app.models.base import RowMixin, created_column, id_column


class AuthUser(RowMixin, db.Model):
    """An account known to the auth service"""
    __tablename__ = 'auth_users'
    
    id = id_column()
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = created_column()
    
    def __repr__(self):
        return f'<AuthUser {self.email}>'


class AuthSession(db.Model):
    """An issued access token"""
    __tablename__ = 'auth_sessions'
    
    token = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey('auth_users.id'), nullable=False)
    refresh_token = db.Column(db.String(64), unique=True, index=True)
    expires_at = db.Column(db.Integer, nullable=False)
    
    user = db.relationship('AuthUser')


class AdminUser(RowMixin, db.Model):
    """Links an auth user to the admin role"""
    __tablename__ = 'admin_users'
    
    id = id_column()
    user_id = db.Column(db.String(36), unique=True, nullable=False)
    role = db.Column(db.String(50), default='admin')
    created_at = created_column()
    
    def __repr__(self):
        return f'<AdminUser {self.user_id} {self.role}>'
