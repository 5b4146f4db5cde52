"""
Configuration settings for the school website
"""
import os
from datetime import timedelta


def _split_domains(value):
    return [d.strip() for d in value.split(',') if d.strip()]


class Config:
    """Flask application configuration"""
    
    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'
    
    # The admin verified flag and system settings live in the session cookie,
    # so it outlives the browser window like local storage does.
    PERMANENT_SESSION_LIFETIME = timedelta(days=30)
    
    # Hosted backend (Supabase-style REST API)
    BACKEND_MODE = os.environ.get('BACKEND_MODE') or 'remote'
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY')
    BACKEND_TIMEOUT = float(os.environ['BACKEND_TIMEOUT']) if os.environ.get('BACKEND_TIMEOUT') else None
    
    # Local backend (development only)
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'school_site.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOCAL_STORAGE_DIR = os.environ.get('LOCAL_STORAGE_DIR') or os.path.join(basedir, 'instance', 'storage')
    LOCAL_SESSION_SECONDS = 3600
    
    # Admin gate
    ADMIN_PASSKEY = os.environ.get('ADMIN_PASSKEY') or 'CHANGE_ME_IN_PRODUCTION'
    ALLOWED_DOMAINS = _split_domains(os.environ.get('ALLOWED_DOMAINS') or 'gmail.com,outlook.com,hotmail.com')
    
    # Where auth emails send people back to
    SITE_URL = os.environ.get('SITE_URL') or 'http://localhost:5000'
    
    # Uploads
    MAX_IMAGE_SIZE_MB = 5
    MAX_MATERIAL_SIZE_MB = 10
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    BACKEND_MODE = 'local'
    SUPABASE_URL = None
    SUPABASE_ANON_KEY = None
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    ADMIN_PASSKEY = '143143'
    ALLOWED_DOMAINS = ['gmail.com', 'outlook.com', 'hotmail.com']
    SITE_URL = 'http://localhost'
