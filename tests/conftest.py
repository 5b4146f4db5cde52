import pytest

from app import create_app
from app.config import TestConfig
from app.extensions import db

PASSWORD = 'secret123'
PASSKEY = '143143'


@pytest.fixture()
def app(tmp_path):
    class Config(TestConfig):
        LOCAL_STORAGE_DIR = str(tmp_path / 'storage')

    app = create_app(Config)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def backend(app):
    return app.extensions['backend']


@pytest.fixture()
def make_account(app, backend):
    """Register a local account and return its email."""
    def _make(email, password=PASSWORD):
        with app.app_context():
            backend.auth.sign_up(email, password)
        return email
    return _make


@pytest.fixture()
def signed_in_client(client, make_account):
    make_account('principal@gmail.com')
    client.post('/admin/login', data={'email': 'principal@gmail.com', 'password': PASSWORD})
    return client


@pytest.fixture()
def admin_client(signed_in_client):
    signed_in_client.post('/admin/passkey', data={'passkey': PASSKEY})
    return signed_in_client
