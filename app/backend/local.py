"""
Local Backend

In-process stand-in for the hosted backend, built on Flask-SQLAlchemy and
the filesystem. It exposes the same auth / table / rpc / storage surface
as BackendClient and reports failures with the same error codes, so the
rest of the application cannot tell the two apart.

Used for development and tests (BACKEND_MODE=local).
"""

import logging
import os
import secrets
import time
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from app.backend.query import TableQuery
from app.backend.types import APIResponse, Session
from app.errors import BackendError
from app.extensions import db
from app.models import TABLES, AdminUser, AuthSession, AuthUser

logger = logging.getLogger(__name__)

NO_ROWS_CODE = 'PGRST116'
UNIQUE_VIOLATION_CODE = '23505'
NOT_NULL_CODE = '23502'


def _coerce(column, value):
    """Convert REST-style values (ISO strings) to column types."""
    if value is None:
        return None
    if isinstance(column.type, db.DateTime) and isinstance(value, str):
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    return value


class LocalBackend:
    """Backend interface over the application's own database."""

    def __init__(self, storage_dir, session_seconds=3600, public_url_prefix='/storage'):
        self.storage_dir = storage_dir
        self.session_seconds = session_seconds
        self.public_url_prefix = public_url_prefix
        self.auth = LocalAuth(self)
        self.storage = LocalStorage(self)

    def with_token(self, access_token):
        # No row-level policies locally; every caller sees the same tables.
        return self

    def table(self, name):
        return TableQuery(self, name)

    def rpc(self, function, params=None):
        params = params or {}
        if function == 'check_admin_status':
            row = AdminUser.query.filter_by(user_id=params.get('user_uuid'), role='admin').first()
            return APIResponse(data=row is not None)
        raise BackendError(f'Could not find the function public.{function} in the schema cache',
                           code='PGRST202', status=404)

    # -- tables ------------------------------------------------------------

    def _model(self, table):
        model = TABLES.get(table)
        if model is None:
            raise BackendError(f'relation "public.{table}" does not exist', code='42P01', status=404)
        return model

    def _values(self, model, row):
        columns = model.__table__.columns
        values = {}
        for key, value in row.items():
            if key not in columns:
                raise BackendError(
                    f"Could not find the '{key}' column of '{model.__tablename__}' in the schema cache",
                    code='PGRST204', status=400)
            values[key] = _coerce(columns[key], value)
        return values

    def _filtered(self, model, query):
        q = model.query
        for column, value in query.filters:
            if column not in model.__table__.columns:
                raise BackendError(f'column {model.__tablename__}.{column} does not exist',
                                   code='42703', status=400)
            q = q.filter(getattr(model, column) == value)
        return q

    def execute(self, query):
        model = self._model(query.table)
        try:
            if query.method == 'select':
                return self._select(model, query)
            if query.method == 'insert':
                rows = query.payload if isinstance(query.payload, list) else [query.payload]
                objects = [model(**self._values(model, row)) for row in rows]
                db.session.add_all(objects)
                db.session.commit()
                data = [obj.to_dict() for obj in objects]
            elif query.method == 'upsert':
                rows = query.payload if isinstance(query.payload, list) else [query.payload]
                objects = []
                for row in rows:
                    values = self._values(model, row)
                    obj = db.session.get(model, values['id']) if values.get('id') else None
                    if obj is None:
                        obj = model(**values)
                        db.session.add(obj)
                    else:
                        for key, value in values.items():
                            setattr(obj, key, value)
                    objects.append(obj)
                db.session.commit()
                data = [obj.to_dict() for obj in objects]
            elif query.method == 'update':
                values = self._values(model, query.payload)
                objects = self._filtered(model, query).all()
                for obj in objects:
                    for key, value in values.items():
                        setattr(obj, key, value)
                db.session.commit()
                data = [obj.to_dict() for obj in objects]
            elif query.method == 'delete':
                objects = self._filtered(model, query).all()
                data = [obj.to_dict() for obj in objects]
                for obj in objects:
                    db.session.delete(obj)
                db.session.commit()
            else:
                raise ValueError(f'Unknown table operation {query.method!r}')
        except BackendError:
            db.session.rollback()
            raise
        except IntegrityError as e:
            db.session.rollback()
            if 'UNIQUE' in str(e.orig).upper():
                raise BackendError(
                    f'duplicate key value violates unique constraint on "{model.__tablename__}"',
                    code=UNIQUE_VIOLATION_CODE, status=409) from e
            raise BackendError(f'null value in column violates not-null constraint: {e.orig}',
                               code=NOT_NULL_CODE, status=400) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            raise BackendError(str(e.orig if getattr(e, 'orig', None) else e), status=400) from e

        return self._shape(data, query)

    def _select(self, model, query):
        q = self._filtered(model, query)
        total = q.count() if query.count else None
        for column, desc, nulls_first in query.orders:
            expr = getattr(model, column)
            expr = expr.desc() if desc else expr.asc()
            if nulls_first is True:
                expr = expr.nulls_first()
            elif nulls_first is False:
                expr = expr.nulls_last()
            q = q.order_by(expr)
        if query.limit_count is not None:
            q = q.limit(query.limit_count)
        if query.head:
            return APIResponse(data=None, count=total)
        return self._shape([row.to_dict() for row in q.all()], query, total)

    def _shape(self, rows, query, count=None):
        if query.is_single:
            if len(rows) != 1:
                raise BackendError('JSON object requested, multiple (or no) rows returned',
                                   code=NO_ROWS_CODE, status=406)
            return APIResponse(data=rows[0], count=count)
        return APIResponse(data=rows, count=count)


class LocalAuth:
    """Email/password accounts with opaque expiring tokens."""

    def __init__(self, backend):
        self._backend = backend

    def sign_up(self, email, password, redirect_to=None):
        if not email or '@' not in email:
            raise BackendError('Unable to validate email address: invalid format',
                               code='validation_failed', status=400)
        if not password or len(password) < 6:
            raise BackendError('Password should be at least 6 characters.',
                               code='weak_password', status=422)
        if AuthUser.query.filter_by(email=email).first():
            raise BackendError('User already registered', code='user_already_exists', status=422)

        user = AuthUser(email=email, password_hash=generate_password_hash(password, method='pbkdf2:sha256'))
        db.session.add(user)
        db.session.commit()
        logger.info('Local account created for %s (confirmation link: %s)', email, redirect_to)
        return user.to_dict()

    def sign_in_with_password(self, email, password):
        user = AuthUser.query.filter_by(email=email).first()
        if not user or not check_password_hash(user.password_hash, password):
            raise BackendError('Invalid login credentials', code='invalid_credentials', status=400)

        return self._issue(user)

    def _issue(self, user):
        token = secrets.token_urlsafe(32)
        refresh_token = secrets.token_urlsafe(16)
        expires_at = int(time.time()) + self._backend.session_seconds
        db.session.add(AuthSession(token=token, refresh_token=refresh_token,
                                   user_id=user.id, expires_at=expires_at))
        db.session.commit()
        return Session(user_id=user.id, email=user.email, access_token=token,
                       refresh_token=refresh_token, expires_at=expires_at,
                       user={'id': user.id, 'email': user.email})

    def refresh_session(self, refresh_token):
        """Rotate: the old token pair is revoked and a new one issued."""
        old = AuthSession.query.filter_by(refresh_token=refresh_token).first() if refresh_token else None
        if old is None:
            raise BackendError('Invalid Refresh Token: Refresh Token Not Found',
                               code='refresh_token_not_found', status=400)
        user = old.user
        db.session.delete(old)
        return self._issue(user)

    def sign_out(self, access_token):
        AuthSession.query.filter_by(token=access_token).delete()
        db.session.commit()

    def reset_password_for_email(self, email, redirect_to=None):
        # Same answer whether or not the account exists.
        logger.info('Password reset requested for %s (redirect: %s)', email, redirect_to)


class LocalStorage:
    def __init__(self, backend):
        self._backend = backend

    def from_(self, bucket):
        return LocalBucket(self._backend, bucket)


class LocalBucket:
    """A bucket stored as a directory."""

    def __init__(self, backend, bucket):
        self._backend = backend
        self.bucket = bucket

    def _path(self, path):
        root = os.path.realpath(os.path.join(self._backend.storage_dir, self.bucket))
        full = os.path.realpath(os.path.join(root, path))
        if not full.startswith(root + os.sep):
            raise BackendError('Invalid key', code='InvalidKey', status=400)
        return full

    def upload(self, path, data, content_type=None, cache_control='3600', upsert=False):
        full = self._path(path)
        if os.path.exists(full) and not upsert:
            raise BackendError('The resource already exists', code='Duplicate', status=409)
        os.makedirs(os.path.dirname(full), exist_ok=True)
        with open(full, 'wb') as f:
            f.write(data)
        return {'Key': f'{self.bucket}/{path}'}

    def get_public_url(self, path):
        return f'{self._backend.public_url_prefix}/{self.bucket}/{path}'

    def remove(self, paths):
        removed = []
        for path in paths:
            full = self._path(path)
            if os.path.exists(full):
                os.remove(full)
                removed.append({'name': path})
        return removed
