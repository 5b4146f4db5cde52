"""
Row Helpers

Shared helpers for the local backend's tables.
"""

import uuid
from datetime import datetime, timezone

from app.extensions import db


def new_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class RowMixin:
    """Serialises a row the way the REST API returns it."""

    def to_dict(self):
        row = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            row[column.name] = value
        return row


def id_column():
    return db.Column(db.String(36), primary_key=True, default=new_id)


def created_column():
    return db.Column(db.DateTime, default=utcnow)
