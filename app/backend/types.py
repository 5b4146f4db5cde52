"""
Backend Types

Plain records returned by the backend client.
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class APIResponse:
    """Result of a table query or RPC call."""

    data: Any = None
    count: Optional[int] = None


@dataclass
class Session:
    """A signed-in backend session."""

    user_id: str
    email: str
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    user: dict = field(default_factory=dict)

    def is_expired(self, now=None):
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return now >= self.expires_at

    def to_dict(self):
        data = asdict(self)
        # The raw user payload can be large; the cookie only needs identity.
        data.pop('user', None)
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            user_id=data['user_id'],
            email=data.get('email') or '',
            access_token=data['access_token'],
            refresh_token=data.get('refresh_token'),
            expires_at=data.get('expires_at'),
        )

    @classmethod
    def from_token_response(cls, payload):
        """Build a session from the auth service's token grant response."""
        user = payload.get('user') or {}
        expires_at = payload.get('expires_at')
        if expires_at is None and payload.get('expires_in') is not None:
            expires_at = int(time.time()) + int(payload['expires_in'])
        return cls(
            user_id=user.get('id'),
            email=user.get('email') or '',
            access_token=payload['access_token'],
            refresh_token=payload.get('refresh_token'),
            expires_at=expires_at,
            user=user,
        )
