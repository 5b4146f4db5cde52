"""
Hosted Backend Client

Thin client for a Supabase-style backend: GoTrue auth, PostgREST tables
and RPC, and object storage, all spoken over HTTP with requests.

Failed calls raise BackendError with the backend's own message. Nothing
is retried.
"""

import logging
from urllib.parse import quote

import requests

from app.backend.query import TableQuery
from app.backend.types import APIResponse, Session
from app.errors import BackendError

logger = logging.getLogger(__name__)


def _format_filter_value(value):
    if value is None:
        return 'is.null'
    if isinstance(value, bool):
        return 'eq.' + ('true' if value else 'false')
    return f'eq.{value}'


def _format_order(orders):
    parts = []
    for column, desc, nulls_first in orders:
        part = f"{column}.{'desc' if desc else 'asc'}"
        if nulls_first is True:
            part += '.nullsfirst'
        elif nulls_first is False:
            part += '.nullslast'
        parts.append(part)
    return ','.join(parts)


def _parse_count(content_range):
    """Read the total from a ``Content-Range: 0-9/42`` header."""
    if not content_range or '/' not in content_range:
        return None
    total = content_range.rsplit('/', 1)[1]
    return int(total) if total.isdigit() else None


def _error_from_response(resp):
    try:
        payload = resp.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    message = (payload.get('message') or payload.get('msg')
               or payload.get('error_description') or payload.get('error')
               or f'Backend error {resp.status_code}')
    code = payload.get('code') or payload.get('error_code')
    return BackendError(message, code=code, status=resp.status_code)


class BackendClient:
    """Client for the hosted backend's REST surface."""

    def __init__(self, url, key, timeout=None, access_token=None, http=None):
        self.url = url.rstrip('/')
        self.key = key
        self.timeout = timeout
        self.access_token = access_token
        self.http = http or requests.Session()
        self.auth = AuthAPI(self)
        self.storage = StorageAPI(self)

    def with_token(self, access_token):
        """Return a client that acts as the signed-in user."""
        return BackendClient(self.url, self.key, self.timeout,
                             access_token=access_token, http=self.http)

    def request(self, method, path, bearer=None, headers=None, **kwargs):
        all_headers = {
            'apikey': self.key,
            'Authorization': f'Bearer {bearer or self.access_token or self.key}',
        }
        if headers:
            all_headers.update(headers)

        logger.debug('%s %s', method, path)
        try:
            resp = self.http.request(method, self.url + path, headers=all_headers,
                                     timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise BackendError(str(e)) from e

        if resp.status_code >= 400:
            raise _error_from_response(resp)
        return resp

    # -- tables ------------------------------------------------------------

    def table(self, name):
        return TableQuery(self, name)

    def execute(self, query):
        params = [(column, _format_filter_value(value)) for column, value in query.filters]
        prefer = []
        headers = {}
        body = None

        if query.method == 'select':
            params.append(('select', query.columns))
            http_method = 'HEAD' if query.head else 'GET'
        elif query.method in ('insert', 'upsert'):
            http_method = 'POST'
            body = query.payload
            prefer.append('return=representation')
            if query.method == 'upsert':
                prefer.append('resolution=merge-duplicates')
        elif query.method == 'update':
            http_method = 'PATCH'
            body = query.payload
            prefer.append('return=representation')
        elif query.method == 'delete':
            http_method = 'DELETE'
            prefer.append('return=representation')
        else:
            raise ValueError(f'Unknown table operation {query.method!r}')

        if query.orders:
            params.append(('order', _format_order(query.orders)))
        if query.limit_count is not None:
            params.append(('limit', str(query.limit_count)))
        if query.count:
            prefer.append(f'count={query.count}')
        if prefer:
            headers['Prefer'] = ','.join(prefer)
        if query.is_single:
            headers['Accept'] = 'application/vnd.pgrst.object+json'

        resp = self.request(http_method, f'/rest/v1/{query.table}', params=params,
                            json=body, headers=headers)
        data = resp.json() if resp.content else None
        return APIResponse(data=data, count=_parse_count(resp.headers.get('Content-Range')))

    def rpc(self, function, params=None):
        resp = self.request('POST', f'/rest/v1/rpc/{function}', json=params or {})
        return APIResponse(data=resp.json() if resp.content else None)


class AuthAPI:
    """Session management against the auth service."""

    def __init__(self, client):
        self._client = client

    def sign_up(self, email, password, redirect_to=None):
        params = {'redirect_to': redirect_to} if redirect_to else None
        resp = self._client.request('POST', '/auth/v1/signup', params=params,
                                    json={'email': email, 'password': password})
        return resp.json()

    def sign_in_with_password(self, email, password):
        resp = self._client.request('POST', '/auth/v1/token',
                                    params={'grant_type': 'password'},
                                    json={'email': email, 'password': password})
        return Session.from_token_response(resp.json())

    def sign_out(self, access_token):
        self._client.request('POST', '/auth/v1/logout', bearer=access_token)

    def reset_password_for_email(self, email, redirect_to=None):
        params = {'redirect_to': redirect_to} if redirect_to else None
        self._client.request('POST', '/auth/v1/recover', params=params, json={'email': email})

    def refresh_session(self, refresh_token):
        """Trade a refresh token for a new session."""
        resp = self._client.request('POST', '/auth/v1/token',
                                    params={'grant_type': 'refresh_token'},
                                    json={'refresh_token': refresh_token})
        return Session.from_token_response(resp.json())


class StorageAPI:
    """Object storage buckets."""

    def __init__(self, client):
        self._client = client

    def from_(self, bucket):
        return StorageBucket(self._client, bucket)


class StorageBucket:
    def __init__(self, client, bucket):
        self._client = client
        self.bucket = bucket

    def upload(self, path, data, content_type=None, cache_control='3600', upsert=False):
        headers = {
            'Content-Type': content_type or 'application/octet-stream',
            'Cache-Control': f'max-age={cache_control}',
            'x-upsert': 'true' if upsert else 'false',
        }
        resp = self._client.request('POST', f'/storage/v1/object/{self.bucket}/{quote(path)}',
                                    data=data, headers=headers)
        return resp.json() if resp.content else None

    def get_public_url(self, path):
        return f'{self._client.url}/storage/v1/object/public/{self.bucket}/{quote(path)}'

    def remove(self, paths):
        resp = self._client.request('DELETE', f'/storage/v1/object/{self.bucket}',
                                    json={'prefixes': list(paths)})
        return resp.json() if resp.content else None
