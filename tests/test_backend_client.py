from unittest import mock

import pytest
import requests

from app.backend.client import BackendClient
from app.backend.types import Session
from app.errors import BackendError

URL = 'https://school.supabase.co'
KEY = 'anon-key'


def _response(status=200, payload=None, headers=None):
    resp = mock.Mock()
    resp.status_code = status
    resp.content = b'{}' if payload is not None else b''
    resp.json.return_value = payload
    resp.headers = headers or {}
    return resp


@pytest.fixture()
def http():
    return mock.Mock()


@pytest.fixture()
def client(http):
    return BackendClient(URL + '/', KEY, timeout=5, http=http)


def test_select_builds_postgrest_query(client, http):
    http.request.return_value = _response(payload=[{'id': '1'}])

    result = (client.table('school_facilities').select('*')
              .eq('is_active', True)
              .order('display_order', nulls_first=False)
              .limit(5)
              .execute())

    assert result.data == [{'id': '1'}]
    args, kwargs = http.request.call_args
    assert args == ('GET', URL + '/rest/v1/school_facilities')
    assert kwargs['params'] == [
        ('is_active', 'eq.true'),
        ('select', '*'),
        ('order', 'display_order.asc.nullslast'),
        ('limit', '5'),
    ]
    assert kwargs['headers']['apikey'] == KEY
    assert kwargs['headers']['Authorization'] == f'Bearer {KEY}'
    assert kwargs['timeout'] == 5


def test_single_asks_for_an_object(client, http):
    http.request.return_value = _response(payload={'id': 'main'})
    client.table('admin_users').select('id').eq('user_id', 'u1').single().execute()
    headers = http.request.call_args[1]['headers']
    assert headers['Accept'] == 'application/vnd.pgrst.object+json'


def test_head_count_reads_content_range(client, http):
    http.request.return_value = _response(headers={'Content-Range': '*/42'})
    result = client.table('announcements').select('id', count='exact', head=True).execute()
    args, kwargs = http.request.call_args
    assert args[0] == 'HEAD'
    assert kwargs['headers']['Prefer'] == 'count=exact'
    assert result.count == 42
    assert result.data is None


def test_upsert_merges_duplicates(client, http):
    http.request.return_value = _response(payload=[{'id': 'main'}])
    client.table('hero_section').upsert({'id': 'main', 'title': 'Hi'}).execute()
    args, kwargs = http.request.call_args
    assert args[0] == 'POST'
    assert kwargs['json'] == {'id': 'main', 'title': 'Hi'}
    assert kwargs['headers']['Prefer'] == 'return=representation,resolution=merge-duplicates'


def test_update_and_delete_filter_by_id(client, http):
    http.request.return_value = _response(payload=[])
    client.table('announcements').update({'title': 'x'}).eq('id', 'a1').execute()
    assert http.request.call_args[0][0] == 'PATCH'
    assert http.request.call_args[1]['params'] == [('id', 'eq.a1')]

    client.table('announcements').delete().eq('id', 'a1').execute()
    assert http.request.call_args[0][0] == 'DELETE'


def test_user_token_is_sent_as_bearer(client, http):
    http.request.return_value = _response(payload=[])
    client.with_token('user-jwt').table('announcements').select().execute()
    assert http.request.call_args[1]['headers']['Authorization'] == 'Bearer user-jwt'


def test_error_keeps_backend_message_and_code(client, http):
    http.request.return_value = _response(401, {'message': 'JWT expired', 'code': 'PGRST301'})
    with pytest.raises(BackendError) as excinfo:
        client.table('announcements').select().execute()
    assert str(excinfo.value) == 'JWT expired'
    assert excinfo.value.code == 'PGRST301'
    assert excinfo.value.status == 401


def test_auth_error_uses_error_description(client, http):
    http.request.return_value = _response(400, {'error': 'invalid_grant',
                                                'error_description': 'Invalid login credentials'})
    with pytest.raises(BackendError, match='Invalid login credentials'):
        client.auth.sign_in_with_password('a@gmail.com', 'nope')


def test_network_failure_becomes_backend_error(client, http):
    http.request.side_effect = requests.exceptions.ConnectionError('connection refused')
    with pytest.raises(BackendError, match='connection refused'):
        client.rpc('check_admin_status', {'user_uuid': 'u1'})


def test_sign_in_returns_session(client, http):
    http.request.return_value = _response(payload={
        'access_token': 'jwt', 'refresh_token': 'r', 'expires_in': 3600,
        'user': {'id': 'u1', 'email': 'a@gmail.com'},
    })
    session = client.auth.sign_in_with_password('a@gmail.com', 'secret123')

    assert isinstance(session, Session)
    assert session.user_id == 'u1'
    assert session.access_token == 'jwt'
    assert not session.is_expired()
    args, kwargs = http.request.call_args
    assert args == ('POST', URL + '/auth/v1/token')
    assert kwargs['params'] == {'grant_type': 'password'}


def test_refresh_session_trades_refresh_token(client, http):
    http.request.return_value = _response(payload={
        'access_token': 'jwt-2', 'refresh_token': 'r2', 'expires_in': 3600,
        'user': {'id': 'u1', 'email': 'a@gmail.com'},
    })
    session = client.auth.refresh_session('r1')

    assert session.access_token == 'jwt-2'
    assert session.refresh_token == 'r2'
    args, kwargs = http.request.call_args
    assert args == ('POST', URL + '/auth/v1/token')
    assert kwargs['params'] == {'grant_type': 'refresh_token'}
    assert kwargs['json'] == {'refresh_token': 'r1'}


def test_refresh_with_revoked_token_raises(client, http):
    http.request.return_value = _response(400, {
        'code': 'refresh_token_not_found', 'message': 'Invalid Refresh Token: Refresh Token Not Found'})
    with pytest.raises(BackendError) as excinfo:
        client.auth.refresh_session('r1')
    assert excinfo.value.code == 'refresh_token_not_found'


def test_sign_up_sends_redirect(client, http):
    http.request.return_value = _response(payload={'id': 'u1'})
    client.auth.sign_up('a@gmail.com', 'secret123', redirect_to='http://localhost/admin/login')
    assert http.request.call_args[1]['params'] == {'redirect_to': 'http://localhost/admin/login'}


def test_sign_out_uses_user_token(client, http):
    http.request.return_value = _response()
    client.auth.sign_out('user-jwt')
    args, kwargs = http.request.call_args
    assert args == ('POST', URL + '/auth/v1/logout')
    assert kwargs['headers']['Authorization'] == 'Bearer user-jwt'


def test_rpc_returns_data(client, http):
    http.request.return_value = _response(payload=True)
    assert client.rpc('check_admin_status', {'user_uuid': 'u1'}).data is True
    assert http.request.call_args[0] == ('POST', URL + '/rest/v1/rpc/check_admin_status')


def test_storage_upload_and_public_url(client, http):
    http.request.return_value = _response(payload={'Key': 'gallery-images/gallery/a.png'})
    bucket = client.storage.from_('gallery-images')
    bucket.upload('gallery/a.png', b'data', content_type='image/png')

    args, kwargs = http.request.call_args
    assert args == ('POST', URL + '/storage/v1/object/gallery-images/gallery/a.png')
    assert kwargs['data'] == b'data'
    assert kwargs['headers']['Content-Type'] == 'image/png'
    assert kwargs['headers']['x-upsert'] == 'false'
    assert bucket.get_public_url('gallery/a.png') == \
        URL + '/storage/v1/object/public/gallery-images/gallery/a.png'


def test_storage_remove(client, http):
    http.request.return_value = _response(payload=[])
    client.storage.from_('learning-materials').remove(['materials/a.pdf'])
    args, kwargs = http.request.call_args
    assert args == ('DELETE', URL + '/storage/v1/object/learning-materials')
    assert kwargs['json'] == {'prefixes': ['materials/a.pdf']}
