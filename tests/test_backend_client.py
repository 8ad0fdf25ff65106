"""
Tests for the booking backend client.
"""

import json

import pytest
import requests

from backend.client import (
    ACTION_INIT, ACTION_SAVE_SLOT, BackendAuthError, BackendClient, BackendError,
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f'{self.status_code} Error', response=self)

    def json(self):
        if self.text is not None:
            return json.loads(self.text)
        return self.payload


class FakeSession:
    """Records posts and answers with a canned response or exception."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.posts = []
        self.closed = False

    def post(self, url, data=None, headers=None, timeout=None):
        self.posts.append({'url': url, 'data': data, 'headers': headers, 'timeout': timeout})
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        self.closed = True


def make_client(response=None, exc=None, **kwargs):
    session = FakeSession(response, exc)
    client = BackendClient('https://backend.example/exec', session=session, **kwargs)
    return client, session


class TestBackendClient:
    """Tests for BackendClient.call."""

    def test_request_body(self):
        client, session = make_client(FakeResponse({'success': True}), auth_token='secret', timeout=5)
        client.call(ACTION_SAVE_SLOT, {'slotId': 's1', 'lessonName': 'ヨガ'})

        post = session.posts[0]
        assert post['url'] == 'https://backend.example/exec'
        assert post['headers'] == {'Content-Type': 'text/plain;charset=utf-8'}
        assert post['timeout'] == 5
        assert json.loads(post['data'].decode('utf-8')) == {
            'action': 'apiSaveSlot',
            'slotId': 's1',
            'lessonName': 'ヨガ',
            'auth': 'secret',
        }

    def test_no_auth_when_token_missing(self):
        client, session = make_client(FakeResponse({'success': True}))
        client.call(ACTION_INIT)
        assert 'auth' not in json.loads(session.posts[0]['data'])

    def test_returns_decoded_result(self):
        client, _ = make_client(FakeResponse({'success': True, 'lessons': []}))
        assert client.call(ACTION_INIT) == {'success': True, 'lessons': []}

    def test_backend_error_field(self):
        client, _ = make_client(FakeResponse({'success': False, 'error': '対象が見つかりません'}))
        with pytest.raises(BackendError) as exc_info:
            client.call(ACTION_SAVE_SLOT, {})
        assert str(exc_info.value) == '対象が見つかりません'
        assert exc_info.value.action == 'apiSaveSlot'
        assert not isinstance(exc_info.value, BackendAuthError)

    def test_auth_error(self):
        client, _ = make_client(FakeResponse({'error': '認証エラー'}))
        with pytest.raises(BackendAuthError):
            client.call(ACTION_INIT)

    def test_success_false_without_message(self):
        client, _ = make_client(FakeResponse({'success': False}))
        with pytest.raises(BackendError):
            client.call(ACTION_INIT)

    def test_http_error(self):
        client, _ = make_client(FakeResponse(status_code=500))
        with pytest.raises(BackendError) as exc_info:
            client.call(ACTION_INIT)
        assert '500' in str(exc_info.value)

    def test_connection_error(self):
        client, _ = make_client(exc=requests.exceptions.ConnectionError('refused'))
        with pytest.raises(BackendError):
            client.call(ACTION_INIT)

    def test_invalid_json(self):
        client, _ = make_client(FakeResponse(text='<html>oops</html>'))
        with pytest.raises(BackendError) as exc_info:
            client.call(ACTION_INIT)
        assert str(exc_info.value) == 'Invalid JSON response'

    def test_non_object_response(self):
        client, _ = make_client(FakeResponse([1, 2, 3]))
        with pytest.raises(BackendError):
            client.call(ACTION_INIT)

    def test_missing_url(self):
        client = BackendClient('', session=FakeSession())
        with pytest.raises(BackendError):
            client.call(ACTION_INIT)

    def test_close(self):
        client, session = make_client(FakeResponse({'success': True}))
        client.close()
        assert session.closed is True
