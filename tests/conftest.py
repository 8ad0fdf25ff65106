"""
Pytest configuration and fixtures.
Routes run against an in-memory fake of the booking backend, never the real one.
"""

import copy
import os

import pytest

from backend import ACTION_INIT, BackendError

os.environ['FLASK_ENV'] = 'test'

ADMIN_PASSWORD = 'test-password'

INIT_PAYLOAD = {
    'success': True,
    'lessons': [
        {
            'slotId': 's1',
            'date': '2099-03-10',
            'startTime': '10:00',
            'endTime': '11:00',
            'lessonName': 'ヨガ',
            'teacherName': '田中',
            'price': 3000,
            'capacity': '',
            'packageId': 'p1',
            'color': '#ffffff',
            'isPublic': 1,
            'status': '',
            'guests': [
                {'reservationId': 'g1', 'name': '山田', 'phone': '090-1111-2222',
                 'email': 'yamada@example.com', 'status': '予約', 'customerId': 'c1'},
                {'reservationId': 'g2', 'name': '佐藤', 'phone': '',
                 'email': 'sato@example.com', 'status': 'キャンセル待ち', 'customerId': ''},
                {'reservationId': 'g3', 'name': '鈴木', 'phone': '',
                 'email': 'suzuki@example.com', 'status': 'キャンセル', 'customerId': ''},
            ],
        },
        {
            'slotId': 's2',
            'date': '2099-03-10',
            'startTime': '9:00',
            'endTime': '10:00',
            'lessonName': 'ピラティス',
            'teacherName': '高橋',
            'price': 2000,
            'capacity': 5,
            'color': '#442c2e',
            'isPublic': '公開',
            'guests': [],
        },
        {
            'slotId': 's3',
            'date': '2099-03-11',
            'startTime': '10:00',
            'endTime': '11:00',
            'lessonName': '削除済み',
            'capacity': 4,
            'status': '削除',
            'guests': [],
        },
    ],
    'packages': [
        {'id': 'p1', 'lessonName': 'ヨガ', 'teacherName': '田中', 'price': 3000,
         'capacity': 8, 'color': '#ffffff', 'isPublic': 1},
        {'id': 'p2', 'lessonName': '旧コース', 'teacherName': '', 'price': 1000,
         'capacity': 3, 'status': '削除'},
    ],
    'customers': [
        {'customerId': 'c1', 'name': '山田', 'phone': '090-1111-2222',
         'email': 'yamada@example.com', 'visitCount': 3, 'memo': '常連'},
    ],
    'settings': {'studioName': 'Studio A', 'contactEmail': 'info@example.com'},
}


class FakeBackend:
    """Stands in for BackendClient: canned init data, recorded calls."""

    def __init__(self):
        self.init_payload = copy.deepcopy(INIT_PAYLOAD)
        self.calls = []
        self.error = None

    def call(self, action, payload=None):
        self.calls.append((action, payload or {}))
        if self.error is not None:
            raise self.error
        if action == ACTION_INIT:
            return copy.deepcopy(self.init_payload)
        return {'success': True}

    def close(self):
        pass

    def calls_for(self, action):
        return [payload for called, payload in self.calls if called == action]


@pytest.fixture
def fake_backend(monkeypatch):
    """Replace the backend client with a FakeBackend."""
    backend = FakeBackend()
    monkeypatch.setattr('backend.connection.BackendClient', lambda *args, **kwargs: backend)
    return backend


@pytest.fixture
def app(fake_backend):
    """Create test application wired to the fake backend."""
    from app import create_app

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False

    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def authenticated_client(client):
    """Create authenticated test client."""
    response = client.post('/login', data={'password': ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def backend_error():
    return BackendError('スプレッドシートに接続できません', 'apiGetAdminInit')
