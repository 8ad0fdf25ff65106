"""
Booking backend package.

- client: request/response client and its errors
- connection: per-request client management (get_backend, close_backend)
"""

from backend.client import (
    BackendClient,
    BackendError,
    BackendAuthError,
    ACTION_INIT,
    ACTION_SAVE_SLOT,
    ACTION_SAVE_PACKAGE,
    ACTION_FORCE_CANCEL,
    ACTION_SAVE_SETTINGS,
)
from backend.connection import get_backend, close_backend

__all__ = [
    'BackendClient',
    'BackendError',
    'BackendAuthError',
    'ACTION_INIT',
    'ACTION_SAVE_SLOT',
    'ACTION_SAVE_PACKAGE',
    'ACTION_FORCE_CANCEL',
    'ACTION_SAVE_SETTINGS',
    'get_backend',
    'close_backend',
]
