"""
Route decorators for backend error handling and JSON input.
"""

import logging
from functools import wraps

from flask import request
from flask_login import login_required, logout_user

from backend.client import ACTION_INIT, BackendAuthError, BackendError
from utils.api_response import api_error
from utils.messages import MESSAGES, get_message

logger = logging.getLogger(__name__)


def backend_errors(func):
    """
    Decorator turning backend failures into JSON error responses.

    A rejected backend credential ends the console session as well, so the
    administrator has to log in again.

    Usage:
        @bp.route('/slots', methods=['POST'])
        @login_required
        @backend_errors
        def create_slot():
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BackendAuthError as e:
            logger.warning("Backend rejected credentials on %s", e.action)
            logout_user()
            return api_error(MESSAGES['session_expired'], status=401)
        except BackendError as e:
            key = 'init_failed' if e.action == ACTION_INIT else 'backend_error'
            return api_error(get_message(key, error=str(e)), status=502)
    return wrapper


def json_body_required(func):
    """Reject requests without a JSON object body."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(MESSAGES['data_required'], status=400)
        return func(*args, **kwargs)
    return wrapper


# Re-export login_required for convenience
__all__ = ['login_required', 'backend_errors', 'json_body_required']
