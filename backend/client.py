"""
Client for the studio's booking backend.

The backend is a single web app endpoint. Every call is a POST whose JSON
body names the action and carries the payload; the answer is JSON with
'success' and, on failure, 'error'. The body is sent as text/plain so the
endpoint does not need a CORS preflight.
"""

import json
import logging
from typing import Dict, Optional

import requests

logger = logging.getLogger(__name__)

# Actions understood by the backend
ACTION_INIT = 'apiGetAdminInit'
ACTION_SAVE_SLOT = 'apiSaveSlot'
ACTION_SAVE_PACKAGE = 'apiSavePackage'
ACTION_FORCE_CANCEL = 'apiAdminForceCancel'
ACTION_SAVE_SETTINGS = 'apiSaveSettings'

AUTH_ERROR_MARKERS = ('認証エラー', 'auth')


class BackendError(Exception):
    """The backend call failed or the backend reported an error."""

    def __init__(self, message: str, action: str = ''):
        self.action = action
        super().__init__(message)


class BackendAuthError(BackendError):
    """The backend rejected our credentials."""


class BackendClient:
    """
    Thin request/response client.

    Args:
        url: Backend endpoint URL
        auth_token: Token added to every payload as 'auth'
        timeout: Request timeout in seconds
        session: Optional requests.Session to reuse
    """

    def __init__(
        self,
        url: str,
        auth_token: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None
    ):
        self.url = url
        self.auth_token = auth_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def call(self, action: str, payload: Optional[Dict] = None) -> Dict:
        """
        Run a backend action.

        Args:
            action: Action name (e.g. 'apiGetAdminInit')
            payload: Action payload

        Returns:
            Decoded JSON response

        Raises:
            BackendAuthError: Backend rejected the credentials
            BackendError: Transport failure, HTTP error, bad JSON or an
                error reported by the backend
        """
        if not self.url:
            raise BackendError('BACKEND_URL is not configured', action)

        body = {'action': action}
        body.update(payload or {})
        if self.auth_token:
            body['auth'] = self.auth_token

        try:
            response = self.session.post(
                self.url,
                data=json.dumps(body, ensure_ascii=False).encode('utf-8'),
                headers={'Content-Type': 'text/plain;charset=utf-8'},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as exc:
            logger.error("Backend HTTP error on %s: %s", action, exc)
            raise BackendError(f'HTTP error: {exc.response.status_code}', action) from exc
        except requests.exceptions.RequestException as exc:
            logger.error("Backend request failed on %s: %s", action, exc)
            raise BackendError(str(exc), action) from exc

        try:
            result = response.json()
        except ValueError as exc:
            logger.error("Backend returned invalid JSON on %s", action)
            raise BackendError('Invalid JSON response', action) from exc

        if not isinstance(result, dict):
            raise BackendError('Unexpected response shape', action)

        error = result.get('error')
        if error:
            error = str(error)
            logger.warning("Backend error on %s: %s", action, error)
            if any(marker in error for marker in AUTH_ERROR_MARKERS):
                raise BackendAuthError(error, action)
            raise BackendError(error, action)

        if result.get('success') is False:
            raise BackendError('Backend reported failure', action)

        return result

    def close(self) -> None:
        self.session.close()
