"""
Backend connection management.
One client per request context, closed on teardown.
"""

from flask import g, current_app

from backend.client import BackendClient


def get_backend() -> BackendClient:
    """
    Get the backend client for the current context.

    Returns:
        BackendClient configured from the app config
    """
    if 'backend' not in g:
        g.backend = BackendClient(
            current_app.config.get('BACKEND_URL', ''),
            auth_token=current_app.config.get('BACKEND_AUTH_TOKEN'),
            timeout=current_app.config.get('BACKEND_TIMEOUT', 30),
        )
    return g.backend


def close_backend(e=None):
    """
    Close the backend client.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    backend = g.pop('backend', None)
    if backend is not None:
        backend.close()
