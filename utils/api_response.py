"""
JSON envelopes returned by every console endpoint.

    ok:       {"success": true, "data": {...}, "message": "..."}
    failure:  {"success": false, "error": "...", "refusal": "PastDateError"}

Messages are the Japanese strings from utils.messages.
"""

from typing import Any

from flask import jsonify


def _respond(body: dict, status: int, extra: dict) -> tuple:
    body.update(extra)
    return jsonify(body), status


def api_success(
    data: dict | None = None,
    message: str | None = None,
    warning: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Wrap a successful result.

    Args:
        data: Payload placed under 'data' (omitted when None).
        message: Optional confirmation shown to the operator.
        warning: Optional non-fatal notice, e.g. a stale snapshot.
        status: HTTP status code.
        **extra_fields: Merged into the top level of the body.

    Returns:
        Tuple of (Response, status_code)
    """
    body = {'success': True}
    if data is not None:
        body['data'] = data
    for key, value in (('message', message), ('warning', warning)):
        if value:
            body[key] = value
    return _respond(body, status, extra_fields)


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """Wrap a failure message; extra fields land at the top level."""
    return _respond({'success': False, 'error': error}, status, extra_fields)


def api_refused(exc: Exception, status: int = 400) -> tuple:
    """
    Report an edit refused by a business rule.

    The exception's class name goes out as 'refusal', so a client can
    tell PastDateError from HasReservationsError without reading text.
    """
    return api_error(str(exc), status=status, refusal=type(exc).__name__)
