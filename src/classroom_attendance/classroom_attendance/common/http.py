from __future__ import annotations

from flask import jsonify

from ..core.exceptions import (
    AuthenticationFailed,
    ConnectivityError,
    DomainError,
    MalformedPayload,
    NoReachableEndpoint,
    NotEnrolled,
    PayloadError,
    RemoteError,
    ValidationError,
)

_STATUS = (
    (PayloadError, 400),
    (ValidationError, 400),
    (AuthenticationFailed, 401),
    (NotEnrolled, 404),
    (NoReachableEndpoint, 503),
    (ConnectivityError, 503),
    (RemoteError, 502),
)


def error_response(e: DomainError):
    """JSON error body with a translated message; never the raw transport error."""
    status = next((code for cls, code in _STATUS if isinstance(e, cls)), 400)
    body = {"success": False, "error": type(e).__name__, "message": str(e)}
    if isinstance(e, MalformedPayload) and e.raw:
        body["token"] = e.raw
    return jsonify(body), status
