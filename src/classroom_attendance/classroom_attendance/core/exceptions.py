from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    The message is safe to show to the user as-is.
    """


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PayloadError(ValidationError):
    """A scanned payload is not a valid attendance intent."""


class MalformedPayload(PayloadError):
    """The scanned text is not a structured payload.

    ``raw`` keeps the original text so callers can treat it as an opaque code.
    """

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class WrongPayloadType(PayloadError):
    pass


class SecurityValidationFailed(PayloadError):
    pass


class NoReachableEndpoint(DomainError):
    """Every candidate server address failed its probe."""


class AuthenticationFailed(DomainError):
    """Credentials are missing or were rejected by the server."""


class NotEnrolled(DomainError):
    """The student is not on the roster of the scanned class."""


class ConnectivityError(DomainError):
    """The server could not be reached while a request was in flight."""


class RequestTimeout(ConnectivityError):
    pass


class NetworkError(ConnectivityError):
    pass


class RemoteError(DomainError):
    """The server answered with an error that has no dedicated meaning."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EndpointNotFound(RemoteError):
    pass
