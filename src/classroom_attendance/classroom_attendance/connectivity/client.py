from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..auth.credentials import CredentialStore
from ..core.constants import DEFAULT_PROBE_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, ENROLLMENT_MISSING_MESSAGE
from ..core.exceptions import (
    AuthenticationFailed,
    EndpointNotFound,
    NetworkError,
    NotEnrolled,
    RemoteError,
    RequestTimeout,
)
from .endpoint import ResolvedEndpoint

logger = logging.getLogger(__name__)


class ApiClient:
    """JSON-over-HTTP transport for the attendance server.

    Credentials are attached implicitly through the session's default headers
    (see ``attach_credentials``). A request can also ask for the token to be
    read from the credential store and sent explicitly. The client is also a
    ``CredentialStore``: invalidating through it drops the session header too.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        *,
        session: Optional[requests.Session] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ):
        self._credentials = credentials
        self._session = session or requests.Session()
        self._session.headers.setdefault("Content-Type", "application/json")
        self._request_timeout = float(request_timeout)
        self._probe_timeout = float(probe_timeout)

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    def get_token(self) -> Optional[str]:
        return self._credentials.get_token()

    def invalidate(self) -> None:
        """Forget the stored token and stop sending it on the session."""
        self._credentials.invalidate()
        self.attach_credentials()

    def attach_credentials(self) -> None:
        token = self._credentials.get_token()
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"
        else:
            self._session.headers.pop("Authorization", None)

    def probe(self, url: str) -> bool:
        try:
            resp = self._session.get(url, timeout=self._probe_timeout)
        except requests.RequestException as e:
            logger.debug("Probe %s failed: %s", url, e)
            return False
        return 200 <= resp.status_code < 300

    def get(self, endpoint: ResolvedEndpoint, path: str, *, params: Optional[dict] = None) -> Any:
        return self.request("GET", endpoint, path, params=params)

    def post(self, endpoint: ResolvedEndpoint, path: str, payload: dict, *, explicit_auth: bool = False) -> Any:
        return self.request("POST", endpoint, path, json=payload, explicit_auth=explicit_auth)

    def delete(self, endpoint: ResolvedEndpoint, path: str) -> Any:
        return self.request("DELETE", endpoint, path)

    def request(
        self,
        method: str,
        endpoint: ResolvedEndpoint,
        path: str,
        *,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
        explicit_auth: bool = False,
    ) -> Any:
        headers = {}
        if explicit_auth:
            token = self._credentials.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        url = endpoint.url(path)
        try:
            resp = self._session.request(
                method,
                url,
                json=json,
                params=params,
                headers=headers or None,
                timeout=self._request_timeout,
            )
        except requests.Timeout as e:
            logger.warning("%s %s timed out", method, url)
            raise RequestTimeout("Connection timeout. Server is not responding.") from e
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError("Network error. Cannot connect to the attendance server.") from e

        return self._handle(resp)

    @staticmethod
    def _handle(resp: requests.Response) -> Any:
        status = resp.status_code
        if 200 <= status < 300:
            if not resp.content:
                return None
            try:
                return resp.json()
            except ValueError:
                return None

        message = _error_message(resp)
        if status in (401, 403):
            raise AuthenticationFailed("Authentication failed. Please log in again.")
        if status == 404:
            if message and ENROLLMENT_MISSING_MESSAGE.lower() in message.lower():
                raise NotEnrolled("You are not enrolled in this class")
            raise EndpointNotFound("Server endpoint not found. Please notify your instructor.", status_code=status)
        raise RemoteError(message or f"Request failed ({status})", status_code=status)


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        return str(body.get("message") or "")
    return ""
