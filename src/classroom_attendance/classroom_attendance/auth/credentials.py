from __future__ import annotations

from typing import Optional, Protocol

from ..core.constants import TOKEN_KEY
from ..outbox.store import KeyValueStore


class CredentialStore(Protocol):
    def get_token(self) -> Optional[str]:
        raise NotImplementedError

    def invalidate(self) -> None:
        raise NotImplementedError


class StoredCredentials(CredentialStore):
    """Bearer token kept in the device key-value store."""

    def __init__(self, store: KeyValueStore, *, key: str = TOKEN_KEY):
        self._store = store
        self._key = key

    def get_token(self) -> Optional[str]:
        return self._store.get(self._key) or None

    def set_token(self, token: str) -> None:
        self._store.set(self._key, token)

    def invalidate(self) -> None:
        self._store.remove(self._key)
