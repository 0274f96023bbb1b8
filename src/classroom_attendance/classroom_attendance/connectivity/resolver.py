from __future__ import annotations

import logging
import threading
from typing import Optional, Protocol, Sequence

from ..core.exceptions import NoReachableEndpoint
from .endpoint import ResolvedEndpoint

logger = logging.getLogger(__name__)


class Prober(Protocol):
    def probe(self, url: str) -> bool:
        raise NotImplementedError


class ConnectivityResolver:
    """Find the first reachable server among candidate base addresses.

    Candidates are tried strictly in order and each probe has its own timeout
    (owned by the prober). The last successful address is kept as ``active``
    and is only overwritten by another success.
    """

    def __init__(self, prober: Prober, candidates: Sequence[str], *, probe_path: str = "test"):
        if not candidates:
            raise ValueError("at least one candidate address is required")
        self._prober = prober
        self._candidates = tuple(c.rstrip("/") for c in candidates)
        self._probe_path = probe_path
        self._lock = threading.Lock()
        self._active: Optional[ResolvedEndpoint] = None

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    @property
    def active(self) -> Optional[ResolvedEndpoint]:
        return self._active

    def resolve(self) -> ResolvedEndpoint:
        for base in self._candidates:
            endpoint = ResolvedEndpoint(base)
            url = endpoint.url(self._probe_path)
            if self._prober.probe(url):
                with self._lock:
                    self._active = endpoint
                logger.debug("Using server %s", base)
                return endpoint
            logger.warning("Server %s did not respond", base)

        raise NoReachableEndpoint("Cannot connect to attendance server.")

    def current(self) -> ResolvedEndpoint:
        """The active address, probing for one if none has answered yet."""
        active = self._active
        if active is not None:
            return active
        return self.resolve()
