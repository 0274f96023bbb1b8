from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedEndpoint:
    """A base address that answered a probe."""

    base_url: str

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
