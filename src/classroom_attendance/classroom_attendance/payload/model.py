from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ScannedPayload:
    """Decoded scan content, before any authenticity check."""

    type: Optional[str]
    secure_key: Optional[str]
    version: Optional[str]
    class_id: Optional[str]
    subject_code: Optional[str]
    year_section: Optional[str]
    class_name: Optional[str]
    timestamp: Optional[str]

    @classmethod
    def from_mapping(cls, data: dict) -> "ScannedPayload":
        def _get(key: str) -> Optional[str]:
            value = data.get(key)
            if value is None:
                return None
            return str(value)

        return cls(
            type=_get("type"),
            secure_key=_get("secureKey"),
            version=_get("version"),
            class_id=_get("classId"),
            subject_code=_get("subjectCode"),
            year_section=_get("yearSection"),
            class_name=_get("className"),
            timestamp=_get("timestamp"),
        )


@dataclass(frozen=True)
class ScanIntent:
    """Validated attendance intent, ready to become an event."""

    class_id: str
    subject_code: str
    class_name: str
    year_section: Optional[str]
    scanned_at: Optional[datetime]


@dataclass(frozen=True)
class OpaqueToken:
    """Scanned text that is not a structured payload (legacy/manual code)."""

    raw: str
