from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CurrentUser:
    """Signed-in student as provided by the session layer."""

    user_id: str
    first_name: str = ""
    last_name: str = ""

    @property
    def display_name(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.last_name}, {self.first_name}"
        return ""

    @classmethod
    def from_mapping(cls, data: dict) -> Optional["CurrentUser"]:
        user_id = data.get("userId") or data.get("user_id")
        if not user_id:
            return None
        return cls(
            user_id=str(user_id),
            first_name=str(data.get("firstName") or data.get("first_name") or ""),
            last_name=str(data.get("lastName") or data.get("last_name") or ""),
        )
