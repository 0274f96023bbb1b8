from __future__ import annotations

from typing import Protocol, Sequence

from .model import ClassInfo, RosterStudent


class ClassRepository(Protocol):
    def list_classes(self) -> Sequence[ClassInfo]:
        raise NotImplementedError

    def get_roster(self, class_id: str) -> Sequence[RosterStudent]:
        """Enrolled students in roster order."""

        raise NotImplementedError
