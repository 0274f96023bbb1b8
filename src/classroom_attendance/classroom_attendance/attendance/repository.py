from __future__ import annotations

from typing import Protocol, Sequence

from ..connectivity.endpoint import ResolvedEndpoint
from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def submit(self, event: AttendanceEvent, *, endpoint: ResolvedEndpoint, explicit_auth: bool = False) -> AttendanceEvent:
        """Store one event remotely and return the stored copy."""

        raise NotImplementedError

    def list_for_class(self, class_id: str) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[AttendanceEvent]:
        raise NotImplementedError
