from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceReport


class ReportRepository(Protocol):
    def upsert(self, report: AttendanceReport) -> None:
        """Replace the stored report for (class_id, date) wholesale, or create it."""

        raise NotImplementedError

    def list_between(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[AttendanceReport]:
        raise NotImplementedError

    def list_for_class(
        self,
        class_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceReport]:
        raise NotImplementedError
