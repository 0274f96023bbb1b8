from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import last_days_window, now_utc
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import AttendanceStatus
from .model import AttendanceReport
from .repository import ReportRepository


def percentage(part: int, total: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    return int(math.floor(part / total * 100 + 0.5))


@dataclass(frozen=True)
class AttendanceTotals:
    total: int = 0
    present: int = 0
    absent: int = 0

    @property
    def present_percentage(self) -> int:
        return percentage(self.present, self.total)

    @property
    def absent_percentage(self) -> int:
        return percentage(self.absent, self.total)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "percentage": self.present_percentage,
            "absentPercentage": self.absent_percentage,
        }


@dataclass(frozen=True)
class EventTotals:
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": {"count": self.present, "percentage": percentage(self.present, self.total)},
            "absent": {"count": self.absent, "percentage": percentage(self.absent, self.total)},
            "late": self.late,
        }


def summarize_reports(reports: Iterable[AttendanceReport]) -> AttendanceTotals:
    total = present = absent = 0
    for r in reports:
        total += r.total_students
        present += r.present_count
        absent += r.absent_count
    return AttendanceTotals(total=total, present=present, absent=absent)


def summarize_events(events: Iterable[AttendanceEvent]) -> EventTotals:
    """Per-student record stats straight from raw events."""
    counts = {s: 0 for s in AttendanceStatus}
    for ev in events:
        counts[ev.status] += 1
    present = counts[AttendanceStatus.PRESENT]
    absent = counts[AttendanceStatus.ABSENT]
    late = counts[AttendanceStatus.LATE]
    return EventTotals(total=present + absent + late, present=present, absent=absent, late=late)


@dataclass(frozen=True)
class DailyTotals:
    date: date
    present: int
    absent: int

    @property
    def percentage(self) -> int:
        return percentage(self.present, self.present + self.absent)

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "present": self.present, "absent": self.absent, "percentage": self.percentage}


@dataclass(frozen=True)
class Overview:
    start_date: date
    end_date: date
    totals: AttendanceTotals
    daily: tuple[DailyTotals, ...]
    report_count: int

    def to_dict(self) -> dict:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "reports": self.report_count,
            **self.totals.to_dict(),
            "daily": [d.to_dict() for d in self.daily],
        }


def daily_totals(reports: Iterable[AttendanceReport]) -> tuple[DailyTotals, ...]:
    by_date: dict[date, list[int]] = {}
    for r in reports:
        acc = by_date.setdefault(r.date, [0, 0])
        acc[0] += r.present_count
        acc[1] += r.absent_count
    return tuple(DailyTotals(date=d, present=p, absent=a) for d, (p, a) in sorted(by_date.items()))


class ReportReader:
    def __init__(
        self,
        reports: ReportRepository,
        *,
        window_days: int = DEFAULT_REPORT_DAYS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._reports = reports
        self._window_days = int(window_days)
        self._clock = clock

    def overview(self, *, today: Optional[date] = None, class_id: Optional[str] = None) -> Overview:
        start, end = last_days_window(today or self._clock().date(), self._window_days)
        if class_id:
            rows = list(self._reports.list_for_class(class_id, start_date=start, end_date=end))
        else:
            rows = list(self._reports.list_between(start_date=start, end_date=end))
        return Overview(
            start_date=start,
            end_date=end,
            totals=summarize_reports(rows),
            daily=daily_totals(rows),
            report_count=len(rows),
        )
