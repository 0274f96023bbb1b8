"""Rebuild per-class, per-date attendance reports from raw events.

Every report is computed from scratch and written with replace semantics, so
running the engine again over unchanged events produces identical reports.
Each (class, date) is its own failure unit: an error is logged and counted,
and the run moves on.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceRepository
from ..classes.model import ClassInfo, RosterStudent
from ..classes.repository import ClassRepository
from ..common.datetime_utils import calendar_date
from ..core.enums import AttendanceStatus
from .model import AttendanceReport, ReportStudent
from .repository import ReportRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationSummary:
    succeeded: int = 0
    failed: int = 0

    def __add__(self, other: "ReconciliationSummary") -> "ReconciliationSummary":
        return ReconciliationSummary(self.succeeded + other.succeeded, self.failed + other.failed)

    def to_dict(self) -> dict:
        return {"succeeded": self.succeeded, "failed": self.failed}


def group_by_date(events: Iterable[AttendanceEvent]) -> dict[date, list[AttendanceEvent]]:
    """Events keyed by UTC calendar date, dates in ascending order."""
    groups: dict[date, list[AttendanceEvent]] = {}
    for ev in events:
        groups.setdefault(calendar_date(ev.timestamp), []).append(ev)
    return {d: groups[d] for d in sorted(groups)}


def latest_by_student(events: Iterable[AttendanceEvent]) -> dict[str, AttendanceEvent]:
    latest: dict[str, AttendanceEvent] = {}
    for ev in events:
        cur = latest.get(ev.student_id)
        if cur is None or ev.timestamp >= cur.timestamp:
            latest[ev.student_id] = ev
    return latest


def build_report(
    info: ClassInfo,
    report_date: date,
    events: Sequence[AttendanceEvent],
    roster: Sequence[RosterStudent],
) -> AttendanceReport:
    """One report covering the whole roster.

    The most recent event of a student on that date decides; only ``present``
    counts as present, everything else (late included) and no event at all
    count as absent.
    """
    latest = latest_by_student(events)
    students = []
    for s in roster:
        ev = latest.get(s.student_id)
        status = AttendanceStatus.PRESENT if ev and ev.status == AttendanceStatus.PRESENT else AttendanceStatus.ABSENT
        students.append(ReportStudent(student_id=s.student_id, student_name=s.display_name, status=status))

    return AttendanceReport.build(
        report_date=report_date,
        class_id=info.class_id,
        class_name=info.class_name,
        subject_code=info.subject_code,
        students=students,
    )


class ReconciliationEngine:
    def __init__(
        self,
        attendance: AttendanceRepository,
        classes: ClassRepository,
        reports: ReportRepository,
        *,
        max_workers: int = 1,
    ):
        self._attendance = attendance
        self._classes = classes
        self._reports = reports
        self._max_workers = max(1, int(max_workers))

    def run(self, class_ids: Optional[Iterable[str]] = None) -> ReconciliationSummary:
        classes = _unique(self._classes.list_classes())
        if isinstance(class_ids, str):
            class_ids = [class_ids]
        if class_ids is not None:
            wanted = set(class_ids)
            classes = [c for c in classes if c.class_id in wanted]

        if self._max_workers == 1 or len(classes) <= 1:
            results = [self.reconcile_class(c) for c in classes]
        else:
            # one class per task: all dates of a class stay on the same worker
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                results = list(pool.map(self.reconcile_class, classes))

        summary = sum(results, ReconciliationSummary())
        logger.info("Reports saved: %d succeeded, %d failed", summary.succeeded, summary.failed)
        return summary

    def reconcile_class(self, info: ClassInfo) -> ReconciliationSummary:
        try:
            events = self._attendance.list_for_class(info.class_id)
            roster = list(self._classes.get_roster(info.class_id))
        except Exception:
            logger.exception("Error processing class %s", info.class_id)
            return ReconciliationSummary(failed=1)

        succeeded = failed = 0
        for report_date, day_events in group_by_date(events).items():
            try:
                report = build_report(info, report_date, day_events, roster)
                self._reports.upsert(report)
                succeeded += 1
            except Exception:
                logger.exception("Error saving report for class %s on %s", info.class_id, report_date)
                failed += 1
        return ReconciliationSummary(succeeded=succeeded, failed=failed)


def _unique(classes: Iterable[ClassInfo]) -> list[ClassInfo]:
    seen: dict[str, ClassInfo] = {}
    for c in classes:
        seen.setdefault(c.class_id, c)
    return list(seen.values())
