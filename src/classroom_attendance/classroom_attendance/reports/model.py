from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..common.datetime_utils import calendar_date, parse_iso_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ReportStudent:
    student_id: str
    student_name: str
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {"studentId": self.student_id, "studentName": self.student_name, "status": self.status.value}


@dataclass(frozen=True)
class AttendanceReport:
    """Aggregate attendance of one class on one calendar date.

    Reports written by this package satisfy total_students == len(students)
    == present_count + absent_count (see ``check``). Rows read back from the
    store are taken as stored.
    """

    date: date
    class_id: str
    class_name: str
    subject_code: str
    total_students: int
    present_count: int
    absent_count: int
    students: tuple[ReportStudent, ...] = ()

    def check(self) -> "AttendanceReport":
        if self.present_count < 0 or self.absent_count < 0:
            raise ValidationError("Report counts cannot be negative")
        if self.total_students != self.present_count + self.absent_count:
            raise ValidationError("Report counts do not add up to the total")
        if self.students and len(self.students) != self.total_students:
            raise ValidationError("Report student list does not match the total")
        return self

    @property
    def key(self) -> tuple[str, date]:
        return self.class_id, self.date

    @classmethod
    def build(
        cls,
        *,
        report_date: date,
        class_id: str,
        class_name: str,
        subject_code: str,
        students: Sequence[ReportStudent],
    ) -> "AttendanceReport":
        present = sum(1 for s in students if s.status == AttendanceStatus.PRESENT)
        report = cls(
            date=report_date,
            class_id=class_id,
            class_name=class_name,
            subject_code=subject_code,
            total_students=len(students),
            present_count=present,
            absent_count=len(students) - present,
            students=tuple(students),
        )
        return report.check()

    def to_payload(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "classId": self.class_id,
            "className": self.class_name,
            "subjectCode": self.subject_code,
            "totalStudents": self.total_students,
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
            "students": [s.to_dict() for s in self.students],
        }

    @classmethod
    def from_mapping(cls, data: dict) -> "AttendanceReport":
        """Read a stored report. Summary-only rows (no student list) are allowed."""
        class_ref = data.get("classId")
        if isinstance(class_ref, dict):
            class_ref = class_ref.get("_id")
        students = tuple(
            ReportStudent(
                student_id=str(s.get("studentId") or ""),
                student_name=str(s.get("studentName") or ""),
                status=AttendanceStatus(str(s.get("status") or "absent").lower()),
            )
            for s in data.get("students") or []
            if isinstance(s, dict)
        )
        return cls(
            date=_parse_report_date(data["date"]),
            class_id=str(class_ref or ""),
            class_name=str(data.get("className") or ""),
            subject_code=str(data.get("subjectCode") or ""),
            total_students=int(data.get("totalStudents") or 0),
            present_count=int(data.get("presentCount") or 0),
            absent_count=int(data.get("absentCount") or 0),
            students=students,
        )


def _parse_report_date(value) -> date:
    # stored dates may come back as full instants
    text = str(value)
    if "T" in text:
        return calendar_date(text)
    return parse_iso_date(text[:10])
