from __future__ import annotations

from datetime import datetime, timezone

import pytest

from classroom_attendance.attendance.model import AttendanceEvent
from classroom_attendance.core.enums import AttendanceStatus, RecordedVia
from classroom_attendance.core.exceptions import ValidationError


def test_identifiers_are_required():
    with pytest.raises(ValidationError):
        AttendanceEvent(
            student_id=" ",
            class_id="C1",
            timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc),
            status=AttendanceStatus.PRESENT,
            recorded_via=RecordedVia.QR,
        )


def test_server_record_with_populated_class():
    event = AttendanceEvent.from_mapping(
        {
            "_id": "a1",
            "studentId": "S1",
            "classId": {"_id": "C1", "className": "IT101"},
            "timestamp": "2024-03-01T23:30:00.000Z",
            "status": "late",
            "recordedVia": "manual",
        }
    )

    assert event.class_id == "C1"
    assert event.status == AttendanceStatus.LATE
    assert event.recorded_via == RecordedVia.MANUAL
    assert event.event_id == "a1"
    assert event.to_payload()["timestamp"] == "2024-03-01T23:30:00.000Z"
