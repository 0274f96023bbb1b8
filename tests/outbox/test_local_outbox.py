from __future__ import annotations

import json
from datetime import datetime, timezone

from classroom_attendance.attendance.model import AttendanceEvent
from classroom_attendance.core.enums import AttendanceStatus, RecordedVia
from classroom_attendance.outbox.repository import LocalOutbox
from classroom_attendance.outbox.store import JsonFileStore, MemoryStore


def _event(class_id: str, hour: int) -> AttendanceEvent:
    return AttendanceEvent(
        student_id="S1",
        class_id=class_id,
        timestamp=datetime(2024, 3, 1, hour, 0, tzinfo=timezone.utc),
        status=AttendanceStatus.PRESENT,
        recorded_via=RecordedVia.QR,
        student_name="Reyes, Ana",
    )


def test_reads_newest_first():
    outbox = LocalOutbox(MemoryStore())
    outbox.append(_event("C1", 8), subject="IT101", class_name="IT101 BSIT 2A")
    outbox.append(_event("C2", 10), subject="IT102", class_name="IT102 BSIT 2A")

    assert [e.class_id for e in outbox.entries()] == ["C2", "C1"]


def test_entries_use_records_shape_under_fixed_key():
    store = MemoryStore()
    entry = LocalOutbox(store).append(_event("C1", 8), subject="IT101", class_name="IT101 BSIT 2A")

    raw = json.loads(store.get("attendance_records"))
    assert raw == [entry.to_dict()]
    assert raw[0]["class"] == "IT101 BSIT 2A"
    assert raw[0]["studentName"] == "Reyes, Ana"
    assert raw[0]["status"] == "Present"
    assert raw[0]["idempotencyKey"]


def test_clear_only_wipes_the_journal():
    store = MemoryStore({"token": "tok"})
    outbox = LocalOutbox(store)
    outbox.append(_event("C1", 8), subject="IT101", class_name="IT101")

    outbox.clear()

    assert outbox.entries() == []
    assert store.get("token") == "tok"


def test_journal_survives_restart(tmp_path):
    path = tmp_path / "device" / "store.json"
    LocalOutbox(JsonFileStore(path)).append(_event("C1", 8), subject="IT101", class_name="IT101")

    reopened = LocalOutbox(JsonFileStore(path))

    assert [e.class_id for e in reopened.entries()] == ["C1"]


def test_duplicate_scans_are_not_merged():
    outbox = LocalOutbox(MemoryStore())
    first = outbox.append(_event("C1", 8), subject="IT101", class_name="IT101")
    second = outbox.append(_event("C1", 8), subject="IT101", class_name="IT101")

    assert len(outbox.entries()) == 2
    assert first.idempotency_key != second.idempotency_key
