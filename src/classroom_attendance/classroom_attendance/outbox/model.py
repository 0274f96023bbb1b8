from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LocalOutboxEntry:
    """Locally persisted mirror of an attendance event.

    The first six fields are what the Records screen shows; the rest keep
    enough of the event to sync it later.
    """

    id: str
    date: str
    subject: str
    class_name: str
    status: str
    student_name: str
    class_id: str
    student_id: str
    timestamp: str
    idempotency_key: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "subject": self.subject,
            "class": self.class_name,
            "status": self.status,
            "studentName": self.student_name,
            "classId": self.class_id,
            "studentId": self.student_id,
            "timestamp": self.timestamp,
            "idempotencyKey": self.idempotency_key,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LocalOutboxEntry":
        return cls(
            id=str(data.get("id", "")),
            date=str(data.get("date", "")),
            subject=str(data.get("subject", "")),
            class_name=str(data.get("class", "")),
            status=str(data.get("status", "")),
            student_name=str(data.get("studentName", "")),
            class_id=str(data.get("classId", "")),
            student_id=str(data.get("studentId", "")),
            timestamp=str(data.get("timestamp", "")),
            idempotency_key=str(data.get("idempotencyKey", "")),
        )
