from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status of a single attendance event."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class RecordedVia(str, Enum):
    QR = "qr"
    MANUAL = "manual"
    SYSTEM = "system"


class SubmissionOutcome(str, Enum):
    """How a submitted event ended up being stored."""

    CONFIRMED = "confirmed"
    PENDING_SYNC = "pending_sync"


class ScanState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    DECODED = "decoded"
    STOPPED = "stopped"
