from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import format_instant, parse_instant
from ..common.validators import optional_text, require_non_empty
from ..core.enums import AttendanceStatus, RecordedVia


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_mapping(cls, data: Any) -> Optional["Location"]:
        if not isinstance(data, dict):
            return None
        try:
            return cls(latitude=float(data["latitude"]), longitude=float(data["longitude"]))
        except (KeyError, TypeError, ValueError):
            return None


@dataclass(frozen=True)
class AttendanceEvent:
    """One scan or manual attendance action. Immutable once submitted."""

    student_id: str
    class_id: str
    timestamp: datetime
    status: AttendanceStatus
    recorded_via: RecordedVia
    student_name: Optional[str] = None
    location: Optional[Location] = None
    device_info: Optional[str] = None
    event_id: Optional[str] = None

    def __post_init__(self):
        require_non_empty(self.student_id, "studentId")
        require_non_empty(self.class_id, "classId")

    def to_payload(self) -> dict:
        data: dict[str, Any] = {
            "classId": self.class_id,
            "studentId": self.student_id,
            "timestamp": format_instant(self.timestamp),
            "status": self.status.value,
            "recordedVia": self.recorded_via.value,
        }
        if self.student_name:
            data["studentName"] = self.student_name
        if self.device_info:
            data["deviceInfo"] = self.device_info
        if self.location:
            data["location"] = self.location.to_dict()
        return data

    @classmethod
    def from_mapping(cls, data: dict) -> "AttendanceEvent":
        """Build from a server record; ``classId`` may be populated as an object."""
        class_ref = data.get("classId")
        if isinstance(class_ref, dict):
            class_ref = class_ref.get("_id")
        student_ref = data.get("studentId")
        if isinstance(student_ref, dict):
            student_ref = student_ref.get("studentId") or student_ref.get("_id")

        return cls(
            student_id=str(student_ref or ""),
            class_id=str(class_ref or ""),
            timestamp=parse_instant(data["timestamp"]),
            status=AttendanceStatus(str(data.get("status") or AttendanceStatus.ABSENT.value).lower()),
            recorded_via=RecordedVia(str(data.get("recordedVia") or RecordedVia.SYSTEM.value).lower()),
            student_name=optional_text(data.get("studentName")),
            location=Location.from_mapping(data.get("location")),
            device_info=optional_text(data.get("deviceInfo")),
            event_id=optional_text(data.get("_id") or data.get("id")),
        )
