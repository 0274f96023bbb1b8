from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from ..connectivity.client import ApiClient
from ..connectivity.endpoint import ResolvedEndpoint
from ..core.exceptions import RemoteError, ValidationError
from .model import AttendanceEvent
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, client: ApiClient, endpoints: Callable[[], ResolvedEndpoint]):
        self._client = client
        self._endpoints = endpoints

    def submit(self, event: AttendanceEvent, *, endpoint: ResolvedEndpoint, explicit_auth: bool = False) -> AttendanceEvent:
        body = self._client.post(endpoint, "attendance", event.to_payload(), explicit_auth=explicit_auth)
        stored = body.get("attendance") if isinstance(body, dict) else None
        if not isinstance(stored, dict):
            raise RemoteError("Server did not confirm the attendance record.")
        try:
            return AttendanceEvent.from_mapping(stored)
        except (KeyError, ValueError, ValidationError) as e:
            raise RemoteError("Server returned an unreadable attendance record.") from e

    def list_for_class(self, class_id: str) -> Sequence[AttendanceEvent]:
        body = self._client.get(self._endpoints(), f"attendance/class/{class_id}")
        return _read_events(body)

    def list_for_student(self, student_id: str) -> Sequence[AttendanceEvent]:
        body = self._client.get(self._endpoints(), f"attendance/student/{student_id}")
        return _read_events(body)


def _read_events(body: Any) -> list[AttendanceEvent]:
    # one bad row must not hide the rest of the history
    rows = body.get("attendance") if isinstance(body, dict) else body
    events = []
    for row in rows or []:
        if not isinstance(row, dict):
            continue
        try:
            events.append(AttendanceEvent.from_mapping(row))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning("Skipping unreadable attendance record %s: %s", row.get("_id") or row.get("id"), e)
    return events
