from __future__ import annotations

import logging
import platform
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..auth.credentials import CredentialStore
from ..auth.model import CurrentUser
from ..common.datetime_utils import now_utc
from ..connectivity.endpoint import ResolvedEndpoint
from ..connectivity.resolver import ConnectivityResolver
from ..core.enums import AttendanceStatus, RecordedVia, SubmissionOutcome
from ..core.exceptions import AuthenticationFailed, NoReachableEndpoint, ValidationError
from ..outbox.model import LocalOutboxEntry
from ..outbox.repository import LocalOutbox
from ..payload.model import ScanIntent
from ..payload.validator import PayloadValidator
from .model import AttendanceEvent, Location
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    event: AttendanceEvent
    intent: ScanIntent
    outbox_entry: Optional[LocalOutboxEntry] = None

    @property
    def pending_sync(self) -> bool:
        return self.outcome == SubmissionOutcome.PENDING_SYNC

    def to_dict(self) -> dict:
        data = {
            "outcome": self.outcome.value,
            "pending_sync": self.pending_sync,
            "classId": self.intent.class_id,
            "subjectCode": self.intent.subject_code,
            "className": self.intent.class_name,
            "attendance": self.event.to_payload(),
        }
        if self.outbox_entry:
            data["record"] = self.outbox_entry.to_dict()
        return data


def default_device_info() -> str:
    return platform.platform()


class EventSubmitter:
    """Turn a scan intent into exactly one stored event.

    The event is either confirmed by the server or, when no server answers the
    connectivity probe, queued in the local outbox. Other failures propagate.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        resolver: ConnectivityResolver,
        outbox: LocalOutbox,
        credentials: CredentialStore,
        *,
        device_info: Optional[str] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._attendance = attendance
        self._resolver = resolver
        self._outbox = outbox
        self._credentials = credentials
        self._device_info = device_info or default_device_info()
        self._clock = clock

    def build_event(
        self,
        intent: ScanIntent,
        user: CurrentUser,
        *,
        location: Optional[Location] = None,
    ) -> AttendanceEvent:
        if user is None or not user.user_id:
            raise ValidationError("Student ID not found. Please log in again.")
        return AttendanceEvent(
            student_id=user.user_id,
            class_id=intent.class_id,
            timestamp=self._clock(),
            status=AttendanceStatus.PRESENT,
            recorded_via=RecordedVia.QR,
            student_name=user.display_name or None,
            location=location,
            device_info=self._device_info,
        )

    def submit(
        self,
        intent: ScanIntent,
        user: CurrentUser,
        *,
        location: Optional[Location] = None,
    ) -> SubmissionResult:
        event = self.build_event(intent, user, location=location)

        try:
            endpoint = self._resolver.resolve()
        except NoReachableEndpoint:
            logger.warning("No attendance server reachable; saving class %s scan locally", intent.class_id)
            entry = self._outbox.append(event, subject=intent.subject_code, class_name=intent.class_name)
            return SubmissionResult(
                outcome=SubmissionOutcome.PENDING_SYNC,
                event=event,
                intent=intent,
                outbox_entry=entry,
            )

        stored = self._send(endpoint, event)
        logger.info("Attendance confirmed for class %s", intent.class_id)
        return SubmissionResult(outcome=SubmissionOutcome.CONFIRMED, event=stored, intent=intent)

    def _send(self, endpoint: ResolvedEndpoint, event: AttendanceEvent) -> AttendanceEvent:
        if not self._credentials.get_token():
            raise AuthenticationFailed("Authentication token missing. Please log in again.")

        try:
            return self._attendance.submit(event, endpoint=endpoint)
        except AuthenticationFailed:
            # the implicit header can be missing right after login
            logger.info("Submission rejected, retrying with explicit credentials")

        try:
            return self._attendance.submit(event, endpoint=endpoint, explicit_auth=True)
        except AuthenticationFailed:
            self._credentials.invalidate()
            raise


class ScanService:
    """Scanned text in, submission result out."""

    def __init__(self, validator: PayloadValidator, submitter: EventSubmitter):
        self._validator = validator
        self._submitter = submitter

    def record_scan(
        self,
        text: str,
        user: CurrentUser,
        *,
        location: Optional[Location] = None,
    ) -> SubmissionResult:
        intent = self._validator.validate(text)
        return self._submitter.submit(intent, user, location=location)
