from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.service import EventSubmitter, ScanService, SubmissionResult
from .auth.credentials import StoredCredentials
from .auth.model import CurrentUser
from .classes.http_class_repository import HttpClassRepository
from .connectivity.client import ApiClient
from .connectivity.resolver import ConnectivityResolver
from .core.constants import (
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_REPORT_DAYS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SCAN_INTERVAL,
    DEFAULT_SECURE_KEY,
)
from .core.exceptions import DomainError
from .outbox.repository import LocalOutbox
from .outbox.store import JsonFileStore, KeyValueStore, MemoryStore
from .payload.validator import PayloadValidator
from .reports.http_report_repository import HttpReportRepository
from .reports.reconciliation import ReconciliationEngine
from .reports.stats import ReportReader
from .scanner.decoder import FrameDecoder, PyzbarFrameDecoder
from .scanner.session import FrameSource, ScanSession


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    credentials: StoredCredentials
    api_client: ApiClient
    resolver: ConnectivityResolver

    attendance_repo: HttpAttendanceRepository
    classes_repo: HttpClassRepository
    reports_repo: HttpReportRepository
    outbox: LocalOutbox

    validator: PayloadValidator
    submitter: EventSubmitter
    scan_service: ScanService
    reconciliation_engine: ReconciliationEngine
    report_reader: ReportReader

    secure_key: str
    scan_interval: float


def build_container(
    *,
    settings: dict,
    session: Optional[requests.Session] = None,
    store: Optional[KeyValueStore] = None,
) -> Container:
    outbox_path = settings.get("OUTBOX_PATH")
    if store is None:
        store = JsonFileStore(outbox_path) if outbox_path else MemoryStore()
    credentials = StoredCredentials(store)

    api_client = ApiClient(
        credentials,
        session=session,
        request_timeout=float(settings.get("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        probe_timeout=float(settings.get("PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT)),
    )
    api_client.attach_credentials()
    resolver = ConnectivityResolver(
        api_client,
        list(settings["API_URLS"]),
        probe_path=str(settings.get("PROBE_PATH", "test")),
    )

    attendance_repo = HttpAttendanceRepository(api_client, resolver.current)
    classes_repo = HttpClassRepository(api_client, resolver.current)
    reports_repo = HttpReportRepository(api_client, resolver.current)
    outbox = LocalOutbox(store)

    secure_key = str(settings.get("QR_SECURE_KEY", DEFAULT_SECURE_KEY))
    validator = PayloadValidator(secure_key=secure_key)
    submitter = EventSubmitter(attendance_repo, resolver, outbox, api_client)
    scan_service = ScanService(validator, submitter)
    reconciliation_engine = ReconciliationEngine(
        attendance_repo,
        classes_repo,
        reports_repo,
        max_workers=int(settings.get("RECONCILE_WORKERS", 1)),
    )
    report_reader = ReportReader(reports_repo, window_days=int(settings.get("REPORT_WINDOW_DAYS", DEFAULT_REPORT_DAYS)))

    return Container(
        store=store,
        credentials=credentials,
        api_client=api_client,
        resolver=resolver,
        attendance_repo=attendance_repo,
        classes_repo=classes_repo,
        reports_repo=reports_repo,
        outbox=outbox,
        validator=validator,
        submitter=submitter,
        scan_service=scan_service,
        reconciliation_engine=reconciliation_engine,
        report_reader=report_reader,
        secure_key=secure_key,
        scan_interval=float(settings.get("SCAN_INTERVAL", DEFAULT_SCAN_INTERVAL)),
    )


def open_scan_session(
    container: Container,
    *,
    frames: FrameSource,
    user: CurrentUser,
    on_result: Callable[[SubmissionResult], None],
    on_rejected: Callable[[DomainError], None],
    interval: Optional[float] = None,
    decoder: Optional[FrameDecoder] = None,
) -> ScanSession:
    """Camera polling wired to the scan pipeline. The caller starts it."""

    def handle(text: str) -> None:
        try:
            result = container.scan_service.record_scan(text, user)
        except DomainError as e:
            on_rejected(e)
            return
        on_result(result)

    return ScanSession(
        frames=frames,
        decoder=decoder or PyzbarFrameDecoder(),
        on_decoded=handle,
        interval=container.scan_interval if interval is None else interval,
    )
