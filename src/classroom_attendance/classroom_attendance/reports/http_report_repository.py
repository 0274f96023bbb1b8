from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Optional, Sequence

from ..connectivity.client import ApiClient
from ..connectivity.endpoint import ResolvedEndpoint
from .model import AttendanceReport
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class HttpReportRepository(ReportRepository):
    """Reports stored by the server; ``POST /reports`` replaces by (classId, date)."""

    def __init__(self, client: ApiClient, endpoints: Callable[[], ResolvedEndpoint]):
        self._client = client
        self._endpoints = endpoints

    def upsert(self, report: AttendanceReport) -> None:
        self._client.post(self._endpoints(), "reports", report.check().to_payload())

    def list_between(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[AttendanceReport]:
        rows = self._client.get(self._endpoints(), "reports", params=_range(start_date, end_date))
        return _read_reports(rows)

    def list_for_class(
        self,
        class_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceReport]:
        rows = self._client.get(self._endpoints(), f"reports/class/{class_id}", params=_range(start_date, end_date))
        return _read_reports(rows)


def _read_reports(rows: Any) -> list[AttendanceReport]:
    reports = []
    for row in rows or []:
        if not isinstance(row, dict):
            continue
        try:
            reports.append(AttendanceReport.from_mapping(row))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping unreadable report %s: %s", row.get("_id") or row.get("date"), e)
    return reports


def _range(start_date: Optional[date], end_date: Optional[date]) -> Optional[dict]:
    params = {}
    if start_date:
        params["startDate"] = start_date.isoformat()
    if end_date:
        params["endDate"] = end_date.isoformat()
    return params or None
