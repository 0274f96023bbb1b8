from __future__ import annotations

import json
import logging
import threading
import uuid
from typing import Sequence

from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import calendar_date, format_instant
from ..core.constants import OUTBOX_KEY
from .model import LocalOutboxEntry
from .store import KeyValueStore

logger = logging.getLogger(__name__)


class LocalOutbox:
    """Append-only journal of attendance events kept on the device.

    Nothing here talks to the server: entries are never matched against
    confirmed remote events, so the same scan can show up twice once it has
    been synced by other means.
    """

    def __init__(self, store: KeyValueStore, *, key: str = OUTBOX_KEY):
        self._store = store
        self._key = key
        self._lock = threading.Lock()

    def append(self, event: AttendanceEvent, *, subject: str, class_name: str) -> LocalOutboxEntry:
        entry = LocalOutboxEntry(
            id=uuid.uuid4().hex,
            date=calendar_date(event.timestamp).isoformat(),
            subject=subject,
            class_name=class_name,
            status=event.status.value.capitalize(),
            student_name=event.student_name or "",
            class_id=event.class_id,
            student_id=event.student_id,
            timestamp=format_instant(event.timestamp),
            idempotency_key=str(uuid.uuid4()),
        )
        with self._lock:
            raw = self._read_raw()
            # newest first, the order the Records screen reads
            raw.insert(0, entry.to_dict())
            self._store.set(self._key, json.dumps(raw))
        logger.info("Queued attendance for class %s in local outbox", event.class_id)
        return entry

    def entries(self) -> Sequence[LocalOutboxEntry]:
        with self._lock:
            return [LocalOutboxEntry.from_dict(r) for r in self._read_raw()]

    def clear(self) -> None:
        with self._lock:
            self._store.remove(self._key)

    def _read_raw(self) -> list[dict]:
        text = self._store.get(self._key)
        if not text:
            return []
        data = json.loads(text)
        if not isinstance(data, list):
            return []
        return [r for r in data if isinstance(r, dict)]
