from __future__ import annotations

from typing import Callable, Sequence

from ..connectivity.client import ApiClient
from ..connectivity.endpoint import ResolvedEndpoint
from .model import ClassInfo, RosterStudent
from .repository import ClassRepository


class HttpClassRepository(ClassRepository):
    def __init__(self, client: ApiClient, endpoints: Callable[[], ResolvedEndpoint]):
        self._client = client
        self._endpoints = endpoints

    def list_classes(self) -> Sequence[ClassInfo]:
        rows = self._client.get(self._endpoints(), "classes")
        return [ClassInfo.from_mapping(r) for r in rows or [] if isinstance(r, dict)]

    def get_roster(self, class_id: str) -> Sequence[RosterStudent]:
        rows = self._client.get(self._endpoints(), f"students/{class_id}")
        return [RosterStudent.from_mapping(r) for r in rows or [] if isinstance(r, dict)]
