from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClassInfo:
    class_id: str
    class_name: str
    subject_code: str
    year_section: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: dict) -> "ClassInfo":
        return cls(
            class_id=str(data.get("_id") or data.get("classId") or ""),
            class_name=str(data.get("className") or ""),
            subject_code=str(data.get("subjectCode") or ""),
            year_section=data.get("yearSection") or None,
        )


@dataclass(frozen=True)
class RosterStudent:
    """One enrolled student, owned by class management."""

    student_id: str
    first_name: str
    last_name: str
    middle_initial: Optional[str] = None

    @property
    def display_name(self) -> str:
        name = f"{self.last_name}, {self.first_name}"
        if self.middle_initial:
            name += f" {self.middle_initial}."
        return name

    @classmethod
    def from_mapping(cls, data: dict) -> "RosterStudent":
        return cls(
            student_id=str(data.get("studentId") or ""),
            first_name=str(data.get("firstName") or ""),
            last_name=str(data.get("lastName") or data.get("surname") or ""),
            middle_initial=data.get("middleInitial") or None,
        )
