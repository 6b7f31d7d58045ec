"""
Data models for the persisted gradebook document.

The whole document is the unit of persistence: it is loaded once, the core
computes over it, and it is written back with a single whole-document save.
Keys this package does not model (``universityName``, ``years``, ``events``,
...) are carried along untouched so that a save never drops them.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from grade_engine.models import Assignment, SchoolClass, StatusDefinition
from grade_engine.statuses import build_status_lookup


@dataclass
class DailyPlan:
    """Today's selected assignments, valid only for ``date``."""
    date: str = ""                                    # "YYYY-MM-DD"
    ids: list[str] = field(default_factory=list)      # mandatory first, then backlog

    @classmethod
    def from_dict(cls, data: t.Optional[dict[str, t.Any]]) -> "DailyPlan":
        if not isinstance(data, dict):
            return cls()
        ids = data.get("ids") or []
        return cls(
            date=str(data.get("date", "") or ""),
            ids=[str(i) for i in ids] if isinstance(ids, list) else [],
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {"date": self.date, "ids": list(self.ids)}


@dataclass
class Snapshot:
    """In-memory view of one stored gradebook document."""
    classes: list[SchoolClass] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)
    custom_statuses: list[StatusDefinition] = field(default_factory=list)
    daily_plan: DailyPlan = field(default_factory=DailyPlan)
    extra: dict[str, t.Any] = field(default_factory=dict)

    _KEYS: t.ClassVar[tuple[str, ...]] = ("classes", "assignments", "customStatuses", "dailyPlan")

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls(extra={"years": []})

    @classmethod
    def from_dict(cls, data: t.Optional[dict[str, t.Any]]) -> "Snapshot":
        data = data if isinstance(data, dict) else {}
        return cls(
            classes=[SchoolClass.from_dict(c) for c in data.get("classes") or [] if isinstance(c, dict)],
            assignments=[Assignment.from_dict(a) for a in data.get("assignments") or [] if isinstance(a, dict)],
            custom_statuses=[
                StatusDefinition.from_dict(s) for s in data.get("customStatuses") or [] if isinstance(s, dict)
            ],
            daily_plan=DailyPlan.from_dict(data.get("dailyPlan")),
            extra={k: v for k, v in data.items() if k not in cls._KEYS},
        )

    def to_dict(self) -> dict[str, t.Any]:
        data = {
            **self.extra,
            "classes": [c.to_dict() for c in self.classes],
            "assignments": [a.to_dict() for a in self.assignments],
        }
        if self.custom_statuses:
            data["customStatuses"] = [s.to_dict() for s in self.custom_statuses]
        if self.daily_plan.date or self.daily_plan.ids:
            data["dailyPlan"] = self.daily_plan.to_dict()
        return data

    def status_lookup(self) -> dict[str, StatusDefinition]:
        return build_status_lookup(self.custom_statuses)

    def find_class(self, class_id: str) -> t.Optional[SchoolClass]:
        return next((c for c in self.classes if c.id == class_id), None)

    def find_assignment(self, assignment_id: str) -> t.Optional[Assignment]:
        return next((a for a in self.assignments if a.id == assignment_id), None)

    def class_assignments(self, class_id: str) -> list[Assignment]:
        return [a for a in self.assignments if a.class_id == class_id]

    def remove_class(self, class_id: str) -> None:
        """Removes a class together with every assignment it owns."""
        self.classes = [c for c in self.classes if c.id != class_id]
        self.assignments = [a for a in self.assignments if a.class_id != class_id]
