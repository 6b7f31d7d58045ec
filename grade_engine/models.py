"""
Data models for grade computation.

This module contains the dataclasses used to represent classes, assignments,
grading configuration and computed grades. Stored documents use camelCase keys
(``classId``, ``dueDate``, ``gradingType``); the ``from_dict``/``to_dict``
helpers translate between the two and read every number through
:func:`grade_engine.coercion.to_number`.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from grade_engine.coercion import to_number

GradingType = t.Literal["POINTS", "WEIGHTED"]


def _plain_number(value: float) -> t.Union[int, float]:
    return int(value) if float(value).is_integer() else value


def _extra(data: dict[str, t.Any], known: t.Iterable[str]) -> dict[str, t.Any]:
    return {key: value for key, value in data.items() if key not in known}


@dataclass
class StatusDefinition:
    """One entry of the configurable status taxonomy."""
    id: str
    label: str = ""
    counts_in_grade: bool = False
    extra: dict[str, t.Any] = field(default_factory=dict)

    _KEYS: t.ClassVar[tuple[str, ...]] = ("id", "label", "countsInGrade")

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "StatusDefinition":
        return cls(
            id=str(data.get("id", "")),
            label=str(data.get("label", "") or ""),
            counts_in_grade=bool(data.get("countsInGrade", False)),
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {**self.extra, "id": self.id, "label": self.label, "countsInGrade": self.counts_in_grade}


@dataclass
class ScaleTier:
    """A grading scale threshold: percentages at or above ``min`` earn ``letter``."""
    letter: str
    min: float
    gpa: float
    extra: dict[str, t.Any] = field(default_factory=dict)

    _KEYS: t.ClassVar[tuple[str, ...]] = ("letter", "min", "gpa")

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "ScaleTier":
        return cls(
            letter=str(data.get("letter", "")),
            min=to_number(data.get("min")),
            gpa=to_number(data.get("gpa")),
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {**self.extra, "letter": self.letter, "min": _plain_number(self.min), "gpa": self.gpa}


@dataclass
class Category:
    """A weighted assignment category of a class."""
    name: str
    weight: float = 0.0      # percentage points, 0-100
    default_time: int = 0    # minutes
    extra: dict[str, t.Any] = field(default_factory=dict)

    _KEYS: t.ClassVar[tuple[str, ...]] = ("name", "weight", "defaultTime")

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "Category":
        return cls(
            name=str(data.get("name", "")),
            weight=to_number(data.get("weight")),
            default_time=int(to_number(data.get("defaultTime"))),
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {
            **self.extra,
            "name": self.name,
            "weight": _plain_number(self.weight),
            "defaultTime": self.default_time,
        }


@dataclass
class RuleConfig:
    """
    A stored grading rule, e.g. ``{"type": "DROP_LOWEST", "category": "Quiz", "count": 1}``.

    ``count`` is kept as stored; rule objects interpret it.
    """
    type: str
    category: str = ""
    count: t.Any = 1
    extra: dict[str, t.Any] = field(default_factory=dict)

    _KEYS: t.ClassVar[tuple[str, ...]] = ("type", "category", "count")

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "RuleConfig":
        return cls(
            type=str(data.get("type", "")),
            category=str(data.get("category", "") or ""),
            count=data.get("count", 1),
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {**self.extra, "type": self.type, "category": self.category, "count": self.count}


@dataclass
class Assignment:
    """A piece of coursework owned by one class."""
    id: str
    class_id: str
    name: str = ""
    status: str = "TODO"
    grade: float = 0.0          # points earned, may exceed total
    total: float = 0.0          # points possible
    due_date: str = ""          # "YYYY-MM-DD" or ""
    category: str = ""
    estimated_time: int = 0     # minutes
    extra: dict[str, t.Any] = field(default_factory=dict)

    _KEYS: t.ClassVar[tuple[str, ...]] = (
        "id", "classId", "name", "status", "grade", "total",
        "dueDate", "category", "estimatedTime",
    )

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "Assignment":
        return cls(
            id=str(data.get("id", "")),
            class_id=str(data.get("classId", "")),
            name=str(data.get("name", "") or ""),
            status=str(data.get("status") or "TODO"),
            grade=to_number(data.get("grade")),
            total=to_number(data.get("total")),
            due_date=str(data.get("dueDate", "") or ""),
            category=str(data.get("category", "") or ""),
            estimated_time=max(int(to_number(data.get("estimatedTime"))), 0),
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {
            **self.extra,
            "id": self.id,
            "classId": self.class_id,
            "name": self.name,
            "status": self.status,
            "grade": _plain_number(self.grade),
            "total": _plain_number(self.total),
            "dueDate": self.due_date,
            "category": self.category,
            "estimatedTime": self.estimated_time,
        }


@dataclass
class SchoolClass:
    """A class (course) with its grading configuration."""
    id: str
    name: str = ""
    code: str = ""
    credits: float = 0.0
    grading_type: str = "POINTS"
    categories: list[Category] = field(default_factory=list)
    rules: list[RuleConfig] = field(default_factory=list)
    grading_scale: list[ScaleTier] = field(default_factory=list)  # empty -> default scale
    extra: dict[str, t.Any] = field(default_factory=dict)

    _KEYS: t.ClassVar[tuple[str, ...]] = (
        "id", "name", "code", "credits", "gradingType",
        "categories", "rules", "gradingScale",
    )

    @property
    def is_weighted(self) -> bool:
        return self.grading_type == "WEIGHTED"

    def category_weight(self, name: str) -> float:
        """Weight of the first category called ``name``, 0 if there is none."""
        for category in self.categories:
            if category.name == name:
                return category.weight
        return 0.0

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "SchoolClass":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "") or ""),
            code=str(data.get("code", "") or ""),
            credits=to_number(data.get("credits")),
            grading_type=str(data.get("gradingType") or "POINTS").upper(),
            categories=[Category.from_dict(c) for c in data.get("categories") or [] if isinstance(c, dict)],
            rules=[RuleConfig.from_dict(r) for r in data.get("rules") or [] if isinstance(r, dict)],
            grading_scale=[ScaleTier.from_dict(s) for s in data.get("gradingScale") or [] if isinstance(s, dict)],
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, t.Any]:
        data = {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "credits": _plain_number(self.credits),
            "gradingType": self.grading_type,
            "categories": [c.to_dict() for c in self.categories],
            "rules": [r.to_dict() for r in self.rules],
        }
        if self.grading_scale:
            data["gradingScale"] = [s.to_dict() for s in self.grading_scale]
        return data


@dataclass
class GradeResult:
    """Computed grade for one class."""
    percent: float
    letter: str
    gpa: float
    earned_points: float = 0.0
    total_points: float = 0.0

    @classmethod
    def not_available(cls) -> "GradeResult":
        """Neutral result for a class that could not be found."""
        return cls(percent=0.0, letter="N/A", gpa=0.0, earned_points=0.0, total_points=0.0)
