"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models used by the
grade engine and the workload planner, ensuring consistent JSON serialization
across the service. Document models accept the stored camelCase keys and read
every number through the same parse-or-zero helper as the core.
"""
from __future__ import annotations

import typing as t

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from grade_engine.coercion import to_number

# Stored numbers may be strings or nulls and ids may be numbers; coerce them the same way the core does
Number = t.Annotated[float, BeforeValidator(to_number)]
Id = t.Annotated[str, BeforeValidator(str)]


class DocumentModel(BaseModel):
    """Base for models read from the stored document (camelCase, unknown keys kept)."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class StatusDefinition(DocumentModel):
    id: Id
    label: str = ""
    counts_in_grade: bool = Field(default=False, alias="countsInGrade")


class ScaleTier(DocumentModel):
    letter: str
    min: Number = 0.0
    gpa: Number = 0.0


class Category(DocumentModel):
    name: str
    weight: Number = 0.0
    default_time: Number = Field(default=0.0, alias="defaultTime")


class Rule(DocumentModel):
    type: str
    category: str = ""
    count: t.Any = 1


class SchoolClass(DocumentModel):
    id: Id
    name: str = ""
    code: str = ""
    credits: Number = 0.0
    grading_type: str = Field(default="POINTS", alias="gradingType")
    categories: list[Category] = Field(default_factory=list)
    rules: list[Rule] = Field(default_factory=list)
    grading_scale: t.Optional[list[ScaleTier]] = Field(default=None, alias="gradingScale")


class Assignment(DocumentModel):
    id: Id
    class_id: Id = Field(default="", alias="classId")
    name: str = ""
    status: str = "TODO"
    grade: Number = 0.0
    total: Number = 0.0
    due_date: str = Field(default="", alias="dueDate")
    category: str = ""
    estimated_time: Number = Field(default=0.0, alias="estimatedTime")


class DailyPlan(BaseModel):
    date: str = ""
    ids: list[Id] = Field(default_factory=list)


class GradebookDocument(DocumentModel):
    """The whole stored document."""
    classes: list[SchoolClass] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)
    custom_statuses: list[StatusDefinition] = Field(default_factory=list, alias="customStatuses")
    daily_plan: t.Optional[DailyPlan] = Field(default=None, alias="dailyPlan")


# Request/Response Models for API endpoints
class GradeResponse(BaseModel):
    """Computed grade of one class."""
    class_id: str
    percent: float
    letter: str
    gpa: float
    earned_points: float
    total_points: float


class GradesResponse(BaseModel):
    """Grades of every class plus the cumulative GPA."""
    date: str
    classes: list[GradeResponse]
    cumulative_gpa: str


class GPAResponse(BaseModel):
    date: str
    cumulative_gpa: str


class ComputeGradesRequest(BaseModel):
    """Request model for grading a document supplied by the caller."""
    document: GradebookDocument
    today: t.Optional[str] = None


class TodayPlanResponse(BaseModel):
    """Today's stored plan and the assignments still outstanding from it."""
    date: str
    ids: list[str]
    regenerated: bool
    assignments: list[Assignment]


class PoolResponse(BaseModel):
    date: str
    quota: int
    assignments: list[Assignment]
