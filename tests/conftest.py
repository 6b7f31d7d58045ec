"""Shared fixtures for the grade engine and planner tests."""
import typing as t
from datetime import date

import pytest

from grade_engine.models import Assignment

# A Monday; tomorrow is 2025-03-11
TODAY = date(2025, 3, 10)


def make_assignment(id: str, **overrides: t.Any) -> Assignment:
    """Build an Assignment with sensible defaults for tests."""
    fields: dict[str, t.Any] = {
        "class_id": "c1",
        "name": f"Assignment {id}",
        "status": "TODO",
        "grade": 0.0,
        "total": 100.0,
        "due_date": "2025-03-12",
        "category": "Homework",
    }
    fields.update(overrides)
    return Assignment(id=id, **fields)


def sample_document() -> dict[str, t.Any]:
    """A stored document with two classes whose GPAs are 4.0 (3 credits) and 3.0 (4 credits)."""
    return {
        "universityName": "Carnegie State",
        "years": [{"id": "y1", "name": "2024-2025"}],
        "events": [{"id": "e1", "title": "Career fair", "date": "2025-03-12"}],
        "classes": [
            {
                "id": "c1",
                "name": "Intro to Programming",
                "code": "CS 101",
                "credits": "3",
                "gradingType": "POINTS",
                "categories": [{"name": "Homework", "weight": 0}],
            },
            {
                "id": "c2",
                "name": "Linear Algebra",
                "code": "MATH 201",
                "credits": 4,
                "gradingType": "WEIGHTED",
                "categories": [
                    {"name": "Homework", "weight": 40, "defaultTime": 60},
                    {"name": "Exams", "weight": 60, "defaultTime": 120},
                ],
                "rules": [{"type": "DROP_LOWEST", "category": "Homework", "count": 1}],
            },
        ],
        "assignments": [
            {"id": "a1", "classId": "c1", "name": "Lab 1", "status": "GRADED", "grade": 95, "total": 100,
             "dueDate": "2025-03-01", "category": "Homework", "estimatedTime": 45},
            {"id": "a2", "classId": "c1", "name": "Project", "status": "TODO", "grade": 0, "total": 100,
             "dueDate": "2025-03-11", "category": "Homework", "estimatedTime": 90},
            {"id": "h1", "classId": "c2", "name": "Problem Set 1", "status": "GRADED", "grade": 50, "total": 100,
             "dueDate": "2025-02-20", "category": "Homework"},
            {"id": "h2", "classId": "c2", "name": "Problem Set 2", "status": "GRADED", "grade": "90", "total": "100",
             "dueDate": "2025-02-27", "category": "Homework"},
            {"id": "x1", "classId": "c2", "name": "Midterm", "status": "GRADED", "grade": 80, "total": 100,
             "dueDate": "2025-03-03", "category": "Exams"},
            {"id": "h3", "classId": "c2", "name": "Problem Set 3", "status": "IN_PROGRESS", "grade": 0, "total": 20,
             "dueDate": "2025-03-13", "category": "Homework", "estimatedTime": 60},
            {"id": "x2", "classId": "c2", "name": "Final", "status": "TODO", "grade": 0, "total": 100,
             "dueDate": "2025-03-13", "category": "Exams"},
        ],
    }


@pytest.fixture
def document() -> dict[str, t.Any]:
    return sample_document()
