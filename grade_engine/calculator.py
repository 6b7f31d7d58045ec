"""
Per-class grade computation.

Supports two grading modes:
- POINTS: earned points over possible points across all countable work.
- WEIGHTED: each category's earned/possible ratio weighted by the category
  weight, normalised by the weights actually used so that a partially graded
  term still resolves to a meaningful percentage.
"""
from __future__ import annotations

import typing as t
from datetime import date

from grade_engine.coercion import parse_date
from grade_engine.models import Assignment, GradeResult, SchoolClass
from grade_engine.rules import apply_rules
from grade_engine.scale import resolve_grade
from grade_engine.statuses import StatusLookup, build_status_lookup, counts_in_grade

if t.TYPE_CHECKING:
    from gradebook_store.models import Snapshot


def is_countable(assignment: Assignment, today: date, statuses: StatusLookup) -> bool:
    """Whether an assignment takes part in its class's grade.

    Past-due work counts even when it was never marked complete: by the time
    a grade is requested, overdue work is treated as gradable with whatever
    score it currently holds.
    """
    if counts_in_grade(assignment.status, statuses):
        return True
    due = parse_date(assignment.due_date)
    return due is not None and due < today


def countable_assignments(
        school_class: SchoolClass,
        assignments: t.Iterable[Assignment],
        today: date,
        statuses: StatusLookup,
) -> list[Assignment]:
    return [
        a for a in assignments
        if a.class_id == school_class.id and is_countable(a, today, statuses)
    ]


def _weighted_percent(school_class: SchoolClass, assignments: list[Assignment]) -> float:
    weighted_score = 0.0
    weight_used = 0.0
    for category in school_class.categories:
        in_category = [a for a in assignments if a.category == category.name]
        if not in_category:
            continue
        earned = sum(a.grade for a in in_category)
        possible = sum(a.total for a in in_category)
        if possible == 0:
            continue
        weighted_score += (earned / possible) * category.weight
        weight_used += category.weight
    if weight_used == 0:
        return 100.0
    return weighted_score / weight_used * 100


def calculate_class_grade(
        school_class: SchoolClass,
        assignments: t.Iterable[Assignment],
        today: t.Optional[date] = None,
        statuses: t.Optional[StatusLookup] = None,
) -> GradeResult:
    """Computes one class's percentage, letter and GPA points.

    :param school_class: The class to grade.
    :param assignments: Assignments of every class; only this class's are used.
    :param today: Reference date for the past-due check (defaults to today).
    :param statuses: Status lookup table (defaults to the built-in statuses).
    :return: A GradeResult. Classes with nothing graded yet read as 100%.
    """
    today = today or date.today()
    statuses = statuses if statuses is not None else build_status_lookup()

    counted = countable_assignments(school_class, assignments, today, statuses)
    counted = apply_rules(counted, school_class.rules)

    earned = sum(a.grade for a in counted)
    possible = sum(a.total for a in counted)

    if school_class.is_weighted:
        percent = _weighted_percent(school_class, counted)
    else:
        percent = 100.0 if possible == 0 else earned / possible * 100

    tier = resolve_grade(percent, school_class.grading_scale)
    return GradeResult(
        percent=percent,
        letter=tier.letter,
        gpa=tier.gpa,
        earned_points=earned,
        total_points=possible,
    )


def grade_for_class_id(
        class_id: str,
        snapshot: "Snapshot",
        today: t.Optional[date] = None,
) -> GradeResult:
    """Looks a class up by id and grades it; unknown ids give a neutral N/A result."""
    school_class = snapshot.find_class(class_id)
    if school_class is None:
        return GradeResult.not_available()
    return calculate_class_grade(
        school_class,
        snapshot.assignments,
        today=today,
        statuses=snapshot.status_lookup(),
    )


def grades_by_class(
        snapshot: "Snapshot",
        today: t.Optional[date] = None,
) -> dict[str, GradeResult]:
    """Grades every class of a snapshot, keyed by class id, in class order."""
    statuses = snapshot.status_lookup()
    return {
        c.id: calculate_class_grade(c, snapshot.assignments, today=today, statuses=statuses)
        for c in snapshot.classes
    }
