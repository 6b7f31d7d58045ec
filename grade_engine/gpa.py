# -*- coding: utf-8 -*-
from __future__ import annotations

import typing as t
from datetime import date

from grade_engine.calculator import calculate_class_grade
from grade_engine.models import Assignment, SchoolClass
from grade_engine.statuses import StatusLookup, build_status_lookup


def credit_weighted_gpa(pairs: t.Iterable[tuple[float, float]]) -> float:
    """Credit-weighted mean of ``(gpa, credits)`` pairs; 0.0 when there are no credits."""
    points = 0.0
    credits = 0.0
    for gpa, class_credits in pairs:
        points += gpa * class_credits
        credits += class_credits
    if credits == 0:
        return 0.0
    return points / credits


def format_gpa(value: float) -> str:
    return f"{value:.2f}"


def cumulative_gpa(
        classes: t.Iterable[SchoolClass],
        assignments: t.Sequence[Assignment],
        today: t.Optional[date] = None,
        statuses: t.Optional[StatusLookup] = None,
) -> str:
    """Cumulative GPA across all classes, formatted to two decimals.

    :param classes: Every class of the student.
    :param assignments: Every assignment of the student.
    :param today: Reference date for grading (defaults to today).
    :param statuses: Status lookup table (defaults to the built-in statuses).
    :return: The GPA as a string, e.g. ``"3.43"``; ``"0.00"`` with zero credits.
    """
    statuses = statuses if statuses is not None else build_status_lookup()
    pairs = [
        (calculate_class_grade(c, assignments, today=today, statuses=statuses).gpa, c.credits)
        for c in classes
    ]
    return format_gpa(credit_weighted_gpa(pairs))
