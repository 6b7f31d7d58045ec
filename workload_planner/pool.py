# -*- coding: utf-8 -*-
from __future__ import annotations

import typing as t
from datetime import date, timedelta

from grade_engine.coercion import parse_date
from grade_engine.models import Assignment
from grade_engine.statuses import StatusLookup, counts_in_grade

# The planner's scheduling unit. Fixed, not configurable.
HORIZON_DAYS = 7


def is_outstanding(assignment: Assignment, statuses: StatusLookup) -> bool:
    """Work whose status does not count as grade-complete."""
    return not counts_in_grade(assignment.status, statuses)


def active_pool(
        assignments: t.Iterable[Assignment],
        statuses: StatusLookup,
        today: date,
) -> list[Assignment]:
    """Outstanding assignments due within ``[today, today + 7 days]``.

    :param assignments: Every assignment of the student.
    :param statuses: Status lookup table.
    :param today: The current calendar date.
    :return: The active assignments, in input order. Assignments without a
        valid due date never enter the pool.
    """
    horizon = today + timedelta(days=HORIZON_DAYS)
    pool = []
    for assignment in assignments:
        due = parse_date(assignment.due_date)
        if due is None or not (today <= due <= horizon):
            continue
        if is_outstanding(assignment, statuses):
            pool.append(assignment)
    return pool
