# -*- coding: utf-8 -*-
from __future__ import annotations

import typing as t
from dataclasses import asdict
from datetime import date

from fastmcp import FastMCP

from grade_engine.calculator import grade_for_class_id, grades_by_class
from grade_engine.gpa import cumulative_gpa
from gradebook_store.store import get_store

mcp = FastMCP("GradeEngine")


def parse_today(today: str = "") -> date:
    """Parses an optional ISO date argument, defaulting to the current date.

    :param today: ISO date string or "".
    :return: The reference date.
    :raises ValueError: If ``today`` is non-empty and not an ISO date.
    """
    return date.fromisoformat(today) if today else date.today()


def _compute_class_grade(class_id: str, today: str = "") -> dict[str, t.Any]:
    snapshot = get_store().load()
    result = grade_for_class_id(class_id, snapshot, parse_today(today))
    return {"class_id": class_id, **asdict(result)}


def _compute_cumulative_gpa(today: str = "") -> str:
    snapshot = get_store().load()
    return cumulative_gpa(
        snapshot.classes,
        snapshot.assignments,
        today=parse_today(today),
        statuses=snapshot.status_lookup(),
    )


def _show_grade_summary(today: str = "") -> str:
    snapshot = get_store().load()
    reference = parse_today(today)
    if not snapshot.classes:
        return "🎓 No classes found."

    grades = grades_by_class(snapshot, reference)

    lines = []
    lines.append("🎓 GRADE SUMMARY")
    lines.append("=" * 90)
    lines.append(f"{'#':<4} {'Code':<10} {'Class':<35} {'Credits':<8} {'Percent':<9} {'Letter':<7} {'GPA':<5}")
    lines.append("-" * 90)

    for idx, school_class in enumerate(snapshot.classes, 1):
        result = grades[school_class.id]
        name = school_class.name[:34] if len(school_class.name) > 34 else school_class.name
        code = school_class.code[:9] if len(school_class.code) > 9 else school_class.code
        lines.append(
            f"{idx:<4} {code or '—':<10} {name:<35} {school_class.credits:<8g} "
            f"{result.percent:<9.1f} {result.letter:<7} {result.gpa:<5.1f}"
        )

    lines.append("=" * 90)
    gpa = cumulative_gpa(snapshot.classes, snapshot.assignments, reference, snapshot.status_lookup())
    lines.append(f"Cumulative GPA: {gpa}")
    return "\n".join(lines)


@mcp.tool()
def compute_class_grade(class_id: str, today: str = "") -> dict[str, t.Any]:
    """Computes the percentage, letter grade and GPA points of one class.

    :param class_id: Id of the class to grade.
    :param today: Reference date in ISO format (optional, defaults to today).
    :return: The grade result. Unknown classes give a 0% "N/A" result.
    """
    return _compute_class_grade(class_id, today)


@mcp.tool()
def compute_cumulative_gpa(today: str = "") -> str:
    """Computes the credit-weighted cumulative GPA across all classes.

    :param today: Reference date in ISO format (optional, defaults to today).
    :return: The GPA formatted to two decimals.
    """
    return _compute_cumulative_gpa(today)


@mcp.tool()
def show_grade_summary(today: str = "") -> str:
    """Displays every class's grade and the cumulative GPA as a table.

    :param today: Reference date in ISO format (optional, defaults to today).
    :return: Formatted table string.
    """
    return _show_grade_summary(today)


if __name__ == "__main__":
    mcp.run()
