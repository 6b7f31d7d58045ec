# -*- coding: utf-8 -*-
from __future__ import annotations

import typing as t
from datetime import datetime

from fastmcp import FastMCP

from grade_engine.server import parse_today
from gradebook_store.store import get_store
from workload_planner.planner import DailyPlanner
from workload_planner.pool import active_pool

mcp = FastMCP("WorkloadPlanner")


def _format_due(iso_date: str) -> str:
    """Formats an ISO date as 'Mon 1/15'; returns the input when it does not parse."""
    try:
        due = datetime.fromisoformat(iso_date)
    except (ValueError, TypeError):
        return iso_date
    return f"{due:%a} {due.month}/{due.day}"


def _get_today_plan(today: str = "") -> dict[str, t.Any]:
    result = DailyPlanner(get_store()).today(parse_today(today))
    return {
        "date": result.plan.date,
        "ids": list(result.plan.ids),
        "regenerated": result.regenerated,
        "assignments": [a.to_dict() for a in result.assignments],
    }


def _list_active_pool(today: str = "") -> list[dict[str, t.Any]]:
    snapshot = get_store().load()
    pool = active_pool(snapshot.assignments, snapshot.status_lookup(), parse_today(today))
    return [a.to_dict() for a in pool]


def _show_today_plan(today: str = "") -> str:
    store = get_store()
    result = DailyPlanner(store).today(parse_today(today))
    if not result.assignments:
        return f"✅ Nothing planned for {result.plan.date}."

    snapshot = store.load()
    lines = []
    lines.append(f"📝 TODAY'S PLAN ({result.plan.date})")
    lines.append("=" * 80)
    lines.append(f"{'#':<4} {'Class':<10} {'Assignment':<35} {'Due':<12} {'Est.':<8}")
    lines.append("-" * 80)

    for idx, assignment in enumerate(result.assignments, 1):
        school_class = snapshot.find_class(assignment.class_id)
        code = (school_class.code or school_class.name) if school_class else "—"
        name = assignment.name[:34] if len(assignment.name) > 34 else assignment.name
        minutes = f"{assignment.estimated_time}m" if assignment.estimated_time else "—"
        lines.append(
            f"{idx:<4} {code[:9]:<10} {name:<35} {_format_due(assignment.due_date):<12} {minutes:<8}"
        )

    lines.append("=" * 80)
    lines.append(f"Total: {len(result.assignments)} assignment(s)")
    return "\n".join(lines)


@mcp.tool()
def get_today_plan(today: str = "") -> dict[str, t.Any]:
    """Returns today's plan, regenerating it if the stored plan is from another day.

    :param today: Current date in ISO format (optional, defaults to today).
    :return: The stored plan ids plus the still-outstanding planned assignments.
    """
    return _get_today_plan(today)


@mcp.tool()
def list_active_pool(today: str = "") -> list[dict[str, t.Any]]:
    """Lists outstanding assignments due within the next seven days.

    :param today: Current date in ISO format (optional, defaults to today).
    :return: A list of assignment dictionaries.
    """
    return _list_active_pool(today)


@mcp.tool()
def show_today_plan(today: str = "") -> str:
    """Displays today's plan as a table.

    :param today: Current date in ISO format (optional, defaults to today).
    :return: Formatted table string, or a message if nothing is planned.
    """
    return _show_today_plan(today)


if __name__ == "__main__":
    mcp.run()
