"""
Daily workload planner.

Picks a stable subset of the active pool as "today's plan":

1. quota = ceil(|pool| / 7), so a week's work is spread as evenly as integer
   division allows;
2. everything due tomorrow is included unconditionally (mandatory tier);
3. remaining quota slots are filled from the rest of the pool, earliest due
   date first and, within a day, highest impact first (backlog tier).

The plan is stored with its date and reused until the calendar day changes.
Within a day, completed items drop out of the view but stay in the stored
plan, so finishing work never pulls new work into today.
"""
from __future__ import annotations

import logging
import math
import threading
import typing as t
from dataclasses import dataclass
from datetime import date, timedelta

from grade_engine.coercion import parse_date
from grade_engine.models import Assignment, SchoolClass
from grade_engine.statuses import StatusLookup
from gradebook_store.models import DailyPlan, Snapshot
from gradebook_store.store import DocumentStore
from workload_planner.pool import HORIZON_DAYS, active_pool, is_outstanding

logger = logging.getLogger(__name__)


def daily_quota(pool_size: int) -> int:
    """Items per day needed to clear ``pool_size`` items within the horizon."""
    if pool_size <= 0:
        return 0
    return max(1, math.ceil(pool_size / HORIZON_DAYS))


def impact(assignment: Assignment, school_class: t.Optional[SchoolClass]) -> float:
    """Backlog ranking score: points possible, scaled by category weight in weighted classes.

    Only used to order the backlog, never for grading. An assignment whose
    class is missing is ranked by its points alone.
    """
    if school_class is not None and school_class.is_weighted:
        return assignment.total * (school_class.category_weight(assignment.category) / 100)
    return assignment.total


def build_daily_plan(snapshot: Snapshot, today: date) -> DailyPlan:
    """Computes a fresh plan for ``today``. Pure; does not touch the snapshot."""
    statuses = snapshot.status_lookup()
    pool = active_pool(snapshot.assignments, statuses, today)
    quota = daily_quota(len(pool))
    tomorrow = today + timedelta(days=1)

    mandatory = [a for a in pool if parse_date(a.due_date) == tomorrow]
    classes = {c.id: c for c in snapshot.classes}
    backlog = sorted(
        (a for a in pool if parse_date(a.due_date) != tomorrow),
        key=lambda a: (parse_date(a.due_date), -impact(a, classes.get(a.class_id))),
    )
    filled = backlog[:max(quota - len(mandatory), 0)]

    logger.debug(
        "Plan for %s: pool=%d quota=%d mandatory=%d filled=%d",
        today.isoformat(), len(pool), quota, len(mandatory), len(filled),
    )
    return DailyPlan(date=today.isoformat(), ids=[a.id for a in mandatory + filled])


def ensure_daily_plan(snapshot: Snapshot, today: date) -> tuple[DailyPlan, bool]:
    """Returns today's plan, regenerating it only when the stored one is stale.

    :return: ``(plan, regenerated)``. When regenerated, the snapshot's plan has
        been replaced and the caller is responsible for saving the snapshot.
    """
    if snapshot.daily_plan.date == today.isoformat():
        return snapshot.daily_plan, False
    plan = build_daily_plan(snapshot, today)
    snapshot.daily_plan = plan
    logger.info("Regenerated daily plan for %s with %d item(s)", plan.date, len(plan.ids))
    return plan, True


def today_view(
        snapshot: Snapshot,
        plan: DailyPlan,
        statuses: t.Optional[StatusLookup] = None,
) -> list[Assignment]:
    """The live "today" list: planned assignments that still exist and are still outstanding."""
    statuses = statuses if statuses is not None else snapshot.status_lookup()
    by_id = {a.id: a for a in snapshot.assignments}
    view = []
    for assignment_id in plan.ids:
        assignment = by_id.get(assignment_id)
        if assignment is not None and is_outstanding(assignment, statuses):
            view.append(assignment)
    return view


@dataclass
class TodayPlan:
    """Result of a planner access: the stored plan plus its live view."""
    plan: DailyPlan
    assignments: list[Assignment]
    regenerated: bool


class DailyPlanner:
    """Serialises plan regeneration against one document store.

    Load, check-and-regenerate and save happen under one lock so that two
    sessions hitting a stale plan at once cannot both write a different plan.
    The save itself is a whole-document replace.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self._lock = threading.Lock()

    def today(self, today: t.Optional[date] = None) -> TodayPlan:
        today = today or date.today()
        with self._lock:
            snapshot = self.store.load()
            plan, regenerated = ensure_daily_plan(snapshot, today)
            if regenerated:
                self.store.save(snapshot)
        return TodayPlan(plan=plan, assignments=today_view(snapshot, plan), regenerated=regenerated)
