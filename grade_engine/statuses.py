# -*- coding: utf-8 -*-
"""Configurable assignment status taxonomy."""
from __future__ import annotations

import typing as t

from grade_engine.models import StatusDefinition

DEFAULT_STATUS_ID = "TODO"

DEFAULT_STATUSES: tuple[StatusDefinition, ...] = (
    StatusDefinition(id="TODO", label="Not Started", counts_in_grade=False),
    StatusDefinition(id="IN_PROGRESS", label="In Progress", counts_in_grade=False),
    StatusDefinition(id="TURNED_IN", label="Turned In", counts_in_grade=True),
    StatusDefinition(id="GRADED", label="Graded", counts_in_grade=True),
)

StatusLookup = t.Mapping[str, StatusDefinition]


def build_status_lookup(
        custom_statuses: t.Optional[t.Iterable[StatusDefinition]] = None,
) -> dict[str, StatusDefinition]:
    """Builds the ``id -> StatusDefinition`` table used by every computation.

    Custom statuses extend the built-in ones; a custom status reusing a
    built-in id replaces it.

    :param custom_statuses: User-defined statuses from the stored document.
    :return: The merged lookup table, built-ins first.
    """
    lookup = {status.id: status for status in DEFAULT_STATUSES}
    for status in custom_statuses or ():
        if status.id:
            lookup[status.id] = status
    return lookup


def counts_in_grade(status_id: str, statuses: StatusLookup) -> bool:
    """Whether an assignment in ``status_id`` is grade-complete.

    Unknown ids are treated as outstanding work.
    """
    status = statuses.get(status_id)
    return bool(status and status.counts_in_grade)


def status_label(status_id: str, statuses: StatusLookup) -> str:
    status = statuses.get(status_id)
    if status and status.label:
        return status.label
    return status_id.replace("_", " ").title() if status_id else "Unknown"
