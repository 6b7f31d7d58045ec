# -*- coding: utf-8 -*-
from __future__ import annotations

import typing as t

from grade_engine.models import ScaleTier

DEFAULT_GRADING_SCALE: tuple[ScaleTier, ...] = (
    ScaleTier(letter="A", min=93, gpa=4.0),
    ScaleTier(letter="A-", min=90, gpa=3.7),
    ScaleTier(letter="B+", min=87, gpa=3.3),
    ScaleTier(letter="B", min=83, gpa=3.0),
    ScaleTier(letter="B-", min=80, gpa=2.7),
    ScaleTier(letter="C+", min=77, gpa=2.3),
    ScaleTier(letter="C", min=73, gpa=2.0),
    ScaleTier(letter="C-", min=70, gpa=1.7),
    ScaleTier(letter="D+", min=67, gpa=1.3),
    ScaleTier(letter="D", min=62, gpa=1.0),
    ScaleTier(letter="D-", min=60, gpa=0.7),
    ScaleTier(letter="F", min=0, gpa=0.0),
)


def resolve_grade(
        percent: float,
        scale: t.Optional[t.Sequence[ScaleTier]] = None,
) -> ScaleTier:
    """Maps a percentage onto the letter/GPA tier of a grading scale.

    Tiers are scanned from the highest threshold down and the first tier whose
    ``min`` is at or below ``percent`` wins. Percentages outside 0-100 need no
    special handling: above every threshold resolves to the top tier, below
    every threshold falls back to the lowest tier.

    :param percent: The computed class percentage.
    :param scale: The class's own scale. Empty or None uses the default scale.
    :return: The matching ScaleTier.
    """
    tiers = sorted(scale or DEFAULT_GRADING_SCALE, key=lambda tier: tier.min, reverse=True)
    for tier in tiers:
        if tier.min <= percent:
            return tier
    return tiers[-1]
