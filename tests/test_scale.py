"""Tests for letter grade resolution."""
import pytest

from grade_engine.models import ScaleTier
from grade_engine.scale import DEFAULT_GRADING_SCALE, resolve_grade

SHORT_SCALE = [
    ScaleTier(letter="A", min=93, gpa=4.0),
    ScaleTier(letter="B", min=83, gpa=3.0),
    ScaleTier(letter="F", min=0, gpa=0.0),
]


@pytest.mark.parametrize(
    "percent, letter",
    [(93, "A"), (92.999, "B"), (83, "B"), (82.5, "F"), (-5, "F"), (140, "A")],
)
def test_threshold_is_inclusive_lower_bound(percent: float, letter: str) -> None:
    """A tier is earned at exactly its minimum and lost just below it."""
    assert resolve_grade(percent, SHORT_SCALE).letter == letter


def test_scale_order_does_not_matter() -> None:
    """Tiers are sorted by threshold before scanning."""
    shuffled = [SHORT_SCALE[2], SHORT_SCALE[0], SHORT_SCALE[1]]
    assert resolve_grade(90, shuffled).letter == "B"
    assert resolve_grade(95, shuffled).gpa == 4.0


def test_below_every_threshold_falls_back_to_lowest_tier() -> None:
    """A scale without a 0 floor still resolves negative percentages to its lowest tier."""
    scale = [ScaleTier(letter="P", min=50, gpa=1.0), ScaleTier(letter="D", min=20, gpa=0.5)]
    assert resolve_grade(-10, scale).letter == "D"


def test_default_scale_is_used_when_none_or_empty() -> None:
    """Absent and empty scales both use the built-in twelve-tier scale."""
    assert len(DEFAULT_GRADING_SCALE) == 12
    assert resolve_grade(90.0).letter == "A-"
    assert resolve_grade(90.0, []).letter == "A-"
    assert resolve_grade(61.0).letter == "D-"
    assert resolve_grade(59.99).letter == "F"
    assert resolve_grade(100.0).gpa == 4.0
