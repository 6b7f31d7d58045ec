"""Tests for per-class grade computation and cumulative GPA."""
import pytest
from conftest import TODAY, make_assignment, sample_document

from grade_engine.calculator import calculate_class_grade, grade_for_class_id, grades_by_class, is_countable
from grade_engine.gpa import credit_weighted_gpa, cumulative_gpa
from grade_engine.models import Category, RuleConfig, ScaleTier, SchoolClass, StatusDefinition
from grade_engine.statuses import build_status_lookup
from gradebook_store.models import Snapshot


def weighted_class(homework_weight: float = 40, exam_weight: float = 60) -> SchoolClass:
    return SchoolClass(
        id="c1",
        grading_type="WEIGHTED",
        categories=[Category(name="Homework", weight=homework_weight), Category(name="Exams", weight=exam_weight)],
    )


def test_points_class_without_countable_work_reads_full_marks() -> None:
    """No graded, submitted or overdue work means 100%."""
    upcoming = [make_assignment("a", status="TODO", due_date="2025-03-20")]
    result = calculate_class_grade(SchoolClass(id="c1"), upcoming, today=TODAY)

    assert result.percent == 100.0
    assert result.letter == "A"
    assert result.total_points == 0


def test_points_class_sums_earned_over_possible() -> None:
    """GRADED and TURNED_IN work both count in POINTS mode."""
    items = [
        make_assignment("a", status="GRADED", grade=45, total=50),
        make_assignment("b", status="TURNED_IN", grade=40, total=50),
        make_assignment("c", status="IN_PROGRESS", grade=0, total=50),
    ]
    result = calculate_class_grade(SchoolClass(id="c1"), items, today=TODAY)

    assert result.percent == pytest.approx(85.0)
    assert result.letter == "B"
    assert result.gpa == 3.0
    assert (result.earned_points, result.total_points) == (85, 100)


def test_extra_credit_can_exceed_one_hundred_percent() -> None:
    items = [make_assignment("a", status="GRADED", grade=110, total=100)]
    result = calculate_class_grade(SchoolClass(id="c1"), items, today=TODAY)
    assert result.percent == pytest.approx(110.0)
    assert result.letter == "A"


def test_past_due_work_counts_even_if_not_submitted() -> None:
    """Overdue TODO work is graded with whatever score it holds; work due today is not overdue."""
    items = [
        make_assignment("done", status="GRADED", grade=100, total=100),
        make_assignment("late", status="TODO", grade=0, total=100, due_date="2025-03-09"),
        make_assignment("today", status="TODO", grade=0, total=100, due_date="2025-03-10"),
    ]
    result = calculate_class_grade(SchoolClass(id="c1"), items, today=TODAY)
    assert result.percent == pytest.approx(50.0)


def test_assignment_without_due_date_is_never_overdue() -> None:
    statuses = build_status_lookup()
    assert not is_countable(make_assignment("a", due_date=""), TODAY, statuses)
    assert not is_countable(make_assignment("b", due_date="someday"), TODAY, statuses)


def test_weighted_class_uses_category_weights() -> None:
    """(0.9 * 40 + 0.7 * 60) / 100 = 78%."""
    items = [
        make_assignment("h", status="GRADED", category="Homework", grade=90, total=100),
        make_assignment("e", status="GRADED", category="Exams", grade=70, total=100),
    ]
    result = calculate_class_grade(weighted_class(), items, today=TODAY)

    assert result.percent == pytest.approx(78.0)
    assert result.letter == "C+"


@pytest.mark.parametrize("factor", [0.5, 2.5, 10])
def test_weighted_percent_is_invariant_under_weight_rescaling(factor: float) -> None:
    items = [
        make_assignment("h", status="GRADED", category="Homework", grade=17, total=20),
        make_assignment("e", status="GRADED", category="Exams", grade=61, total=80),
    ]
    base = calculate_class_grade(weighted_class(40, 60), items, today=TODAY)
    scaled = calculate_class_grade(weighted_class(40 * factor, 60 * factor), items, today=TODAY)
    assert scaled.percent == pytest.approx(base.percent)


def test_weighted_denominator_is_weight_actually_used() -> None:
    """With only homework graded, the class percent equals the homework percent."""
    items = [make_assignment("h", status="GRADED", category="Homework", grade=90, total=100)]
    result = calculate_class_grade(weighted_class(), items, today=TODAY)
    assert result.percent == pytest.approx(90.0)


def test_weighted_categories_with_zero_total_are_skipped() -> None:
    items = [
        make_assignment("h", status="GRADED", category="Homework", grade=80, total=100),
        make_assignment("e", status="GRADED", category="Exams", grade=5, total=0),
    ]
    result = calculate_class_grade(weighted_class(), items, today=TODAY)
    assert result.percent == pytest.approx(80.0)


def test_weighted_class_without_graded_work_reads_full_marks() -> None:
    assert calculate_class_grade(weighted_class(), [], today=TODAY).percent == 100.0


def test_assignments_outside_listed_categories_are_ignored_when_weighted() -> None:
    items = [
        make_assignment("h", status="GRADED", category="Homework", grade=60, total=100),
        make_assignment("x", status="GRADED", category="Participation", grade=100, total=100),
    ]
    assert calculate_class_grade(weighted_class(), items, today=TODAY).percent == pytest.approx(60.0)


def test_drop_lowest_rule_is_applied_before_aggregation() -> None:
    school_class = SchoolClass(id="c1", rules=[RuleConfig(type="DROP_LOWEST", category="Homework", count=1)])
    items = [
        make_assignment("low", status="GRADED", grade=20, total=100),
        make_assignment("high", status="GRADED", grade=90, total=100),
    ]
    result = calculate_class_grade(school_class, items, today=TODAY)
    assert result.percent == pytest.approx(90.0)
    assert result.total_points == 100


def test_class_scale_overrides_default() -> None:
    school_class = SchoolClass(
        id="c1",
        grading_scale=[ScaleTier(letter="Pass", min=60, gpa=4.0), ScaleTier(letter="Fail", min=0, gpa=0.0)],
    )
    items = [make_assignment("a", status="GRADED", grade=65, total=100)]
    result = calculate_class_grade(school_class, items, today=TODAY)
    assert (result.letter, result.gpa) == ("Pass", 4.0)


def test_custom_status_decides_whether_work_counts() -> None:
    """Statuses are configuration: a custom 'SUBMITTED' status can count in grade."""
    statuses = build_status_lookup([StatusDefinition(id="SUBMITTED", label="Submitted", counts_in_grade=True)])
    items = [
        make_assignment("a", status="SUBMITTED", grade=70, total=100),
        make_assignment("b", status="UNKNOWN", grade=0, total=100),
    ]
    result = calculate_class_grade(SchoolClass(id="c1"), items, today=TODAY, statuses=statuses)
    assert result.percent == pytest.approx(70.0)


def test_other_classes_assignments_are_ignored() -> None:
    items = [
        make_assignment("mine", status="GRADED", grade=90, total=100),
        make_assignment("theirs", class_id="c2", status="GRADED", grade=0, total=100),
    ]
    assert calculate_class_grade(SchoolClass(id="c1"), items, today=TODAY).percent == pytest.approx(90.0)


def test_unknown_class_id_gives_neutral_result() -> None:
    result = grade_for_class_id("missing", Snapshot.from_dict(sample_document()), TODAY)
    assert (result.percent, result.letter, result.gpa) == (0.0, "N/A", 0.0)


def test_malformed_stored_numbers_are_treated_as_zero() -> None:
    snapshot = Snapshot.from_dict({
        "classes": [{"id": "c1", "gradingType": "POINTS"}],
        "assignments": [
            {"id": "a", "classId": "c1", "status": "GRADED", "grade": "abc", "total": "50"},
            {"id": "b", "classId": "c1", "status": "GRADED", "grade": "40", "total": None},
        ],
    })
    result = grade_for_class_id("c1", snapshot, TODAY)
    assert (result.earned_points, result.total_points) == (40, 50)
    assert result.percent == pytest.approx(80.0)


def test_sample_document_grades(document) -> None:
    """The sample classes resolve to an A (points) and a B (weighted with a dropped homework)."""
    grades = grades_by_class(Snapshot.from_dict(document), TODAY)

    assert grades["c1"].percent == pytest.approx(95.0)
    assert grades["c1"].letter == "A"
    assert grades["c2"].percent == pytest.approx(84.0)
    assert grades["c2"].letter == "B"


def test_cumulative_gpa_is_credit_weighted(document) -> None:
    """3 credits at 4.0 and 4 credits at 3.0 give (12 + 12) / 7 = 3.43."""
    assert credit_weighted_gpa([(4.0, 3), (3.0, 4)]) == pytest.approx(24 / 7)

    snapshot = Snapshot.from_dict(document)
    assert cumulative_gpa(snapshot.classes, snapshot.assignments, TODAY, snapshot.status_lookup()) == "3.43"


def test_cumulative_gpa_without_credits_is_zero() -> None:
    classes = [SchoolClass(id="c1", credits=0), SchoolClass(id="c2", credits=0)]
    assert cumulative_gpa(classes, [], TODAY) == "0.00"
    assert cumulative_gpa([], [], TODAY) == "0.00"
