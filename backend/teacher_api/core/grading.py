"""Grading — weighted averages, performance bands and grade-scale checks.

Invariants:
    - Grades live on the 1.0–7.0 scale with at most two decimals; approval is
      strictly above 4.0
    - Evaluation type "solemne" or "coef2" counts twice; every other type once
    - Every average is rounded to 2 decimals half-up (matches numeric(5,2) casts)
    - No grades → None, never 0.0

Design Decisions:
    - Decimal arithmetic: float rounding would flip x.xx5 boundaries
    - Pure functions over (value, type) pairs: services decide what rows to feed in
"""

from collections import defaultdict
from collections.abc import Hashable, Iterable
from decimal import Decimal, ROUND_HALF_UP

from teacher_api.core.domain_types import PerformanceBand
from teacher_api.core.errors import InvalidGradeError

MIN_GRADE = 1.0
MAX_GRADE = 7.0
PASSING_GRADE = 4.0
DOUBLE_WEIGHT_TYPES = frozenset({"solemne", "coef2"})

_TWO_PLACES = Decimal("0.01")


def evaluation_coefficient(evaluation_type: str | None) -> int:
    """Weight of one evaluation in a student's average."""
    return 2 if evaluation_type in DOUBLE_WEIGHT_TYPES else 1


def round_grade(value: Decimal | float | int | None) -> float | None:
    """Round half-up to 2 decimals."""
    if value is None:
        return None
    return float(Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def simple_average(values: Iterable[float]) -> float | None:
    """Arithmetic mean, rounded. Empty input → None."""
    decimals = [Decimal(str(v)) for v in values if v is not None]
    if not decimals:
        return None
    return round_grade(sum(decimals) / len(decimals))


def weighted_average(
    grades: Iterable[tuple[float, str | None]],
) -> float | None:
    """Σ(grade·coef) / Σ(coef) over (grade, evaluation_type) pairs, rounded."""
    total = Decimal(0)
    weight = 0
    for value, evaluation_type in grades:
        if value is None:
            continue
        coef = evaluation_coefficient(evaluation_type)
        total += Decimal(str(value)) * coef
        weight += coef
    if weight == 0:
        return None
    return round_grade(total / weight)


def weighted_averages_by_student(
    rows: Iterable[tuple[Hashable, float, str | None]],
) -> dict:
    """Group (student_id, grade, evaluation_type) rows into weighted averages."""
    grouped: dict = defaultdict(list)
    for student_id, value, evaluation_type in rows:
        grouped[student_id].append((value, evaluation_type))
    return {
        student_id: weighted_average(grades)
        for student_id, grades in grouped.items()
    }


def simple_averages_by_student(
    rows: Iterable[tuple[Hashable, float]],
) -> dict:
    """Group (student_id, grade) rows into plain averages."""
    grouped: dict = defaultdict(list)
    for student_id, value in rows:
        grouped[student_id].append(value)
    return {
        student_id: simple_average(values)
        for student_id, values in grouped.items()
    }


def is_approved(average: float | None) -> bool:
    return average is not None and average > PASSING_GRADE


def performance_band(average: float | None) -> PerformanceBand:
    """Band a subject average; no average yet counts as insufficient."""
    if average is None:
        return PerformanceBand.INSUFFICIENT
    if average >= 6.0:
        return PerformanceBand.EXCELLENT
    if average >= 5.0:
        return PerformanceBand.GOOD
    if average >= 4.0:
        return PerformanceBand.REGULAR
    return PerformanceBand.INSUFFICIENT


_DISTRIBUTION_KEYS = {
    PerformanceBand.EXCELLENT: "excellent",
    PerformanceBand.GOOD: "good",
    PerformanceBand.REGULAR: "regular",
    PerformanceBand.INSUFFICIENT: "insufficient",
}


def grade_distribution(averages: Iterable[float | None]) -> dict[str, int]:
    """Count student averages per band. Students without an average are skipped."""
    distribution = {key: 0 for key in _DISTRIBUTION_KEYS.values()}
    for average in averages:
        if average is None:
            continue
        distribution[_DISTRIBUTION_KEYS[performance_band(average)]] += 1
    return distribution


def count_approved(averages: Iterable[float | None]) -> int:
    return sum(1 for a in averages if is_approved(a))


def summarize_averages(averages: Iterable[float | None]) -> dict:
    """Course average, extremes and approvals over per-student averages."""
    present = [a for a in averages if a is not None]
    return {
        "course_average": simple_average(present),
        "highest": max(present) if present else None,
        "lowest": min(present) if present else None,
        "approved_count": count_approved(present),
    }


def check_grade_value(value: object) -> float:
    """Return the grade as float or raise InvalidGradeError.

    Accepted: numbers (or numeric strings) in 1.0–7.0 with at most two decimals.
    """
    if isinstance(value, bool):
        raise InvalidGradeError(value)
    try:
        grade = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidGradeError(value)
    if grade != grade or grade < MIN_GRADE or grade > MAX_GRADE:
        raise InvalidGradeError(value)
    exact = Decimal(str(grade))
    if exact != exact.quantize(_TWO_PLACES):
        raise InvalidGradeError(value)
    return grade
