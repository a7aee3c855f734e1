"""Risk Scoring — attendance percentage and academic risk for head-teacher analytics.

Invariants:
    - risk % = round(0.6 · riskFromAverage + 0.4 · riskFromAttendance)
    - riskFromAverage = (7 − avg) / 6 · 100; avg 7 → 0, avg 1 → 100
    - riskFromAttendance = 100 − attendance %
    - Thresholds: ≤25 bajo, ≤60 medio, ≤90 alto, otherwise critico
    - Attendance below 60% escalates the category one level (capped at critico)
    - Rounding is half-up, never banker's rounding

Design Decisions:
    - Average fallback chain (student → course → 0) resolved here, not in SQL
    - StudentRisk is a frozen dataclass: services serialize it, never mutate it
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from teacher_api.core.domain_types import RiskCategory

AVERAGE_WEIGHT = 0.6
ATTENDANCE_WEIGHT = 0.4
LOW_ATTENDANCE_PERCENT = 60

_ORDERED_CATEGORIES = [
    RiskCategory.LOW, RiskCategory.MEDIUM,
    RiskCategory.HIGH, RiskCategory.CRITICAL,
]


@dataclass(frozen=True)
class StudentRisk:
    attendance_percent: int
    risk_percent: int
    category: RiskCategory


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def attendance_percent(present: int, total: int) -> int:
    """Present share of recorded days, 0 when nothing was recorded."""
    if total <= 0:
        return 0
    return round_half_up(present / total * 100)


def risk_percent(average: float, attendance_pct: int) -> int:
    risk_from_average = (7 - average) / 6 * 100
    risk_from_attendance = 100 - attendance_pct
    return round_half_up(
        AVERAGE_WEIGHT * risk_from_average
        + ATTENDANCE_WEIGHT * risk_from_attendance,
    )


def categorize(risk_pct: int) -> RiskCategory:
    if risk_pct <= 25:
        return RiskCategory.LOW
    if risk_pct <= 60:
        return RiskCategory.MEDIUM
    if risk_pct <= 90:
        return RiskCategory.HIGH
    return RiskCategory.CRITICAL


def escalate(category: RiskCategory) -> RiskCategory:
    """One level up, saturating at critico."""
    index = _ORDERED_CATEGORIES.index(category)
    return _ORDERED_CATEGORIES[min(index + 1, len(_ORDERED_CATEGORIES) - 1)]


def assess_student(
    student_average: float | None,
    course_average: float | None,
    present: int,
    total: int,
) -> StudentRisk:
    """Full risk assessment for one student."""
    if student_average is not None:
        average = student_average
    elif course_average is not None:
        average = course_average
    else:
        average = 0.0
    attendance = attendance_percent(present, total)
    pct = risk_percent(average, attendance)
    category = categorize(pct)
    if attendance < LOW_ATTENDANCE_PERCENT:
        category = escalate(category)
    return StudentRisk(
        attendance_percent=attendance, risk_percent=pct, category=category,
    )


def count_risk_levels(categories: Iterable[RiskCategory]) -> tuple[int, int]:
    """(medium, critical) counts. High-risk students are not counted."""
    medium = critical = 0
    for category in categories:
        if category == RiskCategory.MEDIUM:
            medium += 1
        elif category == RiskCategory.CRITICAL:
            critical += 1
    return medium, critical
