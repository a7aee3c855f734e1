"""Risk Scoring — attendance %, risk % and category escalation, no IO."""

import pytest

from teacher_api.core.domain_types import RiskCategory
from teacher_api.core.risk import (
    assess_student, attendance_percent, categorize, count_risk_levels,
    escalate, risk_percent,
)


def test_attendance_percent_rounds_half_up():
    assert attendance_percent(0, 0) == 0
    assert attendance_percent(2, 3) == 67
    assert attendance_percent(1, 8) == 13
    assert attendance_percent(10, 10) == 100


def test_risk_percent_extremes():
    assert risk_percent(7.0, 100) == 0
    assert risk_percent(1.0, 0) == 100
    assert risk_percent(4.0, 100) == 30


@pytest.mark.parametrize("pct, category", [
    (0, RiskCategory.LOW),
    (25, RiskCategory.LOW),
    (26, RiskCategory.MEDIUM),
    (60, RiskCategory.MEDIUM),
    (61, RiskCategory.HIGH),
    (90, RiskCategory.HIGH),
    (91, RiskCategory.CRITICAL),
])
def test_categorize_thresholds(pct, category):
    assert categorize(pct) == category


def test_escalate_saturates_at_critical():
    assert escalate(RiskCategory.LOW) == RiskCategory.MEDIUM
    assert escalate(RiskCategory.HIGH) == RiskCategory.CRITICAL
    assert escalate(RiskCategory.CRITICAL) == RiskCategory.CRITICAL


def test_good_student_with_full_attendance_is_low_risk():
    result = assess_student(6.0, None, 10, 10)
    assert result.attendance_percent == 100
    assert result.risk_percent == 10
    assert result.category == RiskCategory.LOW


def test_low_attendance_escalates_one_level():
    result = assess_student(6.0, None, 5, 10)
    assert result.attendance_percent == 50
    assert result.risk_percent == 30
    assert result.category == RiskCategory.HIGH


def test_missing_average_falls_back_to_course_average():
    result = assess_student(None, 4.0, 10, 10)
    assert result.risk_percent == 30
    assert result.category == RiskCategory.MEDIUM


def test_no_data_at_all_is_critical():
    result = assess_student(None, None, 0, 0)
    assert result.attendance_percent == 0
    assert result.risk_percent == 110
    assert result.category == RiskCategory.CRITICAL


def test_count_risk_levels_ignores_low_and_high():
    categories = [
        RiskCategory.LOW, RiskCategory.MEDIUM, RiskCategory.HIGH,
        RiskCategory.CRITICAL, RiskCategory.MEDIUM,
    ]
    assert count_risk_levels(categories) == (2, 1)
