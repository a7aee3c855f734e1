"""Statistics — subject/course figures, exam stats, and head-teacher risk analytics.

Invariants:
    - Per-student averages are weighted by evaluation type for exam stats, course
      summary and analytics; subject/course stats use plain means
    - Grades without a value never count toward any average
    - Analytics cover students enrolled for the course year only
    - All arithmetic is delegated to core/grading.py and core/risk.py

Design Decisions:
    - Rows fetched once, aggregated in Python: keeps the rounding rules in one place
      instead of repeating numeric casts in every query
"""

import logging
from uuid import UUID

from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.domain_types import AttendanceStatus
from teacher_api.core import grading, risk
from teacher_api.core.errors import TeacherPortalError
from teacher_api.models import (
    Course, CourseSubject, DailyAttendance, Evaluation, Grade,
)
from teacher_api.services import course_access

logger = logging.getLogger(__name__)


def _course_subject_grades(course_subject_id: UUID):
    return (
        select(Grade.student_vinculo_id, Grade.value, Evaluation.type)
        .join(Evaluation, Evaluation.id == Grade.evaluation_id)
        .where(
            Evaluation.course_subject_id == course_subject_id,
            Grade.value.is_not(None),
        )
    )


def _course_grades(course_id: UUID):
    return (
        select(Grade.student_vinculo_id, Grade.value, Evaluation.type)
        .join(Evaluation, Evaluation.id == Grade.evaluation_id)
        .join(CourseSubject, CourseSubject.id == Evaluation.course_subject_id)
        .where(CourseSubject.course_id == course_id, Grade.value.is_not(None))
    )


async def weighted_course_averages(db: AsyncSession, course_id: UUID) -> dict:
    """student_id → weighted average over every subject of the course."""
    rows = (await db.execute(_course_grades(course_id))).all()
    return grading.weighted_averages_by_student(rows)


async def weighted_subject_averages(
    db: AsyncSession, course_subject_id: UUID,
) -> dict:
    rows = (await db.execute(_course_subject_grades(course_subject_id))).all()
    return grading.weighted_averages_by_student(rows)


async def _attendance_totals(db: AsyncSession, course_id: UUID) -> tuple[int, int]:
    present = func.sum(
        case((DailyAttendance.status == AttendanceStatus.PRESENT.value, 1), else_=0),
    )
    row = (await db.execute(
        select(func.count(DailyAttendance.id), present)
        .where(DailyAttendance.course_id == course_id),
    )).one()
    return int(row[0] or 0), int(row[1] or 0)


async def subject_course_statistics(
    db: AsyncSession, subject_id: UUID, course_id: UUID,
) -> dict:
    """Students, attendance, subject average and grade distribution for one assignment."""
    cm = await course_access.require_course_subject(db, course_id, subject_id)
    year = await course_access.course_year(db, course_id)
    students_count = await course_access.count_enrolled(db, course_id, year)

    total, present = await _attendance_totals(db, course_id)
    attendance_average = present / total * 100 if total > 0 else None

    rows = (await db.execute(_course_subject_grades(cm.id))).all()
    subject_average = grading.simple_average(value for _, value, _ in rows)
    per_student = grading.simple_averages_by_student(
        (student_id, value) for student_id, value, _ in rows
    )

    return {
        "subjectId": subject_id,
        "courseId": course_id,
        "studentsCount": students_count,
        "attendanceAverage": attendance_average,
        "subjectAverage": subject_average,
        "distribution": grading.grade_distribution(per_student.values()),
        "approvedCount": grading.count_approved(per_student.values()),
    }


async def subject_statistics_for_teacher(
    db: AsyncSession, vinculo_id: UUID, subject_id: UUID,
) -> list[dict]:
    """Subject/course statistics for every course where the teacher teaches the subject."""
    assignments = (await db.execute(
        select(CourseSubject.course_id, Course.name)
        .join(Course, Course.id == CourseSubject.course_id)
        .where(
            CourseSubject.teacher_vinculo_id == vinculo_id,
            CourseSubject.subject_id == subject_id,
        )
        .order_by(Course.name),
    )).all()

    results = []
    seen: set[UUID] = set()
    for course_id, course_name in assignments:
        if course_id in seen:
            continue
        seen.add(course_id)
        try:
            stats = await subject_course_statistics(db, subject_id, course_id)
        except TeacherPortalError as e:
            logger.warning(
                f"Skipping stats for course {course_id}: {e.message}",
                extra={"course_id": str(course_id), "error_code": e.code},
            )
            continue
        results.append({"courseName": course_name or "", **stats})
    return results


async def exam_stats(db: AsyncSession, subject_id: UUID, course_id: UUID) -> dict:
    cm = await course_access.require_course_subject(db, course_id, subject_id)
    averages = await weighted_subject_averages(db, cm.id)
    summary = grading.summarize_averages(averages.values())
    total_evaluations = await db.scalar(
        select(func.count(Evaluation.id)).where(
            Evaluation.course_subject_id == cm.id,
        ),
    )
    return {
        "courseId": course_id,
        "subjectId": subject_id,
        "courseAverage": summary["course_average"],
        "highestStudentAverage": summary["highest"],
        "lowestStudentAverage": summary["lowest"],
        "approvedCount": summary["approved_count"],
        "totalEvaluations": int(total_evaluations or 0),
    }


async def course_summary(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID,
) -> dict:
    await course_access.require_course_access(db, vinculo_id, course_id)
    year = await course_access.course_year(db, course_id)
    students_count = await course_access.count_enrolled(db, course_id, year)
    averages = await weighted_course_averages(db, course_id)
    return {
        "courseId": course_id,
        "studentsCount": students_count,
        "courseAverage": grading.simple_average(averages.values()),
    }


async def head_course_summary(db: AsyncSession, vinculo_id: UUID) -> dict | None:
    """Summary of the course the caller heads; None when they head none."""
    course = await course_access.headed_course(db, vinculo_id)
    if course is None:
        return None
    return await course_summary(db, vinculo_id, course.id)


async def _attendance_by_student(db: AsyncSession, course_id: UUID) -> dict:
    present = func.sum(
        case((DailyAttendance.status == AttendanceStatus.PRESENT.value, 1), else_=0),
    )
    rows = (await db.execute(
        select(
            DailyAttendance.student_vinculo_id,
            func.count(DailyAttendance.id),
            present,
        )
        .where(DailyAttendance.course_id == course_id)
        .group_by(DailyAttendance.student_vinculo_id),
    )).all()
    return {
        student_id: (int(present_count or 0), int(total or 0))
        for student_id, total, present_count in rows
    }


async def students_analytics(db: AsyncSession, vinculo_id: UUID) -> dict:
    """Average, attendance and risk per student of the course the caller heads."""
    course = await course_access.headed_course(db, vinculo_id)
    if course is None:
        return {"students": [], "mediumRiskCount": 0, "criticalRiskCount": 0}

    year = await course_access.course_year(db, course.id)
    students = await course_access.enrolled_students(db, course.id, year)
    averages = await weighted_course_averages(db, course.id)
    attendance = await _attendance_by_student(db, course.id)
    course_average = grading.simple_average(averages.values())

    items = []
    categories = []
    for row in students:
        student_id = row.student_vinculo_id
        present, total = attendance.get(student_id, (0, 0))
        average = averages.get(student_id)
        assessment = risk.assess_student(average, course_average, present, total)
        categories.append(assessment.category)
        items.append({
            "alumnoVinculoId": student_id,
            "rut": row.rut,
            "nombreCompleto": course_access.student_name(row),
            "promedio": average,
            "asistenciaPercent": assessment.attendance_percent,
            "riesgoPercent": assessment.risk_percent,
            "riesgoCategoria": assessment.category.value,
        })

    medium, critical = risk.count_risk_levels(categories)
    logger.info(
        f"Analytics computed for {len(items)} students",
        extra={"vinculo_id": str(vinculo_id), "course_id": str(course.id)},
    )
    return {
        "students": items,
        "mediumRiskCount": medium,
        "criticalRiskCount": critical,
    }
