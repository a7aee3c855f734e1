"""Assessments — evaluations of a course-subject, grading, and per-student grade sheets.

Invariants:
    - Listing and grade sheets require subject access (assigned teacher or course head)
    - Creating an evaluation requires course access; grading requires holding that
      exact course-subject or heading its course
    - A grade is only written for a student enrolled for the course year, with a
      value inside 1.0–7.0; re-grading overwrites (evaluation, student)
    - Creating an evaluation notifies every enrolled student in the same transaction

Design Decisions:
    - Course school is checked before the insert: an evaluation without a way to
      notify its students is never persisted
"""

import logging
from collections import defaultdict
from datetime import date
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core import grading
from teacher_api.core.domain_types import DEFAULT_EVALUATION_TYPE, NotificationType
from teacher_api.core.errors import (
    CourseAccessDeniedError, ErrorContext, ResourceNotFoundError,
)
from teacher_api.core.formatting import iso_date
from teacher_api.models import Course, CourseSubject, Evaluation, Grade, Subject
from teacher_api.services import course_access
from teacher_api.services.notifications import emit_notification
from teacher_api.services.statistics import weighted_subject_averages

logger = logging.getLogger(__name__)

RECENT_EVALUATIONS = 3


async def list_evaluations(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID, subject_id: UUID,
) -> list[dict]:
    """Evaluations newest first, with how many grades each one has."""
    await course_access.require_subject_access(db, vinculo_id, course_id, subject_id)
    cm = await course_access.require_course_subject(
        db, course_id, subject_id, preferred_teacher_id=vinculo_id,
    )
    year = await course_access.course_year(db, course_id)
    total_students = await course_access.count_enrolled(db, course_id, year)

    rows = (await db.execute(
        select(
            Evaluation.id, Evaluation.name, Evaluation.type, Evaluation.date,
            func.count(Grade.id).label("graded_count"),
        )
        .outerjoin(Grade, Grade.evaluation_id == Evaluation.id)
        .where(Evaluation.course_subject_id == cm.id)
        .group_by(Evaluation.id, Evaluation.name, Evaluation.type, Evaluation.date)
        .order_by(Evaluation.date.desc()),
    )).all()

    return [
        {
            "evaluationId": row.id,
            "name": row.name,
            "tipo": row.type,
            "date": iso_date(row.date),
            "gradedCount": int(row.graded_count or 0),
            "totalStudents": total_students,
        }
        for row in rows
    ]


async def create_evaluation(
    db: AsyncSession,
    vinculo_id: UUID,
    course_id: UUID,
    subject_id: UUID,
    name: str,
    evaluation_date: date,
    evaluation_type: str | None = None,
) -> dict:
    cm = await course_access.require_course_subject(
        db, course_id, subject_id, preferred_teacher_id=vinculo_id,
    )
    await course_access.require_course_access(
        db, vinculo_id, course_id,
        message="You are not authorized to create evaluations for this course",
    )
    course = await db.get(Course, course_id)
    if course is None or course.school_id is None:
        raise ResourceNotFoundError(
            "School", None, message="El curso no tiene un colegio asociado",
        )
    subject_name = await db.scalar(select(Subject.name).where(Subject.id == subject_id))

    evaluation = Evaluation(
        course_subject_id=cm.id,
        name=name,
        date=evaluation_date,
        type=evaluation_type or DEFAULT_EVALUATION_TYPE,
    )
    db.add(evaluation)
    await db.flush()

    year = await course_access.course_year(db, course_id)
    students = await course_access.enrolled_student_ids(db, course_id, year)
    teacher_name = await course_access.teacher_full_name(db, vinculo_id)
    teacher_label = f"Profesor: {teacher_name}." if teacher_name else ""
    description = (
        f"Se ha asignado una nueva evaluación '{evaluation.name}' para "
        f"{subject_name or ''} ({course.name or ''}). "
        f"Fecha de entrega: {iso_date(evaluation.date) or 'pendiente'}. {teacher_label}"
    ).strip()
    emit_notification(
        db,
        school_id=course.school_id,
        sender_vinculo_id=vinculo_id,
        recipient_ids=students,
        notification_type=NotificationType.EVALUATION.value,
        title="Nueva evaluación",
        description=description,
        extra={
            "subjectName": subject_name or "",
            "teacherName": teacher_name,
            "evaluationType": evaluation.type,
        },
        course_id=course_id,
        course_subject_id=cm.id,
        evaluation_id=evaluation.id,
    )
    await db.commit()

    logger.info(
        f"Evaluation {evaluation.id} created, {len(students)} students notified",
        extra={"vinculo_id": str(vinculo_id), "course_id": str(course_id)},
    )
    return {
        "evaluationId": evaluation.id,
        "name": evaluation.name,
        "tipo": evaluation.type,
        "date": iso_date(evaluation.date),
        "gradedCount": 0,
        "totalStudents": len(students),
    }


async def upsert_grade(
    db: AsyncSession,
    vinculo_id: UUID,
    evaluation_id: UUID,
    student_id: UUID,
    value: object,
    feedback: str | None = None,
) -> dict:
    """Create or overwrite one student's grade on an evaluation."""
    target = (await db.execute(
        select(
            Evaluation.id,
            CourseSubject.course_id,
            CourseSubject.teacher_vinculo_id,
        )
        .join(CourseSubject, CourseSubject.id == Evaluation.course_subject_id)
        .where(Evaluation.id == evaluation_id),
    )).first()
    if target is None:
        raise ResourceNotFoundError(
            "Evaluation", str(evaluation_id), message="Evaluation not found",
            context=ErrorContext.of(vinculo_id=vinculo_id),
        )

    if target.teacher_vinculo_id != vinculo_id and not await course_access.is_course_head(
        db, vinculo_id, target.course_id,
    ):
        raise CourseAccessDeniedError(
            "You are not authorized to grade this evaluation",
            context=ErrorContext.of(
                vinculo_id=vinculo_id, course_id=target.course_id,
                resource_id=evaluation_id,
            ),
        )

    year = await course_access.course_year(db, target.course_id)
    await course_access.require_enrollment(db, student_id, target.course_id, year)
    grade_value = grading.check_grade_value(value)

    grade = (await db.execute(
        select(Grade).where(
            Grade.evaluation_id == evaluation_id,
            Grade.student_vinculo_id == student_id,
        ),
    )).scalar_one_or_none()
    if grade is None:
        grade = Grade(
            evaluation_id=evaluation_id,
            student_vinculo_id=student_id,
        )
        db.add(grade)
    grade.value = grade_value
    grade.feedback = feedback
    await db.commit()
    await db.refresh(grade)

    return {
        "noteId": grade.id,
        "evaluationId": evaluation_id,
        "alumnoVinculoId": student_id,
        "nota": float(grade.value),
        "retroalimentacion": grade.feedback,
    }


async def students_with_grades(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID, subject_id: UUID,
) -> dict:
    """Grade sheet: recent graded evaluations, weighted average and band per student."""
    await course_access.require_subject_access(db, vinculo_id, course_id, subject_id)
    cm = await course_access.require_course_subject(
        db, course_id, subject_id, preferred_teacher_id=vinculo_id,
    )
    year = await course_access.course_year(db, course_id)
    total_evaluations = int(await db.scalar(
        select(func.count(Evaluation.id)).where(Evaluation.course_subject_id == cm.id),
    ) or 0)

    students = await course_access.enrolled_students(db, course_id, year)
    averages = await weighted_subject_averages(db, cm.id)

    graded = (await db.execute(
        select(
            Grade.student_vinculo_id, Evaluation.id, Evaluation.name,
            Evaluation.date, Grade.value,
        )
        .join(Evaluation, Evaluation.id == Grade.evaluation_id)
        .where(Evaluation.course_subject_id == cm.id, Grade.value.is_not(None))
        .order_by(Evaluation.date.desc()),
    )).all()
    recent: dict[UUID, list[dict]] = defaultdict(list)
    for student_id, eval_id, eval_name, eval_date, value in graded:
        if len(recent[student_id]) < RECENT_EVALUATIONS:
            recent[student_id].append({
                "evaluationId": eval_id,
                "name": eval_name,
                "date": iso_date(eval_date),
                "nota": grading.round_grade(value),
            })

    items = []
    for row in students:
        student_id = row.student_vinculo_id
        displayed = recent.get(student_id, [])
        remaining = total_evaluations - len(displayed)
        average = averages.get(student_id)
        items.append({
            "alumnoVinculoId": student_id,
            "nombreCompleto": course_access.student_name(row),
            "rut": row.rut,
            "recentEvaluations": displayed,
            "more": f"{remaining}+" if remaining > 0 else None,
            "promedio": average,
            "estado": grading.performance_band(average).value,
        })

    return {
        "courseId": course_id,
        "subjectId": subject_id,
        "totalEvaluations": total_evaluations,
        "count": len(items),
        "students": items,
    }
