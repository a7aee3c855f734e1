"""Attendance — daily attendance per course: roster, per-date view, bulk edits, roll call.

Invariants:
    - One row per (student, course, date); every write is an upsert
    - Enrollment is checked for the calendar year of the attendance date
    - All students of a request are validated before anything is written, and the
      whole request commits once (all or nothing)
    - Unauthorized callers get 403 here, unlike other resources
    - A roll call notifies each distinct absent student once, only when the course
      belongs to a school
"""

import logging
from collections.abc import Sequence
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.domain_types import (
    AttendanceStatus, NOT_RECORDED, NotificationType,
)
from teacher_api.core.errors import (
    ErrorContext, InvalidInputError, ResourceNotFoundError,
    StudentNotEnrolledError,
)
from teacher_api.core.formatting import iso_date
from teacher_api.models import Course, CourseSubject, DailyAttendance
from teacher_api.services import course_access
from teacher_api.services.notifications import emit_notification

logger = logging.getLogger(__name__)

Mark = tuple[UUID, AttendanceStatus]


async def students_for_course(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID,
) -> dict:
    """Enrolled roster for the course year; empty for callers without access."""
    if not await course_access.has_course_access(db, vinculo_id, course_id):
        return {"count": 0, "students": []}
    year = await course_access.course_year(db, course_id)
    rows = await course_access.enrolled_students(db, course_id, year)
    students = [
        {
            "alumnoVinculoId": row.student_vinculo_id,
            "rut": row.rut,
            "nombre_completo": course_access.student_name(row),
        }
        for row in rows
    ]
    return {"count": len(students), "students": students}


async def attendance_by_date(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID, day: date,
) -> dict:
    await course_access.require_course_access(
        db, vinculo_id, course_id,
        message="Not authorized to view attendance for this course",
        http_status=403,
    )
    rows = await course_access.enrolled_students(db, course_id, day.year)
    recorded = dict((await db.execute(
        select(DailyAttendance.student_vinculo_id, DailyAttendance.status).where(
            DailyAttendance.course_id == course_id, DailyAttendance.date == day,
        ),
    )).all())
    students = [
        {
            "alumnoVinculoId": row.student_vinculo_id,
            "rut": row.rut,
            "nombre_completo": course_access.student_name(row),
            "estado": recorded.get(row.student_vinculo_id, NOT_RECORDED),
        }
        for row in rows
    ]
    return {"count": len(students), "students": students}


async def _check_enrolled(
    db: AsyncSession, course_id: UUID, day: date, marks: Sequence[Mark],
) -> None:
    enrolled = set(await course_access.enrolled_student_ids(db, course_id, day.year))
    for student_id, _ in marks:
        if student_id not in enrolled:
            raise StudentNotEnrolledError(str(student_id), str(course_id), day.year)


async def _write_marks(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID, day: date,
    marks: Sequence[Mark],
) -> None:
    existing = {
        row.student_vinculo_id: row
        for row in (await db.execute(
            select(DailyAttendance).where(
                DailyAttendance.course_id == course_id, DailyAttendance.date == day,
            ),
        )).scalars().all()
    }
    for student_id, status in marks:
        row = existing.get(student_id)
        if row is None:
            row = DailyAttendance(
                course_id=course_id, student_vinculo_id=student_id, date=day,
            )
            db.add(row)
            existing[student_id] = row
        row.status = AttendanceStatus(status).value
        row.recorded_by_vinculo_id = vinculo_id


async def update_attendance(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID, day: date,
    marks: Sequence[Mark],
) -> dict:
    """Bulk upsert of attendance states for one course and date."""
    if not marks:
        raise InvalidInputError("Missing updates payload", field="updates")
    await course_access.require_course_access(
        db, vinculo_id, course_id,
        message="Not authorized to update attendance for this course",
        http_status=403,
    )
    await _check_enrolled(db, course_id, day, marks)
    await _write_marks(db, vinculo_id, course_id, day, marks)
    await db.commit()
    return {"courseId": course_id, "fecha": iso_date(day), "processed": len(marks)}


async def record_attendance(
    db: AsyncSession,
    vinculo_id: UUID,
    course_id: UUID,
    day: date,
    marks: Sequence[Mark],
    course_subject_id: UUID | None = None,
) -> dict:
    """Roll call for a course, optionally pinned to one course-subject."""
    if not marks:
        raise InvalidInputError("fecha and attendances are required", field="attendances")

    target_course_id = course_id
    if course_subject_id is not None:
        cm = await db.get(CourseSubject, course_subject_id)
        if cm is None:
            raise ResourceNotFoundError(
                "CourseSubject", str(course_subject_id),
                context=ErrorContext.of(vinculo_id=vinculo_id, course_id=course_id),
                message="curso_materia not found",
            )
        if cm.course_id != course_id:
            raise InvalidInputError(
                "curso_materia does not belong to provided course",
                field="cursoMateriaId",
            )
        target_course_id = cm.course_id

    await course_access.require_course_access(
        db, vinculo_id, target_course_id,
        message="Not authorized to record attendance for this course",
        http_status=403,
    )
    await _check_enrolled(db, target_course_id, day, marks)
    await _write_marks(db, vinculo_id, target_course_id, day, marks)

    absent = list(dict.fromkeys(
        student_id for student_id, status in marks
        if AttendanceStatus(status) == AttendanceStatus.ABSENT
    ))
    course = await db.get(Course, target_course_id)
    if absent and course is not None and course.school_id is not None:
        teacher_name = await course_access.teacher_full_name(db, vinculo_id)
        for student_id in absent:
            emit_notification(
                db,
                school_id=course.school_id,
                sender_vinculo_id=vinculo_id,
                recipient_ids=[student_id],
                notification_type=NotificationType.ATTENDANCE.value,
                title="Asistencia registrada",
                description=f"Has quedado ausente el día {iso_date(day)}",
                extra={
                    "courseName": course.name or "",
                    "fecha": iso_date(day),
                    "teacherName": teacher_name,
                },
                course_id=target_course_id,
            )
    await db.commit()

    logger.info(
        f"Attendance recorded for {len(marks)} students, {len(absent)} absent",
        extra={"vinculo_id": str(vinculo_id), "course_id": str(target_course_id)},
    )
    return {"courseId": course_id, "fecha": iso_date(day), "processed": len(marks)}
