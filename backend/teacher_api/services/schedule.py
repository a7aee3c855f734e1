"""Schedule — a teacher's recurring slots for one day, the week, and summary stats.

Invariants:
    - Only active slots are considered
    - Day view honours the slot's optional [fecha_inicio, fecha_fin] range; week view does not
    - Weekday math lives in core/timetable.py
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.formatting import clock
from teacher_api.core.timetable import group_weekly, stored_weekday, weekly_hours
from teacher_api.models import Course, CourseSubject, Room, Schedule, Subject

logger = logging.getLogger(__name__)


def _active_slots_query(vinculo_id: UUID):
    return (
        select(
            Schedule.id,
            Schedule.weekday,
            Schedule.start_time,
            Schedule.end_time,
            Schedule.room_id,
            CourseSubject.course_id,
            Course.name.label("course_name"),
            CourseSubject.subject_id,
            Subject.name.label("subject_name"),
            Room.name.label("room_name"),
        )
        .join(CourseSubject, CourseSubject.id == Schedule.course_subject_id)
        .join(Course, Course.id == CourseSubject.course_id)
        .join(Subject, Subject.id == CourseSubject.subject_id)
        .outerjoin(Room, Room.id == Schedule.room_id)
        .where(
            CourseSubject.teacher_vinculo_id == vinculo_id,
            Schedule.active.is_(True),
        )
    )


async def day_schedule(
    db: AsyncSession, vinculo_id: UUID, day: date,
) -> list[dict]:
    query = (
        _active_slots_query(vinculo_id)
        .where(
            Schedule.weekday == stored_weekday(day),
            or_(Schedule.valid_from.is_(None), Schedule.valid_from <= day),
            or_(Schedule.valid_until.is_(None), Schedule.valid_until >= day),
        )
        .order_by(Schedule.start_time)
    )
    rows = (await db.execute(query)).all()
    return [
        {
            "horarioId": row.id,
            "day": row.weekday,
            "startTime": clock(row.start_time),
            "endTime": clock(row.end_time),
            "courseId": row.course_id,
            "courseName": row.course_name or "",
            "subjectId": row.subject_id,
            "subjectName": row.subject_name or "",
            "salaId": row.room_id,
            "salaName": row.room_name,
        }
        for row in rows
    ]


async def weekly_schedule(db: AsyncSession, vinculo_id: UUID) -> dict[str, list]:
    query = _active_slots_query(vinculo_id).order_by(
        Schedule.weekday, Schedule.start_time,
    )
    rows = (await db.execute(query)).all()
    return group_weekly(
        (
            row.weekday,
            {
                "horarioId": row.id,
                "startTime": clock(row.start_time),
                "endTime": clock(row.end_time),
                "subjectName": row.subject_name,
                "courseId": row.course_id,
                "courseName": row.course_name,
                "salaName": row.room_name,
            },
        )
        for row in rows
    )


async def schedule_stats(db: AsyncSession, vinculo_id: UUID) -> dict:
    rows = (await db.execute(_active_slots_query(vinculo_id))).all()
    return {
        "totalHorarios": len(rows),
        "weeklyHours": weekly_hours((r.start_time, r.end_time) for r in rows),
        "distinctCourses": len({r.course_id for r in rows}),
        "salaCount": len({r.room_id for r in rows if r.room_id is not None}),
    }
