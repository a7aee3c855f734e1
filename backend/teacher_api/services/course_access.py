"""Course Access — who may see or change what, plus shared enrollment lookups.

Invariants:
    - Course access = teaches any subject in the course OR heads the course
    - Subject access = assigned to that subject in the course OR heads the course
    - Course year = cursos.annio, current calendar year when unset
    - Enrollment is always checked against (course, year), never course alone

Design Decisions:
    - Every check is its own small query: callers combine them, and each one
      maps onto exactly one error message at the call site
    - Student rows returned raw (id, rut, name parts): endpoints disagree on key
      names (nombre_completo vs nombreCompleto), so formatting stays with them
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.errors import (
    CourseAccessDeniedError, ErrorContext, ResourceNotFoundError,
    StudentNotEnrolledError,
)
from teacher_api.core.formatting import full_name
from teacher_api.models import (
    Course, CourseSubject, Enrollment, Person, Vinculo,
)

logger = logging.getLogger(__name__)

COURSE_ACCESS_MESSAGE = "You are not authorized to access this course"
SUBJECT_ACCESS_MESSAGE = "You are not assigned to this subject in the given course"


async def teaches_in_course(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID,
) -> bool:
    result = await db.execute(
        select(CourseSubject.id).where(
            CourseSubject.course_id == course_id,
            CourseSubject.teacher_vinculo_id == vinculo_id,
        ).limit(1),
    )
    return result.first() is not None


async def is_course_head(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID,
) -> bool:
    result = await db.execute(
        select(Course.id).where(
            Course.id == course_id,
            Course.head_teacher_vinculo_id == vinculo_id,
        ).limit(1),
    )
    return result.first() is not None


async def has_course_access(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID,
) -> bool:
    if await teaches_in_course(db, vinculo_id, course_id):
        return True
    return await is_course_head(db, vinculo_id, course_id)


async def require_course_access(
    db: AsyncSession,
    vinculo_id: UUID,
    course_id: UUID,
    message: str = COURSE_ACCESS_MESSAGE,
    http_status: int = 404,
) -> None:
    if not await has_course_access(db, vinculo_id, course_id):
        logger.info(
            "Course access denied",
            extra={"vinculo_id": str(vinculo_id), "course_id": str(course_id)},
        )
        raise CourseAccessDeniedError(
            message, http_status=http_status,
            context=ErrorContext.of(vinculo_id=vinculo_id, course_id=course_id),
        )


async def teacher_assignments(
    db: AsyncSession, vinculo_id: UUID, subject_id: UUID,
    course_id: UUID | None = None,
) -> list[CourseSubject]:
    """Course-subjects this teacher holds for a subject, optionally in one course."""
    query = select(CourseSubject).where(
        CourseSubject.teacher_vinculo_id == vinculo_id,
        CourseSubject.subject_id == subject_id,
    )
    if course_id is not None:
        query = query.where(CourseSubject.course_id == course_id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def require_subject_access(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID, subject_id: UUID,
) -> None:
    if await teacher_assignments(db, vinculo_id, subject_id, course_id):
        return
    if await is_course_head(db, vinculo_id, course_id):
        return
    raise CourseAccessDeniedError(
        SUBJECT_ACCESS_MESSAGE,
        context=ErrorContext.of(
            vinculo_id=vinculo_id, course_id=course_id, resource_id=subject_id,
        ),
    )


async def find_course_subject(
    db: AsyncSession, course_id: UUID, subject_id: UUID,
    preferred_teacher_id: UUID | None = None,
) -> CourseSubject | None:
    """The assignment of a subject to a course; the caller's own one wins if several exist."""
    query = select(CourseSubject).where(
        CourseSubject.course_id == course_id,
        CourseSubject.subject_id == subject_id,
    )
    rows = list((await db.execute(query)).scalars().all())
    if not rows:
        return None
    if preferred_teacher_id is not None:
        for row in rows:
            if row.teacher_vinculo_id == preferred_teacher_id:
                return row
    return rows[0]


async def require_course_subject(
    db: AsyncSession, course_id: UUID, subject_id: UUID,
    preferred_teacher_id: UUID | None = None,
) -> CourseSubject:
    cm = await find_course_subject(db, course_id, subject_id, preferred_teacher_id)
    if cm is None:
        raise ResourceNotFoundError(
            "CourseSubject", f"{course_id}/{subject_id}",
            context=ErrorContext.of(course_id=course_id),
            message="Course/subject assignment not found",
        )
    return cm


async def course_year(db: AsyncSession, course_id: UUID) -> int:
    year = await db.scalar(select(Course.year).where(Course.id == course_id))
    return year or date.today().year


async def count_enrolled(db: AsyncSession, course_id: UUID, year: int) -> int:
    count = await db.scalar(
        select(func.count(Enrollment.id)).where(
            Enrollment.course_id == course_id, Enrollment.year == year,
        ),
    )
    return int(count or 0)


async def enrolled_student_ids(
    db: AsyncSession, course_id: UUID, year: int,
) -> list[UUID]:
    """Distinct enrolled student vinculo ids, in enrollment order."""
    result = await db.execute(
        select(Enrollment.student_vinculo_id).where(
            Enrollment.course_id == course_id, Enrollment.year == year,
        ),
    )
    return list(dict.fromkeys(result.scalars().all()))


def enrolled_students_query(course_id: UUID, year: int):
    """Enrolled students with person data, ordered by paternal surname then name."""
    return (
        select(
            Enrollment.student_vinculo_id,
            Person.rut,
            Person.first_name,
            Person.paternal_surname,
            Person.maternal_surname,
        )
        .join(Vinculo, Vinculo.id == Enrollment.student_vinculo_id)
        .outerjoin(Person, Person.id == Vinculo.person_id)
        .where(Enrollment.course_id == course_id, Enrollment.year == year)
        .order_by(
            Person.paternal_surname.asc().nulls_last(),
            Person.first_name.asc().nulls_last(),
        )
    )


async def enrolled_students(db: AsyncSession, course_id: UUID, year: int):
    result = await db.execute(enrolled_students_query(course_id, year))
    return result.all()


def student_name(row) -> str:
    return full_name(row.first_name, row.paternal_surname, row.maternal_surname)


async def is_enrolled(
    db: AsyncSession, student_id: UUID, course_id: UUID, year: int,
) -> bool:
    result = await db.execute(
        select(Enrollment.id).where(
            Enrollment.course_id == course_id,
            Enrollment.year == year,
            Enrollment.student_vinculo_id == student_id,
        ).limit(1),
    )
    return result.first() is not None


async def require_enrollment(
    db: AsyncSession, student_id: UUID, course_id: UUID, year: int,
) -> None:
    if not await is_enrolled(db, student_id, course_id, year):
        raise StudentNotEnrolledError(str(student_id), str(course_id), year)


async def teacher_courses(db: AsyncSession, vinculo_id: UUID) -> list[Course]:
    """Courses the vinculo teaches in or heads, without duplicates, by name."""
    taught = select(CourseSubject.course_id).where(
        CourseSubject.teacher_vinculo_id == vinculo_id,
    )
    result = await db.execute(
        select(Course)
        .where(or_(
            Course.id.in_(taught),
            Course.head_teacher_vinculo_id == vinculo_id,
        ))
        .order_by(Course.name),
    )
    return list(result.scalars().all())


async def headed_course(db: AsyncSession, vinculo_id: UUID) -> Course | None:
    """First course the vinculo heads, if any."""
    result = await db.execute(
        select(Course)
        .where(Course.head_teacher_vinculo_id == vinculo_id)
        .order_by(Course.name)
        .limit(1),
    )
    return result.scalar_one_or_none()


async def teacher_full_name(db: AsyncSession, vinculo_id: UUID) -> str | None:
    result = await db.execute(
        select(Person.first_name, Person.paternal_surname, Person.maternal_surname)
        .select_from(Vinculo)
        .outerjoin(Person, Person.id == Vinculo.person_id)
        .where(Vinculo.id == vinculo_id)
        .limit(1),
    )
    row = result.first()
    if row is None:
        return None
    return full_name(*row) or None


async def resolve_vinculo_by_persona(
    db: AsyncSession, persona_id: UUID, school_id: UUID,
) -> UUID | None:
    return await db.scalar(
        select(Vinculo.id).where(
            Vinculo.person_id == persona_id, Vinculo.school_id == school_id,
        ).limit(1),
    )
