"""Teacher Profile — who the caller is, what they teach, and their last lesson.

Invariants:
    - Subjects come from course-subject assignments, deduplicated per (course, subject)
    - Teacher-level subjects (profesores_materias) are a fallback only, with courseId None
    - In-course fallback keeps only teacher-level subjects actually assigned to that course
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.formatting import full_name, iso_date
from teacher_api.infrastructure.auth import AuthenticatedUser, parse_uuid
from teacher_api.models import (
    Contact, Course, CourseSubject, Lesson, Person, School, Subject,
    TeacherSubject, Vinculo,
)
from teacher_api.services import course_access

logger = logging.getLogger(__name__)


def _assignment_query(vinculo_id: UUID):
    return (
        select(
            CourseSubject.course_id,
            Course.name.label("course_name"),
            CourseSubject.subject_id,
            Subject.name.label("subject_name"),
        )
        .join(Course, Course.id == CourseSubject.course_id)
        .join(Subject, Subject.id == CourseSubject.subject_id)
        .where(CourseSubject.teacher_vinculo_id == vinculo_id)
    )


def _subject_item(course_id, course_name, subject_id, subject_name) -> dict:
    return {
        "courseId": course_id,
        "courseName": course_name or "",
        "subjectId": subject_id,
        "subjectName": subject_name or "",
    }


async def _teacher_level_subjects(db: AsyncSession, vinculo_id: UUID):
    result = await db.execute(
        select(TeacherSubject.subject_id, Subject.name)
        .join(Subject, Subject.id == TeacherSubject.subject_id)
        .where(TeacherSubject.teacher_vinculo_id == vinculo_id),
    )
    return result.all()


async def get_profile(db: AsyncSession, user: AuthenticatedUser) -> dict:
    """Persona and school data for the token holder."""
    persona_key = user.persona_id or user.sub
    persona_id = parse_uuid(persona_key)
    school_id = parse_uuid(user.colegio_id)

    person = None
    if persona_id is not None:
        result = await db.execute(
            select(
                Person.first_name, Person.paternal_surname,
                Person.maternal_surname, Contact.email,
            )
            .outerjoin(Contact, Contact.id == Person.contact_id)
            .where(Person.id == persona_id)
            .limit(1),
        )
        person = result.first()

    school = None
    if school_id is not None:
        school = (await db.execute(
            select(School.id, School.name).where(School.id == school_id),
        )).first()

    vinculo_email = None
    if persona_id is not None and school_id is not None:
        vinculo_email = await db.scalar(
            select(Vinculo.institutional_email).where(
                Vinculo.person_id == persona_id, Vinculo.school_id == school_id,
            ).limit(1),
        )

    name = None
    if person is not None:
        name = full_name(
            person.first_name, person.paternal_surname, person.maternal_surname,
        ) or None

    return {
        "personaId": persona_key,
        "userId": user.sub,
        "rol": user.rol,
        "colegioId": user.colegio_id,
        "nombre": name,
        "email": vinculo_email or (person.email if person else None),
        "colegio": (
            {"id": school.id, "nombre": school.name} if school else None
        ),
    }


async def get_overview(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID | None = None,
) -> dict:
    """Subjects taught (optionally in one course) and the most recent lesson."""
    query = _assignment_query(vinculo_id)
    if course_id is not None:
        query = query.where(CourseSubject.course_id == course_id)
    rows = (await db.execute(query)).all()
    subjects = [_subject_item(*row) for row in rows]

    if not subjects and course_id is None:
        fallback = await _teacher_level_subjects(db, vinculo_id)
        if fallback:
            return {
                "vinculoId": vinculo_id,
                "subjects": [
                    _subject_item(None, "", sid, name) for sid, name in fallback
                ],
                "lastClass": None,
            }

    last_query = (
        select(
            Lesson.id, Lesson.date, Lesson.topic, Lesson.notes,
            CourseSubject.course_id, Course.name.label("course_name"),
            CourseSubject.subject_id, Subject.name.label("subject_name"),
        )
        .join(CourseSubject, CourseSubject.id == Lesson.course_subject_id)
        .join(Course, Course.id == CourseSubject.course_id)
        .join(Subject, Subject.id == CourseSubject.subject_id)
        .where(CourseSubject.teacher_vinculo_id == vinculo_id)
    )
    if course_id is not None:
        last_query = last_query.where(CourseSubject.course_id == course_id)
    last_query = last_query.order_by(
        Lesson.date.desc(), Lesson.start_time.desc(),
    ).limit(1)
    last = (await db.execute(last_query)).first()

    last_class = None
    if last is not None:
        last_class = {
            "classId": last.id,
            "date": iso_date(last.date),
            "courseId": last.course_id,
            "courseName": last.course_name or "",
            "subjectId": last.subject_id,
            "subjectName": last.subject_name or "",
            "topic": last.topic,
            "observations": last.notes,
        }

    return {"vinculoId": vinculo_id, "subjects": subjects, "lastClass": last_class}


async def subjects_for_filter(db: AsyncSession, vinculo_id: UUID) -> list[dict]:
    """Every (course, subject) pair taught, falling back to teacher-level subjects."""
    rows = (await db.execute(_assignment_query(vinculo_id))).all()
    items: dict[tuple, dict] = {}
    for row in rows:
        key = (row.course_id, row.subject_id)
        if key not in items:
            items[key] = _subject_item(*row)
    if items:
        return list(items.values())

    fallback = await _teacher_level_subjects(db, vinculo_id)
    return [_subject_item(None, "", sid, name) for sid, name in fallback]


async def subjects_in_course(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID,
) -> list[dict]:
    """Subjects the teacher teaches in one course, one entry per subject."""
    rows = (await db.execute(
        _assignment_query(vinculo_id).where(CourseSubject.course_id == course_id),
    )).all()
    items: dict[UUID, dict] = {}
    for row in rows:
        if row.subject_id not in items:
            items[row.subject_id] = _subject_item(*row)
    if items:
        return list(items.values())

    fallback = await _teacher_level_subjects(db, vinculo_id)
    if not fallback:
        return []
    course_rows = (await db.execute(
        select(CourseSubject.subject_id, Course.name)
        .join(Course, Course.id == CourseSubject.course_id)
        .where(CourseSubject.course_id == course_id),
    )).all()
    subjects_in = {row.subject_id for row in course_rows}
    course_name = course_rows[0].name if course_rows else ""
    for subject_id, subject_name in fallback:
        if subject_id in subjects_in and subject_id not in items:
            items[subject_id] = _subject_item(
                course_id, course_name, subject_id, subject_name,
            )
    return list(items.values())


async def course_subjects_for_teacher(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID,
) -> list[dict]:
    """Raw assignments (cursoMateriaId) in a course, ordered by subject name."""
    result = await db.execute(
        select(CourseSubject.id, CourseSubject.subject_id, Subject.name)
        .join(Subject, Subject.id == CourseSubject.subject_id)
        .where(
            CourseSubject.teacher_vinculo_id == vinculo_id,
            CourseSubject.course_id == course_id,
        )
        .order_by(Subject.name),
    )
    return [
        {"cursoMateriaId": cm_id, "subjectId": subject_id, "subjectName": name}
        for cm_id, subject_id, name in result.all()
    ]


async def courses_for_teacher(db: AsyncSession, vinculo_id: UUID) -> list[dict]:
    """Courses taught or headed, by name."""
    courses = await course_access.teacher_courses(db, vinculo_id)
    return [{"courseId": c.id, "courseName": c.name} for c in courses]
