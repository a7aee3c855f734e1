"""Filters — option lists for the teacher UI's dropdowns, each wrapped as {count, items}."""

import logging
from uuid import UUID

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.domain_types import ADMIN_ROLE_NAMES
from teacher_api.core.errors import ResourceNotFoundError
from teacher_api.core.formatting import full_name
from teacher_api.models import (
    Contact, Course, CourseSubject, Person, Role, Subject, Vinculo,
)
from teacher_api.services import course_access
from teacher_api.services.teacher_profile import subjects_in_course

logger = logging.getLogger(__name__)


def _listing(items: list) -> dict:
    return {"count": len(items), "items": items}


async def course_subject_pairs(db: AsyncSession, vinculo_id: UUID) -> dict:
    rows = (await db.execute(
        select(
            Course.id, Course.name, Course.year,
            Subject.id.label("subject_id"), Subject.name.label("subject_name"),
        )
        .select_from(CourseSubject)
        .join(Course, Course.id == CourseSubject.course_id)
        .join(Subject, Subject.id == CourseSubject.subject_id)
        .where(CourseSubject.teacher_vinculo_id == vinculo_id)
        .order_by(Course.year.desc().nulls_last(), Course.name, Subject.name),
    )).all()

    seen: set[tuple] = set()
    items = []
    for row in rows:
        key = (row.id, row.subject_id)
        if key in seen:
            continue
        seen.add(key)
        items.append({
            "courseId": row.id,
            "courseName": row.name,
            "year": row.year,
            "subjectId": row.subject_id,
            "subjectName": row.subject_name,
            "label": f"{row.name} - {row.subject_name}",
        })
    return _listing(items)


async def course_items(db: AsyncSession, vinculo_id: UUID) -> dict:
    taught = select(CourseSubject.course_id).where(
        CourseSubject.teacher_vinculo_id == vinculo_id,
    )
    courses = (await db.execute(
        select(Course)
        .where(or_(
            Course.id.in_(taught),
            Course.head_teacher_vinculo_id == vinculo_id,
        ))
        .order_by(Course.year.desc().nulls_last(), Course.name),
    )).scalars().all()
    return _listing([
        {"courseId": c.id, "courseName": c.name, "year": c.year} for c in courses
    ])


async def subject_items(db: AsyncSession, vinculo_id: UUID, course_id: UUID) -> dict:
    return _listing(await subjects_in_course(db, vinculo_id, course_id))


async def student_items(db: AsyncSession, vinculo_id: UUID, course_id: UUID) -> dict:
    await course_access.require_course_access(
        db, vinculo_id, course_id,
        message="No autorizado para acceder a este curso",
    )
    year = await course_access.course_year(db, course_id)
    rows = await course_access.enrolled_students(db, course_id, year)
    return _listing([
        {
            "alumnoVinculoId": row.student_vinculo_id,
            "rut": row.rut,
            "nombreCompleto": course_access.student_name(row) or None,
        }
        for row in rows
    ])


async def admin_items(db: AsyncSession, vinculo_id: UUID) -> dict:
    """Administrators and administrative staff of the caller's school."""
    school_id = await db.scalar(select(Vinculo.school_id).where(Vinculo.id == vinculo_id))
    if school_id is None:
        raise ResourceNotFoundError(
            "Vinculo", str(vinculo_id), message="Vínculo institucional no encontrado",
        )

    rows = (await db.execute(
        select(
            Vinculo.id, Vinculo.school_id, Person.rut, Person.first_name,
            Person.paternal_surname, Person.maternal_surname, Contact.email,
        )
        .outerjoin(Person, Person.id == Vinculo.person_id)
        .outerjoin(Contact, Contact.id == Person.contact_id)
        .join(Role, Role.id == Vinculo.role_id)
        .where(Vinculo.school_id == school_id, Role.name.in_(ADMIN_ROLE_NAMES))
        .order_by(
            Person.paternal_surname.asc().nulls_last(),
            Person.first_name.asc().nulls_last(),
        ),
    )).all()
    return _listing([
        {
            "vinculoId": row.id,
            "colegioId": row.school_id,
            "rut": row.rut,
            "nombreCompleto": full_name(
                row.first_name, row.paternal_surname, row.maternal_surname,
            ) or None,
            "email": row.email,
        }
        for row in rows
    ])
