"""Observations — a teacher's notes on students, listed per course with type counts."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.domain_types import ObservationType
from teacher_api.core.errors import InvalidInputError
from teacher_api.core.formatting import day_month_year, full_name
from teacher_api.models import (
    Course, CourseSubject, Observation, Person, Subject, Vinculo,
)
from teacher_api.services import course_access

logger = logging.getLogger(__name__)


def parse_observation_type(value: str | None, message: str) -> ObservationType | None:
    if value is None:
        return None
    try:
        return ObservationType(value)
    except ValueError:
        raise InvalidInputError(message, field="tipo")


async def _type_counts(
    db: AsyncSession, vinculo_id: UUID, course_id: UUID | None,
) -> dict:
    def count_of(kind: ObservationType):
        return func.sum(case((Observation.type == kind.value, 1), else_=0))

    query = select(
        func.count(Observation.id),
        count_of(ObservationType.POSITIVE),
        count_of(ObservationType.NEGATIVE),
        count_of(ObservationType.INFORMATIVE),
    ).where(Observation.teacher_vinculo_id == vinculo_id)
    if course_id is not None:
        query = query.where(Observation.course_id == course_id)
    total, positive, negative, informative = (await db.execute(query)).one()
    return {
        "total": int(total or 0),
        "positivas": int(positive or 0),
        "negativas": int(negative or 0),
        "informativas": int(informative or 0),
    }


async def list_observations(
    db: AsyncSession,
    vinculo_id: UUID,
    course_id: UUID | None = None,
    tipo: str | None = None,
) -> dict:
    """The caller's own observations, newest first. Counts ignore the type filter."""
    kind = parse_observation_type(tipo, f"Invalid tipo filter: {tipo}")

    query = (
        select(
            Observation.title, Observation.description, Observation.type,
            Observation.observed_at,
            Person.first_name, Person.paternal_surname, Person.maternal_surname,
            Course.name.label("course_name"),
            Subject.name.label("subject_name"),
        )
        .join(Vinculo, Vinculo.id == Observation.student_vinculo_id)
        .outerjoin(Person, Person.id == Vinculo.person_id)
        .outerjoin(Course, Course.id == Observation.course_id)
        .outerjoin(CourseSubject, CourseSubject.id == Observation.course_subject_id)
        .outerjoin(Subject, Subject.id == CourseSubject.subject_id)
        .where(Observation.teacher_vinculo_id == vinculo_id)
    )
    if kind is not None:
        query = query.where(Observation.type == kind.value)
    if course_id is not None:
        query = query.where(Observation.course_id == course_id)
    rows = (await db.execute(query.order_by(Observation.observed_at.desc()))).all()

    observations = [
        {
            "title": row.title,
            "studentName": full_name(
                row.first_name, row.paternal_surname, row.maternal_surname,
            ),
            "course": row.course_name,
            "subject": row.subject_name,
            "description": row.description,
            "tipo": row.type,
            "date": day_month_year(row.observed_at),
        }
        for row in rows
    ]
    return {**await _type_counts(db, vinculo_id, course_id), "observations": observations}


async def create_observation(
    db: AsyncSession,
    vinculo_id: UUID,
    course_id: UUID,
    student_id: UUID,
    tipo: str,
    description: str,
    course_subject_id: UUID | None = None,
    title: str | None = None,
) -> dict:
    kind = parse_observation_type(tipo, "Invalid tipo for observation")
    await course_access.require_course_access(
        db, vinculo_id, course_id,
        message="You are not authorized to create observations for this course",
    )
    year = await course_access.course_year(db, course_id)
    await course_access.require_enrollment(db, student_id, course_id, year)

    if course_subject_id is not None:
        belongs = await db.scalar(
            select(CourseSubject.id).where(
                CourseSubject.id == course_subject_id,
                CourseSubject.course_id == course_id,
            ),
        )
        if belongs is None:
            raise InvalidInputError(
                "cursoMateriaId does not belong to the provided course",
                field="cursoMateriaId",
            )

    observation = Observation(
        student_vinculo_id=student_id,
        teacher_vinculo_id=vinculo_id,
        course_id=course_id,
        course_subject_id=course_subject_id,
        title=title,
        type=kind.value,
        description=description,
        observed_at=datetime.now(timezone.utc),
    )
    db.add(observation)
    await db.commit()

    return {
        "observationId": observation.id,
        "alumnoVinculoId": observation.student_vinculo_id,
        "profesorVinculoId": observation.teacher_vinculo_id,
        "courseId": observation.course_id,
        "cursoMateriaId": observation.course_subject_id,
        "title": observation.title,
        "description": observation.description,
        "tipo": observation.type,
        "date": day_month_year(observation.observed_at),
    }
