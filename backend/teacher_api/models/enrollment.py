"""Enrollment ORM — a student's membership in a course for one academic year."""

import uuid

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Enrollment(Base):
    __tablename__ = "alumnos_cursos"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    student_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "alumno_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
    course_id: Mapped[uuid.UUID] = mapped_column(
        "curso_id", UUID(as_uuid=True), ForeignKey("cursos.id"),
        nullable=False,
    )
    year: Mapped[int] = mapped_column("annio", Integer, nullable=False)
