"""Observation ORM — a teacher's note about a student (positive, negative, informative)."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Observation(Base):
    __tablename__ = "observaciones"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    student_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "alumno_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
    teacher_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "profesor_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
    course_id: Mapped[uuid.UUID] = mapped_column(
        "curso_id", UUID(as_uuid=True), ForeignKey("cursos.id"),
        nullable=False,
    )
    course_subject_id: Mapped[uuid.UUID | None] = mapped_column(
        "curso_materia_id", UUID(as_uuid=True),
        ForeignKey("cursos_materias.id"), nullable=True,
    )
    title: Mapped[str | None] = mapped_column(
        "titulo", String(200), nullable=True,
    )
    type: Mapped[str] = mapped_column("tipo", String(20), nullable=False)
    description: Mapped[str] = mapped_column(
        "descripcion", Text, nullable=False,
    )
    observed_at: Mapped[datetime] = mapped_column(
        "fecha",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
