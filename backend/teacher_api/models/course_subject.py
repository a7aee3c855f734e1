"""CourseSubject ORM — a subject assigned to a course with its teacher (curso_materia).

Invariants:
    - Evaluations, lessons and recurring slots all hang off a course-subject
    - teacher_vinculo_id is the only teacher allowed to grade its evaluations
      (besides the course head)
"""

import uuid

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class CourseSubject(Base):
    __tablename__ = "cursos_materias"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    course_id: Mapped[uuid.UUID] = mapped_column(
        "curso_id", UUID(as_uuid=True), ForeignKey("cursos.id"),
        nullable=False,
    )
    subject_id: Mapped[uuid.UUID] = mapped_column(
        "materia_id", UUID(as_uuid=True), ForeignKey("materias.id"),
        nullable=False,
    )
    teacher_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "profesor_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
