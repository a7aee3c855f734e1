"""Evaluation and Grade ORM — assessments of a course-subject and the grades on them.

Invariants:
    - One grade per (evaluation, student); grading again overwrites it
    - Grade values stay within 1.0–7.0 with at most two decimals, so numeric(4,2)
      stores exactly what was sent (checked in core/grading.py before write)
    - type drives the averaging coefficient ("solemne"/"coef2" weigh double)
"""

import uuid
from datetime import date

from sqlalchemy import String, Text, Date, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Evaluation(Base):
    __tablename__ = "evaluaciones"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    course_subject_id: Mapped[uuid.UUID] = mapped_column(
        "curso_materia_id", UUID(as_uuid=True),
        ForeignKey("cursos_materias.id"), nullable=False,
    )
    name: Mapped[str] = mapped_column("nombre", String(200), nullable=False)
    date: Mapped[date] = mapped_column("fecha", Date, nullable=False)
    type: Mapped[str | None] = mapped_column(
        "tipo", String(30), nullable=True, default="prueba",
    )


class Grade(Base):
    __tablename__ = "notas"
    __table_args__ = (
        UniqueConstraint(
            "evaluacion_id", "alumno_vinculo_id", name="uq_notas_evaluacion_alumno",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    evaluation_id: Mapped[uuid.UUID] = mapped_column(
        "evaluacion_id", UUID(as_uuid=True), ForeignKey("evaluaciones.id"),
        nullable=False,
    )
    student_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "alumno_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
    value: Mapped[float | None] = mapped_column(
        "valor", Numeric(4, 2, asdecimal=False), nullable=True,
    )
    feedback: Mapped[str | None] = mapped_column(
        "retroalimentacion", Text, nullable=True,
    )
