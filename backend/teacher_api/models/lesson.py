"""Lesson ORM — one class actually taught on a date (clases)."""

import uuid
from datetime import date, time

from sqlalchemy import String, Date, Time, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Lesson(Base):
    __tablename__ = "clases"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    course_subject_id: Mapped[uuid.UUID] = mapped_column(
        "curso_materia_id", UUID(as_uuid=True),
        ForeignKey("cursos_materias.id"), nullable=False,
    )
    date: Mapped[date] = mapped_column("fecha", Date, nullable=False)
    start_time: Mapped[time] = mapped_column(
        "hora_inicio", Time, nullable=False,
    )
    end_time: Mapped[time] = mapped_column("hora_fin", Time, nullable=False)
    topic: Mapped[str | None] = mapped_column(
        "tema", String(300), nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(
        "observaciones", String(1000), nullable=True,
    )
