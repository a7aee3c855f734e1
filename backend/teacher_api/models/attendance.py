"""DailyAttendance ORM — one attendance state per (student, course, date).

Invariants:
    - Unique on (alumno_vinculo_id, curso_id, fecha): writes are upserts
    - recorded_by_vinculo_id is the last teacher who touched the row
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class DailyAttendance(Base):
    __tablename__ = "asistencias_diarias"
    __table_args__ = (
        UniqueConstraint(
            "alumno_vinculo_id", "curso_id", "fecha",
            name="uq_asistencias_alumno_curso_fecha",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    course_id: Mapped[uuid.UUID] = mapped_column(
        "curso_id", UUID(as_uuid=True), ForeignKey("cursos.id"),
        nullable=False,
    )
    student_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "alumno_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
    date: Mapped[date] = mapped_column("fecha", Date, nullable=False)
    status: Mapped[str] = mapped_column("estado", String(20), nullable=False)
    recorded_by_vinculo_id: Mapped[uuid.UUID | None] = mapped_column(
        "registrador_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
