"""Schedule ORM — recurring weekly slots (horarios) and the rooms they use.

Invariants:
    - weekday uses 0=Sunday .. 6=Saturday
    - A slot applies on a date only if active and the date is inside
      [valid_from, valid_until], either bound being optional
"""

import uuid
from datetime import date, time

from sqlalchemy import String, Integer, SmallInteger, Boolean, Date, Time, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Room(Base):
    __tablename__ = "salas"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    school_id: Mapped[uuid.UUID | None] = mapped_column(
        "colegio_id", UUID(as_uuid=True), ForeignKey("colegios.id"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column("nombre", String(50), nullable=False)
    capacity: Mapped[int | None] = mapped_column(
        "capacidad", Integer, nullable=True,
    )
    location: Mapped[str | None] = mapped_column(
        "ubicacion", String(100), nullable=True,
    )


class Schedule(Base):
    __tablename__ = "horarios"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    course_subject_id: Mapped[uuid.UUID] = mapped_column(
        "curso_materia_id", UUID(as_uuid=True),
        ForeignKey("cursos_materias.id"), nullable=False,
    )
    weekday: Mapped[int] = mapped_column(
        "dia_semana", SmallInteger, nullable=False,
    )
    start_time: Mapped[time] = mapped_column(
        "hora_inicio", Time, nullable=False,
    )
    end_time: Mapped[time] = mapped_column("hora_fin", Time, nullable=False)
    room_id: Mapped[uuid.UUID | None] = mapped_column(
        "sala_id", UUID(as_uuid=True), ForeignKey("salas.id"), nullable=True,
    )
    valid_from: Mapped[date | None] = mapped_column(
        "fecha_inicio", Date, nullable=True,
    )
    valid_until: Mapped[date | None] = mapped_column(
        "fecha_fin", Date, nullable=True,
    )
    active: Mapped[bool] = mapped_column(
        "activo", Boolean, nullable=False, default=True,
    )
