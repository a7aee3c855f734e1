"""Course ORM — a class group for one academic year.

Invariants:
    - year (annio) scopes enrollments; services fall back to the current year when null
    - head_teacher_vinculo_id (profesor jefe) grants course-wide access
"""

import uuid

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Course(Base):
    __tablename__ = "cursos"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    school_id: Mapped[uuid.UUID | None] = mapped_column(
        "colegio_id", UUID(as_uuid=True), ForeignKey("colegios.id"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column("nombre", String(100), nullable=False)
    level: Mapped[str | None] = mapped_column(
        "nivel", String(50), nullable=True,
    )
    year: Mapped[int | None] = mapped_column("annio", Integer, nullable=True)
    head_teacher_vinculo_id: Mapped[uuid.UUID | None] = mapped_column(
        "profesor_jefe_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=True,
    )
