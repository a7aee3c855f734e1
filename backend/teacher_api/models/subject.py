"""Subject ORM — a school subject (materia), independent of any course."""

import uuid

from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Subject(Base):
    __tablename__ = "materias"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    school_id: Mapped[uuid.UUID | None] = mapped_column(
        "colegio_id", UUID(as_uuid=True), ForeignKey("colegios.id"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column("nombre", String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(
        "descripcion", Text, nullable=True,
    )
