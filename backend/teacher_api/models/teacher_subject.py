"""TeacherSubject ORM — subjects a teacher can teach, not yet tied to a course."""

import uuid

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class TeacherSubject(Base):
    __tablename__ = "profesores_materias"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    teacher_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "profesor_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
    subject_id: Mapped[uuid.UUID] = mapped_column(
        "materia_id", UUID(as_uuid=True), ForeignKey("materias.id"),
        nullable=False,
    )
