"""Vinculo ORM — institutional link binding a person to a role at a school.

Invariants:
    - (persona_id, colegio_id) identifies at most one vinculo used for token resolution
    - Every teacher, student and administrator reference in the schema is a vinculo id
"""

import uuid

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Vinculo(Base):
    __tablename__ = "vinculos_institucionales"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    person_id: Mapped[uuid.UUID] = mapped_column(
        "persona_id", UUID(as_uuid=True), ForeignKey("personas.id"),
        nullable=False,
    )
    school_id: Mapped[uuid.UUID] = mapped_column(
        "colegio_id", UUID(as_uuid=True), ForeignKey("colegios.id"),
        nullable=False,
    )
    role_id: Mapped[uuid.UUID] = mapped_column(
        "rol_id", UUID(as_uuid=True), ForeignKey("roles.id"), nullable=False,
    )
    institutional_email: Mapped[str | None] = mapped_column(
        "email_institucional", String(200), nullable=True,
    )
    status: Mapped[str | None] = mapped_column(
        "estado", String(30), nullable=True,
    )
