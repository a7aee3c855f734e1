"""Person ORM — personal data behind a vinculo, plus its contact row."""

import uuid

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Contact(Base):
    __tablename__ = "contactos"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)


class Person(Base):
    __tablename__ = "personas"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    rut: Mapped[str | None] = mapped_column(String(20), nullable=True)
    first_name: Mapped[str | None] = mapped_column(
        "nombre", String(100), nullable=True,
    )
    paternal_surname: Mapped[str | None] = mapped_column(
        "apellido_paterno", String(100), nullable=True,
    )
    maternal_surname: Mapped[str | None] = mapped_column(
        "apellido_materno", String(100), nullable=True,
    )
    contact_id: Mapped[uuid.UUID | None] = mapped_column(
        "contacto_id", UUID(as_uuid=True), ForeignKey("contactos.id"),
        nullable=True,
    )
