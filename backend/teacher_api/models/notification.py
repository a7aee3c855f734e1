"""Notification ORM — a message emitted by a vinculo and its per-recipient read state.

Invariants:
    - A notification owns one recipient row per receiving vinculo
    - read_at is set exactly when read is True

Design Decisions:
    - JSON column for extra data (jsonb in production): free-form per notification type
    - Python attribute `extra` maps the `metadata` column; `metadata` is reserved
      by SQLAlchemy's declarative base
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from teacher_api.db.base import Base


class Notification(Base):
    __tablename__ = "notificaciones"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    school_id: Mapped[uuid.UUID] = mapped_column(
        "colegio_id", UUID(as_uuid=True), ForeignKey("colegios.id"),
        nullable=False,
    )
    sender_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "emisor_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
    course_id: Mapped[uuid.UUID | None] = mapped_column(
        "curso_id", UUID(as_uuid=True), ForeignKey("cursos.id"), nullable=True,
    )
    course_subject_id: Mapped[uuid.UUID | None] = mapped_column(
        "curso_materia_id", UUID(as_uuid=True),
        ForeignKey("cursos_materias.id"), nullable=True,
    )
    evaluation_id: Mapped[uuid.UUID | None] = mapped_column(
        "evaluacion_id", UUID(as_uuid=True), ForeignKey("evaluaciones.id"),
        nullable=True,
    )
    type: Mapped[str] = mapped_column(
        "tipo", String(50), nullable=False, default="general",
    )
    title: Mapped[str] = mapped_column("titulo", String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(
        "descripcion", Text, nullable=True,
    )
    extra: Mapped[dict | None] = mapped_column(
        "metadata", JSON, nullable=True,
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
    )

    recipients: Mapped[list["NotificationRecipient"]] = relationship(
        "NotificationRecipient", back_populates="notification",
        cascade="all, delete-orphan", lazy="selectin",
    )


class NotificationRecipient(Base):
    __tablename__ = "notificacion_destinatarios"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    notification_id: Mapped[uuid.UUID] = mapped_column(
        "notificacion_id", UUID(as_uuid=True),
        ForeignKey("notificaciones.id"), nullable=False,
    )
    recipient_vinculo_id: Mapped[uuid.UUID] = mapped_column(
        "receptor_vinculo_id", UUID(as_uuid=True),
        ForeignKey("vinculos_institucionales.id"), nullable=False,
    )
    read: Mapped[bool] = mapped_column(
        "leido", Boolean, nullable=False, default=False,
    )
    read_at: Mapped[datetime | None] = mapped_column(
        "leido_en", DateTime(timezone=True), nullable=True,
    )

    notification: Mapped["Notification"] = relationship(
        "Notification", back_populates="recipients",
    )
