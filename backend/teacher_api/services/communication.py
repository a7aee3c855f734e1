"""Communication — free-form messages a teacher sends to a course or to individuals.

Invariants:
    - Recipients = students of the course (course year) ∪ the explicitly named vinculos
    - At least one recipient, and every explicit recipient must exist
    - The notification belongs to the sender's school
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.domain_types import NotificationType
from teacher_api.core.errors import InvalidInputError, ResourceNotFoundError
from teacher_api.models import Notification, Vinculo
from teacher_api.services import course_access
from teacher_api.services.notifications import emit_notification

logger = logging.getLogger(__name__)


async def _gather_recipients(
    db: AsyncSession, course_id: UUID | None, explicit: list[UUID | None],
) -> list[UUID]:
    recipients: dict[UUID, None] = {}
    if course_id is not None:
        year = await course_access.course_year(db, course_id)
        for student_id in await course_access.enrolled_student_ids(db, course_id, year):
            recipients[student_id] = None

    named = [vid for vid in explicit if vid is not None]
    if named:
        found = set((await db.execute(
            select(Vinculo.id).where(Vinculo.id.in_(named)),
        )).scalars().all())
        for vid in named:
            if vid not in found:
                raise ResourceNotFoundError("Vinculo", str(vid))
            recipients[vid] = None
    return list(recipients)


async def create_communication(
    db: AsyncSession,
    sender_id: UUID,
    subject: str,
    course_id: UUID | None = None,
    student_id: UUID | None = None,
    teacher_id: UUID | None = None,
    admin_id: UUID | None = None,
    notification_type: str | None = None,
    description: str | None = None,
) -> dict:
    sender = await db.get(Vinculo, sender_id)
    if sender is None:
        raise ResourceNotFoundError(
            "Vinculo", str(sender_id),
            message="Vínculo institucional del emisor no encontrado",
        )

    recipients = await _gather_recipients(
        db, course_id, [student_id, teacher_id, admin_id],
    )
    if not recipients:
        raise InvalidInputError("Debe especificar al menos un destinatario")

    notification = emit_notification(
        db,
        school_id=sender.school_id,
        sender_vinculo_id=sender_id,
        recipient_ids=recipients,
        notification_type=notification_type or NotificationType.COMMUNICATION.value,
        title=subject,
        description=description,
        extra={
            "tipo": notification_type,
            "cursoId": str(course_id) if course_id else None,
        },
        course_id=course_id,
    )
    await db.commit()
    logger.info(
        f"Communication {notification.id} sent to {len(recipients)} recipients",
        extra={"vinculo_id": str(sender_id)},
    )
    return {"notificationId": notification.id, "recipients": len(recipients)}


async def list_communications(
    db: AsyncSession, sender_id: UUID, limit: int | None = None,
) -> dict:
    """Sent notifications newest first, with recipient and read counts."""
    query = (
        select(Notification)
        .where(Notification.sender_vinculo_id == sender_id)
        .order_by(Notification.created_at.desc())
    )
    if limit:
        query = query.limit(limit)
    notifications = (await db.execute(query)).scalars().all()

    items = [
        {
            "id": n.id,
            "title": n.title,
            "description": n.description,
            "type": n.type,
            "metadata": n.extra,
            "courseId": n.course_id,
            "createdAt": n.created_at.isoformat() if n.created_at else None,
            "recipients": len(n.recipients),
            "readRecipients": sum(1 for r in n.recipients if r.read),
        }
        for n in notifications
    ]
    return {"total": len(items), "items": items}
