"""Notifications — emitting notifications, the caller's inbox, and read state.

Invariants:
    - One notification row plus one recipient row per distinct receiving vinculo
    - Inbox shows at most INBOX_SIZE items, newest first; unreadCount counts all
    - Only a recipient can change their own read state

Design Decisions:
    - emit_notification adds to the session without committing: the caller's
      write and its notifications land in the same transaction
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.core.domain_types import NotificationType
from teacher_api.core.errors import ErrorContext, ResourceNotFoundError
from teacher_api.models import Notification, NotificationRecipient

logger = logging.getLogger(__name__)

INBOX_SIZE = 5


def emit_notification(
    db: AsyncSession,
    *,
    school_id: UUID,
    sender_vinculo_id: UUID,
    recipient_ids: Iterable[UUID],
    title: str,
    notification_type: str = NotificationType.GENERAL.value,
    description: str | None = None,
    extra: dict | None = None,
    course_id: UUID | None = None,
    course_subject_id: UUID | None = None,
    evaluation_id: UUID | None = None,
) -> Notification:
    """Stage a notification and its recipient rows on the session."""
    notification = Notification(
        school_id=school_id,
        sender_vinculo_id=sender_vinculo_id,
        course_id=course_id,
        course_subject_id=course_subject_id,
        evaluation_id=evaluation_id,
        type=notification_type,
        title=title,
        description=description,
        extra=extra,
    )
    notification.recipients = [
        NotificationRecipient(recipient_vinculo_id=rid)
        for rid in dict.fromkeys(recipient_ids)
    ]
    db.add(notification)
    return notification


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


async def inbox(
    db: AsyncSession, vinculo_id: UUID, unread_only: bool = False,
) -> dict:
    unread_count = await db.scalar(
        select(func.count(NotificationRecipient.id)).where(
            NotificationRecipient.recipient_vinculo_id == vinculo_id,
            NotificationRecipient.read.is_(False),
        ),
    )

    query = (
        select(NotificationRecipient, Notification)
        .join(Notification, Notification.id == NotificationRecipient.notification_id)
        .where(NotificationRecipient.recipient_vinculo_id == vinculo_id)
    )
    if unread_only:
        query = query.where(NotificationRecipient.read.is_(False))
    query = query.order_by(Notification.created_at.desc()).limit(INBOX_SIZE)
    rows = (await db.execute(query)).all()

    return {
        "unreadCount": int(unread_count or 0),
        "items": [
            {
                "id": n.id,
                "title": n.title,
                "description": n.description,
                "type": n.type,
                "metadata": n.extra,
                "courseId": n.course_id,
                "subjectId": n.course_subject_id,
                "evaluationId": n.evaluation_id,
                "senderId": n.sender_vinculo_id,
                "read": r.read,
                "readAt": _iso(r.read_at),
                "createdAt": _iso(n.created_at),
            }
            for r, n in rows
        ],
    }


async def mark_read(
    db: AsyncSession, vinculo_id: UUID, notification_id: UUID, read: bool = True,
) -> dict:
    recipient = (await db.execute(
        select(NotificationRecipient).where(
            NotificationRecipient.notification_id == notification_id,
            NotificationRecipient.recipient_vinculo_id == vinculo_id,
        ).limit(1),
    )).scalar_one_or_none()
    if recipient is None:
        raise ResourceNotFoundError(
            "Notification", str(notification_id),
            context=ErrorContext.of(vinculo_id=vinculo_id),
            message="Notificación no encontrada",
        )

    recipient.read = read
    recipient.read_at = datetime.now(timezone.utc) if read else None
    await db.commit()
    return {
        "id": recipient.notification_id,
        "read": recipient.read,
        "readAt": _iso(recipient.read_at),
    }
