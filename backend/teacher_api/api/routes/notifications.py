"""Teacher Notifications — inbox and read receipts."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.infrastructure.database import get_db
from teacher_api.schemas.messaging import ReadReceipt
from teacher_api.services import notifications

router = APIRouter(prefix="/v1/api/teacher/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await notifications.inbox(db, vinculo_id, unread_only)


@router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: UUID,
    body: ReadReceipt | None = None,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    read = body.read if body is not None else True
    return await notifications.mark_read(db, vinculo_id, notification_id, read)
