"""Teacher Schedule — weekly grid and schedule statistics."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.infrastructure.database import get_db
from teacher_api.services import schedule

router = APIRouter(prefix="/v1/api/teacher/schedule", tags=["schedule"])


@router.get("/week")
async def get_week(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await schedule.weekly_schedule(db, vinculo_id)


@router.get("/stats")
async def get_stats(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await schedule.schedule_stats(db, vinculo_id)
