"""Head Teacher Course — summary and per-student risk analytics of the headed course."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.infrastructure.database import get_db
from teacher_api.services import statistics

router = APIRouter(prefix="/v1/api/teacher/course", tags=["course"])


@router.get("/summary")
async def get_summary(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    """204 when the caller heads no course."""
    summary = await statistics.head_course_summary(db, vinculo_id)
    if summary is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return summary


@router.get("/students/analytics")
async def get_students_analytics(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await statistics.students_analytics(db, vinculo_id)
