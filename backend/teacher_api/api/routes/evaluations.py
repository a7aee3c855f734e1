"""Teacher Evaluations — lightweight course list used by the evaluations screen."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.infrastructure.database import get_db
from teacher_api.services import teacher_profile

router = APIRouter(prefix="/v1/api/teacher/evaluaciones", tags=["evaluations"])


@router.get("/courses")
async def get_courses(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await teacher_profile.courses_for_teacher(db, vinculo_id)
