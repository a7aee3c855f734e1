"""Teacher Main — profile, overview, subjects, day schedule and subject statistics."""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_current_user, get_vinculo_id
from teacher_api.core.errors import InvalidInputError
from teacher_api.infrastructure.auth import AuthenticatedUser
from teacher_api.infrastructure.database import get_db
from teacher_api.services import course_access, schedule, statistics, teacher_profile

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/api/teacher/main", tags=["teacher-main"])


@router.get("/profile")
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await teacher_profile.get_profile(db, user)


@router.get("/overview")
async def get_overview(
    course_id: UUID | None = Query(None, alias="courseId"),
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await teacher_profile.get_overview(db, vinculo_id, course_id)


@router.get("/subjects")
async def get_subjects(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    """Every course+subject pair the teacher teaches, for filters."""
    return await teacher_profile.subjects_for_filter(db, vinculo_id)


@router.get("/day-schedule")
async def get_day_schedule(
    date_str: str | None = Query(None, alias="date"),
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    """Recurring slots for the given date (default today)."""
    day = date.today()
    if date_str:
        try:
            day = date.fromisoformat(date_str)
        except ValueError:
            raise InvalidInputError(
                "Invalid date format, expected YYYY-MM-DD", field="date",
            )
    return await schedule.day_schedule(db, vinculo_id, day)


@router.get("/stats/{course_id}/{subject_id}")
async def get_subject_course_stats(
    course_id: UUID,
    subject_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    await course_access.require_course_access(db, vinculo_id, course_id)
    return await statistics.subject_course_statistics(db, subject_id, course_id)


@router.get("/subjects/{subject_id}/stats")
async def get_subject_stats(
    subject_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await statistics.subject_statistics_for_teacher(db, vinculo_id, subject_id)
