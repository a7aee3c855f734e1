"""Teacher Filters — dropdown option lists, each returned as {count, items}."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.infrastructure.database import get_db
from teacher_api.services import filters

router = APIRouter(prefix="/v1/api/teacher/filters", tags=["filters"])


@router.get("/course-subjects")
async def get_course_subjects(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await filters.course_subject_pairs(db, vinculo_id)


@router.get("/courses")
async def get_courses(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await filters.course_items(db, vinculo_id)


@router.get("/subjects/{course_id}")
async def get_subjects(
    course_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await filters.subject_items(db, vinculo_id, course_id)


@router.get("/students/{course_id}")
async def get_students(
    course_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await filters.student_items(db, vinculo_id, course_id)


@router.get("/admins")
async def get_admins(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await filters.admin_items(db, vinculo_id)
