"""Teacher Attendance — course roster, per-date attendance, bulk edits and roll call.

Invariants:
    - {fecha} path segments must be YYYY-MM-DD (400 otherwise)
    - Unauthorized callers get 403 on per-date reads and all writes
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.core.errors import InvalidInputError
from teacher_api.infrastructure.database import get_db
from teacher_api.schemas.attendance import AttendanceTake, AttendanceUpdate
from teacher_api.services import attendance, teacher_profile

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/api/teacher/attendance", tags=["attendance"])

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _parse_fecha(fecha: str) -> date:
    try:
        return date.fromisoformat(fecha)
    except ValueError:
        raise InvalidInputError("fecha must be YYYY-MM-DD", field="fecha")


@router.get("/courses")
async def get_courses(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await teacher_profile.courses_for_teacher(db, vinculo_id)


@router.get("/courses/{course_id}/students")
async def get_students(
    course_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await attendance.students_for_course(db, vinculo_id, course_id)


@router.get("/courses/{course_id}/{fecha}")
async def get_attendance_by_date(
    course_id: UUID,
    fecha: str = Path(pattern=DATE_PATTERN),
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await attendance.attendance_by_date(
        db, vinculo_id, course_id, _parse_fecha(fecha),
    )


@router.patch("/courses/{course_id}/{fecha}")
async def update_attendance(
    course_id: UUID,
    body: AttendanceUpdate,
    fecha: str = Path(pattern=DATE_PATTERN),
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await attendance.update_attendance(
        db, vinculo_id, course_id, _parse_fecha(fecha), body.marks(),
    )


@router.post("/take/{course_id}", status_code=status.HTTP_201_CREATED)
async def take_attendance(
    course_id: UUID,
    body: AttendanceTake,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await attendance.record_attendance(
        db, vinculo_id, course_id, body.fecha, body.marks(),
        course_subject_id=body.cursoMateriaId,
    )
