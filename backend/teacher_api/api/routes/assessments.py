"""Teacher Assessments — courses, evaluations, grades and grade sheets.

Invariants:
    - Student lists and exam stats require subject access (assigned or head teacher)
    - Evaluation creation and grading rules live in services/assessments.py
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.infrastructure.database import get_db
from teacher_api.schemas.assessments import EvaluationCreate, GradeUpsert
from teacher_api.services import (
    assessments, attendance, course_access, statistics, teacher_profile,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/api/teacher/assessments", tags=["assessments"])


@router.get("/courses")
async def get_courses(
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await teacher_profile.courses_for_teacher(db, vinculo_id)


@router.get("/courses/{course_id}/subjects")
async def get_subjects(
    course_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await teacher_profile.subjects_in_course(db, vinculo_id, course_id)


@router.get("/courses/{course_id}/curso-materias")
async def get_course_subjects(
    course_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await teacher_profile.course_subjects_for_teacher(db, vinculo_id, course_id)


@router.get("/courses/{course_id}/subjects/{subject_id}/evaluations")
async def get_evaluations(
    course_id: UUID,
    subject_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await assessments.list_evaluations(db, vinculo_id, course_id, subject_id)


@router.post(
    "/courses/{course_id}/subjects/{subject_id}/create-evaluation",
    status_code=status.HTTP_201_CREATED,
)
async def create_evaluation(
    course_id: UUID,
    subject_id: UUID,
    body: EvaluationCreate,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await assessments.create_evaluation(
        db, vinculo_id, course_id, subject_id,
        name=body.name, evaluation_date=body.fecha, evaluation_type=body.tipo,
    )


@router.post("/evaluations/{evaluation_id}/grades", status_code=status.HTTP_201_CREATED)
async def upsert_grade(
    evaluation_id: UUID,
    body: GradeUpsert,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await assessments.upsert_grade(
        db, vinculo_id, evaluation_id, body.alumnoVinculoId,
        body.value, body.retroalimentacion,
    )


@router.get("/courses/{course_id}/subjects/{subject_id}/students-with-grades")
async def get_students_with_grades(
    course_id: UUID,
    subject_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await assessments.students_with_grades(db, vinculo_id, course_id, subject_id)


@router.get("/courses/{course_id}/subjects/{subject_id}/students")
async def get_students_for_subject(
    course_id: UUID,
    subject_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    await course_access.require_subject_access(db, vinculo_id, course_id, subject_id)
    return await attendance.students_for_course(db, vinculo_id, course_id)


@router.get("/subjects/{course_id}/{subject_id}/stats")
async def get_exam_stats(
    course_id: UUID,
    subject_id: UUID,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    await course_access.require_subject_access(db, vinculo_id, course_id, subject_id)
    return await statistics.exam_stats(db, subject_id, course_id)
