"""Teacher Observations — list and create notes about students of a course."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.infrastructure.database import get_db
from teacher_api.schemas.messaging import ObservationCreate
from teacher_api.services import observations

router = APIRouter(prefix="/v1/api/teacher/observations", tags=["observations"])


@router.get("/courses/{course_id}")
async def get_observations(
    course_id: UUID,
    tipo: str | None = Query(None),
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await observations.list_observations(db, vinculo_id, course_id, tipo)


@router.post("/courses/{course_id}", status_code=status.HTTP_201_CREATED)
async def create_observation(
    course_id: UUID,
    body: ObservationCreate,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await observations.create_observation(
        db, vinculo_id, course_id,
        student_id=body.alumnoVinculoId,
        tipo=body.tipo,
        description=body.descripcion,
        course_subject_id=body.cursoMateriaId,
        title=body.titulo,
    )
