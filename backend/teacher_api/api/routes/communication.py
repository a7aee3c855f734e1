"""Teacher Communication — send messages and list what was sent."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.api.dependencies import get_vinculo_id
from teacher_api.infrastructure.database import get_db
from teacher_api.schemas.messaging import CommunicationCreate
from teacher_api.services import communication

router = APIRouter(prefix="/v1/api/teacher/communication", tags=["communication"])


@router.get("")
async def list_communications(
    limit: str | None = Query(None),
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    """Sent communications, newest first. Non-numeric or non-positive limits are ignored."""
    return await communication.list_communications(db, vinculo_id, _positive_int(limit))


def _positive_int(raw: str | None) -> int | None:
    try:
        value = int(raw) if raw is not None else None
    except ValueError:
        return None
    return value if value is not None and value > 0 else None


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_communication(
    body: CommunicationCreate,
    vinculo_id: UUID = Depends(get_vinculo_id),
    db: AsyncSession = Depends(get_db),
):
    return await communication.create_communication(
        db, vinculo_id,
        subject=body.asunto,
        course_id=body.cursoId,
        student_id=body.estudianteId,
        teacher_id=body.profesorId,
        admin_id=body.administradorId,
        notification_type=body.tipo,
        description=body.descripcion,
    )
