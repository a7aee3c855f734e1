"""Request Dependencies — authenticated user and acting vinculo for every teacher route.

Invariants:
    - get_current_user raises AuthenticationError (401) before any handler runs
    - get_vinculo_id prefers the token `sub`; otherwise resolves (personaId, colegioId)
    - A malformed sub, or neither sub nor persona/colegio claims → 400
    - persona/colegio with no matching vinculo → 404
"""

import logging
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_api.config import get_settings
from teacher_api.core.errors import (
    ErrorContext, InvalidInputError, ResourceNotFoundError,
)
from teacher_api.infrastructure.auth import (
    AuthenticatedUser, extract_token, parse_uuid, verify_token,
)
from teacher_api.infrastructure.database import get_db
from teacher_api.services.course_access import resolve_vinculo_by_persona

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> AuthenticatedUser:
    settings = get_settings()
    return verify_token(
        extract_token(request), settings.jwt_public_key, settings.jwt_algorithm,
    )


async def get_vinculo_id(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UUID:
    """Vinculo acting on this request."""
    if user.sub:
        vinculo_id = parse_uuid(user.sub)
        if vinculo_id is None:
            raise InvalidInputError("Token subject is not a valid vinculo id", field="sub")
        return vinculo_id

    persona_id = parse_uuid(user.persona_id)
    school_id = parse_uuid(user.colegio_id)
    if persona_id is None or school_id is None:
        raise InvalidInputError("Token does not identify a vinculo")

    vinculo_id = await resolve_vinculo_by_persona(db, persona_id, school_id)
    if vinculo_id is None:
        raise ResourceNotFoundError(
            "Vinculo", None, message="Vínculo institucional no encontrado",
            context=ErrorContext.of(resource_id=persona_id),
        )
    return vinculo_id
