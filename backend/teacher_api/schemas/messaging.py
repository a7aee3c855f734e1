"""Messaging Schemas — observations, read receipts and communications."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ObservationCreate(BaseModel):
    """Observation about a student; tipo is checked against ObservationType by the service."""
    alumnoVinculoId: UUID
    tipo: str
    descripcion: str = Field(min_length=1)
    cursoMateriaId: UUID | None = None
    titulo: str | None = Field(None, max_length=200)

    @field_validator("descripcion")
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("descripcion cannot be empty or whitespace")
        return v


class ReadReceipt(BaseModel):
    read: bool = True


class CommunicationCreate(BaseModel):
    asunto: str = Field(min_length=1, max_length=200)
    cursoId: UUID | None = None
    estudianteId: UUID | None = None
    profesorId: UUID | None = None
    administradorId: UUID | None = None
    tipo: str | None = Field(None, max_length=50)
    descripcion: str | None = None
