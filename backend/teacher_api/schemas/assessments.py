"""Assessment Schemas — request bodies for evaluations and grades.

Invariants:
    - EvaluationCreate.name: non-empty after strip; fecha is an ISO date
    - GradeUpsert carries the grade as `nota` or `calificacion` (at least one)

Design Decisions:
    - Grade range (1.0–7.0) checked in core/grading.py, not here: the range error
      has its own code (INVALID_GRADE) distinct from malformed payloads
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


class EvaluationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    tipo: str | None = Field(None, max_length=50)
    fecha: date

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class GradeUpsert(BaseModel):
    """Grade for one student; `calificacion` is accepted as an alias of `nota`."""
    alumnoVinculoId: UUID
    nota: float | str | None = None
    calificacion: float | str | None = None
    retroalimentacion: str | None = None

    @model_validator(mode="after")
    def check_grade_present(self) -> "GradeUpsert":
        if self.nota is None and self.calificacion is None:
            raise ValueError("nota (or calificacion) is required")
        return self

    @property
    def value(self) -> float | str:
        return self.nota if self.nota is not None else self.calificacion
