"""Attendance Schemas — bulk updates and roll calls.

Invariants:
    - estado is one of presente / ausente / tardanza (AttendanceStatus)
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from teacher_api.core.domain_types import AttendanceStatus


class AttendanceMark(BaseModel):
    alumnoVinculoId: UUID
    estado: AttendanceStatus


class AttendanceUpdate(BaseModel):
    updates: list[AttendanceMark] = []

    def marks(self) -> list[tuple[UUID, AttendanceStatus]]:
        return [(m.alumnoVinculoId, m.estado) for m in self.updates]


class AttendanceTake(BaseModel):
    cursoMateriaId: UUID | None = None
    fecha: date
    attendances: list[AttendanceMark] = []

    def marks(self) -> list[tuple[UUID, AttendanceStatus]]:
        return [(m.alumnoVinculoId, m.estado) for m in self.attendances]
