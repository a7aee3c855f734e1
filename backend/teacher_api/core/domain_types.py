"""Domain Types — enums and constants for the states stored in the school schema.

Invariants:
    - All valid states encoded as Enums with their wire value (Spanish, as stored)

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class AttendanceStatus(str, Enum):
    """Daily attendance state — maps to asistencias_diarias.estado."""
    PRESENT = "presente"
    ABSENT = "ausente"
    LATE = "tardanza"


NOT_RECORDED = "no_registrado"


class ObservationType(str, Enum):
    """Observation polarity — maps to observaciones.tipo."""
    POSITIVE = "positiva"
    NEGATIVE = "negativa"
    INFORMATIVE = "informativa"


class RiskCategory(str, Enum):
    """Student risk buckets, ordered from lowest to highest."""
    LOW = "bajo"
    MEDIUM = "medio"
    HIGH = "alto"
    CRITICAL = "critico"


class PerformanceBand(str, Enum):
    """Label for a student's subject average."""
    EXCELLENT = "excelente"
    GOOD = "bueno"
    REGULAR = "regular"
    INSUFFICIENT = "insuficiente"


class NotificationType(str, Enum):
    """Notification kinds emitted by this service."""
    GENERAL = "general"
    EVALUATION = "evaluacion"
    ATTENDANCE = "asistencia"
    COMMUNICATION = "comunicacion"


DEFAULT_EVALUATION_TYPE = "prueba"
ADMIN_ROLE_NAMES = ("administrador", "administrativo")
