"""Initial schema — schools, people, courses, grading, attendance, notifications.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, JSONB

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

VINCULOS = "vinculos_institucionales.id"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "colegios",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("nombre_institucion", sa.String(200), nullable=False),
    )
    op.create_table(
        "roles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("nombre", sa.String(50), nullable=False),
    )
    op.create_table(
        "contactos",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(200), nullable=True),
    )
    op.create_table(
        "personas",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("rut", sa.String(20), nullable=True),
        sa.Column("nombre", sa.String(100), nullable=True),
        sa.Column("apellido_paterno", sa.String(100), nullable=True),
        sa.Column("apellido_materno", sa.String(100), nullable=True),
        sa.Column("contacto_id", UUID(as_uuid=True), sa.ForeignKey("contactos.id"), nullable=True),
    )
    op.create_table(
        "vinculos_institucionales",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("persona_id", UUID(as_uuid=True), sa.ForeignKey("personas.id"), nullable=False),
        sa.Column("colegio_id", UUID(as_uuid=True), sa.ForeignKey("colegios.id"), nullable=False),
        sa.Column("rol_id", UUID(as_uuid=True), sa.ForeignKey("roles.id"), nullable=False),
        sa.Column("email_institucional", sa.String(200), nullable=True),
        sa.Column("estado", sa.String(30), nullable=True),
    )
    op.create_index(
        "ix_vinculos_persona_colegio", "vinculos_institucionales",
        ["persona_id", "colegio_id"],
    )

    op.create_table(
        "cursos",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("colegio_id", UUID(as_uuid=True), sa.ForeignKey("colegios.id"), nullable=True),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("nivel", sa.String(50), nullable=True),
        sa.Column("annio", sa.Integer, nullable=True),
        sa.Column("profesor_jefe_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=True),
    )
    op.create_table(
        "materias",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("colegio_id", UUID(as_uuid=True), sa.ForeignKey("colegios.id"), nullable=True),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("descripcion", sa.Text, nullable=True),
    )
    op.create_table(
        "cursos_materias",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("curso_id", UUID(as_uuid=True), sa.ForeignKey("cursos.id"), nullable=False),
        sa.Column("materia_id", UUID(as_uuid=True), sa.ForeignKey("materias.id"), nullable=False),
        sa.Column("profesor_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
    )
    op.create_table(
        "profesores_materias",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("profesor_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
        sa.Column("materia_id", UUID(as_uuid=True), sa.ForeignKey("materias.id"), nullable=False),
    )
    op.create_table(
        "alumnos_cursos",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("alumno_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
        sa.Column("curso_id", UUID(as_uuid=True), sa.ForeignKey("cursos.id"), nullable=False),
        sa.Column("annio", sa.Integer, nullable=False),
    )
    op.create_index("ix_alumnos_cursos_curso_annio", "alumnos_cursos", ["curso_id", "annio"])

    op.create_table(
        "clases",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("curso_materia_id", UUID(as_uuid=True), sa.ForeignKey("cursos_materias.id"), nullable=False),
        sa.Column("fecha", sa.Date, nullable=False),
        sa.Column("hora_inicio", sa.Time, nullable=False),
        sa.Column("hora_fin", sa.Time, nullable=False),
        sa.Column("tema", sa.String(300), nullable=True),
        sa.Column("observaciones", sa.String(1000), nullable=True),
    )
    op.create_table(
        "salas",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("colegio_id", UUID(as_uuid=True), sa.ForeignKey("colegios.id"), nullable=True),
        sa.Column("nombre", sa.String(50), nullable=False),
        sa.Column("capacidad", sa.Integer, nullable=True),
        sa.Column("ubicacion", sa.String(100), nullable=True),
    )
    op.create_table(
        "horarios",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("curso_materia_id", UUID(as_uuid=True), sa.ForeignKey("cursos_materias.id"), nullable=False),
        sa.Column("dia_semana", sa.SmallInteger, nullable=False),
        sa.Column("hora_inicio", sa.Time, nullable=False),
        sa.Column("hora_fin", sa.Time, nullable=False),
        sa.Column("sala_id", UUID(as_uuid=True), sa.ForeignKey("salas.id"), nullable=True),
        sa.Column("fecha_inicio", sa.Date, nullable=True),
        sa.Column("fecha_fin", sa.Date, nullable=True),
        sa.Column("activo", sa.Boolean, nullable=False, server_default="true"),
    )

    op.create_table(
        "evaluaciones",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("curso_materia_id", UUID(as_uuid=True), sa.ForeignKey("cursos_materias.id"), nullable=False),
        sa.Column("nombre", sa.String(200), nullable=False),
        sa.Column("fecha", sa.Date, nullable=False),
        sa.Column("tipo", sa.String(30), nullable=True, server_default="prueba"),
    )
    op.create_table(
        "notas",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("evaluacion_id", UUID(as_uuid=True), sa.ForeignKey("evaluaciones.id"), nullable=False),
        sa.Column("alumno_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
        sa.Column("valor", sa.Numeric(4, 2), nullable=True),
        sa.Column("retroalimentacion", sa.Text, nullable=True),
        sa.UniqueConstraint("evaluacion_id", "alumno_vinculo_id", name="uq_notas_evaluacion_alumno"),
    )
    op.create_table(
        "asistencias_diarias",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("curso_id", UUID(as_uuid=True), sa.ForeignKey("cursos.id"), nullable=False),
        sa.Column("alumno_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
        sa.Column("fecha", sa.Date, nullable=False),
        sa.Column("estado", sa.String(20), nullable=False),
        sa.Column("registrador_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint(
            "alumno_vinculo_id", "curso_id", "fecha",
            name="uq_asistencias_alumno_curso_fecha",
        ),
    )
    op.create_table(
        "observaciones",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("alumno_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
        sa.Column("profesor_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
        sa.Column("curso_id", UUID(as_uuid=True), sa.ForeignKey("cursos.id"), nullable=False),
        sa.Column("curso_materia_id", UUID(as_uuid=True), sa.ForeignKey("cursos_materias.id"), nullable=True),
        sa.Column("titulo", sa.String(200), nullable=True),
        sa.Column("tipo", sa.String(20), nullable=False),
        sa.Column("descripcion", sa.Text, nullable=False),
        sa.Column("fecha", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "notificaciones",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("colegio_id", UUID(as_uuid=True), sa.ForeignKey("colegios.id"), nullable=False),
        sa.Column("emisor_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
        sa.Column("curso_id", UUID(as_uuid=True), sa.ForeignKey("cursos.id"), nullable=True),
        sa.Column("curso_materia_id", UUID(as_uuid=True), sa.ForeignKey("cursos_materias.id"), nullable=True),
        sa.Column("evaluacion_id", UUID(as_uuid=True), sa.ForeignKey("evaluaciones.id"), nullable=True),
        sa.Column("tipo", sa.String(50), nullable=False, server_default="general"),
        sa.Column("titulo", sa.String(200), nullable=False),
        sa.Column("descripcion", sa.Text, nullable=True),
        sa.Column("metadata", JSONB, nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "notificacion_destinatarios",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("notificacion_id", UUID(as_uuid=True), sa.ForeignKey("notificaciones.id", ondelete="CASCADE"), nullable=False),
        sa.Column("receptor_vinculo_id", UUID(as_uuid=True), sa.ForeignKey(VINCULOS), nullable=False),
        sa.Column("leido", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("leido_en", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_notificacion_destinatarios_receptor", "notificacion_destinatarios",
        ["receptor_vinculo_id", "leido"],
    )


def downgrade() -> None:
    op.drop_index("ix_notificacion_destinatarios_receptor")
    op.drop_table("notificacion_destinatarios")
    op.drop_table("notificaciones")
    op.drop_table("observaciones")
    op.drop_table("asistencias_diarias")
    op.drop_table("notas")
    op.drop_table("evaluaciones")
    op.drop_table("horarios")
    op.drop_table("salas")
    op.drop_table("clases")
    op.drop_index("ix_alumnos_cursos_curso_annio")
    op.drop_table("alumnos_cursos")
    op.drop_table("profesores_materias")
    op.drop_table("cursos_materias")
    op.drop_table("materias")
    op.drop_table("cursos")
    op.drop_index("ix_vinculos_persona_colegio")
    op.drop_table("vinculos_institucionales")
    op.drop_table("personas")
    op.drop_table("contactos")
    op.drop_table("roles")
    op.drop_table("colegios")
