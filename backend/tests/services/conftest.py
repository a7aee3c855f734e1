"""Service test fixtures — async DB, seeded school, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness probes hit the test engine
    - `world` seeds one school with a teacher, a head teacher, students, grades,
      attendance and schedules; tests read ids from it

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features such as jsonb are not exercised here)
    - Assertions after a request use a fresh session: the seeding session's
      identity map would hand back stale rows
"""

from datetime import date, datetime, time, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from teacher_api.db.base import Base
from teacher_api.infrastructure.database import get_db, DatabaseSessionManager
from teacher_api.models import (
    Contact, Course, CourseSubject, DailyAttendance, Enrollment, Evaluation,
    Grade, Lesson, Observation, Person, Role, Room, Schedule, School, Subject,
    TeacherSubject, Vinculo,
)
import teacher_api.infrastructure.database as db_module
from teacher_api.main import app

YEAR = 2024


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


def _person(db, first, paternal, maternal=None, rut=None, email=None) -> Person:
    contact = None
    if email:
        contact = Contact(id=uuid4(), email=email)
        db.add(contact)
    person = Person(
        id=uuid4(), rut=rut, first_name=first, paternal_surname=paternal,
        maternal_surname=maternal, contact_id=contact.id if contact else None,
    )
    db.add(person)
    return person


def _vinculo(db, person, school, role, email=None) -> Vinculo:
    vinculo = Vinculo(
        id=uuid4(), person_id=person.id, school_id=school.id, role_id=role.id,
        institutional_email=email, status="activo",
    )
    db.add(vinculo)
    return vinculo


@pytest.fixture
async def world(test_db):
    """One school: teacher teaches Matemáticas in 1°A and heads 2°B."""
    db = test_db
    school = School(id=uuid4(), name="Colegio Los Andes")
    teacher_role = Role(id=uuid4(), name="profesor")
    student_role = Role(id=uuid4(), name="alumno")
    admin_role = Role(id=uuid4(), name="administrador")
    staff_role = Role(id=uuid4(), name="administrativo")
    db.add_all([school, teacher_role, student_role, admin_role, staff_role])
    await db.flush()

    teacher_person = _person(db, "Juan", "Pérez", "Soto", email="juan@mail.cl")
    teacher = _vinculo(db, teacher_person, school, teacher_role, email="jperez@colegio.cl")
    head = _vinculo(db, _person(db, "María", "López"), school, teacher_role)
    other_teacher = _vinculo(db, _person(db, "Pedro", "Rojas"), school, teacher_role)
    admin = _vinculo(
        db, _person(db, "Laura", "Díaz", rut="11-1", email="laura@mail.cl"),
        school, admin_role,
    )
    staff = _vinculo(db, _person(db, "Óscar", "Fuentes", rut="22-2"), school, staff_role)
    ana = _vinculo(db, _person(db, "Ana", "Alvarez", "Mora", rut="1-9"), school, student_role)
    bruno = _vinculo(db, _person(db, "Bruno", "Bravo", rut="2-7"), school, student_role)
    former = _vinculo(db, _person(db, "Carla", "Castro", rut="3-5"), school, student_role)
    outsider = _vinculo(db, _person(db, "Diego", "Durán", rut="4-3"), school, student_role)
    await db.flush()

    course_a = Course(
        id=uuid4(), school_id=school.id, name="1°A", level="1", year=YEAR,
        head_teacher_vinculo_id=head.id,
    )
    course_b = Course(
        id=uuid4(), school_id=school.id, name="2°B", level="2", year=YEAR,
        head_teacher_vinculo_id=teacher.id,
    )
    course_c = Course(id=uuid4(), school_id=school.id, name="3°C", year=YEAR)
    math = Subject(id=uuid4(), school_id=school.id, name="Matemáticas")
    language = Subject(id=uuid4(), school_id=school.id, name="Lenguaje")
    history = Subject(id=uuid4(), school_id=school.id, name="Historia")
    db.add_all([course_a, course_b, course_c, math, language, history])
    await db.flush()

    cm_math = CourseSubject(
        id=uuid4(), course_id=course_a.id, subject_id=math.id,
        teacher_vinculo_id=teacher.id,
    )
    cm_language = CourseSubject(
        id=uuid4(), course_id=course_a.id, subject_id=language.id,
        teacher_vinculo_id=other_teacher.id,
    )
    cm_b_history = CourseSubject(
        id=uuid4(), course_id=course_b.id, subject_id=history.id,
        teacher_vinculo_id=other_teacher.id,
    )
    cm_c_math = CourseSubject(
        id=uuid4(), course_id=course_c.id, subject_id=math.id,
        teacher_vinculo_id=other_teacher.id,
    )
    db.add_all([cm_math, cm_language, cm_b_history, cm_c_math])
    db.add(TeacherSubject(id=uuid4(), teacher_vinculo_id=teacher.id, subject_id=history.id))

    db.add_all([
        Enrollment(id=uuid4(), student_vinculo_id=ana.id, course_id=course_a.id, year=YEAR),
        Enrollment(id=uuid4(), student_vinculo_id=bruno.id, course_id=course_a.id, year=YEAR),
        Enrollment(id=uuid4(), student_vinculo_id=former.id, course_id=course_a.id, year=YEAR - 1),
        Enrollment(id=uuid4(), student_vinculo_id=outsider.id, course_id=course_c.id, year=YEAR),
        Enrollment(id=uuid4(), student_vinculo_id=ana.id, course_id=course_b.id, year=YEAR),
    ])
    await db.flush()

    prueba = Evaluation(
        id=uuid4(), course_subject_id=cm_math.id, name="Prueba 1",
        date=date(YEAR, 4, 1), type="prueba",
    )
    solemne = Evaluation(
        id=uuid4(), course_subject_id=cm_math.id, name="Solemne",
        date=date(YEAR, 5, 1), type="solemne",
    )
    db.add_all([prueba, solemne])
    await db.flush()
    db.add_all([
        Grade(id=uuid4(), evaluation_id=prueba.id, student_vinculo_id=ana.id, value=5.0),
        Grade(id=uuid4(), evaluation_id=solemne.id, student_vinculo_id=ana.id, value=6.0),
        Grade(id=uuid4(), evaluation_id=prueba.id, student_vinculo_id=bruno.id, value=3.0),
    ])

    db.add_all([
        DailyAttendance(
            id=uuid4(), course_id=course_a.id, student_vinculo_id=ana.id,
            date=date(YEAR, 4, 1), status="presente", recorded_by_vinculo_id=teacher.id,
        ),
        DailyAttendance(
            id=uuid4(), course_id=course_a.id, student_vinculo_id=bruno.id,
            date=date(YEAR, 4, 1), status="ausente", recorded_by_vinculo_id=teacher.id,
        ),
    ])

    room = Room(id=uuid4(), school_id=school.id, name="Sala 12", capacity=40)
    db.add(room)
    await db.flush()
    db.add_all([
        # Monday 08:00–09:30 in Sala 12
        Schedule(
            id=uuid4(), course_subject_id=cm_math.id, weekday=1,
            start_time=time(8, 0), end_time=time(9, 30), room_id=room.id, active=True,
        ),
        # Wednesday 10:00–11:00, only until end of June
        Schedule(
            id=uuid4(), course_subject_id=cm_math.id, weekday=3,
            start_time=time(10, 0), end_time=time(11, 0), active=True,
            valid_until=date(YEAR, 6, 30),
        ),
        # Inactive Tuesday slot
        Schedule(
            id=uuid4(), course_subject_id=cm_math.id, weekday=2,
            start_time=time(8, 0), end_time=time(9, 0), active=False,
        ),
    ])
    db.add_all([
        Lesson(
            id=uuid4(), course_subject_id=cm_math.id, date=date(YEAR, 3, 4),
            start_time=time(8, 0), end_time=time(9, 30), topic="Fracciones",
        ),
        Lesson(
            id=uuid4(), course_subject_id=cm_math.id, date=date(YEAR, 3, 11),
            start_time=time(8, 0), end_time=time(9, 30), topic="Decimales",
        ),
    ])
    db.add(Observation(
        id=uuid4(), student_vinculo_id=ana.id, teacher_vinculo_id=teacher.id,
        course_id=course_a.id, course_subject_id=cm_math.id, title="Participación",
        type="positiva", description="Participa activamente",
        observed_at=datetime(YEAR, 4, 2, 10, 0, tzinfo=timezone.utc),
    ))
    await db.commit()

    return SimpleNamespace(
        school=school, teacher=teacher, teacher_person=teacher_person,
        head=head, other_teacher=other_teacher, admin=admin, staff=staff,
        ana=ana, bruno=bruno, former=former, outsider=outsider,
        course_a=course_a, course_b=course_b, course_c=course_c,
        math=math, language=language, history=history,
        cm_math=cm_math, cm_language=cm_language, cm_c_math=cm_c_math,
        prueba=prueba, solemne=solemne, room=room,
    )


@pytest.fixture
def auth(make_token):
    """Authorization headers for a vinculo (or raw claims)."""
    def _headers(vinculo=None, **claims) -> dict:
        if vinculo is not None:
            claims.setdefault("sub", str(vinculo.id))
        return {"Authorization": f"Bearer {make_token(claims)}"}
    return _headers
