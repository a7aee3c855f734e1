"""Attendance routes — roster, per-date view, bulk updates and roll call.

Tests:
    - Unauthorized callers: empty roster, 403 elsewhere
    - Bulk updates are all-or-nothing when a student is not enrolled
    - Roll call notifies absent students once
    - fecha format and estado values are validated
"""

from datetime import date
from uuid import uuid4

from sqlalchemy import select

from teacher_api.models import DailyAttendance, Notification

BASE = "/v1/api/teacher/attendance"


async def _states(session_factory, course_id, day):
    async with session_factory() as db:
        rows = (await db.execute(
            select(DailyAttendance.student_vinculo_id, DailyAttendance.status).where(
                DailyAttendance.course_id == course_id,
            ),
        )).all()
        dated = (await db.execute(
            select(DailyAttendance.student_vinculo_id, DailyAttendance.status).where(
                DailyAttendance.course_id == course_id, DailyAttendance.date == day,
            ),
        )).all()
    return len(rows), dict(dated)


async def test_courses_taught_or_headed(client, world, auth):
    response = await client.get(f"{BASE}/courses", headers=auth(world.teacher))
    assert [c["courseName"] for c in response.json()] == ["1°A", "2°B"]


async def test_students_for_course(client, world, auth):
    response = await client.get(
        f"{BASE}/courses/{world.course_a.id}/students", headers=auth(world.teacher),
    )
    data = response.json()
    assert data["count"] == 2
    assert data["students"][0]["nombre_completo"] == "Ana Alvarez Mora"


async def test_students_for_course_without_access_is_empty(client, world, auth):
    response = await client.get(
        f"{BASE}/courses/{world.course_c.id}/students", headers=auth(world.teacher),
    )
    assert response.status_code == 200
    assert response.json() == {"count": 0, "students": []}


async def test_attendance_by_date(client, world, auth):
    recorded = await client.get(
        f"{BASE}/courses/{world.course_a.id}/2024-04-01", headers=auth(world.teacher),
    )
    assert [s["estado"] for s in recorded.json()["students"]] == ["presente", "ausente"]

    empty = await client.get(
        f"{BASE}/courses/{world.course_a.id}/2024-04-03", headers=auth(world.teacher),
    )
    assert {s["estado"] for s in empty.json()["students"]} == {"no_registrado"}


async def test_attendance_by_date_forbidden(client, world, auth):
    response = await client.get(
        f"{BASE}/courses/{world.course_c.id}/2024-04-01", headers=auth(world.teacher),
    )
    assert response.status_code == 403


async def test_attendance_by_date_rejects_bad_fecha(client, world, auth):
    malformed = await client.get(
        f"{BASE}/courses/{world.course_a.id}/2024-4-1", headers=auth(world.teacher),
    )
    impossible = await client.get(
        f"{BASE}/courses/{world.course_a.id}/2024-02-30", headers=auth(world.teacher),
    )
    assert malformed.status_code == 400
    assert impossible.status_code == 400


async def test_bulk_update_upserts(client, world, auth, test_session_factory):
    response = await client.patch(
        f"{BASE}/courses/{world.course_a.id}/2024-04-01",
        json={"updates": [
            {"alumnoVinculoId": str(world.bruno.id), "estado": "tardanza"},
        ]},
        headers=auth(world.teacher),
    )
    assert response.status_code == 200
    assert response.json()["processed"] == 1

    total, states = await _states(test_session_factory, world.course_a.id, date(2024, 4, 1))
    assert total == 2
    assert states[world.bruno.id] == "tardanza"
    assert states[world.ana.id] == "presente"


async def test_bulk_update_is_all_or_nothing(client, world, auth, test_session_factory):
    response = await client.patch(
        f"{BASE}/courses/{world.course_a.id}/2024-04-01",
        json={"updates": [
            {"alumnoVinculoId": str(world.ana.id), "estado": "ausente"},
            {"alumnoVinculoId": str(world.outsider.id), "estado": "presente"},
        ]},
        headers=auth(world.teacher),
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "STUDENT_NOT_ENROLLED"

    _, states = await _states(test_session_factory, world.course_a.id, date(2024, 4, 1))
    assert states[world.ana.id] == "presente"
    assert world.outsider.id not in states


async def test_bulk_update_validation(client, world, auth):
    url = f"{BASE}/courses/{world.course_a.id}/2024-04-01"
    bad_state = await client.patch(
        url,
        json={"updates": [{"alumnoVinculoId": str(world.ana.id), "estado": "enfermo"}]},
        headers=auth(world.teacher),
    )
    empty = await client.patch(url, json={"updates": []}, headers=auth(world.teacher))
    assert bad_state.status_code == 400
    assert empty.status_code == 400


async def test_bulk_update_forbidden(client, world, auth):
    response = await client.patch(
        f"{BASE}/courses/{world.course_c.id}/2024-04-01",
        json={"updates": [{"alumnoVinculoId": str(world.outsider.id), "estado": "presente"}]},
        headers=auth(world.teacher),
    )
    assert response.status_code == 403


async def test_roll_call_notifies_absent_students(
    client, world, auth, test_session_factory,
):
    response = await client.post(
        f"{BASE}/take/{world.course_a.id}",
        json={
            "fecha": "2024-04-02",
            "attendances": [
                {"alumnoVinculoId": str(world.ana.id), "estado": "presente"},
                {"alumnoVinculoId": str(world.bruno.id), "estado": "ausente"},
            ],
        },
        headers=auth(world.teacher),
    )
    assert response.status_code == 201
    assert response.json()["processed"] == 2

    async with test_session_factory() as db:
        notifications = (await db.execute(
            select(Notification).where(Notification.type == "asistencia"),
        )).scalars().all()
    assert len(notifications) == 1
    assert [r.recipient_vinculo_id for r in notifications[0].recipients] == [world.bruno.id]
    assert notifications[0].description == "Has quedado ausente el día 2024-04-02"


async def test_roll_call_with_course_subject(client, world, auth):
    body = {
        "fecha": "2024-04-02",
        "attendances": [{"alumnoVinculoId": str(world.ana.id), "estado": "presente"}],
    }
    ok = await client.post(
        f"{BASE}/take/{world.course_a.id}",
        json={**body, "cursoMateriaId": str(world.cm_math.id)},
        headers=auth(world.teacher),
    )
    mismatched = await client.post(
        f"{BASE}/take/{world.course_a.id}",
        json={**body, "cursoMateriaId": str(world.cm_c_math.id)},
        headers=auth(world.teacher),
    )
    unknown = await client.post(
        f"{BASE}/take/{world.course_a.id}",
        json={**body, "cursoMateriaId": str(uuid4())},
        headers=auth(world.teacher),
    )
    assert ok.status_code == 201
    assert mismatched.status_code == 400
    assert unknown.status_code == 404


async def test_roll_call_forbidden(client, world, auth):
    response = await client.post(
        f"{BASE}/take/{world.course_c.id}",
        json={
            "fecha": "2024-04-02",
            "attendances": [{"alumnoVinculoId": str(world.outsider.id), "estado": "ausente"}],
        },
        headers=auth(world.teacher),
    )
    assert response.status_code == 403
