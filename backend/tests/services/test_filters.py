"""Filter routes — dropdown option lists."""

BASE = "/v1/api/teacher/filters"


async def test_course_subject_pairs(client, world, auth):
    response = await client.get(f"{BASE}/course-subjects", headers=auth(world.teacher))
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["items"][0]["label"] == "1°A - Matemáticas"
    assert data["items"][0]["year"] == 2024


async def test_courses_taught_or_headed(client, world, auth):
    response = await client.get(f"{BASE}/courses", headers=auth(world.teacher))
    names = [item["courseName"] for item in response.json()["items"]]
    assert response.json()["count"] == 2
    assert names == ["1°A", "2°B"]


async def test_subjects_fall_back_to_teacher_subjects(client, world, auth):
    headed = await client.get(
        f"{BASE}/subjects/{world.course_b.id}", headers=auth(world.teacher),
    )
    taught = await client.get(
        f"{BASE}/subjects/{world.course_a.id}", headers=auth(world.teacher),
    )
    assert [item["subjectName"] for item in headed.json()["items"]] == ["Historia"]
    assert [item["subjectName"] for item in taught.json()["items"]] == ["Matemáticas"]


async def test_students_of_course(client, world, auth):
    response = await client.get(
        f"{BASE}/students/{world.course_a.id}", headers=auth(world.teacher),
    )
    data = response.json()
    assert data["count"] == 2
    assert data["items"][0] == {
        "alumnoVinculoId": str(world.ana.id),
        "rut": "1-9",
        "nombreCompleto": "Ana Alvarez Mora",
    }


async def test_students_of_foreign_course(client, world, auth):
    response = await client.get(
        f"{BASE}/students/{world.course_c.id}", headers=auth(world.teacher),
    )
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "No autorizado para acceder a este curso"
    assert response.json()["error"]["context"] == {
        "vinculo_id": str(world.teacher.id),
        "course_id": str(world.course_c.id),
        "resource_id": None,
    }


async def test_admins_of_school(client, world, auth):
    response = await client.get(f"{BASE}/admins", headers=auth(world.teacher))
    data = response.json()
    assert data["count"] == 2
    assert [item["nombreCompleto"] for item in data["items"]] == [
        "Laura Díaz", "Óscar Fuentes",
    ]
    assert data["items"][0]["email"] == "laura@mail.cl"
    assert data["items"][1]["email"] is None


async def test_evaluation_screen_courses(client, world, auth):
    response = await client.get(
        "/v1/api/teacher/evaluaciones/courses", headers=auth(world.teacher),
    )
    assert response.status_code == 200
    assert len(response.json()) == 2
