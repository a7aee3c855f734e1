"""Head teacher routes — course summary and per-student risk analytics."""


async def test_summary_of_headed_course(client, world, auth):
    response = await client.get("/v1/api/teacher/course/summary", headers=auth(world.head))
    assert response.status_code == 200
    assert response.json() == {
        "courseId": str(world.course_a.id),
        "studentsCount": 2,
        "courseAverage": 4.34,
    }


async def test_summary_without_grades(client, world, auth):
    response = await client.get("/v1/api/teacher/course/summary", headers=auth(world.teacher))
    assert response.json()["courseId"] == str(world.course_b.id)
    assert response.json()["studentsCount"] == 1
    assert response.json()["courseAverage"] is None


async def test_summary_no_content_when_heading_nothing(client, world, auth):
    response = await client.get(
        "/v1/api/teacher/course/summary", headers=auth(world.other_teacher),
    )
    assert response.status_code == 204
    assert response.content == b""


async def test_students_analytics(client, world, auth):
    response = await client.get(
        "/v1/api/teacher/course/students/analytics", headers=auth(world.head),
    )
    assert response.status_code == 200
    data = response.json()
    ana, bruno = data["students"]

    assert ana["nombreCompleto"] == "Ana Alvarez Mora"
    assert ana["promedio"] == 5.67
    assert ana["asistenciaPercent"] == 100
    assert ana["riesgoPercent"] == 13
    assert ana["riesgoCategoria"] == "bajo"

    assert bruno["promedio"] == 3.0
    assert bruno["asistenciaPercent"] == 0
    assert bruno["riesgoPercent"] == 80
    assert bruno["riesgoCategoria"] == "critico"

    assert data["mediumRiskCount"] == 0
    assert data["criticalRiskCount"] == 1


async def test_students_analytics_empty_without_headed_course(client, world, auth):
    response = await client.get(
        "/v1/api/teacher/course/students/analytics", headers=auth(world.other_teacher),
    )
    assert response.json() == {"students": [], "mediumRiskCount": 0, "criticalRiskCount": 0}
