"""Acting vinculo resolution — token location, sub handling, persona lookup."""

from uuid import uuid4

COURSES = "/v1/api/teacher/filters/courses"


async def test_missing_token(client, world):
    response = await client.get(COURSES)
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"


async def test_token_from_cookie(client, world, make_token):
    token = make_token({"sub": str(world.teacher.id)})
    response = await client.get(COURSES, headers={"Cookie": f"Authentication={token}"})
    assert response.status_code == 200
    assert response.json()["count"] == 2


async def test_malformed_sub(client, world, auth):
    response = await client.get(COURSES, headers=auth(sub="not-a-uuid"))
    assert response.status_code == 400


async def test_persona_and_school_claims(client, world, auth):
    response = await client.get(
        COURSES,
        headers=auth(
            personaId=str(world.teacher_person.id), colegioId=str(world.school.id),
        ),
    )
    assert response.status_code == 200
    assert response.json()["count"] == 2


async def test_unmatched_persona(client, world, auth):
    response = await client.get(
        COURSES, headers=auth(personaId=str(uuid4()), colegioId=str(world.school.id)),
    )
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Vínculo institucional no encontrado"


async def test_no_identifying_claims(client, world, auth):
    response = await client.get(COURSES, headers=auth(rol="profesor"))
    assert response.status_code == 400


async def test_malformed_path_id(client, world, auth):
    response = await client.get(
        "/v1/api/teacher/filters/students/abc", headers=auth(world.teacher),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
