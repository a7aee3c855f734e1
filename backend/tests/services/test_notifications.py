"""Notification routes — inbox size, unread filter and read receipts."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from teacher_api.services.notifications import emit_notification


@pytest.fixture
async def inbox(world, test_db):
    """Six notifications from the head teacher to the teacher, oldest first."""
    notifications = []
    for i in range(6):
        notification = emit_notification(
            test_db,
            school_id=world.school.id,
            sender_vinculo_id=world.head.id,
            recipient_ids=[world.teacher.id, world.teacher.id],
            title=f"Aviso {i}",
        )
        notification.created_at = datetime(2024, 3, 1 + i, tzinfo=timezone.utc)
        notifications.append(notification)
    await test_db.commit()
    return notifications


async def test_inbox_shows_five_newest(client, world, auth, inbox):
    response = await client.get("/v1/api/teacher/notifications", headers=auth(world.teacher))
    assert response.status_code == 200
    data = response.json()
    assert data["unreadCount"] == 6
    assert [item["title"] for item in data["items"]] == [
        "Aviso 5", "Aviso 4", "Aviso 3", "Aviso 2", "Aviso 1",
    ]
    assert all(item["read"] is False for item in data["items"])


async def test_duplicate_recipients_collapse(inbox):
    assert all(len(n.recipients) == 1 for n in inbox)


async def test_mark_read_and_unread(client, world, auth, inbox):
    target = inbox[5].id
    read = await client.patch(
        f"/v1/api/teacher/notifications/{target}/read", headers=auth(world.teacher),
    )
    assert read.status_code == 200
    assert read.json()["read"] is True
    assert read.json()["readAt"] is not None

    unread_only = await client.get(
        "/v1/api/teacher/notifications", params={"unreadOnly": "true"},
        headers=auth(world.teacher),
    )
    assert unread_only.json()["unreadCount"] == 5
    assert "Aviso 5" not in [item["title"] for item in unread_only.json()["items"]]

    unread = await client.patch(
        f"/v1/api/teacher/notifications/{target}/read",
        json={"read": False},
        headers=auth(world.teacher),
    )
    assert unread.json()["read"] is False
    assert unread.json()["readAt"] is None


async def test_mark_read_requires_recipient(client, world, auth, inbox):
    not_mine = await client.patch(
        f"/v1/api/teacher/notifications/{inbox[0].id}/read", headers=auth(world.ana),
    )
    missing = await client.patch(
        f"/v1/api/teacher/notifications/{uuid4()}/read", headers=auth(world.teacher),
    )
    assert not_mine.status_code == 404
    assert not_mine.json()["error"]["message"] == "Notificación no encontrada"
    assert missing.status_code == 404
