"""Users, groups and subscriptions — thin CRUD routes over the store.

Invariants:
    - POST /api/users echoes name/email with a generated id, phone null when absent
    - GET /api/groups lists newest first
    - Subscribe upserts: one row per (user, group), omitted flags default to True
    - Malformed bodies → 400 VALIDATION_ERROR with field details
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from app.models.subscription import Subscription
from app.models.user import User


async def test_create_user_echoes_fields_with_generated_id(client):
    res = await client.post("/api/users", json={"name": "Ana", "email": "a@x.com"})

    assert res.status_code == 200
    body = res.json()
    UUID(body["id"])
    assert body["name"] == "Ana"
    assert body["email"] == "a@x.com"
    assert body["phone"] is None
    assert "createdAt" in body


async def test_create_user_with_phone(client, read_all):
    res = await client.post(
        "/api/users",
        json={"name": "Bia", "email": "bia@example.com", "phone": "+5511999990002"},
    )

    assert res.status_code == 200
    assert res.json()["phone"] == "+5511999990002"
    users = await read_all(User)
    assert [u.phone for u in users] == ["+5511999990002"]


async def test_create_user_invalid_email_is_400_with_field_detail(client, read_all):
    res = await client.post("/api/users", json={"name": "Ana", "email": "nope"})

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("email") for d in error["details"])
    assert await read_all(User) == []


async def test_create_user_blank_name_rejected(client):
    res = await client.post("/api/users", json={"name": "   ", "email": "a@x.com"})
    assert res.status_code == 400


async def test_create_group(client):
    res = await client.post("/api/groups", json={"name": "Python"})

    assert res.status_code == 200
    assert res.json()["name"] == "Python"
    UUID(res.json()["id"])


async def test_list_groups_newest_first(client, make_group):
    now = datetime.now(timezone.utc)
    await make_group("old", created_at=now - timedelta(days=2))
    await make_group("new", created_at=now)
    await make_group("mid", created_at=now - timedelta(days=1))

    res = await client.get("/api/groups")

    assert res.status_code == 200
    assert [g["name"] for g in res.json()] == ["new", "mid", "old"]


async def test_subscribe_defaults_both_flags_to_true(client, make_user, make_group):
    user = await make_user()
    group = await make_group()

    res = await client.post(
        f"/api/groups/{group.id}/subscribe", json={"userId": str(user.id)},
    )

    assert res.status_code == 200
    body = res.json()
    assert body == {
        "userId": str(user.id), "groupId": str(group.id),
        "emailOn": True, "waOn": True,
    }


async def test_resubscribe_overwrites_flags_in_place(
    client, make_user, make_group, read_all,
):
    user = await make_user()
    group = await make_group()
    url = f"/api/groups/{group.id}/subscribe"

    await client.post(url, json={"userId": str(user.id), "emailOn": False, "waOn": True})
    res = await client.post(url, json={"userId": str(user.id), "emailOn": True, "waOn": False})

    assert res.json()["emailOn"] is True
    assert res.json()["waOn"] is False
    rows = await read_all(Subscription)
    assert len(rows) == 1
    assert (rows[0].email_on, rows[0].wa_on) == (True, False)


async def test_resubscribe_omitted_flag_defaults_to_true_not_previous(
    client, make_user, make_group, read_all,
):
    user = await make_user()
    group = await make_group()
    url = f"/api/groups/{group.id}/subscribe"

    await client.post(url, json={"userId": str(user.id), "emailOn": False, "waOn": False})
    res = await client.post(url, json={"userId": str(user.id), "emailOn": True})

    assert res.json()["emailOn"] is True
    assert res.json()["waOn"] is True
    assert len(await read_all(Subscription)) == 1


async def test_subscribe_unknown_group_is_404(client, make_user):
    user = await make_user()
    res = await client.post(
        f"/api/groups/{uuid4()}/subscribe", json={"userId": str(user.id)},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_subscribe_unknown_user_is_404(client, make_group):
    group = await make_group()
    res = await client.post(
        f"/api/groups/{group.id}/subscribe", json={"userId": str(uuid4())},
    )
    assert res.status_code == 404
