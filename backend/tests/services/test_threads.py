"""Threads and replies — persistence plus announcement to the group.

Invariants:
    - Thread creation persists the first post (via=web) and returns it
    - Fan-out runs after commit: e-mail batched to opted-in subscribers,
      WhatsApp text to opted-in phones
    - No opted-in subscribers → no transport calls
    - A failing transport never fails the write (response stays 200)
    - A title with line breaks still yields a valid e-mail subject
"""

from uuid import uuid4

import aiosmtplib

from app.infrastructure.channels import get_mailer
from app.infrastructure.mailer import SmtpMailer
from app.main import app as forum_app
from app.models.post import Post
from app.models.thread import Thread


async def _open_thread(client, group, author, title="Como instalar?", content="Alguém ajuda?"):
    return await client.post(
        f"/api/groups/{group.id}/threads",
        json={"authorId": str(author.id), "title": title, "content": content},
    )


async def test_create_thread_returns_thread_with_first_post(client, make_user, make_group):
    author = await make_user()
    group = await make_group()

    res = await _open_thread(client, group, author)

    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Como instalar?"
    assert body["groupId"] == str(group.id)
    assert len(body["posts"]) == 1
    assert body["posts"][0]["content"] == "Alguém ajuda?"
    assert body["posts"][0]["via"] == "web"
    assert body["posts"][0]["threadId"] == body["id"]


async def test_create_thread_announces_to_subscribers(
    client, fake_mailer, fake_whatsapp, make_user, make_group, make_subscription,
):
    group = await make_group()
    author = await make_user("Ana", "ana@example.com")
    bia = await make_user("Bia", "bia@example.com", phone="+5511999990002")
    caio = await make_user("Caio", "caio@example.com", phone="+5511999990003")
    await make_subscription(bia, group)
    await make_subscription(caio, group, email_on=False, wa_on=True)

    res = await _open_thread(client, group, author, title="Deploy", content="Falhou")
    thread_id = res.json()["id"]

    assert len(fake_mailer.calls) == 1
    mail = fake_mailer.calls[0]
    assert mail["recipients"] == ["bia@example.com"]
    assert mail["subject"] == "[Deploy] Nova pergunta no grupo"
    assert f"http://forum.test/thread/{thread_id}" in mail["html"]

    assert fake_whatsapp.calls == [{
        "phones": ["+5511999990002", "+5511999990003"],
        "text": f'Nova pergunta: "Deploy"\nFalhou\nAcesse: http://forum.test/thread/{thread_id}',
    }]


async def test_create_thread_without_subscribers_sends_nothing(
    client, fake_mailer, fake_whatsapp, make_user, make_group,
):
    res = await _open_thread(client, await make_group(), await make_user())

    assert res.status_code == 200
    assert fake_mailer.calls == []
    assert fake_whatsapp.calls == []


async def test_create_thread_without_webhook_skips_whatsapp(
    client, fake_mailer, fake_whatsapp, make_user, make_group, make_subscription,
):
    fake_whatsapp.configured = False
    group = await make_group()
    await make_subscription(await make_user(phone="+5511999990001"), group)

    res = await _open_thread(client, group, await make_user("Bia", "bia@example.com"))

    assert res.status_code == 200
    assert len(fake_mailer.calls) == 1
    assert fake_whatsapp.calls == []


async def test_mail_failure_does_not_fail_thread_creation(
    client, fake_mailer, fake_whatsapp, make_user, make_group, make_subscription, read_all,
):
    group = await make_group()
    await make_subscription(await make_user(phone="+5511999990001"), group)
    fake_mailer.fail = True

    res = await _open_thread(client, group, await make_user("Bia", "bia@example.com"))

    assert res.status_code == 200
    assert len(await read_all(Thread)) == 1
    assert len(fake_whatsapp.calls) == 1


async def test_multiline_title_still_mails_and_reaches_whatsapp(
    client, fake_whatsapp, make_user, make_group, make_subscription, read_all, monkeypatch,
):
    sent = []

    async def fake_send(message, **kwargs):
        sent.append(message)

    monkeypatch.setattr(aiosmtplib, "send", fake_send)
    forum_app.dependency_overrides[get_mailer] = lambda: SmtpMailer(
        "smtp.local", 1025, "no-reply@forum.local",
    )
    group = await make_group()
    await make_subscription(await make_user(phone="+5511999990001"), group)

    res = await _open_thread(
        client, group, await make_user("Bia", "bia@example.com"), title="Linha1\nLinha2",
    )

    assert res.status_code == 200
    assert len(await read_all(Thread)) == 1
    assert [m["Subject"] for m in sent] == ["[Linha1 Linha2] Nova pergunta no grupo"]
    assert len(fake_whatsapp.calls) == 1
    assert fake_whatsapp.calls[0]["text"].startswith('Nova pergunta: "Linha1\nLinha2"')


async def test_create_thread_unknown_group_is_404(client, make_user, read_all):
    author = await make_user()
    res = await client.post(
        f"/api/groups/{uuid4()}/threads",
        json={"authorId": str(author.id), "title": "t", "content": "c"},
    )
    assert res.status_code == 404
    assert await read_all(Thread) == []


async def test_create_thread_missing_title_is_400(client, make_user, make_group):
    author = await make_user()
    group = await make_group()
    res = await client.post(
        f"/api/groups/{group.id}/threads",
        json={"authorId": str(author.id), "content": "c"},
    )
    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert "body.title" in fields


async def test_list_group_threads(client, make_user, make_group):
    author = await make_user()
    group = await make_group()
    await _open_thread(client, group, author, title="first")

    res = await client.get(f"/api/groups/{group.id}/threads")

    assert res.status_code == 200
    assert [t["title"] for t in res.json()] == ["first"]


async def test_reply_creates_post_and_announces(
    client, fake_mailer, fake_whatsapp, make_user, make_group, make_subscription, read_all,
):
    group = await make_group()
    author = await make_user()
    sub = await make_user("Bia", "bia@example.com", phone="+5511999990002")
    thread_id = (await _open_thread(client, group, author, title="Deploy")).json()["id"]
    await make_subscription(sub, group)

    res = await client.post(
        f"/api/threads/{thread_id}/replies",
        json={"authorId": str(author.id), "content": "Resolvido"},
    )

    assert res.status_code == 200
    assert res.json()["via"] == "web"
    assert res.json()["content"] == "Resolvido"
    assert len(await read_all(Post)) == 2
    assert fake_mailer.calls[-1]["subject"] == "[Deploy] Nova resposta"
    assert fake_whatsapp.calls[-1]["text"].startswith('Nova resposta em "Deploy":\nResolvido')


async def test_reply_accepts_whatsapp_via(client, make_user, make_group):
    author = await make_user()
    thread_id = (await _open_thread(client, await make_group(), author)).json()["id"]

    res = await client.post(
        f"/api/threads/{thread_id}/replies",
        json={"authorId": str(author.id), "content": "ok", "via": "whatsapp"},
    )

    assert res.json()["via"] == "whatsapp"


async def test_reply_rejects_unknown_via(client, make_user, make_group):
    author = await make_user()
    thread_id = (await _open_thread(client, await make_group(), author)).json()["id"]

    res = await client.post(
        f"/api/threads/{thread_id}/replies",
        json={"authorId": str(author.id), "content": "ok", "via": "sms"},
    )

    assert res.status_code == 400


async def test_reply_to_unknown_thread_is_404(client, fake_mailer, make_user):
    author = await make_user()
    res = await client.post(
        f"/api/threads/{uuid4()}/replies",
        json={"authorId": str(author.id), "content": "x"},
    )
    assert res.status_code == 404
    assert fake_mailer.calls == []


async def test_get_thread_returns_posts_oldest_first(client, make_user, make_group):
    author = await make_user()
    thread_id = (await _open_thread(client, await make_group(), author, content="q")).json()["id"]
    await client.post(
        f"/api/threads/{thread_id}/replies",
        json={"authorId": str(author.id), "content": "a1"},
    )

    res = await client.get(f"/api/threads/{thread_id}")

    assert res.status_code == 200
    assert [p["content"] for p in res.json()["posts"]] == ["q", "a1"]
