"""Service test fixtures — async DB, fake outbound channels, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db, get_mailer and get_whatsapp_client overridden for route tests
    - db_manager patched so the readiness probe sees the test engine
    - Fake channels record every dispatch; fail=True makes them raise
      NotificationDeliveryError like the real transports do

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Seeding helpers commit through test_db; assertions read through a fresh
      session (read_all) so they never see a stale identity map
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.core.domain_types import NotificationChannel
from app.core.errors import NotificationDeliveryError
from app.db.base import Base
from app.infrastructure.channels import get_mailer, get_whatsapp_client
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.main import app
from app.models.group import Group
from app.models.subscription import Subscription
from app.models.user import User


class FakeMailer:
    """Records send() calls instead of talking SMTP."""

    def __init__(self):
        self.calls: list[dict] = []
        self.fail = False

    async def send(self, recipients, subject, html):
        if self.fail:
            raise NotificationDeliveryError(
                NotificationChannel.EMAIL.value, "connection refused",
            )
        self.calls.append(
            {"recipients": list(recipients), "subject": subject, "html": html},
        )


class FakeWhatsApp:
    """Records send() calls instead of POSTing to the webhook."""

    def __init__(self, configured: bool = True):
        self.configured = configured
        self.calls: list[dict] = []
        self.fail = False

    async def send(self, phones, text):
        if self.fail:
            raise NotificationDeliveryError(
                NotificationChannel.WHATSAPP.value, "webhook answered 502",
            )
        self.calls.append({"phones": list(phones), "text": text})


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
def fake_mailer():
    return FakeMailer()


@pytest.fixture
def fake_whatsapp():
    return FakeWhatsApp()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_mailer, fake_whatsapp):
    """FastAPI test client with DB and outbound channels overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: fake_mailer
    app.dependency_overrides[get_whatsapp_client] = lambda: fake_whatsapp

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


@pytest.fixture
def read_all(test_session_factory):
    """Read every row of a model through a fresh session."""
    async def _read_all(model, *where):
        async with test_session_factory() as session:
            result = await session.execute(select(model).where(*where))
            return list(result.scalars().all())
    return _read_all


@pytest.fixture
def make_user(test_db):
    async def _make_user(name="Ana", email="ana@example.com", phone=None, **kw):
        user = User(name=name, email=email, phone=phone, **kw)
        test_db.add(user)
        await test_db.commit()
        return user
    return _make_user


@pytest.fixture
def make_group(test_db):
    async def _make_group(name="Python", created_at=None):
        group = Group(
            name=name,
            created_at=created_at or datetime.now(timezone.utc),
        )
        test_db.add(group)
        await test_db.commit()
        return group
    return _make_group


@pytest.fixture
def make_subscription(test_db):
    _tick = [datetime.now(timezone.utc)]

    async def _make_subscription(user, group, email_on=True, wa_on=True):
        _tick[0] += timedelta(seconds=1)
        sub = Subscription(
            user_id=user.id, group_id=group.id,
            email_on=email_on, wa_on=wa_on, created_at=_tick[0],
        )
        test_db.add(sub)
        await test_db.commit()
        return sub
    return _make_subscription
