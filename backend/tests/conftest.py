"""Shared test fixtures: an isolated in-memory store and portal per test."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from igilife.database import init_db, make_engine, make_session_factory
from igilife.main import app
from igilife.portal import Portal
from igilife.seed.demo_data import DEMO_PASSWORD
from igilife.services.notifications import Notification
from igilife.services.store import PersistedStore


class MemoryNotifier:
    """Collects notifications so tests can assert on them."""

    def __init__(self):
        self.sent: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.sent.append(notification)

    @property
    def titles(self) -> list[str]:
        return [n.title for n in self.sent]


@pytest.fixture
def store() -> PersistedStore:
    """A fresh, empty store backed by in-memory SQLite."""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield PersistedStore(make_session_factory(engine))
    engine.dispose()


@pytest.fixture
def notifier() -> MemoryNotifier:
    return MemoryNotifier()


@pytest.fixture
def portal(store: PersistedStore, notifier: MemoryNotifier) -> Portal:
    return Portal(store, notifier=notifier)


def _client_for(portal: Portal) -> AsyncClient:
    app.state.portal = portal
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def anon_client(portal: Portal) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with nobody logged in."""
    async with _client_for(portal) as client:
        yield client
    app.state.portal = None


@pytest_asyncio.fixture
async def admin_client(portal: Portal) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the demo administrator logged in."""
    assert portal.sessions.login("admin@igilife.com", DEMO_PASSWORD)
    async with _client_for(portal) as client:
        yield client
    app.state.portal = None


@pytest_asyncio.fixture
async def agent_client(portal: Portal) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the demo agent logged in."""
    assert portal.sessions.login("agent@igilife.com", DEMO_PASSWORD)
    async with _client_for(portal) as client:
        yield client
    app.state.portal = None


@pytest_asyncio.fixture
async def client_user_client(portal: Portal) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the demo client (role `user`) logged in."""
    assert portal.sessions.login("client@igilife.com", DEMO_PASSWORD)
    async with _client_for(portal) as client:
        yield client
    app.state.portal = None
