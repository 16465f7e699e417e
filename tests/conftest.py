"""
Shared fixtures. Every test gets its own on-disk SQLite database (aiosqlite)
and a completion client whose HTTP traffic goes to an httpx.MockTransport.
"""
import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import CompletionSettings
from app.core.database import Base, get_db
from app.dependencies import get_completion_client
from app.main import app
from app.models.user import User, UserRole
from app.services.completion_client import CompletionClient

LLM_URL = "https://llm.test/openai/v1/chat/completions"
TEST_COMPLETION_SETTINGS = CompletionSettings(
    url=LLM_URL, api_key="test-key", model="test-model", timeout=5.0
)


def completion_body(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def echo_handler(request: httpx.Request) -> httpx.Response:
    """Answer every prompt with 'LLM: <prompt>'."""
    payload = json.loads(request.content)
    prompt = payload["messages"][0]["content"]
    return httpx.Response(200, json=completion_body(f"LLM: {prompt}"))


def make_completion_client(handler=echo_handler) -> CompletionClient:
    return CompletionClient(TEST_COMPLETION_SETTINGS, transport=httpx.MockTransport(handler))


async def create_user(session: AsyncSession, email: str, role=UserRole.USER, name: str = "Test") -> User:
    user = User(name=name, email=email, password_hash="not-a-real-hash", role=role)
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


def _make_engine(tmp_path):
    return create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool
    )


async def _create_all(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ─── Async fixtures (service tests) ──────────────────────────────────────────

@pytest.fixture
async def session_factory(tmp_path):
    engine = _make_engine(tmp_path)
    await _create_all(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


# ─── Sync fixtures (endpoint tests) ──────────────────────────────────────────

@pytest.fixture
def sync_session_factory(tmp_path):
    engine = _make_engine(tmp_path)
    asyncio.run(_create_all(engine))
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def seed_users(sync_session_factory):
    """Insert users straight into the test database; returns their ids in order."""

    def _seed(*users):
        async def _run():
            async with sync_session_factory() as s:
                created = [await create_user(s, email, role) for email, role in users]
                await s.commit()
                return [u.id for u in created]

        return asyncio.run(_run())

    return _seed


@pytest.fixture
def completion_handler():
    """Tests can swap the LLM behaviour by assigning ``.handler``."""

    class Switch:
        handler = staticmethod(echo_handler)

        def __call__(self, request):
            return self.handler(request)

    return Switch()


@pytest.fixture
def client(sync_session_factory, completion_handler):
    async def override_get_db():
        async with sync_session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    llm = make_completion_client(completion_handler)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_completion_client] = lambda: llm
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
