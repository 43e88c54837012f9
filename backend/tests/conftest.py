"""
Quillnote Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Inventory:
    ├── mock_db_session: AsyncMock database session (no real DB needed)
    ├── note_factory: builds note-like objects with every NoteResponse field
    ├── fake_note_session: session that applies the access-gate filter in memory
    ├── sqlite_session: real AsyncSession on a throwaway SQLite file
    ├── make_token / auth_headers: session JWTs signed with the test secret
    ├── provider_stub: httpx.MockTransport double recording provider calls
    └── test_client: HTTPX AsyncClient bound to the FastAPI app
"""

import os
import tempfile
import time
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="quillnote_test_"), "test.db"
)
os.environ["AUTH_JWT_SECRET"] = "test-jwt-secret"
os.environ["AUTH_JWT_AUDIENCE"] = "authenticated"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ["LOG_LEVEL"] = "WARNING"

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.database import Base, get_db_session
from app.models.note import Note  # noqa: F401  (registers the notes table)


# ══════════════════════════════════════════════════════════════════════════
# Notes & Database Doubles
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def note_factory() -> Callable[..., SimpleNamespace]:
    """Builds a note-like object carrying every NoteResponse field."""

    def _make(
        id: str = "n1",
        user_id: str = "u1",
        title: str = "Meeting notes",
        content: str = "Long text about the quarterly roadmap and hiring plan.",
        created_at: Optional[datetime] = None,
    ) -> SimpleNamespace:
        ts = created_at or datetime.now(timezone.utc)
        return SimpleNamespace(
            id=id,
            user_id=user_id,
            title=title,
            content=content,
            created_at=ts,
            updated_at=ts,
        )

    return _make


class FakeNoteSession:
    """
    In-memory stand-in for AsyncSession, just enough for the access gate.

    execute() reads the bound note ID and owner ID out of the compiled
    statement and applies the same filter the database would, so
    ownership tests exercise the real query the gate builds.
    """

    def __init__(self, notes=()):
        self.notes: Dict[str, Any] = {note.id: note for note in notes}
        self.statements: List[Any] = []
        self.commit = AsyncMock()
        self.rollback = AsyncMock()
        self.close = AsyncMock()

    async def execute(self, statement):
        self.statements.append(statement)
        params = statement.compile().params
        note_id = next((v for k, v in params.items() if k.startswith("id_")), None)
        owner_id = next((v for k, v in params.items() if k.startswith("user_id_")), None)

        note = self.notes.get(note_id)
        if note is not None and note.user_id != owner_id:
            note = None

        result = MagicMock()
        result.scalar_one_or_none.return_value = note
        return result


@pytest.fixture
def fake_note_session(note_factory):
    """Session holding note n1 owned by u1."""
    return FakeNoteSession([note_factory(id="n1", user_id="u1", content="Long text...")])


@pytest_asyncio.fixture
async def sqlite_session(tmp_path):
    """
    A real AsyncSession on a fresh SQLite file with the notes table created.

    For behavior that depends on SQL semantics (ordering, keyset filters)
    rather than on which calls a service makes.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# Session Tokens
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_token() -> Callable[..., str]:
    """Mints identity-provider style JWTs signed with the test secret."""

    def _make(
        sub: Optional[str] = "u1",
        secret: Optional[str] = None,
        expires_in: int = 3600,
        **claims: Any,
    ) -> str:
        now = int(time.time())
        payload: Dict[str, Any] = {
            "aud": "authenticated",
            "iat": now,
            "exp": now + expires_in,
            "email": f"{sub}@example.com" if sub else None,
        }
        if sub is not None:
            payload["sub"] = sub
        payload.update(claims)
        return jwt.encode(payload, secret or settings.auth_jwt_secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token) -> Callable[..., Dict[str, str]]:
    def _headers(sub: str = "u1") -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(sub=sub)}"}

    return _headers


# ══════════════════════════════════════════════════════════════════════════
# Provider Double
# ══════════════════════════════════════════════════════════════════════════

class ProviderStub:
    """
    Scripted provider endpoint backed by httpx.MockTransport.

    Records every request so tests can assert on call counts and on the
    exact request an adapter built.
    """

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
        error: Optional[Exception] = None,
    ):
        self.status_code = status_code
        self.json_body = json_body
        self.content = content
        self.error = error
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def provider_stub() -> Callable[..., ProviderStub]:
    return ProviderStub


@pytest.fixture
def openai_body() -> Callable[[Optional[str]], Dict[str, Any]]:
    """Chat-completions success body carrying `text`."""

    def _body(text: Optional[str]) -> Dict[str, Any]:
        return {"choices": [{"message": {"role": "assistant", "content": text}}]}

    return _body


@pytest.fixture
def gemini_body() -> Callable[[Optional[str]], Dict[str, Any]]:
    """generateContent success body carrying `text`."""

    def _body(text: Optional[str]) -> Dict[str, Any]:
        return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}

    return _body


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def db_override():
    """
    Installs a database session override on the app.

    Usage:
        db_override(fake_note_session)
    """
    from app.main import app

    def _install(session):
        async def _get_session():
            yield session

        app.dependency_overrides[get_db_session] = _get_session
        return session

    yield _install
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    raise_app_exceptions=False lets the catch-all 500 handler's response
    reach the test instead of re-raising the original exception.
    """
    from app.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
