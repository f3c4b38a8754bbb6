"""
Shared test fixtures.

Every test gets its own file-backed SQLite database under tmp_path, built
with the same engine factory as the application (foreign keys enforced).
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from resume_builder.database import create_engine_for, init_db, get_db
from resume_builder.services.library import LibraryStore
from resume_builder.services.resumes import ResumeStore


@pytest.fixture
async def engine(tmp_path):
    engine = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'resumes.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def library(db) -> LibraryStore:
    return LibraryStore(db)


@pytest.fixture
def resumes(db, library) -> ResumeStore:
    return ResumeStore(db, library)


@pytest.fixture
def app(session_factory):
    """FastAPI app wired to the per-test database."""
    from resume_builder.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def anon_client(app):
    """Client without a session cookie."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def client(app):
    """Client with authentication bypassed."""
    from resume_builder.auth import get_current_user

    app.dependency_overrides[get_current_user] = lambda: True
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
