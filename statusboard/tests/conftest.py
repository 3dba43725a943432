from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from statusboard.common.exceptions import AIProviderError
from statusboard.core.analysis.project_analyzer import ProjectAnalyzer
from statusboard.db.base import Base
from statusboard.db.models import *  # noqa: F401,F403 - ensure all models loaded
from statusboard.tests.helpers import ScriptedAIClient

# In-memory SQLite, one database per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def ai_client():
    """Provider that always fails, so every assessment is the fallback."""
    return ScriptedAIClient(error=AIProviderError("OpenAI API key is not configured"))


@pytest.fixture
def analyzer(ai_client):
    return ProjectAnalyzer(client=ai_client, timeout=1)


@pytest.fixture
def excel_dir(tmp_path, monkeypatch):
    from statusboard.config import settings

    directory = tmp_path / "excels"
    directory.mkdir()
    monkeypatch.setattr(settings, "EXCEL_DIR", str(directory))
    return directory


@pytest.fixture
async def client(db_session, analyzer):
    from statusboard.api.deps import get_db, get_project_analyzer
    from statusboard.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_project_analyzer] = lambda: analyzer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"X-User-Role": "admin"}


@pytest.fixture
def manager_headers():
    return {"X-User-Role": "delivery_manager"}


@pytest.fixture
def pm_headers():
    return {"X-User-Role": "project_manager"}
