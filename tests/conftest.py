"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from dynatemplates.core.config import EngineRegistryConfig
from dynatemplates.domain.services import TemplateLayoutService, TemplateService
from dynatemplates.infrastructure.engines import EngineRegistry
from dynatemplates.infrastructure.persistence import models  # noqa: F401
from dynatemplates.infrastructure.persistence.database import Base


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def registry_config() -> EngineRegistryConfig:
    """Registry configuration with every built-in provider enabled."""
    return EngineRegistryConfig(
        template_engines=("njk", "hbs", "ejs", "pug"),
        language_engines=("html", "mjml", "md", "txt"),
        filters={"shout": lambda value: str(value).upper()},
        global_values={"app_name": "Acme"},
    )


@pytest.fixture
def engine_registry(registry_config: EngineRegistryConfig) -> EngineRegistry:
    """Engine registry with every built-in provider enabled."""
    return EngineRegistry(registry_config)


@pytest.fixture
def layout_service(db_session: AsyncSession, engine_registry: EngineRegistry) -> TemplateLayoutService:
    return TemplateLayoutService(db_session, engine_registry)


@pytest.fixture
def template_service(
    db_session: AsyncSession,
    engine_registry: EngineRegistry,
    layout_service: TemplateLayoutService,
) -> TemplateService:
    return TemplateService(db_session, engine_registry, layout_service=layout_service)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, engine_registry: EngineRegistry
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from dynatemplates.infrastructure.api.app import app
    from dynatemplates.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    original_registry = app.state.engine_registry
    app.state.engine_registry = engine_registry

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
    app.state.engine_registry = original_registry
