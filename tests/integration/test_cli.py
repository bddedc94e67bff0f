"""Integration tests for the command-line interface."""

import asyncio
import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from dynatemplates.cli import cli
from dynatemplates.core.config import Settings, get_settings
from dynatemplates.domain.services import TemplateLayoutService, TemplateService
from dynatemplates.infrastructure.engines import EngineRegistry
from dynatemplates.infrastructure.persistence import database


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Point the CLI at a throwaway SQLite file."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DYNATEMPLATES_DATABASE_URL", url)
    monkeypatch.setenv("DYNATEMPLATES_LOG_LEVEL", "ERROR")
    get_settings.cache_clear()
    database._db_manager = None
    yield url
    get_settings.cache_clear()
    database._db_manager = None


def _seed(url):
    async def seed():
        manager = database.DatabaseManager(Settings(database_url=url))
        registry = EngineRegistry(Settings().engine_registry_config())
        try:
            async with manager.session() as session:
                layouts = TemplateLayoutService(session, registry)
                await layouts.create_record({"name": "frame", "content": "[{{ content }}]"})
                templates = TemplateService(session, registry, layout_service=layouts)
                welcome = await templates.create_record(
                    {"name": "welcome", "subject": "Hi {{ name }}", "content": "Hello {{ name }}!"}
                )
                await templates.overwrite_system_record(
                    welcome.id, {"scope": "tenant", "scope_id": "t1", "content": "Yo {{ name }}"}
                )
                await session.commit()
        finally:
            await manager.disconnect()

    asyncio.run(seed())


@pytest.fixture
def seeded(database_url):
    result = CliRunner().invoke(cli, ["init-db", "--force"])
    assert result.exit_code == 0, result.output
    assert "Database initialized successfully." in result.output
    _seed(database_url)
    return database_url


def test_engines_lists_default_keys(database_url):
    result = CliRunner().invoke(cli, ["engines"])

    assert result.exit_code == 0
    assert "Template engines: njk" in result.output
    assert "Language engines: mjml, html, txt" in result.output


def test_engines_follow_environment(database_url, monkeypatch):
    monkeypatch.setenv("DYNATEMPLATES_ENABLED_TEMPLATE_ENGINES", "njk,hbs")
    get_settings.cache_clear()

    result = CliRunner().invoke(cli, ["engines"])

    assert "Template engines: njk, hbs" in result.output


def test_render_system_template(seeded):
    result = CliRunner().invoke(cli, ["render", "welcome", "--data", json.dumps({"name": "John"})])

    assert result.exit_code == 0, result.output
    assert "Subject: Hi John" in result.output
    assert "Hello John!" in result.output


def test_render_tenant_override(seeded):
    result = CliRunner().invoke(
        cli,
        ["render", "welcome", "--scope", "tenant", "--scope-id", "t1", "--data", '{"name": "Ann"}'],
    )

    assert result.exit_code == 0, result.output
    assert "Yo Ann" in result.output


def test_render_layout(seeded):
    result = CliRunner().invoke(cli, ["render", "frame", "--layout", "--data", '{"content": "x"}'])

    assert result.exit_code == 0, result.output
    assert "[x]" in result.output


def test_render_unknown_template_fails(seeded):
    result = CliRunner().invoke(cli, ["render", "missing"])

    assert result.exit_code == 1
    assert "Error: Template not found: missing in scope system" in result.output


def test_render_rejects_invalid_data(database_url):
    result = CliRunner().invoke(cli, ["render", "welcome", "--data", "{not json"])

    assert result.exit_code == 2
    assert "Invalid JSON" in result.output


def test_init_db_refuses_production_without_force(database_url, monkeypatch):
    monkeypatch.setenv("DYNATEMPLATES_ENVIRONMENT", "production")
    get_settings.cache_clear()

    result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Use migrations instead of init-db" in result.output


def test_serve_starts_uvicorn(database_url):
    with patch("uvicorn.run") as mock_run:
        result = CliRunner().invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0, result.output
    mock_run.assert_called_once()
    assert mock_run.call_args.kwargs["port"] == 9000
    assert mock_run.call_args.args[0] == "dynatemplates.infrastructure.api.app:app"
