"""Integration tests for the template layouts API."""

import pytest

LAYOUTS_URL = "/api/v1/template-layouts"


async def _create(client, **fields):
    payload = {"name": "base", "content": "<main>{{ content }}</main>", **fields}
    response = await client.post(LAYOUTS_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_and_list(client):
    created = await _create(client, language="html")

    response = await client.get(LAYOUTS_URL)

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [created["id"]]
    assert "subject" not in response.json()[0]


@pytest.mark.asyncio
async def test_render_by_name_with_scope_fallback(client):
    await _create(client)

    response = await client.post(
        f"{LAYOUTS_URL}/render",
        json={"name": "base", "scope": "tenant", "scope_id": "t9", "data": {"content": "x"}},
    )

    assert response.status_code == 200
    assert response.json() == {"content": "<main>x</main>"}


@pytest.mark.asyncio
async def test_render_tenant_overwrite(client):
    created = await _create(client)
    overwrite = await client.post(
        f"{LAYOUTS_URL}/{created['id']}/overwrite",
        json={"scope": "tenant", "scope_id": "t1", "content": "<section>{{ content }}</section>"},
    )
    assert overwrite.status_code == 200

    response = await client.post(
        f"{LAYOUTS_URL}/render",
        json={"name": "base", "scope": "tenant", "scope_id": "t1", "data": {"content": "x"}},
    )

    assert response.json()["content"] == "<section>x</section>"


@pytest.mark.asyncio
async def test_render_unknown_layout(client):
    response = await client.post(f"{LAYOUTS_URL}/render", json={"name": "gone"})

    assert response.status_code == 404
    assert response.json()["message"] == "Template layout not found: gone in scope system"


@pytest.mark.asyncio
async def test_render_content(client):
    response = await client.post(
        f"{LAYOUTS_URL}/render/content",
        json={"content": "<p>{{ content }}</p>", "engine": "njk", "language": "html", "data": {"content": "x"}},
    )

    assert response.status_code == 200
    assert response.json() == {"content": "<p>x</p>"}


@pytest.mark.asyncio
async def test_render_content_language_failure(client):
    response = await client.post(
        f"{LAYOUTS_URL}/render/content",
        json={"content": "{{ gap }}", "engine": "njk", "language": "html", "data": {"gap": "  "}},
    )

    assert response.status_code == 500
    assert response.json()["error"] == "TEMPLATE_LANGUAGE_ERROR"
    assert response.json()["language"] == "html"


@pytest.mark.asyncio
async def test_system_layout_protection(client):
    created = await _create(client)
    url = f"{LAYOUTS_URL}/{created['id']}"

    update = await client.put(url, json={"content": "x"})
    delete = await client.delete(url)

    assert update.status_code == 403
    assert delete.status_code == 403
    assert (await client.get(url)).status_code == 200
