"""Tests for the MJML language processor."""

import pytest

from dynatemplates.infrastructure.engines.language import MjmlCompilationError, MjmlProcessor

MJML_DOCUMENT = (
    "<mjml><mj-body><mj-section><mj-column>"
    "<mj-text>Hello MJML</mj-text>"
    "</mj-column></mj-section></mj-body></mjml>"
)


@pytest.fixture
def processor():
    return MjmlProcessor()


@pytest.mark.asyncio
async def test_compiles_mjml_to_html(processor):
    html = await processor.render(MJML_DOCUMENT)

    assert "Hello MJML" in html
    assert "<html" in html.lower()
    assert "<mj-text>" not in html


@pytest.mark.asyncio
async def test_unterminated_document_fails(processor):
    with pytest.raises(MjmlCompilationError) as exc_info:
        await processor.render("<mjml><mj-body>")

    assert len(exc_info.value.errors) == 1
    assert str(exc_info.value).startswith("MJML validation errors: ")
    assert await processor.validate("<mjml><mj-body>") is False


@pytest.mark.asyncio
async def test_compiler_failure_carries_messages(processor):
    def reject(source, **options):
        raise ValueError("mj-text is not allowed here")

    processor.__dict__["_compile_fn"] = reject

    with pytest.raises(MjmlCompilationError) as exc_info:
        await processor.render(MJML_DOCUMENT)

    assert exc_info.value.errors == ["mj-text is not allowed here"]
    assert str(exc_info.value) == "MJML validation errors: mj-text is not allowed here"
    assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.asyncio
async def test_options_reach_the_compiler():
    processor = MjmlProcessor({"disable_comments": True})
    calls = []

    def record(source, **options):
        calls.append((source, options))
        return "<html></html>"

    processor.__dict__["_compile_fn"] = record

    assert await processor.render(MJML_DOCUMENT) == "<html></html>"
    assert calls == [(MJML_DOCUMENT, {"disable_comments": True})]


@pytest.mark.asyncio
async def test_validate_valid_document(processor):
    assert await processor.validate(MJML_DOCUMENT) is True
