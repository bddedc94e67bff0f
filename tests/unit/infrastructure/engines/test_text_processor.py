"""Tests for the plain text and Markdown processors."""

import pytest

from dynatemplates.infrastructure.engines.language import MarkdownProcessor, TextProcessor


@pytest.mark.asyncio
@pytest.mark.parametrize("processor_class", [TextProcessor, MarkdownProcessor])
async def test_identity_pass_through(processor_class):
    processor = processor_class()
    content = "# Title\n\n<b>not touched</b> *at all*"

    assert await processor.render(content, {"ignored": True}) == content
    assert await processor.validate(content) is True
