"""Tests for the HTML language processor."""

import pytest

from dynatemplates.infrastructure.engines.language import HtmlProcessor, InvalidHTMLError
from dynatemplates.infrastructure.engines.language.html_processor import parse_html


@pytest.fixture
def processor():
    return HtmlProcessor()


@pytest.mark.asyncio
async def test_well_formed_html_is_returned_verbatim(processor):
    content = '<div class="x"><p>Hi<br>there</p><img src="a.png"></div>'

    assert await processor.render(content) == content


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        "<ul><li>one<li>two</ul>",
        "<p>one<p>two",
        "<html><body><p>Hi</body></html>",
        "<table><tr><td>a<td>b</table>",
    ],
)
async def test_implied_end_tags_are_accepted(processor, content):
    assert await processor.render(content) == content
    assert await processor.validate(content) is True


@pytest.mark.asyncio
async def test_text_fragment_is_accepted(processor):
    assert await processor.render("Plain words & more") == "Plain words & more"


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   \n\t"])
async def test_empty_document_fails(processor, content):
    with pytest.raises(InvalidHTMLError, match="Document is empty"):
        await processor.render(content)

    assert await processor.validate(content) is False


def test_parse_html_returns_document_root():
    root = parse_html("<p>Hi</p>")

    assert root.tag == "html"
    assert root.findtext(".//p") == "Hi"
