"""HTML language processor.

Content is parsed with the lxml HTML parser, which applies the usual implied
end tag rules. Content the parser accepts is re-emitted verbatim; an empty
document or a fatal parser error fails the render.
"""

from typing import Any

from lxml import etree

from dynatemplates.domain.entities.template import TemplateLanguageKey
from dynatemplates.infrastructure.engines.base import LanguageProcessor


class InvalidHTMLError(ValueError):
    """Raised when content cannot be parsed as HTML."""


def parse_html(content: str, **parser_options: Any) -> etree._Element:
    """Parse HTML content and return the document root.

    Args:
        content: HTML source.
        **parser_options: Options for ``lxml.etree.HTMLParser``.

    Raises:
        InvalidHTMLError: If the document is empty or the parser fails.
    """
    if not content.strip():
        raise InvalidHTMLError("Document is empty")

    parser = etree.HTMLParser(**parser_options)
    try:
        root = etree.fromstring(content, parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise InvalidHTMLError(str(e)) from e

    fatal_errors = parser.error_log.filter_from_fatals()
    if fatal_errors:
        raise InvalidHTMLError(fatal_errors.last_error.message)
    if root is None:
        raise InvalidHTMLError("Document is empty")
    return root


class HtmlProcessor(LanguageProcessor):
    """HTML processor: validates and passes content through unchanged."""

    engine_name = TemplateLanguageKey.HTML.value

    async def render(self, content: str, data: dict[str, Any] | None = None) -> str:
        parse_html(content, **self.options)
        return content

    async def validate(self, content: str) -> bool:
        try:
            parse_html(content, **self.options)
            return True
        except Exception:
            return False
