"""Built-in language processors."""

from dynatemplates.infrastructure.engines.language.html_processor import (
    HtmlProcessor,
    InvalidHTMLError,
)
from dynatemplates.infrastructure.engines.language.mjml_processor import (
    MjmlCompilationError,
    MjmlProcessor,
)
from dynatemplates.infrastructure.engines.language.text_processor import (
    MarkdownProcessor,
    TextProcessor,
)

__all__ = [
    "HtmlProcessor",
    "InvalidHTMLError",
    "MarkdownProcessor",
    "MjmlCompilationError",
    "MjmlProcessor",
    "TextProcessor",
]
