"""Template domain types.

Scope and locale constants, engine/language keys, and the value objects
exchanged between the services and their callers.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

SYSTEM_SCOPE = "system"
DEFAULT_LOCALE = "en"
TEMPLATE_NAME_PATTERN = re.compile(r"^[a-z0-9\-_]+$")


class TemplateType(str, Enum):
    """Delivery channel a template is written for."""

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    PDF = "pdf"


class TemplateEngineKey(str, Enum):
    """Registry keys of the built-in expansion engines."""

    NUNJUCKS = "njk"
    HANDLEBARS = "hbs"
    EJS = "ejs"
    PUG = "pug"


class TemplateLanguageKey(str, Enum):
    """Registry keys of the built-in language processors."""

    MJML = "mjml"
    HTML = "html"
    MARKDOWN = "md"
    TEXT = "txt"


DEFAULT_ENGINE = TemplateEngineKey.NUNJUCKS.value


def is_system_scope(scope: str | None) -> bool:
    """Return True if the scope is the reserved system scope."""
    return scope == SYSTEM_SCOPE


def candidate_locales(locale: str | None) -> list[str]:
    """Build the ordered locale fallback list for a lookup.

    The requested locale is tried first, then the default locale.

    Args:
        locale: Requested locale, may be None or empty.

    Returns:
        Ordered list of distinct, non-empty locales.
    """
    locales = [locale, DEFAULT_LOCALE] if locale and locale != DEFAULT_LOCALE else [DEFAULT_LOCALE]
    return [candidate for candidate in locales if candidate]


@dataclass
class TemplateFilter:
    """Filter for listing effective records.

    Attributes:
        scope: Requested scope; "system" returns only system records.
        scope_id: Tenant discriminator for non-system scopes.
        type: Optional template type filter.
        locale: Optional locale filter.
        exclude_names: Names to leave out of the listing.
    """

    scope: str | None = None
    scope_id: str | None = None
    type: str | None = None
    locale: str | None = None
    exclude_names: list[str] = field(default_factory=list)


@dataclass
class RenderResult:
    """Output of rendering a content template."""

    content: str
    subject: str = ""


@dataclass
class LayoutRenderResult:
    """Output of rendering a layout template."""

    content: str
