"""Domain entities for dynatemplates.

Value objects and constants with no dependencies on infrastructure.
"""

from dynatemplates.domain.entities.template import (
    DEFAULT_ENGINE,
    DEFAULT_LOCALE,
    SYSTEM_SCOPE,
    TEMPLATE_NAME_PATTERN,
    LayoutRenderResult,
    RenderResult,
    TemplateEngineKey,
    TemplateFilter,
    TemplateLanguageKey,
    TemplateType,
    candidate_locales,
    is_system_scope,
)

__all__ = [
    "DEFAULT_ENGINE",
    "DEFAULT_LOCALE",
    "SYSTEM_SCOPE",
    "TEMPLATE_NAME_PATTERN",
    "LayoutRenderResult",
    "RenderResult",
    "TemplateEngineKey",
    "TemplateFilter",
    "TemplateLanguageKey",
    "TemplateType",
    "candidate_locales",
    "is_system_scope",
]
