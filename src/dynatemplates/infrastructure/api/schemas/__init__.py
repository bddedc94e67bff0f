"""API request and response schemas."""

from dynatemplates.infrastructure.api.schemas.template_schemas import (
    RenderedContentResponse,
    TemplateContentRenderRequest,
    TemplateCreate,
    TemplateLayoutContentRenderRequest,
    TemplateLayoutCreate,
    TemplateLayoutResponse,
    TemplateLayoutUpdate,
    TemplateRenderRequest,
    TemplateRenderResponse,
    TemplateResponse,
    TemplateUpdate,
)

__all__ = [
    "RenderedContentResponse",
    "TemplateContentRenderRequest",
    "TemplateCreate",
    "TemplateLayoutContentRenderRequest",
    "TemplateLayoutCreate",
    "TemplateLayoutResponse",
    "TemplateLayoutUpdate",
    "TemplateRenderRequest",
    "TemplateRenderResponse",
    "TemplateResponse",
    "TemplateUpdate",
]
