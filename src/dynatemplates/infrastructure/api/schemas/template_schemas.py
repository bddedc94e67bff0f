"""Pydantic schemas for template and layout API endpoints.

Defines request and response models for template management and rendering.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dynatemplates.domain.entities.template import (
    DEFAULT_ENGINE,
    DEFAULT_LOCALE,
    SYSTEM_SCOPE,
    TemplateType,
)

NAME_PATTERN = r"^[a-z0-9\-_]+$"


class TemplateLayoutCreate(BaseModel):
    """Request schema for creating a system layout.

    Attributes:
        name: Layout name (lowercase letters, digits, dashes, underscores).
        display_name: Optional human-readable name.
        description: Optional description.
        type: Optional delivery channel.
        engine: Expansion engine key.
        language: Optional language processor key.
        content: Layout source; ``content`` inside it is the wrapped output.
        scope: Must be "system" for direct creation.
        scope_id: Ignored for system records.
        locale: Locale code.
        preview_context: Sample data for previews.
        is_active: Whether the layout is active.
    """

    name: str = Field(..., min_length=1, max_length=255, pattern=NAME_PATTERN)
    display_name: str | None = None
    description: str | None = None
    type: TemplateType | None = None
    engine: str = DEFAULT_ENGINE
    language: str | None = None
    content: str = ""
    scope: str = SYSTEM_SCOPE
    scope_id: str | None = None
    locale: str = DEFAULT_LOCALE
    preview_context: dict[str, Any] | None = None
    is_active: bool = True


class TemplateCreate(TemplateLayoutCreate):
    """Request schema for creating a system template.

    Attributes:
        subject: Optional subject source, expanded with the same engine.
        template_layout_name: Optional name of the wrapping layout.
    """

    subject: str | None = None
    template_layout_name: str | None = None


class TemplateLayoutUpdate(BaseModel):
    """Request schema for updating or overwriting a layout.

    Only fields present in the request are applied. ``scope`` and
    ``scope_id`` select the target scope when a system layout is overwritten.
    """

    display_name: str | None = None
    description: str | None = None
    type: TemplateType | None = None
    engine: str | None = None
    language: str | None = None
    content: str | None = None
    scope: str | None = None
    scope_id: str | None = None
    locale: str | None = None
    preview_context: dict[str, Any] | None = None
    is_active: bool | None = None


class TemplateUpdate(TemplateLayoutUpdate):
    """Request schema for updating or overwriting a template."""

    subject: str | None = None
    template_layout_name: str | None = None


class TemplateLayoutResponse(BaseModel):
    """Response schema for layout data."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str | None
    description: str | None
    type: str | None
    engine: str
    language: str | None
    content: str
    scope: str
    scope_id: str | None
    locale: str
    preview_context: dict[str, Any] | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TemplateResponse(TemplateLayoutResponse):
    """Response schema for template data."""

    subject: str | None
    template_layout_name: str | None


class TemplateRenderRequest(BaseModel):
    """Request schema for rendering a stored record by name.

    Attributes:
        name: Record name.
        scope: Requested scope (defaults to "system").
        scope_id: Tenant discriminator.
        locale: Requested locale.
        data: Template variables.
    """

    name: str = Field(..., min_length=1)
    scope: str | None = None
    scope_id: str | None = None
    locale: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class TemplateRenderResponse(BaseModel):
    """Response schema for a rendered template."""

    content: str
    subject: str = ""


class TemplateLayoutContentRenderRequest(BaseModel):
    """Request schema for rendering raw layout source.

    Attributes:
        content: Layout source.
        language: Optional language processor key.
        engine: Optional expansion engine key.
        data: Template variables.
    """

    content: str = Field(..., min_length=1)
    language: str | None = None
    engine: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class TemplateContentRenderRequest(TemplateLayoutContentRenderRequest):
    """Request schema for rendering raw template source.

    Attributes:
        template_layout_id: Optional ID of a stored layout wrapping the content.
    """

    template_layout_id: str | None = None


class RenderedContentResponse(BaseModel):
    """Response schema for rendered content."""

    content: str
