"""Template layout management and rendering API routes."""

from fastapi import APIRouter, Query, status

from dynatemplates.core.exceptions import TemplateNotFoundError
from dynatemplates.domain.entities.template import TemplateFilter
from dynatemplates.infrastructure.api.dependencies import DbSession, TemplateLayoutServiceDep
from dynatemplates.infrastructure.api.schemas.template_schemas import (
    RenderedContentResponse,
    TemplateLayoutContentRenderRequest,
    TemplateLayoutCreate,
    TemplateLayoutResponse,
    TemplateLayoutUpdate,
    TemplateRenderRequest,
)

router = APIRouter(tags=["template-layouts"])


@router.get("")
async def list_template_layouts(
    service: TemplateLayoutServiceDep,
    scope: str | None = None,
    scope_id: str | None = None,
    type: str | None = None,
    locale: str | None = None,
    exclude_names: list[str] | None = Query(default=None),
) -> list[TemplateLayoutResponse]:
    """List effective layouts for a scope."""
    layouts = await service.list_records(
        TemplateFilter(
            scope=scope,
            scope_id=scope_id,
            type=type,
            locale=locale,
            exclude_names=exclude_names or [],
        )
    )
    return [TemplateLayoutResponse.model_validate(layout) for layout in layouts]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_template_layout(
    layout_data: TemplateLayoutCreate,
    service: TemplateLayoutServiceDep,
    db: DbSession,
) -> TemplateLayoutResponse:
    """Create a system layout."""
    layout = await service.create_record(layout_data.model_dump(mode="json"))
    await db.commit()
    return TemplateLayoutResponse.model_validate(layout)


@router.post("/render")
async def render_template_layout(
    render_request: TemplateRenderRequest,
    service: TemplateLayoutServiceDep,
) -> RenderedContentResponse:
    """Render a stored layout by name."""
    result = await service.render(
        render_request.name,
        scope=render_request.scope,
        scope_id=render_request.scope_id,
        locale=render_request.locale,
        data=render_request.data,
    )
    return RenderedContentResponse(content=result.content)


@router.post("/render/content")
async def render_template_layout_content(
    render_request: TemplateLayoutContentRenderRequest,
    service: TemplateLayoutServiceDep,
) -> RenderedContentResponse:
    """Render raw layout source."""
    content = await service.render_content(
        render_request.content,
        language=render_request.language,
        engine=render_request.engine,
        data=render_request.data,
    )
    return RenderedContentResponse(content=content)


@router.get("/{layout_id}")
async def get_template_layout(
    layout_id: str, service: TemplateLayoutServiceDep
) -> TemplateLayoutResponse:
    """Get a layout by ID."""
    layout = await service.get_by_id(layout_id)
    if layout is None:
        raise TemplateNotFoundError(f"Template layout not found: {layout_id}", id=layout_id)
    return TemplateLayoutResponse.model_validate(layout)


@router.put("/{layout_id}")
async def update_template_layout(
    layout_id: str,
    update_data: TemplateLayoutUpdate,
    service: TemplateLayoutServiceDep,
    db: DbSession,
    can_update_system: bool = False,
) -> TemplateLayoutResponse:
    """Update a layout, overwriting a protected system layout when a scope is given."""
    layout = await service.update_record(
        layout_id,
        update_data.model_dump(exclude_unset=True, mode="json"),
        can_update_system=can_update_system,
    )
    await db.commit()
    return TemplateLayoutResponse.model_validate(layout)


@router.post("/{layout_id}/overwrite")
async def overwrite_template_layout(
    layout_id: str,
    update_data: TemplateLayoutUpdate,
    service: TemplateLayoutServiceDep,
    db: DbSession,
) -> TemplateLayoutResponse:
    """Overwrite a system layout into the scope named in the body."""
    layout = await service.overwrite_system_record(
        layout_id, update_data.model_dump(exclude_unset=True, mode="json")
    )
    await db.commit()
    return TemplateLayoutResponse.model_validate(layout)


@router.delete("/{layout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template_layout(
    layout_id: str,
    service: TemplateLayoutServiceDep,
    db: DbSession,
    can_delete_system: bool = False,
) -> None:
    """Delete a layout."""
    await service.delete_record(layout_id, can_delete_system=can_delete_system)
    await db.commit()
