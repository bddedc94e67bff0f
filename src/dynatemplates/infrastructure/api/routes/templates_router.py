"""Template management and rendering API routes.

Caller authorization is enforced upstream; the ``can_update_system`` and
``can_delete_system`` flags are passed through to the service unchanged.
"""

from fastapi import APIRouter, Query, status

from dynatemplates.core.exceptions import TemplateNotFoundError
from dynatemplates.core.logging import get_logger
from dynatemplates.domain.entities.template import TemplateFilter
from dynatemplates.infrastructure.api.dependencies import DbSession, TemplateServiceDep
from dynatemplates.infrastructure.api.schemas.template_schemas import (
    RenderedContentResponse,
    TemplateContentRenderRequest,
    TemplateCreate,
    TemplateRenderRequest,
    TemplateRenderResponse,
    TemplateResponse,
    TemplateUpdate,
)

router = APIRouter(tags=["templates"])
logger = get_logger(__name__)


@router.get("")
async def list_templates(
    service: TemplateServiceDep,
    scope: str | None = None,
    scope_id: str | None = None,
    type: str | None = None,
    locale: str | None = None,
    exclude_names: list[str] | None = Query(default=None),
) -> list[TemplateResponse]:
    """List effective templates for a scope.

    Scoped templates replace the system templates they shadow.
    """
    templates = await service.list_records(
        TemplateFilter(
            scope=scope,
            scope_id=scope_id,
            type=type,
            locale=locale,
            exclude_names=exclude_names or [],
        )
    )
    return [TemplateResponse.model_validate(t) for t in templates]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: TemplateCreate,
    service: TemplateServiceDep,
    db: DbSession,
) -> TemplateResponse:
    """Create a system template.

    Raises:
        TemplateForbiddenError: 403 if the scope is not "system".
        TemplateConflictError: 409 if the system template already exists.
    """
    template = await service.create_record(template_data.model_dump(mode="json"))
    await db.commit()
    return TemplateResponse.model_validate(template)


@router.post("/render")
async def render_template(
    render_request: TemplateRenderRequest,
    service: TemplateServiceDep,
) -> TemplateRenderResponse:
    """Render a stored template by name with scope and locale fallback."""
    result = await service.render(
        render_request.name,
        scope=render_request.scope,
        scope_id=render_request.scope_id,
        locale=render_request.locale,
        data=render_request.data,
    )
    return TemplateRenderResponse(content=result.content, subject=result.subject)


@router.post("/render/content")
async def render_template_content(
    render_request: TemplateContentRenderRequest,
    service: TemplateServiceDep,
) -> RenderedContentResponse:
    """Render raw template source, optionally wrapped in a stored layout."""
    content = await service.render_content(
        render_request.content,
        language=render_request.language,
        engine=render_request.engine,
        data=render_request.data,
        layout_id=render_request.template_layout_id,
    )
    return RenderedContentResponse(content=content)


@router.get("/{template_id}")
async def get_template(template_id: str, service: TemplateServiceDep) -> TemplateResponse:
    """Get a template by ID.

    Raises:
        TemplateNotFoundError: 404 if the template does not exist.
    """
    template = await service.get_by_id(template_id)
    if template is None:
        raise TemplateNotFoundError(f"Template not found: {template_id}", id=template_id)
    return TemplateResponse.model_validate(template)


@router.put("/{template_id}")
async def update_template(
    template_id: str,
    update_data: TemplateUpdate,
    service: TemplateServiceDep,
    db: DbSession,
    can_update_system: bool = False,
) -> TemplateResponse:
    """Update a template.

    A protected system template with a target ``scope`` in the body is
    overwritten into that scope instead.
    """
    template = await service.update_record(
        template_id,
        update_data.model_dump(exclude_unset=True, mode="json"),
        can_update_system=can_update_system,
    )
    await db.commit()
    logger.info("Template updated via API", template_id=template_id, result_id=template.id)
    return TemplateResponse.model_validate(template)


@router.post("/{template_id}/overwrite")
async def overwrite_template(
    template_id: str,
    update_data: TemplateUpdate,
    service: TemplateServiceDep,
    db: DbSession,
) -> TemplateResponse:
    """Overwrite a system template into the scope named in the body."""
    template = await service.overwrite_system_record(
        template_id, update_data.model_dump(exclude_unset=True, mode="json")
    )
    await db.commit()
    return TemplateResponse.model_validate(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    service: TemplateServiceDep,
    db: DbSession,
    can_delete_system: bool = False,
) -> None:
    """Delete a template.

    Raises:
        TemplateNotFoundError: 404 if the template does not exist.
        TemplateForbiddenError: 403 for a protected system template.
    """
    await service.delete_record(template_id, can_delete_system=can_delete_system)
    await db.commit()
