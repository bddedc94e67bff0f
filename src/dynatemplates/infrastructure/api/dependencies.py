"""FastAPI dependencies for the template services.

The engine registry is built once at application startup and stored on the
application state; services are created per request around the request's
database session.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dynatemplates.domain.services import TemplateLayoutService, TemplateService
from dynatemplates.infrastructure.engines import EngineRegistry
from dynatemplates.infrastructure.persistence.database import get_db_session


def get_engine_registry(request: Request) -> EngineRegistry:
    """Get the engine registry built for this application."""
    return request.app.state.engine_registry


async def get_template_layout_service(
    db: AsyncSession = Depends(get_db_session),
    engine_registry: EngineRegistry = Depends(get_engine_registry),
) -> TemplateLayoutService:
    """Create a layout service bound to the request session."""
    return TemplateLayoutService(db, engine_registry)


async def get_template_service(
    db: AsyncSession = Depends(get_db_session),
    engine_registry: EngineRegistry = Depends(get_engine_registry),
    layout_service: TemplateLayoutService = Depends(get_template_layout_service),
) -> TemplateService:
    """Create a template service bound to the request session."""
    return TemplateService(db, engine_registry, layout_service=layout_service)


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
TemplateServiceDep = Annotated[TemplateService, Depends(get_template_service)]
TemplateLayoutServiceDep = Annotated[TemplateLayoutService, Depends(get_template_layout_service)]
