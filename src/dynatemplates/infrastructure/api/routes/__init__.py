"""API route modules."""

from dynatemplates.infrastructure.api.routes.template_layouts_router import (
    router as template_layouts_router,
)
from dynatemplates.infrastructure.api.routes.templates_router import (
    router as templates_router,
)

__all__ = [
    "template_layouts_router",
    "templates_router",
]
