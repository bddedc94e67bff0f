"""Built-in expansion engines."""

from dynatemplates.infrastructure.engines.expansion.handlebars_engine import HandlebarsEngine
from dynatemplates.infrastructure.engines.expansion.jinja_engine import JinjaEngine
from dynatemplates.infrastructure.engines.expansion.mako_engine import MakoEngine
from dynatemplates.infrastructure.engines.expansion.pug_engine import PugEngine

__all__ = ["HandlebarsEngine", "JinjaEngine", "MakoEngine", "PugEngine"]
