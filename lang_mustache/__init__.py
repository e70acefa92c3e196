"""lang_mustache: a Mustache-style template engine with toJson, join and url helpers."""

__version__ = "0.1.0"

from lang_mustache.core.engine import (
    MustacheScriptEngine,
    RenderInvocation,
    RenderResult,
    compile_template,
    render,
)
from lang_mustache.core.templating import CompiledTemplate
from lang_mustache.config.settings import EngineOptions, Escaping
from lang_mustache.exceptions import LangMustacheError, TemplateError, TemplateSyntaxError

__all__ = [
    "__version__",
    "MustacheScriptEngine",
    "RenderInvocation",
    "RenderResult",
    "CompiledTemplate",
    "EngineOptions",
    "Escaping",
    "compile_template",
    "render",
    "LangMustacheError",
    "TemplateError",
    "TemplateSyntaxError",
]
