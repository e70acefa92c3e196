# lang_mustache/core/engine.py
"""
The script-engine facade: compile template text once, bind the compiled
template to parameters, and run the binding to get UTF-8 output bytes.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from lang_mustache.logging_setup import get_logger
from lang_mustache.config.settings import EngineOptions
from lang_mustache.core.templating import CompiledTemplate, TemplateCompiler
from lang_mustache.exceptions import ParamsError, TemplateError

log = get_logger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """Rendered output as UTF-8 bytes."""
    content: bytes

    def utf8_to_string(self) -> str:
        return self.content.decode("utf-8")

    def __bytes__(self) -> bytes:
        return self.content

    def __len__(self) -> int:
        return len(self.content)


class RenderInvocation:
    """A compiled template bound to one parameter mapping. run() is repeatable."""

    def __init__(self, compiled: CompiledTemplate, params: Optional[Mapping[str, Any]]):
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise ParamsError(f"template params must be a mapping, got {type(params).__name__}")
        self.compiled = compiled
        # top-level keys are copied; nested values stay caller-owned.
        self.params = dict(params)

    def run(self) -> RenderResult:
        rendered = self.compiled.render(self.params)
        log.debug("template_rendered", template=self.compiled.name, output_chars=len(rendered))
        return RenderResult(rendered.encode("utf-8"))


class MustacheScriptEngine:
    """Registers under NAME with a host; holds the default compile options."""

    NAME = "mustache"

    def __init__(self, options: Optional[EngineOptions] = None):
        self.options = options or EngineOptions()
        self.log = get_logger(f"{__name__}.{self.__class__.__name__}")

    def compile(self, template: Optional[str], options: Optional[Mapping[str, Any]] = None,
                name: str = "inline") -> CompiledTemplate:
        """Compiles template text, failing fast on empty input or syntax errors.

        ``options`` may override the engine's escaping for this template, using
        the keys understood by EngineOptions.from_mapping.
        """
        if template is None or template == "":
            raise TemplateError("cannot compile null or empty template")
        compile_options = EngineOptions.from_mapping(options) if options else self.options
        self.log.debug("compiling_template", template=name, escaping=compile_options.escaping.value)
        return TemplateCompiler(compile_options).compile(template, name=name)

    def bind(self, compiled: CompiledTemplate, params: Optional[Mapping[str, Any]] = None) -> RenderInvocation:
        return RenderInvocation(compiled, params)


def compile_template(template: str, **options: Any) -> CompiledTemplate:
    return MustacheScriptEngine().compile(template, options or None)


def render(template: str, params: Optional[Mapping[str, Any]] = None, **options: Any) -> RenderResult:
    engine = MustacheScriptEngine()
    return engine.bind(engine.compile(template, options or None), params).run()
