# tests/conftest.py
import pytest

from lang_mustache.core.engine import MustacheScriptEngine, RenderResult


@pytest.fixture
def engine() -> MustacheScriptEngine:
    return MustacheScriptEngine()


@pytest.fixture
def render_script(engine):
    """Compiles and runs a template, returning the output as text."""
    def _render(template, params, **options):
        compiled = engine.compile(template, options or None)
        result = engine.bind(compiled, params).run()
        assert isinstance(result, RenderResult)
        return result.utf8_to_string()
    return _render
