# lang_mustache/core/templating/renderer.py
"""
Walks a compiled node tree against a parameter mapping.

All render state lives in a RenderContext created per call, so one tree can
be rendered concurrently from several threads.
"""
from contextlib import contextmanager
from typing import Any, Iterator, List, Sequence

from lang_mustache.config.settings import Escaping
from lang_mustache.core.coercion import is_truthy, iter_elements, json_escape, to_text, url_encode
from lang_mustache.core.resolver import is_collection, resolve

from .helpers import BUILTIN_HELPERS
from .nodes import Helper, Node, Section, Text, Variable

ESCAPERS = {
    Escaping.NONE: lambda text: text,
    Escaping.JSON: json_escape,
    Escaping.URL: url_encode,
}


class RenderContext:
    """Scope stack for one render call: the root params first, innermost last."""

    def __init__(self, root: Any):
        self.scopes: List[Any] = [root]

    @contextmanager
    def scope(self, value: Any) -> Iterator[None]:
        self.scopes.append(value)
        try:
            yield
        finally:
            self.scopes.pop()


def _render_section(node: Section, context: RenderContext, out: List[str]):
    value = resolve(context.scopes, node.path)
    if node.inverted:
        if not is_truthy(value):
            _render_nodes(node.body, context, out)
        return
    if not is_truthy(value):
        return
    if is_collection(value):
        for element in iter_elements(value):
            with context.scope(element):
                _render_nodes(node.body, context, out)
        return
    with context.scope(value):
        _render_nodes(node.body, context, out)


def _render_nodes(nodes: Sequence[Node], context: RenderContext, out: List[str]):
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.text)
        elif isinstance(node, Variable):
            value = resolve(context.scopes, node.path)
            out.append(ESCAPERS[node.escaping](to_text(value)))
        elif isinstance(node, Section):
            _render_section(node, context, out)
        elif isinstance(node, Helper):
            helper = BUILTIN_HELPERS[node.kind]
            out.append(helper(node, context.scopes, lambda body: _render_to_string(body, context)))
        else:
            raise TypeError(f"unknown template node {type(node).__name__}")


def _render_to_string(nodes: Sequence[Node], context: RenderContext) -> str:
    out: List[str] = []
    _render_nodes(nodes, context, out)
    return "".join(out)


def render_tree(nodes: Sequence[Node], params: Any) -> str:
    """Renders nodes with params as the root scope; pure and re-entrant."""
    return _render_to_string(nodes, RenderContext(params))
