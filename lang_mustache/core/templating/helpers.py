# lang_mustache/core/templating/helpers.py
"""
The toJson, join and url helper blocks.

Each helper receives its node, the active scopes and a callable that renders
a node list in those scopes, and returns the text to substitute for the block.
toJson and join resolve their single identifier; when their body is a nested
helper block instead, that block's output is passed through as-is.
"""
from collections.abc import Mapping
from typing import Any, Callable, Dict, Sequence

from lang_mustache.config.settings import DEFAULT_JOIN_DELIMITER
from lang_mustache.core.coercion import iter_elements, join_text, to_json, to_text, url_encode
from lang_mustache.core.resolver import is_collection, resolve

from .nodes import Helper, HelperKind, Node

RenderBody = Callable[[Sequence[Node]], str]
HelperFunction = Callable[[Helper, Sequence[Any], RenderBody], str]


def to_json_helper(node: Helper, scopes: Sequence[Any], render_body: RenderBody) -> str:
    if node.path is None:
        return render_body(node.body)
    value = resolve(scopes, node.path)
    if isinstance(value, Mapping) or is_collection(value):
        return to_json(value)
    # scalars come out in their text form, unquoted.
    return to_text(value)


def join_helper(node: Helper, scopes: Sequence[Any], render_body: RenderBody) -> str:
    if node.path is None:
        return render_body(node.body)
    delimiter = node.option("delimiter", DEFAULT_JOIN_DELIMITER)
    return join_text(iter_elements(resolve(scopes, node.path)), delimiter)


def url_helper(node: Helper, scopes: Sequence[Any], render_body: RenderBody) -> str:
    return url_encode(render_body(node.body))


# Dictionary of helpers dispatched by the renderer
BUILTIN_HELPERS: Dict[HelperKind, HelperFunction] = {
    HelperKind.TO_JSON: to_json_helper,
    HelperKind.JOIN: join_helper,
    HelperKind.URL: url_helper,
}
