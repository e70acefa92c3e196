# lang_mustache/core/templating/template.py
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from lang_mustache.config.settings import EngineOptions

from .nodes import Node
from .renderer import render_tree


@dataclass(frozen=True)
class CompiledTemplate:
    """The parsed, immutable form of a template; render it as often as needed."""
    name: str
    source: str
    nodes: Tuple[Node, ...]
    options: EngineOptions

    def render(self, params: Optional[Mapping[str, Any]] = None) -> str:
        return render_tree(self.nodes, params if params is not None else {})
