# lang_mustache/core/templating/nodes.py
"""
Node types of a compiled template tree. All nodes are frozen and hold
tuples, so a compiled tree can be rendered from many threads at once.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from lang_mustache.config.settings import Escaping
from lang_mustache.core.resolver import VariablePath


class HelperKind(Enum):
    TO_JSON = "toJson"
    JOIN = "join"
    URL = "url"

    @classmethod
    def from_tag_name(cls, name: str) -> Optional["HelperKind"]:
        for kind in cls:
            if kind.value == name:
                return kind
        return None


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Variable:
    path: VariablePath
    escaping: Escaping = Escaping.NONE


@dataclass(frozen=True)
class Section:
    path: VariablePath
    body: Tuple["Node", ...]
    inverted: bool = False


@dataclass(frozen=True)
class Helper:
    """A toJson/join/url block.

    ``path`` is the single identifier of toJson and join blocks; when their
    body is a nested helper instead, ``path`` is None and ``body`` holds it.
    url blocks keep their whole compiled body. ``source`` is the raw text
    between the open and close tags.
    """
    kind: HelperKind
    options: Tuple[Tuple[str, str], ...]
    path: Optional[VariablePath]
    body: Tuple["Node", ...]
    source: str

    def option(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for key, value in self.options:
            if key == name:
                return value
        return default


Node = Union[Text, Variable, Section, Helper]
