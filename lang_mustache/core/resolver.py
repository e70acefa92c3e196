# lang_mustache/core/resolver.py
"""
Resolves dotted variable paths (``data.0.key``, ``items.size``, ``.``)
against a stack of render scopes.

Lookup of the first segment walks the scopes from innermost to outermost;
the remaining segments are resolved from whatever value matched. A miss at
any point yields ``MISSING`` instead of raising, so templates never need to
guard optional fields.
"""
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any, Tuple

CURRENT_SCOPE = "."
SIZE_KEYWORD = "size"


class _Missing:
    """Sentinel for a path that did not resolve."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def is_sequence(value: Any) -> bool:
    # str/bytes are Sequences to the abc, but scalars to templates.
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_collection(value: Any) -> bool:
    return is_sequence(value) or isinstance(value, Set)


@dataclass(frozen=True)
class VariablePath:
    raw: str
    segments: Tuple[str, ...]

    @classmethod
    def parse(cls, raw: str) -> "VariablePath":
        text = raw.strip()
        if text == CURRENT_SCOPE:
            return cls(raw=text, segments=())
        return cls(raw=text, segments=tuple(text.split(".")))

    @property
    def is_current_scope(self) -> bool:
        return not self.segments

    def __str__(self) -> str:
        return self.raw


def resolve_segment(value: Any, segment: str) -> Any:
    """Applies a single path segment to value, returning MISSING on a miss."""
    if isinstance(value, Mapping):
        try:
            return value[segment]
        except (KeyError, TypeError):
            return MISSING
    if is_sequence(value) or isinstance(value, Set):
        if segment == SIZE_KEYWORD:
            return len(value)
        # str.isdigit also accepts digits such as "²" that int() rejects.
        if not (segment.isascii() and segment.isdigit()):
            return MISSING
        index = int(segment)
        if index >= len(value):
            return MISSING
        if isinstance(value, Set):
            # position in the set's iteration order; only stable within one render.
            for position, element in enumerate(value):
                if position == index:
                    return element
            return MISSING
        return value[index]
    return MISSING


def resolve(scopes: Sequence[Any], path: VariablePath) -> Any:
    """Resolves path against scopes (outermost first, innermost last)."""
    if not scopes:
        return MISSING
    if path.is_current_scope:
        return scopes[-1]

    first, rest = path.segments[0], path.segments[1:]
    for scope in reversed(scopes):
        current = resolve_segment(scope, first)
        if current is MISSING:
            continue
        for segment in rest:
            current = resolve_segment(current, segment)
            if current is MISSING:
                return MISSING
        return current
    return MISSING
