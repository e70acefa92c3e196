# lang_mustache/core/templating/compiler.py
"""
Compiles template text into an immutable node tree.

Supported tags: ``{{name}}``, ``{{{name}}}``/``{{&name}}``, sections
``{{#name}}..{{/name}}``, inverted sections ``{{^name}}..{{/name}}`` and
the ``toJson``, ``join`` and ``url`` helper blocks.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from lang_mustache.logging_setup import get_logger
from lang_mustache.config.settings import EngineOptions, Escaping
from lang_mustache.core.resolver import VariablePath
from lang_mustache.exceptions import TemplateSyntaxError

from .nodes import Helper, HelperKind, Node, Section, Text, Variable
from .template import CompiledTemplate

log = get_logger(__name__)

OPEN_DELIMITER = "{{"

# {{{name}}} closes with three braces, every other tag with two.
_TAG_RE = re.compile(r"\{\{(\{)?(.*?)(?(1)\}\}\}|\}\})", re.DOTALL)
_IDENTIFIER_RE = re.compile(r"[^\s{}]+")
_OPTION_RE = re.compile(r"""\s*([A-Za-z_]\w*)\s*=\s*(?:'([^']*)'|"([^"]*)")\s*""")

HELPER_OPTIONS = {
    HelperKind.TO_JSON: frozenset(),
    HelperKind.JOIN: frozenset({"delimiter"}),
    HelperKind.URL: frozenset(),
}
UNSUPPORTED_SIGILS = {"!": "comment", ">": "partial", "=": "set delimiter"}


@dataclass
class _OpenBlock:
    tag_text: str
    line: int
    body_start: int
    inverted: bool = False
    helper: Optional[HelperKind] = None
    options: Tuple[Tuple[str, str], ...] = ()
    body: List[Node] = field(default_factory=list)


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def _parse_identifier(name: str, line: int) -> VariablePath:
    if not _IDENTIFIER_RE.fullmatch(name):
        raise TemplateSyntaxError(f"Invalid identifier [{name}]", line)
    return VariablePath.parse(name)


def _parse_helper_options(kind: HelperKind, raw_options: str, line: int) -> Tuple[Tuple[str, str], ...]:
    options: List[Tuple[str, str]] = []
    position = 0
    while position < len(raw_options):
        match = _OPTION_RE.match(raw_options, position)
        if not match:
            raise TemplateSyntaxError(
                f"Invalid options [{raw_options.strip()}] for Mustache function [{kind.value}]", line)
        key = match.group(1)
        if key not in HELPER_OPTIONS[kind]:
            raise TemplateSyntaxError(f"Unknown option [{key}] for Mustache function [{kind.value}]", line)
        value = match.group(2) if match.group(2) is not None else match.group(3)
        options.append((key, value))
        position = match.end()
    return tuple(options)


def _single_identifier_helper(block: _OpenBlock, source: str) -> Helper:
    """Builds a toJson/join node whose body must be exactly one identifier."""
    kind = block.helper
    error = f"Mustache function [{kind.value}] must contain one and only one identifier"
    codes = [node for node in block.body if not (isinstance(node, Text) and not node.text.strip())]
    if len(codes) != 1:
        raise TemplateSyntaxError(error, block.line)

    code = codes[0]
    if isinstance(code, Helper):
        return Helper(kind=kind, options=block.options, path=None, body=(code,), source=source)
    if isinstance(code, Variable):
        path = code.path
    elif isinstance(code, Text):
        name = code.text.strip()
        if not _IDENTIFIER_RE.fullmatch(name):
            raise TemplateSyntaxError(error, block.line)
        path = VariablePath.parse(name)
    else:
        raise TemplateSyntaxError(error, block.line)

    if path.is_current_scope and kind is not HelperKind.TO_JSON:
        raise TemplateSyntaxError(error, block.line)
    return Helper(kind=kind, options=block.options, path=path, body=(), source=source)


class TemplateCompiler:
    """Parses template text into a CompiledTemplate for the given options."""

    def __init__(self, options: Optional[EngineOptions] = None):
        self.options = options or EngineOptions()

    def compile(self, text: str, name: str = "inline") -> CompiledTemplate:
        try:
            nodes = self._parse(text)
        except TemplateSyntaxError as e:
            log.error("template_compilation_failed", template=name, error=str(e))
            raise
        log.debug("template_compiled", template=name, top_level_nodes=len(nodes))
        return CompiledTemplate(name=name, source=text, nodes=nodes, options=self.options)

    def _parse(self, text: str) -> Tuple[Node, ...]:
        root: List[Node] = []
        stack: List[_OpenBlock] = []
        position = 0

        def emit(node: Node):
            (stack[-1].body if stack else root).append(node)

        while True:
            start = text.find(OPEN_DELIMITER, position)
            if start == -1:
                if position < len(text):
                    emit(Text(text[position:]))
                break
            if start > position:
                emit(Text(text[position:start]))

            line = _line_of(text, start)
            match = _TAG_RE.match(text, start)
            if not match:
                raise TemplateSyntaxError("Unterminated tag", line)
            position = match.end()
            triple, content = bool(match.group(1)), match.group(2).strip()
            if not content:
                raise TemplateSyntaxError("Empty tag", line)

            if triple:
                emit(Variable(_parse_identifier(content, line), Escaping.NONE))
                continue

            sigil, rest = content[0], content[1:].strip()
            if sigil in UNSUPPORTED_SIGILS:
                raise TemplateSyntaxError(f"Unsupported {UNSUPPORTED_SIGILS[sigil]} tag [{content}]", line)
            if sigil == "&":
                emit(Variable(_parse_identifier(rest, line), Escaping.NONE))
            elif sigil in "#^":
                stack.append(self._open_block(sigil, rest, line, body_start=position))
            elif sigil == "/":
                if not stack:
                    raise TemplateSyntaxError(f"Closing unopened tag [{rest}]", line)
                block = stack.pop()
                if block.tag_text != rest:
                    raise TemplateSyntaxError(f"Mismatched start/end tags: {block.tag_text} != {rest}", line)
                emit(self._close_block(block, text[block.body_start:start]))
            else:
                emit(Variable(_parse_identifier(content, line), self.options.escaping))

        if stack:
            block = stack[-1]
            raise TemplateSyntaxError(f"Unclosed tag [{block.tag_text}]", block.line)
        return tuple(root)

    def _open_block(self, sigil: str, tag_text: str, line: int, body_start: int) -> _OpenBlock:
        if not tag_text:
            raise TemplateSyntaxError("Empty section tag", line)
        parts = tag_text.split(None, 1)
        tag_name, raw_options = parts[0], (parts[1] if len(parts) > 1 else "")
        helper = HelperKind.from_tag_name(tag_name) if sigil == "#" else None
        if helper is not None:
            options = _parse_helper_options(helper, raw_options, line)
            return _OpenBlock(tag_text=tag_text, line=line, body_start=body_start,
                              helper=helper, options=options)
        _parse_identifier(tag_text, line)
        return _OpenBlock(tag_text=tag_text, line=line, body_start=body_start, inverted=(sigil == "^"))

    def _close_block(self, block: _OpenBlock, source: str) -> Node:
        if block.helper is None:
            return Section(path=VariablePath.parse(block.tag_text), body=tuple(block.body),
                           inverted=block.inverted)
        if block.helper is HelperKind.URL:
            return Helper(kind=block.helper, options=block.options, path=None,
                          body=tuple(block.body), source=source)
        return _single_identifier_helper(block, source)


def compile_source(text: str, options: Optional[EngineOptions] = None, name: str = "inline") -> CompiledTemplate:
    return TemplateCompiler(options).compile(text, name=name)
