"""
Templating module for lang_mustache.

Provides the TemplateCompiler that turns template text into an immutable
CompiledTemplate, and render_tree for walking a compiled node tree.
"""
from .compiler import TemplateCompiler, compile_source
from .template import CompiledTemplate
from .renderer import render_tree
from .nodes import HelperKind

__all__ = [
    "TemplateCompiler",
    "compile_source",
    "CompiledTemplate",
    "render_tree",
    "HelperKind",
]
