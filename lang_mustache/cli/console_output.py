"""
Builds the console view of a compiled template's node tree (stderr/stdout
via rich).
"""
from typing import Sequence
from rich.tree import Tree
from rich.markup import escape

from lang_mustache.core.templating import CompiledTemplate
from lang_mustache.core.templating.nodes import Helper, Node, Section, Text, Variable

def _add_nodes(parent: Tree, nodes: Sequence[Node]):
    for node in nodes:
        if isinstance(node, Text):
            parent.add(f"[dim]text[/dim] {escape(repr(node.text))}")
        elif isinstance(node, Variable):
            parent.add(f"[cyan]variable[/cyan] {escape(str(node.path))} [dim](escaping={node.escaping.value})[/dim]")
        elif isinstance(node, Section):
            label = "inverted section" if node.inverted else "section"
            _add_nodes(parent.add(f"[green]{label}[/green] {escape(str(node.path))}"), node.body)
        elif isinstance(node, Helper):
            options = " ".join(f"{k}={v!r}" for k, v in node.options)
            target = f" -> {escape(str(node.path))}" if node.path is not None else ""
            branch = parent.add(f"[magenta]helper[/magenta] {node.kind.value}{escape(' ' + options) if options else ''}{target} [dim]{escape(repr(node.source))}[/dim]")
            _add_nodes(branch, node.body)

def build_node_tree(compiled: CompiledTemplate) -> Tree:
    """Returns a rich Tree describing every node of the compiled template."""
    tree = Tree(f"[bold]template[/bold] {escape(compiled.name)} [dim](escaping={compiled.options.escaping.value})[/dim]")
    _add_nodes(tree, compiled.nodes)
    return tree
