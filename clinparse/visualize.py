from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from clinparse.core.data_structures import TerminalNode, TreebankNode


def _label(node: TreebankNode, text: str) -> str:
    span = f"[dim][{node.begin}, {node.end})[/dim]"
    if isinstance(node, TerminalNode):
        return f"[green]{node.node_type}[/green] #{node.index} '{escape(text[node.begin:node.end])}' {span}"
    tags = f" [magenta]-{'-'.join(node.node_tags)}[/magenta]" if node.node_tags else ""
    return f"[bold cyan]{node.node_type}[/bold cyan]{tags} head={node.head_index} {span}"


def render_tree(node: TreebankNode, text: str, tree: Optional[Tree] = None) -> Tree:
    """Дерево составляющих в виде rich.tree.Tree (для отладки в консоли)."""
    branch = Tree(_label(node, text)) if tree is None else tree.add(_label(node, text))
    for child in node.children:
        render_tree(child, text, branch)
    return branch


def print_tree(node: TreebankNode, text: str, console: Optional[Console] = None):
    (console or Console()).print(render_tree(node, text))
