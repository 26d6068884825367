"""
Conversion of the flat markdown-it token stream into a nested node tree,
plus helpers to walk and serialize it.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Sequence

from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

from .model import AnyNode, ComponentOccurrence, Node

# Token.meta key holding the ComponentOccurrence of a component token
OCCURRENCE_META = "occurrence"

BUILTIN_NODE_TYPES = (
    "blockquote",
    "heading",
    "bullet_list",
    "ordered_list",
    "list_item",
    "paragraph",
    "fence",
    "code_block",
    "code_inline",
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
    "html_block",
    "html_inline",
    "hr",
    "link",
    "image",
    "text",
    "softbreak",
    "hardbreak",
    "strong",
    "em",
    "s",
)


def tokens_to_nodes(tokens: Sequence[Token]) -> List[AnyNode]:
    """
    Nests a markdown-it token stream.

    `inline` wrapper tokens are spliced away, component tokens are replaced by
    their ComponentOccurrence.
    """
    if not tokens:
        return []
    return _convert_children(SyntaxTreeNode(tokens))


def _convert_children(parent: SyntaxTreeNode) -> List[AnyNode]:
    out: List[AnyNode] = []
    for child in parent.children:
        if child.type == "inline":
            out.extend(_convert_children(child))
        else:
            out.append(_convert(child))
    return out


def _convert(tree_node: SyntaxTreeNode) -> AnyNode:
    occurrence = tree_node.meta.get(OCCURRENCE_META)
    if isinstance(occurrence, ComponentOccurrence):
        return occurrence

    line_map = tree_node.map
    return Node(
        type=tree_node.type,
        tag=tree_node.tag,
        content=tree_node.content,
        markup=tree_node.markup,
        info=tree_node.info,
        attrs=dict(tree_node.attrs),
        children=_convert_children(tree_node),
        line_map=tuple(line_map) if line_map is not None else None,
    )


def iter_nodes(nodes: Iterable[AnyNode]) -> Iterator[AnyNode]:
    """Depth-first walk in source order, descending into component children."""
    for node in nodes:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def find_components(nodes: Iterable[AnyNode]) -> List[ComponentOccurrence]:
    return [node for node in iter_nodes(nodes) if isinstance(node, ComponentOccurrence)]


def node_to_dict(node: AnyNode) -> Dict[str, Any]:
    """JSON-ready representation of a node and its subtree."""
    if isinstance(node, ComponentOccurrence):
        data: Dict[str, Any] = {
            "type": node.type,
            "name": node.name,
            "raw": node.raw,
            "props": node.props,
        }
        if node.children is not None:
            data["children"] = [node_to_dict(child) for child in node.children]
        return data

    data = {"type": node.type}
    for key in ("tag", "content", "markup", "info"):
        value = getattr(node, key)
        if value:
            data[key] = value
    if node.attrs:
        data["attrs"] = dict(node.attrs)
    if node.line_map is not None:
        data["map"] = list(node.line_map)
    if node.children:
        data["children"] = [node_to_dict(child) for child in node.children]
    return data


__all__ = [
    "OCCURRENCE_META",
    "BUILTIN_NODE_TYPES",
    "tokens_to_nodes",
    "iter_nodes",
    "find_components",
    "node_to_dict",
]
