"""Reduction of concrete syntax trees into generic Nodes.

The reducer walks a tree-sitter node and builds a ``Node`` per named node:

1. ``type`` is the grammar category.
2. Unless the type is opaque, ``value`` is the node's source span, stripped
   and sanitized.
3. A node of a collapse type whose text is exactly its named children joined
   by the type's separator keeps its value and loses its children.
4. Otherwise every named child is reduced, in source order.

Anonymous tokens (punctuation, keywords) never appear in the output.

Anything exposing ``type``, ``named_children``, ``start_byte`` and
``end_byte`` can be reduced, which keeps the algorithm testable without a
grammar installed.
"""

from __future__ import annotations

from typing import Any, Protocol

from nexusops.core.errors import TreeDepthError
from nexusops.parsing.packs import ReductionRules
from nexusops.tree.models import Node
from nexusops.tree.sanitize import sanitize_value


class ConcreteNode(Protocol):
    """The slice of ``tree_sitter.Node`` the reducer relies on."""

    @property
    def type(self) -> str: ...

    @property
    def named_children(self) -> list[Any]: ...

    @property
    def start_byte(self) -> int: ...

    @property
    def end_byte(self) -> int: ...


def node_text(node: ConcreteNode, source: bytes) -> str:
    """Raw source text spanned by a node."""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def has_redundant_children(node: ConcreteNode, source: bytes, separator: str) -> bool:
    """True if the node's text is exactly its named children joined by separator.

    Exact equality after stripping is the only trigger: comments or spacing
    between the parts make the texts differ and the children are kept.
    """
    composite = "".join(
        node_text(child, source).strip() + separator for child in node.named_children
    )
    composite = composite.removesuffix(separator)
    return node_text(node, source).strip() == composite


def reduce_node(
    node: ConcreteNode,
    source: bytes,
    rules: ReductionRules,
    *,
    _depth: int = 0,
) -> Node:
    """Reduce one concrete node (and its subtree) to a generic Node.

    Raises:
        TreeDepthError: The subtree nests deeper than ``rules.max_depth``.
    """
    if _depth > rules.max_depth:
        raise TreeDepthError.exceeded(rules.max_depth, node.type)

    result = Node(type=node.type)

    if node.type not in rules.opaque_types:
        result.value = sanitize_value(node_text(node, source).strip())

    separator = rules.collapse_types.get(node.type)
    if (
        result.value
        and separator is not None
        and has_redundant_children(node, source, separator)
    ):
        return result

    for child in node.named_children:
        if child is not None:
            result.children.append(reduce_node(child, source, rules, _depth=_depth + 1))

    return result


class TreeReducer:
    """Reducer bound to one language's rules.

    Usage::

        reducer = TreeReducer(JAVA_PACK.rules)
        tree = reducer.reduce(parse_result.root_node, parse_result.source)
    """

    def __init__(self, rules: ReductionRules) -> None:
        self.rules = rules

    def reduce(self, root: ConcreteNode, source: bytes) -> Node:
        return reduce_node(root, source, self.rules)
