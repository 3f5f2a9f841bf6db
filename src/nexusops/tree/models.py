"""Generic syntax tree model.

A Node keeps only what downstream tooling needs from a concrete tree: the
grammar category, the sanitized source text, and the named children in
source order. It serializes to::

    {"type": str, "value"?: str, "children"?: [Node, ...]}

with ``value`` and ``children`` omitted when empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Node:
    """A node of the reduced, language-agnostic tree."""

    type: str
    value: str = ""
    children: list[Node] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with stable field order, dropping empty fields."""
        data: dict[str, Any] = {"type": self.type}
        if self.value:
            data["value"] = self.value
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        """Inverse of to_dict. Raises ValueError on a malformed mapping."""
        node_type = data.get("type")
        if not isinstance(node_type, str) or not node_type:
            raise ValueError(f"Node 'type' must be a non-empty string, got {node_type!r}")
        value = data.get("value", "")
        if not isinstance(value, str):
            raise ValueError(f"Node 'value' must be a string, got {type(value).__name__}")
        children = data.get("children", [])
        if not isinstance(children, list):
            raise ValueError(f"Node 'children' must be a list, got {type(children).__name__}")
        return cls(
            type=node_type,
            value=value,
            children=[cls.from_dict(child) for child in children],
        )

    def walk(self) -> list[Node]:
        """All nodes in pre-order, self first."""
        nodes: list[Node] = []
        stack = [self]
        while stack:
            node = stack.pop()
            nodes.append(node)
            stack.extend(reversed(node.children))
        return nodes

