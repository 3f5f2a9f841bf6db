"""Locate the declaration that names a file's artifact.

Only the root's immediate children are inspected, and within a declaration
only its immediate children. Declarations nested deeper (inside a
namespace block, say) are not found, which is an expected outcome rather
than an error.
"""

from __future__ import annotations

from dataclasses import dataclass

from nexusops.parsing.packs import ReductionRules
from nexusops.tree.models import Node


@dataclass(frozen=True)
class Declaration:
    """A top-level declaration and the identifier that names it."""

    node_type: str
    name: str
    index: int  # Position among the root's children


def _declaration_name(node: Node, rules: ReductionRules) -> str | None:
    for child in node.children:
        if child.type in rules.identifier_types:
            return child.value or None
    return None


def find_declarations(tree: Node, rules: ReductionRules) -> list[Declaration]:
    """Every top-level declaration/identifier pair, in source order."""
    found: list[Declaration] = []
    for index, child in enumerate(tree.children):
        if child.type not in rules.declaration_types:
            continue
        name = _declaration_name(child, rules)
        if name is not None:
            found.append(Declaration(node_type=child.type, name=name, index=index))
    return found


def locate_declaration(tree: Node, rules: ReductionRules) -> str | None:
    """Name of the first top-level declaration, or None.

    Later declarations stay in the serialized tree but do not name it.
    """
    for child in tree.children:
        if child.type in rules.declaration_types:
            name = _declaration_name(child, rules)
            if name is not None:
                return name
    return None
