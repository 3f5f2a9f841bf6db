"""Generic tree model, reduction, sanitization and declaration lookup."""

from nexusops.tree.locator import Declaration, find_declarations, locate_declaration
from nexusops.tree.models import Node
from nexusops.tree.reducer import TreeReducer, reduce_node
from nexusops.tree.sanitize import sanitize_value

__all__ = [
    "Declaration",
    "Node",
    "TreeReducer",
    "find_declarations",
    "locate_declaration",
    "reduce_node",
    "sanitize_value",
]
