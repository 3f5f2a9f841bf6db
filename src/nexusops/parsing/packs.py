"""LanguagePack: single source of truth for per-language tree-sitter config.

Every language nexus-ops can emit trees for has exactly ONE LanguagePack
that consolidates:
- Grammar install metadata (package, module, loader function)
- File extension detection
- Reduction rules (which node types are opaque, collapsible, declarations,
  or identifiers)

Adding grammar coverage means adding a pack here, never a branch in the
reducer or locator.

The PACKS registry is the canonical lookup: ``PACKS["java"]``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# =========================================================================
# Dataclasses
# =========================================================================


@dataclass(frozen=True)
class ReductionRules:
    """Node-category tables that drive tree reduction and naming.

    Attributes:
        opaque_types: Node types whose text is a re-serialization of their
            children and so never get a value.
        collapse_types: Node type -> separator. A node of one of these types
            whose text equals its named children joined by the separator
            keeps its value and drops the children.
        declaration_types: Top-level node types that name an artifact.
        identifier_types: Child node types holding a declaration's name.
        max_depth: Recursion cap for pathological inputs.
    """

    opaque_types: frozenset[str] = frozenset()
    collapse_types: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    declaration_types: frozenset[str] = frozenset()
    identifier_types: frozenset[str] = frozenset({"identifier"})
    max_depth: int = 300

    def with_max_depth(self, max_depth: int) -> ReductionRules:
        """Copy of these rules with a different depth cap."""
        return ReductionRules(
            opaque_types=self.opaque_types,
            collapse_types=self.collapse_types,
            declaration_types=self.declaration_types,
            identifier_types=self.identifier_types,
            max_depth=max_depth,
        )


@dataclass(frozen=True)
class LanguagePack:
    """Complete tree-sitter configuration for a single language."""

    # -- Identity --
    name: str  # Canonical language name ("java", "csharp", ...)
    grammar_name: str  # tree-sitter grammar key ("java", "c_sharp", ...)

    # -- Grammar install --
    grammar_package: str  # PyPI package ("tree-sitter-java")
    grammar_module: str  # Python import ("tree_sitter_java")
    min_version: str
    # Non-standard function name; most grammars expose language()
    language_func: str | None = None

    # -- File detection (without leading dot) --
    extensions: frozenset[str] = field(default_factory=frozenset)

    # -- Reduction --
    rules: ReductionRules = field(default_factory=ReductionRules)

    def matches(self, filename: str) -> bool:
        """Check if a filename has one of this pack's extensions."""
        _, dot, ext = filename.rpartition(".")
        return bool(dot) and ext.lower() in self.extensions


# =========================================================================
# JAVA
# =========================================================================

_JAVA_RULES = ReductionRules(
    # A class body re-serializes its members; an interface keeps its text.
    opaque_types=frozenset({"class_declaration"}),
    # package/import names: (scoped_identifier (scoped_identifier ...) (identifier))
    collapse_types=MappingProxyType({"scoped_identifier": "."}),
    declaration_types=frozenset({"class_declaration", "interface_declaration"}),
    identifier_types=frozenset({"identifier"}),
)

JAVA_PACK = LanguagePack(
    name="java",
    grammar_name="java",
    grammar_package="tree-sitter-java",
    grammar_module="tree_sitter_java",
    min_version="0.23.0",
    extensions=frozenset({"java"}),
    rules=_JAVA_RULES,
)


# =========================================================================
# C#
# =========================================================================

_CSHARP_RULES = ReductionRules(
    opaque_types=frozenset({"class_declaration"}),
    collapse_types=MappingProxyType({"qualified_name": "."}),
    declaration_types=frozenset(
        {
            "class_declaration",
            "interface_declaration",
            "struct_declaration",
            "record_declaration",
        }
    ),
    identifier_types=frozenset({"identifier"}),
)

CSHARP_PACK = LanguagePack(
    name="csharp",
    grammar_name="c_sharp",
    grammar_package="tree-sitter-c-sharp",
    grammar_module="tree_sitter_c_sharp",
    min_version="0.23.0",
    extensions=frozenset({"cs"}),
    rules=_CSHARP_RULES,
)


# =========================================================================
# KOTLIN
# =========================================================================

_KOTLIN_RULES = ReductionRules(
    # class_declaration covers both classes and interfaces in this grammar
    opaque_types=frozenset({"class_declaration"}),
    # package header names: (identifier (simple_identifier) (simple_identifier))
    collapse_types=MappingProxyType({"identifier": "."}),
    declaration_types=frozenset({"class_declaration", "object_declaration"}),
    identifier_types=frozenset({"type_identifier"}),
)

KOTLIN_PACK = LanguagePack(
    name="kotlin",
    grammar_name="kotlin",
    grammar_package="tree-sitter-kotlin",
    grammar_module="tree_sitter_kotlin",
    min_version="1.0.0",
    extensions=frozenset({"kt", "kts"}),
    rules=_KOTLIN_RULES,
)


# =========================================================================
# Canonical registries
# =========================================================================

_ALL_PACKS: tuple[LanguagePack, ...] = (
    JAVA_PACK,
    CSHARP_PACK,
    KOTLIN_PACK,
)

# name -> Pack
PACKS: dict[str, LanguagePack] = {pack.name: pack for pack in _ALL_PACKS}
PACKS["c_sharp"] = CSHARP_PACK

# Extension -> Pack
_EXT_TO_PACK: dict[str, LanguagePack] = {}
for _pack in _ALL_PACKS:
    for _ext in _pack.extensions:
        _EXT_TO_PACK[_ext] = _pack


# =========================================================================
# Public API
# =========================================================================


def get_pack(name: str) -> LanguagePack | None:
    """Get a LanguagePack by language name."""
    return PACKS.get(name.lower())


def get_pack_for_ext(ext: str) -> LanguagePack | None:
    """Get a LanguagePack for a file extension (with or without leading dot)."""
    return _EXT_TO_PACK.get(ext.lower().lstrip("."))


def language_names() -> list[str]:
    """Canonical names of all registered packs."""
    return [pack.name for pack in _ALL_PACKS]
