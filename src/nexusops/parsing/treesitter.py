"""Tree-sitter parsing into concrete syntax trees.

Wraps a ``tree_sitter.Parser`` with lazy, cached grammar loading driven by
LanguagePack metadata, and reports how many error/missing nodes a parse
produced so callers can decide whether the tree is usable.

A TreeSitterParser is NOT thread-safe; use one instance per thread.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter

from nexusops.core.errors import ParseError
from nexusops.parsing.packs import LanguagePack, get_pack, get_pack_for_ext


@dataclass
class ParseResult:
    """Result of parsing a file."""

    tree: Any  # Tree-sitter Tree (not serializable)
    language: str
    source: bytes
    error_count: int
    total_nodes: int
    root_node: Any  # Tree-sitter Node

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0


@dataclass
class TreeSitterParser:
    """
    Tree-sitter parser bound to the packs registry.

    Usage::

        parser = TreeSitterParser()
        result = parser.parse(Path("src/Foo.java"), content)
        if result.has_errors:
            ...
    """

    _parser: Any = field(default=None, repr=False)
    _languages: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser()
        self._languages = {}

    def _get_language(self, pack: LanguagePack) -> Any:
        """Get or load the tree-sitter Language for a pack."""
        if pack.grammar_name in self._languages:
            return self._languages[pack.grammar_name]

        try:
            mod = importlib.import_module(pack.grammar_module)
        except ImportError as err:
            raise ParseError.grammar_unavailable(
                pack.name, f"install {pack.grammar_package}>={pack.min_version}"
            ) from err

        lang_fn = getattr(mod, pack.language_func or "language", None)
        if lang_fn is None:
            raise ParseError.grammar_unavailable(
                pack.name, f"{pack.grammar_module} has no {pack.language_func or 'language'}()"
            )

        lang = tree_sitter.Language(lang_fn())
        self._languages[pack.grammar_name] = lang
        return lang

    def ensure_language(self, language: str) -> LanguagePack:
        """Resolve a pack by name and load its grammar, failing early if absent."""
        pack = get_pack(language)
        if pack is None:
            raise ValueError(f"Unsupported language: {language}")
        self._get_language(pack)
        return pack

    def parse(
        self,
        path: Path,
        content: bytes | None = None,
        *,
        language: str | None = None,
    ) -> ParseResult:
        """
        Parse a file with Tree-sitter.

        Args:
            path: Path to file (used for language detection and messages)
            content: File content as bytes. If None, reads from path.
            language: Pack name; detected from the extension when omitted.

        Returns:
            ParseResult with tree, language, and error info.

        Raises:
            ValueError: No pack handles the file.
            ParseError: Grammar missing or the parser itself failed.
        """
        if content is None:
            content = path.read_bytes()

        if language is not None:
            pack = get_pack(language)
        else:
            pack = get_pack_for_ext(path.suffix)
        if pack is None:
            raise ValueError(f"Unsupported file extension: {path.suffix.lstrip('.')}")

        self._parser.language = self._get_language(pack)
        try:
            tree = self._parser.parse(content)
        except (ValueError, RuntimeError) as err:
            raise ParseError.parser_failed(str(path), str(err)) from err
        if tree is None:
            raise ParseError.parser_failed(str(path), "parser returned no tree")

        error_count, total_nodes = count_nodes(tree.root_node)

        return ParseResult(
            tree=tree,
            language=pack.name,
            source=content,
            error_count=error_count,
            total_nodes=total_nodes,
            root_node=tree.root_node,
        )


def count_nodes(root: Any) -> tuple[int, int]:
    """Return (error_count, total_nodes) for a tree, counting ERROR and MISSING nodes."""
    error_count = 0
    total_nodes = 0
    stack = [root]
    while stack:
        node = stack.pop()
        total_nodes += 1
        if node.type == "ERROR" or node.is_missing:
            error_count += 1
        stack.extend(node.children)
    return error_count, total_nodes
