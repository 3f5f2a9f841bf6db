"""Tests for tree-sitter parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from nexusops.core.errors import ErrorCode, ParseError
from nexusops.parsing.packs import JAVA_PACK, LanguagePack
from nexusops.parsing.treesitter import TreeSitterParser, count_nodes


@pytest.fixture
def parser() -> TreeSitterParser:
    return TreeSitterParser()


class TestParse:
    """TreeSitterParser.parse on Java sources."""

    def test_valid_java(self, parser: TreeSitterParser) -> None:
        content = b"package com.acme;\npublic class Foo { int x; }\n"

        result = parser.parse(Path("Foo.java"), content)

        assert result.language == "java"
        assert result.source == content
        assert result.root_node.type == "program"
        assert result.error_count == 0
        assert not result.has_errors
        assert result.total_nodes > 5

    def test_reads_from_disk_when_no_content(
        self, parser: TreeSitterParser, tmp_path: Path
    ) -> None:
        path = tmp_path / "Bar.java"
        path.write_text("interface Bar {}\n")

        result = parser.parse(path)

        assert result.source == b"interface Bar {}\n"
        assert result.root_node.named_children[0].type == "interface_declaration"

    def test_syntax_error_is_counted(self, parser: TreeSitterParser) -> None:
        result = parser.parse(Path("Broken.java"), b"public class Broken { void m( }")

        assert result.has_errors
        assert result.error_count > 0

    def test_explicit_language_overrides_extension(self, parser: TreeSitterParser) -> None:
        result = parser.parse(Path("Foo.txt"), b"class Foo {}", language="java")

        assert result.language == "java"

    def test_unknown_extension_raises_value_error(self, parser: TreeSitterParser) -> None:
        with pytest.raises(ValueError, match="Unsupported file extension: txt"):
            parser.parse(Path("notes.txt"), b"hello")

    def test_parser_is_reusable(self, parser: TreeSitterParser) -> None:
        first = parser.parse(Path("A.java"), b"class A {}")
        second = parser.parse(Path("B.java"), b"class B {}")

        assert first.source != second.source
        assert second.error_count == 0

    def test_empty_file(self, parser: TreeSitterParser) -> None:
        result = parser.parse(Path("Empty.java"), b"")

        assert result.root_node.type == "program"
        assert result.root_node.named_children == []
        assert result.error_count == 0


class TestGrammarLoading:
    def test_ensure_language(self, parser: TreeSitterParser) -> None:
        assert parser.ensure_language("Java") is JAVA_PACK

    def test_ensure_unknown_language(self, parser: TreeSitterParser) -> None:
        with pytest.raises(ValueError, match="Unsupported language"):
            parser.ensure_language("cobol")

    def test_missing_grammar_module(self, parser: TreeSitterParser) -> None:
        pack = LanguagePack(
            name="nothing",
            grammar_name="nothing",
            grammar_package="tree-sitter-nothing",
            grammar_module="tree_sitter_nothing_installed_here",
            min_version="0.1.0",
        )

        with pytest.raises(ParseError) as exc_info:
            parser._get_language(pack)

        assert exc_info.value.code == ErrorCode.PARSE_ERROR
        assert "tree-sitter-nothing" in exc_info.value.message

    def test_missing_language_function(self, parser: TreeSitterParser) -> None:
        pack = LanguagePack(
            name="java-odd",
            grammar_name="java-odd",
            grammar_package="tree-sitter-java",
            grammar_module="tree_sitter_java",
            min_version="0.23.0",
            language_func="no_such_function",
        )

        with pytest.raises(ParseError, match="no_such_function"):
            parser._get_language(pack)

    def test_language_is_cached(self, parser: TreeSitterParser) -> None:
        first = parser._get_language(JAVA_PACK)

        assert parser._get_language(JAVA_PACK) is first


@dataclass
class _Stub:
    type: str
    is_missing: bool = False
    children: list[_Stub] = field(default_factory=list)


class TestCountNodes:
    def test_counts_error_and_missing(self) -> None:
        root = _Stub(
            "program",
            children=[
                _Stub("ERROR", children=[_Stub("identifier")]),
                _Stub(";", is_missing=True),
                _Stub("class_declaration"),
            ],
        )

        assert count_nodes(root) == (2, 5)

    def test_single_node(self) -> None:
        assert count_nodes(_Stub("program")) == (0, 1)
