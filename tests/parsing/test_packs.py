"""Tests for the LanguagePack registry."""

from __future__ import annotations

import pytest

from nexusops.parsing.packs import (
    CSHARP_PACK,
    JAVA_PACK,
    KOTLIN_PACK,
    PACKS,
    ReductionRules,
    get_pack,
    get_pack_for_ext,
    language_names,
)


class TestRegistry:
    """Lookup by name and extension."""

    def test_language_names(self) -> None:
        assert language_names() == ["java", "csharp", "kotlin"]

    @pytest.mark.parametrize("name", ["java", "JAVA", "Java"])
    def test_get_pack_is_case_insensitive(self, name: str) -> None:
        assert get_pack(name) is JAVA_PACK

    def test_grammar_alias(self) -> None:
        assert get_pack("c_sharp") is CSHARP_PACK

    def test_unknown_name(self) -> None:
        assert get_pack("cobol") is None

    @pytest.mark.parametrize(
        ("ext", "pack"),
        [
            ("java", JAVA_PACK),
            (".java", JAVA_PACK),
            (".JAVA", JAVA_PACK),
            ("cs", CSHARP_PACK),
            ("kt", KOTLIN_PACK),
            (".kts", KOTLIN_PACK),
        ],
    )
    def test_get_pack_for_ext(self, ext: str, pack: object) -> None:
        assert get_pack_for_ext(ext) is pack

    @pytest.mark.parametrize("ext", ["", ".", "txt", ".class", "jav"])
    def test_get_pack_for_unknown_ext(self, ext: str) -> None:
        assert get_pack_for_ext(ext) is None

    def test_every_pack_registered_by_name(self) -> None:
        for name in language_names():
            assert PACKS[name].name == name


class TestMatches:
    @pytest.mark.parametrize("filename", ["Foo.java", "Foo.JAVA", "a.b.java"])
    def test_matching(self, filename: str) -> None:
        assert JAVA_PACK.matches(filename)

    @pytest.mark.parametrize("filename", ["java", "Foo.javax", "Foo.java.bak", ".java~"])
    def test_not_matching(self, filename: str) -> None:
        assert not JAVA_PACK.matches(filename)

    def test_dotfile_with_extension(self) -> None:
        assert JAVA_PACK.matches(".java")


class TestJavaRules:
    """The Java tables the reducer and locator rely on."""

    def test_only_class_declaration_is_opaque(self) -> None:
        assert JAVA_PACK.rules.opaque_types == frozenset({"class_declaration"})

    def test_scoped_identifier_collapses_on_dot(self) -> None:
        assert dict(JAVA_PACK.rules.collapse_types) == {"scoped_identifier": "."}

    def test_declarations(self) -> None:
        assert JAVA_PACK.rules.declaration_types == {
            "class_declaration",
            "interface_declaration",
        }

    def test_collapse_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            JAVA_PACK.rules.collapse_types["x"] = "."  # type: ignore[index]


class TestWithMaxDepth:
    def test_copies_tables(self) -> None:
        rules = JAVA_PACK.rules.with_max_depth(10)

        assert rules.max_depth == 10
        assert rules.opaque_types == JAVA_PACK.rules.opaque_types
        assert rules.collapse_types is JAVA_PACK.rules.collapse_types
        assert JAVA_PACK.rules.max_depth == 300

    def test_defaults(self) -> None:
        rules = ReductionRules()

        assert rules.identifier_types == {"identifier"}
        assert rules.max_depth == 300
        assert not rules.collapse_types
