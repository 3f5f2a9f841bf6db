"""Tree-sitter parsing and per-language packs."""

from nexusops.parsing.packs import (
    PACKS,
    LanguagePack,
    ReductionRules,
    get_pack,
    get_pack_for_ext,
    language_names,
)
from nexusops.parsing.treesitter import ParseResult, TreeSitterParser

__all__ = [
    "PACKS",
    "LanguagePack",
    "ParseResult",
    "ReductionRules",
    "TreeSitterParser",
    "get_pack",
    "get_pack_for_ext",
    "language_names",
]
