"""Fixtures for tree reduction tests.

FakeNode mimics the part of tree_sitter.Node the reducer reads, so the
algorithm can be exercised on hand-built trees with exact byte spans.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from nexusops.parsing.packs import JAVA_PACK, ReductionRules


@dataclass
class FakeNode:
    type: str
    start_byte: int
    end_byte: int
    named_children: list[FakeNode] = field(default_factory=list)


NodeBuilder = Callable[..., FakeNode]


@pytest.fixture
def node_at() -> NodeBuilder:
    """Build a FakeNode spanning the first occurrence of ``text`` at or after ``after``."""

    def build(
        source: bytes,
        node_type: str,
        text: str,
        *children: FakeNode,
        after: int = 0,
    ) -> FakeNode:
        start = source.index(text.encode(), after)
        return FakeNode(node_type, start, start + len(text.encode()), list(children))

    return build


@pytest.fixture
def java_rules() -> ReductionRules:
    return JAVA_PACK.rules
