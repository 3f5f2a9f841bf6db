"""Shared fixtures for integration tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from nexusops.core.logging import clear_run_id


@pytest.fixture(autouse=True)
def reset_state() -> Generator[None, None, None]:
    """Reset logging and env state between tests."""
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    clear_run_id()
    orig = {k: v for k, v in os.environ.items() if k.startswith("NEXUSOPS__")}
    for k in orig:
        del os.environ[k]
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    clear_run_id()
    for k in list(os.environ.keys()):
        if k.startswith("NEXUSOPS__"):
            del os.environ[k]
    os.environ.update(orig)


@pytest.fixture
def maven_project(tmp_path: Path) -> Path:
    """A small Maven-style project.

    Includes:
    - Classes and an interface under src/main/java
    - A test class under src/test/java
    - package-info.java with no declaration
    - A malformed source file
    - Build output under target/, pruned only when default excludes are on
    """
    root = tmp_path / "shop"
    main = root / "src" / "main" / "java" / "com" / "acme" / "shop"
    test = root / "src" / "test" / "java" / "com" / "acme" / "shop"
    main.mkdir(parents=True)
    test.mkdir(parents=True)
    (root / "target" / "generated-sources").mkdir(parents=True)

    (root / "pom.xml").write_text("<project/>\n")
    (main / "package-info.java").write_text("/** Shop domain. */\npackage com.acme.shop;\n")
    (main / "Cart.java").write_text(
        """package com.acme.shop;

import java.util.ArrayList;
import java.util.List;

public class Cart {
    private final List<Item> items = new ArrayList<>();

    public void add(Item item) {
        items.add(item);
    }

    public int size() {
        return items.size();
    }
}
"""
    )
    (main / "Item.java").write_text(
        """package com.acme.shop;

public interface Item {
    String sku();
    long priceCents();
}
"""
    )
    (main / "Broken.java").write_text("package com.acme.shop;\npublic class Broken {\n")
    (test / "CartTest.java").write_text(
        """package com.acme.shop;

import org.junit.jupiter.api.Test;

class CartTest {
    @Test
    void startsEmpty() {
        assert new Cart().size() == 0;
    }
}
"""
    )
    (root / "target" / "generated-sources" / "Gen.java").write_text("class Gen {}\n")
    return root
