"""Artifact serialization and atomic writes."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path

from nexusops.core.errors import SaveError
from nexusops.tree.models import Node


def artifact_path(output_root: Path, rel_dir: Path, name: str) -> Path:
    """output_root / <dir of the source, relative to the project> / <name>.json."""
    return output_root / rel_dir / f"{name}.json"


def dumps_tree(tree: Node, *, indent: int = 2) -> str:
    """Pretty-printed JSON with fields in type, value, children order."""
    return json.dumps(tree.to_dict(), indent=indent, ensure_ascii=False) + "\n"


def write_artifact(tree: Node, path: Path, *, indent: int = 2) -> None:
    """Serialize fully, then replace ``path`` in one rename.

    A failure at any step leaves no file at ``path`` (an older artifact from
    a previous run stays untouched) and no temp file behind.

    Raises:
        SaveError: Directory creation, serialization or the write failed.
    """
    try:
        payload = dumps_tree(tree, indent=indent).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise SaveError.serialization_failed(str(path), str(e)) from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SaveError.from_os_error(str(path.parent), e) from e

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise SaveError.from_os_error(str(path), e) from e
    finally:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
