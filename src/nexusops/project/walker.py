"""Directory traversal for eligible source files."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import structlog

from nexusops.core.errors import WalkError
from nexusops.parsing.packs import LanguagePack

logger = structlog.get_logger()


@dataclass(frozen=True)
class SourceFile:
    """An eligible file and its directory relative to the project root."""

    path: Path
    rel_dir: Path


@dataclass
class WalkStats:
    seen: int = 0
    skipped: int = 0  # Wrong extension
    dir_errors: int = 0


class ProjectWalker:
    """Depth-first, sorted enumeration of files one pack can parse.

    Only a failure to list the root itself raises WalkError. Unreadable
    subdirectories are logged and skipped.
    """

    def __init__(
        self,
        root: Path,
        pack: LanguagePack,
        *,
        prune_dirs: frozenset[str] = frozenset(),
        skip_paths: tuple[Path, ...] = (),
        follow_symlinks: bool = False,
    ) -> None:
        self.root = root
        self.pack = pack
        self.prune_dirs = prune_dirs
        self.skip_paths = tuple(p.resolve() for p in skip_paths)
        self.follow_symlinks = follow_symlinks
        self.stats = WalkStats()

    def _check_root(self) -> None:
        if not self.root.exists():
            raise WalkError.from_os_error(
                str(self.root), FileNotFoundError(2, "No such file or directory")
            )
        if not self.root.is_dir():
            raise WalkError.not_a_directory(str(self.root))
        try:
            with os.scandir(self.root):
                pass
        except OSError as e:
            raise WalkError.from_os_error(str(self.root), e) from e

    def _on_error(self, err: OSError) -> None:
        if err.filename is not None and Path(err.filename) == self.root:
            raise WalkError.from_os_error(str(self.root), err) from err
        self.stats.dir_errors += 1
        logger.warning("walk_dir_failed", path=err.filename, error=str(err))

    def _keep_dir(self, dirpath: str, dirname: str) -> bool:
        if dirname in self.prune_dirs:
            return False
        if self.skip_paths:
            return Path(dirpath, dirname).resolve() not in self.skip_paths
        return True

    def __iter__(self) -> Iterator[SourceFile]:
        self._check_root()
        for dirpath, dirnames, filenames in os.walk(
            self.root, onerror=self._on_error, followlinks=self.follow_symlinks
        ):
            dirnames[:] = sorted(d for d in dirnames if self._keep_dir(dirpath, d))
            rel_dir = Path(dirpath).relative_to(self.root)
            for filename in sorted(filenames):
                path = Path(dirpath, filename)
                if not path.is_file():
                    continue
                self.stats.seen += 1
                if not self.pack.matches(filename):
                    self.stats.skipped += 1
                    continue
                yield SourceFile(path=path, rel_dir=rel_dir)
