"""Project generation: walk, parse, reduce, locate, emit.

Every per-file failure (read, parse, depth, save) is logged and recorded in
the RunSummary; only a WalkError on the project root or an
unloadable grammar escapes ``run``.

With ``emit.max_workers > 1`` the read/parse/reduce/locate steps run on a
thread pool while writes stay on the calling thread in walk order, so two
files that map to the same artifact path resolve last-writer-wins exactly
as a sequential run would.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from structlog.stdlib import BoundLogger

from nexusops.config.models import NexusOpsConfig
from nexusops.core.errors import (
    ConfigError,
    FileReadError,
    NexusOpsError,
    ParseError,
    TreeDepthError,
)
from nexusops.core.excludes import build_prune_set
from nexusops.core.logging import get_logger, get_run_id, set_run_id
from nexusops.core.progress import progress
from nexusops.parsing.packs import get_pack, language_names
from nexusops.parsing.treesitter import TreeSitterParser
from nexusops.project.emitter import artifact_path, write_artifact
from nexusops.project.models import (
    Artifact,
    FileOutcome,
    FileResult,
    ProcessedFile,
    RunSummary,
)
from nexusops.project.walker import ProjectWalker, SourceFile
from nexusops.tree.locator import find_declarations
from nexusops.tree.reducer import TreeReducer

_MB = 1024 * 1024


class ProjectEmitter:
    """Turns every eligible file under a root into per-declaration JSON trees.

    Usage::

        emitter = ProjectEmitter(load_config(root))
        summary = emitter.run(root)
        for artifact in summary.artifacts:
            print(artifact.output_path)
    """

    def __init__(
        self,
        config: NexusOpsConfig | None = None,
        *,
        output_root: Path | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self.config = config or NexusOpsConfig()
        pack = get_pack(self.config.parse.language)
        if pack is None:
            raise ConfigError.unknown_language(self.config.parse.language, language_names())
        self.pack = pack
        self.reducer = TreeReducer(pack.rules.with_max_depth(self.config.parse.max_depth))
        self.output_root = (output_root or Path(self.config.emit.output_dir)).resolve()
        self.log = logger or get_logger("emit")
        self._local = threading.local()

    # ------------------------------------------------------------------
    # Per-file pipeline
    # ------------------------------------------------------------------

    def _parser(self) -> TreeSitterParser:
        """One tree-sitter parser per thread."""
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = TreeSitterParser()
            self._local.parser = parser
        return parser

    def _read(self, path: Path) -> bytes:
        limit = self.config.parse.max_file_size_mb * _MB
        try:
            size = path.stat().st_size
            if size > limit:
                raise FileReadError.too_large(str(path), size, limit)
            return path.read_bytes()
        except OSError as e:
            raise FileReadError.from_os_error(str(path), e) from e

    def process_file(self, source: SourceFile) -> ProcessedFile:
        """Read, parse, reduce and locate one file. Never raises per-file errors."""
        processed = ProcessedFile(path=source.path, rel_dir=source.rel_dir)
        try:
            content = self._read(source.path)
            result = self._parser().parse(source.path, content, language=self.pack.name)
            if result.has_errors and not self.config.parse.allow_syntax_errors:
                raise ParseError.syntax_errors(str(source.path), result.error_count)
            tree = self.reducer.reduce(result.root_node, result.source)
        except (FileReadError, ParseError, TreeDepthError) as e:
            processed.error = e
            return processed
        except RecursionError:
            processed.error = TreeDepthError.stack_exhausted(
                self.reducer.rules.max_depth, sys.getrecursionlimit()
            )
            return processed

        declarations = find_declarations(tree, self.reducer.rules)
        processed.tree = tree
        if declarations:
            processed.name = declarations[0].name
            processed.ignored_declarations = [d.name for d in declarations[1:]]
        return processed

    def save(self, processed: ProcessedFile) -> FileResult:
        """Log the outcome of a processed file and write its artifact if it has one."""
        path = processed.path
        if processed.error is not None:
            return self._failed(processed.path, processed.error)

        if processed.name is None or processed.tree is None:
            self.log.info("declaration_not_found", path=str(path))
            return FileResult(path=path, outcome=FileOutcome.NO_DECLARATION)

        if processed.ignored_declarations:
            self.log.info(
                "extra_declarations_ignored",
                path=str(path),
                name=processed.name,
                ignored=processed.ignored_declarations,
            )

        out_path = artifact_path(self.output_root, processed.rel_dir, processed.name)
        try:
            write_artifact(processed.tree, out_path, indent=self.config.emit.indent)
        except NexusOpsError as e:
            return self._failed(path, e)

        self.log.info("artifact_saved", name=processed.name, path=str(out_path))
        return FileResult(
            path=path,
            outcome=FileOutcome.EMITTED,
            artifact=Artifact(name=processed.name, source_path=path, output_path=out_path),
        )

    def _failed(self, path: Path, error: NexusOpsError) -> FileResult:
        if isinstance(error, FileReadError):
            event, outcome = "file_read_failed", FileOutcome.READ_FAILED
        elif isinstance(error, (ParseError, TreeDepthError)):
            event, outcome = "parse_failed", FileOutcome.PARSE_FAILED
        else:
            event, outcome = "save_failed", FileOutcome.SAVE_FAILED
        self.log.warning(event, path=str(path), error=error.error_name, reason=error.message)
        return FileResult(path=path, outcome=outcome, error=error)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def _process_all(self, files: list[SourceFile]) -> Iterator[ProcessedFile]:
        workers = self.config.emit.max_workers
        if workers == 1 or len(files) <= 1:
            for source in files:
                yield self.process_file(source)
            return
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="nexusops") as pool:
            # map() yields in submission order
            yield from pool.map(self.process_file, files)

    def run(self, root: Path) -> RunSummary:
        """Generate artifacts for every eligible file under ``root``.

        The grammar is loaded before walking, so a missing grammar fails the
        whole run instead of every file.

        Raises:
            WalkError: ``root`` is missing, not a directory, or unreadable.
            ParseError: The language pack's grammar cannot be loaded.
        """
        self._parser().ensure_language(self.pack.name)
        if get_run_id() is None:
            set_run_id()
        root = root.resolve()
        walk = self.config.walk
        walker = ProjectWalker(
            root,
            self.pack,
            prune_dirs=build_prune_set(walk.exclude_dirs, use_defaults=walk.use_default_excludes),
            skip_paths=(self.output_root,),
            follow_symlinks=walk.follow_symlinks,
        )
        files = list(walker)
        self.log.info(
            "run_started",
            root=str(root),
            output=str(self.output_root),
            language=self.pack.name,
            files=len(files),
        )

        summary = RunSummary(root=root, output_root=self.output_root)
        summary.skipped_files = walker.stats.skipped
        processed: Iterable[ProcessedFile] = progress(
            self._process_all(files), desc="Generating", total=len(files)
        )
        for item in processed:
            summary.results.append(self.save(item))

        self.log.info("run_complete", root=str(root), **summary.counts())
        return summary


def parse_project(
    root: Path,
    config: NexusOpsConfig | None = None,
    *,
    output_root: Path | None = None,
) -> RunSummary:
    """Convenience wrapper: one ProjectEmitter run over ``root``."""
    return ProjectEmitter(config, output_root=output_root).run(root)
