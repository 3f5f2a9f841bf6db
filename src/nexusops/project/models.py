"""Result models for a generation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from nexusops.core.errors import NexusOpsError
from nexusops.tree.models import Node


class FileOutcome(Enum):
    """What happened to one source file."""

    EMITTED = "emitted"
    NO_DECLARATION = "no_declaration"
    READ_FAILED = "read_failed"
    PARSE_FAILED = "parse_failed"
    SAVE_FAILED = "save_failed"


@dataclass(frozen=True)
class Artifact:
    """One JSON file written for a located declaration."""

    name: str
    source_path: Path
    output_path: Path


@dataclass
class ProcessedFile:
    """A source file after read, parse, reduce and locate (before saving)."""

    path: Path
    rel_dir: Path
    tree: Node | None = None
    name: str | None = None
    ignored_declarations: list[str] = field(default_factory=list)
    error: NexusOpsError | None = None


@dataclass
class FileResult:
    """Final outcome for a source file."""

    path: Path
    outcome: FileOutcome
    artifact: Artifact | None = None
    error: NexusOpsError | None = None


@dataclass
class RunSummary:
    """Aggregate of one run over a project directory."""

    root: Path
    output_root: Path
    results: list[FileResult] = field(default_factory=list)
    skipped_files: int = 0  # Files without a registered extension

    @property
    def artifacts(self) -> list[Artifact]:
        return [r.artifact for r in self.results if r.artifact is not None]

    @property
    def failures(self) -> list[FileResult]:
        return [r for r in self.results if r.error is not None]

    def count(self, outcome: FileOutcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    def counts(self) -> dict[str, int]:
        """Outcome name -> number of files, in FileOutcome order."""
        return {outcome.value: self.count(outcome) for outcome in FileOutcome}
