"""Project walking and artifact emission."""

from nexusops.project.emitter import artifact_path, dumps_tree, write_artifact
from nexusops.project.models import (
    Artifact,
    FileOutcome,
    FileResult,
    ProcessedFile,
    RunSummary,
)
from nexusops.project.ops import ProjectEmitter, parse_project
from nexusops.project.walker import ProjectWalker, SourceFile

__all__ = [
    "Artifact",
    "FileOutcome",
    "FileResult",
    "ProcessedFile",
    "ProjectEmitter",
    "ProjectWalker",
    "RunSummary",
    "SourceFile",
    "artifact_path",
    "dumps_tree",
    "parse_project",
    "write_artifact",
]
