"""nexus-ops error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Generation (walk, read, parse, reduce, save)

Only WALK_ERROR and config errors abort a run. Every other generation error
is scoped to a single source file: it is logged and the run moves on.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_UNKNOWN_LANGUAGE = 2003

    # Generation (3xxx)
    WALK_ERROR = 3001
    FILE_READ_ERROR = 3002
    PARSE_ERROR = 3003
    TREE_DEPTH_EXCEEDED = 3004
    SAVE_ERROR = 3005


@dataclass(frozen=True, slots=True)
class NexusOpsError(Exception):
    """Base error with structured context for logs and CLI output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured log events."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(NexusOpsError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def unknown_language(cls, language: str, known: list[str]) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_UNKNOWN_LANGUAGE,
            message=f"Unknown language '{language}' (known: {', '.join(sorted(known))})",
            details={"language": language, "known": sorted(known)},
        )


class WalkError(NexusOpsError):
    """The project root could not be enumerated at all."""

    @classmethod
    def from_os_error(cls, root: str, err: OSError) -> "WalkError":
        return cls(
            code=ErrorCode.WALK_ERROR,
            message=f"Cannot walk project directory {root}: {err.strerror or err}",
            details={"path": root, "errno": err.errno},
        )

    @classmethod
    def not_a_directory(cls, root: str) -> "WalkError":
        return cls(
            code=ErrorCode.WALK_ERROR,
            message=f"Project root is not a directory: {root}",
            details={"path": root},
        )


class FileReadError(NexusOpsError):
    """A single source file could not be read."""

    @classmethod
    def from_os_error(cls, path: str, err: OSError) -> "FileReadError":
        return cls(
            code=ErrorCode.FILE_READ_ERROR,
            message=f"Cannot read {path}: {err.strerror or err}",
            details={"path": path, "errno": err.errno},
        )

    @classmethod
    def too_large(cls, path: str, size: int, limit: int) -> "FileReadError":
        return cls(
            code=ErrorCode.FILE_READ_ERROR,
            message=f"File {path} is {size} bytes, over the {limit} byte limit",
            details={"path": path, "size": size, "limit": limit},
        )


class ParseError(NexusOpsError):
    """A single source file could not be parsed into a usable tree."""

    @classmethod
    def grammar_unavailable(cls, language: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_ERROR,
            message=f"Grammar not available for {language}: {reason}",
            details={"language": language, "reason": reason},
        )

    @classmethod
    def syntax_errors(cls, path: str, error_count: int) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_ERROR,
            message=f"{path} contains {error_count} syntax error node(s)",
            details={"path": path, "error_count": error_count},
        )

    @classmethod
    def parser_failed(cls, path: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_ERROR,
            message=f"Parser failed on {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class TreeDepthError(NexusOpsError):
    """A concrete tree nests deeper than the configured cap."""

    @classmethod
    def exceeded(cls, limit: int, node_type: str) -> "TreeDepthError":
        return cls(
            code=ErrorCode.TREE_DEPTH_EXCEEDED,
            message=f"Syntax tree deeper than {limit} levels (at {node_type})",
            details={"limit": limit, "node_type": node_type},
        )

    @classmethod
    def stack_exhausted(cls, limit: int, recursion_limit: int) -> "TreeDepthError":
        return cls(
            code=ErrorCode.TREE_DEPTH_EXCEEDED,
            message=(
                f"Syntax tree exhausted the interpreter stack (recursion limit {recursion_limit}) "
                f"before reaching the depth cap of {limit}"
            ),
            details={"limit": limit, "recursion_limit": recursion_limit},
        )


class SaveError(NexusOpsError):
    """An artifact could not be serialized or written."""

    @classmethod
    def from_os_error(cls, path: str, err: OSError) -> "SaveError":
        return cls(
            code=ErrorCode.SAVE_ERROR,
            message=f"Cannot write {path}: {err.strerror or err}",
            details={"path": path, "errno": err.errno},
        )

    @classmethod
    def serialization_failed(cls, path: str, reason: str) -> "SaveError":
        return cls(
            code=ErrorCode.SAVE_ERROR,
            message=f"Cannot serialize tree for {path}: {reason}",
            details={"path": path, "reason": reason},
        )
