"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (NEXUSOPS__SECTION__KEY)
3. Project YAML (<project>/.nexusops/config.yaml)
4. Global YAML (~/.config/nexusops/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    NEXUSOPS__<SECTION>__<KEY>=<VALUE>

Examples:
    NEXUSOPS__LOGGING__LEVEL=DEBUG
    NEXUSOPS__PARSE__LANGUAGE=kotlin
    NEXUSOPS__EMIT__OUTPUT_DIR=/tmp/trees
    NEXUSOPS__EMIT__MAX_WORKERS=4
"""

import sys
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Frames kept free for whatever sits below the reducer on the stack (CLI, pytest)
_STACK_HEADROOM = 150


def max_depth_ceiling() -> int:
    """Largest parse.max_depth whose trees can be both reduced and JSON-encoded."""
    return sys.getrecursionlimit() // 2 - _STACK_HEADROOM


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        NEXUSOPS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG also logs every skipped file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ParseConfig(BaseModel):
    """Parsing and tree reduction configuration.

    Env vars:
        NEXUSOPS__PARSE__LANGUAGE: Language pack to use (java, csharp, kotlin)
        NEXUSOPS__PARSE__MAX_FILE_SIZE_MB: Skip files larger than this
        NEXUSOPS__PARSE__MAX_DEPTH: Syntax tree depth cap
        NEXUSOPS__PARSE__ALLOW_SYNTAX_ERRORS: Emit trees that contain ERROR nodes
    """

    language: str = Field(
        default="java",
        description="Language pack name. Only files with this pack's extensions are read.",
    )
    max_file_size_mb: int = Field(
        default=10,
        description="Skip files larger than this (MB). Generated sources can be huge.",
    )
    max_depth: int = Field(
        default=300,
        description="Maximum syntax tree depth. Deeper files are skipped. "
        "Capped by max_depth_ceiling(): reduction recurses once per level and "
        "JSON encoding about twice, both within the interpreter recursion limit.",
    )
    allow_syntax_errors: bool = Field(
        default=False,
        description="Emit artifacts for files whose tree contains syntax errors.",
    )

    @field_validator("language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("max_file_size_mb", "max_depth")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Must be positive, got {v}")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_depth_ceiling(cls, v: int) -> int:
        ceiling = max_depth_ceiling()
        if v > ceiling:
            raise ValueError(
                f"max_depth {v} exceeds {ceiling} (recursion limit {sys.getrecursionlimit()})"
            )
        return v


class WalkConfig(BaseModel):
    """Directory traversal configuration.

    Env vars:
        NEXUSOPS__WALK__USE_DEFAULT_EXCLUDES: Skip build/dependency directories
        NEXUSOPS__WALK__FOLLOW_SYMLINKS: Descend into symlinked directories
    """

    use_default_excludes: bool = Field(
        default=False,
        description="Skip target/, build/, node_modules/ and similar directories. "
        "Off by default: these names are also ordinary package names.",
    )
    exclude_dirs: list[str] = Field(
        default_factory=list,
        description="Extra directory names to skip anywhere in the tree.",
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Descend into symlinked directories. RISK: symlink cycles.",
    )


class EmitConfig(BaseModel):
    """Artifact output configuration.

    Env vars:
        NEXUSOPS__EMIT__OUTPUT_DIR: Output root (relative paths resolve against cwd)
        NEXUSOPS__EMIT__MAX_WORKERS: Files processed in parallel
        NEXUSOPS__EMIT__INDENT: JSON indentation width
    """

    output_dir: str = Field(
        default="output",
        description="Root directory for generated JSON artifacts.",
    )
    max_workers: int = Field(
        default=1,
        description="Files read and reduced in parallel. Writes stay ordered.",
    )
    indent: int = Field(
        default=2,
        description="JSON indentation width.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"indent must be >= 0, got {v}")
        return v


class NexusOpsConfig(BaseModel):
    """Root configuration for nexus-ops.

    All settings can be configured via:
    1. Environment variables: NEXUSOPS__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    parse: ParseConfig = Field(default_factory=ParseConfig)
    walk: WalkConfig = Field(default_factory=WalkConfig)
    emit: EmitConfig = Field(default_factory=EmitConfig)
