"""Core module exports."""

from nexusops.core.errors import (
    ConfigError,
    ErrorCode,
    FileReadError,
    NexusOpsError,
    ParseError,
    SaveError,
    TreeDepthError,
    WalkError,
)
from nexusops.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from nexusops.core.progress import pluralize, progress, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FileReadError",
    "NexusOpsError",
    "ParseError",
    "SaveError",
    "TreeDepthError",
    "WalkError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "progress",
    "status",
]
