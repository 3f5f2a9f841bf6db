"""Config module exports."""

from nexusops.config.loader import NexusOpsSettings, load_config
from nexusops.config.models import (
    EmitConfig,
    LoggingConfig,
    LogOutputConfig,
    NexusOpsConfig,
    ParseConfig,
    WalkConfig,
)

__all__ = [
    "load_config",
    "NexusOpsConfig",
    "NexusOpsSettings",
    "EmitConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ParseConfig",
    "WalkConfig",
]
