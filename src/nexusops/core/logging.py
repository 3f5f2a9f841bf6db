"""Structured logging for generation runs.

structlog renders through stdlib ``logging`` handlers, one per configured
output, so console and file outputs can use different formats and levels.
Console handlers go quiet while a progress bar owns the terminal.

Every event emitted during a run carries the run's ``run_id``, bound as a
structlog context variable::

    set_run_id()
    get_logger("emit").info("artifact_saved", name="Foo")
    # ... run_id=3f9c0a1b2c4d event=artifact_saved name=Foo
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars, get_contextvars, unbind_contextvars

if TYPE_CHECKING:
    from nexusops.config.models import LoggingConfig, LogOutputConfig

_STREAMS = ("stderr", "stdout")

# First file output of the active configuration, shown by the CLI on failure
_log_file_path: Path | None = None


# =========================================================================
# Run correlation
# =========================================================================


def get_run_id() -> str | None:
    return get_contextvars().get("run_id")


def set_run_id(run_id: str | None = None) -> str:
    """Bind a run id to all subsequent events in this context; generated if omitted."""
    rid = run_id or uuid4().hex[:12]
    bind_contextvars(run_id=rid)
    return rid


def clear_run_id() -> None:
    unbind_contextvars("run_id")


def get_log_file_path() -> Path | None:
    """Where detailed logs of the current configuration go, if anywhere on disk."""
    return _log_file_path


# =========================================================================
# Handlers
# =========================================================================


class ConsoleSuppressingFilter(logging.Filter):
    """Drop console log records while a Rich live display owns the terminal.

    File handlers never get this filter, so they keep receiving everything.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from nexusops.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _level(name: str | None, default: int) -> int:
    if name is None:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def _is_console(output: LogOutputConfig) -> bool:
    return output.destination in _STREAMS


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    colors = _is_console(output) and getattr(sys, output.destination).isatty()
    return structlog.dev.ConsoleRenderer(
        colors=colors,
        pad_event_to=0,
        pad_level=False,
    )


def _handler(output: LogOutputConfig) -> logging.Handler:
    handler: logging.Handler
    if _is_console(output):
        handler = logging.StreamHandler(getattr(sys, output.destination))
        handler.addFilter(ConsoleSuppressingFilter())
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    return handler


# =========================================================================
# Setup
# =========================================================================


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Install structlog and the root logger's handlers.

    Args:
        config: Outputs and levels. When omitted, a single stderr output is
            built from ``json_format`` and ``level``.
        json_format: Render the default output as JSON lines.
        level: Root level for the default output.
    """
    global _log_file_path
    from nexusops.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    root_level = _level(config.level, logging.INFO)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration (tests, -v) must reach loggers created earlier
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)

    _log_file_path = None
    for output in config.outputs:
        handler = _handler(output)
        handler.setLevel(_level(output.level, root_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output),
                foreign_pre_chain=pre_chain,
            )
        )
        root.addHandler(handler)
        if _log_file_path is None and not _is_console(output):
            _log_file_path = Path(output.destination)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """A structlog logger, tagged with ``logger=name`` when a name is given."""
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
