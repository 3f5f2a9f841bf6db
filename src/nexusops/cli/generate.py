"""nexus-ops generate command - one JSON tree per top-level declaration."""

from pathlib import Path
from typing import Any

import click

from nexusops.config import load_config
from nexusops.core.errors import ConfigError, ParseError, WalkError
from nexusops.core.logging import clear_run_id, configure_logging, get_log_file_path, set_run_id
from nexusops.core.progress import get_console, make_counts_table, pluralize, status
from nexusops.parsing.packs import language_names
from nexusops.project.ops import ProjectEmitter


def _overrides(
    output: Path | None,
    language: str | None,
    workers: int | None,
    allow_syntax_errors: bool,
    verbose: bool,
) -> dict[str, Any]:
    """CLI flags as load_config() kwargs, leaving unset flags to lower layers."""
    kwargs: dict[str, Any] = {}
    if output is not None:
        kwargs.setdefault("emit", {})["output_dir"] = str(output)
    if workers is not None:
        kwargs.setdefault("emit", {})["max_workers"] = workers
    if language is not None:
        kwargs.setdefault("parse", {})["language"] = language
    if allow_syntax_errors:
        kwargs.setdefault("parse", {})["allow_syntax_errors"] = True
    if verbose:
        kwargs["logging"] = {"level": "DEBUG"}
    return kwargs


@click.command()
@click.option(
    "-d",
    "--directory",
    "directory",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Project root to scan.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output root for JSON artifacts [default: output].",
)
@click.option(
    "-l",
    "--language",
    type=click.Choice(language_names(), case_sensitive=False),
    default=None,
    help="Language pack [default: java].",
)
@click.option("-w", "--workers", type=click.IntRange(min=1), default=None, help="Parallel files.")
@click.option(
    "--allow-syntax-errors",
    is_flag=True,
    help="Emit trees even when the file has syntax errors.",
)
@click.pass_context
def generate_command(
    ctx: click.Context,
    directory: Path,
    output: Path | None,
    language: str | None,
    workers: int | None,
    allow_syntax_errors: bool,
) -> None:
    """Write a JSON tree for each class or interface under DIRECTORY.

    Artifacts land in OUTPUT/<relative dir>/<Name>.json. Files that cannot
    be read, parsed or saved are logged and skipped; only a project root
    that cannot be walked fails the command.
    """
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    root = directory.resolve()

    try:
        config = load_config(
            root, **_overrides(output, language, workers, allow_syntax_errors, verbose)
        )
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    configure_logging(config=config.logging)
    set_run_id()

    status(f"Generating JSON trees for {config.parse.language} sources in {root}")
    try:
        summary = ProjectEmitter(config).run(root)
    except (WalkError, ConfigError, ParseError) as e:
        status(e.message, style="error")
        if log_path := get_log_file_path():
            status(f"Details: {log_path}", indent=2)
        raise click.ClickException(str(e)) from e
    finally:
        clear_run_id()

    artifacts = len(summary.artifacts)
    failures = len(summary.failures)
    status(
        f"{pluralize(artifacts, 'artifact')} written to {summary.output_root}",
        style="success" if artifacts else "warning",
    )
    get_console().print(make_counts_table(summary.counts()))
    if failures:
        status(f"{pluralize(failures, 'file')} failed; see log for details", style="warning")
