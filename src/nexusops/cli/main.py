"""nexus-ops CLI."""

import click

from nexusops.cli.generate import generate_command


@click.group()
@click.version_option(version="0.1.0", prog_name="nexus-ops")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """nexus-ops - generic JSON syntax trees for source projects."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


cli.add_command(generate_command, name="generate")


if __name__ == "__main__":
    cli()
