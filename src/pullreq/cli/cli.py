import logging

import click

from pullreq.cli.commands.create_cmd import create_cmd
from pullreq.core.context import create_context


@click.group()
@click.version_option(package_name="pullreq")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be pushed and created without changing anything remotely",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, dry_run: bool) -> None:
    """Create GitHub pull requests from the current branch."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=dry_run)


cli.add_command(create_cmd)


def main() -> None:
    """CLI entry point used by the `pullreq` console script."""
    cli()
