# ABOUTME: CLI package for shelfscan, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from shelfscan.cli.commands import add_cmd, edit_cmd, ls_cmd, scan_cmd


@click.group()
@click.version_option(package_name="shelfscan")
@click.option("-v", "--verbose", count=True, help="Log pipeline activity (-vv for debug).")
def cli(verbose: int) -> None:
    """shelfscan - scan ISBN barcodes into a personal book collection."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


cli.add_command(scan_cmd.scan)
cli.add_command(add_cmd.add)
cli.add_command(ls_cmd.ls)
cli.add_command(edit_cmd.status)
cli.add_command(edit_cmd.category)
cli.add_command(edit_cmd.rm)
