# ABOUTME: Shared Click options for shelfscan CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db and --category.

from pathlib import Path

import click

from shelfscan.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to library database (default: $SHELFSCAN_DB or {DEFAULT_DB_PATH})",
)

category_option = click.option(
    "--category",
    default=None,
    help="Category to assign to added books (default: $SHELFSCAN_CATEGORY).",
)
