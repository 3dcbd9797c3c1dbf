# ABOUTME: The `shelfscan scan` command for continuous barcode scanning.
# ABOUTME: Feeds camera or stdin decodes through the reconciliation pipeline and prints outcomes.

import asyncio
import math
import sys
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console

from shelfscan.cli import runtime
from shelfscan.cli.options import category_option, db_option
from shelfscan.config import ShelfscanConfig
from shelfscan.db.store import StoreError
from shelfscan.metadata.http import ShelfscanHttpClient
from shelfscan.scanning import IsbnPolicy, build_pipeline
from shelfscan.scanning.decoder import (
    DecoderAdapter,
    DecoderUnavailableError,
    camera_decoder,
    line_decoder,
)


async def _run_scan(
    console: Console,
    config: ShelfscanConfig,
    adapter: DecoderAdapter,
    db_path: Path | None,
) -> None:
    http_client = ShelfscanHttpClient()
    try:
        async with runtime.open_collection(config, db_path) as collection:
            pipeline = build_pipeline(
                runtime.create_resolver(http_client),
                collection,
                policy=config.isbn_policy,
                cooldown=config.cooldown,
                category=config.category,
                acknowledge=console.bell,
                sink=lambda outcome, message: runtime.print_outcome(console, outcome, message),
            )
            await pipeline.consume(adapter.stream())
    finally:
        await http_client.aclose()


def _finite_cooldown(
    ctx: click.Context, param: click.Parameter, value: float | None
) -> float | None:
    if value is not None and not math.isfinite(value):
        raise click.BadParameter("must be a finite number of seconds")
    return value


@click.command("scan")
@click.option(
    "--camera",
    "device",
    type=int,
    default=0,
    help="Camera device index (default: 0).",
)
@click.option(
    "--stdin",
    "use_stdin",
    is_flag=True,
    default=False,
    help="Read one code per line from stdin (USB scanners) instead of a camera.",
)
@click.option(
    "--policy",
    type=click.Choice(["strict", "loose"], case_sensitive=False),
    default=None,
    help="ISBN shape policy: strict 978/979 13-digit, or loose 978 prefix.",
)
@click.option(
    "--cooldown",
    type=click.FloatRange(min=0.0),
    default=None,
    callback=_finite_cooldown,
    help="Seconds before the same barcode can be scanned again (default: 3).",
)
@category_option
@db_option
def scan(
    device: int,
    use_stdin: bool,
    policy: str | None,
    cooldown: float | None,
    category: str | None,
    db_path: Path | None,
) -> None:
    """Scan ISBN barcodes continuously and add each book to the collection."""
    console = Console()
    config = runtime.load_config_or_exit(console)
    config = replace(
        config,
        isbn_policy=IsbnPolicy.from_name(policy) if policy else config.isbn_policy,
        cooldown=config.cooldown if cooldown is None else cooldown,
        category=category or config.category,
    )

    adapter = line_decoder(sys.stdin) if use_stdin else camera_decoder(device)
    if not use_stdin:
        console.print("[dim]Hold a barcode up to the camera. Ctrl+C to stop.[/dim]")

    try:
        asyncio.run(_run_scan(console, config, adapter, db_path))
    except DecoderUnavailableError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    except StoreError as exc:
        console.print(f"[red]Store error: {exc}[/red]")
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        console.print("[dim]Scanning stopped.[/dim]")
