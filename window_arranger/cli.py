"""
window-arranger CLI

Usage:
    window-arranger apply [--config PATH] [--builtin] [--settle-delay S] [--no-wait] [--json]
    window-arranger monitors [--json]
    window-arranger windows [--json]
    window-arranger validate [--config PATH] [--json]
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from . import displays
from .builtin_rules import BUILTIN_RULES
from .config import DEFAULT_CONFIG_PATH, ConfigLoader
from .engine import MonitorIndexNormalizer
from .errors import ArrangerError, ConfigLoadError
from .extension import LayoutExtension
from .platform import I3Platform

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, default_level: int = logging.WARNING) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: Enable verbose (DEBUG) logging
        default_level: Level used without --verbose
    """
    level = logging.DEBUG if verbose else default_level
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def _connect() -> I3Platform:
    return await I3Platform().connect()


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Arrange running windows onto monitors, workspaces and screen regions."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option('--config', 'config_path', type=click.Path(path_type=Path), default=None,
              help=f'Layout file (default: {DEFAULT_CONFIG_PATH})')
@click.option('--builtin', is_flag=True, help='Use the built-in layout instead of a layout file')
@click.option('--settle-delay', type=click.FloatRange(min=0), default=None,
              help='Fixed pause between window manager mutations, in seconds')
@click.option('--no-wait', is_flag=True, help='Always use fixed pauses instead of polling window state')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def apply(ctx: click.Context, config_path: Optional[Path], builtin: bool,
          settle_delay: Optional[float], no_wait: bool, output_json: bool):
    """
    Apply a layout once.

    Exit codes:
      0 - Layout applied (individual rules may have been skipped)
      1 - Aborted before touching any window
    """
    setup_logging(ctx.obj["verbose"], default_level=logging.INFO)
    console = Console()

    overrides = {}
    if settle_delay is not None:
        overrides["settle_delay"] = settle_delay
    if no_wait:
        overrides["wait_for_state"] = False

    extension = LayoutExtension(
        config_path=config_path,
        rules=BUILTIN_RULES if builtin else None,
        overrides=overrides,
    )
    extension.init()
    try:
        report = asyncio.run(extension.enable())
    finally:
        extension.disable()

    if report is None:
        console.print("[red]Layout not applied, see log for details[/red]")
        sys.exit(1)

    if output_json:
        click.echo(displays.format_json(displays.report_to_dict(report)))
    else:
        displays.display_report(report, console)
    sys.exit(0)


@cli.command()
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def monitors(ctx: click.Context, output_json: bool):
    """List monitors with the screen index layouts use for them."""
    setup_logging(ctx.obj["verbose"])
    console = Console()

    async def query():
        platform = await _connect()
        return await MonitorIndexNormalizer(platform).normalize()

    try:
        layout = asyncio.run(query())
    except ArrangerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        sys.exit(2)

    if output_json:
        click.echo(displays.format_json(displays.monitors_to_dict(layout)))
    else:
        displays.display_monitors(layout, console)


@cli.command()
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def windows(ctx: click.Context, output_json: bool):
    """List open windows and the class rules match them by."""
    setup_logging(ctx.obj["verbose"])
    console = Console()

    async def query():
        platform = await _connect()
        return await platform.get_windows()

    try:
        open_windows = asyncio.run(query())
    except ArrangerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        sys.exit(2)

    if output_json:
        click.echo(displays.format_json(displays.windows_to_dict(open_windows)))
    else:
        displays.display_windows(open_windows, console)


@cli.command()
@click.option('--config', 'config_path', type=click.Path(path_type=Path), default=None,
              help=f'Layout file (default: {DEFAULT_CONFIG_PATH})')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def validate(ctx: click.Context, config_path: Optional[Path], output_json: bool):
    """
    Check a layout file without touching any window.

    Exit codes:
      0 - All records valid
      1 - File unreadable or some records rejected
    """
    setup_logging(ctx.obj["verbose"])
    console = Console()
    loader = ConfigLoader(config_path)

    try:
        config = loader.load()
    except ConfigLoadError as e:
        if output_json:
            click.echo(displays.format_json({"valid": False, "error": e.to_dict()}))
        else:
            console.print(f"[red]Error: {e.message}[/red]")
            if e.suggestion:
                console.print(f"  → {e.suggestion}")
        sys.exit(1)

    if output_json:
        click.echo(displays.format_json(displays.config_to_dict(config)))
    else:
        displays.display_validation(config, str(loader.config_path), console)

    sys.exit(0 if config.valid else 1)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
