"""Main CLI entry point and application setup."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
from click.exceptions import Exit
from rich.console import Console

from bindlib import __version__
from bindlib.cli.commands import library
from bindlib.config import BACKENDS, Config, create_registry, load_config
from bindlib.storage.events import ShutdownNotifier
from bindlib.storage.registry import LibraryRegistry


@dataclass
class Context:
    """CLI context that holds shared resources."""

    registry: LibraryRegistry
    console: Console
    config: dict[str, Any]
    debug: bool = False


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


class BindlibGroup(click.Group):
    """Custom group that handles KeyboardInterrupt."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {e}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=BindlibGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--data-dir",
    "-d",
    type=click.Path(path_type=Path),
    help="Override data directory location",
)
@click.option(
    "--backend",
    "-b",
    type=click.Choice(BACKENDS),
    help="Storage backend to use",
)
@click.version_option(
    version=__version__, prog_name="bindlib", message="bindlib version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
    data_dir: Path | None,
    backend: str | None,
) -> None:
    """Binding library tool.

    Inspect, export, copy and delete persisted anchor and scene binding
    libraries.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)
    console = create_console(no_color=no_color)

    try:
        config_data = load_config(config)
    except ValueError as e:
        if debug:
            raise
        click.echo(f"Error loading config file: {e}", err=True)
        ctx.exit(1)

    config_data = Config.merge_configs(
        config_data, {"data_dir": data_dir, "backend": backend}
    )

    try:
        # CLI sessions never save on exit; commands save explicitly
        registry = create_registry(config_data, notifier=ShutdownNotifier())
    except ValueError as e:
        if debug:
            raise
        console.print(f"[red]Error initializing application:[/red] {e}")
        ctx.exit(1)

    ctx.obj = Context(
        registry=registry,
        console=console,
        config=config_data,
        debug=debug,
    )


# Register commands
cli.add_command(library.show)
cli.add_command(library.export)
cli.add_command(library.delete)
cli.add_command(library.copy)


def main() -> None:
    """Console script entry point."""
    cli()
