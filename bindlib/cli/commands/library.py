"""Library inspection and maintenance commands."""

from pathlib import Path

import click
from rich.prompt import Confirm
from rich.table import Table

from bindlib.storage.backends.base import BindingLibrary
from bindlib.storage.backends.dictionary import DictionaryLibrary
from bindlib.storage.serialization import export_json


def get_registry(ctx):
    """Get the library registry from context."""
    return ctx.obj.registry


def _open_library(ctx: click.Context, library_id: str) -> BindingLibrary:
    library = get_registry(ctx).get_library(library_id, persist_on_shutdown=False)
    if library is None:
        raise click.BadParameter("library id can't be empty", param_hint="LIBRARY_ID")
    return library


def _format_vector(values: tuple[float, ...]) -> str:
    return "(" + ", ".join(f"{v:.3f}" for v in values) + ")"


@click.command()
@click.argument("library_id")
@click.pass_context
def show(ctx: click.Context, library_id: str) -> None:
    """Show the bindings stored in a library."""
    console = ctx.obj.console
    library = _open_library(ctx, library_id)

    console.print(
        f"[bold]{library.library_id}[/bold] "
        f"point bindings: {library.point_bindings_count} | "
        f"scene bindings: {library.scene_bindings_count}"
    )

    if library.point_bindings_count:
        table = Table(title="Point bindings")
        table.add_column("Key", style="cyan")
        table.add_column("Anchor")
        table.add_column("Position")
        table.add_column("Rotation")
        for key in sorted(library.point_keys()):
            _, binding = library.try_get_point_binding(key)
            table.add_row(
                key,
                binding.anchor_id,
                _format_vector(binding.position),
                _format_vector(binding.rotation),
            )
        console.print(table)

    if library.scene_bindings_count:
        table = Table(title="Scene bindings")
        table.add_column("Key", style="cyan")
        table.add_column("Anchors", justify="right")
        table.add_column("Anchor ids")
        for key in sorted(library.scene_keys()):
            _, binding = library.try_get_scene_binding(key)
            table.add_row(key, str(len(binding.points)), ", ".join(binding.anchor_ids))
        console.print(table)


@click.command()
@click.argument("library_id")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write JSON to a file instead of stdout",
)
@click.pass_context
def export(ctx: click.Context, library_id: str, output: Path | None) -> None:
    """Export a library as JSON."""
    library = _open_library(ctx, library_id)
    if not isinstance(library, DictionaryLibrary):
        raise click.ClickException(
            f"Export is not supported for {type(library).__name__}"
        )

    points, scenes = library.snapshot()
    text = export_json(library.library_id, points, scenes)

    if output:
        output.write_text(text + "\n")
        ctx.obj.console.print(f"[green]✓[/green] Exported {library_id} to {output}")
    else:
        click.echo(text)


@click.command()
@click.argument("library_id")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def delete(ctx: click.Context, library_id: str, yes: bool) -> None:
    """Delete a library from its storage medium."""
    console = ctx.obj.console

    if not yes and not Confirm.ask(f"Delete library {library_id}?"):
        console.print("[yellow]Deletion cancelled.[/yellow]")
        return

    get_registry(ctx).delete_library(library_id)
    console.print(f"[green]✓[/green] Deleted library {library_id}")


@click.command()
@click.argument("source_id")
@click.argument("target_id")
@click.option(
    "--replace",
    is_flag=True,
    help="Clear the target library before copying",
)
@click.pass_context
def copy(ctx: click.Context, source_id: str, target_id: str, replace: bool) -> None:
    """Copy every binding of a library into another library."""
    console = ctx.obj.console
    if source_id == target_id:
        raise click.BadParameter("source and target must differ", param_hint="TARGET_ID")

    source = _open_library(ctx, source_id)
    target = _open_library(ctx, target_id)

    if replace:
        target.clear()

    for key in source.point_keys():
        _, binding = source.try_get_point_binding(key)
        target.set_point_binding(key, binding)
    for key in source.scene_keys():
        _, binding = source.try_get_scene_binding(key)
        target.set_scene_binding(key, binding)

    get_registry(ctx).save_library(target_id)
    console.print(
        f"[green]✓[/green] Copied {source.point_bindings_count} point and "
        f"{source.scene_bindings_count} scene bindings into {target_id}"
    )
