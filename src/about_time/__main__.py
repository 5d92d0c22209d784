"""CLI Runner for About Time.

Usage:
    about-time templates list
    about-time lane search <query>
    about-time lane show <lane_id>
    about-time lane tree <lane_id> [--max-depth 3]
    about-time lane items <lane_id>
    about-time lane timeline <lane_id> --output lane.html
    about-time lane check-cycle <parent_id> <candidate_id>
    about-time lane arrange <lane_id> [--mode pack|space-between|interval] [--gap 0]
    about-time lane insert-gap <lane_id> <index> <gap_ms>
    about-time lane fit <lane_id>
"""

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from about_time import __version__

console = Console()


def get_storage(ctx: click.Context):
    """Storage for the template library configured for this invocation."""
    from about_time.config import get_settings
    from about_time.services.template_storage import TemplateStorage

    library_path = ctx.obj.get("library") or get_settings().library_path
    return TemplateStorage(library_path, on_quota_exceeded=lambda msg: console.print(f"[red]{msg}[/red]"))


def load_store(ctx: click.Context):
    """Load the template store configured for this invocation."""
    return get_storage(ctx).load()


def save_lane(ctx: click.Context, store, lane_template) -> None:
    """Write an edited lane back to the library and print its segments, or exit on failure."""
    from about_time.utils.time_utils import format_duration

    if not get_storage(ctx).save(store.with_template(lane_template)):
        console.print(f"[red]Failed to save lane:[/red] {lane_template.id}")
        sys.exit(1)

    console.print(
        f"[green]Saved lane:[/green] {lane_template.intent}"
        f" ({format_duration(lane_template.estimated_duration)})"
    )
    for segment in lane_template.segments:
        console.print(f"  [cyan]{segment.template_id}[/cyan] @ {format_duration(segment.offset)}")


def require_lane(store, lane_id: str):
    """Get a lane from the store or exit with an error."""
    lane = store.get_lane(lane_id)
    if lane is None:
        if lane_id in store:
            console.print(f"[red]Not a lane template:[/red] {lane_id}")
        else:
            console.print(f"[red]Lane not found:[/red] {lane_id}")
        sys.exit(1)
    return lane


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--library", "-L", default=None, type=click.Path(dir_okay=False),
              help="Template library JSON file (default: $ABOUT_TIME_LIBRARY)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, library: Optional[str]):
    """About Time - template composition and timeline layout.

    Compose templates of timed work into lanes and inspect their layout.
    """
    ctx.ensure_object(dict)
    ctx.obj["library"] = library
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# ============================================================================
# Template Commands
# ============================================================================


@cli.group()
def templates():
    """Template library commands."""
    pass


@templates.command("list")
@click.option("--type", "-t", "template_type", default=None,
              type=click.Choice(["atomic", "lane"]), help="Only show one template type")
@click.pass_context
def list_templates(ctx: click.Context, template_type: Optional[str]):
    """List all templates in the library."""
    from about_time.utils.time_utils import format_duration

    store = load_store(ctx)
    rows = [t for t in store.values() if template_type is None or t.template_type == template_type]

    if not rows:
        console.print("No templates found.")
        return

    table = Table(title="Templates")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Intent")
    table.add_column("Duration", justify="right")
    table.add_column("Segments", justify="right")

    for t in rows:
        type_style = "green" if t.template_type == "lane" else "yellow"
        table.add_row(
            t.id,
            f"[{type_style}]{t.template_type}[/{type_style}]",
            t.intent,
            format_duration(t.estimated_duration),
            str(len(t.segments)) if t.is_lane else "-",
        )

    console.print(table)


# ============================================================================
# Lane Commands
# ============================================================================


@cli.group()
def lane():
    """Lane layout commands."""
    pass


@lane.command("search")
@click.argument("query", default="")
@click.pass_context
def search_lanes(ctx: click.Context, query: str):
    """Search lanes by intent (case-insensitive substring)."""
    from about_time.services.suggestion_index import suggest

    store = load_store(ctx)
    results = suggest(query, store.lane_templates())

    if not results:
        console.print("No matching lanes.")
        return

    for result in results:
        console.print(f"[cyan]{result.id}[/cyan]  {result.intent}")


@lane.command("show")
@click.argument("lane_id")
@click.pass_context
def show_lane(ctx: click.Context, lane_id: str):
    """Show the layout of a lane: segments, hidden children and gaps."""
    from about_time.services.lane_view import build_lane_layout
    from about_time.utils.time_utils import format_duration, format_duration_human

    store = load_store(ctx)
    lane_template = require_lane(store, lane_id)
    layout = build_lane_layout(lane_template, store)

    console.print(f"[bold]{lane_template.intent}[/bold] ({lane_template.id})")
    console.print(f"  Duration: {format_duration_human(layout.duration)}")
    console.print(f"  Nested depth: {layout.nested_depth}")
    console.print(f"  Ruler interval: {layout.ledger.interval.value}{layout.ledger.interval.unit}")

    table = Table(title="Segments")
    table.add_column("Template", style="cyan")
    table.add_column("Intent")
    table.add_column("Offset", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Left %", justify="right")
    table.add_column("Width %", justify="right")
    table.add_column("Depth", justify="right")

    for s in layout.visible_segments:
        left_style = "red" if s.left_percent > 100 else "white"
        table.add_row(
            s.template_id,
            s.template.intent,
            format_duration(s.offset),
            format_duration(s.duration),
            f"[{left_style}]{s.left_percent:.1f}[/{left_style}]",
            f"{s.width_percent:.1f}",
            str(s.nested_depth),
        )

    console.print(table)

    for slot in layout.hidden_slots:
        console.print(f"  [dim]Slot {slot.slot_index}: +{slot.count} hidden[/dim]")

    if layout.empty_regions:
        console.print("[bold]Empty regions:[/bold]")
        for region in layout.empty_regions:
            console.print(
                f"  {format_duration(region.start)} - {format_duration(region.end)}"
                f" ({format_duration(region.duration)})"
            )
    else:
        console.print("No empty regions.")


@lane.command("tree")
@click.argument("lane_id")
@click.option("--max-depth", "-d", default=None, type=int, help="Levels to expand")
@click.pass_context
def show_tree(ctx: click.Context, lane_id: str, max_depth: Optional[int]):
    """Show a lane's nested segments as a tree."""
    from about_time.config import get_settings
    from about_time.services.depth_analyzer import nested_depth

    store = load_store(ctx)
    lane_template = require_lane(store, lane_id)
    limit = max_depth if max_depth is not None else get_settings().max_depth

    def add_children(node: Tree, template, depth: int, path: set[str]) -> None:
        for segment in template.sorted_segments():
            child = store.get(segment.template_id)
            if child is None:
                node.add(f"[red]{segment.template_id} (missing)[/red]")
                continue
            branch = node.add(f"[cyan]{child.id}[/cyan] @ {segment.offset}ms  {child.intent}")
            if not child.is_lane or not child.segments:
                continue
            if child.id in path:
                branch.add("[yellow]cycle[/yellow]")
            elif depth >= limit:
                branch.add(f"[dim]+{nested_depth(child.id, store)} hidden levels[/dim]")
            else:
                add_children(branch, child, depth + 1, path | {child.id})

    root = Tree(f"[bold]{lane_template.intent}[/bold] ({lane_template.id})")
    add_children(root, lane_template, 1, {lane_template.id})
    console.print(root)


@lane.command("items")
@click.argument("lane_id")
@click.pass_context
def list_items(ctx: click.Context, lane_id: str):
    """List a lane's atomic steps in time order, with waiting gaps."""
    from about_time.models import GapListItem
    from about_time.services.list_view import flatten_lane_to_list_items
    from about_time.utils.time_utils import format_duration

    store = load_store(ctx)
    lane_template = require_lane(store, lane_id)
    items = flatten_lane_to_list_items(lane_template, store)

    if not items:
        console.print("Lane is empty.")
        return

    for item in items:
        at = format_duration(item.absolute_offset)
        if isinstance(item, GapListItem):
            console.print(f"[dim]{at:>10}  wait {format_duration(item.duration)}[/dim]")
        else:
            lineage = " > ".join(entry.intent for entry in item.lineage)
            console.print(
                f"{at:>10}  [bold]{item.template.intent}[/bold]"
                f" ({format_duration(item.duration)})  [dim]{lineage}[/dim]"
            )


@lane.command("timeline")
@click.argument("lane_id")
@click.option("--output", "-o", default=None, help="Output HTML file path")
@click.pass_context
def generate_timeline(ctx: click.Context, lane_id: str, output: Optional[str]):
    """Generate an HTML timeline for a lane."""
    from about_time.config import get_settings
    from about_time.services.timeline_visualizer import TimelineVisualizer

    store = load_store(ctx)
    lane_template = require_lane(store, lane_id)
    output_path = output or get_settings().get_output_path(lane_id)

    path = TimelineVisualizer().write_timeline(lane_template, store, output_path)
    console.print(f"[green]Timeline saved to:[/green] {path}")


@lane.command("check-cycle")
@click.argument("parent_id")
@click.argument("candidate_id")
@click.pass_context
def check_cycle(ctx: click.Context, parent_id: str, candidate_id: str):
    """Check whether adding CANDIDATE_ID to PARENT_ID would create a cycle."""
    from about_time.services.depth_analyzer import would_create_circular_dependency

    store = load_store(ctx)
    if would_create_circular_dependency(parent_id, candidate_id, store):
        console.print(f"[red]Circular:[/red] {parent_id} would contain itself through {candidate_id}")
        sys.exit(1)
    console.print(f"[green]OK:[/green] {candidate_id} can be added to {parent_id}")


@lane.command("arrange")
@click.argument("lane_id")
@click.option("--mode", "-m", default="pack", show_default=True,
              type=click.Choice(["pack", "space-between", "interval"]),
              help="How to place the segments")
@click.option("--gap", "-g", default=0, type=click.IntRange(min=0),
              help="Milliseconds between segments for --mode interval")
@click.pass_context
def arrange_lane(ctx: click.Context, lane_id: str, mode: str, gap: int):
    """Rewrite a lane's segment offsets and save the library."""
    from about_time.services.lane_arrangement import (
        distribute_segments_by_interval,
        equally_distribute_segments,
        pack_segments,
    )

    store = load_store(ctx)
    lane_template = require_lane(store, lane_id)

    if mode == "space-between":
        arranged = equally_distribute_segments(lane_template, store)
    elif mode == "interval":
        arranged = distribute_segments_by_interval(lane_template, gap, store)
    else:
        arranged = pack_segments(lane_template, store)

    save_lane(ctx, store, arranged)


@lane.command("insert-gap")
@click.argument("lane_id")
@click.argument("index", type=int)
@click.argument("gap_ms", type=click.IntRange(min=0))
@click.pass_context
def insert_lane_gap(ctx: click.Context, lane_id: str, index: int, gap_ms: int):
    """Open GAP_MS of empty time before the INDEX-th segment (in time order)."""
    from about_time.services.lane_arrangement import insert_gap

    store = load_store(ctx)
    lane_template = require_lane(store, lane_id)

    try:
        edited = insert_gap(lane_template, index, gap_ms, store)
    except IndexError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    save_lane(ctx, store, edited)


@lane.command("fit")
@click.argument("lane_id")
@click.pass_context
def fit_lane(ctx: click.Context, lane_id: str):
    """Resize a lane to end where its segments end."""
    from about_time.services.lane_arrangement import fit_lane_duration_to_last

    store = load_store(ctx)
    lane_template = require_lane(store, lane_id)
    save_lane(ctx, store, fit_lane_duration_to_last(lane_template, store))


if __name__ == "__main__":
    cli()
