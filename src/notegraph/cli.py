"""CLI entrypoint for notegraph."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from notegraph import __version__
from notegraph.config import settings_for_vault
from notegraph.environment import Environment
from notegraph.errors import NotegraphError
from notegraph.index import VaultIndex
from notegraph.logging_config import configure_logging
from notegraph.navigator import Navigator
from notegraph.query import filter_notes
from notegraph.stats import FIGURES, compute

_FIGURE_LABELS = {
    "note_count": "Notes",
    "word_count": "Words",
    "char_count": "Characters",
    "tag_count": "Distinct tags",
    "link_count": "Links",
    "broken_links": "Broken links",
}


@click.group()
@click.version_option(__version__, prog_name="notegraph")
@click.option(
    "--vault",
    "-v",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=".",
    show_default=True,
    help="Path to the vault directory",
)
@click.option("--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, vault: Path, verbose: bool) -> None:
    """notegraph - link and tag statistics for a vault of markdown notes."""
    configure_logging(verbose)
    try:
        settings = settings_for_vault(vault)
    except NotegraphError as exc:
        raise click.ClickException(str(exc)) from exc
    index = VaultIndex(vault, settings)
    index.build()
    ctx.ensure_object(dict)
    ctx.obj["index"] = index


def _local_environment(index: VaultIndex, query: tuple[str, ...], match_any: bool) -> Environment:
    return filter_notes(index.graph, " ".join(query), match_any=match_any or index.settings.match_any)


@cli.command()
@click.argument("query", nargs=-1)
@click.option("--any", "match_any", is_flag=True, help="Notes need to satisfy only one tag/link condition")
@click.pass_context
def stats(ctx: click.Context, query: tuple[str, ...], match_any: bool) -> None:
    """Compare the notes matching QUERY with the whole vault."""
    index: VaultIndex = ctx.obj["index"]
    graph = index.graph
    global_env = Environment.of(graph)
    local = compute(graph, _local_environment(index, query, match_any), global_env)
    total = local.reference

    table = Table(title=f"Statistics for '{' '.join(query)}'" if query else "Statistics")
    table.add_column("Figure", style="cyan", no_wrap=True)
    table.add_column("Global", justify="right")
    table.add_column("Local", justify="right")
    table.add_column("Share", justify="right", style="dim")
    for figure in FIGURES:
        table.add_row(
            _FIGURE_LABELS[figure],
            str(getattr(total, figure)),
            str(getattr(local, figure)),
            f"{local.share(figure):.1f}%",
        )
    console = Console()
    console.print(table)

    partition = local.partition
    console.print(
        f"Internal links: {partition.internal}  "
        f"Incoming links: {partition.incoming}  "
        f"Outgoing links: {partition.outgoing}"
    )


@cli.command("filter")
@click.argument("query", nargs=-1)
@click.option("--any", "match_any", is_flag=True, help="Notes need to satisfy only one tag/link condition")
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def filter_cmd(ctx: click.Context, query: tuple[str, ...], match_any: bool, output_json: bool) -> None:
    """List the notes matching QUERY with their link figures."""
    index: VaultIndex = ctx.obj["index"]
    graph = index.graph
    local = compute(graph, _local_environment(index, query, match_any), Environment.of(graph))

    if output_json:
        click.echo(json.dumps([asdict(member) for member in local.members], indent=2))
        return

    table = Table(title=f"{local.note_count} notes")
    table.add_column("Note", style="cyan")
    table.add_column("In (local/global)", justify="right")
    table.add_column("Out (local/global)", justify="right")
    table.add_column("Broken", justify="right", style="red")
    for member in local.members:
        table.add_row(
            member.name,
            f"{member.inlinks_local}/{member.inlinks_global}",
            f"{member.outlinks_local}/{member.outlinks_global}",
            str(member.broken_links),
        )
    Console().print(table)


@cli.command()
@click.argument("note")
@click.pass_context
def links(ctx: click.Context, note: str) -> None:
    """Show links and backlinks of NOTE, one and two steps away."""
    index: VaultIndex = ctx.obj["index"]
    navigator = Navigator(index.graph, history_limit=index.settings.history_limit)
    try:
        hood = navigator.select(note)
    except NotegraphError as exc:
        raise click.ClickException(str(exc)) from exc

    console = Console()
    console.print(f"[bold]{hood.name}[/bold]")
    for label, names in (
        ("Links", hood.links),
        ("Backlinks", hood.backlinks),
        ("Level-2 links", hood.links_level2),
        ("Level-2 backlinks", hood.backlinks_level2),
    ):
        console.print(f"[cyan]{label}[/cyan] ({len(names)}): {', '.join(names) or '-'}")


@cli.command()
@click.pass_context
def tags(ctx: click.Context) -> None:
    """List every tag with the number of notes carrying it."""
    index: VaultIndex = ctx.obj["index"]
    table = Table(title="Tags")
    table.add_column("Tag", style="magenta")
    table.add_column("Notes", justify="right")
    for row in index.graph.tag_counts().iter_rows(named=True):
        table.add_row(row["tag"], str(row["note_count"]))
    Console().print(table)


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
