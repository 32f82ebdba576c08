"""Command-line interface for Manuscript Graph."""

import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import click
from loguru import logger
from pydantic import TypeAdapter
from rich.console import Console
from rich.table import Table

from manuscript_graph import __version__
from manuscript_graph.config import get_settings
from manuscript_graph.errors import ManuscriptGraphError
from manuscript_graph.models import Contradiction, DialogueLine, EntityGraph, Timeline

console = Console()

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"


def configure_logging(verbose: bool) -> None:
    """Send log output to stderr at DEBUG when verbose, else the configured level."""
    level = "DEBUG" if verbose else get_settings().log_level
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn input errors into click errors (exit code 1)."""
    try:
        yield
    except (ManuscriptGraphError, ValueError) as e:
        # ValueError covers bad JSON and pydantic ValidationError
        raise click.ClickException(str(e)) from e


def load_graph(path: str) -> EntityGraph:
    return EntityGraph.model_validate_json(Path(path).read_text(encoding="utf-8"))


def write_json(path: str, data: object) -> None:
    output_path = Path(path)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    console.print(f"\n[green]✓[/green] Results saved to {output_path}")


def print_graph(graph: EntityGraph, limit: int = 20) -> None:
    """Print entity and relationship tables for a graph."""
    table = Table(title=f"Entities ({len(graph.nodes)})")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Mentions", style="green", justify="right")
    table.add_column("First", justify="right")
    table.add_column("Aliases", style="dim")

    for node in graph.nodes[:limit]:
        table.add_row(
            node.name,
            node.type.value,
            f"{node.mention_count:,}",
            str(node.first_mention),
            ", ".join(node.aliases),
        )
    console.print(table)

    if not graph.edges:
        console.print("[yellow]No relationships found[/yellow]")
        return

    names = {node.id: node.name for node in graph.nodes}
    rel_table = Table(title=f"Relationships ({len(graph.edges)})")
    rel_table.add_column("Source", style="cyan")
    rel_table.add_column("Type", style="magenta")
    rel_table.add_column("Target", style="cyan")
    rel_table.add_column("Co-occurrences", style="green", justify="right")
    rel_table.add_column("Sentiment", justify="right")

    for edge in graph.edges[:limit]:
        rel_table.add_row(
            names.get(edge.source, edge.source),
            edge.type.value,
            names.get(edge.target, edge.target),
            f"{edge.co_occurrences:,}",
            f"{edge.sentiment:+.1f}",
        )
    console.print(rel_table)


def print_contradictions(contradictions: list[Contradiction]) -> None:
    if not contradictions:
        console.print("[green]✓[/green] No contradictions found")
        return

    console.print(f"\n[bold]Contradictions ({len(contradictions)}):[/bold]")
    for contradiction in contradictions:
        color = "red" if contradiction.severity >= 0.9 else "yellow"
        console.print(contradiction.summary() + "\n", style=color, markup=False)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Manuscript Graph - build entity graphs and find contradictions in fiction."""
    configure_logging(verbose)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--chapter", "-c", "chapter_id", help="Chapter id (defaults to the file name)")
@click.option(
    "--dialogues",
    "-d",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON list of dialogue lines whose speakers seed characters",
)
@click.option("--output", "-o", type=click.Path(), help="Output file for the graph (JSON)")
def extract(path: str, chapter_id: str | None, dialogues: str | None, output: str | None) -> None:
    """Extract an entity graph from a single chapter."""
    from manuscript_graph.extract import EntityExtractor
    from manuscript_graph.ingest import load_text, paragraph_spans

    file_path = Path(path)
    chapter_id = chapter_id or file_path.stem

    with reported_errors():
        text = load_text(file_path)
        dialogue_lines: list[DialogueLine] = []
        if dialogues:
            dialogue_lines = TypeAdapter(list[DialogueLine]).validate_json(
                Path(dialogues).read_text(encoding="utf-8")
            )

        paragraphs = paragraph_spans(text)
        console.print(f"[bold]Extracting:[/bold] {chapter_id}")
        console.print(f"[dim]{len(text):,} characters, {len(paragraphs):,} paragraphs[/dim]\n")

        graph = EntityExtractor().extract(text, paragraphs, dialogue_lines, chapter_id)

    print_graph(graph)

    if output:
        write_json(output, graph.to_dict())


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Output file for graph and contradictions (JSON)")
def analyze(path: str, output: str | None) -> None:
    """Extract every chapter of a manuscript, merge the graphs and check for contradictions."""
    from manuscript_graph.extract import EntityExtractor, merge_entity_graphs
    from manuscript_graph.ingest import load_text, paragraph_spans, split_into_chapters
    from manuscript_graph.lore import ContradictionDetector

    file_path = Path(path)

    with reported_errors():
        text = load_text(file_path)
        chapters = split_into_chapters(text)

        console.print(f"[bold]Analyzing:[/bold] {file_path.name}")
        console.print(f"[dim]{len(text):,} characters, {len(chapters)} chapters[/dim]\n")

        extractor = EntityExtractor()
        detector = ContradictionDetector()
        graphs: list[EntityGraph] = []
        contradictions: list[Contradiction] = []

        stats = Table(title="Chapters")
        stats.add_column("Chapter", style="cyan")
        stats.add_column("Title")
        stats.add_column("Entities", style="green", justify="right")
        stats.add_column("Relationships", style="green", justify="right")
        stats.add_column("Contradictions", style="red", justify="right")

        with console.status("Extracting chapters..."):
            for index, (title, chapter_text) in enumerate(chapters, start=1):
                chapter_id = f"chapter{index}"
                graph = extractor.extract(
                    chapter_text, paragraph_spans(chapter_text), (), chapter_id
                )
                found = detector.check(chapter_text, graph, None, chapter_id)
                graphs.append(graph)
                contradictions.extend(found)
                stats.add_row(
                    chapter_id, title, str(len(graph.nodes)), str(len(graph.edges)), str(len(found))
                )

        merged = merge_entity_graphs(graphs)
        contradictions.sort(key=lambda c: c.severity, reverse=True)

    console.print(stats)
    console.print()
    print_graph(merged)
    print_contradictions(contradictions)

    if output:
        write_json(
            output,
            {
                "graph": merged.to_dict(),
                "contradictions": [c.to_dict() for c in contradictions],
            },
        )


@main.command()
@click.argument("graphs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Output file for the merged graph (JSON)")
def merge(graphs: tuple[str, ...], output: str | None) -> None:
    """Merge per-chapter graph files, in the order given."""
    from manuscript_graph.extract import merge_entity_graphs

    with reported_errors():
        merged = merge_entity_graphs([load_graph(p) for p in graphs])

    console.print(f"[bold]Merged {len(graphs)} graphs[/bold]\n")
    print_graph(merged)

    if output:
        write_json(output, merged.to_dict())


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--graph", "-g", "graph_path", required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Graph JSON extracted from this text",
)
@click.option("--timeline", "-t", type=click.Path(exists=True, dir_okay=False), help="Timeline JSON")
@click.option("--chapter", "-c", "chapter_id", help="Chapter id stamped on claims")
@click.option("--threshold", type=float, default=0.0, show_default=True, help="Minimum severity to report")
@click.option("--output", "-o", type=click.Path(), help="Output file for contradictions (JSON)")
def check(
    path: str,
    graph_path: str,
    timeline: str | None,
    chapter_id: str | None,
    threshold: float,
    output: str | None,
) -> None:
    """Check a chapter for contradictions against its entity graph."""
    from manuscript_graph.ingest import load_text
    from manuscript_graph.lore import ContradictionDetector, high_severity_contradictions

    with reported_errors():
        text = load_text(Path(path))
        graph = load_graph(graph_path)
        events = None
        if timeline:
            events = Timeline.model_validate_json(Path(timeline).read_text(encoding="utf-8"))

        found = ContradictionDetector().check(text, graph, events, chapter_id)

    contradictions = high_severity_contradictions(found, threshold)
    print_contradictions(contradictions)

    if output:
        write_json(output, [c.to_dict() for c in contradictions])


@main.command()
@click.argument("graph_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("name")
def related(graph_path: str, name: str) -> None:
    """Look up an entity by (fuzzy) name and list its relationships."""
    from manuscript_graph.graph import find_entity, related_entities

    with reported_errors():
        graph = load_graph(graph_path)

    node, confidence = find_entity(graph, name)
    if node is None:
        raise click.ClickException(f"No entity matching {name!r}")

    console.print(f"[bold]{node.name}[/bold] [dim]({node.type.value}, match {confidence:.0%})[/dim]")
    if node.aliases:
        console.print(f"  Aliases: {', '.join(node.aliases)}")
    console.print(f"  Mentions: {node.mention_count:,}\n")

    neighbours = related_entities(graph, node.id)
    if not neighbours:
        console.print("[yellow]No relationships found[/yellow]")
        return

    table = Table(title=f"Related to {node.name}")
    table.add_column("Entity", style="cyan")
    table.add_column("Relationship", style="magenta")
    table.add_column("Co-occurrences", style="green", justify="right")
    table.add_column("Chapters", style="dim")

    for other, edge in neighbours:
        table.add_row(other.name, edge.type.value, f"{edge.co_occurrences:,}", ", ".join(edge.chapters))
    console.print(table)


if __name__ == "__main__":
    main()
