"""Command-line interface for textanchor."""

import asyncio
import json
import logging
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from textanchor import __version__
from textanchor.config import DEFAULT_LOG_LEVEL, validate_log_level, validate_offsets
from textanchor.logging_config import setup_logging
from textanchor.segmented.document import SegmentedText
from textanchor.segmented.matcher import match_selector
from textanchor.segmented.text_position import describe_text_position
from textanchor.segmented.text_quote import describe_text_quote
from textanchor.selectors import Selector, parse_selector, selectors_from_annotation

app = typer.Typer(
    name="textanchor",
    help="Anchor W3C Web Annotation selectors to text.",
)
console = Console()


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging (same as --log-level debug)",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning or error (default: info)",
    ),
) -> None:
    """Set up logging for all commands."""
    level = DEFAULT_LOG_LEVEL
    if verbose:
        level = logging.DEBUG
    elif log_level:
        try:
            level = validate_log_level(log_level)
        except ValueError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1) from e
    setup_logging(level)


def load_document(source: Path, split_lines: bool = False) -> SegmentedText:
    """Load a YAML segments file, or plain text (one segment, or one per line)."""
    if source.suffix in (".yaml", ".yml"):
        return SegmentedText.from_yaml_file(source)
    return SegmentedText.from_text(source.read_text(encoding="utf-8"), split_lines)


def load_selectors(path: Path) -> list[Selector]:
    """Load the selectors of an annotation, or a single bare selector (YAML or JSON)."""
    text = path.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if isinstance(data, dict) and "target" not in data:
        return [parse_selector(data)]
    return selectors_from_annotation(text)


@app.command()
def match(
    source: Path = typer.Argument(
        ...,
        exists=True,
        help="Document: YAML with a 'segments' list, or plain text",
    ),
    selector_file: Path = typer.Argument(
        ...,
        exists=True,
        help="Annotation (or bare selector) as YAML or JSON",
    ),
    split_lines: bool = typer.Option(
        False,
        "--split-lines",
        help="Treat each line of a plain text document as a segment",
    ),
) -> None:
    """Find every match of a selector in a document."""
    try:
        document = load_document(source, split_lines)
        selectors = load_selectors(selector_file)
        matches = asyncio.run(match_selector(selectors, document.whole()))
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    if not matches:
        console.print("[yellow]No matches[/yellow]")
        return

    table = Table(title=f"{len(matches)} match(es)")
    table.add_column("#", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Text")
    for number, text_range in enumerate(matches, start=1):
        table.add_row(
            str(number), str(text_range.start), str(text_range.end), text_range.text
        )
    console.print(table)


@app.command()
def describe(
    source: Path = typer.Argument(
        ...,
        exists=True,
        help="Document: YAML with a 'segments' list, or plain text",
    ),
    start: int = typer.Argument(..., help="Start offset, in UTF-16 code units"),
    end: int = typer.Argument(..., help="End offset, in UTF-16 code units"),
    split_lines: bool = typer.Option(
        False,
        "--split-lines",
        help="Treat each line of a plain text document as a segment",
    ),
) -> None:
    """Describe a span of a document as quote and position selectors."""
    try:
        validate_offsets(start, end)
        document = load_document(source, split_lines)
        text_range = document.range(start, end)
        quote = asyncio.run(describe_text_quote(text_range))
        position = describe_text_position(text_range)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    selectors = [quote.to_wire(), position.to_wire()]
    console.print_json(json.dumps(selectors, ensure_ascii=False))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"textanchor {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
