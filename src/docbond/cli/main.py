"""CLI entry point for docbond.

Invoked as::

    docbond [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m docbond.cli.main

Commands
--------
collections  List the collections of a data file
show         Print one record, or a whole collection
query        Filter, sort and limit the raw records of a collection
version      Show version information
plugins      List registered data sources

The commands read JSON or YAML data files through ``FileDataSource`` and
work on raw records, so no document classes need to be importable.
"""
from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def _open_source(path: str) -> Any:
    """Open a data file, exiting on error."""
    from docbond.datasource import FileDataSource

    if not Path(path).exists():
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    try:
        return FileDataSource(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _parse_value(text: str) -> Any:
    """Interpret a command-line operand as a YAML scalar (``35``, ``true``, ``{a: 1}``)."""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return text


def _print_records(title: str, records: list[dict[str, Any]]) -> None:
    if not records:
        console.print(f"[yellow]No records[/yellow] in {title}")
        return
    columns: list[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)
    table = Table(title=title, show_lines=True)
    for column in columns:
        table.add_column(column)
    for record in records:
        table.add_row(
            *(
                "" if column not in record else json.dumps(record[column], default=str)
                for column in columns
            )
        )
    console.print(table)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="docbond")
def cli() -> None:
    """Inspect and query docbond data files."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from docbond import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]docbond[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# plugins command
# ---------------------------------------------------------------------------


@cli.command(name="plugins")
def plugins_command() -> None:
    """List data sources, including those loaded from entry-points."""
    from docbond.datasource import ENTRY_POINT_GROUP, data_sources

    data_sources.load_entrypoints(ENTRY_POINT_GROUP)

    table = Table(title="Data sources")
    table.add_column("Name", style="bold")
    table.add_column("Class")
    for name in data_sources.list_plugins():
        cls = data_sources.get(name)
        table.add_row(name, f"{cls.__module__}.{cls.__qualname__}")
    console.print(table)


# ---------------------------------------------------------------------------
# collections command
# ---------------------------------------------------------------------------


@cli.command(name="collections")
@click.argument("file", type=click.Path(exists=False))
def collections_command(file: str) -> None:
    """List the collections stored in FILE with their record counts."""
    source = _open_source(file)

    names = source.collections()
    if not names:
        console.print(f"[yellow]No collections[/yellow] in {file}")
        return

    table = Table(title=f"Collections: {file}")
    table.add_column("Collection", style="bold")
    table.add_column("Records", justify="right")
    for name in names:
        table.add_row(name, str(len(source.raw_data[name])))
    console.print(table)


# ---------------------------------------------------------------------------
# show command
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("file", type=click.Path(exists=False))
@click.argument("collection")
@click.argument("document_id", required=False)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    default="table",
    help="Output format",
)
def show_command(file: str, collection: str, document_id: str | None, output_format: str) -> None:
    """Print the record DOCUMENT_ID of COLLECTION, or the whole collection.

    FILE is a JSON or YAML data file.
    """
    source = _open_source(file)

    if document_id is None:
        data: Any = asyncio.run(source.read_all(collection))
        records = list(data.values())
    else:
        data = asyncio.run(source.read(collection, document_id))
        if data is None:
            err_console.print(f"[red]Not found:[/red] {collection}/{document_id}")
            sys.exit(1)
        records = [data]

    if output_format == "json":
        console.print(Syntax(json.dumps(data, indent=2, default=str), "json", line_numbers=True))
    elif output_format == "yaml":
        text = yaml.safe_dump(data, default_flow_style=False, allow_unicode=True)
        console.print(Syntax(text, "yaml", line_numbers=True))
    else:
        _print_records(collection, records)


# ---------------------------------------------------------------------------
# query command
# ---------------------------------------------------------------------------


@cli.command(name="query")
@click.argument("file", type=click.Path(exists=False))
@click.argument("collection")
@click.option(
    "--where",
    "conditions",
    type=(str, str, str),
    multiple=True,
    metavar="FIELD OP VALUE",
    help="Filter condition; repeat to AND several. OP is one of == != < <= > >=.",
)
@click.option("--order-by", "order_by", default=None, help="Sort by this field")
@click.option("--desc", is_flag=True, default=False, help="Sort descending")
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Maximum number of records")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format; json prints the matching records as a plain JSON array",
)
def query_command(
    file: str,
    collection: str,
    conditions: tuple[tuple[str, str, str], ...],
    order_by: str | None,
    desc: bool,
    limit: int | None,
    output_format: str,
) -> None:
    """Filter, sort and limit the raw records of COLLECTION in FILE."""
    from docbond.query.engine import OPERATORS, Predicate, evaluate, order_records

    predicates = []
    for field, operator, value in conditions:
        if operator not in OPERATORS:
            err_console.print(
                f"[red]Error:[/red] Unknown operator {operator!r}; "
                f"expected one of {' '.join(sorted(OPERATORS))}"
            )
            sys.exit(2)
        predicates.append(Predicate(field, operator, _parse_value(value)))

    source = _open_source(file)
    records = evaluate(asyncio.run(source.read_all(collection)).values(), predicates)
    if order_by:
        records = order_records(records, order_by, descending=desc)
    if limit is not None:
        records = records[:limit]

    if output_format == "json":
        click.echo(json.dumps([dict(r) for r in records], indent=2, default=str))
        return
    _print_records(collection, [dict(r) for r in records])
    console.print(f"\n[bold]{len(records)}[/bold] record(s)")


if __name__ == "__main__":
    cli()
