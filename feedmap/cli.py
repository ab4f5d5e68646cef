"""CLI interface for feedmap."""

import json
import click
from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import sys

from feedmap import __version__
from feedmap.config import ConfigManager, ConfigurationError
from feedmap.config.logging import configure_logging
from feedmap.mapping.processor import MappingProcessor

console = Console()
stderr_console = Console(file=sys.stderr)


def _format_value(value: object) -> str:
    if value is None:
        return "[dim]null[/dim]"
    if isinstance(value, str):
        return escape(value)
    return escape(json.dumps(value, default=str))


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Show debug diagnostics')
def cli(verbose: bool) -> None:
    """feedmap - Map feed records onto content fields and detect changes"""
    try:
        log_level = "DEBUG" if verbose else ConfigManager().settings.log_level
    except ConfigurationError as e:
        stderr_console.print(f"[red]✗ Invalid configuration: {escape(str(e))}[/red]")
        raise click.Abort()
    configure_logging(log_level, force=True)


@cli.command()
@click.option(
    '--config', '-c',
    'config_path',
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help='Path to feed mapping config'
)
@click.option(
    '--data', '-d',
    'data_path',
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help='Path to CSV or JSON feed data'
)
def resolve(config_path: Path, data_path: Path) -> None:
    """Resolve mapped field values for every feed record."""
    try:
        processor = MappingProcessor(ConfigManager(config_path))
        records = processor.load_records(data_path)
        handles = list(processor.config_manager.config.fields)

        table = Table(title=f"Resolved content ({len(records)} records)")
        table.add_column("#", justify="right")
        for handle in handles:
            table.add_column(handle)

        for index, record in enumerate(records):
            content = processor.build_content(record)
            table.add_row(str(index), *(_format_value(content[h]) for h in handles))

        console.print(table)
    except Exception as e:
        stderr_console.print(f"[red]✗ Resolve failed: {e}[/red]")
        raise click.Abort()


@cli.command()
@click.option(
    '--config', '-c',
    'config_path',
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help='Path to feed mapping config'
)
@click.option(
    '--data', '-d',
    'data_path',
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help='Path to CSV or JSON feed data'
)
@click.option(
    '--snapshot', '-s',
    'snapshot_path',
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help='Path to the existing record exported as JSON'
)
@click.option('--index', '-i', default=0, show_default=True, help='Feed record to compare')
def diff(config_path: Path, data_path: Path, snapshot_path: Path, index: int) -> None:
    """Show which fields of a feed record would update an existing record."""
    try:
        processor = MappingProcessor(ConfigManager(config_path))
        records = processor.load_records(data_path)
        if not 0 <= index < len(records):
            raise IndexError(f"Record {index} out of range (feed has {len(records)})")

        snapshot = processor.load_snapshot(snapshot_path)
        changes = processor.compare(records[index], snapshot)
    except Exception as e:
        stderr_console.print(f"[red]✗ Diff failed: {e}[/red]")
        raise click.Abort()

    if not changes:
        console.print("[green]✓ No changes, record is up to date[/green]")
        return

    table = Table(title=f"Changes for record {index}")
    table.add_column("Field")
    table.add_column("New value")
    for key, value in changes.items():
        table.add_row(key, _format_value(value))
    console.print(table)


if __name__ == "__main__":
    cli()
