#!/usr/bin/env python3
"""
Command-line interface for the WoW combat log reader.
"""

import sys
import json
import click
import logging
from pathlib import Path
from collections import Counter
from rich.console import Console
from rich.table import Table
from rich.markup import escape

from .config.loader import load_settings
from .monitoring import CompositeHandler, ReadTimer
from .parser.errors import CombatLogError
from .parser.reader import CombatLogFileReader, ReaderHandler
from .parser.tokenizer import LineSplitter


# Set up rich console for pretty output
console = Console()
logger = logging.getLogger(__name__)


class _StopReading(Exception):
    """Raised by a handler to end a read once enough events were shown."""


class TableCollector(ReaderHandler):
    """Collects events into a rich table."""

    def __init__(self, limit=None):
        self.limit = limit
        self.table = Table(title="Events")
        self.table.add_column("#", style="dim", justify="right")
        self.table.add_column("Timestamp", style="cyan")
        self.table.add_column("Event", style="bold")
        self.table.add_column("Parameters")

    def record(self, event_name, parameters, line_number, timestamp):
        if self.limit is not None and line_number > self.limit:
            raise _StopReading()
        self.table.add_row(str(line_number), escape(str(timestamp)), escape(event_name), escape(" | ".join(parameters)))


class JsonLinesWriter(ReaderHandler):
    """Writes one JSON object per event."""

    def __init__(self, limit=None, stream=None):
        self.stream = stream
        self.limit = limit

    def record(self, event_name, parameters, line_number, timestamp):
        if self.limit is not None and line_number > self.limit:
            raise _StopReading()
        payload = {
            "line_number": line_number,
            "timestamp": timestamp,
            "event_name": event_name,
            "parameters": parameters,
        }
        click.echo(json.dumps(payload), file=self.stream)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--config", "config_path", type=click.Path(), default=None, help="YAML configuration file")
@click.pass_context
def cli(ctx, verbose, config_path):
    """WoW Combat Log Reader - split combat log lines into events"""
    try:
        reader_settings = load_settings(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.UsageError(str(e))

    if verbose:
        reader_settings.log_level = "debug"
    reader_settings.setup_logging(console=Console(stderr=True))
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        reader_settings.log_configuration()

    ctx.obj = reader_settings


@cli.command()
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--offset", type=click.IntRange(min=0), default=None, help="Number of leading lines to skip")
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Stop after this many events")
@click.option("--strict", is_flag=True, help="Fail on lines missing a separator")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table")
@click.pass_obj
def read(reader_settings, log_file, offset, limit, strict, output_format):
    """Read a combat log file and print its events."""
    if strict:
        reader_settings.strict = True

    reader = CombatLogFileReader(log_file, settings=reader_settings)
    timer = ReadTimer()

    if output_format == "json":
        consumer = JsonLinesWriter(limit)
    else:
        consumer = TableCollector(limit)

    try:
        total = reader.start(offset, CompositeHandler(timer, consumer))
    except _StopReading:
        logger.debug(f"Stopped after {limit} events")
        total = limit
        timer.stop(total)

    if timer.failed or total is None:
        console.print(f"[red]Reading failed after {timer.total_lines} lines[/red]")
        sys.exit(1)

    if output_format == "table":
        console.print(consumer.table)
        display_read_summary(Path(log_file), total, timer)


def display_read_summary(log_path, total_lines, timer):
    """Display summary of a completed read."""
    stats_table = Table(title="Read Statistics", show_header=False)
    stats_table.add_column("Metric", style="cyan")
    stats_table.add_column("Value", style="white")

    stats_table.add_row("File", log_path.name)
    stats_table.add_row("Lines Emitted", f"{total_lines:,}")
    if timer.elapsed is not None:
        stats_table.add_row("Read Time", f"{timer.elapsed:.2f}s")
        stats_table.add_row("Lines/Second", f"{timer.lines_per_second:,.0f}")

    console.print(stats_table)


@cli.command()
@click.argument("text")
@click.option("--separator", default=",", help="Parameter separator character")
def split(text, separator):
    """Split a single parameter string into tokens."""
    try:
        splitter = LineSplitter(separator)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--separator")

    for i, token in enumerate(splitter.split(text), 1):
        console.print(f"[dim]{i:>3}[/dim] {escape(token)}", highlight=False)


@cli.command()
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--offset", type=click.IntRange(min=0), default=None, help="Number of leading lines to skip")
@click.option("--top", default=20, type=click.IntRange(min=1), help="Number of event names to show")
@click.pass_obj
def stats(reader_settings, log_file, offset, top):
    """Count events per event name."""
    reader = CombatLogFileReader(log_file, settings=reader_settings)
    counts = Counter()
    total = 0

    try:
        for event in reader.iter_events(offset):
            counts[event.event_name] += 1
            total += 1
    except CombatLogError as e:
        console.print(f"[red]Reading failed after {total} lines: {e}[/red]")
        sys.exit(1)

    table = Table(title=f"Event Types ({len(counts)} distinct, {total:,} events)")
    table.add_column("Event", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")

    for name, count in counts.most_common(top):
        table.add_row(escape(name) or "(empty)", f"{count:,}", f"{count / total:.1%}")

    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
