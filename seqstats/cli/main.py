"""
seqstats CLI.

Commands:
- summarize: Summary statistics of a sample file (batch, stream or histogram)
- histogram: Write the two-column histogram table of a sample file
- describe: Summary statistics of an existing histogram table
- window: Sliding-window mean/stddev and EMA, one row per sample
- config: Configuration management
- version: Show version
"""

import io
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import __version__
from ..config import StatsConfig, load_config, generate_default_config
from ..core.errors import ErrorCode, StatsInputError, tagged
from ..core.report import SummaryReport
from ..formats import read_samples, read_integer_samples, load_samples, read_histogram_file
from ..histogram import HistogramAccumulator
from ..streaming import StreamAccumulator, SlidingWindowStats

logger = logging.getLogger(__name__)


app = typer.Typer(
    name="seqstats",
    help="Descriptive statistics for length and coverage distributions",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    json = "json"
    table = "table"


class Method(str, Enum):
    batch = "batch"
    stream = "stream"
    histogram = "histogram"


def _setup(config_path: Optional[Path], verbose: bool = False) -> StatsConfig:
    """Load config and configure logging once per command."""
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading config:[/] {e}")
        raise typer.Exit(1)

    errors = cfg.validate()
    if errors:
        console.print(f"[red]{ErrorCode.E3003_VALIDATION_FAILED.value}: invalid configuration:[/]")
        for e in errors:
            console.print(f"  - {e}")
        raise typer.Exit(1)

    level = logging.DEBUG if verbose else cfg.logging.level_number
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    return cfg


def _format_table(report: SummaryReport) -> Table:
    """Format report as table."""
    table = Table(title=f"Summary ({report.method.value})")
    table.add_column("Statistic")
    table.add_column("Value", justify="right")

    table.add_row("Count", f"{report.count:,}")
    table.add_row("Mean", f"{report.mean:.4f}")
    table.add_row("Stddev", f"{report.stddev:.4f}")

    for name, value in (("Mode", report.mode), ("Median", report.median), ("MAD", report.mad)):
        table.add_row(name, "-" if value is None else str(value))

    return table


def _write_output(output: Path, text: str) -> None:
    try:
        output.write_text(text, encoding='utf-8')
    except OSError as e:
        console.print(f"[red]{tagged(ErrorCode.E4003_FILE_WRITE_FAILED, str(e))}[/]")
        raise typer.Exit(1)


def _fail(e: Exception, format: OutputFormat) -> None:
    """Report an input error and exit 1; json mode prints the structured error."""
    if format == OutputFormat.json and isinstance(e, StatsInputError):
        typer.echo(json.dumps({'error': e.error.to_dict()}, indent=2))
    else:
        console.print(f"[red]Error:[/] {e}")
    raise typer.Exit(1)


def _emit(report: SummaryReport, format: OutputFormat, output: Optional[Path], quiet: bool) -> None:
    if format == OutputFormat.json:
        text = report.to_json(indent=2)
        if output:
            _write_output(output, text + "\n")
            if not quiet:
                console.print(f"[green]Written to:[/] {output}")
        else:
            typer.echo(text)
    else:
        table = _format_table(report)
        if output:
            buffer = Console(file=io.StringIO(), width=80)
            buffer.print(table)
            _write_output(output, buffer.file.getvalue())
            if not quiet:
                console.print(f"[green]Written to:[/] {output}")
        else:
            console.print(table)


def _build_histogram(samples: Path, cfg: StatsConfig) -> HistogramAccumulator:
    hist = HistogramAccumulator(initial_capacity=cfg.histogram.initial_capacity)
    for value in read_integer_samples(samples):
        hist.add(value)
    return hist


# === SUMMARIZE COMMAND ===

@app.command()
def summarize(
    samples: Path = typer.Argument(..., help="Sample file, one value per line", exists=True),
    method: Method = typer.Option(Method.batch, "-m", "--method", help="Storage strategy"),
    format: OutputFormat = typer.Option(OutputFormat.table, "-f", "--format"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    is_sorted: bool = typer.Option(False, "--sorted", help="Samples are already sorted"),
    quiet: bool = typer.Option(False, "-q", "--quiet"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging"),
):
    """Summarize a sample file."""
    cfg = _setup(config_path, verbose)
    source = str(samples)

    try:
        if method == Method.batch:
            values = load_samples(samples)
            report = SummaryReport.from_samples(
                values,
                source=source,
                is_sorted=is_sorted or cfg.batch.assume_sorted,
            )

        elif method == Method.stream:
            acc = StreamAccumulator()
            for value in read_samples(samples):
                acc.insert(value)
            acc.finalize()
            report = SummaryReport.from_stream(acc, source=source)

        else:
            report = SummaryReport.from_histogram(_build_histogram(samples, cfg), source=source)

    except (OSError, ValueError) as e:
        _fail(e, format)

    logger.info(f"Summarized {report.count} samples from {source}")
    _emit(report, format, output, quiet)


# === HISTOGRAM COMMAND ===

@app.command()
def histogram(
    samples: Path = typer.Argument(..., help="Sample file of non-negative integers", exists=True),
    label: Optional[str] = typer.Option(None, "-l", "--label", help="Table header label"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging"),
):
    """Write the histogram table of a sample file."""
    cfg = _setup(config_path, verbose)
    label = label or cfg.histogram.label

    if any(c in label for c in '\t\r\n'):
        console.print("[red]Error:[/] label must not contain tabs or newlines")
        raise typer.Exit(1)

    try:
        hist = _build_histogram(samples, cfg)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    buffer = io.StringIO()
    hist.write_histogram(buffer, label)

    if output:
        _write_output(output, buffer.getvalue())
        logger.info(f"Histogram of {hist.number_of_objects()} samples written to {output}")
    else:
        typer.echo(buffer.getvalue(), nl=False)


# === DESCRIBE COMMAND ===

@app.command()
def describe(
    table: Path = typer.Argument(..., help="Histogram table file", exists=True),
    format: OutputFormat = typer.Option(OutputFormat.table, "-f", "--format"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    quiet: bool = typer.Option(False, "-q", "--quiet"),
):
    """Summarize an existing histogram table."""
    cfg = _setup(config_path)

    try:
        label, hist = read_histogram_file(table, initial_capacity=cfg.histogram.initial_capacity)
    except (OSError, ValueError) as e:
        _fail(e, format)

    if not quiet and format == OutputFormat.table:
        console.print(f"Label: [bold]{label}[/]")

    _emit(SummaryReport.from_histogram(hist, source=str(table)), format, output, quiet)


# === WINDOW COMMAND ===

@app.command()
def window(
    samples: Path = typer.Argument(..., help="Sample file, one value per line", exists=True),
    size: Optional[int] = typer.Option(None, "-w", "--size", help="Window size in samples"),
    alpha: Optional[float] = typer.Option(None, "-a", "--alpha", help="EMA smoothing factor"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
):
    """Sliding-window mean/stddev and EMA, one row per sample."""
    cfg = _setup(config_path)

    buffer = io.StringIO()
    buffer.write("#index\tvalue\tmean\tstddev\tema\n")

    try:
        stats = SlidingWindowStats(
            window_size=size if size is not None else cfg.stream.window_size,
            alpha=alpha if alpha is not None else cfg.batch.ema_alpha,
        )
        for index, value in enumerate(read_samples(samples)):
            stats.add(value)
            buffer.write(
                f"{index}\t{value}\t{stats.mean():.6f}\t{stats.stddev():.6f}\t{stats.ema():.6f}\n"
            )
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if output:
        _write_output(output, buffer.getvalue())
    else:
        typer.echo(buffer.getvalue(), nl=False)


# === CONFIG COMMAND ===

@app.command("config")
def config_cmd(
    action: str = typer.Argument(..., help="Action: init|validate|dump"),
    path: Optional[Path] = typer.Argument(None, help="Config file path"),
):
    """Configuration management."""
    if action == "init":
        typer.echo(generate_default_config(), nl=False)

    elif action == "validate":
        if not path:
            console.print("[red]Path required for validate[/]")
            raise typer.Exit(1)
        try:
            cfg = StatsConfig.load(path)
        except Exception as e:
            console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1)
        errors = cfg.validate()
        if errors:
            console.print("[red]Invalid configuration:[/]")
            for e in errors:
                console.print(f"  - {e}")
            raise typer.Exit(1)
        console.print(f"[green]Valid:[/] {path}")

    elif action == "dump":
        try:
            cfg = StatsConfig.load(path) if path else load_config()
        except (OSError, ValueError, yaml.YAMLError) as e:
            console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1)
        typer.echo(cfg.to_yaml(), nl=False)

    else:
        console.print(f"[red]Unknown action:[/] {action}")
        console.print("Valid actions: init, validate, dump")
        raise typer.Exit(1)


# === VERSION COMMAND ===

@app.command()
def version():
    """Show version information."""
    console.print(f"[bold blue]seqstats v{__version__}[/]")


def main():
    app()


if __name__ == "__main__":
    main()
