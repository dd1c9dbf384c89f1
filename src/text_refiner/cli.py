"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from text_refiner.clients.llm_client import LLMClient
from text_refiner.config import AppConfig, load_config
from text_refiner.errors import (
    INVALID_RESPONSE_MESSAGE,
    DecodeError,
    EmptyInputError,
    GenerationError,
)
from text_refiner.export import ExportFormat, export_document
from text_refiner.models.document import RefinedDocument
from text_refiner.models.options import ChartPreference, RefineOptions
from text_refiner.pipeline.instruction_compiler import compile_instructions
from text_refiner.pipeline.refiner import TextRefiner
from text_refiner.utils.text_stats import word_count

app = typer.Typer(
    name="text-refiner",
    help="Correct, restyle, fact-check and chart free-form text with an LLM",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _read_source(input_file: Path | None, text: str | None) -> str:
    if text is not None:
        return text
    if input_file is None:
        console.print("[red]Provide an input file or --text.[/red]")
        raise typer.Exit(1)
    if not input_file.exists():
        console.print(f"[red]Input file not found: {input_file}[/red]")
        raise typer.Exit(1)
    return input_file.read_text(encoding="utf-8")


def _build_options(
    config: AppConfig,
    academic: bool | None,
    maintain_tone: bool | None,
    expand: bool | None,
    verify: bool | None,
    charts: bool | None,
    chart_type: ChartPreference | None,
) -> RefineOptions:
    """Overlay command-line flags on the configured defaults."""
    options = config.refine.to_options()
    # Applied through with_toggle so an explicit style flag clears the other one
    for name, value in (
        ("maintain_tone", maintain_tone),
        ("academic_style", academic),
        ("expand", expand),
        ("verify_accuracy", verify),
        ("add_charts", charts),
    ):
        if value is not None:
            options = options.with_toggle(name, value)
    if chart_type is not None:
        options = options.model_copy(update={"chart_preference": chart_type})
    return options


def _render_document(doc: RefinedDocument, source_words: int) -> None:
    console.print(
        Panel(
            escape(doc.refined_text),
            title="Refined Text",
            subtitle=f"{source_words} → {word_count(doc.refined_text)} words",
        )
    )

    if doc.revisions:
        console.print("\n[bold]Revisions:[/bold]")
        for revision in doc.revisions:
            console.print(f"  - {escape(revision)}")

    if doc.accuracy_note:
        console.print(Panel(escape(doc.accuracy_note), title="Accuracy Report", border_style="yellow"))

    if not doc.has_charts:
        return
    console.print("\n[bold]Charts:[/bold]")
    for chart in doc.charts:
        table = Table(title=escape(f"{chart.title} ({chart.kind.value})"))
        table.add_column(chart.label_field)
        table.add_column(chart.value_field, justify="right")
        for label, value in chart.series():
            table.add_row(label, f"{value:g}")
        console.print(table)


@app.command()
def refine(
    input_file: Path = typer.Argument(None, help="Text or markdown file to refine"),
    text: str = typer.Option(None, "--text", help="Refine this text instead of a file"),
    academic: bool = typer.Option(None, "--academic/--no-academic", help="Formal academic style"),
    maintain_tone: bool = typer.Option(
        None, "--maintain-tone/--no-maintain-tone", help="Preserve the author's voice"
    ),
    expand: bool = typer.Option(None, "--expand/--no-expand", help="Grow the text by about 20%"),
    verify: bool = typer.Option(None, "--verify/--no-verify", help="Fact-check names, dates and claims"),
    charts: bool = typer.Option(None, "--charts/--no-charts", help="Suggest charts for numeric data"),
    chart_type: ChartPreference = typer.Option(None, "--chart-type", help="Force a chart type"),
    export: list[ExportFormat] = typer.Option(None, "--export", "-e", help="Export format (repeatable)"),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Directory for exported files"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Refine a text with the selected options."""
    _setup_logging(verbose)
    config = load_config(config_path)
    source = _read_source(input_file, text)
    options = _build_options(config, academic, maintain_tone, expand, verify, charts, chart_type)

    if not source.strip():
        console.print(f"[red]{EmptyInputError()}[/red]")
        raise typer.Exit(1)

    if verbose:
        console.print(f"[dim]Input: {word_count(source)} words[/dim]")
        console.print(f"[dim]Options: {options.model_dump(mode='json')}[/dim]")

    llm = LLMClient(
        timeout=config.llm.timeout,
        model=config.llm.model,
        max_retries=config.llm.max_retries,
        max_tokens=config.llm.max_tokens,
        temperature=config.llm.temperature,
    )
    refiner = TextRefiner(llm)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Refining...", total=None)
            result = asyncio.run(refiner.refine(source, options))
    except DecodeError:
        console.print(f"[red]{INVALID_RESPONSE_MESSAGE}[/red]")
        if llm.get_token_summary()["truncated"]:
            console.print("[yellow]The reply was cut off; raise llm.max_tokens in config.yaml.[/yellow]")
        raise typer.Exit(1)
    except GenerationError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    _render_document(result.document, word_count(source))
    if result.dropped_charts:
        console.print(f"[yellow]Skipped {result.dropped_charts} chart(s).[/yellow]")

    usage = llm.get_token_summary()
    console.print(
        f"[dim]{result.elapsed_seconds:.1f}s, "
        f"{usage['input']} input / {usage['output']} output tokens[/dim]"
    )

    target_dir = output_dir or config.export.resolved_output_dir
    for fmt in export or []:
        path = export_document(
            result.document.refined_text,
            fmt,
            output_dir=target_dir,
            basename=config.export.basename,
            font_size=config.export.pdf_font_size,
        )
        console.print(f"[green]Saved: {path}[/green]")


@app.command()
def prompt(
    input_file: Path = typer.Argument(None, help="Text or markdown file to refine"),
    text: str = typer.Option(None, "--text", help="Use this text instead of a file"),
    academic: bool = typer.Option(None, "--academic/--no-academic"),
    maintain_tone: bool = typer.Option(None, "--maintain-tone/--no-maintain-tone"),
    expand: bool = typer.Option(None, "--expand/--no-expand"),
    verify: bool = typer.Option(None, "--verify/--no-verify"),
    charts: bool = typer.Option(None, "--charts/--no-charts"),
    chart_type: ChartPreference = typer.Option(None, "--chart-type"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Print the compiled directive without calling the model."""
    config = load_config(config_path)
    source = _read_source(input_file, text)
    options = _build_options(config, academic, maintain_tone, expand, verify, charts, chart_type)
    try:
        directive = compile_instructions(source, options)
    except EmptyInputError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    # Plain print: the directive is meant to be piped or copied verbatim
    typer.echo(directive)


@app.command("export")
def export_cmd(
    input_file: Path = typer.Argument(help="Markdown or text file to export"),
    fmt: ExportFormat = typer.Option(ExportFormat.TXT, "--format", "-f", help="Output format"),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Export an existing text file as plain text, .docx or .pdf."""
    if not input_file.exists():
        console.print(f"[red]Input file not found: {input_file}[/red]")
        raise typer.Exit(1)
    config = load_config(config_path)
    path = export_document(
        input_file.read_text(encoding="utf-8"),
        fmt,
        output_dir=output_dir or config.export.resolved_output_dir,
        basename=config.export.basename,
        font_size=config.export.pdf_font_size,
    )
    console.print(f"[green]Saved: {path}[/green]")


if __name__ == "__main__":
    app()
