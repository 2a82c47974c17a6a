"""CLI interface for ceilcheck using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ceilcheck import __description__, __version__
from ceilcheck.analysis import resource_ceilings
from ceilcheck.config import CeilcheckConfig, LogLevel, OutputFormat, load_config
from ceilcheck.parser import SpecLoader
from ceilcheck.schemas import SchemaGenerator
from ceilcheck.validation import ValidationFramework, ValidationResult

app = typer.Typer(
    name="ceilcheck",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def _setup_logging(config: CeilcheckConfig) -> None:
    """Route library logging through rich at the configured level."""
    logging.basicConfig(
        level=_LOG_LEVELS[LogLevel(config.logging.level)],
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"ceilcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """ceilcheck - Static verifier for priority-ceiling resource sharing."""


def _output_result_table(result: ValidationResult) -> None:
    status_color = "green" if result.ok else "red"
    console.print(f"[{status_color}]Validation Status: {result.status.value.upper()}[/{status_color}]")

    if result.counters:
        console.print("\n[blue]Counters:[/blue]")
        counter_table = Table()
        counter_table.add_column("Metric", style="cyan")
        counter_table.add_column("Count", style="white", justify="right")

        for key, value in sorted(result.counters.items()):
            counter_table.add_row(key.replace("_", " ").title(), str(value))

        console.print(counter_table)

    if result.diagnostics:
        console.print("\n[blue]Diagnostics:[/blue]")
        table = Table()
        table.add_column("Kind", style="red")
        table.add_column("Identifier", style="cyan")
        table.add_column("Task", style="white")
        table.add_column("Message", style="white")
        table.add_column("Location", style="dim")

        for diagnostic in result.diagnostics:
            table.add_row(
                diagnostic.kind.value,
                diagnostic.identifier or "",
                diagnostic.task or "",
                diagnostic.message,
                str(diagnostic.span) if diagnostic.span else "",
            )

        console.print(table)
    else:
        console.print("\n[green]No issues found![/green]")


def _output_result_markdown(result: ValidationResult) -> None:
    console.print("# Validation Report")
    console.print(f"**Status:** {result.status.value}")
    console.print(f"**Exit Code:** {result.exit_code}")
    console.print()

    if result.diagnostics:
        console.print("## Diagnostics")
        for diagnostic in result.diagnostics:
            console.print(f"- **{diagnostic.kind.value}** {diagnostic.identifier or ''}: {diagnostic.message}")


@app.command()
def validate(
    path: Annotated[
        Path,
        typer.Argument(help="Application file or directory containing app.json")
    ] = Path("."),
    format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format (default: from config, else table)")
    ] = None,
    collect_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Report every violation instead of stopping at the first")
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .ceilcheck.json)")
    ] = None,
) -> None:
    """Check an application description for unsound resource sharing."""
    try:
        ceil_config = load_config(config)
        _setup_logging(ceil_config)
        if collect_all:
            ceil_config.validation.collect_all = True

        spec = SpecLoader.parse_spec_from_path(path.resolve())
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    framework = ValidationFramework(ceil_config)
    framework.create_default_rules()
    result = framework.validate(spec)

    output_format = format.value if format else ceil_config.output.format
    if output_format == OutputFormat.JSON.value:
        console.print_json(jsonlib.dumps(result.to_dict()))
    elif output_format == OutputFormat.MARKDOWN.value:
        _output_result_markdown(result)
    else:
        _output_result_table(result)

    raise typer.Exit(result.exit_code)


@app.command()
def ceilings(
    path: Annotated[
        Path,
        typer.Argument(help="Application file or directory containing app.json")
    ] = Path("."),
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .ceilcheck.json)")
    ] = None,
) -> None:
    """Show the ceiling priority of each resource in a valid application."""
    try:
        ceil_config = load_config(config)
        _setup_logging(ceil_config)
        spec = SpecLoader.parse_spec_from_path(path.resolve())
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    framework = ValidationFramework(ceil_config)
    framework.create_default_rules()
    result = framework.validate(spec)
    if not result.ok:
        console.print(f"[red]Error:[/red] {escape(str(result.diagnostic))}")
        raise typer.Exit(1)

    table = Table(title=f"Resource ceilings: {spec.name}")
    table.add_column("Resource", style="cyan")
    table.add_column("Ceiling", style="white", justify="right")

    for name, ceiling in resource_ceilings(spec).items():
        table.add_row(name, str(ceiling))

    console.print(table)


@app.command()
def schema(
    out: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output directory for generated schemas")
    ] = Path("schemas"),
) -> None:
    """Generate the JSON schema of the application document format."""
    console.print("[dim]Generating JSON schemas from Pydantic models...[/dim]")

    generator = SchemaGenerator()
    generator.generate_all_schemas()

    errors = generator.validate_schema_compliance()
    if errors:
        console.print("[red]Generated schemas are invalid:[/red]")
        for error in errors:
            console.print(f"  • {error}")
        raise typer.Exit(1)

    schema_files = generator.save_schemas(out.resolve())

    console.print(f"[green]Generated {len(schema_files)} JSON schemas:[/green]")
    for schema_name, schema_file in schema_files.items():
        console.print(f"  • {schema_name}: {schema_file}")


if __name__ == "__main__":
    app()
