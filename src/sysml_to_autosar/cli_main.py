"""Command-line interface for the sysml-to-autosar converter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from sysml_to_autosar import __version__
from sysml_to_autosar.cli.exception_handler import handle_exceptions
from sysml_to_autosar.models import (
    LoaderError,
    SourceDocument,
    load_source_document,
    validate_source_document,
)

# Create Typer app
app = typer.Typer(
    name="sysml-to-autosar",
    help="Convert SysML-like architecture descriptions to AUTOSAR software components.",
    add_completion=True,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True, style="bold red")

OUTPUT_SUFFIXES = {"arxml": ".arxml", "yaml": ".yaml"}

# Element kinds counted by `info` for ARXML files
ARXML_SUMMARY_KINDS = (
    "AR-PACKAGE",
    "APPLICATION-SW-COMPONENT-TYPE",
    "COMPOSITION-SW-COMPONENT-TYPE",
    "SENDER-RECEIVER-INTERFACE",
    "CLIENT-SERVER-INTERFACE",
    "P-PORT-PROTOTYPE",
    "R-PORT-PROTOTYPE",
    "RUNNABLE-ENTITY",
    "ASSEMBLY-SW-CONNECTOR",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"sysml-to-autosar version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich.

    Warnings and severe transformation diagnostics are always shown; with
    ``verbose`` the per-element trace and rule tracebacks are shown too.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert SysML-like architecture descriptions (YAML/JSON) to AUTOSAR.

    This tool validates architecture description files against the
    sysml2ar/v1 schema and transforms them into AUTOSAR software component
    descriptions (ARXML).
    """


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input YAML/JSON file to validate.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Treat warnings as errors.",
        ),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format for validation results: text, table, tree.",
        ),
    ] = "text",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only output errors, no success messages.",
        ),
    ] = False,
    show_summary: Annotated[
        bool,
        typer.Option(
            "--summary",
            "-s",
            help="Show summary of document contents.",
        ),
    ] = False,
) -> None:
    """Validate a YAML/JSON architecture description file.

    Checks the file against the sysml2ar/v1 schema, then checks that every
    reference resolves and that stereotyped elements carry their tags.

    Examples
    --------
        sysml-to-autosar validate powertrain.yaml
        sysml-to-autosar validate powertrain.yaml --strict
        sysml-to-autosar validate powertrain.yaml --format table

    """
    from sysml_to_autosar.cli.error_formatter import ErrorFormatter, ErrorTable, ErrorTree
    from sysml_to_autosar.validation.validator import SourceValidator

    # First validate schema
    errors = validate_source_document(input_file)

    if errors:
        error_console.print(f"\n[bold red]✗ Validation failed for {input_file.name}[/bold red]\n")

        table = Table(title="Schema Errors", show_header=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Location", style="cyan")
        table.add_column("Error", style="red")

        for i, error in enumerate(errors, 1):
            if ": " in error:
                loc, msg = error.split(": ", 1)
            else:
                loc, msg = "", error
            table.add_row(str(i), loc, msg)

        console.print(table)
        raise typer.Exit(code=1)

    # Schema valid - load document and run semantic validation
    try:
        doc = load_source_document(input_file)
    except LoaderError as e:
        error_console.print(f"\n[bold red]✗ Failed to load {input_file.name}[/bold red]")
        error_console.print(str(e))
        raise typer.Exit(code=1) from None

    result = SourceValidator(strict=strict).validate(doc)
    failed = not result.is_valid or (strict and bool(result.warnings))

    if not result.is_valid or result.warnings:
        if output_format == "table":
            ErrorTable(error_console).print_result(result)
        elif output_format == "tree":
            ErrorTree(error_console).print_result(result)
        else:
            ErrorFormatter(error_console).format_validation_result(result, input_file)

        if failed:
            raise typer.Exit(code=1)

    if not quiet:
        if not result.warnings:
            console.print(f"\n[bold green]✓ {input_file.name} is valid[/bold green]\n")
        else:
            console.print(
                f"\n[bold yellow]⚠ {input_file.name} is valid with warnings[/bold yellow]\n"
            )

        if show_summary:
            _print_summary(doc)


def _print_summary(doc: SourceDocument) -> None:
    """Print a summary of the source document."""
    table = Table(title="Document Summary", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Name", doc.meta.name)
    if doc.meta.author:
        table.add_row("Author", doc.meta.author)
    if doc.meta.revision:
        table.add_row("Revision", doc.meta.revision)
    if doc.meta.description:
        description = doc.meta.description
        if len(description) > 60:
            description = description[:60] + "..."
        table.add_row("Description", description)

    table.add_row("", "")  # Spacer
    table.add_row("Packages", str(len(doc.packages)))
    counts = {
        "Data Types": sum(len(p.types) for p in doc.packages),
        "Events": sum(len(p.events) for p in doc.packages),
        "Interfaces": sum(len(p.interfaces) for p in doc.packages),
        "Components": sum(len(p.components) for p in doc.packages),
        "Instances": sum(len(p.instances) for p in doc.packages),
        "Links": sum(len(p.links) for p in doc.packages),
    }
    for label, count in counts.items():
        if count:
            table.add_row(label, str(count))

    console.print(table)


@app.command()
def convert(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input YAML/JSON file to convert.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path. Defaults to the input filename with the format's extension.",
            dir_okay=False,
            writable=True,
            resolve_path=True,
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            help="Output format: arxml or yaml.",
        ),
    ] = "arxml",
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite output file if it exists.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Transform without writing the output file.",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail on validation warnings and on severe transformation diagnostics.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Show detailed conversion progress and the full diagnostic trace.",
        ),
    ] = False,
) -> None:
    """Convert a YAML/JSON architecture description to AUTOSAR.

    First validates the input file, then builds the source graph, runs the
    transformation and writes the result.

    Examples
    --------
        sysml-to-autosar convert powertrain.yaml
        sysml-to-autosar convert powertrain.yaml -o out/powertrain.arxml
        sysml-to-autosar convert powertrain.yaml --format yaml --force
        sysml-to-autosar convert powertrain.yaml --dry-run --strict

    """
    if output_format not in OUTPUT_SUFFIXES:
        error_console.print(
            f"\n[bold red]✗ Invalid format: {output_format}[/bold red]\n"
            f"Supported: {', '.join(OUTPUT_SUFFIXES)}"
        )
        raise typer.Exit(code=1)

    if output is None:
        output = input_file.with_suffix(OUTPUT_SUFFIXES[output_format])

    if output.exists() and not force and not dry_run:
        error_console.print(
            f"\n[bold red]✗ Output file already exists: {output}[/bold red]\n"
            "Use --force to overwrite."
        )
        raise typer.Exit(code=1)

    configure_logging(verbose)
    run = handle_exceptions(verbose=verbose)(_run_conversion)
    run(input_file, output, output_format, dry_run, strict, verbose)


def _run_conversion(
    input_file: Path,
    output: Path,
    output_format: str,
    dry_run: bool,
    strict: bool,
    verbose: bool,
) -> None:
    """Load, validate, transform and write; exceptions go to the CLI handler."""
    from rich.progress import Progress, SpinnerColumn, TextColumn

    from sysml_to_autosar.cli.error_formatter import DiagnosticTable, ErrorTable
    from sysml_to_autosar.converters import ArxmlWriter, YamlWriter
    from sysml_to_autosar.source import build_source_model
    from sysml_to_autosar.target import ApplicationSwComponentType
    from sysml_to_autosar.transform import SysmlToAutosarTransformer
    from sysml_to_autosar.validation import SourceValidator, TargetCompletenessValidator

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        # Step 1: Load document
        task = progress.add_task("Loading document...", total=None)
        doc = load_source_document(input_file)
        progress.update(task, description="[green]✓ Loaded[/green]")

        # Step 2: Validate references
        task = progress.add_task("Validating...", total=None)
        validation = SourceValidator(strict=strict).validate_and_raise(doc)
        progress.update(task, description="[green]✓ Validated[/green]")

        # Step 3: Build source graph
        task = progress.add_task("Building source graph...", total=None)
        source = build_source_model(doc)
        progress.update(task, description="[green]✓ Source graph built[/green]")

        # Step 4: Transform
        task = progress.add_task("Transforming...", total=None)
        result = SysmlToAutosarTransformer(strict=strict).transform(source)
        progress.update(task, description="[green]✓ Transformed[/green]")

        completeness = TargetCompletenessValidator().validate(result.model)

        # Step 5: Write
        if output_format == "yaml":
            payload = YamlWriter().write_text(result.model).encode("utf-8")
        else:
            payload = ArxmlWriter().write_bytes(result.model)

        if not dry_run:
            task = progress.add_task(f"Writing {output.name}...", total=None)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(payload)
            progress.update(task, description="[green]✓ Written[/green]")

    if validation.warnings:
        ErrorTable(error_console).print_result(validation)
    if verbose:
        DiagnosticTable(console, show_info=True).print_log(result.diagnostics)
    if completeness.issues:
        ErrorTable(error_console).print_result(completeness)

    diagnostics = result.diagnostics
    console.print(
        f"  [dim]Components: {result.model.count(ApplicationSwComponentType)}, "
        f"correspondences: {len(result.registry)}, "
        f"warnings: {len(diagnostics.warnings)}, "
        f"severe: {len(diagnostics.severe_records)}[/dim]"
    )

    if dry_run:
        console.print(
            f"\n[bold green]✓ Would write {len(payload):,} bytes to {output}[/bold green]\n"
        )
    elif result.success:
        console.print(f"\n[bold green]✓ Wrote {len(payload):,} bytes to {output}[/bold green]\n")
    else:
        console.print(
            f"\n[bold yellow]⚠ Wrote {len(payload):,} bytes to {output} "
            "with severe diagnostics[/bold yellow]\n"
        )


@app.command()
def info(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input YAML, JSON, or ARXML file to inspect.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display information about an architecture or ARXML file.

    Examples
    --------
        sysml-to-autosar info powertrain.yaml
        sysml-to-autosar info powertrain.arxml

    """
    suffix = input_file.suffix.lower()

    try:
        if suffix in (".yaml", ".yml", ".json"):
            doc = load_source_document(input_file)

            console.print(
                Panel.fit(
                    f"[bold]Architecture Description[/bold]\n" f"File: {input_file}",
                    title="File Info",
                )
            )

            _print_summary(doc)

        elif suffix == ".arxml":
            _print_arxml_info(input_file)

        else:
            error_console.print(
                f"\n[bold red]✗ Unknown file type: {suffix}[/bold red]\n"
                "Supported: .yaml, .yml, .json, .arxml"
            )
            raise typer.Exit(code=1)

    except typer.Exit:
        raise
    except Exception as e:
        error_console.print(f"\n[bold red]✗ Failed to read file: {e}[/bold red]\n")
        raise typer.Exit(code=1) from None


def _print_arxml_info(path: Path) -> None:
    """Print element counts of an ARXML file."""
    from lxml import etree

    tree = etree.parse(str(path))
    counts = dict.fromkeys(ARXML_SUMMARY_KINDS, 0)
    for element in tree.iter():
        if not isinstance(element.tag, str):
            continue
        name = etree.QName(element).localname
        if name in counts:
            counts[name] += 1

    console.print(
        Panel.fit(
            f"[bold]AUTOSAR XML[/bold]\n" f"File: {path}\n" f"Size: {path.stat().st_size:,} bytes",
            title="File Info",
        )
    )

    table = Table(title="ARXML Contents", show_header=False)
    table.add_column("Element", style="cyan")
    table.add_column("Count")
    for name, count in counts.items():
        table.add_row(name, str(count))

    console.print(table)


if __name__ == "__main__":
    app()
