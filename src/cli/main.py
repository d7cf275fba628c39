"""CLI principal (Typer).

Por qué Typer:
- Comandos y opciones tipados sin boilerplate de argparse.
- Se integra con Rich para tablas y paneles.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, NoReturn, Optional

import structlog
import typer
from rich.console import Console

from adapters.json_exporter import dumps_references, export_references_json
from adapters.protocol_loader import load_protocols
from cli import doctor
from cli.ui_components import build_references_table, build_revision_panel, build_summary_table, print_banner
from core.config import AppSettings
from core.domain.errors import FetchError
from core.domain.models import ProtocolDescription, ReferenceMap, RevisionMetadata
from core.logging import configure_logging
from core.services.xref_pipeline import build_reference_matcher

app = typer.Typer(no_args_is_help=True, help="Cross-reference protocol entities with implementation source.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)
log = structlog.get_logger(__name__)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines."),
) -> None:
    settings = AppSettings()
    configure_logging(verbose=verbose or settings.verbose, log_json=log_json or settings.log_json)


async def _extract(protocol: ProtocolDescription) -> tuple[ReferenceMap, RevisionMetadata]:
    matcher = build_reference_matcher(AppSettings())
    references = await matcher.extract_protocol_references(protocol)
    revision = await matcher.get_revision_description()
    return references, revision


async def _revision() -> RevisionMetadata:
    matcher = build_reference_matcher(AppSettings())
    return await matcher.get_revision_description()


def _fail(exc: FetchError) -> NoReturn:
    log.error("fetch_failed", error=str(exc), path=exc.path, status=exc.status_code)
    _err_console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


@app.command()
def extract(
    protocol_files: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Protocol JSON file(s)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the JSON export to this path."),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON export instead of tables."),
) -> None:
    """Locate every command, event and type of the protocol in the implementation."""

    protocol = load_protocols(protocol_files)
    try:
        references, revision = asyncio.run(_extract(protocol))
    except FetchError as exc:
        _fail(exc)

    if output is not None:
        export_references_json(references=references, revision=revision, output_path=output)

    if as_json:
        typer.echo(dumps_references(references=references, revision=revision), nl=False)
        return

    print_banner(_console)
    _console.print(build_references_table(protocol, references))
    _console.print(build_summary_table(references))
    _console.print(build_revision_panel(revision))
    if output is not None:
        _console.print(f"[green]Saved JSON to:[/green] {output}")


@app.command()
def revision() -> None:
    """Show the implementation commit the data comes from."""

    try:
        resolved = asyncio.run(_revision())
    except FetchError as exc:
        _fail(exc)
    _console.print(build_revision_panel(resolved))


def run() -> None:
    app()
