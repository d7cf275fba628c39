"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import CATEGORIES, ProtocolDescription, ReferenceMap, RevisionMetadata


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite en modo `--json`)."""

    title = Text("protocol-xref", style="bold cyan")
    subtitle = Text("Protocol entities • Implementation source • Exact locations", style="dim")
    console.print(Panel(Text.assemble(title, "\n", subtitle), border_style="cyan", padding=(1, 4)))


def build_references_table(protocol: ProtocolDescription, references: ReferenceMap) -> Table:
    """Una fila por entidad del protocolo, incluidas las que no tienen ocurrencias."""

    table = Table(title="Implementation References")
    table.add_column("Entity", style="cyan", no_wrap=True)
    table.add_column("Kind", style="white")
    table.add_column("Matches", justify="right")
    table.add_column("First location", style="magenta")

    for domain in protocol.domains:
        rows = (
            [("commands", f"{domain.name}.{c.name}") for c in domain.commands]
            + [("events", f"{domain.name}.{e.name}") for e in domain.events]
            + [("types", f"{domain.name}.{t.id}") for t in domain.types]
        )
        for category, name in rows:
            matches = references.matches_for(category, name)  # type: ignore[arg-type]
            count = Text(str(len(matches)), style="green" if matches else "red")
            first = f"{matches[0].path}@{matches[0].offset}" if matches else "-"
            table.add_row(name, category.rstrip("s"), count, first)
    return table


def build_summary_table(references: ReferenceMap) -> Table:
    table = Table(title="Summary")
    table.add_column("Kind", style="cyan")
    table.add_column("Referenced entities", justify="right")
    counts = references.counts()
    for category in CATEGORIES:
        table.add_row(category, str(counts[category]))
    return table


def build_revision_panel(revision: RevisionMetadata) -> Panel:
    body = Text()
    body.append(revision.describe() + "\n")
    body.append(revision.commit_url, style=f"link {revision.commit_url} dim")
    return Panel(body, title=Text("Source", style="bold yellow"), border_style="yellow")
