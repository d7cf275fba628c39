"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.github_source import GitHubSourceHost
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import FetchError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_revision(settings: AppSettings) -> tuple[bool, str]:
    host = GitHubSourceHost(settings)
    try:
        sha = await host.resolve_branch_revision(settings.repo_owner, settings.repo_name, settings.repo_branch)
    except FetchError as exc:
        return False, str(exc)
    return True, sha


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="protocol-xref Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.github_token:
        table.add_row("GitHub token", "OK", "Authenticated API requests")
    else:
        table.add_row("GitHub token", "OPTIONAL", "No token set -> unauthenticated rate limit")
    table.add_row("Repository", "OK", f"{settings.repo_owner}/{settings.repo_name}@{settings.repo_branch}")
    table.add_row("Handler source", "OK", settings.handler_source_path)
    table.add_row("Message types", "OK", settings.message_types_path)

    ok_rev, detail_rev = asyncio.run(_check_revision(settings))
    table.add_row("Branch resolution", "OK" if ok_rev else "FAIL", detail_rev)

    _console.print(table)

    if not ok_rev:
        _console.print(
            "\n[yellow]Note:[/yellow] A 403 usually means the API rate limit was hit; "
            "run `protocol-xref doctor setup-token`."
        )


@app.command(name="setup-token")
def setup_token() -> None:
    """Interactive GitHub token setup (stores config in the user config .env)."""

    token = typer.prompt("GitHub token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars({"PROTOCOL_XREF_GITHUB_TOKEN": token})

    _console.print(f"[green]Saved GitHub token to:[/green] {env_path}")
