"""
Arsenal CLI - sync captured code learnings to Arsenal.

Usage:
    arsenal init       # Log in and bind this directory to a project
    arsenal sync       # Upload pending learnings
    arsenal link       # Install a pre-push hook that runs sync
    arsenal unlink     # Remove the pre-push hook

Every command reports its outcome on the console and exits 0.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table

from arsenal import __version__
from arsenal.config import get_settings
from arsenal.core.credential_store import CredentialStore
from arsenal.core.errors import ArsenalError, NotAGitRepoError
from arsenal.core.models import ProjectConfig
from arsenal.core.platform_client import ArsenalClient
from arsenal.core.project_setup import initialize_project
from arsenal.hooks.git_hook import HookInstaller, detect_remote_url, is_git_repo
from arsenal.sync.sync_service import SyncResult, SyncService

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="arsenal",
    help="CLI for Arsenal learning assistant",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

DEFAULT_REPO_URL = "https://github.com/username/repo"


@contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn any failure into a console message; commands never crash."""
    try:
        yield
    except (ArsenalError, ValueError) as e:
        console.print(f"[red]❌ {escape(str(e))}[/]")
    except Exception as e:
        logger.opt(exception=e).debug("Unhandled error")
        console.print(f"[red]❌ Unexpected error: {escape(str(e))}[/]")


# =============================================================================
# init
# =============================================================================


async def _init_project(
    store: CredentialStore, email: str, password: str, project_id: str
) -> ProjectConfig:
    async with ArsenalClient() as client:
        return await initialize_project(client, store, email, password, project_id)


@app.command()
def init() -> None:
    """
    Initialize an Arsenal project in the current directory.

    Logs in, checks that you own the project and stores a project API key
    in .arsenal/config.json.
    """
    store = CredentialStore(Path.cwd())

    with _reported_errors():
        if store.exists() and not Confirm.ask(
            f"{store.config_path} already exists. Overwrite it?", default=False
        ):
            console.print("[yellow]⚠️ Keeping existing config.[/]")
            return

        email = Prompt.ask("Enter your Arsenal login email")
        password = Prompt.ask("Enter your Arsenal password", password=True)
        project_id = Prompt.ask("Enter your Arsenal project ID (from arsenal.com)")

        config = asyncio.run(_init_project(store, email, password, project_id))
        console.print(f"[green]✅ Generated API key ({config.masked_api_key})[/]")
        console.print("[green]✅ Project initialized with API key[/]")


# =============================================================================
# sync
# =============================================================================


async def _run_sync(workdir: Path, progress: Progress) -> SyncResult:
    task = progress.add_task("Validating config...", total=None)

    def on_record(name: str, current: int, total: int) -> None:
        progress.update(task, description=f"📤 [{current}/{total}] {escape(name)}")

    async with ArsenalClient() as client:
        return await SyncService(workdir, client, progress_callback=on_record).run()


def _print_sync_result(result: SyncResult) -> None:
    console.print(f"[blue]🔗 Project ID: {result.project_id}[/]")
    console.print(f"[blue]🔗 GitHub Repo: {escape(result.github_repo or 'not linked')}[/]")

    if result.nothing_to_sync:
        console.print("📭 No learnings to sync.")
        return

    if result.succeeded:
        console.print(f"[green]✅ Successfully synced {result.succeeded} learning(s)[/]")
    if result.failed:
        console.print(f"[red]❌ Failed to sync {result.failed} learning(s)[/]")
        table = Table(show_header=True, header_style="bold red")
        table.add_column("Learning")
        table.add_column("Reason")
        for failure in result.failures:
            table.add_row(escape(failure.label), escape(failure.reason))
        console.print(table)
        console.print("[dim]Failed learnings stay pending; run `arsenal sync` to retry.[/]")


@app.command()
def sync() -> None:
    """
    Sync local learnings to the cloud.

    Each learning in .arsenal/learnings is uploaded on its own and deleted
    once accepted; failed ones stay for the next run.
    """
    with _reported_errors():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            result = asyncio.run(_run_sync(Path.cwd(), progress))
        _print_sync_result(result)


# =============================================================================
# link / unlink
# =============================================================================


@app.command()
def link() -> None:
    """Link Arsenal to git hooks for automatic syncing."""
    workdir = Path.cwd()

    with _reported_errors():
        if not is_git_repo(workdir):
            raise NotAGitRepoError(workdir)
        CredentialStore(workdir).load()

        detected = detect_remote_url(workdir)
        if detected is None:
            console.print("[yellow]⚠️ Could not auto-detect GitHub repo.[/]")

        repo_url = Prompt.ask(
            "What is the GitHub repo URL for this project?",
            default=detected or DEFAULT_REPO_URL,
        )

        HookInstaller(workdir).link(repo_url)
        console.print("[green]✅ Git hook installed at .git/hooks/pre-push[/]")
        console.print("[green]✅ GitHub repo linked successfully[/]")


@app.command()
def unlink() -> None:
    """Remove Arsenal git hooks."""
    with _reported_errors():
        if HookInstaller(Path.cwd()).unlink():
            console.print("[green]✅ Git hook removed successfully[/]")
        else:
            console.print("[yellow]⚠️ No Arsenal git hook found; nothing to remove.[/]")


# =============================================================================
# Entry Point
# =============================================================================


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"arsenal {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = None,
) -> None:
    """
    🧠 Arsenal - capture code learnings and sync them to your project.

    \b
    Quick Start:
      arsenal init     # Bind this directory to a project
      arsenal sync     # Upload pending learnings
      arsenal link     # Sync automatically before every push
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=get_settings().log_level.upper(),
        format="<level>{message}</level>",
    )


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
