"""CLI entry point (`github`).

Commands:
- `github [--proxy URL] clone --org ORG [--path DIR] ...`

The root callback builds the one GitHub client (proxy included) shared by
listing and cloning; `clone` delegates the work to
`core.services.clone_pipeline`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from adapters.github_api import GitHubClient
from cli.ui_components import print_report
from core.config import AppSettings, CloneOptions, RepoType
from core.domain.errors import OrgCloneError
from core.domain.models import Repository
from core.log import configure_logging
from core.services.clone_pipeline import PipelineHooks, clone_repos_by_org

app = typer.Typer(
    name="github",
    no_args_is_help=True,
    add_completion=False,
    help="Clone every repository of a GitHub organization.",
)

_console = Console()
logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Shared between the root callback and subcommands (`ctx.obj`)."""

    settings: AppSettings
    proxy: str = ""
    client: GitHubClient | None = None


@app.callback()
def root(
    ctx: typer.Context,
    proxy: str = typer.Option("", "--proxy", help="http/https or socks5 proxy"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Build the (optionally proxied) GitHub client."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    try:
        client = GitHubClient.from_proxy(proxy, settings)
    except OrgCloneError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    logger.info("proxy address %s", client.route.display() or "(direct)")
    ctx.call_on_close(client.close)
    ctx.obj = CliState(settings=settings, proxy=proxy, client=client)


@app.command()
def clone(
    ctx: typer.Context,
    org: str = typer.Option("", "--org", help="org name"),
    path: Path = typer.Option(Path("."), "--path", help="clone path"),
    username: str = typer.Option("", "--username", help="github username"),
    password: str = typer.Option(
        "",
        "--password",
        envvar="ORGCLONE_PASSWORD",
        show_default=False,
        help="github password or token",
    ),
    repo_type: RepoType = typer.Option(RepoType.ALL, "--type", case_sensitive=False, help="repo type filter"),
    recurse_submodules: bool = typer.Option(
        True,
        "--recurse-submodules/--no-recurse-submodules",
        help="clone submodules recursively",
    ),
) -> None:
    """Clone github repos by org."""

    state: CliState = ctx.obj
    options = CloneOptions(
        proxy=state.proxy,
        org=org.strip(),
        path=path,
        username=username,
        password=password or None,
        repo_type=repo_type,
        recurse_submodules=recurse_submodules,
    )

    try:
        report = clone_repos_by_org(
            options,
            state.client,
            route=state.client.route if state.client is not None else None,
            hooks=_console_hooks(),
        )
    except OrgCloneError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    print_report(_console, report)


def _console_hooks() -> PipelineHooks:
    def on_start(repo: Repository, index: int, total: int) -> None:
        counter = escape(f"[{index}/{total}]")
        _console.print(f"[bold cyan]{counter}[/bold cyan] {escape(repo.full_name or repo.name)}")

    return PipelineHooks(clone_start=on_start)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
