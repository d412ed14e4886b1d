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

from core.domain.models import CloneReport


def build_report_table(report: CloneReport) -> Table:
    """Tabla Rich con un resultado por repositorio."""

    table = Table(title=f"Clone report: {report.org}")
    table.add_column("Repo", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Path", style="magenta")
    table.add_column("Error", style="red")
    for outcome in report.outcomes:
        table.add_row(
            Text(outcome.repository.name),
            "[green]OK[/green]" if outcome.ok else "[red]FAIL[/red]",
            Text(str(outcome.path)),
            Text(outcome.error or ""),
        )
    return table


def build_summary_panel(report: CloneReport) -> Panel:
    body = Text()
    body.append(f"{report.succeeded}", style="bold green")
    body.append(f"/{report.attempted} cloned")
    if report.failed:
        body.append(f", {report.failed} failed", style="bold red")
    return Panel(body, title=Text(report.org, style="bold cyan"), border_style="cyan")


def print_report(console: Console, report: CloneReport) -> None:
    if report.outcomes:
        console.print(build_report_table(report))
    console.print(build_summary_panel(report))
