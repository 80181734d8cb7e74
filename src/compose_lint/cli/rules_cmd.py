"""CLI rules/explain commands: list and document registered issues."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from compose_lint.exceptions import UnknownIssueError
from compose_lint.rules import ALL_ISSUES, get_issue

console = Console()


def rules_cmd() -> None:
    """List registered issues."""
    table = Table(title="Registered issues")
    table.add_column("ID", style="cyan")
    table.add_column("Severity")
    table.add_column("Category")
    table.add_column("Summary", max_width=60)
    for issue in ALL_ISSUES:
        table.add_row(issue.id, issue.severity.value, issue.category.value, issue.brief)
    console.print(table)


def explain_cmd(
    issue_id: Annotated[str, typer.Argument(help="Issue id, e.g. ComposeModifierWithoutDefault.")],
) -> None:
    """Show the explanation for one issue."""
    try:
        issue = get_issue(issue_id)
    except UnknownIssueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc

    console.print(Panel(issue.explanation, title=f"{issue.id}: {issue.brief}", border_style="cyan"))
