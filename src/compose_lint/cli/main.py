"""Root Typer app for the compose-lint CLI."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="compose-lint",
    help="compose-lint: find missing modifier defaults and unstable collection parameters.",
    no_args_is_help=True,
)


def _register_commands() -> None:
    """Register all CLI commands."""
    from compose_lint.cli.check_cmd import check_cmd
    from compose_lint.cli.rules_cmd import explain_cmd, rules_cmd

    app.command(name="check")(check_cmd)
    app.command(name="rules")(rules_cmd)
    app.command(name="explain")(explain_cmd)


_register_commands()
