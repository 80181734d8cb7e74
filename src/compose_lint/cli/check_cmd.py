"""CLI check command: analyze sources, optionally fix, render results."""

from __future__ import annotations

import codecs
from contextlib import nullcontext
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from compose_lint.exceptions import ComposeLintError
from compose_lint.models import DiagnosticOut, FixOut, ReportOut, Severity

if TYPE_CHECKING:
    from compose_lint.config import Config
    from compose_lint.engine import AnalysisResult
    from compose_lint.rules import Diagnostic

console = Console()

_SEVERITY_STYLE = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFORMATIONAL: "blue",
}


# -----------------------------------------------------------------------
# Building
# -----------------------------------------------------------------------


SourceLines = dict[str, list[bytes]]


def load_config(config_path: Path | None) -> Config:
    """Explicit --config file, else ./pyproject.toml when present, else defaults."""
    from compose_lint.config import Config

    if config_path is not None:
        return Config.from_pyproject(config_path)
    default = Path("pyproject.toml")
    if default.is_file():
        return Config.from_pyproject(default)
    return Config()


def read_source_lines(diagnostics: list[Diagnostic]) -> SourceLines:
    """Raw lines of every reported file that exists on disk, BOM removed."""
    lines: SourceLines = {}
    for file_path in {d.location.file_path for d in diagnostics}:
        path = Path(file_path)
        if not path.is_file():
            continue
        data = path.read_bytes().removeprefix(codecs.BOM_UTF8)
        lines[file_path] = data.splitlines()
    return lines


def char_column(lines: SourceLines, file_path: str, line: int, byte_col: int) -> int:
    """1-based character column for a 0-based UTF-8 byte column.

    Files that are not on disk (e.g. manifest entries) keep the byte column.
    """
    source = lines.get(file_path)
    if source is None or not 1 <= line <= len(source):
        return byte_col + 1
    return len(source[line - 1][:byte_col].decode("utf-8", errors="replace")) + 1


def diagnostic_out(
    diagnostic: Diagnostic, config: Config, lines: SourceLines | None = None
) -> DiagnosticOut:
    lines = lines or {}
    loc = diagnostic.location
    fix = diagnostic.fix
    return DiagnosticOut(
        issue_id=diagnostic.issue.id,
        severity=config.severity_for(diagnostic.issue),
        category=diagnostic.issue.category,
        file_path=loc.file_path,
        line=loc.start_line,
        column=char_column(lines, loc.file_path, loc.start_line, loc.start_col),
        end_line=loc.end_line,
        end_column=char_column(lines, loc.file_path, loc.end_line, loc.end_col),
        message=diagnostic.message,
        fix=FixOut(
            name=fix.name,
            original_text=fix.original_text,
            replacement_text=fix.replacement_text,
            auto_fix=fix.auto_fix,
            start_line=fix.span.start_line,
            start_col=fix.span.start_col,
            end_line=fix.span.end_line,
            end_col=fix.span.end_col,
        )
        if fix is not None
        else None,
    )


def build_report(
    result: AnalysisResult, config: Config, lines: SourceLines | None = None
) -> ReportOut:
    """Convert an analysis result to the output model, dropping ignored issues.

    ``lines`` maps file paths to the source the spans were computed against;
    reported columns are character based where the source is known.
    """
    diagnostics = [diagnostic_out(d, config, lines) for d in result.diagnostics]
    return ReportOut(
        files_scanned=result.files_scanned,
        diagnostics=[d for d in diagnostics if d.severity != Severity.IGNORE],
        errors=list(result.errors),
    )


# -----------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------


def render_report(report: ReportOut) -> None:
    """Render a report as a Rich table."""
    if report.diagnostics:
        table = Table(title="Diagnostics", show_lines=True)
        table.add_column("Location", style="dim")
        table.add_column("Severity")
        table.add_column("Issue", style="cyan")
        table.add_column("Message", max_width=80)
        for d in report.diagnostics:
            table.add_row(
                f"{d.file_path}:{d.line}:{d.column}",
                Text(d.severity.value, style=_SEVERITY_STYLE.get(d.severity, "")),
                d.issue_id,
                d.message,
            )
        console.print(table)
    else:
        console.print("[green]No issues found.[/green]")

    for error in report.errors:
        console.print(f"[yellow]Skipped:[/yellow] {error}")

    console.print(
        f"\nFiles scanned: [bold]{report.files_scanned}[/bold] | "
        f"Diagnostics: [bold]{len(report.diagnostics)}[/bold]"
    )


# -----------------------------------------------------------------------
# CLI command
# -----------------------------------------------------------------------


def check_cmd(
    paths: Annotated[
        list[Path] | None, typer.Argument(help="Files or directories to analyze.")
    ] = None,
    manifest: Annotated[
        Path | None, typer.Option(help="JSON declaration manifest from another host.")
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    fix: Annotated[bool, typer.Option("--fix", help="Apply auto-applicable fixes.")] = False,
    disable: Annotated[
        list[str] | None, typer.Option("--disable", help="Issue id to disable (repeatable).")
    ] = None,
    workers: Annotated[int | None, typer.Option(min=1, help="Parallel workers.")] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", help="pyproject.toml to read settings from.")
    ] = None,
    log_dir: Annotated[
        Path | None, typer.Option(help="Directory for the JSONL run log.")
    ] = None,
) -> None:
    """Analyze UI component functions for modifier defaults and unstable collections."""
    from compose_lint.engine import AnalysisResult, analyze_paths, analyze_snapshots
    from compose_lint.fixes import apply_fixes
    from compose_lint.logging.logger import RunLogger
    from compose_lint.scanner import load_manifest

    try:
        config = load_config(config_path)
    except ComposeLintError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    if disable:
        config = replace(config, disabled_issues=config.disabled_issues | frozenset(disable))
    if workers is not None:
        config = replace(config, workers=workers)
    if log_dir is not None:
        config = replace(config, log_dir=log_dir)

    if not paths and manifest is None:
        paths = [Path(".")]

    run_logger = RunLogger(config.log_dir) if config.log_dir else None
    timer = run_logger.timed("check") if run_logger else nullcontext({})

    with timer as event:
        result = AnalysisResult()
        try:
            if paths:
                missing = [p for p in paths if not p.exists()]
                if missing:
                    console.print(f"[red]Path does not exist:[/red] {missing[0]}")
                    raise typer.Exit(code=2)
                result.extend(analyze_paths(paths, config))
            if manifest is not None:
                result.extend(analyze_snapshots(load_manifest(manifest), config))
        except ComposeLintError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=2) from exc

        # Spans refer to the files as analyzed, before any fix rewrites them.
        source_lines = read_source_lines(result.diagnostics)

        if fix:
            python_diagnostics = [
                d for d in result.diagnostics if d.location.file_path.endswith(".py")
            ]
            try:
                applied = apply_fixes(python_diagnostics)
            except ComposeLintError as exc:
                console.print(f"[red]Fix failed:[/red] {exc}")
                raise typer.Exit(code=2) from exc
            fixed = {
                id(d)
                for d in python_diagnostics
                if d.fix is not None and d.fix.auto_fix and d.fix.span.file_path in applied
            }
            result.diagnostics = [d for d in result.diagnostics if id(d) not in fixed]
            event["fixed"] = len(fixed)
            if not output_json:
                console.print(f"Applied {len(fixed)} fixes in {len(applied)} files.")

        report = build_report(result, config, source_lines)
        event["files_scanned"] = report.files_scanned
        event["diagnostics"] = len(report.diagnostics)

    if output_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        render_report(report)

    if any(d.severity == Severity.ERROR for d in report.diagnostics):
        raise typer.Exit(code=1)
