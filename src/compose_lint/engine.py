"""Analysis engine: run the rules over declarations, files and directory trees.

Each file is analyzed independently. Workers buffer diagnostics in their own
ListSink; buffers are merged in input order so output is deterministic.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from compose_lint.config import Config
from compose_lint.rules import Emitter, ListSink, rules_for
from compose_lint.scanner import scan_file

if TYPE_CHECKING:
    from collections.abc import Iterable

    from compose_lint.rules import Diagnostic, DiagnosticSink
    from compose_lint.scanner import FileSnapshot, FunctionDeclaration

logger = logging.getLogger(__name__)

SKIPPED_DIRS = frozenset({"venv", ".venv", "__pycache__", "node_modules", "build", "dist"})


@dataclass
class AnalysisResult:
    """Diagnostics plus per-file problems that did not stop the run."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    files_scanned: int = 0

    def extend(self, other: AnalysisResult) -> None:
        self.diagnostics.extend(other.diagnostics)
        self.errors.extend(other.errors)
        self.files_scanned += other.files_scanned


class Analyzer:
    """Feeds declarations through every enabled rule into one sink.

    Usage:
        sink = ListSink()
        Analyzer(config, sink).analyze_snapshot(snapshot)
    """

    def __init__(self, config: Config | None = None, sink: DiagnosticSink | None = None) -> None:
        self.config = config or Config()
        self.sink = sink if sink is not None else ListSink()
        self.emitter = Emitter(self.sink)
        self.rules = rules_for(self.config)

    def analyze_function(self, fn: FunctionDeclaration) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for rule in self.rules:
            diagnostics.extend(rule.run(fn, self.emitter))
        return diagnostics

    def analyze_snapshot(self, snapshot: FileSnapshot) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for fn in snapshot.functions:
            diagnostics.extend(self.analyze_function(fn))
        return diagnostics


def analyze_source(
    source: str, file_path: str = "<string>", config: Config | None = None
) -> list[Diagnostic]:
    """Analyze Python source text and return its diagnostics."""
    config = config or Config()
    snapshot = scan_file(file_path, source=source, config=config)
    return Analyzer(config).analyze_snapshot(snapshot)


def analyze_snapshots(
    snapshots: Iterable[FileSnapshot], config: Config | None = None
) -> AnalysisResult:
    """Analyze pre-built snapshots (e.g. from a manifest)."""
    config = config or Config()
    result = AnalysisResult()
    analyzer = Analyzer(config)
    for snapshot in snapshots:
        result.files_scanned += 1
        if snapshot.parse_error:
            result.errors.append(f"{snapshot.file_path}: {snapshot.parse_error}")
            continue
        result.diagnostics.extend(analyzer.analyze_snapshot(snapshot))
    return result


def _analyze_file(path: Path, config: Config) -> AnalysisResult:
    """Worker body: one file, one private sink."""
    result = AnalysisResult(files_scanned=1)
    try:
        source = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        result.errors.append(f"{path}: {exc}")
        return result

    snapshot = scan_file(str(path), source=source, config=config)
    if snapshot.parse_error:
        logger.warning("Cannot parse %s: %s", path, snapshot.parse_error)
        result.errors.append(f"{path}: {snapshot.parse_error}")
        return result

    sink = ListSink()
    Analyzer(config, sink).analyze_snapshot(snapshot)
    result.diagnostics = sink.diagnostics
    return result


def collect_python_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories into .py files, skipping hidden and virtualenv/cache dirs."""
    files: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        if path.is_dir():
            candidates = sorted(path.rglob("*.py"))
            candidates = [
                c
                for c in candidates
                if not any(
                    p.startswith(".") or p in SKIPPED_DIRS for p in c.relative_to(path).parts[:-1]
                )
            ]
        else:
            candidates = [path]
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved not in seen:
                seen.add(resolved)
                files.append(candidate)
    return files


def analyze_paths(
    paths: Iterable[Path], config: Config | None = None, workers: int | None = None
) -> AnalysisResult:
    """Analyze files and directories in parallel, merging results in input order."""
    config = config or Config()
    files = collect_python_files(paths)
    max_workers = max(1, workers or config.workers)

    result = AnalysisResult()
    if not files:
        return result

    logger.info("Analyzing %d files with %d workers", len(files), max_workers)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        for file_result in pool.map(lambda p: _analyze_file(p, config), files):
            result.extend(file_result)

    logger.info(
        "Analysis finished: %d diagnostics, %d errors",
        len(result.diagnostics),
        len(result.errors),
    )
    return result
