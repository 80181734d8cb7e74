"""Diagnostic records and the emitter that hands them to the host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from compose_lint.rules.issues import Issue
    from compose_lint.scanner.types import SourceSpan


@dataclass(frozen=True, slots=True)
class SuggestedEdit:
    """Replace ``original_text`` at ``span`` with ``replacement_text``."""

    span: SourceSpan
    original_text: str
    replacement_text: str
    name: str
    auto_fix: bool = False


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reported violation."""

    issue: Issue
    location: SourceSpan
    message: str
    fix: SuggestedEdit | None = None


class DiagnosticSink(Protocol):
    def report(self, diagnostic: Diagnostic) -> None: ...


@dataclass
class ListSink:
    """Sink that keeps diagnostics in arrival order."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)


class Emitter:
    """Builds diagnostics and forwards them, unfiltered, to a sink."""

    def __init__(self, sink: DiagnosticSink) -> None:
        self.sink = sink

    def emit(
        self,
        issue: Issue,
        location: SourceSpan,
        message: str,
        fix: SuggestedEdit | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(issue=issue, location=location, message=message, fix=fix)
        self.sink.report(diagnostic)
        return diagnostic
