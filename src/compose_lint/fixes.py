"""Apply auto-applicable suggested edits to source text.

Span columns are UTF-8 byte offsets, matching what ``ast`` reports.
"""

from __future__ import annotations

import codecs
import logging
from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING

from compose_lint.exceptions import EditConflictError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from compose_lint.rules import Diagnostic, SuggestedEdit

logger = logging.getLogger(__name__)


def _line_starts(data: bytes) -> list[int]:
    starts = [0]
    for i, byte in enumerate(data):
        if byte == 0x0A:  # \n
            starts.append(i + 1)
    return starts


def _offset(starts: list[int], line: int, col: int) -> int:
    if line < 1 or line > len(starts):
        raise EditConflictError(f"Line {line} is outside the source")
    return starts[line - 1] + col


def apply_edits(source: str, edits: Iterable[SuggestedEdit]) -> str:
    """Apply edits bottom-up. Raises EditConflictError on stale or overlapping edits."""
    data = source.encode("utf-8")
    starts = _line_starts(data)

    resolved: list[tuple[int, int, SuggestedEdit]] = []
    for edit in edits:
        start = _offset(starts, edit.span.start_line, edit.span.start_col)
        end = _offset(starts, edit.span.end_line, edit.span.end_col)
        current = data[start:end].decode("utf-8", errors="replace")
        if current != edit.original_text:
            raise EditConflictError(
                f"{edit.span}: expected {edit.original_text!r}, found {current!r}"
            )
        resolved.append((start, end, edit))

    resolved.sort(key=lambda item: item[0], reverse=True)
    for (start, end, _), (next_start, _, _) in zip(resolved[1:], resolved, strict=False):
        if end > next_start:
            raise EditConflictError(f"Overlapping edits at byte offset {next_start}")

    for start, end, edit in resolved:
        data = data[:start] + edit.replacement_text.encode("utf-8") + data[end:]
    return data.decode("utf-8")


def fixable_edits(diagnostics: Iterable[Diagnostic]) -> list[SuggestedEdit]:
    """Edits marked auto-applicable."""
    return [d.fix for d in diagnostics if d.fix is not None and d.fix.auto_fix]


def apply_fixes(diagnostics: Iterable[Diagnostic]) -> dict[str, int]:
    """Rewrite files in place. Returns the number of edits applied per file."""
    by_file: dict[str, list[SuggestedEdit]] = defaultdict(list)
    for edit in fixable_edits(diagnostics):
        by_file[edit.span.file_path].append(edit)

    applied: dict[str, int] = {}
    for file_path, edits in by_file.items():
        path = Path(file_path)
        # Bytes in and out: line endings and any BOM stay as they were.
        data = path.read_bytes()
        bom = codecs.BOM_UTF8 if data.startswith(codecs.BOM_UTF8) else b""
        source = data[len(bom) :].decode("utf-8")
        path.write_bytes(bom + apply_edits(source, edits).encode("utf-8"))
        logger.info("Applied %d fixes to %s", len(edits), file_path)
        applied[file_path] = len(edits)
    return applied
