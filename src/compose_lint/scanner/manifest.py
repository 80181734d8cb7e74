"""Load declarations produced by another host (e.g. a Kotlin PSI dump) from JSON.

Spans use the same convention as the Python front end: 1-based lines,
0-based columns, end exclusive.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from compose_lint.exceptions import ManifestError
from compose_lint.models import FunctionModel, ManifestDocument, ParameterModel, SpanModel
from compose_lint.scanner.annotations import parse_type_text
from compose_lint.scanner.extractor import trailing_token
from compose_lint.scanner.types import (
    FileSnapshot,
    FunctionDeclaration,
    FunctionFlags,
    ParameterDeclaration,
    SourceSpan,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def load_manifest(path: Path) -> list[FileSnapshot]:
    """Read and validate a manifest file. Raises ManifestError."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    return parse_manifest(raw, source=str(path))


def parse_manifest(raw: str, source: str = "<manifest>") -> list[FileSnapshot]:
    """Validate a manifest JSON document and convert it to snapshots."""
    try:
        document = ManifestDocument.model_validate(json.loads(raw))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"{source}: invalid JSON: {exc}") from exc
    except ValidationError as exc:
        raise ManifestError(f"{source}: {exc}") from exc

    snapshots = [
        FileSnapshot(
            file_path=f.path,
            functions=[_function(fn, f.path) for fn in f.functions],
        )
        for f in document.files
    ]
    logger.debug(
        "Loaded %d files, %d functions from %s",
        len(snapshots),
        sum(len(s.functions) for s in snapshots),
        source,
    )
    return snapshots


def _span(model: SpanModel, file_path: str) -> SourceSpan:
    return SourceSpan(
        file_path=file_path,
        start_line=model.start_line,
        start_col=model.start_col,
        end_line=model.end_line,
        end_col=model.end_col,
    )


def _annotation_name(annotation: str) -> str:
    """``@androidx.compose.runtime.Composable`` -> ``Composable``."""
    return annotation.lstrip("@").split("(", 1)[0].rsplit(".", 1)[-1]


def _parameter(model: ParameterModel, file_path: str) -> ParameterDeclaration:
    span = _span(model.span, file_path)
    type_span = _span(model.type_span, file_path) if model.type_span else None
    text = model.text or (f"{model.name}: {model.type}" if model.type else model.name)
    return ParameterDeclaration(
        name=model.name,
        type=parse_type_text(model.type, type_span),
        has_default=model.has_default,
        span=span,
        text=text,
        trailing_token=trailing_token(text, span),
        accepts_default=model.accepts_default,
    )


def _function(model: FunctionModel, file_path: str) -> FunctionDeclaration:
    return FunctionDeclaration(
        name=model.name,
        qualified_name=model.qualified_name or model.name,
        markers=frozenset(_annotation_name(a) for a in model.annotations),
        parameters=tuple(_parameter(p, file_path) for p in model.parameters),
        span=_span(model.span, file_path),
        flags=FunctionFlags(
            interface_member=model.interface_member,
            abstract=model.abstract,
            expect_or_actual=model.expect_or_actual,
            override=model.override,
        ),
        enclosing_scope=model.enclosing_scope,
    )
