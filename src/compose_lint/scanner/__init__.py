"""Scanner — front ends producing the normalized declaration view.

Public API:
    scan_file(file_path, source=None, config=None) -> FileSnapshot
    load_manifest(path) -> list[FileSnapshot]
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from compose_lint.scanner.annotations import describe_annotation, parse_type_text
from compose_lint.scanner.extractor import DeclarationExtractor
from compose_lint.scanner.manifest import load_manifest, parse_manifest
from compose_lint.scanner.types import (
    FileSnapshot,
    FunctionDeclaration,
    FunctionFlags,
    ParameterDeclaration,
    SourceSpan,
    Token,
    TypeDescriptor,
)

if TYPE_CHECKING:
    from compose_lint.config import Config


def scan_file(
    file_path: str, source: str | None = None, config: Config | None = None
) -> FileSnapshot:
    """Scan a single Python file. Reads from disk if source not provided."""
    if source is None:
        with Path(file_path).open(encoding="utf-8-sig", errors="replace") as f:
            source = f.read()
    return DeclarationExtractor(source, file_path, config).extract()


__all__ = [
    "DeclarationExtractor",
    "FileSnapshot",
    "FunctionDeclaration",
    "FunctionFlags",
    "ParameterDeclaration",
    "SourceSpan",
    "Token",
    "TypeDescriptor",
    "describe_annotation",
    "load_manifest",
    "parse_manifest",
    "parse_type_text",
    "scan_file",
]
