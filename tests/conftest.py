"""Shared fixtures for all test modules."""

from __future__ import annotations

import pytest

from compose_lint.config import Config
from compose_lint.logging.logger import RunLogger
from compose_lint.scanner.annotations import parse_type_text
from compose_lint.scanner.extractor import trailing_token
from compose_lint.scanner.types import (
    FunctionDeclaration,
    FunctionFlags,
    ParameterDeclaration,
    SourceSpan,
)


@pytest.fixture
def tmp_config(tmp_path):
    """Config logging to a temp directory."""
    return Config(log_dir=tmp_path / "logs")


@pytest.fixture
def run_logger(tmp_config):
    """RunLogger writing to temp dir."""
    return RunLogger(tmp_config.log_dir)


# -----------------------------------------------------------------------
# Declaration builders (host-neutral, Kotlin-style type text)
# -----------------------------------------------------------------------


def make_param(
    name: str,
    type_text: str | None,
    *,
    has_default: bool = False,
    line: int = 1,
    col: int = 9,
    accepts_default: bool = True,
) -> ParameterDeclaration:
    """Parameter whose text is ``name: type`` laid out on one line from ``col``."""
    text = f"{name}: {type_text}" if type_text else name
    span = SourceSpan("Card.kt", line, col, line, col + len(text))
    type_span = None
    if type_text:
        type_col = col + len(name) + 2
        type_span = SourceSpan("Card.kt", line, type_col, line, type_col + len(type_text))
    return ParameterDeclaration(
        name=name,
        type=parse_type_text(type_text, type_span),
        has_default=has_default,
        span=span,
        text=text,
        trailing_token=trailing_token(text, span),
        accepts_default=accepts_default,
    )


def make_function(
    name: str,
    *params: ParameterDeclaration,
    markers: tuple[str, ...] = ("Composable",),
    **flags: bool,
) -> FunctionDeclaration:
    return FunctionDeclaration(
        name=name,
        qualified_name=name,
        markers=frozenset(markers),
        parameters=params,
        span=SourceSpan("Card.kt", 1, 0, 1, 80),
        flags=FunctionFlags(**flags),
    )


@pytest.fixture
def param():
    return make_param


@pytest.fixture
def function():
    return make_function
