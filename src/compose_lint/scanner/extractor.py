"""DeclarationExtractor — build the normalized declaration view from Python source."""

from __future__ import annotations

import ast
import logging
import re

from compose_lint.config import Config
from compose_lint.scanner.annotations import describe_annotation, node_span
from compose_lint.scanner.types import (
    FileSnapshot,
    FunctionDeclaration,
    FunctionFlags,
    ParameterDeclaration,
    SourceSpan,
    Token,
)

logger = logging.getLogger(__name__)

_TRAILING_TOKEN = re.compile(r"(\w+|\S)\s*$")


class DeclarationExtractor(ast.NodeVisitor):
    """Extract every function declaration (with parameters and kind flags).

    Usage:
        extractor = DeclarationExtractor(source, file_path)
        snapshot = extractor.extract()
    """

    def __init__(self, source: str, file_path: str, config: Config | None = None) -> None:
        self.source = source
        self.file_path = file_path
        self.config = config or Config()
        self.functions: list[FunctionDeclaration] = []
        self._context_stack: list[str] = []
        self._current_class: ast.ClassDef | None = None

    def extract(self) -> FileSnapshot:
        """Parse source and extract all function declarations. Returns FileSnapshot."""
        try:
            tree = ast.parse(self.source, filename=self.file_path)
        except (SyntaxError, ValueError) as exc:
            logger.debug("Skipping %s: %s", self.file_path, exc)
            return FileSnapshot(file_path=self.file_path, functions=[], parse_error=str(exc))

        self.visit(tree)
        return FileSnapshot(file_path=self.file_path, functions=self.functions)

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        prev_class = self._current_class
        self._current_class = node
        self._context_stack.append(node.name)

        self.generic_visit(node)

        self._context_stack.pop()
        self._current_class = prev_class

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._process_function(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._process_function(node)

    def _process_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        markers = frozenset(
            name for name in (_decorator_name(d) for d in node.decorator_list) if name
        )
        self.functions.append(
            FunctionDeclaration(
                name=node.name,
                qualified_name=".".join([*self._context_stack, node.name]),
                markers=markers,
                parameters=tuple(self._parameters(node)),
                span=node_span(node, self.file_path),
                flags=self._flags(markers),
                enclosing_scope=".".join(self._context_stack) or None,
            )
        )

        # Nested functions are plain functions, not members of the enclosing class
        prev_class = self._current_class
        self._current_class = None
        self._context_stack.append(node.name)
        self.generic_visit(node)
        self._context_stack.pop()
        self._current_class = prev_class

    def _flags(self, markers: frozenset[str]) -> FunctionFlags:
        interface_member = False
        if self._current_class is not None:
            bases = {_decorator_name(b) for b in self._current_class.bases}
            interface_member = not bases.isdisjoint(self.config.interface_bases)

        return FunctionFlags(
            interface_member=interface_member,
            abstract=not markers.isdisjoint(self.config.abstract_markers),
            expect_or_actual=not markers.isdisjoint(self.config.platform_markers),
            override=not markers.isdisjoint(self.config.override_markers),
        )

    def _parameters(
        self, node: ast.FunctionDef | ast.AsyncFunctionDef
    ) -> list[ParameterDeclaration]:
        args = node.args
        params: list[ParameterDeclaration] = []

        # Defaults are right-aligned over posonlyargs + args
        positional = [*args.posonlyargs, *args.args]
        first_default = len(positional) - len(args.defaults)
        for i, arg in enumerate(positional):
            params.append(
                self._parameter(
                    arg,
                    has_default=i >= first_default,
                    # A default here is legal only if every later positional one has one
                    accepts_default=i >= first_default - 1,
                )
            )

        for arg, default in zip(args.kwonlyargs, args.kw_defaults, strict=True):
            params.append(self._parameter(arg, has_default=default is not None))

        return params

    def _parameter(
        self, arg: ast.arg, *, has_default: bool, accepts_default: bool = True
    ) -> ParameterDeclaration:
        span = node_span(arg, self.file_path)
        text = ast.get_source_segment(self.source, arg) or arg.arg
        type_ref = (
            describe_annotation(arg.annotation, self.source, self.file_path)
            if arg.annotation is not None
            else None
        )
        return ParameterDeclaration(
            name=arg.arg,
            type=type_ref,
            has_default=has_default,
            span=span,
            text=text,
            trailing_token=trailing_token(text, span),
            accepts_default=accepts_default,
        )


def _decorator_name(node: ast.expr) -> str | None:
    """``@ui.composable()`` -> ``composable``."""
    if isinstance(node, ast.Call):
        return _decorator_name(node.func)
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Subscript):
        return _decorator_name(node.value)
    return None


def trailing_token(text: str, span: SourceSpan) -> Token:
    """Last token of a parameter, anchored at the parameter's end."""
    match = _TRAILING_TOKEN.search(text)
    token = match.group(1) if match else text
    width = len(token.encode("utf-8"))
    return Token(
        text=token,
        span=SourceSpan(
            file_path=span.file_path,
            start_line=span.end_line,
            start_col=span.end_col - width,
            end_line=span.end_line,
            end_col=span.end_col,
        ),
    )
