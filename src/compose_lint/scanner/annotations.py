"""Build TypeDescriptors from Python annotations and from plain type text."""

from __future__ import annotations

import ast
import re
from dataclasses import replace

from compose_lint.scanner.types import SourceSpan, TypeDescriptor

NULLABLE_WRAPPERS = frozenset({"Optional"})
UNION_WRAPPERS = frozenset({"Union"})
ANNOTATED_WRAPPERS = frozenset({"Annotated"})

_MARKER_PREFIX = re.compile(r"^@([\w.]+)(?:\([^)]*\))?\s+")


def node_span(node: ast.AST, file_path: str) -> SourceSpan:
    """Span of an AST node; columns are the UTF-8 offsets ``ast`` reports."""
    return SourceSpan(
        file_path=file_path,
        start_line=node.lineno,
        start_col=node.col_offset,
        end_line=node.end_lineno or node.lineno,
        end_col=node.end_col_offset if node.end_col_offset is not None else node.col_offset,
    )


def describe_annotation(
    node: ast.expr, source: str, file_path: str
) -> TypeDescriptor | None:
    """TypeDescriptor for a parameter annotation, or None when unresolvable."""
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        # Forward reference: "Modifier", "list[Item] | None"
        text = node.value.strip()
        try:
            inner = ast.parse(text, mode="eval").body
        except SyntaxError:
            return None
        described = _describe(inner)
        if described is None:
            return None
        return replace(described, text=text, span=node_span(node, file_path))

    described = _describe(node)
    if described is None:
        return None
    text = ast.get_source_segment(source, node) or described.text
    return replace(described, text=text, span=node_span(node, file_path))


def _dotted_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Call):
        return _dotted_name(node.func)
    return None


def _is_none(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def _union_members(node: ast.expr) -> list[ast.expr]:
    """Flatten ``A | B | None`` into its members."""
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return [*_union_members(node.left), *_union_members(node.right)]
    return [node]


def _describe_union(node: ast.expr, members: list[ast.expr]) -> TypeDescriptor | None:
    text = ast.unparse(node)
    non_none = [m for m in members if not _is_none(m)]
    nullable = len(non_none) != len(members)

    if len(non_none) == 1:
        inner = _describe(non_none[0])
        if inner is None:
            return None
        return replace(inner, text=text, nullable=inner.nullable or nullable)

    arguments = tuple(d for d in (_describe(m) for m in non_none) if d is not None)
    return TypeDescriptor(
        text=text, raw_name="Union", arguments=arguments, nullable=nullable, core_text=text
    )


def _describe(node: ast.expr) -> TypeDescriptor | None:
    if isinstance(node, ast.Constant):
        if node.value is None:
            return TypeDescriptor(text="None", raw_name="None", core_text="None")
        if isinstance(node.value, str):
            try:
                return _describe(ast.parse(node.value.strip(), mode="eval").body)
            except SyntaxError:
                return None
        return None

    if isinstance(node, (ast.Name, ast.Attribute)):
        text = ast.unparse(node)
        return TypeDescriptor(text=text, raw_name=_dotted_name(node) or "", core_text=text)

    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return _describe_union(node, _union_members(node))

    if isinstance(node, ast.Subscript):
        name = _dotted_name(node.value)
        if name is None:
            return None
        elements = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]

        if name in NULLABLE_WRAPPERS and elements:
            inner = _describe(elements[0])
            if inner is None:
                return None
            return replace(inner, text=ast.unparse(node), nullable=True)

        if name in UNION_WRAPPERS:
            return _describe_union(node, list(elements))

        if name in ANNOTATED_WRAPPERS and elements:
            inner = _describe(elements[0])
            if inner is None:
                return None
            markers = {m for m in (_dotted_name(e) for e in elements[1:]) if m}
            return replace(inner, text=ast.unparse(node), markers=inner.markers | markers)

        text = ast.unparse(node)
        arguments = tuple(d for d in (_describe(e) for e in elements) if d is not None)
        return TypeDescriptor(text=text, raw_name=name, arguments=arguments, core_text=text)

    return None


# -----------------------------------------------------------------------
# Plain type text: "List<String>?", "@Immutable Map<K, V>", "list[str] | None"
# -----------------------------------------------------------------------


def _split_arguments(inner: str) -> list[str]:
    """Split generic arguments on top-level commas."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in inner:
        if ch in "<[(":
            depth += 1
        elif ch in ">])":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


def parse_type_text(text: str | None, span: SourceSpan | None = None) -> TypeDescriptor | None:
    """Parse a textual type reference. Returns None when nothing usable is left."""
    if text is None:
        return None
    original = text.strip()
    remaining = original
    if not remaining:
        return None

    markers: set[str] = set()
    while match := _MARKER_PREFIX.match(remaining):
        markers.add(match.group(1).rsplit(".", 1)[-1])
        remaining = remaining[match.end() :].strip()

    nullable = False
    if remaining.endswith("?"):
        nullable = True
        remaining = remaining[:-1].strip()
    elif remaining.endswith("| None"):
        nullable = True
        remaining = remaining[: -len("| None")].strip()

    opener = min(
        (i for i in (remaining.find("<"), remaining.find("[")) if i != -1), default=-1
    )
    if opener == -1:
        base, arguments = remaining, ()
    else:
        closer = ">" if remaining[opener] == "<" else "]"
        if not remaining.endswith(closer):
            return None
        base = remaining[:opener].strip()
        arguments = tuple(
            d
            for d in (parse_type_text(a) for a in _split_arguments(remaining[opener + 1 : -1]))
            if d is not None
        )

    raw_name = base.rsplit(".", 1)[-1]
    if not re.fullmatch(r"\w+", raw_name):
        return None

    return TypeDescriptor(
        text=original,
        raw_name=raw_name,
        arguments=arguments,
        nullable=nullable,
        markers=frozenset(markers),
        span=span,
        core_text=remaining,
    )
