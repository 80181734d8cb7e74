"""Normalized declaration view consumed by the rules.

Frozen dataclasses for function declarations, their parameters and declared
types. Front ends (Python ``ast``, JSON manifests) build these; the rules only
read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """A source range. Lines are 1-based, columns 0-based, end exclusive."""

    file_path: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file_path}:{self.start_line}:{self.start_col + 1}"


@dataclass(frozen=True, slots=True)
class Token:
    """A single source token and where it sits."""

    text: str
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """A declared type reference.

    ``raw_name`` is the final dotted segment with generic arguments and
    nullability removed: ``List<Foo>?`` and ``typing.List[Foo]`` both have
    raw name ``List``.
    """

    text: str  # As written: "List<String>?", "list[str] | None"
    raw_name: str
    arguments: tuple[TypeDescriptor, ...] = ()
    nullable: bool = False
    markers: frozenset[str] = frozenset()  # Stability annotations: {"Immutable"}
    span: SourceSpan | None = None
    core_text: str = ""  # Text without nullability/annotation wrappers: "list[str]"

    @property
    def generic_suffix(self) -> str:
        """Generic argument text as written, e.g. ``<String>`` or ``[str]``."""
        text = (self.core_text or self.text).strip()
        for opener, closer in (("<", ">"), ("[", "]")):
            start = text.find(opener)
            end = text.rfind(closer)
            if start != -1 and end > start:
                return text[start : end + 1]
        return ""


@dataclass(frozen=True, slots=True)
class ParameterDeclaration:
    """A single value parameter of a function."""

    name: str
    type: TypeDescriptor | None  # None when the type reference is missing or unresolvable
    has_default: bool
    span: SourceSpan
    text: str  # "modifier: Modifier"
    trailing_token: Token
    accepts_default: bool = True  # False where the language rejects a default here


@dataclass(frozen=True, slots=True)
class FunctionFlags:
    """Declaration kinds whose signatures are constrained by something else."""

    interface_member: bool = False
    abstract: bool = False
    expect_or_actual: bool = False
    override: bool = False

    @property
    def constrained(self) -> bool:
        return self.interface_member or self.abstract or self.expect_or_actual or self.override


@dataclass(frozen=True, slots=True)
class FunctionDeclaration:
    """A declared function with its markers, parameters and kind flags."""

    name: str
    qualified_name: str  # "CardScreen.Header"
    markers: frozenset[str]  # ["composable", "override"]
    parameters: tuple[ParameterDeclaration, ...]
    span: SourceSpan
    flags: FunctionFlags = field(default_factory=FunctionFlags)
    enclosing_scope: str | None = None


@dataclass(frozen=True, slots=True)
class FileSnapshot:
    """All function declarations found in one source file."""

    file_path: str
    functions: list[FunctionDeclaration]
    parse_error: str | None = None
