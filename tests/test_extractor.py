"""Tests for DeclarationExtractor — the Python front end."""

from __future__ import annotations

from textwrap import dedent

from compose_lint.scanner import scan_file
from compose_lint.scanner.extractor import DeclarationExtractor
from compose_lint.scanner.types import FileSnapshot, FunctionDeclaration


def _extract(source: str, file_path: str = "/test/screen.py") -> FileSnapshot:
    return DeclarationExtractor(source, file_path).extract()


def _by_name(snapshot: FileSnapshot) -> dict[str, FunctionDeclaration]:
    return {f.qualified_name: f for f in snapshot.functions}


# ---------------------------------------------------------------------------
# Basics
# ---------------------------------------------------------------------------
class TestExtractorBasics:
    def test_component_function(self):
        source = dedent("""\
            @composable
            def Card(text: str, modifier: Modifier):
                pass
        """)
        snapshot = _extract(source)

        assert snapshot.parse_error is None
        fn = snapshot.functions[0]
        assert fn.name == "Card"
        assert fn.markers == frozenset({"composable"})
        assert [p.name for p in fn.parameters] == ["text", "modifier"]
        assert fn.span.start_line == 2
        assert not fn.flags.constrained

    def test_parameter_span_and_trailing_token(self):
        source = "def Card(text: str, modifier: Modifier): pass\n"
        modifier = _extract(source).functions[0].parameters[1]

        assert modifier.text == "modifier: Modifier"
        assert (modifier.span.start_col, modifier.span.end_col) == (20, 38)
        assert modifier.trailing_token.text == "Modifier"
        assert (modifier.trailing_token.span.start_col, modifier.trailing_token.span.end_col) == (30, 38)
        assert modifier.type.raw_name == "Modifier"

    def test_decorator_forms(self):
        source = dedent("""\
            @ui.composable()
            @typing.override
            def Card(): pass
        """)
        fn = _extract(source).functions[0]
        assert fn.markers == frozenset({"composable", "override"})
        assert fn.flags.override

    def test_syntax_error(self):
        snapshot = _extract("def broken(:\n    pass")
        assert snapshot.functions == []
        assert snapshot.parse_error is not None

    def test_async_and_nested_functions(self):
        source = dedent("""\
            async def outer():
                @composable
                def inner(modifier: Modifier): pass
        """)
        functions = _by_name(_extract(source))
        assert set(functions) == {"outer", "outer.inner"}
        assert functions["outer.inner"].enclosing_scope == "outer"

    def test_scan_file_reads_from_disk(self, tmp_path):
        path = tmp_path / "screen.py"
        path.write_text("@composable\ndef Card(items: list[str]): pass\n")
        snapshot = scan_file(str(path))
        assert snapshot.file_path == str(path)
        assert snapshot.functions[0].parameters[0].type.raw_name == "list"


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
class TestExtractorDefaults:
    def test_right_aligned_defaults(self):
        source = "def f(a, b, c=1, *, d, e=2): pass\n"
        params = {p.name: p for p in _extract(source).functions[0].parameters}

        assert [params[n].has_default for n in "abcde"] == [False, False, True, False, True]

    def test_accepts_default(self):
        source = "def f(a, b, c=1, *, d, e=2): pass\n"
        params = {p.name: p for p in _extract(source).functions[0].parameters}

        # a is followed by required b; b is followed only by defaulted c
        assert params["a"].accepts_default is False
        assert params["b"].accepts_default is True
        assert params["d"].accepts_default is True

    def test_varargs_skipped(self):
        source = "def f(*modifiers: Modifier, **extra: Modifier): pass\n"
        assert _extract(source).functions[0].parameters == ()

    def test_positional_only(self):
        source = "def f(modifier: Modifier, /, text: str = ''): pass\n"
        params = _extract(source).functions[0].parameters
        assert [p.name for p in params] == ["modifier", "text"]
        assert params[0].has_default is False
        assert params[0].accepts_default is True


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------
class TestExtractorFlags:
    def test_protocol_member(self):
        source = dedent("""\
            class Screen(Protocol):
                @composable
                def Header(self, modifier: Modifier): ...
        """)
        fn = _by_name(_extract(source))["Screen.Header"]
        assert fn.flags.interface_member
        assert fn.enclosing_scope == "Screen"

    def test_regular_class_member(self):
        source = dedent("""\
            class Screen(Base):
                @composable
                def Header(self, modifier: Modifier): ...
        """)
        fn = _by_name(_extract(source))["Screen.Header"]
        assert not fn.flags.constrained

    def test_nested_function_in_protocol_method_is_not_a_member(self):
        source = dedent("""\
            class Screen(typing.Protocol):
                def Header(self):
                    @composable
                    def Title(modifier: Modifier): ...
        """)
        functions = _by_name(_extract(source))
        assert functions["Screen.Header"].flags.interface_member
        assert not functions["Screen.Header.Title"].flags.interface_member

    def test_abstract(self):
        source = dedent("""\
            class Screen(ABC):
                @composable
                @abc.abstractmethod
                def Header(self, modifier: Modifier): ...
        """)
        assert _by_name(_extract(source))["Screen.Header"].flags.abstract

    def test_expect_and_actual(self):
        source = dedent("""\
            @composable
            @expect
            def Picker(modifier: Modifier): ...

            @composable
            @actual
            def Picker(modifier: Modifier): ...
        """)
        functions = _extract(source).functions
        assert [f.flags.expect_or_actual for f in functions] == [True, True]
