"""Tests for applying suggested edits."""

from __future__ import annotations

import pytest

from compose_lint.engine import analyze_paths
from compose_lint.exceptions import EditConflictError
from compose_lint.fixes import apply_edits, apply_fixes
from compose_lint.rules import SuggestedEdit
from compose_lint.scanner.types import SourceSpan


def _edit(line, start, end, original, replacement, path="a.py"):
    return SuggestedEdit(
        span=SourceSpan(path, line, start, line, end),
        original_text=original,
        replacement_text=replacement,
        name="test",
        auto_fix=True,
    )


class TestApplyEdits:
    def test_multiple_edits_same_line(self):
        source = "f(a: M, b: M)\n"
        edits = [_edit(1, 5, 6, "M", "M = M"), _edit(1, 11, 12, "M", "M = M")]
        assert apply_edits(source, edits) == "f(a: M = M, b: M = M)\n"

    def test_multiline(self):
        source = "def f(\n    a: M,\n    b: M,\n):\n"
        edits = [_edit(3, 7, 8, "M", "M = M"), _edit(2, 7, 8, "M", "M = M")]
        assert apply_edits(source, edits) == "def f(\n    a: M = M,\n    b: M = M,\n):\n"

    def test_non_ascii_columns_are_bytes(self):
        source = "def f(é: M): pass\n"
        # "é" is two bytes in UTF-8, so M sits at byte column 10
        assert apply_edits(source, [_edit(1, 10, 11, "M", "M = M")]) == "def f(é: M = M): pass\n"

    def test_stale_edit(self):
        with pytest.raises(EditConflictError, match="expected 'M'"):
            apply_edits("f(a: X)\n", [_edit(1, 5, 6, "M", "M = M")])

    def test_overlapping_edits(self):
        with pytest.raises(EditConflictError, match="Overlapping"):
            apply_edits("f(a: MM)\n", [_edit(1, 5, 7, "MM", "x"), _edit(1, 6, 7, "M", "y")])

    def test_line_out_of_range(self):
        with pytest.raises(EditConflictError):
            apply_edits("x\n", [_edit(5, 0, 1, "x", "y")])


class TestApplyFixes:
    def test_rewrites_files(self, tmp_path):
        path = tmp_path / "screen.py"
        path.write_text(
            "@composable\ndef Card(text: str, modifier: Modifier):\n    pass\n"
            "\n@composable\ndef Row(modifier: Modifier, text: str):\n    pass\n"
        )
        result = analyze_paths([path])

        applied = apply_fixes(result.diagnostics)

        assert applied == {str(path): 1}
        content = path.read_text()
        assert "def Card(text: str, modifier: Modifier = Modifier):" in content
        assert "def Row(modifier: Modifier, text: str):" in content

    def test_crlf_line_endings_preserved(self, tmp_path):
        path = tmp_path / "windows.py"
        path.write_bytes(b"@composable\r\ndef Card(modifier: Modifier): pass\r\n")

        apply_fixes(analyze_paths([path]).diagnostics)

        assert path.read_bytes() == (
            b"@composable\r\ndef Card(modifier: Modifier = Modifier): pass\r\n"
        )

    def test_byte_order_mark_preserved(self, tmp_path):
        path = tmp_path / "bom.py"
        path.write_bytes(
            b"\xef\xbb\xbf@composable\ndef Card(\xc3\xa9: str, modifier: Modifier): pass\n"
        )

        apply_fixes(analyze_paths([path]).diagnostics)

        assert path.read_bytes() == (
            b"\xef\xbb\xbf@composable\n"
            b"def Card(\xc3\xa9: str, modifier: Modifier = Modifier): pass\n"
        )
