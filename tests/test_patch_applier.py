from __future__ import annotations

import pytest

from hunkmend.patch.applier import apply_exact
from hunkmend.patch.errors import ApplyMismatch


def test_apply_exact_replaces_and_keeps_context() -> None:
    result = apply_exact("a\nb\nc\n", "--- a/f\n+++ b/f\n@@ -1,2 +1,3 @@\n a\n-b\n+B\n+B2\n")

    assert result == "a\nB\nB2\nc\n"


def test_apply_exact_applies_hunks_in_source_order() -> None:
    patch = "@@ -3,1 +3,1 @@\n-c\n+C\n@@ -1,1 +1,1 @@\n-a\n+A\n"

    assert apply_exact("a\nb\nc\n", patch) == "A\nb\nC\n"


def test_apply_exact_preserves_missing_trailing_newline() -> None:
    assert apply_exact("a\nb", "@@ -2,1 +2,2 @@\n b\n+c\n") == "a\nb\nc"
    assert apply_exact("a\nb\n", "@@ -2,1 +2,2 @@\n b\n+c\n") == "a\nb\nc\n"


def test_apply_exact_reports_mismatch_with_surrounding_lines() -> None:
    with pytest.raises(ApplyMismatch) as excinfo:
        apply_exact("a\nb\nc\n", "@@ -2,1 +2,1 @@\n-x\n+B\n")

    error = excinfo.value
    assert error.hunk == 1
    assert error.line == 2
    assert error.expected == "x"
    assert error.found == "b"
    assert error.before == "a"
    assert error.after == "c"
    assert error.details["found"] == "b"


def test_apply_exact_reports_end_of_file() -> None:
    with pytest.raises(ApplyMismatch) as excinfo:
        apply_exact("a\n", "@@ -1,2 +1,1 @@\n a\n-b\n")

    assert excinfo.value.line == 2
    assert excinfo.value.found is None
    assert excinfo.value.before == "a"
    assert "end of file" in str(excinfo.value)


def test_apply_exact_rejects_overlapping_hunks() -> None:
    patch = "@@ -1,2 +1,2 @@\n a\n-b\n+B\n@@ -2,2 +2,2 @@\n b\n-c\n+C\n"

    with pytest.raises(ApplyMismatch) as excinfo:
        apply_exact("a\nb\nc\n", patch)

    assert excinfo.value.hunk == 2


def test_apply_exact_without_hunks_returns_original() -> None:
    assert apply_exact("a\nb\n", "") == "a\nb\n"
