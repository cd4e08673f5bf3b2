from __future__ import annotations

from hunkmend.patch.models import HunkLine
from hunkmend.patch.parser import parse_hunks
from hunkmend.patch.search import find_candidates


def _lines(text: str) -> list[str]:
    return text.splitlines()


def test_find_candidates_ignores_declared_line_numbers() -> None:
    hunks = parse_hunks("@@ -40,2 +40,2 @@\n-beta\n+BETA\n gamma\n")

    candidates = find_candidates(_lines("alpha\nbeta\ngamma\n"), hunks)

    assert len(candidates) == 1
    candidate = candidates[0]
    assert candidate.match_start_line == 1
    assert candidate.is_complete
    assert candidate.hunk is hunks[0]


def test_find_candidates_tracks_every_hunk_and_every_start() -> None:
    hunks = parse_hunks(
        "@@ -1,2 +1,2 @@\n x\n-y\n+Y\n"
        "@@ -5,1 +5,1 @@\n-z\n+Z\n"
    )
    text = "x\ny\nz\nx\ny\n"

    candidates = find_candidates(_lines(text), hunks)

    located = [(candidate.hunk_index, candidate.match_start_line) for candidate in candidates]
    assert located == [(0, 0), (1, 2), (0, 3)]


def test_find_candidates_inserts_omitted_blank_context_line() -> None:
    hunks = parse_hunks("@@ -1,2 +1,2 @@\n def a():\n-    return 1\n+    return 2\n")
    text = "def a():\n\n    return 1\n"

    (candidate,) = find_candidates(_lines(text), hunks)

    assert candidate.match_start_line == 0
    assert candidate.hunk is not hunks[0]
    assert candidate.hunk.lines[1] == HunkLine.context("")
    assert [line.text for line in candidate.hunk.matchable_lines] == ["def a():", "", "    return 1"]
    # the parsed hunk is never modified in place
    assert len(hunks[0].lines) == 3


def test_find_candidates_keeps_whitespace_of_recovered_blank_line() -> None:
    hunks = parse_hunks("@@ -1,2 +1,2 @@\n a\n-b\n")

    (candidate,) = find_candidates(["a", "   ", "b"], hunks)

    assert candidate.hunk.lines[1] == HunkLine.context("   ")


def test_find_candidates_truncates_mismatching_trailing_context() -> None:
    hunks = parse_hunks("@@ -1,4 +1,4 @@\n a\n-b\n+B\n c\n d\n")
    text = "a\nb\nsomething else\nd\n"

    (candidate,) = find_candidates(_lines(text), hunks)

    assert candidate.is_complete
    assert [line.as_patch_line() for line in candidate.hunk.lines] == [" a", "-b", "+B"]
    assert candidate.hunk.raw_body == hunks[0].raw_body


def test_find_candidates_discards_candidates_cut_off_by_end_of_text() -> None:
    hunks = parse_hunks("@@ -1,3 +1,3 @@\n-x = 1\n+x = 10\n y = 2\n z = 3\n")

    assert find_candidates(["x = 1", "y = 2"], hunks) == []


def test_find_candidates_ignores_prefix_cut_off_by_end_of_text() -> None:
    hunks = parse_hunks("@@ -44,3 +44,3 @@\n-beta\n+BETA\n gamma\n delta\n")
    lines = ["beta", "gamma", "delta"] + [f"filler {index}" for index in range(40)] + ["beta"]

    (candidate,) = find_candidates(lines, hunks)

    assert candidate.match_start_line == 0
    assert candidate.hunk is hunks[0]


def test_find_candidates_never_relaxes_pending_removals() -> None:
    hunks = parse_hunks("@@ -1,3 +1,2 @@\n a\n-b\n c\n")

    assert find_candidates(_lines("a\nX\nb\nc\n"), hunks) == []


def test_find_candidates_does_not_truncate_away_pending_additions() -> None:
    hunks = parse_hunks("@@ -1,3 +1,4 @@\n a\n b\n c\n+new\n")

    assert find_candidates(_lines("a\nb\nmismatch\n"), hunks) == []


def test_find_candidates_keeps_additions_before_truncated_context() -> None:
    hunks = parse_hunks("@@ -1,3 +1,4 @@\n a\n b\n+new\n c\n")

    (candidate,) = find_candidates(_lines("a\nb\nmismatch\n"), hunks)

    assert [line.as_patch_line() for line in candidate.hunk.lines] == [" a", " b", "+new"]


def test_find_candidates_leaves_unmatched_hunks_unresolved() -> None:
    hunks = parse_hunks(
        "@@ -1,1 +1,1 @@\n-alpha\n+ALPHA\n"
        "@@ -3,1 +3,1 @@\n-missing\n+MISSING\n"
    )

    candidates = find_candidates(_lines("alpha\nbeta\n"), hunks)

    assert {candidate.hunk_index for candidate in candidates} == {0}


def test_find_candidates_cannot_place_pure_insertions() -> None:
    hunks = parse_hunks("@@ -1,0 +1,2 @@\n+one\n+two\n")

    assert find_candidates(_lines("alpha\n"), hunks) == []
