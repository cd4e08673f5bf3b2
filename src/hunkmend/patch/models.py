"""Immutable value types describing parsed unified-diff hunks."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class LineKind(str, Enum):
    """Role of a single line inside a hunk body."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"


_PREFIXES = {
    LineKind.CONTEXT: " ",
    LineKind.ADDED: "+",
    LineKind.REMOVED: "-",
}


@dataclass(frozen=True, slots=True)
class HunkLine:
    """One body line of a hunk without its diff prefix."""

    kind: LineKind
    text: str

    @classmethod
    def context(cls, text: str) -> "HunkLine":
        """Build an unchanged line."""
        return cls(LineKind.CONTEXT, text)

    @classmethod
    def added(cls, text: str) -> "HunkLine":
        """Build a line the patch introduces."""
        return cls(LineKind.ADDED, text)

    @classmethod
    def removed(cls, text: str) -> "HunkLine":
        """Build a line the patch deletes."""
        return cls(LineKind.REMOVED, text)

    @property
    def is_matchable(self) -> bool:
        """Context and removed lines must be found verbatim in the original."""
        return self.kind is not LineKind.ADDED

    def as_patch_line(self) -> str:
        """Return the line with its diff prefix restored."""
        return f"{_PREFIXES[self.kind]}{self.text}"


@dataclass(frozen=True, slots=True)
class HeaderRange:
    """Line span declared by one side of a hunk header.

    ``start`` is 0-based; headers are rendered 1-based.
    """

    start: int
    range: int

    def render(self) -> str:
        """Format as the 1-based ``start,range`` pair used in headers."""
        return f"{self.start + 1},{self.range}"


@dataclass(frozen=True, slots=True)
class HunkHeader:
    """Declared and corrected ranges of a hunk."""

    source: HeaderRange
    dest: HeaderRange
    fixed_source: HeaderRange | None = None
    fixed_dest: HeaderRange | None = None
    hint: str = ""

    @property
    def is_fixed(self) -> bool:
        return self.fixed_source is not None and self.fixed_dest is not None


@dataclass(frozen=True, slots=True)
class Hunk:
    """A parsed hunk.

    ``raw_body`` is the hunk exactly as it appeared in the patch (header line
    included) and identifies the hunk even after a recovery heuristic produced a
    modified copy of ``lines``.
    """

    header: HunkHeader
    lines: Tuple[HunkLine, ...]
    raw_body: str

    @property
    def matchable_lines(self) -> Tuple[HunkLine, ...]:
        return tuple(line for line in self.lines if line.is_matchable)

    @property
    def matchable_count(self) -> int:
        return sum(1 for line in self.lines if line.is_matchable)

    @property
    def added_count(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.ADDED)

    @property
    def removed_count(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.REMOVED)

    @property
    def context_count(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.CONTEXT)

    @property
    def source_span(self) -> int:
        return self.removed_count + self.context_count

    @property
    def dest_span(self) -> int:
        return self.added_count + self.context_count

    @property
    def line_delta(self) -> int:
        """Visible-line shift this hunk causes for every hunk after it."""
        return self.added_count - self.removed_count

    def real_index(self, index: int) -> int:
        """Translate an index into the matchable view into an index into ``lines``.

        Indexes past the last matchable line map to ``len(lines)``.
        """
        seen = 0
        for position, line in enumerate(self.lines):
            if not line.is_matchable:
                continue
            if seen == index:
                return position
            seen += 1
        return len(self.lines)

    def expects(self, text: str, index: int) -> bool:
        """Return True when the ``index``-th matchable line equals ``text`` exactly."""
        matchable = self.matchable_lines
        if index >= len(matchable):
            return False
        return matchable[index].text == text

    def only_context_from(self, index: int) -> bool:
        """Return True when every line from matchable ``index`` onward is context."""
        tail = self.lines[self.real_index(index):]
        return all(line.kind is LineKind.CONTEXT for line in tail)

    def with_line_inserted(self, line: HunkLine, index: int) -> "Hunk":
        position = self.real_index(index)
        lines = self.lines[:position] + (line,) + self.lines[position:]
        return replace(self, lines=lines)

    def truncated(self, index: int) -> "Hunk":
        """Return a copy ending just before matchable line ``index``."""
        return replace(self, lines=self.lines[: self.real_index(index)])

    def with_fixed_header(self, source: HeaderRange, dest: HeaderRange) -> "Hunk":
        header = replace(self.header, fixed_source=source, fixed_dest=dest)
        return replace(self, header=header)


@dataclass(frozen=True, slots=True)
class Patch:
    """Ordered hunks plus the file-header lines that preceded the first hunk."""

    preamble: Tuple[str, ...] = ()
    hunks: Tuple[Hunk, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.hunks


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` without producing an entry for a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def join_lines(lines: list[str], *, trailing_newline: bool) -> str:
    """Join lines with ``\\n``, appending a final newline when requested."""
    if not lines:
        return ""
    text = "\n".join(lines)
    if trailing_newline:
        text += "\n"
    return text


__all__ = [
    "HeaderRange",
    "Hunk",
    "HunkHeader",
    "HunkLine",
    "LineKind",
    "Patch",
    "join_lines",
    "split_lines",
]
