"""Strict, context-verified application of a unified diff."""

from __future__ import annotations

from .errors import ApplyMismatch
from .models import LineKind, join_lines, split_lines
from .parser import parse_patch


def _line_at(lines: list[str], index: int) -> str | None:
    """Return ``lines[index]`` or ``None`` past either end."""
    if 0 <= index < len(lines):
        return lines[index]
    return None


def apply_exact(original: str, patch: str) -> str:
    """Apply ``patch`` to ``original`` trusting its headers, or raise :class:`ApplyMismatch`.

    Nothing is returned unless every hunk verifies, so a failure leaves the
    caller's text untouched.
    """
    parsed = parse_patch(patch)
    source = split_lines(original)
    output: list[str] = []
    cursor = 0

    ordered = sorted(enumerate(parsed.hunks, start=1), key=lambda item: item[1].header.source.start)
    for number, hunk in ordered:
        start = hunk.header.source.start
        if start < cursor or start > len(source):
            first = next((line.text for line in hunk.lines if line.is_matchable), "")
            raise ApplyMismatch(
                hunk=number,
                line=start + 1,
                expected=first,
                found=_line_at(source, start),
                before=_line_at(source, start - 1),
                after=_line_at(source, start + 1),
            )
        output.extend(source[cursor:start])
        cursor = start

        for line in hunk.lines:
            if line.kind is LineKind.ADDED:
                output.append(line.text)
                continue
            found = _line_at(source, cursor)
            if found != line.text:
                raise ApplyMismatch(
                    hunk=number,
                    line=cursor + 1,
                    expected=line.text,
                    found=found,
                    before=_line_at(source, cursor - 1),
                    after=_line_at(source, cursor + 1),
                )
            if line.kind is LineKind.CONTEXT:
                output.append(found)
            cursor += 1

    output.extend(source[cursor:])
    return join_lines(output, trailing_newline=original.endswith("\n"))


__all__ = ["apply_exact"]
