"""Parse unified diff text into :class:`~hunkmend.patch.models.Hunk` values."""

from __future__ import annotations

import re
from typing import Sequence

from .errors import ParseError
from .models import HeaderRange, Hunk, HunkHeader, HunkLine, Patch, split_lines

_RANGE = re.compile(r"^(?P<start>\d+)(?:,(?P<count>\d+))?$")


def _parse_range(token: str, marker: str, *, line: str, line_number: int) -> HeaderRange:
    """Parse ``-12,3`` / ``+12`` into a 0-based :class:`HeaderRange`."""
    if not token.startswith(marker):
        raise ParseError(
            f"Hunk range must start with '{marker}'",
            line_number=line_number,
            line=line,
        )
    match = _RANGE.match(token[1:])
    if not match:
        raise ParseError(
            f"Invalid hunk range {token!r}",
            line_number=line_number,
            line=line,
        )
    start = int(match.group("start"))
    count = match.group("count")
    return HeaderRange(start=max(start - 1, 0), range=int(count) if count is not None else 1)


def parse_header(line: str, *, line_number: int = 1) -> HunkHeader:
    """Parse ``@@ -a,b +c,d @@ hint`` into a :class:`HunkHeader`."""
    if not line.startswith("@@"):
        raise ParseError("Hunk header must start with @@", line_number=line_number, line=line)
    parts = line.split("@@", 2)
    if len(line.split()) < 4 or len(parts) < 3:
        raise ParseError("Invalid hunk header format", line_number=line_number, line=line)
    ranges = parts[1].split()
    if len(ranges) != 2:
        raise ParseError("Invalid range format in hunk header", line_number=line_number, line=line)
    source = _parse_range(ranges[0], "-", line=line, line_number=line_number)
    dest = _parse_range(ranges[1], "+", line=line, line_number=line_number)
    return HunkHeader(source=source, dest=dest, hint=parts[2])


def parse_line(line: str) -> HunkLine:
    """Classify one body line by its prefix; unprefixed lines count as context."""
    if line.startswith("+"):
        return HunkLine.added(line[1:])
    if line.startswith("-"):
        return HunkLine.removed(line[1:])
    if line.startswith(" "):
        return HunkLine.context(line[1:])
    return HunkLine.context(line)


def parse_hunk(block: Sequence[str], *, line_number: int = 1) -> Hunk:
    """Parse one hunk block whose first entry is the ``@@`` header."""
    if not block:
        raise ParseError("Empty hunk", line_number=line_number, line="")
    header = parse_header(block[0], line_number=line_number)
    lines = tuple(parse_line(line) for line in block[1:] if not line.startswith("\\"))
    return Hunk(header=header, lines=lines, raw_body="\n".join(block))


def parse_patch(patch: str) -> Patch:
    """Split ``patch`` at ``@@`` lines, keeping the leading file headers verbatim.

    Empty input produces an empty :class:`Patch`, which callers treat as a no-op.
    """
    preamble: list[str] = []
    hunks: list[Hunk] = []
    block: list[str] = []
    block_start = 0

    for line_number, line in enumerate(split_lines(patch or ""), start=1):
        if line.startswith("@@"):
            if block:
                hunks.append(parse_hunk(block, line_number=block_start))
            block = [line]
            block_start = line_number
        elif block:
            block.append(line)
        else:
            preamble.append(line)

    if block:
        hunks.append(parse_hunk(block, line_number=block_start))

    return Patch(preamble=tuple(preamble), hunks=tuple(hunks))


def parse_hunks(patch: str) -> list[Hunk]:
    """Return only the hunks of ``patch``."""
    return list(parse_patch(patch).hunks)


__all__ = ["parse_header", "parse_hunk", "parse_hunks", "parse_line", "parse_patch"]
