"""Serialise corrected hunks back into unified diff text."""

from __future__ import annotations

from typing import Iterable, Sequence

from .errors import InternalInvariantError
from .models import Hunk


def render_header(hunk: Hunk) -> str:
    """Render the corrected ``@@`` line, keeping the trailing hint."""
    header = hunk.header
    if header.fixed_source is None or header.fixed_dest is None:
        raise InternalInvariantError(
            "Hunk reached rendering without corrected ranges.",
            details={"raw_body": hunk.raw_body},
        )
    return f"@@ -{header.fixed_source.render()} +{header.fixed_dest.render()} @@{header.hint}"


def render_hunk(hunk: Hunk) -> str:
    """Render ``hunk`` with its fixed header; every line ends with a newline."""
    rendered = [render_header(hunk)]
    rendered.extend(line.as_patch_line() for line in hunk.lines)
    return "\n".join(rendered) + "\n"


def render_patch(preamble: Sequence[str], hunks: Iterable[Hunk]) -> str:
    """Render the preserved file headers followed by each corrected hunk."""
    parts = [f"{line}\n" for line in preamble]
    parts.extend(render_hunk(hunk) for hunk in hunks)
    return "".join(parts)


__all__ = ["render_header", "render_hunk", "render_patch"]
