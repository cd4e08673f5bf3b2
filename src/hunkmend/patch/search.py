"""Locate hunks in the original text by content instead of by header numbers.

Generated diffs routinely miscount lines, drop blank context lines, or carry
trailing context that never existed. :func:`find_candidates` therefore ignores
the declared ranges and sweeps the original text once, tracking every partial
alignment of every hunk at the same time.

Each live :class:`Candidate` is a small state value: the hunk variant it is
matching and a cursor into that hunk's matchable lines. Per original line a
candidate either advances, is replaced by a recovered copy, or is dropped.
Spawning is the only way to add candidates, so at most ``hunks`` new ones
appear per original line; completed candidates stop comparing and cost a
single check per line from then on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from .models import Hunk, HunkLine

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Candidate:
    """One attempt to align ``hunk`` starting at ``match_start_line`` (0-based).

    ``hunk`` is either the parsed hunk itself or a private copy produced by a
    recovery heuristic. ``cursor`` indexes the hunk's matchable lines.
    """

    hunk: Hunk
    match_start_line: int
    cursor: int = 1
    hunk_index: int = 0

    @property
    def is_complete(self) -> bool:
        return self.cursor >= self.hunk.matchable_count

    def advanced(self) -> "Candidate":
        """Return a copy whose cursor moved past the matched line."""
        return replace(self, cursor=self.cursor + 1)


def _recover_blank_line(candidate: Candidate, line: str) -> Candidate:
    """Assume the diff omitted the blank context line found in the original."""
    hunk = candidate.hunk.with_line_inserted(HunkLine.context(line), candidate.cursor)
    return replace(candidate, hunk=hunk, cursor=candidate.cursor + 1)


def _recover_trailing_context(candidate: Candidate) -> Candidate:
    """Accept the match so far and drop the unmatched trailing context."""
    hunk = candidate.hunk.truncated(candidate.cursor)
    return replace(candidate, hunk=hunk)


def _step(candidate: Candidate, line: str, line_number: int) -> Candidate | None:
    """Feed one original line to ``candidate``; ``None`` means it is dropped."""
    if candidate.is_complete:
        return candidate
    if candidate.hunk.expects(line, candidate.cursor):
        LOGGER.debug("line %d matched hunk #%d at cursor %d", line_number + 1, candidate.hunk_index + 1, candidate.cursor)
        return candidate.advanced()
    if not line.strip():
        LOGGER.debug(
            "line %d is blank; inserting context into hunk #%d at cursor %d",
            line_number + 1,
            candidate.hunk_index + 1,
            candidate.cursor,
        )
        return _recover_blank_line(candidate, line)
    if candidate.hunk.only_context_from(candidate.cursor):
        LOGGER.debug(
            "line %d mismatched trailing context of hunk #%d; truncating at cursor %d",
            line_number + 1,
            candidate.hunk_index + 1,
            candidate.cursor,
        )
        return _recover_trailing_context(candidate)
    LOGGER.debug(
        "line %d dropped candidate for hunk #%d started at line %d",
        line_number + 1,
        candidate.hunk_index + 1,
        candidate.match_start_line + 1,
    )
    return None


def find_candidates(lines: Sequence[str], hunks: Sequence[Hunk]) -> list[Candidate]:
    """Return every completed candidate, ordered by ``match_start_line``.

    Candidates still incomplete when the text runs out are discarded. Hunks
    without a completed candidate are unresolved; callers detect them by
    comparing ``hunk_index`` values against ``hunks``.
    """
    live: list[Candidate] = []

    for line_number, line in enumerate(lines):
        survivors: list[Candidate] = []
        for candidate in live:
            stepped = _step(candidate, line, line_number)
            if stepped is not None:
                survivors.append(stepped)

        for index, hunk in enumerate(hunks):
            if hunk.expects(line, 0):
                LOGGER.debug("line %d starts a candidate for hunk #%d", line_number + 1, index + 1)
                survivors.append(Candidate(hunk=hunk, match_start_line=line_number, hunk_index=index))

        live = survivors

    completed = [candidate for candidate in live if candidate.is_complete]
    completed.sort(key=lambda item: item.match_start_line)
    return completed


__all__ = ["Candidate", "find_candidates"]
