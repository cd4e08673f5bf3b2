"""Turn completed candidates into hunks with corrected headers."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from .models import HeaderRange, Hunk
from .search import Candidate

LOGGER = logging.getLogger(__name__)

TieBreak = Callable[[Candidate], int]


def declared_distance(candidate: Candidate) -> int:
    """Distance between where a candidate matched and where its header said it would."""
    return abs(candidate.match_start_line - candidate.hunk.header.source.start)


def select_candidates(
    candidates: Iterable[Candidate],
    *,
    tie_break: TieBreak = declared_distance,
) -> list[Candidate]:
    """Keep one candidate per hunk body, preferring the lowest ``tie_break`` score.

    Equal scores keep the candidate that matched first in the file.
    """
    chosen: dict[str, Candidate] = {}
    for candidate in candidates:
        key = candidate.hunk.raw_body
        existing = chosen.get(key)
        if existing is None:
            chosen[key] = candidate
            continue
        if tie_break(candidate) < tie_break(existing):
            LOGGER.debug(
                "hunk #%d: preferring match at line %d over line %d",
                candidate.hunk_index + 1,
                candidate.match_start_line + 1,
                existing.match_start_line + 1,
            )
            chosen[key] = candidate
    return sorted(chosen.values(), key=lambda item: item.match_start_line)


def rebuild_hunks(
    candidates: Sequence[Candidate],
    *,
    tie_break: TieBreak = declared_distance,
) -> list[Hunk]:
    """Compute fixed source/destination ranges for the selected candidates.

    The destination start of each hunk is shifted by the added-minus-removed
    delta of every hunk before it in file order.
    """
    offset = 0
    rebuilt: list[Hunk] = []
    for candidate in select_candidates(candidates, tie_break=tie_break):
        hunk = candidate.hunk
        source = HeaderRange(start=candidate.match_start_line, range=hunk.source_span)
        dest = HeaderRange(start=max(candidate.match_start_line + offset, 0), range=hunk.dest_span)
        offset += hunk.line_delta
        rebuilt.append(hunk.with_fixed_header(source, dest))
    return rebuilt


__all__ = ["TieBreak", "declared_distance", "rebuild_hunks", "select_candidates"]
