"""End-to-end pipeline: parse, locate, rebuild, render, and apply a diff.

``apply_diff`` is a pure function of ``(original_text, patch_text)``. It keeps
no state between calls and is safe to call from several threads at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

from ..telemetry import emit_event
from .applier import apply_exact
from .errors import ApplyMismatch
from .models import Hunk, Patch, split_lines
from .parser import parse_patch
from .rebuild import TieBreak, declared_distance, rebuild_hunks
from .render import render_patch
from .search import find_candidates


@dataclass(frozen=True, slots=True)
class MismatchReport:
    """Where exact application of the corrected patch failed."""

    hunk: int
    line: int
    expected: str
    found: str | None
    before: str | None = None
    after: str | None = None

    @classmethod
    def from_error(cls, error: ApplyMismatch) -> "MismatchReport":
        return cls(
            hunk=error.hunk,
            line=error.line,
            expected=error.expected,
            found=error.found,
            before=error.before,
            after=error.after,
        )

    def describe(self) -> str:
        found = "<end of file>" if self.found is None else repr(self.found)
        lines = [f"Hunk #{self.hunk} mismatch at line {self.line}: expected {self.expected!r}, found {found}"]
        if self.before is not None:
            lines.append(f"  {self.line - 1}: {self.before}")
        if self.found is not None:
            lines.append(f"> {self.line}: {self.found}")
        if self.after is not None:
            lines.append(f"  {self.line + 1}: {self.after}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hunk": self.hunk,
            "line": self.line,
            "expected": self.expected,
            "found": self.found,
            "before": self.before,
            "after": self.after,
        }


@dataclass(frozen=True, slots=True)
class FixedPatch:
    """A patch whose hunk headers were corrected against the original text."""

    text: str
    hunks: Tuple[Hunk, ...] = ()
    unresolved_hunks: Tuple[str, ...] = ()
    adjustments: Tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        return not self.unresolved_hunks


@dataclass(frozen=True, slots=True)
class Applied:
    """Every hunk was located and applied."""

    new_text: str
    patch: str = ""
    adjustments: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PartiallyResolved:
    """Some hunks could not be located, or the corrected patch failed to apply."""

    applied_text: str | None
    unresolved_hunks: Tuple[str, ...] = ()
    mismatched_hunk: MismatchReport | None = None
    patch: str = ""
    adjustments: Tuple[str, ...] = ()


ApplyOutcome = Union[Applied, PartiallyResolved]


def _describe_adjustment(number: int, hunk: Hunk) -> str | None:
    header = hunk.header
    if header.fixed_source is None or header.fixed_dest is None:
        return None
    before = f"-{header.source.render()} +{header.dest.render()}"
    after = f"-{header.fixed_source.render()} +{header.fixed_dest.render()}"
    if before == after:
        return None
    return f"hunk {number}: {before} -> {after}"


def _fix_parsed(
    original: str,
    patch: Patch,
    *,
    tie_break: TieBreak,
) -> FixedPatch:
    candidates = find_candidates(split_lines(original), patch.hunks)
    rebuilt = rebuild_hunks(candidates, tie_break=tie_break)

    resolved_bodies = {hunk.raw_body for hunk in rebuilt}
    unresolved = tuple(hunk.raw_body for hunk in patch.hunks if hunk.raw_body not in resolved_bodies)

    numbers = {hunk.raw_body: index for index, hunk in enumerate(patch.hunks, start=1)}
    adjustments = tuple(
        message
        for message in (_describe_adjustment(numbers[hunk.raw_body], hunk) for hunk in rebuilt)
        if message
    )

    emit_event(
        "hunks_resolved",
        hunks=len(patch.hunks),
        resolved=len(rebuilt),
        unresolved=len(unresolved),
        candidates=len(candidates),
        adjustments=adjustments,
    )
    return FixedPatch(
        text=render_patch(patch.preamble, rebuilt),
        hunks=tuple(rebuilt),
        unresolved_hunks=unresolved,
        adjustments=adjustments,
    )


def fix_patch(
    original: str,
    patch_text: str,
    *,
    tie_break: TieBreak = declared_distance,
) -> FixedPatch:
    """Correct the hunk headers of ``patch_text`` against ``original`` without applying it.

    Raises :class:`~hunkmend.patch.errors.ParseError` for malformed headers.
    """
    patch = parse_patch(patch_text)
    emit_event("patch_parsed", hunks=len(patch.hunks), preamble=len(patch.preamble))
    return _fix_parsed(original, patch, tie_break=tie_break)


def apply_diff(
    original: str,
    patch_text: str,
    *,
    tie_break: TieBreak = declared_distance,
) -> ApplyOutcome:
    """Locate every hunk of ``patch_text`` in ``original`` and apply the result.

    An empty patch is a no-op. Unresolved hunks are reported and skipped while
    the remaining hunks still apply; an exact-apply mismatch discards the
    whole result.
    """
    patch = parse_patch(patch_text)
    emit_event("patch_parsed", hunks=len(patch.hunks), preamble=len(patch.preamble))
    if patch.is_empty:
        emit_event("patch_applied", hunks=0, reason="no-op")
        return Applied(new_text=original, patch=patch_text)

    fixed = _fix_parsed(original, patch, tie_break=tie_break)
    if not fixed.hunks:
        emit_event("patch_apply_failed", reason="unresolved", unresolved=len(fixed.unresolved_hunks))
        return PartiallyResolved(
            applied_text=None,
            unresolved_hunks=fixed.unresolved_hunks,
            patch=fixed.text,
        )

    try:
        new_text = apply_exact(original, fixed.text)
    except ApplyMismatch as error:
        emit_event("patch_apply_failed", reason="mismatch", details=error.details)
        return PartiallyResolved(
            applied_text=None,
            unresolved_hunks=fixed.unresolved_hunks,
            mismatched_hunk=MismatchReport.from_error(error),
            patch=fixed.text,
            adjustments=fixed.adjustments,
        )

    if fixed.unresolved_hunks:
        emit_event(
            "patch_partially_applied",
            applied=len(fixed.hunks),
            unresolved=len(fixed.unresolved_hunks),
        )
        return PartiallyResolved(
            applied_text=new_text,
            unresolved_hunks=fixed.unresolved_hunks,
            patch=fixed.text,
            adjustments=fixed.adjustments,
        )

    emit_event("patch_applied", hunks=len(fixed.hunks), adjustments=fixed.adjustments)
    return Applied(new_text=new_text, patch=fixed.text, adjustments=fixed.adjustments)


__all__ = [
    "Applied",
    "ApplyOutcome",
    "FixedPatch",
    "MismatchReport",
    "PartiallyResolved",
    "apply_diff",
    "fix_patch",
]
