"""Header-tolerant unified diff engine."""

from .applier import apply_exact
from .engine import Applied, ApplyOutcome, FixedPatch, MismatchReport, PartiallyResolved, apply_diff, fix_patch
from .errors import ApplyMismatch, InternalInvariantError, ParseError, PatchError
from .models import HeaderRange, Hunk, HunkHeader, HunkLine, LineKind, Patch
from .parser import parse_hunks, parse_patch
from .rebuild import declared_distance, rebuild_hunks
from .render import render_hunk, render_patch
from .search import Candidate, find_candidates

__all__ = [
    "Applied",
    "ApplyMismatch",
    "ApplyOutcome",
    "Candidate",
    "FixedPatch",
    "HeaderRange",
    "Hunk",
    "HunkHeader",
    "HunkLine",
    "InternalInvariantError",
    "LineKind",
    "MismatchReport",
    "ParseError",
    "PartiallyResolved",
    "Patch",
    "PatchError",
    "apply_diff",
    "apply_exact",
    "declared_distance",
    "find_candidates",
    "fix_patch",
    "parse_hunks",
    "parse_patch",
    "rebuild_hunks",
    "render_hunk",
    "render_patch",
]
