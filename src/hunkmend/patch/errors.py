"""Exceptions raised while parsing, rendering, or applying patches."""

from __future__ import annotations

from typing import Any, Mapping


class PatchError(RuntimeError):
    """Base class for patch failures carrying structured diagnostics."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = dict(details or {})


class ParseError(PatchError):
    """Raised when a hunk header or range cannot be parsed."""

    def __init__(self, message: str, *, line_number: int, line: str) -> None:
        super().__init__(
            f"{message} (patch line {line_number}: {line!r})",
            details={"line_number": line_number, "line": line},
        )
        self.line_number = line_number
        self.line = line


class ApplyMismatch(PatchError):
    """Raised when a corrected hunk does not match the original text exactly."""

    def __init__(
        self,
        *,
        hunk: int,
        line: int,
        expected: str,
        found: str | None,
        before: str | None = None,
        after: str | None = None,
    ) -> None:
        found_text = "<end of file>" if found is None else repr(found)
        super().__init__(
            f"Hunk #{hunk} does not apply at line {line}: expected {expected!r}, found {found_text}",
            details={
                "hunk": hunk,
                "line": line,
                "expected": expected,
                "found": found,
                "before": before,
                "after": after,
            },
        )
        self.hunk = hunk
        self.line = line
        self.expected = expected
        self.found = found
        self.before = before
        self.after = after


class InternalInvariantError(PatchError):
    """Raised when a hunk reaches rendering without corrected headers."""


__all__ = ["ApplyMismatch", "InternalInvariantError", "ParseError", "PatchError"]
