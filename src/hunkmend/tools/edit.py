"""Edit files on disk by applying header-tolerant unified diffs."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from ..config import EditSettings
from ..patch.engine import Applied, ApplyOutcome, PartiallyResolved, apply_diff
from ..patch.errors import PatchError
from ..telemetry import emit_event

EditStatus = Literal["applied", "partial", "unchanged", "failed"]

# Serialises every read-modify-write performed by this module.
_FILE_LOCK = threading.Lock()


class EditError(PatchError):
    """Raised when the target file or the patch cannot be used."""


@dataclass(slots=True)
class EditResult:
    """Outcome of :func:`edit_file`."""

    path: Path
    status: EditStatus
    written: bool
    outcome: ApplyOutcome
    message: str

    @property
    def is_error(self) -> bool:
        return self.status in {"partial", "failed"}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "path": self.path.as_posix(),
            "status": self.status,
            "written": self.written,
            "message": self.message,
        }
        if isinstance(self.outcome, PartiallyResolved):
            payload["unresolved_hunks"] = list(self.outcome.unresolved_hunks)
            if self.outcome.mismatched_hunk is not None:
                payload["mismatched_hunk"] = self.outcome.mismatched_hunk.to_dict()
        return payload


def resolve_path(root: Path, path: Path | str) -> Path:
    """Resolve ``path`` relative to ``root`` unless it is already absolute."""
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = root / candidate
    return candidate.resolve()


def _normalise_line_endings(text: str) -> str:
    """Convert CRLF/CR sequences to LF for deterministic matching."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _check_patch(diff: str, settings: EditSettings) -> None:
    if settings.enforce_lf and "\r" in diff:
        raise EditError("Patch must use LF line endings (CR characters detected).")
    try:
        size = len(diff.encode("utf-8"))
    except UnicodeEncodeError as error:
        raise EditError("Patch is not valid UTF-8.") from error
    if settings.max_patch_bytes > 0 and size > settings.max_patch_bytes:
        raise EditError(
            f"Patch exceeds maximum size of {settings.max_patch_bytes} bytes.",
            details={"patch_bytes": size, "max_patch_bytes": settings.max_patch_bytes},
        )


def read_original(path: Path, settings: EditSettings) -> str:
    """Read ``path`` as UTF-8, raising :class:`EditError` when it cannot be used."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as error:
        raise EditError(f"Error reading file '{path}': file does not exist", details={"path": path}) from error
    except (OSError, UnicodeDecodeError) as error:
        raise EditError(f"Error reading file '{path}': {error}", details={"path": path}) from error
    if settings.normalise_line_endings:
        text = _normalise_line_endings(text)
    return text


def _write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8", newline="")
    except OSError as error:
        raise EditError(f"Error writing to file '{path}': {error}", details={"path": path}) from error


def describe_outcome(path: Path, outcome: ApplyOutcome, *, written: bool) -> str:
    """Render a user-facing summary of an engine outcome."""
    display = path.as_posix()
    if isinstance(outcome, Applied):
        lines = [f"Successfully applied diff to file: {display}"]
        if outcome.adjustments:
            lines.append("Corrected hunk headers:")
            lines.extend(f"- {entry}" for entry in outcome.adjustments)
        return "\n".join(lines)

    lines: list[str] = []
    if outcome.mismatched_hunk is not None:
        lines.append(f"Error applying diff to {display}:")
        lines.append(outcome.mismatched_hunk.describe())
    elif outcome.applied_text is not None and written:
        lines.append(f"Partially applied diff to file: {display}")
    elif outcome.applied_text is not None:
        lines.append(f"Diff for {display} was not written: some hunks could not be located.")
    else:
        lines.append(f"Error applying diff to {display}: no hunk could be located.")
    if outcome.unresolved_hunks:
        lines.append(f"{len(outcome.unresolved_hunks)} hunk(s) did not match the file content:")
        for body in outcome.unresolved_hunks:
            lines.append(body)
    return "\n".join(lines)


def edit_file(
    path: Path | str,
    diff: str,
    *,
    root: Path | str | None = None,
    settings: EditSettings | None = None,
    dry_run: bool = False,
) -> EditResult:
    """Apply ``diff`` to the file at ``path`` and persist the result.

    The file is only written when every hunk applied, or when
    ``settings.allow_partial_writes`` is set and at least one hunk applied.
    Parse errors propagate as :class:`~hunkmend.patch.errors.ParseError`.
    """
    active = settings or EditSettings()
    base = Path(root) if root is not None else Path.cwd()
    target = resolve_path(base, path)
    _check_patch(diff, active)

    with _FILE_LOCK:
        original = read_original(target, active)
        outcome = apply_diff(original, diff)

        new_text: str | None
        if isinstance(outcome, Applied):
            new_text = outcome.new_text
            status: EditStatus = "applied" if new_text != original else "unchanged"
        else:
            new_text = outcome.applied_text if active.allow_partial_writes else None
            status = "partial" if outcome.applied_text is not None else "failed"

        written = False
        if new_text is not None and new_text != original and not dry_run:
            _write_text(target, new_text)
            written = True

    emit_event(
        "edit_written" if written else "edit_skipped",
        path=target,
        status=status,
        dry_run=dry_run,
    )
    return EditResult(
        path=target,
        status=status,
        written=written,
        outcome=outcome,
        message=describe_outcome(target, outcome, written=written),
    )


__all__ = ["EditError", "EditResult", "describe_outcome", "edit_file", "read_original", "resolve_path"]
