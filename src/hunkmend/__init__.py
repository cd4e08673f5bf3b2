"""Apply unified diffs by content when their hunk headers cannot be trusted."""

from .patch import Applied, ParseError, PartiallyResolved, PatchError, apply_diff, fix_patch

__all__ = ["Applied", "ParseError", "PartiallyResolved", "PatchError", "apply_diff", "fix_patch"]
__version__ = "0.1.0"
