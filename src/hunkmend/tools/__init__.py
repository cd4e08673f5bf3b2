"""Tool integrations built on the patch engine."""

from .edit import EditError, EditResult, describe_outcome, edit_file, read_original, resolve_path

__all__ = ["EditError", "EditResult", "describe_outcome", "edit_file", "read_original", "resolve_path"]
