"""Structured telemetry for the patch pipeline and the edit tool.

Each milestone is logged at INFO on ``hunkmend.telemetry`` as one compact JSON
object. ``event``, ``stage`` and ``timestamp`` always come first; the
remaining keys are the caller's fields.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

TELEMETRY_LOGGER = logging.getLogger("hunkmend.telemetry")

# Pipeline stage reported for every known event.
EVENT_STAGES: Mapping[str, str] = {
    "patch_parsed": "parse",
    "hunks_resolved": "search",
    "patch_applied": "apply",
    "patch_partially_applied": "apply",
    "patch_apply_failed": "apply",
    "edit_written": "edit",
    "edit_skipped": "edit",
}


def to_jsonable(value: Any) -> Any:
    """Reduce paths, enums, dataclasses and containers to plain JSON values."""
    if isinstance(value, Enum):
        return to_jsonable(value.value)
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Path):
        return value.as_posix()
    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(child) for key, child in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(item) for item in value]
    return str(value)


def emit_event(event: str, **fields: Any) -> None:
    """Log ``event`` with ``fields``; unknown event names raise ``ValueError``."""
    stage = EVENT_STAGES.get(event)
    if stage is None:
        raise ValueError(f"Unknown telemetry event: {event}")
    if not TELEMETRY_LOGGER.isEnabledFor(logging.INFO):
        return
    payload: dict[str, Any] = {
        "event": event,
        "stage": stage,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    payload.update((key, to_jsonable(value)) for key, value in fields.items())
    TELEMETRY_LOGGER.info(json.dumps(payload, separators=(",", ":"), ensure_ascii=True))


__all__ = ["EVENT_STAGES", "TELEMETRY_LOGGER", "emit_event", "to_jsonable"]
