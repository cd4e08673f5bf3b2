from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture()
def numbered_text() -> str:
    """Twenty distinct lines, newline terminated."""

    return "".join(f"line {index}\n" for index in range(1, 21))
