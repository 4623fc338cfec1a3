"""Shared types for lnkresolve modules."""

from enum import Enum
from pathlib import Path

Source = str | Path | bytes | bytearray | memoryview


class TargetType(Enum):
    """Kind of filesystem entity a shortcut is allowed to resolve to."""

    FILE = "file"
    DIRECTORY = "directory"
    ANY = "any"
