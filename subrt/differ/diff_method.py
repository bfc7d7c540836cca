"""Methods available to compare two runtimes."""

from __future__ import annotations

from enum import Enum


class DiffMethod(Enum):
    """How runtimes are compared."""

    REDUCED = "reduced"
    """The runtimes are reduced first and the reduced runtimes are compared."""

    @classmethod
    def parse(cls, text: str) -> DiffMethod:
        """Parse a method name, case-insensitively."""
        if text.lower() in ("reduced", "partial"):
            return cls.REDUCED
        raise ValueError(f"Cannot convert '{text}' to a known DiffMethod")