"""Compact rendering of byte vectors such as constant and storage values."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

LIMIT = 32
"""Default length above which values are truncated."""


def _debug(values: Sequence[Any]) -> str:
    return "[" + ", ".join(str(value) for value in values) + "]"


@dataclass(frozen=True)
class DisplayableVec:
    """A sequence rendered short: repetitions collapsed, long data truncated."""

    reference: Sequence[Any]
    max_size: int | None = None
    min_size: int = 3
    all_same: Any = field(init=False, default=None)

    def __post_init__(self) -> None:
        values = tuple(self.reference)
        object.__setattr__(self, "reference", values)
        if self.max_size is None:
            object.__setattr__(self, "max_size", LIMIT)
        first = values[0] if values else 0
        same = first if all(value == first for value in values) else None
        object.__setattr__(self, "all_same", same)

    def oversized(self, limit: int | None = None) -> bool:
        """Whether the data is longer than ``limit`` (default ``LIMIT``)."""
        return len(self.reference) > (LIMIT if limit is None else limit)

    def _repeating_to_string(self) -> str:
        if len(self.reference) > self.min_size and self.all_same is not None:
            return f"[{self.all_same}; {len(self.reference)}]"
        return _debug(self.reference)

    def to_short_string(self) -> str:
        """Render using the configured maximum size."""
        return self.to_short_string_with_max(self.max_size)

    def to_short_string_with_max(self, max_size: int) -> str:
        """Render, truncating to ``max_size`` items if needed."""
        if self.all_same is not None:
            return self._repeating_to_string()
        if not self.oversized(max_size):
            return _debug(self.reference)
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        head = ", ".join(str(value) for value in self.reference[:max_size])
        return f"[ {head}, ... ]"