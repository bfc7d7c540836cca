"""Rendering of one pallet change alongside the pallets it was computed from."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .changes import ChangeKind, MapChange
from .reduced_pallet import ReducedPallet, ReducedPalletChange

_INDENT = " " * 4


def _item(pallet: ReducedPallet | None, collection: str, key: Any) -> Any:
    if pallet is None:
        return None
    return getattr(pallet, collection).get(key)


@dataclass(frozen=True)
class ReducedPalletChangeWrapper:
    """A pallet change with the left and right pallets for context.

    Either pallet may be ``None`` when it was introduced or removed.
    """

    changes: ReducedPalletChange
    pallet_a: ReducedPallet | None = None
    pallet_b: ReducedPallet | None = None

    def _format_map_change(self, collection: str, map_change: MapChange) -> str:
        if map_change.kind is ChangeKind.ADDED:
            return f"    [+] {map_change.desc!r}\n"
        if map_change.kind is ChangeKind.CHANGED:
            item_a = _item(self.pallet_a, collection, map_change.key)
            label = "n/a" if item_a is None else str(item_a)
            return (
                f"{_INDENT}[≠] {label:<20}\n"
                f"{_INDENT}    {list(map_change.changes)!r}\n"
            )
        item_a = _item(self.pallet_a, collection, map_change.key)
        name = "n/a" if item_a is None else item_a.name
        return f"    [-] {json.dumps(name, ensure_ascii=False)}\n"

    def __str__(self) -> str:
        field = self.changes.field
        if field in (ReducedPalletChange.INDEX, ReducedPalletChange.NAME):
            return f"{field}: {self.changes.change!r}\n"
        lines = [f"  - {field} changes:\n"]
        lines.extend(self._format_map_change(field, mc) for mc in self.changes.change)
        return "".join(lines)