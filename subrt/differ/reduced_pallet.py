"""A reduced pallet: its items grouped by kind, and the changes between two pallets."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from .changes import ChangeKind, MapChange, ValueChange, diff_maps
from .items import Call, Constant, Event, PalletError, Storage

_COLLECTIONS = ("calls", "events", "errors", "constants", "storages")


class PalletItemType(Enum):
    """The kinds of items a pallet holds."""

    CALL = "Call"
    EVENT = "Event"
    ERROR = "Error"
    CONSTANT = "Constant"
    STORAGE = "Storage"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ReducedPalletChange:
    """A change to one field of a pallet.

    ``change`` is a ``ValueChange`` for the index and the name, and a tuple
    of ``MapChange`` for the item collections.
    """

    INDEX: ClassVar[str] = "index"
    NAME: ClassVar[str] = "name"
    CALLS: ClassVar[str] = "calls"
    EVENTS: ClassVar[str] = "events"
    ERRORS: ClassVar[str] = "errors"
    CONSTANTS: ClassVar[str] = "constants"
    STORAGES: ClassVar[str] = "storages"

    field: str
    change: Any


_ITEM_TYPES = {
    ReducedPalletChange.CALLS: PalletItemType.CALL,
    ReducedPalletChange.EVENTS: PalletItemType.EVENT,
    ReducedPalletChange.ERRORS: PalletItemType.ERROR,
    ReducedPalletChange.CONSTANTS: PalletItemType.CONSTANT,
    ReducedPalletChange.STORAGES: PalletItemType.STORAGE,
}


def _compare_items(left: Any, right: Any) -> list[Any]:
    return left.comparison(right)


@dataclass
class ReducedPallet:
    """A pallet with its calls, events, errors, constants and storages.

    Pallets order by index alone.
    """

    index: int = 42
    name: str = ""
    calls: dict[int, Call] = field(default_factory=dict)
    events: dict[int, Event] = field(default_factory=dict)
    errors: dict[int, PalletError] = field(default_factory=dict)
    constants: dict[str, Constant] = field(default_factory=dict)
    storages: dict[str, Storage] = field(default_factory=dict)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ReducedPallet):
            return NotImplemented
        return self.index < other.index

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ReducedPallet):
            return NotImplemented
        return self.index > other.index

    def comparison(self, other: ReducedPallet) -> list[ReducedPalletChange]:
        """Changes from ``self`` to ``other``; empty when alike."""
        changes = [
            ReducedPalletChange(name, ValueChange(getattr(self, name), getattr(other, name)))
            for name in (ReducedPalletChange.INDEX, ReducedPalletChange.NAME)
            if getattr(self, name) != getattr(other, name)
        ]
        for name in _COLLECTIONS:
            map_changes = diff_maps(
                getattr(self, name), getattr(other, name), lambda item: item, _compare_items
            )
            if map_changes:
                changes.append(ReducedPalletChange(name, tuple(map_changes)))
        return changes

    def __str__(self) -> str:
        lines = [f"Pallet #{self.index}: {self.name}\n"]
        for name in _COLLECTIONS:
            collection = getattr(self, name)
            if collection:
                lines.append(f"  {name}:\n")
                lines.extend(f"    - {item}\n" for item in collection.values())
        return "".join(lines)


def filter_changed_items(
    changes: Iterable[ReducedPalletChange], what: PalletItemType
) -> list[ReducedPalletChange]:
    """Keep only the changes to one kind of item.

    Index and name changes belong to no item kind and are rejected.
    """
    kept = []
    for change in changes:
        item_type = _ITEM_TYPES.get(change.field)
        if item_type is None:
            raise ValueError(f"a change of the pallet {change.field} has no item type")
        if item_type is what:
            kept.append(change)
    return kept


def format_map_changes(changes: Sequence[MapChange], item_type: PalletItemType) -> str:
    """Render map changes one per line, marked ``[+]``, ``[≠]`` or ``[-]``."""
    lines = []
    for change in changes:
        if change.kind is ChangeKind.ADDED:
            lines.append(f"  - [+] {item_type}: {change.key} {change.desc!r}")
        elif change.kind is ChangeKind.CHANGED:
            lines.append(f"  - [≠] {item_type}: {change.key} {list(change.changes)!r}")
        else:
            lines.append(f"  - [-] {item_type}: {change.key}")
    return "".join(line + "\n" for line in lines)