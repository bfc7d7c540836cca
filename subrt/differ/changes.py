"""Generic change records produced when comparing reduced runtimes."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

Documentation = list[str]
PalletId = int
ExtrinsicId = int
Value = bytes

K = TypeVar("K")
V = TypeVar("V")

Describe = Callable[[Any], Any]
Compare = Callable[[Any, Any], Sequence[Any]]


class ComparisonSide(Enum):
    """Which runtime of a comparison to look at."""

    LEFT = "left"
    RIGHT = "right"


class ChangeKind(Enum):
    """What happened to an entry of a map or list."""

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class MapChange:
    """A change to one key of a map.

    ``desc`` describes the new value of an added key; ``changes`` lists
    what changed for a key present on both sides.
    """

    kind: ChangeKind
    key: Any
    desc: Any = None
    changes: tuple[Any, ...] = ()


@dataclass(frozen=True)
class VecChange:
    """A change to one position of a list.

    ``desc`` describes the added or removed element; ``changes`` lists
    what changed for an element present on both sides.
    """

    kind: ChangeKind
    index: int
    desc: Any = None
    changes: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ValueChange:
    """A plain value that went from ``old`` to ``new``."""

    old: Any
    new: Any


def _sorted_keys(keys):
    try:
        return sorted(keys)
    except TypeError:
        return list(keys)


def diff_maps(
    left: Mapping[K, V],
    right: Mapping[K, V],
    describe: Describe,
    compare: Compare,
) -> list[MapChange]:
    """Compare two maps key by key.

    Keys of ``left`` come first, in order, as changed or removed; keys only
    in ``right`` follow as added. An empty list means the maps are alike.
    """
    result: list[MapChange] = []
    for key in _sorted_keys(left):
        if key not in right:
            result.append(MapChange(ChangeKind.REMOVED, key))
            continue
        item_changes = compare(left[key], right[key])
        if item_changes:
            result.append(MapChange(ChangeKind.CHANGED, key, changes=tuple(item_changes)))
    for key in _sorted_keys(k for k in right if k not in left):
        result.append(MapChange(ChangeKind.ADDED, key, desc=describe(right[key])))
    return result


def diff_lists(
    left: Sequence[V],
    right: Sequence[V],
    describe: Describe,
    compare: Compare,
) -> list[VecChange]:
    """Compare two lists position by position.

    An empty list means the lists are alike.
    """
    result: list[VecChange] = []
    for index in range(max(len(left), len(right))):
        if index >= len(right):
            result.append(VecChange(ChangeKind.REMOVED, index, desc=describe(left[index])))
        elif index >= len(left):
            result.append(VecChange(ChangeKind.ADDED, index, desc=describe(right[index])))
        else:
            item_changes = compare(left[index], right[index])
            if item_changes:
                result.append(
                    VecChange(ChangeKind.CHANGED, index, changes=tuple(item_changes))
                )
    return result