"""The changes between two reduced runtimes, kept with both runtimes for context."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .changes import ChangeKind, ComparisonSide, MapChange
from .pallet_change_wrapper import ReducedPalletChangeWrapper
from .reduced_pallet import ReducedPallet, ReducedPalletChange
from .reduced_runtime import ReducedRuntime, ReducedRuntimeChange


def get_changes_count(changes: Iterable[ReducedPalletChange]) -> int:
    """Total number of changes in a pallet, counting each item of each collection."""
    return sum(
        1
        if change.field in (ReducedPalletChange.INDEX, ReducedPalletChange.NAME)
        else len(change.change)
        for change in changes
    )


@dataclass(frozen=True)
class ReducedRuntimeChangeWrapper:
    """Runtime changes together with the left and right runtimes they came from."""

    changes: tuple[ReducedRuntimeChange, ...]
    runtime_a: ReducedRuntime
    runtime_b: ReducedRuntime

    def __post_init__(self) -> None:
        object.__setattr__(self, "changes", tuple(self.changes))

    def get_pallet(self, pallet_id: int, side: ComparisonSide) -> ReducedPallet | None:
        """The pallet with ``pallet_id`` in the runtime on ``side``, if present there."""
        runtime = self.runtime_a if side is ComparisonSide.LEFT else self.runtime_b
        return runtime.pallets.get(pallet_id)

    def _format_pallet_change(self, map_change: MapChange) -> str:
        pallet_id = map_change.key
        if map_change.kind is ChangeKind.ADDED:
            return f"[+] id: {pallet_id:>2} - new pallet: {map_change.desc.name}\n"

        pallet_a = self.get_pallet(pallet_id, ComparisonSide.LEFT)
        name_a = "n/a" if pallet_a is None else pallet_a.name
        if map_change.kind is ChangeKind.REMOVED:
            return f"[-] pallet {pallet_id}: {name_a}\n"

        pallet_b = self.get_pallet(pallet_id, ComparisonSide.RIGHT)
        count = get_changes_count(map_change.changes)
        lines = [f"[≠] pallet {pallet_id}: {name_a} -> {count} change(s)\n"]
        lines.extend(
            f"{ReducedPalletChangeWrapper(change, pallet_a, pallet_b)}\n"
            for change in map_change.changes
        )
        return "".join(lines)

    def __str__(self) -> str:
        parts = []
        for change in self.changes:
            if change.field == ReducedRuntimeChange.EXTRINSIC:
                parts.append("EX Change\n")
            else:
                parts.extend(self._format_pallet_change(mc) for mc in change.changes)
        return "".join(parts)


@dataclass(frozen=True)
class ChangedWrapper:
    """Lookup helpers over the changes between two runtimes."""

    wrapper: ReducedRuntimeChangeWrapper

    @property
    def changes(self) -> tuple[ReducedRuntimeChange, ...]:
        """The runtime changes, extrinsic and pallets."""
        return self.wrapper.changes

    def get_pallets_changes(self) -> list[MapChange]:
        """Only the changes related to pallets."""
        return [
            map_change
            for change in self.wrapper.changes
            if change.field == ReducedRuntimeChange.PALLETS
            for map_change in change.changes
        ]

    def get_pallet_changes_by_id(self, pallet_id: int) -> MapChange | None:
        """The change concerning the pallet ``pallet_id``, if any."""
        return next(
            (mc for mc in self.get_pallets_changes() if mc.key == pallet_id), None
        )

    def __str__(self) -> str:
        return str(self.wrapper)